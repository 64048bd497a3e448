"""
Field extractor — reads every listing field out of a parsed page.

Each field has one rule: a plain function (document) -> value or None.
None means "field miss" and the builder keeps its default. Rules never
depend on each other, so the order of FIELD_RULES does not matter.

Key design decisions:
    1. One selector per field. If the markup drifts the field goes empty
       instead of us guessing from somewhere else.
    2. Where a field really has two sources (developer website), the sources
       are listed in priority order with first_of().
    3. Only price and average rating raise. A wrong number there is worse
       than no record, everything else degrades to its default.
"""

import logging
import re
from typing import Callable, Optional
from urllib.parse import urlsplit

from listing_scraper.document import ListingDocument, node_attr, node_text
from listing_scraper.errors import ListingNotFoundError, ListingParseError
from listing_scraper.locale_format import parse_us_currency, parse_us_int, split_download_range
from listing_scraper.models import ListingBuilder

logger = logging.getLogger(__name__)

Rule = Callable[[ListingDocument], object]

DETAILS = "div.details-info"
ADDITIONAL_INFO = ".details-section-contents"

HISTOGRAM_BUCKETS = ("one", "two", "three", "four", "five")  # 1 star .. 5 stars
FREE_PRICE_TOKEN = "0"

_MIN_OS_VERSION = re.compile(r"^([\d.]+)")
_SCORE = re.compile(r"\d+(?:\.\d+)?")


# ============================================================
# PART 1: Rule builders for the common "one selector" case
# ============================================================

def first_of(*strategies: Rule) -> Rule:
    """Try each strategy in order and keep the first non-None result."""
    def rule(document: ListingDocument):
        for strategy in strategies:
            value = strategy(document)
            if value is not None:
                return value
        return None
    return rule


def _text(css: str) -> Rule:
    return lambda document: document.text(css) or None


def _attr(css: str, name: str) -> Rule:
    return lambda document: document.attr(css, name) or None


def _abs_attr(css: str, name: str) -> Rule:
    return lambda document: document.abs_url(document.attr(css, name)) or None


def _present(css: str) -> Rule:
    return lambda document: document.select_one(css) is not None


def _info(itemprop: str) -> Rule:
    """Text of one row in the "Additional information" section."""
    return _text(f'{ADDITIONAL_INFO} div.content[itemprop="{itemprop}"]')


# ============================================================
# PART 2: Fields that need more than a lookup
# ============================================================

def description(document: ListingDocument) -> Optional[str]:
    node = document.select_one(f"{ADDITIONAL_INFO} div[itemprop=description] div")
    if node is None:
        return None
    return node.decode_contents().strip()


def genre(document: ListingDocument) -> Optional[str]:
    """Category slug: last path segment of the category link ("/store/apps/category/GAME" -> "GAME")."""
    href = document.attr(f"{DETAILS} .category", "href")
    return href[href.rfind("/") + 1:] or None


def developer_email(document: ListingDocument) -> Optional[str]:
    href = document.attr(f'{ADDITIONAL_INFO} .dev-link[href^="mailto:"]', "href")
    return href.partition(":")[2] or None


def _dev_link(document: ListingDocument) -> str:
    return document.attr(f'{ADDITIONAL_INFO} .dev-link[href^="http"]', "href")


def _redirect_target(document: ListingDocument) -> Optional[str]:
    """
    Unwrap a redirector link such as
    https://www.google.com/url?q=https://example.com/&sa=D -> https://example.com/
    """
    try:
        query = urlsplit(_dev_link(document)).query
    except ValueError:
        return None
    start, end = query.find("http"), query.find("&")
    if start < 0 or end < start:
        return None
    return query[start:end]


def _raw_dev_link(document: ListingDocument) -> Optional[str]:
    return _dev_link(document) or None


developer_website = first_of(_redirect_target, _raw_dev_link)


def price(document: ListingDocument) -> Optional[float]:
    """
    Raises:
        ValueError: if a non-zero price token is not a US dollar amount.
    """
    token = document.attr(f"{DETAILS} meta[itemprop=price]", "content").strip()
    if not token:
        return None
    # Free apps skip the currency parser entirely
    if token == FREE_PRICE_TOKEN:
        return 0.0
    return parse_us_currency(token)


def rating(document: ListingDocument) -> Optional[float]:
    """
    Raises:
        ValueError: if the score is shown but is not a number.
    """
    score = document.text(".rating-box div.score")
    if not score:
        return None
    if not _SCORE.fullmatch(score):
        raise ValueError(f"Not a rating score: {score!r}")
    return float(score)


def min_os_version(document: ListingDocument) -> Optional[str]:
    """"4.1 and up" -> "4.1"."""
    match = _MIN_OS_VERSION.match(document.text(f'{ADDITIONAL_INFO} div.content[itemprop="operatingSystems"]'))
    return match.group(1) if match else None


def download_range(document: ListingDocument) -> Optional[tuple[int, int]]:
    downloads = document.text(f'{ADDITIONAL_INFO} div.content[itemprop="numDownloads"]')
    if not downloads:
        return None
    return split_download_range(downloads)


def rating_histogram(document: ListingDocument) -> Optional[list[int]]:
    """Five bucket counts, one star first. None when the histogram is not on the page."""
    region = document.select_one(".rating-histogram")
    if region is None:
        return None

    counts = []
    for bucket in HISTOGRAM_BUCKETS:
        try:
            counts.append(parse_us_int(document.text(f".{bucket} .bar-number", region)))
        except ValueError:
            counts.append(0)
    return counts


def video(document: ListingDocument) -> Optional[str]:
    url = document.attr(".screenshots span.preview-overlay-container[data-video-url]", "data-video-url")
    return url.split("?")[0] or None


def screenshots(document: ListingDocument) -> list[str]:
    urls = (document.abs_url(node_attr(node, "src")) for node in document.select(".thumbnails .screenshot"))
    return [url for url in urls if url]


def whats_new(document: ListingDocument) -> str:
    return "\n".join(node_text(node) for node in document.select(".recent-change"))


# ============================================================
# PART 3: The rule table and the extraction pass
# ============================================================

FIELD_RULES: tuple[tuple[str, Rule], ...] = (
    ("title", _text(f"{DETAILS} .document-title")),
    ("icon", _abs_attr(f"{DETAILS} img.cover-image", "src")),
    ("developer", _text(f'{DETAILS} span[itemprop="name"]')),
    ("summary", _attr('meta[name="description"]', "content")),
    ("description", description),
    ("category", _text(f"{DETAILS} .category")),
    ("genre", genre),
    ("offers_in_app_purchases", _present(f"{DETAILS} .inapp-msg")),
    ("contains_ads", _present(f"{DETAILS} .ads-supported-label-msg")),
    ("version", _info("softwareVersion")),
    ("date_published", _info("datePublished")),
    ("content_rating", _info("contentRating")),
    ("file_size", _info("fileSize")),
    ("developer_email", developer_email),
    ("developer_website", developer_website),
    ("rating", rating),
    ("video", video),
    ("price", price),
    ("min_os_version", min_os_version),
    ("download_range", download_range),
    ("rating_histogram", rating_histogram),
    ("screenshots", screenshots),
    ("whats_new", whats_new),
)


def extract_fields(document: ListingDocument, builder: ListingBuilder) -> ListingBuilder:
    """
    Run every field rule against the page and write the results into `builder`.

    Raises:
        ListingNotFoundError: the page has no detail block, so it is not a listing.
        ListingParseError:    price or average rating is present but unreadable.
    """
    if document.select_one(DETAILS) is None:
        raise ListingNotFoundError(builder.package_name)

    for name, rule in FIELD_RULES:
        try:
            value = rule(document)
        except ValueError as e:
            raise ListingParseError(builder.package_name, name, e) from e

        if value is None:
            logger.debug("%s: no value for %s", builder.package_name, name)
            continue
        setattr(builder, name, value)

    return builder
