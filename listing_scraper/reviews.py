"""
Review extractor — turns every review card on the listing page into a Review.

Only the reviews rendered on the page are read (the store shows a handful);
there is no paging. Each card yields exactly one Review, even an empty one.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urljoin

from bs4 import Tag

from listing_scraper.config import PLAY_STORE_BASE_URL
from listing_scraper.document import ListingDocument, node_attr, node_text
from listing_scraper.models import Review

logger = logging.getLogger(__name__)

REVIEW_CONTAINER = "div[class*=single-review]"

# "width:80%;" -> 80, the "%" is optional
_RATING_PERCENT = re.compile(r"width\s*:\s*(\d+)(?:\.\d+)?\s*%?")


def _site_url(href: str) -> str:
    return urljoin(PLAY_STORE_BASE_URL, href) if href else ""


def parse_star_rating(style: str) -> int:
    """
    Convert the width of the filled stars bar into 0-5 stars.

    Raises:
        ValueError: if the style has no width in it, or it is over 100%.
    """
    match = _RATING_PERCENT.search(style)
    if not match:
        raise ValueError(f"No rating width in style {style!r}")
    percent = int(match.group(1))
    if percent > 100:
        raise ValueError(f"Rating width out of range in style {style!r}")
    return percent // 20


def clean_review_body(raw_body: str, title: str, expand_label: str) -> str:
    """
    The rendered body starts with the title and ends with a "Full Review"
    link. Strip both out. Empty title/label strings are left alone.
    """
    body = raw_body
    for noise in (title, expand_label):
        if noise:
            body = body.replace(noise, "")
    return body.strip()


def parse_review(document: ListingDocument, card: Tag, now: datetime) -> Review:
    """
    Read one review card.

    Raises:
        ValueError: if the card has a rating control whose width cannot be read.
    """
    author_link = document.select_one("a[href*=people]", card)
    rating_node = document.select_one("div[class*=current-rating]", card)
    date_node = document.select_one("span[class*=review-date]", card)
    body_node = document.select_one("div[class*=review-body]", card)

    title = document.text("div[class*=review-body] > span", card)
    expand_label = document.text("a", body_node) if body_node is not None else ""

    return Review(
        author_url=_site_url(node_attr(author_link, "href")),
        author_name=document.text("span[class*=author-name] > a", card),
        author_pic_url=document.attr("a[href*=people] > img", "src", card).strip(),
        permalink=_site_url(document.attr("a[class*=permalink]", "href", card)),
        review_date=node_text(date_node) if date_node is not None else None,
        star_rating=parse_star_rating(node_attr(rating_node, "style")) if rating_node is not None else None,
        title=title,
        body=clean_review_body(node_text(body_node), title, expand_label),
        timestamp=now,
    )


def extract_reviews(document: ListingDocument, now: Optional[datetime] = None) -> list[Review]:
    """
    Read every review card on the page, in page order.

    Args:
        document: The parsed listing page.
        now:      Extraction time to stamp on each review. Defaults to the current UTC time.

    Raises:
        ValueError: if a review's rating control is present but unreadable.
    """
    now = now or datetime.now(timezone.utc)
    cards = document.select(REVIEW_CONTAINER)
    reviews = [parse_review(document, card, now) for card in cards]
    logger.debug("Parsed %d reviews", len(reviews))
    return reviews
