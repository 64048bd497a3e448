"""
Listing scraper — the public entry points.
Fetches a Google Play listing page (optional) and assembles a ListingRecord from it.
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

import requests

from listing_scraper.config import PLAY_STORE_BASE_URL, PLAY_STORE_LANG, REQUEST_TIMEOUT, USER_AGENT
from listing_scraper.document import ListingDocument, load_document
from listing_scraper.errors import ListingFetchError, ListingNotFoundError, ListingParseError
from listing_scraper.fields import extract_fields
from listing_scraper.models import ListingBuilder, ListingRecord
from listing_scraper.reviews import extract_reviews

logger = logging.getLogger(__name__)


def listing_url(package_name: str, lang: Optional[str] = None) -> str:
    """Details page URL, e.g. https://play.google.com/store/apps/details?id=com.spotify.music&hl=en"""
    query = urlencode({"id": package_name, "hl": lang or PLAY_STORE_LANG})
    return f"{PLAY_STORE_BASE_URL}/store/apps/details?{query}"


def parse_listing(document: ListingDocument, package_name: str,
                  include_reviews: bool = True, now: Optional[datetime] = None) -> ListingRecord:
    """
    Extract a ListingRecord from an already parsed page.

    Args:
        document:        The parsed listing page.
        package_name:    The app's package name. Only used to tag the record and errors.
        include_reviews: Set to False to skip the review cards.
        now:             Extraction time stamped on reviews (defaults to current UTC time).

    Raises:
        ListingNotFoundError: the page is not a listing page.
        ListingParseError:    price, rating or a review's star rating is unreadable.
    """
    builder = extract_fields(document, ListingBuilder(package_name))

    if include_reviews:
        try:
            builder.reviews = extract_reviews(document, now=now)
        except ValueError as e:
            raise ListingParseError(package_name, "reviews", e) from e

    record = builder.build()
    logger.info("Extracted %s: %r, %d screenshots, %d reviews",
                package_name, record.title, len(record.screenshots), len(record.reviews))
    return record


def extract_listing(html: str, package_name: str, base_url: Optional[str] = None,
                    status_code: int = 200, include_reviews: bool = True) -> ListingRecord:
    """
    Extract a ListingRecord from page source you already have.

    Args:
        html:         The page source.
        package_name: The app's package name.
        base_url:     URL the page came from, for resolving relative links.
        status_code:  HTTP status the page was served with. Anything but 2xx
                      means the listing does not exist and nothing is parsed.

    Raises:
        ListingNotFoundError, ListingParseError
    """
    if not 200 <= status_code < 300:
        raise ListingNotFoundError(package_name, status_code)

    document = load_document(html, base_url or listing_url(package_name))
    return parse_listing(document, package_name, include_reviews=include_reviews)


def fetch_listing_html(package_name: str, lang: Optional[str] = None,
                       session: Optional[requests.Session] = None) -> requests.Response:
    """
    Download the listing page. The response is returned whatever its status;
    scrape_listing() decides what a bad status means.

    Raises:
        ListingFetchError: connection error, timeout, etc.
    """
    url = listing_url(package_name, lang)
    logger.info("Fetching listing for: %s", package_name)

    try:
        response = (session or requests).get(url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise ListingFetchError(package_name, e) from e

    logger.debug("GET %s -> %s", url, response.status_code)
    return response


def scrape_listing(package_name: str, lang: Optional[str] = None,
                   session: Optional[requests.Session] = None, include_reviews: bool = True) -> ListingRecord:
    """
    Fetch and extract one app listing from Google Play.

    Args:
        package_name: The app's package name (e.g., "com.spotify.music").
        lang:         Page language, e.g. "fr". Defaults to PLAY_STORE_LANG.
        session:      Optional requests.Session to reuse connections across calls.

    Raises:
        ListingFetchError:    the page could not be downloaded.
        ListingNotFoundError: non-2xx response, or the page is not a listing.
        ListingParseError:    a load-bearing field could not be read.
    """
    response = fetch_listing_html(package_name, lang=lang, session=session)
    return extract_listing(
        response.text,
        package_name,
        base_url=response.url or listing_url(package_name, lang),
        status_code=response.status_code,
        include_reviews=include_reviews,
    )
