"""
Document loader — a thin read-only view over BeautifulSoup.

Every lookup here follows the same miss policy: a selector that matches
nothing gives "" (or None from select_one), never an exception. The
extractors are written against this class, not against bs4 directly.
"""

from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from listing_scraper.config import HTML_PARSER, PLAY_STORE_BASE_URL


def node_text(node: Optional[Tag]) -> str:
    """Visible text of a node, whitespace collapsed like a browser would show it."""
    if node is None:
        return ""
    return " ".join(node.get_text().split())


def node_attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name, "")
    # bs4 returns multi-valued attributes (class, rel) as lists
    if isinstance(value, list):
        value = " ".join(value)
    return value


class ListingDocument:
    """A parsed listing page plus the URL relative links resolve against."""

    def __init__(self, soup: BeautifulSoup, base_url: str):
        self.soup = soup
        self.base_url = base_url

    def select(self, css: str, scope: Optional[Tag] = None) -> list[Tag]:
        return (self.soup if scope is None else scope).select(css)

    def select_one(self, css: str, scope: Optional[Tag] = None) -> Optional[Tag]:
        return (self.soup if scope is None else scope).select_one(css)

    def text(self, css: str, scope: Optional[Tag] = None) -> str:
        """Text of the first match, "" on a miss."""
        return node_text(self.select_one(css, scope))

    def attr(self, css: str, name: str, scope: Optional[Tag] = None) -> str:
        """Attribute of the first match, "" on a miss or when the attribute is missing."""
        return node_attr(self.select_one(css, scope), name)

    def abs_url(self, value: str) -> str:
        """Resolve a relative link against the page URL. "" stays ""."""
        if not value:
            return ""
        return urljoin(self.base_url, value.strip())


def load_document(html: str, base_url: Optional[str] = None) -> ListingDocument:
    """
    Parse raw HTML into a ListingDocument.

    Args:
        html:     The page source.
        base_url: URL the page was fetched from. Defaults to the store's base URL.
    """
    soup = BeautifulSoup(html, HTML_PARSER)
    return ListingDocument(soup, base_url or PLAY_STORE_BASE_URL + "/")
