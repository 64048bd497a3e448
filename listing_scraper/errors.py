"""
Errors raised while scraping a listing.

Only whole-listing failures are raised. A single selector that matches
nothing is a field miss and is handled where it happens (default value),
so callers only ever see one of the classes below.
"""

from typing import Optional


class ScrapeError(Exception):
    """Base class. Every failure names the package it was raised for."""

    def __init__(self, package_name: str, message: str):
        super().__init__(message)
        self.package_name = package_name


class ListingNotFoundError(ScrapeError):
    """The page could not be confirmed to be a listing (bad status or no detail block)."""

    def __init__(self, package_name: str, status_code: Optional[int] = None):
        if status_code is None:
            message = f"Response for {package_name} is not an app listing page."
        else:
            message = (f"HTTP response was not OK ({status_code}). "
                       f"Are you sure {package_name} is on Google Play?")
        super().__init__(package_name, message)
        self.status_code = status_code


class ListingFetchError(ScrapeError):
    """The page could not be downloaded at all (connection error, timeout)."""

    def __init__(self, package_name: str, cause: Exception):
        super().__init__(package_name, f"Could not fetch listing for {package_name}: {cause}")
        self.cause = cause


class ListingParseError(ScrapeError):
    """
    The page was a listing but a load-bearing field could not be read.

    Raised for price, average rating and review star rating only: a wrong
    number in one of those is worse than no record at all.
    """

    def __init__(self, package_name: str, field: str, cause: Exception):
        super().__init__(
            package_name,
            f"Error parsing response for {package_name} (field '{field}'): {cause}",
        )
        self.field = field
        self.cause = cause
