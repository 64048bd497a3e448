"""
Locale-aware number parsing.

Listing pages print numbers the way the page's language does. We read them
with US conventions (comma groups, dot decimals, "$" currency) and treat
plain and non-breaking spaces as grouping too, which covers the
space-grouped locales the download counts come in.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Sequence

# Leading number only, so "10,000+" reads as 10000 — trailing decoration is ignored
_NUMBER_PREFIX = re.compile(r"^\d[\d,\s]*(?:\.\d+)?")
_CURRENCY = re.compile(r"^\$\s?(\d[\d,]*(?:\.\d+)?)")
_GROUPING = re.compile(r"[,\s]")


def _to_decimal(raw: str) -> Decimal:
    try:
        return Decimal(_GROUPING.sub("", raw))
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {raw!r}") from e


def parse_us_number(text: str) -> Decimal:
    """
    Parse the number at the start of `text`.

    Raises:
        ValueError: if `text` does not start with a digit.
    """
    match = _NUMBER_PREFIX.match(text.strip())
    if not match:
        raise ValueError(f"Not a number: {text!r}")
    return _to_decimal(match.group())


def parse_us_int(text: str) -> int:
    """Like parse_us_number, truncated to an int ("1,234.9" -> 1234)."""
    return int(parse_us_number(text))


def parse_us_currency(token: str) -> float:
    """
    Parse a US dollar amount such as "$1,234.56".

    Raises:
        ValueError: if the token is not a dollar amount.
    """
    match = _CURRENCY.match(token.strip())
    if not match:
        raise ValueError(f"Not a US currency amount: {token!r}")
    return float(_to_decimal(match.group(1)))


# ============================================================
# Download ranges ("10,000 - 50,000", "1 000 et 5 000", ...)
# ============================================================

# Tried in order; the first one that yields two readable numbers wins.
# New locales go at the end of this table.
DOWNLOAD_RANGE_SEPARATORS: tuple[tuple[str, Callable[[str], int]], ...] = (
    (" - ", parse_us_int),
    (" et ", parse_us_int),
    ("-", parse_us_int),
    ("～", parse_us_int),
    (" a ", parse_us_int),
)


def split_download_range(
    text: str,
    separators: Sequence[tuple[str, Callable[[str], int]]] = DOWNLOAD_RANGE_SEPARATORS,
) -> Optional[tuple[int, int]]:
    """
    Split a downloads label into (min, max).

    Returns None when no separator gives exactly two numbers with
    min <= max. Never raises for unreadable text.
    """
    for separator, parse in separators:
        parts = text.split(separator)
        if len(parts) != 2:
            continue
        try:
            low, high = parse(parts[0]), parse(parts[1])
        except ValueError:
            continue
        if low <= high:
            return low, high
    return None
