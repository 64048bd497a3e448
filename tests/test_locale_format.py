import pytest

from listing_scraper.locale_format import (
    parse_us_currency,
    parse_us_int,
    parse_us_number,
    split_download_range,
)


@pytest.mark.parametrize("text, expected", [
    ("1,234", 1234),
    ("10,000+", 10000),
    ("1 000", 1000),
    ("5 000", 5000),
    (" 42 ", 42),
    ("1,234.9", 1234),
])
def test_parse_us_int(text, expected):
    assert parse_us_int(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-", "$5"])
def test_parse_us_int_rejects_non_numbers(text):
    with pytest.raises(ValueError):
        parse_us_int(text)


def test_parse_us_number_keeps_decimals():
    assert float(parse_us_number("1,234.56")) == pytest.approx(1234.56)


def test_parse_us_currency():
    assert parse_us_currency("$1,234.56") == pytest.approx(1234.56)
    assert parse_us_currency("$0.99") == pytest.approx(0.99)


@pytest.mark.parametrize("token", ["garbage", "0", "1.99", "€1,99", ""])
def test_parse_us_currency_rejects_other_formats(token):
    with pytest.raises(ValueError):
        parse_us_currency(token)


@pytest.mark.parametrize("text, expected", [
    ("10,000 - 50,000", (10000, 50000)),
    ("1 000 et 5 000", (1000, 5000)),
    ("1,000-5,000", (1000, 5000)),
    ("1,000～5,000", (1000, 5000)),
    ("1 000 a 5 000", (1000, 5000)),
])
def test_split_download_range(text, expected):
    assert split_download_range(text) == expected


@pytest.mark.parametrize("text", ["10,000+", "lots", "", "10 - 20 - 30"])
def test_split_download_range_unrecognised(text):
    assert split_download_range(text) is None


def test_split_download_range_skips_separator_with_unreadable_parts():
    # " - " splits in two, but "x" is not a number, so the next separators get a turn
    custom = ((" - ", parse_us_int), (" / ", parse_us_int))
    assert split_download_range("x - y", custom) is None
    assert split_download_range("1 / 2", custom) == (1, 2)


def test_split_download_range_rejects_reversed_bounds():
    assert split_download_range("50,000 - 10,000") is None
