"""
Command line entry point.

    python -m listing_scraper com.spotify.music
    python -m listing_scraper com.spotify.music --html saved_page.html --no-reviews
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from listing_scraper.config import LOG_LEVEL
from listing_scraper.errors import ScrapeError
from listing_scraper.scraper import extract_listing, scrape_listing


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listing_scraper",
        description="Scrape an app's Google Play listing page into JSON.",
    )
    parser.add_argument("package_name", help="App package name, e.g. com.spotify.music")
    parser.add_argument("--lang", help="Page language (default from PLAY_STORE_LANG)")
    parser.add_argument("--html", type=Path, help="Read a saved listing page instead of fetching")
    parser.add_argument("--no-reviews", action="store_true", help="Skip the review cards")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.html:
            record = extract_listing(
                args.html.read_text(encoding="utf-8"),
                args.package_name,
                include_reviews=not args.no_reviews,
            )
        else:
            record = scrape_listing(args.package_name, lang=args.lang, include_reviews=not args.no_reviews)
    except ScrapeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
