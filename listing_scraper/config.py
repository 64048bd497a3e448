"""
Configuration loader.
Reads settings from .env file and makes them available to the rest of the scraper.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Play Store settings
PLAY_STORE_BASE_URL = os.getenv("PLAY_STORE_BASE_URL", "https://play.google.com")
PLAY_STORE_LANG = os.getenv("PLAY_STORE_LANG", "en")

# HTTP settings (only used by the optional fetcher in scraper.py)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36",
)

# BeautifulSoup backend — "html.parser" ships with Python, "lxml" is faster if installed
HTML_PARSER = os.getenv("HTML_PARSER", "html.parser")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
