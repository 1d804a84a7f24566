"""
Configuration constants for the Wallet Holdings Dashboard
"""

import logging
import os
from pathlib import Path

BASE_PATH = Path(__file__).parent
ASSET_DIR = Path(os.getenv("WALLET_ASSET_DIR", str(BASE_PATH / "assets")))
CURRENCIES_FILE = "json/currencies.json"
RATES_FILE = "json/live-rates.json"
WALLET_FILE = "json/wallet-balance.json"

USD_CODE = "USD"

# Seconds the refresh indicator stays up before and after a reload.
REFRESH_MIN_DELAY = 1.0
REFRESH_SETTLE_DELAY = 0.5

AMOUNT_MAX_FRACTION_DIGITS = 8
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
REFRESH_FAILED_PREFIX = "Refresh failed"
REFRESH_ERROR_PREFIX = "Error during refresh"

DIAGNOSE_ASSETS = os.getenv("WALLET_DIAGNOSE_ASSETS", "0") == "1"
LOG_LEVEL = os.getenv("WALLET_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PAGE_CONFIG = {
    "page_title": "Wallet",
    "page_icon": None,
    "layout": "centered",
    "initial_sidebar_state": "collapsed",
}

CHART_HEIGHTS = {
    "allocation": 320,
}

COLORS = {
    "positive": "#1f7a6d",
    "negative": "#b42318",
    "neutral": "#9a9a9a",
    "warning": "#b45309",
    "info": "#2563eb",
    "background": "#f7f7f5",
    "surface": "#ffffff",
    "text": "#1a1a1a",
    "text_secondary": "#6b6b6b",
}


def configure_logging(level: str = LOG_LEVEL) -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
