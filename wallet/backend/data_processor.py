"""
Data processing functions for the Wallet Holdings Dashboard
Parses the bundled documents and joins balances, currencies and USD rates.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import pandas as pd

from .. import config
from . import models

logger = logging.getLogger(__name__)

USD_CODE = config.USD_CODE
HOLDINGS_COLUMNS = ["Currency", "Name", "Symbol", "Amount", "USD Rate", "USD Value", "Share %"]

# Decimal or scientific literal with an optional f/d type suffix, or NaN / Infinity.
_RATE_LITERAL = re.compile(r"[+-]?(NaN|Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?[fFdD]?)")
_PADDING = "".join(chr(code) for code in range(0x21))

T = TypeVar("T")


def _decode_array(raw: str, key: str, factory: Callable[[Dict[str, Any]], T], **json_kwargs) -> List[T]:
    if not raw:
        logger.warning("No %s data to parse", key)
        return []
    try:
        document = json.loads(raw, **json_kwargs)
        if not isinstance(document, dict):
            raise TypeError(f"expected a JSON object, got {type(document).__name__}")
        items = document.get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            raise TypeError(f"{key} must be a list")
        records = []
        for item in items:
            if not isinstance(item, dict):
                raise TypeError(f"{key} entries must be objects")
            records.append(factory(item))
    except Exception:
        logger.warning("Could not decode %s document", key, exc_info=True)
        return []
    logger.info("Parsed %d %s records", len(records), key)
    return records


def parse_currencies(raw: str) -> List[models.CurrencyRecord]:
    return _decode_array(raw, "currencies", models.CurrencyRecord.from_dict)


def parse_rate_tiers(raw: str) -> List[models.RateTier]:
    # Numbers stay as their source text so rates are never reformatted.
    return _decode_array(raw, "tiers", models.RateTier.from_dict, parse_float=str, parse_int=str)


def parse_balances(raw: str) -> List[models.BalanceRecord]:
    return _decode_array(raw, "wallet", models.BalanceRecord.from_dict)


def find_currency(currencies: Iterable[models.CurrencyRecord], code: str) -> Optional[models.CurrencyRecord]:
    return next((c for c in currencies if c.code == code), None)


def find_usd_tier(tiers: Iterable[models.RateTier], code: str) -> Optional[models.RateTier]:
    return next((t for t in tiers if t.from_currency == code and t.to_currency == USD_CODE), None)


def parse_rate(text: str) -> float:
    """Lenient rate parsing: anything that is not a numeric literal is 0.

    Control characters and spaces around the literal are ignored.
    """
    if not isinstance(text, str):
        return 0.0
    literal = text.strip(_PADDING)
    if not _RATE_LITERAL.fullmatch(literal):
        return 0.0
    try:
        return float(literal.rstrip("fFdD"))
    except ValueError:
        return 0.0


def is_displayable(code: str) -> bool:
    return bool(code and code.strip())


def join_holdings(
    currencies: List[models.CurrencyRecord],
    tiers: List[models.RateTier],
    balances: List[models.BalanceRecord],
) -> List[models.HoldingView]:
    holdings: List[models.HoldingView] = []
    for balance in balances:
        if not is_displayable(balance.currency):
            logger.debug("Skipping balance with blank currency code")
            continue
        currency = find_currency(currencies, balance.currency)
        tier = find_usd_tier(tiers, balance.currency)
        if currency is None or tier is None or not tier.rates:
            logger.debug("Skipping %s: no currency or USD rate", balance.currency)
            continue
        rate_str = tier.rates[0].rate
        rate = parse_rate(rate_str)
        holdings.append(models.HoldingView(
            currency=balance.currency,
            name=currency.name,
            symbol=currency.symbol,
            amount=balance.amount,
            usd_rate=rate,
            usd_rate_str=rate_str,
            usd_value=balance.amount * rate,
            image_url=currency.colorful_image_url,
        ))
    return holdings


def filter_displayable(holdings: Iterable[models.HoldingView]) -> List[models.HoldingView]:
    return [h for h in holdings if is_displayable(h.currency)]


def compute_total_usd(holdings: Iterable[models.HoldingView]) -> float:
    total = 0.0
    for holding in holdings:
        total += holding.usd_value
    return total


def build_holdings_frame(holdings: List[models.HoldingView]) -> pd.DataFrame:
    if not holdings:
        return pd.DataFrame(columns=HOLDINGS_COLUMNS)
    total = compute_total_usd(holdings)
    rows = []
    for h in holdings:
        rows.append({
            "Currency": h.currency,
            "Name": h.name,
            "Symbol": h.symbol,
            "Amount": h.amount,
            "USD Rate": h.usd_rate_str,
            "USD Value": h.usd_value,
            "Share %": (h.usd_value / total * 100) if total else 0.0,
        })
    return pd.DataFrame(rows, columns=HOLDINGS_COLUMNS)
