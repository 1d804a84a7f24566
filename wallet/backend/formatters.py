"""
Display formatting for the Wallet Holdings Dashboard
"""

import math

from .. import config

AMOUNT_MAX_FRACTION_DIGITS = config.AMOUNT_MAX_FRACTION_DIGITS


def format_amount(amount: float, symbol: str) -> str:
    # Negative values that round to zero keep their sign: "-0 BTC".
    text = f"{amount:,.{AMOUNT_MAX_FRACTION_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {symbol}"


def format_usd_value(value: float) -> str:
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_original_rate(rate_str: str, symbol: str) -> str:
    # The source text is shown as-is; reformatting a float would drop digits.
    return f"${rate_str}/{symbol}"
