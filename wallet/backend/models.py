"""
Data models for the Wallet Holdings Dashboard
Typed records for the three bundled documents and the joined display row.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


def _text(data: Dict[str, Any], key: str, default: Any = None) -> str:
    if key not in data or data[key] is None:
        if default is None:
            raise KeyError(key)
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"{key} must be text, got {type(value).__name__}")
    return value if isinstance(value, str) else str(value)


def _number(data: Dict[str, Any], key: str, cast=float, default: Any = None):
    if key not in data or data[key] is None:
        if default is None:
            raise KeyError(key)
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"{key} must be numeric, got {type(value).__name__}")
    if cast is int and isinstance(value, str):
        return int(float(value)) if "." in value else int(value)
    return cast(value)


def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean")
    return value


@dataclass
class CurrencyRecord:
    code: str
    name: str
    symbol: str
    colorful_image_url: str
    coin_id: str = ""
    token_decimal: int = 0
    gray_image_url: str = ""
    blockchain_symbol: str = ""
    trading_symbol: str = ""
    is_erc20: bool = False
    display_decimal: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurrencyRecord":
        return cls(
            code=_text(data, "code"),
            name=_text(data, "name"),
            symbol=_text(data, "symbol"),
            colorful_image_url=_text(data, "colorful_image_url"),
            coin_id=_text(data, "coin_id", ""),
            token_decimal=_number(data, "token_decimal", int, 0),
            gray_image_url=_text(data, "gray_image_url", ""),
            blockchain_symbol=_text(data, "blockchain_symbol", ""),
            trading_symbol=_text(data, "trading_symbol", ""),
            is_erc20=_flag(data, "is_erc20"),
            display_decimal=_number(data, "display_decimal", int, 0),
        )


@dataclass
class RateEntry:
    rate: str
    amount: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateEntry":
        return cls(rate=_text(data, "rate"), amount=_text(data, "amount", ""))


@dataclass
class RateTier:
    from_currency: str
    to_currency: str
    rates: List[RateEntry] = field(default_factory=list)
    time_stamp: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateTier":
        rates = data.get("rates")
        if not isinstance(rates, list):
            raise TypeError("rates must be a list")
        return cls(
            from_currency=_text(data, "from_currency"),
            to_currency=_text(data, "to_currency"),
            rates=[RateEntry.from_dict(entry) for entry in rates],
            time_stamp=_number(data, "time_stamp", int, 0),
        )


@dataclass
class BalanceRecord:
    currency: str
    amount: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalanceRecord":
        return cls(currency=_text(data, "currency"), amount=_number(data, "amount"))


@dataclass(frozen=True)
class HoldingView:
    """One display row: a balance joined with its currency and USD rate.

    ``usd_rate_str`` keeps the rate exactly as it appeared in the source
    document; ``usd_rate`` is only used to compute ``usd_value``.
    """

    currency: str
    name: str
    symbol: str
    amount: float
    usd_rate: float
    usd_rate_str: str
    usd_value: float
    image_url: str
