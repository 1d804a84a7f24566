import json

import pytest

from wallet import config
from wallet.backend.asset_loader import AssetStore


def _dump(document) -> str:
    return document if isinstance(document, str) else json.dumps(document)


@pytest.fixture
def make_store(tmp_path):
    def build(currencies=None, rates=None, wallet=None) -> AssetStore:
        for name, document in (
            (config.CURRENCIES_FILE, currencies),
            (config.RATES_FILE, rates),
            (config.WALLET_FILE, wallet),
        ):
            if document is None:
                continue
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_dump(document), encoding="utf-8")
        return AssetStore(tmp_path)

    return build


def currency(code, name=None, symbol=None):
    return {
        "coin_id": code,
        "name": name or code.title(),
        "symbol": symbol or code,
        "token_decimal": 8,
        "colorful_image_url": f"https://img.example/{code.lower()}.png",
        "gray_image_url": f"https://img.example/{code.lower()}-gray.png",
        "blockchain_symbol": code,
        "trading_symbol": code,
        "code": code,
        "is_erc20": False,
        "display_decimal": 8,
    }


def usd_tier(code, rate, to_currency="USD"):
    return {
        "from_currency": code,
        "to_currency": to_currency,
        "rates": [{"amount": "1000", "rate": rate}],
        "time_stamp": 1729300000,
    }


@pytest.fixture
def scenario_documents():
    currencies = {"currencies": [currency("BTC", "Bitcoin"), currency("ETH", "Ethereum")], "total": 2, "ok": True}
    rates = {"ok": True, "warning": "", "tiers": [usd_tier("BTC", "65000.12"), usd_tier("ETH", "3200.5")]}
    wallet = {
        "ok": True,
        "warning": "",
        "wallet": [
            {"currency": "BTC", "amount": 0.5},
            {"currency": "ETH", "amount": 2},
            {"currency": "XRP", "amount": 100},
        ],
    }
    return currencies, rates, wallet
