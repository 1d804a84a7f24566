import json
import math

import pytest

from conftest import currency, usd_tier
from wallet.backend import models
from wallet.backend.data_processor import (
    HOLDINGS_COLUMNS,
    build_holdings_frame,
    compute_total_usd,
    filter_displayable,
    find_usd_tier,
    join_holdings,
    parse_balances,
    parse_currencies,
    parse_rate,
    parse_rate_tiers,
)
from wallet.backend.formatters import format_original_rate


def _join(currencies, rates, wallet):
    return join_holdings(
        parse_currencies(json.dumps(currencies)),
        parse_rate_tiers(json.dumps(rates)),
        parse_balances(json.dumps(wallet)),
    )


MALFORMED = [
    "",
    "not json",
    "{",
    "[]",
    "null",
    "42",
    '{"currencies": "BTC", "tiers": "BTC", "wallet": "BTC"}',
    '{"currencies": [1], "tiers": [1], "wallet": [1]}',
    '{"currencies": [{}], "tiers": [{}], "wallet": [{}]}',
]


@pytest.mark.parametrize("raw", MALFORMED)
def test_malformed_documents_parse_to_empty(raw):
    assert parse_currencies(raw) == []
    assert parse_rate_tiers(raw) == []
    assert parse_balances(raw) == []


def test_one_bad_record_rejects_the_document():
    raw = json.dumps({"currencies": [currency("BTC"), {"code": "ETH", "symbol": "ETH"}]})
    assert parse_currencies(raw) == []


def test_balance_field_types():
    assert parse_balances('{"wallet": [{"currency": "BTC", "amount": true}]}') == []
    assert parse_balances('{"wallet": [{"currency": null, "amount": 1}]}') == []
    assert parse_balances('{"wallet": [{"currency": "BTC", "amount": "abc"}]}') == []
    balances = parse_balances('{"wallet": [{"currency": "BTC", "amount": "0.5"}]}')
    assert balances == [models.BalanceRecord(currency="BTC", amount=0.5)]


def test_currency_optional_fields_default():
    raw = json.dumps({"currencies": [{
        "code": "CRO", "name": "Cronos", "symbol": "CRO", "colorful_image_url": "u",
    }]})
    [record] = parse_currencies(raw)
    assert record.code == "CRO"
    assert record.is_erc20 is False
    assert record.token_decimal == 0


def test_envelope_flags_are_ignored():
    rates = {"ok": False, "warning": "stale rates", "tiers": [usd_tier("BTC", "1.5")]}
    wallet = {"ok": False, "warning": "maintenance", "wallet": [{"currency": "BTC", "amount": 2}]}
    currencies = {"ok": False, "total": 0, "currencies": [currency("BTC")]}
    holdings = _join(currencies, rates, wallet)
    assert [h.currency for h in holdings] == ["BTC"]
    assert holdings[0].usd_value == 3.0


def test_unmatched_balance_is_dropped_from_total(scenario_documents):
    holdings = _join(*scenario_documents)
    assert [h.currency for h in holdings] == ["BTC", "ETH"]
    btc, eth = holdings
    assert btc.name == "Bitcoin"
    assert btc.usd_rate_str == "65000.12"
    assert btc.usd_value == 0.5 * 65000.12
    assert eth.usd_value == 2 * 3200.5
    assert compute_total_usd(holdings) == 0.5 * 65000.12 + 2 * 3200.5
    assert compute_total_usd(holdings) == pytest.approx(38901.06)


def test_join_output_is_bounded_by_balances(scenario_documents):
    currencies, rates, wallet = scenario_documents
    holdings = _join(currencies, rates, wallet)
    codes = {b["currency"] for b in wallet["wallet"]}
    assert len(holdings) <= len(wallet["wallet"])
    assert all(h.currency in codes for h in holdings)


def test_blank_currency_code_is_dropped():
    currencies = {"currencies": [currency("", name="Nameless", symbol="?"), currency("BTC")]}
    rates = {"tiers": [usd_tier("", "1"), usd_tier("   ", "1"), usd_tier("BTC", "2")]}
    wallet = {"wallet": [{"currency": "", "amount": 1}, {"currency": "   ", "amount": 1}, {"currency": "BTC", "amount": 1}]}
    assert [h.currency for h in _join(currencies, rates, wallet)] == ["BTC"]


def test_unparsable_rate_is_zero_but_kept():
    currencies = {"currencies": [currency("BTC")]}
    rates = {"tiers": [usd_tier("BTC", "abc")]}
    wallet = {"wallet": [{"currency": "BTC", "amount": 3}]}
    [holding] = _join(currencies, rates, wallet)
    assert holding.usd_rate == 0.0
    assert holding.usd_value == 0.0
    assert format_original_rate(holding.usd_rate_str, holding.symbol) == "$abc/BTC"


@pytest.mark.parametrize("text", ["0.00003417123456789", "65000.120000000000000001", "1e-9"])
def test_rate_string_survives_unchanged(text):
    currencies = {"currencies": [currency("CRO")]}
    wallet = {"wallet": [{"currency": "CRO", "amount": 1}]}
    [holding] = _join(currencies, {"tiers": [usd_tier("CRO", text)]}, wallet)
    assert format_original_rate(holding.usd_rate_str, holding.symbol) == f"${text}/CRO"


def test_bare_number_rate_keeps_source_text():
    raw = '{"tiers": [{"from_currency": "CRO", "to_currency": "USD", "rates": [{"amount": 1000, "rate": 0.00003417123456789}], "time_stamp": 1}]}'
    [tier] = parse_rate_tiers(raw)
    assert tier.rates[0].rate == "0.00003417123456789"
    assert tier.rates[0].amount == "1000"
    assert tier.time_stamp == 1


def test_empty_rate_list_is_skipped():
    currencies = {"currencies": [currency("DAI")]}
    rates = {"tiers": [{"from_currency": "DAI", "to_currency": "USD", "rates": [], "time_stamp": 1}]}
    wallet = {"wallet": [{"currency": "DAI", "amount": 5}]}
    assert _join(currencies, rates, wallet) == []


def test_only_exact_usd_target_matches():
    currencies = {"currencies": [currency("BTC")]}
    rates = {"tiers": [usd_tier("BTC", "1", to_currency="EUR"), usd_tier("BTC", "2", to_currency="usd")]}
    wallet = {"wallet": [{"currency": "BTC", "amount": 1}]}
    assert _join(currencies, rates, wallet) == []


def test_first_match_wins_and_order_is_kept():
    currencies = {"currencies": [currency("ETH", "Ether"), currency("BTC", "Bitcoin"), currency("BTC", "Other")]}
    rates = {"tiers": [
        usd_tier("BTC", "10", to_currency="EUR"),
        usd_tier("BTC", "20"),
        usd_tier("BTC", "30"),
        usd_tier("ETH", "5"),
    ]}
    wallet = {"wallet": [
        {"currency": "ETH", "amount": 1},
        {"currency": "BTC", "amount": 1},
        {"currency": "ETH", "amount": 2},
    ]}
    holdings = _join(currencies, rates, wallet)
    assert [h.currency for h in holdings] == ["ETH", "BTC", "ETH"]
    assert holdings[1].name == "Bitcoin"
    assert holdings[1].usd_rate_str == "20"
    assert find_usd_tier(parse_rate_tiers(json.dumps(rates)), "BTC").rates[0].rate == "20"


def test_zero_amount_is_still_displayed():
    currencies = {"currencies": [currency("BTC")]}
    rates = {"tiers": [usd_tier("BTC", "100")]}
    wallet = {"wallet": [{"currency": "BTC", "amount": 0}]}
    [holding] = _join(currencies, rates, wallet)
    assert holding.usd_value == 0.0


@pytest.mark.parametrize("text, expected", [
    ("65000.12", 65000.12),
    ("1e3", 1000.0),
    (".5", 0.5),
    ("abc", 0.0),
    ("", 0.0),
    (" 1.0", 1.0),
    ("65000.12\n", 65000.12),
    ("\t2.5 ", 2.5),
    ("1.5d", 1.5),
    ("2F", 2.0),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
    ("1 000", 0.0),
    ("1_000", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
])
def test_parse_rate(text, expected):
    assert parse_rate(text) == expected


def test_parse_rate_nan_literal():
    assert math.isnan(parse_rate("NaN"))


def test_padded_rate_is_valued():
    currencies = {"currencies": [currency("BTC")]}
    rates = {"tiers": [usd_tier("BTC", " 65000.12")]}
    wallet = {"wallet": [{"currency": "BTC", "amount": 0.5}]}
    [holding] = _join(currencies, rates, wallet)
    assert holding.usd_value == 0.5 * 65000.12
    assert holding.usd_rate_str == " 65000.12"


def test_filter_displayable():
    keep = models.HoldingView("BTC", "Bitcoin", "BTC", 1.0, 1.0, "1", 1.0, "")
    blank = models.HoldingView(" ", "Blank", "?", 1.0, 1.0, "1", 1.0, "")
    assert filter_displayable([blank, keep]) == [keep]


def test_holdings_frame(scenario_documents):
    frame = build_holdings_frame(_join(*scenario_documents))
    assert list(frame.columns) == HOLDINGS_COLUMNS
    assert list(frame["Currency"]) == ["BTC", "ETH"]
    assert list(frame["USD Rate"]) == ["65000.12", "3200.5"]
    assert frame["Share %"].sum() == pytest.approx(100.0)


def test_empty_holdings_frame():
    frame = build_holdings_frame([])
    assert frame.empty
    assert list(frame.columns) == HOLDINGS_COLUMNS
