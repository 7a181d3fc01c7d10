"""Tests for ticker normalization and CLI symbol handling."""

from __future__ import annotations

from coinlogos.symbols import explicit_symbols, normalize_symbol


def test_normalize_symbol_strips_multiplier_prefix() -> None:
    assert normalize_symbol("1000FLOKI") == "FLOKI"
    assert normalize_symbol("1000SHIB") == "SHIB"
    assert normalize_symbol("1000BONK") == "BONK"


def test_normalize_symbol_leaves_plain_tickers_alone() -> None:
    for symbol in ["BTC", "ETH", "XRP", "100X", ""]:
        assert normalize_symbol(symbol) == symbol


def test_normalize_symbol_only_strips_leading_prefix_once() -> None:
    assert normalize_symbol("10001000X") == "1000X"
    assert normalize_symbol("X1000") == "X1000"
    assert normalize_symbol("1000") == ""


def test_explicit_symbols_keep_case_and_repeats() -> None:
    assert explicit_symbols(["kPEPE", " XRP ", "", "   ", "XRP"]) == ["kPEPE", "XRP", "XRP"]
    assert explicit_symbols(["btc,eth"]) == ["btc,eth"]
    assert explicit_symbols([]) == []
