"""Embedded market table used when the order book API is unavailable."""

from __future__ import annotations

from typing import Any

from coinlogos.domain.models import MarketEntry

# Snapshot of the order book listing; refresh when markets are added upstream.
FALLBACK_MARKET_RECORDS: tuple[dict[str, Any], ...] = (
    {"symbol": "1000TOSHI", "market_id": 81, "status": "active"},
    {"symbol": "ETHFI", "market_id": 64, "status": "active"},
    {"symbol": "POL", "market_id": 14, "status": "active"},
    {"symbol": "LINK", "market_id": 8, "status": "active"},
    {"symbol": "SKY", "market_id": 79, "status": "active"},
    {"symbol": "PENGU", "market_id": 47, "status": "active"},
    {"symbol": "1000FLOKI", "market_id": 19, "status": "active"},
    {"symbol": "BCH", "market_id": 58, "status": "active"},
    {"symbol": "DOGE", "market_id": 3, "status": "active"},
    {"symbol": "RESOLV", "market_id": 51, "status": "active"},
    {"symbol": "ZORA", "market_id": 53, "status": "active"},
    {"symbol": "SUI", "market_id": 16, "status": "active"},
    {"symbol": "ETH", "market_id": 0, "status": "active"},
    {"symbol": "USELESS", "market_id": 66, "status": "active"},
    {"symbol": "PROVE", "market_id": 57, "status": "active"},
    {"symbol": "ADA", "market_id": 39, "status": "active"},
    {"symbol": "APT", "market_id": 31, "status": "active"},
    {"symbol": "WLD", "market_id": 6, "status": "active"},
    {"symbol": "TRX", "market_id": 43, "status": "active"},
    {"symbol": "TAO", "market_id": 13, "status": "active"},
    {"symbol": "PENDLE", "market_id": 37, "status": "active"},
    {"symbol": "LTC", "market_id": 35, "status": "active"},
    {"symbol": "TON", "market_id": 12, "status": "active"},
    {"symbol": "SYRUP", "market_id": 44, "status": "active"},
    {"symbol": "1000SHIB", "market_id": 17, "status": "active"},
    {"symbol": "OP", "market_id": 55, "status": "active"},
    {"symbol": "NMR", "market_id": 74, "status": "active"},
    {"symbol": "PYTH", "market_id": 78, "status": "active"},
    {"symbol": "PAXG", "market_id": 48, "status": "active"},
    {"symbol": "AVNT", "market_id": 82, "status": "active"},
    {"symbol": "EIGEN", "market_id": 49, "status": "active"},
    {"symbol": "ARB", "market_id": 50, "status": "active"},
    {"symbol": "1000BONK", "market_id": 18, "status": "active"},
    {"symbol": "BTC", "market_id": 1, "status": "active"},
    {"symbol": "JUP", "market_id": 26, "status": "active"},
    {"symbol": "AI16Z", "market_id": 22, "status": "active"},
    {"symbol": "ZK", "market_id": 56, "status": "active"},
    {"symbol": "CRO", "market_id": 73, "status": "active"},
    {"symbol": "UNI", "market_id": 30, "status": "active"},
    {"symbol": "FARTCOIN", "market_id": 21, "status": "active"},
    {"symbol": "NEAR", "market_id": 10, "status": "active"},
    {"symbol": "PUMP", "market_id": 45, "status": "active"},
    {"symbol": "LINEA", "market_id": 76, "status": "active"},
    {"symbol": "DOT", "market_id": 11, "status": "active"},
    {"symbol": "LAUNCHCOIN", "market_id": 54, "status": "active"},
    {"symbol": "TRUMP", "market_id": 15, "status": "active"},
    {"symbol": "AAVE", "market_id": 27, "status": "active"},
    {"symbol": "MKR", "market_id": 28, "status": "inactive"},
    {"symbol": "CRV", "market_id": 36, "status": "active"},
    {"symbol": "GMX", "market_id": 61, "status": "active"},
    {"symbol": "SEI", "market_id": 32, "status": "active"},
    {"symbol": "MNT", "market_id": 63, "status": "active"},
    {"symbol": "AVAX", "market_id": 9, "status": "active"},
    {"symbol": "SPX", "market_id": 42, "status": "active"},
    {"symbol": "DOLO", "market_id": 75, "status": "active"},
    {"symbol": "ENA", "market_id": 29, "status": "active"},
    {"symbol": "MYX", "market_id": 80, "status": "active"},
    {"symbol": "YZY", "market_id": 70, "status": "active"},
    {"symbol": "WIF", "market_id": 5, "status": "active"},
    {"symbol": "IP", "market_id": 34, "status": "active"},
    {"symbol": "TIA", "market_id": 67, "status": "active"},
    {"symbol": "HYPE", "market_id": 24, "status": "active"},
    {"symbol": "LDO", "market_id": 46, "status": "active"},
    {"symbol": "VIRTUAL", "market_id": 41, "status": "active"},
    {"symbol": "BNB", "market_id": 25, "status": "active"},
    {"symbol": "XRP", "market_id": 7, "status": "active"},
    {"symbol": "POPCAT", "market_id": 23, "status": "active"},
    {"symbol": "XMR", "market_id": 77, "status": "active"},
    {"symbol": "MORPHO", "market_id": 68, "status": "active"},
    {"symbol": "XPL", "market_id": 71, "status": "active"},
    {"symbol": "S", "market_id": 40, "status": "active"},
    {"symbol": "AERO", "market_id": 65, "status": "active"},
    {"symbol": "VVV", "market_id": 69, "status": "active"},
    {"symbol": "BERA", "market_id": 20, "status": "active"},
    {"symbol": "ONDO", "market_id": 38, "status": "active"},
    {"symbol": "ZRO", "market_id": 60, "status": "active"},
    {"symbol": "GRASS", "market_id": 52, "status": "active"},
    {"symbol": "DYDX", "market_id": 62, "status": "active"},
    {"symbol": "WLFI", "market_id": 72, "status": "active"},
    {"symbol": "1000PEPE", "market_id": 4, "status": "active"},
    {"symbol": "KAITO", "market_id": 33, "status": "active"},
    {"symbol": "HBAR", "market_id": 59, "status": "active"},
    {"symbol": "SOL", "market_id": 2, "status": "active"},
)


class StaticMarketTable:
    """Market table backed by in-memory records."""

    def __init__(
        self,
        records: tuple[dict[str, Any], ...] | list[dict[str, Any]] = FALLBACK_MARKET_RECORDS,
    ) -> None:
        self._entries = [MarketEntry.from_record(record) for record in records]

    def entries(self) -> list[MarketEntry]:
        return list(self._entries)
