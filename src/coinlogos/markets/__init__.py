"""Market symbol sources."""

from .api_source import MarketApiSymbolSource
from .base import MarketTable, SymbolSource
from .fallback import FALLBACK_MARKET_RECORDS, StaticMarketTable

__all__ = [
    "FALLBACK_MARKET_RECORDS",
    "MarketApiSymbolSource",
    "MarketTable",
    "StaticMarketTable",
    "SymbolSource",
]
