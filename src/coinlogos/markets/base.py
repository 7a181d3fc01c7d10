"""Market symbol source contracts."""

from __future__ import annotations

from typing import Protocol

from coinlogos.domain.models import MarketEntry


class MarketTable(Protocol):
    """Stateless provider of market entries."""

    def entries(self) -> list[MarketEntry]:
        """Return every known market entry."""


class SymbolSource(Protocol):
    """Interface for the active symbol list."""

    def fetch(self) -> list[str]:
        """Return active symbols in listing order, never raising."""


def active_symbols(entries: list[MarketEntry]) -> list[str]:
    """Return active symbols in first-seen order without duplicates."""
    symbols: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        if not entry.is_active or entry.symbol in seen:
            continue
        seen.add(entry.symbol)
        symbols.append(entry.symbol)
    return symbols
