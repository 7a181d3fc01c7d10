"""Ticker symbol helpers."""

from __future__ import annotations

MULTIPLIER_PREFIX = "1000"


def normalize_symbol(symbol: str) -> str:
    """Map a market ticker to the asset name used by the logo host.

    Markets quote some low-priced assets per thousand units (``1000FLOKI``);
    the logo host only knows the bare asset (``FLOKI``).
    """
    if symbol.startswith(MULTIPLIER_PREFIX):
        return symbol[len(MULTIPLIER_PREFIX) :]
    return symbol


def explicit_symbols(values: list[str]) -> list[str]:
    """Return CLI symbols as typed, dropping only blank arguments.

    Logo host paths are case-sensitive (``kPEPE``), so symbols are neither
    upper-cased nor split; repeated symbols are fetched again.
    """
    return [value.strip() for value in values if value.strip()]
