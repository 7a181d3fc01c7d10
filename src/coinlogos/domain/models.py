"""Core logo batch domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class MarketStatus(StrEnum):
    """Market listing states reported by the order book API."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class MarketEntry:
    """One order book listing."""

    symbol: str
    market_id: int
    status: MarketStatus

    @property
    def is_active(self) -> bool:
        return self.status == MarketStatus.ACTIVE

    @classmethod
    def from_record(cls, record: Any) -> MarketEntry:
        """Build an entry from an API record, raising ValueError on bad shape."""
        if not isinstance(record, dict):
            raise ValueError(f"market record must be an object, got {type(record).__name__}")
        symbol = record.get("symbol")
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError("market record missing symbol")
        market_id = record.get("market_id")
        if isinstance(market_id, bool) or not isinstance(market_id, int):
            raise ValueError(f"{symbol}: market_id must be an integer")
        try:
            status = MarketStatus(str(record.get("status", "")).strip().lower())
        except ValueError as exc:
            raise ValueError(f"{symbol}: unknown status {record.get('status')!r}") from exc
        return cls(symbol=symbol.strip(), market_id=market_id, status=status)

    def to_record(self) -> dict[str, Any]:
        return {"symbol": self.symbol, "market_id": self.market_id, "status": self.status.value}


@dataclass(frozen=True)
class DownloadTask:
    """A single pending logo download."""

    raw_symbol: str
    normalized_symbol: str
    source_url: str
    dest_path: str


@dataclass
class RunSummary:
    """Counters accumulated over one batch run."""

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    output_dir: str = ""
    failed_symbols: list[str] = field(default_factory=list)

    def record_success(self) -> None:
        self.attempted += 1
        self.succeeded += 1

    def record_failure(self, symbol: str) -> None:
        self.attempted += 1
        self.failed += 1
        self.failed_symbols.append(symbol)
