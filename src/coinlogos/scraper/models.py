"""Structured rows captured from the rendered market table."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

ElementType = Literal["svg", "img"]


@dataclass(frozen=True)
class TableElement:
    """An image-bearing element inside a table cell."""

    type: ElementType
    src: str = ""
    alt: str = ""
    html: str = ""

    @property
    def source(self) -> str:
        """Return the value the image codec should decode."""
        if self.type == "svg":
            return self.html
        return self.src

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> TableElement:
        element_type = str(record.get("type", "")).strip().lower()
        if element_type not in {"svg", "img"}:
            raise ValueError(f"unknown element type {record.get('type')!r}")
        return cls(
            type=element_type,  # type: ignore[arg-type]
            src=str(record.get("src") or ""),
            alt=str(record.get("alt") or ""),
            html=str(record.get("html") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"type": self.type, "html": self.html}
        if self.type == "img":
            record["src"] = self.src
            record["alt"] = self.alt
        return record


@dataclass(frozen=True)
class TableRow:
    """One tbody row: the coin label and the images found in its first cell."""

    row_index: int
    coin_name: str
    elements: tuple[TableElement, ...] = ()
    cell_texts: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> TableRow:
        elements = tuple(
            TableElement.from_record(item)
            for item in record.get("elements") or []
            if isinstance(item, dict) and str(item.get("type", "")).lower() in {"svg", "img"}
        )
        cell_texts = tuple(str(text) for text in record.get("cellTexts") or [])
        return cls(
            row_index=int(record.get("rowIndex", 0)),
            coin_name=str(record.get("coinName") or "").strip(),
            elements=elements,
            cell_texts=cell_texts,
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "rowIndex": self.row_index,
            "coinName": self.coin_name,
            "elements": [element.to_record() for element in self.elements],
            "cellTexts": list(self.cell_texts),
        }


@dataclass(frozen=True)
class TableSnapshot:
    """Rows captured from the market selector table."""

    rows: tuple[TableRow, ...] = ()
    total_rows: int = 0
    tbody_html: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> TableSnapshot:
        raw_rows = record.get("rows")
        if not isinstance(raw_rows, list):
            raise ValueError("table data is missing a rows list")
        rows = tuple(TableRow.from_record(item) for item in raw_rows if isinstance(item, dict))
        return cls(
            rows=rows,
            total_rows=int(record.get("totalRows", len(rows))),
            tbody_html=str(record.get("tbodyHTML") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "rows": [row.to_record() for row in self.rows],
            "tbodyHTML": self.tbody_html,
        }


@dataclass(frozen=True)
class ImageCandidate:
    """An image found by scanning raw HTML."""

    id: int
    kind: Literal["data", "asset", "svg"]
    payload: str
    label: str
    position: int

    def preview(self, limit: int = 100) -> str:
        if len(self.payload) <= limit:
            return self.payload
        return f"{self.payload[:limit]}..."


@dataclass
class ExtractionSummary:
    """Counters and failures for one image extraction pass."""

    title: str
    output_dir: str
    total: int = 0
    successful: int = 0
    failed: int = 0
    failed_items: list[str] = field(default_factory=list)
    saved_files: list[str] = field(default_factory=list)
    items: list[dict[str, Any]] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now(tz=UTC).isoformat())

    def record_success(self, path: str) -> None:
        self.successful += 1
        self.saved_files.append(path)

    def record_failure(self, label: str) -> None:
        self.failed += 1
        self.failed_items.append(label)

    def to_record(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "title": self.title,
            "outputDir": self.output_dir,
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "failedItems": list(self.failed_items),
            "savedFiles": list(self.saved_files),
            "items": list(self.items),
        }
