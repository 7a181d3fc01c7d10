"""Persist captured table data and extraction summaries."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from .models import ExtractionSummary, TableSnapshot

TABLE_DATA_FILE = "table-data.json"
TABLE_BODY_FILE = "table-body.html"
TABLE_CSV_FILE = "table-data.csv"
TABLE_TEXT_FILE = "table-data.txt"
PAGE_HTML_FILE = "complete-page.html"


def write_json(path: str | Path, record: dict[str, Any]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(record, indent=2), encoding="utf-8")
    return output


def load_table_snapshot(path: str | Path) -> TableSnapshot:
    """Load a ``table-data.json`` written by a previous capture."""
    input_path = Path(path)
    with input_path.open("r", encoding="utf-8") as handle:
        record = json.load(handle)
    if not isinstance(record, dict):
        raise ValueError(f"{input_path}: table data must be a JSON object")
    return TableSnapshot.from_record(record)


def save_table_snapshot(snapshot: TableSnapshot, output_dir: str | Path) -> Path:
    """Write the snapshot as JSON plus the raw tbody HTML."""
    directory = Path(output_dir)
    data_path = write_json(directory / TABLE_DATA_FILE, snapshot.to_record())
    if snapshot.tbody_html:
        (directory / TABLE_BODY_FILE).write_text(snapshot.tbody_html, encoding="utf-8")
    return data_path


def snapshot_frame(snapshot: TableSnapshot) -> pd.DataFrame:
    """Flatten snapshot rows into one frame row per table row."""
    rows: list[dict[str, Any]] = []
    for row in snapshot.rows:
        rows.append(
            {
                "row": row.row_index,
                "coin": row.coin_name,
                "svg_elements": sum(1 for element in row.elements if element.type == "svg"),
                "img_elements": sum(1 for element in row.elements if element.type == "img"),
                "cells": " | ".join(" ".join(text.split()) for text in row.cell_texts),
            }
        )
    columns = ["row", "coin", "svg_elements", "img_elements", "cells"]
    return pd.DataFrame(rows, columns=columns)


def write_table_csv(snapshot: TableSnapshot, path: str | Path) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    snapshot_frame(snapshot).to_csv(output, index=False)
    return output


def write_table_text(snapshot: TableSnapshot, path: str | Path, max_width: int = 20) -> Path:
    """Write a fixed-width, human readable rendering of the table."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame = snapshot_frame(snapshot)
    truncated = frame.astype(str).map(
        lambda text: text if len(text) <= max_width else f"{text[: max_width - 3]}..."
    )
    header = f"MARKET TABLE\nRows: {len(frame)}\n{'=' * 80}\n\n"
    body = truncated.to_string(index=False) if not frame.empty else "(no rows)"
    output.write_text(f"{header}{body}\n", encoding="utf-8")
    return output


def write_extraction_summary(summary: ExtractionSummary, path: str | Path) -> Path:
    return write_json(path, summary.to_record())
