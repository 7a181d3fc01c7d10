"""Concise human-readable run logger."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str | None = None, name: str = "coinlogos") -> None:
        self._logger = logging.getLogger(name)
        if level is not None:
            self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        elif self._logger.level == logging.NOTSET:
            self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def market_list(self, source: str, total: int, active: int) -> None:
        self._logger.info("market | %s | entries %d | active %d", source, total, active)

    def market_fallback(self, reason: str) -> None:
        self._logger.warning("market | api unavailable, using embedded table | %s", reason)

    def market_record_skipped(self, reason: str) -> None:
        self._logger.warning("market | skipped record | %s", reason)

    def scan(self, output_dir: str, existing: int) -> None:
        self._logger.info("scan | %s | existing %d", output_dir, existing)

    def batch_plan(self, active: int, existing: int, pending: int) -> None:
        self._logger.info("plan | active %d | existing %d | pending %d", active, existing, pending)

    def download_started(self, index: int, total: int, raw_symbol: str, normalized: str) -> None:
        source = raw_symbol if raw_symbol == normalized else f"{raw_symbol} (from {normalized})"
        self._logger.info("download | %d/%d | %s", index, total, source)

    def saved(self, label: str, path: str, details: Mapping[str, Any] | None = None) -> None:
        parts = [f"saved | {label} | {path}"]
        if details:
            kind = details.get("kind")
            if kind:
                parts.append(f"from {kind}")
            size = details.get("bytes")
            if isinstance(size, int):
                parts.append(self._format_bytes(size))
        self._logger.info(" | ".join(parts))

    def failed(self, label: str, reason: str) -> None:
        self._logger.warning("failed | %s | %s", label, self._truncate(reason))

    def skipped(self, label: str, reason: str) -> None:
        self._logger.info("skip | %s | %s", label, reason)

    def row(self, row_index: int, coin_name: str, elements: int) -> None:
        self._logger.debug("row | %d | %s | elements %d", row_index, coin_name, elements)

    def summary(
        self,
        title: str,
        attempted: int,
        succeeded: int,
        failed: int,
        output_dir: str,
        failed_labels: list[str] | None = None,
    ) -> None:
        self._logger.info(
            "summary | %s | attempted %d | ok %d | failed %d | %s",
            title,
            attempted,
            succeeded,
            failed,
            output_dir,
        )
        if failed_labels:
            self._logger.info("summary | failed items | %s", ", ".join(failed_labels))

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning("warning | %s", message)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def _truncate(value: str, limit: int = 160) -> str:
        text = " ".join(str(value).split())
        if len(text) <= limit:
            return text
        return f"{text[: limit - 3]}..."

    @staticmethod
    def _format_bytes(size: int) -> str:
        if size < 1024:
            return f"{size} B"
        if size < 1024 * 1024:
            return f"{size / 1024:.1f} KiB"
        return f"{size / (1024 * 1024):.1f} MiB"
