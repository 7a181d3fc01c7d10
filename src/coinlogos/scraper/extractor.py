"""Save table and HTML images as PNG files named after their coin."""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from pathlib import Path

from coinlogos.errors import CoinLogosError
from coinlogos.logging.logger import HumanLogger
from coinlogos.storage.paths import sanitize_filename, unique_path

from .codec import ImageCodec
from .labels import (
    ChainedLabelExtractor,
    LabelContext,
    image_label_extractor,
    row_label_extractor,
    svg_label_extractor,
    window_around,
)
from .models import ExtractionSummary, ImageCandidate, TableRow, TableSnapshot

IMAGE_LABEL_WINDOW = 2000
SVG_LABEL_WINDOW = 1000

BASE64_IMAGE = re.compile(r"data:image/(?:png|jpg|jpeg|gif|webp|svg\+xml);base64,[A-Za-z0-9+/=]+")
PLAIN_DATA_IMAGE = re.compile(r"data:image/(?:png|jpg|jpeg|gif|webp|svg\+xml),[^\"'\s>]+")
ASSET_SRC = re.compile(r"src=[\"']([^\"']*/?assets/[^\"']*)[\"']", re.IGNORECASE)
INLINE_SVG = re.compile(r"<svg[^>]*>.*?</svg>", re.IGNORECASE | re.DOTALL)
ANY_DATA_URL = re.compile(r"data:[^\"'\s>]+")


class TableImageExtractor:
    """Convert the images of each captured table row into ``<coin>.png``.

    The first image saved for a row is written to ``<coin>.png`` and any
    further images of the same row to ``<coin>_1.png``, ``<coin>_2.png``;
    re-running over the same snapshot overwrites the same files.
    """

    def __init__(
        self,
        codec: ImageCodec,
        human_logger: HumanLogger | None = None,
        label_extractor: ChainedLabelExtractor | None = None,
        delay_seconds: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.codec = codec
        self.human_logger = human_logger or HumanLogger()
        self.label_extractor = label_extractor or row_label_extractor(self.human_logger)
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def process(self, snapshot: TableSnapshot, images_dir: str | Path) -> ExtractionSummary:
        directory = Path(images_dir)
        directory.mkdir(parents=True, exist_ok=True)
        summary = ExtractionSummary(title="table rows", output_dir=str(directory))
        for index, row in enumerate(snapshot.rows):
            if index > 0 and self.delay_seconds > 0:
                self.sleep(self.delay_seconds)
            coin_name = self._row_label(row)
            if coin_name is None:
                self.human_logger.skipped(f"row {row.row_index}", "no coin name")
                continue
            summary.total += 1
            self.human_logger.row(row.row_index, coin_name, len(row.elements))
            saved = self._save_row(row, coin_name, directory)
            summary.items.append(
                {
                    "rowIndex": row.row_index,
                    "coinName": coin_name,
                    "elements": len(row.elements),
                    "saved": saved,
                }
            )
            if saved:
                summary.successful += 1
                summary.saved_files.extend(saved)
            else:
                self.human_logger.failed(coin_name, "no images saved")
                summary.record_failure(coin_name)
        return summary

    def _row_label(self, row: TableRow) -> str | None:
        candidate = row.coin_name or self.label_extractor.extract_label_near(
            LabelContext(
                html="".join(element.html for element in row.elements),
                cell_texts=row.cell_texts,
            )
        )
        if not candidate:
            return None
        return sanitize_filename(candidate) or None

    def _save_row(self, row: TableRow, coin_name: str, directory: Path) -> list[str]:
        saved: list[str] = []
        for element in row.elements:
            stem = coin_name if not saved else f"{coin_name}_{len(saved)}"
            dest = directory / f"{stem}.png"
            try:
                decoded = self.codec.save_png(element.source, dest)
            except CoinLogosError as exc:
                self.human_logger.failed(f"{coin_name} {element.type}", str(exc))
                continue
            self.human_logger.saved(coin_name, str(dest), details={"kind": decoded.kind})
            saved.append(str(dest))
        return saved


class HtmlImageScanner:
    """Find embedded images in saved page HTML and save them as PNG files."""

    def __init__(
        self,
        codec: ImageCodec,
        human_logger: HumanLogger | None = None,
        image_labels: ChainedLabelExtractor | None = None,
        svg_labels: ChainedLabelExtractor | None = None,
    ) -> None:
        self.codec = codec
        self.human_logger = human_logger or HumanLogger()
        self.image_labels = image_labels or image_label_extractor(self.human_logger)
        self.svg_labels = svg_labels or svg_label_extractor(self.human_logger)

    def find_candidates(self, html: str) -> list[ImageCandidate]:
        found: list[tuple[int, str, str]] = []
        seen: set[int] = set()
        for pattern in (BASE64_IMAGE, PLAIN_DATA_IMAGE):
            for match in pattern.finditer(html):
                if match.start() not in seen:
                    seen.add(match.start())
                    found.append((match.start(), "data", match.group(0)))
        for match in ASSET_SRC.finditer(html):
            found.append((match.start(), "asset", match.group(1)))
        for match in INLINE_SVG.finditer(html):
            found.append((match.start(), "svg", match.group(0)))
        found.sort(key=lambda item: item[0])

        candidates: list[ImageCandidate] = []
        for number, (position, kind, payload) in enumerate(found, start=1):
            if kind == "svg":
                labels, window = self.svg_labels, SVG_LABEL_WINDOW
            else:
                labels, window = self.image_labels, IMAGE_LABEL_WINDOW
            context = LabelContext(html=ANY_DATA_URL.sub("", window_around(html, position, window)))
            candidates.append(
                ImageCandidate(
                    id=number,
                    kind=kind,  # type: ignore[arg-type]
                    payload=payload,
                    label=labels.label_for(context),
                    position=position,
                )
            )
        return candidates

    def scan(self, html: str, images_dir: str | Path) -> ExtractionSummary:
        directory = Path(images_dir)
        directory.mkdir(parents=True, exist_ok=True)
        candidates = self.find_candidates(html)
        summary = ExtractionSummary(
            title="html images",
            output_dir=str(directory),
            total=len(candidates),
        )
        for candidate in candidates:
            stem = sanitize_filename(candidate.label) or f"image_{candidate.id}"
            dest = unique_path(directory, stem, ".png")
            summary.items.append(
                {
                    "id": candidate.id,
                    "kind": candidate.kind,
                    "coinName": candidate.label,
                    "position": candidate.position,
                    "preview": candidate.preview(),
                }
            )
            try:
                decoded = self.codec.save_png(candidate.payload, dest)
            except CoinLogosError as exc:
                self.human_logger.failed(f"image {candidate.id} ({candidate.label})", str(exc))
                summary.record_failure(f"{candidate.id}:{candidate.label}")
                continue
            self.human_logger.saved(candidate.label, str(dest), details={"kind": decoded.kind})
            summary.record_success(str(dest))
        return summary
