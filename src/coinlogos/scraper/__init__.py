"""Rendered-table image extraction."""

from .browser import PageCapture, PlaywrightTableSource
from .codec import DecodedImage, ImageCodec
from .extractor import HtmlImageScanner, TableImageExtractor
from .models import ExtractionSummary, ImageCandidate, TableElement, TableRow, TableSnapshot

__all__ = [
    "DecodedImage",
    "ExtractionSummary",
    "HtmlImageScanner",
    "ImageCandidate",
    "ImageCodec",
    "PageCapture",
    "PlaywrightTableSource",
    "TableElement",
    "TableImageExtractor",
    "TableRow",
    "TableSnapshot",
]
