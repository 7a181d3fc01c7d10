"""Heuristics that find a ticker-like label near an image in scraped markup."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from coinlogos.logging.logger import HumanLogger

TICKER_PATTERN = r"[A-Z0-9]{2,10}"

COMMON_WORDS = frozenset(
    "THE AND FOR WITH FROM THIS THAT WILL CAN NOT BUT YOU ALL ARE WAS ONE HAS HAD HIS HER "
    "ITS OUR THEY THEM THESE THOSE".split()
)
MARKUP_WORDS = frozenset("HTML CSS SVG XML HTTP HTTPS WWW COM ORG NET".split())


@dataclass(frozen=True)
class LabelContext:
    """What a strategy may look at: nearby markup and the row's cell texts."""

    html: str = ""
    cell_texts: tuple[str, ...] = ()


class LabelStrategy(Protocol):
    """Find a label for an image, or return None."""

    def extract_label_near(self, context: LabelContext) -> str | None:
        """Return a ticker-like label or None when nothing matches."""


def window_around(text: str, position: int, size: int) -> str:
    """Return up to ``size`` characters on each side of ``position``."""
    start = max(0, position - size)
    end = min(len(text), position + size)
    return text[start:end]


class ParagraphTagLabel:
    """Ticker rendered as the whole text of a ``<p>`` element."""

    pattern = re.compile(rf"<p[^>]*>({TICKER_PATTERN})</p>", re.IGNORECASE)

    def extract_label_near(self, context: LabelContext) -> str | None:
        match = self.pattern.search(context.html)
        return match.group(1) if match else None


class TickerTokenLabel:
    """First upper-case token that is not a common or markup word."""

    pattern = re.compile(rf"\b({TICKER_PATTERN})\b")

    def __init__(self, stop_words: Iterable[str] = COMMON_WORDS) -> None:
        self.stop_words = frozenset(stop_words)

    def extract_label_near(self, context: LabelContext) -> str | None:
        for match in self.pattern.finditer(context.html):
            token = match.group(1)
            if token in self.stop_words or token.isdigit():
                continue
            return token
        return None


class DataTestIdLabel:
    """Ticker embedded in a ``data-testid`` attribute."""

    pattern = re.compile(rf'data-testid="[^"]*?({TICKER_PATTERN})[^"]*?"', re.IGNORECASE)

    def extract_label_near(self, context: LabelContext) -> str | None:
        match = self.pattern.search(context.html)
        return match.group(1) if match else None


class AltAttributeLabel:
    """Ticker used as an image ``alt`` attribute."""

    pattern = re.compile(rf"alt=[\"']({TICKER_PATTERN})[\"']", re.IGNORECASE)

    def extract_label_near(self, context: LabelContext) -> str | None:
        match = self.pattern.search(context.html)
        return match.group(1) if match else None


class CellTextLabel:
    """A short alphanumeric cell text from the same table row."""

    pattern = re.compile(r"^[A-Z0-9]{2,10}$", re.IGNORECASE)

    def extract_label_near(self, context: LabelContext) -> str | None:
        for text in context.cell_texts:
            candidate = text.strip()
            if self.pattern.match(candidate):
                return candidate
        return None


class ChainedLabelExtractor:
    """Try strategies in order and fall back to a generated unique name."""

    def __init__(
        self,
        strategies: Iterable[LabelStrategy],
        fallback_prefix: str = "coin",
        human_logger: HumanLogger | None = None,
    ) -> None:
        self.strategies = list(strategies)
        self.fallback_prefix = fallback_prefix
        self.human_logger = human_logger

    def extract_label_near(self, context: LabelContext) -> str | None:
        for strategy in self.strategies:
            try:
                label = strategy.extract_label_near(context)
            except (re.error, ValueError, TypeError) as exc:
                if self.human_logger is not None:
                    self.human_logger.warning(
                        f"label strategy {type(strategy).__name__} failed: {exc}"
                    )
                continue
            if label:
                return label
        return None

    def label_for(self, context: LabelContext) -> str:
        return self.extract_label_near(context) or self.fallback_name()

    def fallback_name(self) -> str:
        return f"{self.fallback_prefix}_{uuid4().hex[:10]}"


def image_label_extractor(human_logger: HumanLogger | None = None) -> ChainedLabelExtractor:
    """Label chain for base64 and asset images found in saved HTML."""
    return ChainedLabelExtractor(
        [ParagraphTagLabel(), TickerTokenLabel(COMMON_WORDS), DataTestIdLabel()],
        fallback_prefix="coin",
        human_logger=human_logger,
    )


def svg_label_extractor(human_logger: HumanLogger | None = None) -> ChainedLabelExtractor:
    """Label chain for inline SVG blocks found in saved HTML."""
    return ChainedLabelExtractor(
        [
            ParagraphTagLabel(),
            TickerTokenLabel(COMMON_WORDS | MARKUP_WORDS),
            DataTestIdLabel(),
            AltAttributeLabel(),
        ],
        fallback_prefix="svg",
        human_logger=human_logger,
    )


def row_label_extractor(human_logger: HumanLogger | None = None) -> ChainedLabelExtractor:
    """Label chain for table rows whose coin name cell was empty."""
    return ChainedLabelExtractor(
        [CellTextLabel(), ParagraphTagLabel(), AltAttributeLabel()],
        fallback_prefix="image",
        human_logger=human_logger,
    )
