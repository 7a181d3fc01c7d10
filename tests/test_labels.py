from __future__ import annotations

import re

from coinlogos.logging.logger import HumanLogger
from coinlogos.scraper.labels import (
    AltAttributeLabel,
    CellTextLabel,
    ChainedLabelExtractor,
    DataTestIdLabel,
    LabelContext,
    ParagraphTagLabel,
    TickerTokenLabel,
    image_label_extractor,
    row_label_extractor,
    svg_label_extractor,
    window_around,
)


def test_paragraph_tag_strategy() -> None:
    context = LabelContext(html='<span><svg></svg></span><p class="x">btc</p>')

    assert ParagraphTagLabel().extract_label_near(context) == "btc"
    assert ParagraphTagLabel().extract_label_near(LabelContext(html="<p>Bitcoin Cash</p>")) is None


def test_ticker_token_skips_stop_words_and_numbers() -> None:
    strategy = TickerTokenLabel({"THE", "SVG"})

    assert strategy.extract_label_near(LabelContext(html="THE 2024 SVG for SOL")) == "SOL"
    assert strategy.extract_label_near(LabelContext(html="the lowercase words")) is None


def test_attribute_strategies() -> None:
    testid = LabelContext(html='<div data-testid="market-row-ETH"></div>')
    alt = LabelContext(html="<img alt='XRP' src='/assets/xrp.png'>")

    assert DataTestIdLabel().extract_label_near(LabelContext(html='data-testid="ETH"')) == "ETH"
    assert AltAttributeLabel().extract_label_near(alt) == "XRP"
    assert AltAttributeLabel().extract_label_near(testid) is None


def test_cell_text_strategy_uses_first_short_alphanumeric_cell() -> None:
    context = LabelContext(cell_texts=("", "Bitcoin Cash", " 1000PEPE ", "ETH"))

    assert CellTextLabel().extract_label_near(context) == "1000PEPE"
    assert CellTextLabel().extract_label_near(LabelContext(cell_texts=("0.00", "-"))) is None


def test_chain_returns_first_match_in_order() -> None:
    chain = ChainedLabelExtractor([AltAttributeLabel(), ParagraphTagLabel()])
    context = LabelContext(html='<img alt="DOGE"><p>SHIB</p>')

    assert chain.extract_label_near(context) == "DOGE"


def test_chain_skips_failing_strategy() -> None:
    class _Broken:
        def extract_label_near(self, context: LabelContext) -> str | None:
            raise re.error("bad pattern")

    chain = ChainedLabelExtractor([_Broken(), ParagraphTagLabel()], human_logger=HumanLogger())

    assert chain.extract_label_near(LabelContext(html="<p>AVAX</p>")) == "AVAX"


def test_chain_falls_back_to_unique_generated_name() -> None:
    chain = ChainedLabelExtractor([ParagraphTagLabel()], fallback_prefix="svg")

    first = chain.label_for(LabelContext(html="<div></div>"))
    second = chain.label_for(LabelContext(html="<div></div>"))

    assert re.fullmatch(r"svg_[0-9a-f]{10}", first)
    assert first != second


def test_svg_chain_ignores_markup_words_but_image_chain_does_not() -> None:
    context = LabelContext(html="<!-- SVG icon --> LINK")

    assert svg_label_extractor().label_for(context) == "LINK"
    assert image_label_extractor().label_for(context) == "SVG"


def test_row_chain_prefers_cell_text() -> None:
    context = LabelContext(html="<p>WRONG</p>", cell_texts=("$1,234.5", "ARB"))

    assert row_label_extractor().label_for(context) == "ARB"


def test_window_around_clamps_to_text() -> None:
    assert window_around("abcdefghij", 5, 2) == "defg"
    assert window_around("abc", 0, 10) == "abc"
