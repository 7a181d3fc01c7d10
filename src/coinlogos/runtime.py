"""Runtime wiring and logo batch orchestration."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

from coinlogos.config import Settings
from coinlogos.domain.models import RunSummary
from coinlogos.downloads.worker import LogoDownloader
from coinlogos.errors import CoinLogosError, DownloadError, FatalStartupError
from coinlogos.logging.logger import HumanLogger
from coinlogos.markets.api_source import MarketApiSymbolSource
from coinlogos.markets.base import SymbolSource
from coinlogos.markets.fallback import StaticMarketTable
from coinlogos.scraper.browser import PlaywrightTableSource
from coinlogos.scraper.codec import ImageCodec
from coinlogos.scraper.extractor import HtmlImageScanner, TableImageExtractor
from coinlogos.scraper.models import ExtractionSummary
from coinlogos.scraper.reports import (
    PAGE_HTML_FILE,
    TABLE_CSV_FILE,
    TABLE_TEXT_FILE,
    load_table_snapshot,
    save_table_snapshot,
    write_extraction_summary,
    write_table_csv,
    write_table_text,
)
from coinlogos.storage.scanner import OutputScanner

TABLE_SUMMARY_FILE = "image-extraction-summary.json"
HTML_SUMMARY_FILE = "html-image-extraction-summary.json"
INTERRUPTED_EXIT_CODE = 130


class LogoBatch:
    """Download every missing logo, or an explicit list, one at a time."""

    def __init__(
        self,
        symbol_source: SymbolSource,
        scanner: OutputScanner,
        downloader: LogoDownloader,
        human_logger: HumanLogger | None = None,
        delay_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.symbol_source = symbol_source
        self.scanner = scanner
        self.downloader = downloader
        self.human_logger = human_logger or HumanLogger()
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def run_all(self, output_dir: str | Path) -> RunSummary:
        """Download logos for active markets that have no file yet."""
        directory = self._prepare(output_dir)
        active = self.symbol_source.fetch()
        existing = self.scanner.scan(directory)
        pending = [symbol for symbol in active if symbol not in existing]
        self.human_logger.batch_plan(len(active), len(existing & set(active)), len(pending))
        if not pending:
            self.human_logger.info("all logos already downloaded")
        return self._download(pending, directory, title="all markets")

    def run_specific(self, symbols: list[str], output_dir: str | Path) -> RunSummary:
        """Download the given symbols, overwriting any existing file."""
        directory = self._prepare(output_dir)
        return self._download(list(symbols), directory, title="specific symbols")

    def _prepare(self, output_dir: str | Path) -> Path:
        directory = Path(output_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalStartupError(f"cannot create output directory {directory}: {exc}") from exc
        return directory

    def _download(self, symbols: list[str], directory: Path, title: str) -> RunSummary:
        summary = RunSummary(output_dir=str(directory))
        total = len(symbols)
        for index, symbol in enumerate(symbols, start=1):
            task = self.downloader.build_task(symbol, directory)
            self.human_logger.download_started(index, total, symbol, task.normalized_symbol)
            try:
                self.downloader.fetch(symbol, directory)
            except DownloadError as exc:
                self.human_logger.failed(symbol, exc.cause)
                summary.record_failure(symbol)
            else:
                summary.record_success()
            if index < total and self.delay_seconds > 0:
                self.sleep(self.delay_seconds)
        self.human_logger.summary(
            title,
            summary.attempted,
            summary.succeeded,
            summary.failed,
            summary.output_dir,
            summary.failed_symbols,
        )
        return summary


def build_batch(settings: Settings, human_logger: HumanLogger) -> LogoBatch:
    symbol_source = MarketApiSymbolSource(
        url=settings.market_data_url,
        fallback=StaticMarketTable(),
        timeout=settings.market_timeout_seconds,
        human_logger=human_logger,
    )
    scanner = OutputScanner(extension=settings.logo_extension, human_logger=human_logger)
    downloader = LogoDownloader(
        base_url=settings.logo_base_url,
        extension=settings.logo_extension,
        timeout=settings.download_timeout_seconds,
        human_logger=human_logger,
    )
    return LogoBatch(
        symbol_source=symbol_source,
        scanner=scanner,
        downloader=downloader,
        human_logger=human_logger,
        delay_seconds=settings.delay_seconds,
    )


def build_codec(settings: Settings) -> ImageCodec:
    return ImageCodec(
        asset_base_url=settings.asset_base_url,
        timeout=settings.download_timeout_seconds,
    )


def run(settings: Settings, symbols: list[str] | None = None) -> int:
    """Run the logo batch: every missing logo, or exactly ``symbols`` when not None."""
    human_logger = HumanLogger(level=settings.log_level)

    def execute() -> None:
        batch = build_batch(settings, human_logger)
        if symbols is not None:
            batch.run_specific(symbols, settings.output_dir)
        else:
            batch.run_all(settings.output_dir)

    return _guarded(execute, human_logger)


def scrape_page(settings: Settings) -> int:
    """Capture the market table in a browser and save every row's image."""
    human_logger = HumanLogger(level=settings.log_level)

    def execute() -> None:
        images_dir = Path(settings.images_dir)
        report_dir = images_dir.parent
        source = PlaywrightTableSource(
            url=settings.scrape_url,
            headless=settings.headless,
            user_agent=settings.user_agent,
            navigation_timeout_ms=settings.navigation_timeout_ms,
            selector_timeout_ms=settings.selector_timeout_ms,
            human_logger=human_logger,
        )
        capture = source.capture()
        save_table_snapshot(capture.snapshot, report_dir)
        write_table_csv(capture.snapshot, report_dir / TABLE_CSV_FILE)
        write_table_text(capture.snapshot, report_dir / TABLE_TEXT_FILE)
        (report_dir / PAGE_HTML_FILE).write_text(capture.page_html, encoding="utf-8")
        extractor = TableImageExtractor(
            build_codec(settings),
            human_logger=human_logger,
            delay_seconds=settings.image_delay_seconds,
        )
        summary = extractor.process(capture.snapshot, images_dir)
        _finish_extraction(summary, report_dir / TABLE_SUMMARY_FILE, human_logger)

    return _guarded(execute, human_logger)


def extract_from_table(settings: Settings, table_path: str | Path) -> int:
    """Save images from a previously captured ``table-data.json``."""
    human_logger = HumanLogger(level=settings.log_level)

    def execute() -> None:
        snapshot = load_table_snapshot(table_path)
        images_dir = Path(settings.images_dir)
        extractor = TableImageExtractor(
            build_codec(settings),
            human_logger=human_logger,
            delay_seconds=settings.image_delay_seconds,
        )
        summary = extractor.process(snapshot, images_dir)
        _finish_extraction(summary, images_dir.parent / TABLE_SUMMARY_FILE, human_logger)

    return _guarded(execute, human_logger)


def extract_from_html(settings: Settings, html_path: str | Path) -> int:
    """Save every embedded image found in a saved HTML page."""
    human_logger = HumanLogger(level=settings.log_level)

    def execute() -> None:
        html = Path(html_path).read_text(encoding="utf-8")
        images_dir = Path(settings.images_dir)
        scanner = HtmlImageScanner(build_codec(settings), human_logger=human_logger)
        summary = scanner.scan(html, images_dir)
        _finish_extraction(summary, images_dir.parent / HTML_SUMMARY_FILE, human_logger)

    return _guarded(execute, human_logger)


def _finish_extraction(
    summary: ExtractionSummary,
    summary_path: Path,
    human_logger: HumanLogger,
) -> None:
    write_extraction_summary(summary, summary_path)
    human_logger.summary(
        summary.title,
        summary.total,
        summary.successful,
        summary.failed,
        summary.output_dir,
        summary.failed_items,
    )


def _guarded(execute: Callable[[], None], human_logger: HumanLogger) -> int:
    try:
        execute()
    except KeyboardInterrupt:
        human_logger.warning("interrupted")
        return INTERRUPTED_EXIT_CODE
    except CoinLogosError as exc:
        human_logger.error(str(exc))
        return 1
    except Exception as exc:
        human_logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    return 0
