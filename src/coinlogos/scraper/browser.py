"""Headless browser capture of the market selector table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from coinlogos.errors import BrowserError
from coinlogos.logging.logger import HumanLogger

from .models import TableSnapshot

MARKET_SELECTOR = 'button[data-tourid="marketSelector"]'
DIALOG_SELECTOR = '[role="dialog"], [data-state="open"], .modal'
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

# Runs in the page: first table's tbody rows, first-cell images and coin label.
TABLE_SCRIPT = """
() => {
    const table = document.querySelector('table');
    const tbody = table ? table.querySelector('tbody') : null;
    if (!tbody) {
        return null;
    }
    const rows = [];
    tbody.querySelectorAll('tr').forEach((row, index) => {
        const cells = row.querySelectorAll('td, th');
        const firstCell = cells[0];
        if (!firstCell) {
            return;
        }
        const elements = [];
        firstCell.querySelectorAll('span').forEach((span) => {
            const svg = span.querySelector('svg');
            if (svg && !span.closest('button')) {
                elements.push({ type: 'svg', html: svg.outerHTML });
            }
        });
        firstCell.querySelectorAll('img').forEach((img) => {
            elements.push({ type: 'img', src: img.src, alt: img.alt, html: img.outerHTML });
        });
        const label = firstCell.querySelector('p');
        rows.push({
            rowIndex: index,
            coinName: label ? label.textContent.trim() : '',
            elements: elements,
            cellTexts: Array.from(cells).map((cell) => cell.innerText.trim()),
        });
    });
    return { totalRows: rows.length, rows: rows, tbodyHTML: tbody.outerHTML };
}
"""


@dataclass(frozen=True)
class PageCapture:
    """Table rows plus the full page HTML at capture time."""

    snapshot: TableSnapshot
    page_html: str


class PlaywrightTableSource:
    """Open the trading page, open the market selector and capture its table."""

    def __init__(
        self,
        url: str,
        headless: bool = True,
        user_agent: str | None = None,
        navigation_timeout_ms: int = 60000,
        selector_timeout_ms: int = 10000,
        settle_ms: int = 3000,
        human_logger: HumanLogger | None = None,
    ) -> None:
        self.url = url
        self.headless = headless
        self.user_agent = user_agent
        self.navigation_timeout_ms = navigation_timeout_ms
        self.selector_timeout_ms = selector_timeout_ms
        self.settle_ms = settle_ms
        self.human_logger = human_logger or HumanLogger()

    def capture(self) -> PageCapture:
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
            from playwright.sync_api import sync_playwright
        except ImportError as exc:
            raise BrowserError(
                "playwright is required for page scraping. Install it with "
                "`pip install playwright && playwright install chromium`."
            ) from exc

        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
                try:
                    context_options: dict[str, Any] = {
                        "viewport": {"width": 1920, "height": 1080},
                    }
                    if self.user_agent:
                        context_options["user_agent"] = self.user_agent
                    page = browser.new_context(**context_options).new_page()
                    return self._capture_page(page, PlaywrightTimeoutError)
                finally:
                    browser.close()
        except PlaywrightError as exc:
            raise BrowserError(f"browser session failed: {exc}") from exc

    def _capture_page(self, page: Any, timeout_error: type[Exception]) -> PageCapture:
        self.human_logger.info(f"browser | open | {self.url}")
        page.goto(self.url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        page.wait_for_timeout(self.settle_ms)

        page.wait_for_selector(MARKET_SELECTOR, timeout=self.selector_timeout_ms)
        self.human_logger.info("browser | click | market selector")
        page.click(MARKET_SELECTOR)
        page.wait_for_timeout(self.settle_ms // 2)

        try:
            page.wait_for_selector(DIALOG_SELECTOR, timeout=self.selector_timeout_ms)
        except timeout_error:
            self.human_logger.warning("dialog selector not found, continuing anyway")
        page.wait_for_timeout(self.settle_ms)

        record = page.evaluate(TABLE_SCRIPT)
        if not isinstance(record, dict):
            raise BrowserError("no table body found in the market selector")
        snapshot = TableSnapshot.from_record(record)
        self.human_logger.info(f"browser | captured | rows {len(snapshot.rows)}")
        return PageCapture(snapshot=snapshot, page_html=page.content())
