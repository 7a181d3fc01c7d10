"""Order book API symbol source with embedded fallback."""

from __future__ import annotations

from typing import Any

import requests

from coinlogos.domain.models import MarketEntry
from coinlogos.errors import UpstreamUnavailable
from coinlogos.logging.logger import HumanLogger

from .base import MarketTable, active_symbols
from .fallback import StaticMarketTable

DEFAULT_MARKET_DATA_URL = "https://mainnet.zklighter.elliot.ai/api/v1/orderBookDetails"
LISTING_FIELD = "order_book_details"


class MarketApiSymbolSource:
    """Fetch active market symbols, preferring availability over freshness.

    Any failure to obtain a valid listing from the API (network error,
    timeout, error status, non-JSON body, missing ``order_book_details``)
    is logged and answered from the injected fallback table, so callers
    always receive a usable symbol list.
    """

    def __init__(
        self,
        url: str = DEFAULT_MARKET_DATA_URL,
        fallback: MarketTable | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
        human_logger: HumanLogger | None = None,
    ) -> None:
        self.url = url
        self.fallback = fallback if fallback is not None else StaticMarketTable()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"accept": "application/json"})
        self.human_logger = human_logger or HumanLogger()

    def fetch(self) -> list[str]:
        return active_symbols(self.fetch_entries())

    def fetch_entries(self) -> list[MarketEntry]:
        try:
            entries = self._request_entries()
            source = "api"
        except UpstreamUnavailable as exc:
            self.human_logger.market_fallback(str(exc))
            entries = self.fallback.entries()
            source = "fallback"
        active = sum(1 for entry in entries if entry.is_active)
        self.human_logger.market_list(source, len(entries), active)
        return entries

    def _request_entries(self) -> list[MarketEntry]:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"market data request failed: {exc}") from exc
        if response.status_code >= 400:
            raise UpstreamUnavailable(f"market data error {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable("market data response is not JSON") from exc
        return self._parse_payload(payload)

    def _parse_payload(self, payload: Any) -> list[MarketEntry]:
        if not isinstance(payload, dict):
            raise UpstreamUnavailable("invalid response structure from API")
        records = payload.get(LISTING_FIELD)
        if not isinstance(records, list):
            raise UpstreamUnavailable(f"response missing {LISTING_FIELD} list")
        entries: list[MarketEntry] = []
        for record in records:
            try:
                entries.append(MarketEntry.from_record(record))
            except ValueError as exc:
                self.human_logger.market_record_skipped(str(exc))
        return entries
