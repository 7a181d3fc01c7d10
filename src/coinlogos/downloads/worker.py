"""Fetch-and-persist worker for a single logo."""

from __future__ import annotations

import os
from pathlib import Path

import requests

from coinlogos.domain.models import DownloadTask
from coinlogos.errors import DownloadError
from coinlogos.logging.logger import HumanLogger
from coinlogos.symbols import normalize_symbol

DEFAULT_LOGO_BASE_URL = "https://app.hyperliquid.xyz/coins"
PARTIAL_SUFFIX = ".part"


class LogoDownloader:
    """Stream one logo from the logo host into the output directory.

    The body is written to ``<dest>.part`` and renamed onto the destination
    only after the stream ends, so a failed or interrupted download never
    leaves a file the output scanner would count as downloaded.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_LOGO_BASE_URL,
        extension: str = ".svg",
        timeout: float = 10.0,
        chunk_size: int = 8192,
        session: requests.Session | None = None,
        human_logger: HumanLogger | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.extension = extension
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        self.human_logger = human_logger or HumanLogger()

    def build_task(self, raw_symbol: str, output_dir: str | Path) -> DownloadTask:
        normalized = normalize_symbol(raw_symbol)
        return DownloadTask(
            raw_symbol=raw_symbol,
            normalized_symbol=normalized,
            source_url=f"{self.base_url}/{normalized}{self.extension}",
            dest_path=str(Path(output_dir) / f"{raw_symbol}{self.extension}"),
        )

    def fetch(self, raw_symbol: str, output_dir: str | Path) -> DownloadTask:
        task = self.build_task(raw_symbol, output_dir)
        if not task.normalized_symbol:
            raise DownloadError(raw_symbol, "symbol is empty after normalization")
        written = self._stream_to_file(task)
        self.human_logger.saved(raw_symbol, task.dest_path, details={"bytes": written})
        return task

    def _stream_to_file(self, task: DownloadTask) -> int:
        dest = Path(task.dest_path)
        partial = dest.with_name(f"{dest.name}{PARTIAL_SUFFIX}")
        written = 0
        try:
            with self.session.get(
                task.source_url,
                stream=True,
                timeout=self.timeout,
                allow_redirects=True,
            ) as response:
                if not 200 <= response.status_code < 300:
                    raise DownloadError(
                        task.raw_symbol,
                        f"HTTP {response.status_code} from {task.source_url}",
                    )
                with partial.open("wb") as handle:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            handle.write(chunk)
                            written += len(chunk)
            os.replace(partial, dest)
        except DownloadError:
            self._discard(partial)
            raise
        except (requests.RequestException, OSError) as exc:
            self._discard(partial)
            raise DownloadError(task.raw_symbol, str(exc)) from exc
        return written

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            self.human_logger.warning(f"could not remove partial file {path}: {exc}")
