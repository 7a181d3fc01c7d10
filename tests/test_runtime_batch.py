from __future__ import annotations

from pathlib import Path

import pytest

from coinlogos.downloads.worker import LogoDownloader
from coinlogos.errors import FatalStartupError
from coinlogos.runtime import LogoBatch
from coinlogos.storage.scanner import OutputScanner


class _Response:
    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self.body = body

    def __enter__(self) -> _Response:
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def iter_content(self, chunk_size: int):
        yield self.body


class _LogoHost:
    """Serves ``<svg>{name}</svg>`` for every logo except the missing ones."""

    def __init__(self, missing: set[str] | None = None) -> None:
        self.missing = missing or set()
        self.urls: list[str] = []

    def get(self, url: str, **_kwargs: object) -> _Response:
        self.urls.append(url)
        name = url.rsplit("/", 1)[-1].removesuffix(".svg")
        if name in self.missing:
            return _Response(404, b"")
        return _Response(200, f"<svg>{name}</svg>".encode())


class _Symbols:
    def __init__(self, symbols: list[str]) -> None:
        self.symbols = symbols

    def fetch(self) -> list[str]:
        return list(self.symbols)


def _batch(symbols: list[str], host: _LogoHost, sleeps: list[float]) -> LogoBatch:
    return LogoBatch(
        symbol_source=_Symbols(symbols),
        scanner=OutputScanner(),
        downloader=LogoDownloader(base_url="https://logos.test/coins", session=host),
        delay_seconds=0.2,
        sleep=sleeps.append,
    )


def test_run_all_downloads_pending_in_active_order(tmp_path: Path) -> None:
    output_dir = tmp_path / "logos"
    output_dir.mkdir()
    (output_dir / "ETH.svg").write_text("<svg/>", encoding="utf-8")
    host = _LogoHost()
    sleeps: list[float] = []

    summary = _batch(["BTC", "ETH", "1000PEPE", "SOL"], host, sleeps).run_all(output_dir)

    assert host.urls == [
        "https://logos.test/coins/BTC.svg",
        "https://logos.test/coins/PEPE.svg",
        "https://logos.test/coins/SOL.svg",
    ]
    assert (summary.attempted, summary.succeeded, summary.failed) == (3, 3, 0)
    assert (output_dir / "1000PEPE.svg").read_text(encoding="utf-8") == "<svg>PEPE</svg>"
    assert (output_dir / "ETH.svg").read_text(encoding="utf-8") == "<svg/>"
    assert sleeps == [0.2, 0.2]


def test_run_all_twice_is_idempotent(tmp_path: Path) -> None:
    host = _LogoHost()
    sleeps: list[float] = []
    batch = _batch(["BTC", "ETH"], host, sleeps)

    first = batch.run_all(tmp_path / "logos")
    second = batch.run_all(tmp_path / "logos")

    assert first.attempted == 2
    assert second.attempted == 0
    assert second.succeeded == 0
    assert len(host.urls) == 2


def test_one_failure_is_counted_and_batch_continues(tmp_path: Path) -> None:
    host = _LogoHost(missing={"ETH"})
    sleeps: list[float] = []

    summary = _batch(["BTC", "ETH", "SOL", "XRP"], host, sleeps).run_all(tmp_path)

    assert summary.attempted == 4
    assert summary.failed == 1
    assert summary.succeeded == 3
    assert summary.failed_symbols == ["ETH"]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["BTC.svg", "SOL.svg", "XRP.svg"]
    assert len(sleeps) == 3


def test_run_specific_downloads_even_when_file_exists(tmp_path: Path) -> None:
    (tmp_path / "XRP.svg").write_text("stale", encoding="utf-8")
    host = _LogoHost()
    sleeps: list[float] = []

    summary = _batch([], host, sleeps).run_specific(["XRP"], tmp_path)

    assert summary.attempted == 1
    assert summary.succeeded == 1
    assert (tmp_path / "XRP.svg").read_text(encoding="utf-8") == "<svg>XRP</svg>"
    assert sleeps == []


def test_run_specific_creates_missing_directory(tmp_path: Path) -> None:
    output_dir = tmp_path / "nested" / "logos"
    sleeps: list[float] = []

    summary = _batch([], _LogoHost(), sleeps).run_specific(["BTC", "1000BONK"], output_dir)

    assert summary.succeeded == 2
    assert (output_dir / "1000BONK.svg").exists()
    assert sleeps == [0.2]


def test_unwritable_output_directory_is_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "logos"
    blocker.write_text("a file, not a directory", encoding="utf-8")

    with pytest.raises(FatalStartupError, match="cannot create output directory"):
        _batch(["BTC"], _LogoHost(), []).run_all(blocker / "inner")
