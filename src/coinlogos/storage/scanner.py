"""Snapshot of logos already written to the output directory."""

from __future__ import annotations

from pathlib import Path

from coinlogos.errors import ScanError
from coinlogos.logging.logger import HumanLogger


class OutputScanner:
    """List symbols whose logo file already exists.

    The result is a point-in-time snapshot taken before a batch starts;
    files written by other processes during the run are not seen.
    """

    def __init__(self, extension: str = ".svg", human_logger: HumanLogger | None = None) -> None:
        self.extension = extension
        self.human_logger = human_logger or HumanLogger()

    def scan(self, output_dir: str | Path) -> set[str]:
        directory = Path(output_dir)
        try:
            existing = self._list_symbols(directory)
        except ScanError as exc:
            self.human_logger.warning(f"{exc}; treating as nothing downloaded yet")
            return set()
        self.human_logger.scan(str(directory), len(existing))
        return existing

    def _list_symbols(self, directory: Path) -> set[str]:
        if not directory.exists():
            return set()
        try:
            names = [path.name for path in directory.iterdir() if path.is_file()]
        except OSError as exc:
            raise ScanError(f"cannot read {directory}: {exc}") from exc
        return {
            name[: -len(self.extension)]
            for name in names
            if name.endswith(self.extension) and len(name) > len(self.extension)
        }
