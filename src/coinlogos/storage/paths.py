"""Filename helpers for scraped images."""

from __future__ import annotations

import re
from pathlib import Path

INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
WHITESPACE = re.compile(r"\s+")


def sanitize_filename(name: str) -> str:
    """Drop characters that are invalid in filenames and join words with underscores."""
    cleaned = INVALID_FILENAME_CHARS.sub("", name.strip())
    return WHITESPACE.sub("_", cleaned)


def unique_path(directory: Path, stem: str, suffix: str) -> Path:
    """Return ``directory/stem.suffix``, adding ``_1``, ``_2``, ... if taken."""
    candidate = directory / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate
