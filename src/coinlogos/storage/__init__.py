"""Local output state."""

from .paths import sanitize_filename, unique_path
from .scanner import OutputScanner

__all__ = ["OutputScanner", "sanitize_filename", "unique_path"]
