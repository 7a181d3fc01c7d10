"""Crypto market logo downloader and table image extractor."""

__version__ = "0.1.0"
