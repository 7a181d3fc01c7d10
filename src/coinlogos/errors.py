"""Custom exceptions for clearer error handling across the package."""

from __future__ import annotations


class CoinLogosError(Exception):
    """Base exception for all package-specific errors."""


class ConfigError(CoinLogosError, ValueError):
    """Raised when environment or CLI configuration is invalid."""


class UpstreamUnavailable(CoinLogosError):
    """Raised when the market list API is unreachable or returns a malformed payload."""


class ScanError(CoinLogosError):
    """Raised when the output directory cannot be listed."""


class DownloadError(CoinLogosError):
    """Raised when a single logo cannot be fetched or persisted."""

    def __init__(self, symbol: str, cause: str) -> None:
        super().__init__(f"{symbol}: {cause}")
        self.symbol = symbol
        self.cause = cause


class ImageConversionError(CoinLogosError):
    """Raised when image data is unsupported or cannot be converted to PNG."""


class BrowserError(CoinLogosError):
    """Raised when the headless browser session fails."""


class FatalStartupError(CoinLogosError):
    """Raised when a run cannot start, e.g. the output directory cannot be created."""
