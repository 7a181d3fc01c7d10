"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from coinlogos.downloads.worker import DEFAULT_LOGO_BASE_URL
from coinlogos.errors import ConfigError
from coinlogos.markets.api_source import DEFAULT_MARKET_DATA_URL

DEFAULT_SCRAPE_URL = "https://app.lighter.xyz/trade/BNB"
DEFAULT_ASSET_BASE_URL = "https://app.lighter.xyz"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def parse_bool(value: str | None, default: bool) -> bool:
    """Parse truthy environment strings."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_float(value: str | None, default: float, *, field_name: str) -> float:
    """Parse an optional float env value."""
    if value is None or not value.strip():
        return default
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a number, got {value!r}") from exc


def parse_int(value: str | None, default: int, *, field_name: str) -> int:
    """Parse an optional integer env value."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer, got {value!r}") from exc


def env_text(name: str, default: str) -> str:
    return str(os.getenv(name, default)).strip() or default


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    market_data_url: str = DEFAULT_MARKET_DATA_URL
    logo_base_url: str = DEFAULT_LOGO_BASE_URL
    logo_extension: str = ".svg"
    output_dir: str = "logos"
    market_timeout_seconds: float = 15.0
    download_timeout_seconds: float = 10.0
    delay_seconds: float = 0.2
    log_level: str = "INFO"
    scrape_url: str = DEFAULT_SCRAPE_URL
    asset_base_url: str = DEFAULT_ASSET_BASE_URL
    images_dir: str = "images"
    headless: bool = True
    navigation_timeout_ms: int = 60000
    selector_timeout_ms: int = 10000
    image_delay_seconds: float = 0.05
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            market_data_url=env_text("MARKET_DATA_URL", DEFAULT_MARKET_DATA_URL),
            logo_base_url=env_text("LOGO_BASE_URL", DEFAULT_LOGO_BASE_URL),
            logo_extension=env_text("LOGO_EXTENSION", ".svg"),
            output_dir=env_text("OUTPUT_DIR", "logos"),
            market_timeout_seconds=parse_float(
                os.getenv("MARKET_TIMEOUT_SECONDS"),
                15.0,
                field_name="market_timeout_seconds",
            ),
            download_timeout_seconds=parse_float(
                os.getenv("DOWNLOAD_TIMEOUT_SECONDS"),
                10.0,
                field_name="download_timeout_seconds",
            ),
            delay_seconds=parse_float(
                os.getenv("DELAY_SECONDS"),
                0.2,
                field_name="delay_seconds",
            ),
            log_level=env_text("LOG_LEVEL", "INFO").upper(),
            scrape_url=env_text("SCRAPE_URL", DEFAULT_SCRAPE_URL),
            asset_base_url=env_text("ASSET_BASE_URL", DEFAULT_ASSET_BASE_URL),
            images_dir=env_text("IMAGES_DIR", "images"),
            headless=parse_bool(os.getenv("HEADLESS"), True),
            navigation_timeout_ms=parse_int(
                os.getenv("NAVIGATION_TIMEOUT_MS"),
                60000,
                field_name="navigation_timeout_ms",
            ),
            selector_timeout_ms=parse_int(
                os.getenv("SELECTOR_TIMEOUT_MS"),
                10000,
                field_name="selector_timeout_ms",
            ),
            image_delay_seconds=parse_float(
                os.getenv("IMAGE_DELAY_SECONDS"),
                0.05,
                field_name="image_delay_seconds",
            ),
            user_agent=env_text("USER_AGENT", DEFAULT_USER_AGENT),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def validate(self) -> Self:
        """Validate settings fields."""
        if self.market_timeout_seconds <= 0:
            raise ConfigError("market_timeout_seconds must be positive")
        if self.download_timeout_seconds <= 0:
            raise ConfigError("download_timeout_seconds must be positive")
        if self.delay_seconds < 0:
            raise ConfigError("delay_seconds must not be negative")
        if self.image_delay_seconds < 0:
            raise ConfigError("image_delay_seconds must not be negative")
        if self.navigation_timeout_ms <= 0 or self.selector_timeout_ms <= 0:
            raise ConfigError("browser timeouts must be positive")
        if not self.logo_extension.startswith(".") or len(self.logo_extension) < 2:
            raise ConfigError("logo_extension must start with '.', e.g. '.svg'")
        if not self.output_dir.strip():
            raise ConfigError("output_dir must not be empty")
        if not self.images_dir.strip():
            raise ConfigError("images_dir must not be empty")
        if not self.logo_base_url.startswith(("http://", "https://")):
            raise ConfigError("logo_base_url must be an http(s) URL")
        if not self.market_data_url.startswith(("http://", "https://")):
            raise ConfigError("market_data_url must be an http(s) URL")
        return self
