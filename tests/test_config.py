from __future__ import annotations

import pytest

from coinlogos.config import Settings
from coinlogos.errors import ConfigError

ENV_KEYS = [
    "MARKET_DATA_URL",
    "LOGO_BASE_URL",
    "LOGO_EXTENSION",
    "OUTPUT_DIR",
    "MARKET_TIMEOUT_SECONDS",
    "DOWNLOAD_TIMEOUT_SECONDS",
    "DELAY_SECONDS",
    "LOG_LEVEL",
    "SCRAPE_URL",
    "ASSET_BASE_URL",
    "IMAGES_DIR",
    "HEADLESS",
    "NAVIGATION_TIMEOUT_MS",
    "SELECTOR_TIMEOUT_MS",
    "IMAGE_DELAY_SECONDS",
    "USER_AGENT",
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("coinlogos.config.load_dotenv", lambda *args, **kwargs: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    settings = Settings.from_env()

    assert settings == Settings()
    assert settings.output_dir == "logos"
    assert settings.logo_extension == ".svg"
    assert settings.delay_seconds == 0.2
    assert settings.logo_base_url == "https://app.hyperliquid.xyz/coins"
    assert settings.market_data_url.endswith("/api/v1/orderBookDetails")
    assert settings.headless is True


def test_environment_values_are_applied(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTPUT_DIR", "out/logos")
    monkeypatch.setenv("DELAY_SECONDS", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("NAVIGATION_TIMEOUT_MS", "30000")
    monkeypatch.setenv("LOGO_EXTENSION", ".png")

    settings = Settings.from_env()

    assert settings.output_dir == "out/logos"
    assert settings.delay_seconds == 0.0
    assert settings.log_level == "DEBUG"
    assert settings.headless is False
    assert settings.navigation_timeout_ms == 30000
    assert settings.logo_extension == ".png"


def test_blank_environment_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTPUT_DIR", "   ")
    monkeypatch.setenv("DELAY_SECONDS", "")

    settings = Settings.from_env()

    assert settings.output_dir == "logos"
    assert settings.delay_seconds == 0.2


def test_unparseable_number_is_a_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOWNLOAD_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigError, match="download_timeout_seconds must be a number"):
        Settings.from_env()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"download_timeout_seconds": 0}, "download_timeout_seconds must be positive"),
        ({"market_timeout_seconds": -1.0}, "market_timeout_seconds must be positive"),
        ({"delay_seconds": -0.1}, "delay_seconds must not be negative"),
        ({"logo_extension": "svg"}, "logo_extension"),
        ({"output_dir": " "}, "output_dir must not be empty"),
        ({"logo_base_url": "ftp://logos"}, "logo_base_url"),
        ({"selector_timeout_ms": 0}, "browser timeouts"),
    ],
)
def test_invalid_overrides_are_rejected(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        Settings().with_overrides(**overrides)


def test_config_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Settings(delay_seconds=-1).validate()
