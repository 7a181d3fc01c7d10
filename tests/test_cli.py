from __future__ import annotations

import pytest

from coinlogos import cli
from coinlogos.cli import apply_cli_overrides, build_parser, selected_action
from coinlogos.config import Settings


def test_cli_overrides_produce_expected_settings() -> None:
    args = build_parser().parse_args(
        [
            "--output-dir",
            "custom/logos",
            "--images-dir",
            "custom/images",
            "--delay-seconds",
            "0.5",
            "--log-level",
            "debug",
            "--headed",
        ]
    )
    settings = apply_cli_overrides(Settings(), args)

    assert settings.output_dir == "custom/logos"
    assert settings.images_dir == "custom/images"
    assert settings.delay_seconds == 0.5
    assert settings.log_level == "DEBUG"
    assert settings.headless is False


def test_cli_without_flags_keeps_settings() -> None:
    args = build_parser().parse_args([])

    assert apply_cli_overrides(Settings(), args) == Settings()
    assert selected_action(args) == "download"


@pytest.mark.parametrize(
    ("argv", "action"),
    [
        (["XRP"], "download"),
        (["--scrape-page"], "scrape"),
        (["--from-table", "table-data.json"], "table"),
        (["--from-html", "page.html"], "html"),
    ],
)
def test_selected_action(argv: list[str], action: str) -> None:
    assert selected_action(build_parser().parse_args(argv)) == action


def test_conflicting_actions_are_rejected() -> None:
    args = build_parser().parse_args(["--scrape-page", "--from-html", "page.html"])
    with pytest.raises(ValueError, match="only one action flag"):
        selected_action(args)

    args = build_parser().parse_args(["BTC", "--from-table", "table-data.json"])
    with pytest.raises(ValueError, match="cannot be combined"):
        selected_action(args)


@pytest.fixture
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("coinlogos.config.load_dotenv", lambda *args, **kwargs: None)
    for key in ["OUTPUT_DIR", "DELAY_SECONDS", "LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)


def test_main_routes_symbols_to_specific_run(
    monkeypatch: pytest.MonkeyPatch, _no_dotenv: None
) -> None:
    captured: dict[str, object] = {}

    def _run(settings: Settings, symbols: list[str] | None = None) -> int:
        captured["symbols"] = symbols
        captured["output_dir"] = settings.output_dir
        return 0

    monkeypatch.setattr(cli, "run", _run)

    assert cli.main(["XRP", "BTC", "--output-dir", "out"]) == 0
    assert captured == {"symbols": ["XRP", "BTC"], "output_dir": "out"}


def test_main_passes_mixed_case_symbols_unchanged(
    monkeypatch: pytest.MonkeyPatch, _no_dotenv: None
) -> None:
    captured: list[object] = []
    monkeypatch.setattr(cli, "run", lambda settings, symbols=None: captured.append(symbols) or 0)

    assert cli.main(["kPEPE", "1000bonk", "kPEPE"]) == 0
    assert captured == [["kPEPE", "1000bonk", "kPEPE"]]


def test_main_with_blank_symbols_never_runs_full_batch(
    monkeypatch: pytest.MonkeyPatch, _no_dotenv: None
) -> None:
    captured: list[object] = []
    monkeypatch.setattr(cli, "run", lambda settings, symbols=None: captured.append(symbols) or 0)

    assert cli.main(["", "  "]) == 0
    assert captured == [[]]


def test_main_without_symbols_runs_full_batch(
    monkeypatch: pytest.MonkeyPatch, _no_dotenv: None
) -> None:
    captured: dict[str, object] = {}

    def _run(settings: Settings, symbols: list[str] | None = None) -> int:
        captured["symbols"] = symbols
        return 0

    monkeypatch.setattr(cli, "run", _run)

    assert cli.main([]) == 0
    assert captured == {"symbols": None}


def test_main_routes_html_extraction(monkeypatch: pytest.MonkeyPatch, _no_dotenv: None) -> None:
    calls: list[str] = []
    monkeypatch.setattr(cli, "extract_from_html", lambda settings, path: calls.append(path) or 0)

    assert cli.main(["--from-html", "saved.html"]) == 0
    assert calls == ["saved.html"]


def test_main_returns_two_on_configuration_error(
    capsys: pytest.CaptureFixture[str], _no_dotenv: None
) -> None:
    assert cli.main(["--delay-seconds", "-1"]) == 2
    assert "Configuration error" in capsys.readouterr().out


def test_main_returns_two_on_conflicting_flags(_no_dotenv: None) -> None:
    assert cli.main(["--scrape-page", "--from-table", "t.json"]) == 2
