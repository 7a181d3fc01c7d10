"""Command-line interface for the logo downloader."""

from __future__ import annotations

import argparse
import sys

from coinlogos.config import Settings
from coinlogos.runtime import extract_from_html, extract_from_table, run, scrape_page
from coinlogos.symbols import explicit_symbols


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        prog="coinlogos",
        description="Download logos for active perpetual markets",
    )
    parser.add_argument(
        "symbols",
        nargs="*",
        help="Symbols to (re)download; omit to download every missing logo",
    )
    parser.add_argument(
        "--scrape-page",
        action="store_true",
        help="Open the trading page in a browser and save the market table images",
    )
    parser.add_argument("--from-table", type=str, help="Save images from a table-data.json file")
    parser.add_argument("--from-html", type=str, help="Save images embedded in a saved HTML page")
    parser.add_argument("--output-dir", type=str, help="Logo output directory")
    parser.add_argument("--images-dir", type=str, help="PNG output directory for table images")
    parser.add_argument("--delay-seconds", type=float, help="Pause between logo downloads")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Console log level",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    return parser


def selected_action(args: argparse.Namespace) -> str:
    """Return which of the mutually exclusive actions the arguments request."""
    actions = []
    if args.scrape_page:
        actions.append("scrape")
    if args.from_table:
        actions.append("table")
    if args.from_html:
        actions.append("html")
    if len(actions) > 1:
        raise ValueError("Use only one action flag: --scrape-page, --from-table or --from-html")
    if actions and args.symbols:
        raise ValueError(
            "Symbols cannot be combined with --scrape-page, --from-table or --from-html"
        )
    return actions[0] if actions else "download"


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.images_dir:
        overrides["images_dir"] = args.images_dir
    if args.delay_seconds is not None:
        overrides["delay_seconds"] = args.delay_seconds
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.headed:
        overrides["headless"] = False
    return settings.with_overrides(**overrides)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        action = selected_action(args)
        settings = apply_cli_overrides(Settings.from_env(), args)
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2
    if action == "scrape":
        return scrape_page(settings)
    if action == "table":
        return extract_from_table(settings, args.from_table)
    if action == "html":
        return extract_from_html(settings, args.from_html)
    if args.symbols:
        return run(settings, explicit_symbols(args.symbols))
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
