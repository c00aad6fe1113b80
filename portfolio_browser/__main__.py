"""Entry point for the Portfolio Browser CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .core.errors import ProjectDirectoryError
from .core.projects import load_project_directory
from .core.search import process_input
from .log import logger, setup_logging
from .preferences import load_preferences
from .theme import TEXTUAL_THEMES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Portfolio Browser")
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"portfolio-browser {__version__}",
    )
    parser.add_argument(
        "--projects",
        "-p",
        type=Path,
        help="YAML project directory (default: built-in projects)",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(TEXTUAL_THEMES),
        help="Color theme for this run",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Simulated page load time in seconds",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write the browser log to this file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at debug level",
    )
    parser.add_argument(
        "urls",
        nargs="*",
        help="Addresses or search terms to open, one tab each",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the Portfolio Browser."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)

    prefs = load_preferences()
    if args.theme:
        prefs.display.theme = args.theme
    if args.delay is not None:
        prefs.browser.loading_delay = max(0.0, args.delay)

    directory = None
    projects_path = args.projects or prefs.projects_path
    if projects_path is not None:
        try:
            directory = load_project_directory(projects_path)
        except ProjectDirectoryError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(2)

    initial_urls = [process_input(u) for u in args.urls] or None

    try:
        from portfolio_browser.app import run_app

        run_app(initial_urls=initial_urls, directory=directory, prefs=prefs)
    except (KeyboardInterrupt, SystemExit):
        pass
    except Exception:
        logger.debug("Fatal error in portfolio-browser", exc_info=True)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
