"""notion-reminder CLI — check Notion for pending items and notify."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

import httpx

from . import __version__
from .config import load_config
from .errors import ConfigError, FetchError
from .extract import extract_all
from .notify import Runner, notify_idle, notify_summary
from .notion import fetch_pending
from .summary import summarize

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def run(
    config_path: str | Path | None = None,
    home: Path | None = None,
    client: httpx.Client | None = None,
    sleep: Callable[[float], None] | None = None,
    runner: Runner | None = None,
) -> int:
    """One check: config → fetch → extract → summarize → notify.

    Returns the process exit code. Notification failures never change it.
    """
    home = home or Path.home()

    try:
        config = load_config(config_path, home=home)
    except ConfigError as e:
        log.error("Error loading config: %s", e)
        return EXIT_FAILURE

    log.info("Checking Notion for pending reminders...")
    try:
        pages = fetch_pending(config, client=client, sleep=sleep)
    except FetchError as e:
        log.error("Error fetching reminders: %s", e)
        return EXIT_FAILURE

    reminders = extract_all(pages)
    summary = summarize(reminders, config.database_url)
    if summary is None:
        log.info("No pending reminders found!")
        notify_idle(home, sleep=sleep, runner=runner)
        return EXIT_OK

    log.info("Found %d pending reminder(s)", summary.count)
    for i, r in enumerate(reminders, 1):
        log.info("  %d. %s", i, r.one_line())

    notify_summary(summary, home, sleep=sleep, runner=runner)
    return EXIT_OK


def _setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not verbose:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-reminder",
        description="Show a desktop notification for unfinished items in a Notion database.",
    )
    parser.add_argument("--version", action="version",
                        version=f"notion-reminder {__version__}")
    parser.add_argument("--config", help="Config file (default: ~/.config/notion-reminder/config.conf)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    return run(config_path=args.config)


if __name__ == "__main__":
    sys.exit(main())
