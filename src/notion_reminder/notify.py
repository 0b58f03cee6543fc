"""Desktop notifications via notify-send, with retry."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from .config import icon_path
from .errors import NotifierError
from .retry import MAX_ATTEMPTS, NOTIFY_BACKOFF_BASE, retrying
from .summary import IDLE_MESSAGE, TITLE, Summary, Urgency

log = logging.getLogger(__name__)

NOTIFY_SEND = "notify-send"
APP_NAME = TITLE
IDLE_APP_NAME = f"{TITLE} - Complete"
FALLBACK_ICON = "dialog-information"
OPEN_ACTION = "default=Open in Notion"
INSTALL_HINT = (
    "Make sure libnotify is installed "
    "(sudo pacman -S libnotify / sudo apt install libnotify-bin)"
)

Runner = Callable[..., "subprocess.CompletedProcess"]


@dataclass
class NotifyResult:
    """Result of a notification attempt."""
    success: bool
    attempts: int
    message: str = ""


def resolve_icon(home: Path | None = None) -> str:
    """Custom logo if installed, else the stock information icon."""
    p = icon_path(home)
    if p.is_file():
        return str(p.resolve())
    return FALLBACK_ICON


def summary_args(summary: Summary, icon: str) -> list[str]:
    """Sticky notification (``-t 0``) with an open-in-Notion action hint."""
    args = [
        "-u", Urgency(summary.urgency).value,
        "-i", icon,
        "-a", APP_NAME,
        "-t", "0",
    ]
    if summary.database_url:
        args.extend(["-A", OPEN_ACTION])
    args.extend([summary.title, summary.message])
    return args


def idle_args(icon: str) -> list[str]:
    return [
        "-u", Urgency.LOW.value,
        "-i", icon,
        "-a", IDLE_APP_NAME,
        TITLE,
        IDLE_MESSAGE,
    ]


def _run_once(args: Sequence[str], runner: Runner) -> None:
    cmd = [NOTIFY_SEND, *args]
    try:
        result = runner(cmd, capture_output=True, text=True)
    except OSError as e:
        raise NotifierError(f"failed to run {NOTIFY_SEND}: {e}") from e
    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise NotifierError(
            f"{NOTIFY_SEND} exited with status {result.returncode}"
            + (f": {stderr}" if stderr else ""),
            returncode=result.returncode,
        )


def send(
    args: Sequence[str],
    sleep: Callable[[float], None] | None = None,
    runner: Runner | None = None,
) -> NotifyResult:
    """Run notify-send, retrying with 1, 2, 4, 8, 16 second waits.

    Never raises: after the last attempt the failure is logged and reported
    in the returned NotifyResult.
    """
    if runner is None:
        runner = subprocess.run
    retryer = retrying(
        NOTIFY_BACKOFF_BASE, attempts=MAX_ATTEMPTS, sleep=sleep, label=NOTIFY_SEND,
    )
    attempts = 0

    def attempt() -> None:
        nonlocal attempts
        attempts += 1
        _run_once(args, runner)

    try:
        retryer(attempt)
    except NotifierError as e:
        log.warning("Failed to show notification: %s", e)
        log.warning(INSTALL_HINT)
        return NotifyResult(False, attempts, str(e))
    return NotifyResult(True, attempts)


def notify_summary(
    summary: Summary,
    home: Path | None = None,
    sleep: Callable[[float], None] | None = None,
    runner: Runner | None = None,
) -> NotifyResult:
    result = send(summary_args(summary, resolve_icon(home)), sleep=sleep, runner=runner)
    if summary.database_url:
        log.info("Click notification to open: %s", summary.database_url)
    return result


def notify_idle(
    home: Path | None = None,
    sleep: Callable[[float], None] | None = None,
    runner: Runner | None = None,
) -> NotifyResult:
    return send(idle_args(resolve_icon(home)), sleep=sleep, runner=runner)
