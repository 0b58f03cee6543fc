"""Exponential backoff shared by the Notion fetch and the notifier.

Both loops allow six attempts. They differ only in the base wait: the fetch
starts at 2s (2, 4, 8, 16, 32), the notifier at 1s (1, 2, 4, 8, 16).
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .errors import NotionReminderError

log = logging.getLogger(__name__)

MAX_ATTEMPTS = 6
FETCH_BACKOFF_BASE = 2
NOTIFY_BACKOFF_BASE = 1


def backoff_schedule(base: float, attempts: int = MAX_ATTEMPTS) -> list[float]:
    """Waits inserted between consecutive attempts: base * 2**k."""
    return [base * 2 ** k for k in range(attempts - 1)]


def _log_before_sleep(label: str) -> Callable[[RetryCallState], None]:
    def hook(state: RetryCallState) -> None:
        exc = state.outcome.exception() if state.outcome else None
        wait = state.next_action.sleep if state.next_action else 0
        log.warning(
            "%s attempt %d failed: %s; retrying in %gs",
            label, state.attempt_number, exc, wait,
        )
    return hook


def retrying(
    base: float,
    *,
    attempts: int = MAX_ATTEMPTS,
    sleep: Callable[[float], None] | None = None,
    label: str = "operation",
) -> Retrying:
    """Build a Retrying that retries any NotionReminderError.

    The last error is re-raised once ``attempts`` is exhausted. ``sleep`` is
    looked up at call time so tests can patch ``time.sleep``.
    """
    return Retrying(
        sleep=sleep if sleep is not None else (lambda seconds: time.sleep(seconds)),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base, exp_base=2),
        retry=retry_if_exception_type(NotionReminderError),
        before_sleep=_log_before_sleep(label),
        reraise=True,
    )
