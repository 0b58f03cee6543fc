"""Error kinds raised by the reminder pipeline.

Config errors are fatal. Fetch errors are retried and become fatal once the
retry budget is spent. Notifier errors are retried and then only logged.
"""

from __future__ import annotations


class NotionReminderError(Exception):
    """Base class for every error the pipeline raises."""


# ── Config ──────────────────────────────────────────────────────────


class ConfigError(NotionReminderError):
    pass


class ConfigMissing(ConfigError):
    """Config file absent or unreadable."""


class ConfigIncomplete(ConfigError):
    """A required key is absent or empty."""


# ── Remote fetch ────────────────────────────────────────────────────


class FetchError(NotionReminderError):
    pass


class TransportError(FetchError):
    """Network I/O failed (connect, read, timeout)."""


class RemoteError(FetchError):
    """Notion answered with a non-200 status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Notion API error (status {status_code}): {body}")


class DecodeError(FetchError):
    """Response body is not the expected JSON envelope."""


# ── Notifier ────────────────────────────────────────────────────────


class NotifierError(NotionReminderError):
    """notify-send could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message)
