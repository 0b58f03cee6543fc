"""Turn raw Notion pages into Reminder records.

Property values are semi-structured JSON. Every field is read with ``dig``,
a chain of kind-checked lookups that yields None on the first mismatch, so a
malformed page still produces a Reminder with defaulted fields.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from dateutil.parser import isoparse

from .models import UNTITLED, RawPage, Reminder

CREATED_FORMAT = "%b %d, %Y at %H:%M"
UNKNOWN_DATE = "Unknown date"

# Full RFC 3339 date-time: seconds and an offset are mandatory.
_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def dig(value: Any, *path: str | int) -> Any:
    """Follow ``path`` through nested dicts (str keys) and lists (int indexes)."""
    for step in path:
        if isinstance(step, str):
            if not isinstance(value, dict) or step not in value:
                return None
            value = value[step]
        else:
            if not isinstance(value, list) or not 0 <= step < len(value):
                return None
            value = value[step]
    return value


def dig_str(value: Any, *path: str | int) -> str | None:
    found = dig(value, *path)
    return found if isinstance(found, str) else None


def format_created(raw: str) -> str:
    """Format an RFC 3339 timestamp in its own offset, or "Unknown date"."""
    if not _RFC3339.fullmatch(raw):
        return UNKNOWN_DATE
    try:
        ts = isoparse(raw)
    except (ValueError, OverflowError):
        return UNKNOWN_DATE
    return ts.strftime(CREATED_FORMAT)


def _select_label(props: dict, name: str) -> str:
    option = dig_str(props, name, "select", "name")
    if option is None:
        return ""
    return f" [{name}: {option}]"


def to_reminder(page: RawPage) -> Reminder:
    props = page.properties

    title = dig_str(props, "Name", "title", 0, "plain_text") or UNTITLED

    created = ""
    created_raw = dig_str(props, "Created At", "created_time")
    if created_raw is not None:
        created = format_created(created_raw)

    return Reminder(
        title=title,
        created=created,
        priority=_select_label(props, "Priority"),
        category=_select_label(props, "Category"),
        url=page.url,
    )


def extract_all(pages: Iterable[RawPage]) -> list[Reminder]:
    """One Reminder per page, in query order."""
    return [to_reminder(p) for p in pages]
