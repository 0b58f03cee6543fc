"""Summary message and urgency selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .models import Reminder

TITLE = "Notion Reminders"
IDLE_MESSAGE = "All caught up! No pending reminders."
_FOOTER = "\n\nClick to open in Notion."
_CRITICAL_ABOVE = 3


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


@dataclass
class Summary:
    count: int
    message: str
    urgency: Urgency
    database_url: str
    title: str = TITLE


def urgency_for(count: int) -> Urgency:
    if count <= 0:
        return Urgency.LOW
    if count > _CRITICAL_ABOVE:
        return Urgency.CRITICAL
    return Urgency.NORMAL


def summary_message(count: int) -> str:
    if count == 1:
        return "You have 1 pending reminder." + _FOOTER
    return f"You have {count} pending reminders." + _FOOTER


def summarize(reminders: Sequence[Reminder], database_url: str) -> Summary | None:
    """Build the notification summary. None means nothing is pending."""
    n = len(reminders)
    if n == 0:
        return None
    return Summary(
        count=n,
        message=summary_message(n),
        urgency=urgency_for(n),
        database_url=database_url,
    )
