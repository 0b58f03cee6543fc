"""notion-reminder — desktop notifications for pending Notion items."""

__version__ = "0.3.0"
