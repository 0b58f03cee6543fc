"""Configuration loading — reads the per-user KEY=VALUE config file."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigIncomplete, ConfigMissing

API_BASE = "https://api.notion.com/v1"
WEB_BASE = "https://www.notion.so"

# Relative to the user's home directory.
_CONFIG_PATH = Path(".config") / "notion-reminder" / "config.conf"
_ICON_PATH = Path(".local") / "share" / "notion-reminder" / "logo.svg"

# File key -> Config field
_KEYS = {
    "NOTION_TOKEN": "token",
    "DATABASE_ID": "database_id",
}


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1)
    database_id: str = Field(min_length=1)
    path: Path | None = Field(default=None, exclude=True)

    @property
    def database_url(self) -> str:
        return f"{WEB_BASE}/{self.database_id}"

    @property
    def query_url(self) -> str:
        return f"{API_BASE}/databases/{self.database_id}/query"


def default_config_path(home: Path | None = None) -> Path:
    return (home or Path.home()) / _CONFIG_PATH


def icon_path(home: Path | None = None) -> Path:
    return (home or Path.home()) / _ICON_PATH


def parse_config_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into a dict.

    Blank lines, ``#`` comments and lines without ``=`` are skipped. The split
    happens on the first ``=`` so values may contain ``=`` themselves. Later
    duplicates win.
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values[key.strip()] = value.strip()
    return values


def load_config(config_path: str | Path | None = None, home: Path | None = None) -> Config:
    """Load and validate the config file.

    Raises ConfigMissing when the file can't be read and ConfigIncomplete
    when NOTION_TOKEN or DATABASE_ID is absent or empty.
    """
    if config_path:
        p = Path(config_path).expanduser()
    else:
        p = default_config_path(home)

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigMissing(
            f"config file not found at {p}. Please run setup script first"
        ) from e

    raw = parse_config_text(text)
    fields = {field: raw.get(key, "") for key, field in _KEYS.items()}
    missing = [key for key, field in _KEYS.items() if not fields[field]]
    if missing:
        raise ConfigIncomplete(
            f"{' and '.join(missing)} must be set in config file {p}"
        )

    return Config(path=p, **fields)
