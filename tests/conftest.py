"""Shared test fixtures."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import httpx
import pytest

from notion_reminder.config import Config, default_config_path

CREATED = "2024-03-15T10:30:00Z"


def make_page(title: str | None = "Task", created: str | None = CREATED,
              priority: str | None = None, category: str | None = None,
              url: str = "https://www.notion.so/page-1") -> dict:
    """A page object shaped like the database query response."""
    props: dict = {}
    if title is not None:
        props["Name"] = {"type": "title", "title": [{"plain_text": title}]}
    if created is not None:
        props["Created At"] = {"type": "created_time", "created_time": created}
    if priority is not None:
        props["Priority"] = {"type": "select", "select": {"name": priority}}
    if category is not None:
        props["Category"] = {"type": "select", "select": {"name": category}}
    return {"object": "page", "id": "page-1", "url": url, "properties": props}


def write_config(home: Path, text: str) -> Path:
    p = default_config_path(home)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


class Sleeps(list):
    """Records requested sleeps instead of sleeping."""

    def __call__(self, seconds: float) -> None:
        self.append(seconds)


class FakeRunner:
    """Stands in for subprocess.run; pops return codes from a script."""

    def __init__(self, returncodes=(0,)):
        self.returncodes = list(returncodes)
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        code = self.returncodes.pop(0) if self.returncodes else 0
        return subprocess.CompletedProcess(cmd, code, stdout="", stderr="")


class FakeNotion:
    """httpx.MockTransport handler replaying scripted responses.

    Each script item is an int status (with ``pages`` as body for 200), a
    dict body (served with 200) or an exception instance to raise.
    """

    def __init__(self, script, pages=None):
        self.script = list(script)
        self.pages = pages or []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script.pop(0) if self.script else 200
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            return httpx.Response(200, json=item)
        if item == 200:
            return httpx.Response(200, json={"object": "list", "results": self.pages})
        return httpx.Response(item, text=json.dumps({"object": "error", "status": item}))

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture(autouse=True)
def no_real_sleep(monkeypatch):
    """Backoff waits must go through an injected sleeper."""
    def fail(seconds):
        raise AssertionError(f"real sleep of {seconds}s")

    monkeypatch.setattr("notion_reminder.retry.time.sleep", fail)


@pytest.fixture
def home(tmp_path):
    """A home directory with a valid config file."""
    write_config(tmp_path, "NOTION_TOKEN=tok\nDATABASE_ID=abc\n")
    return tmp_path


@pytest.fixture
def config():
    return Config(token="tok", database_id="abc")


@pytest.fixture
def sleeps():
    return Sleeps()
