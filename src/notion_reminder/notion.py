"""Notion API client — queries the reminder database for unfinished pages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import httpx
from pydantic import ValidationError

from .errors import DecodeError, RemoteError, TransportError
from .models import QueryResponse, RawPage
from .retry import FETCH_BACKOFF_BASE, MAX_ATTEMPTS, retrying

if TYPE_CHECKING:
    from .config import Config

log = logging.getLogger(__name__)

NOTION_VERSION = "2022-06-28"
TIMEOUT = 10.0
_BODY_PREVIEW = 500

# Unchecked "Status" checkbox, newest first.
PENDING_QUERY = {
    "filter": {"property": "Status", "checkbox": {"equals": False}},
    "sorts": [{"property": "Created At", "direction": "descending"}],
}


def _headers(config: Config) -> dict:
    return {
        "Authorization": f"Bearer {config.token}",
        "Content-Type": "application/json",
        "Notion-Version": NOTION_VERSION,
    }


def query_pending(config: Config, client: httpx.Client | None = None) -> list[RawPage]:
    """Issue one query for unfinished pages. No retries.

    Raises TransportError, RemoteError or DecodeError.
    """
    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=httpx.Timeout(TIMEOUT))
    try:
        resp = client.post(
            config.query_url, json=PENDING_QUERY, headers=_headers(config),
            timeout=TIMEOUT,
        )
    except httpx.HTTPError as e:
        raise TransportError(f"failed to send request: {e}") from e
    finally:
        if own_client:
            client.close()

    if resp.status_code != httpx.codes.OK:
        raise RemoteError(resp.status_code, resp.text[:_BODY_PREVIEW])

    try:
        data = resp.json()
    except ValueError as e:
        raise DecodeError(f"failed to parse response: {e}") from e
    try:
        envelope = QueryResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"unexpected response shape: {e}") from e

    log.debug("Notion returned %d page(s)", len(envelope.results))
    return envelope.results


def fetch_pending(
    config: Config,
    client: httpx.Client | None = None,
    sleep: Callable[[float], None] | None = None,
) -> list[RawPage]:
    """query_pending with the fetch backoff (2, 4, 8, 16, 32 seconds).

    Re-raises the last error after six failed attempts.
    """
    retryer = retrying(
        FETCH_BACKOFF_BASE, attempts=MAX_ATTEMPTS, sleep=sleep, label="Notion query",
    )
    return retryer(query_pending, config, client)
