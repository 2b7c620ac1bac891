"""Shared GET-and-decode helper for the public data APIs."""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import requests

from livedash.errors import DecodeError, NetworkError

log = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


class SessionPerThread:
    """
    Hands each worker thread its own requests.Session.

    Requests run through asyncio.to_thread, and a timer refresh can overlap a
    user refresh, so a Session is never shared between threads. An injected
    session (tests, custom adapters) is used as-is from every thread.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._injected = session
        self._local = threading.local()
        if session is not None:
            session.headers.update(JSON_HEADERS)

    def get(self) -> requests.Session:
        if self._injected is not None:
            return self._injected
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(JSON_HEADERS)
            self._local.session = session
        return session


def get_json(
    session: requests.Session,
    url: str,
    params: Optional[dict] = None,
    timeout: float = 10,
) -> Any:
    """
    Perform a GET request and decode the JSON body.

    No retries: any failure is converted once and raised.

    Raises:
        NetworkError: connection failure, timeout or non-2xx status
        DecodeError: body is not valid JSON
    """
    log.debug(f"GET {url} params={params}")

    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        log.error(f"HTTP error {status} from {url}: {e}")
        raise NetworkError(f"HTTP {status} from {url}", url=url, status_code=status) from e
    except requests.exceptions.RequestException as e:
        log.error(f"Request to {url} failed: {e}")
        raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

    try:
        return resp.json()
    except ValueError as e:
        log.error(f"Invalid JSON from {url}: {e}")
        raise DecodeError(f"Invalid JSON from {url}") from e
