"""HTTP transport for the recorded race data API, wrapping httpx."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator

import httpx

from livetiming.exceptions import (
    ReplayAPIError,
    ReplayConnectionError,
    ReplayTimeoutError,
)

DEFAULT_BASE_URL = "http://localhost:3000/api"
DEFAULT_TIMEOUT = 30.0

JSONDocument = dict[str, Any] | list[Any]


class Resource(str, Enum):
    """Per-session documents served by the API."""

    RACE = "race"
    TRACK_STATUS = "track-status"
    TRACK_MAP = "track-map"


def session_path(resource: Resource, year: int, round_number: int) -> str:
    """Path of *resource* for one race weekend, e.g. ``/race/2024/3``."""
    if year < 1950 or round_number < 1:
        raise ValueError(f"Invalid session {year}/{round_number}")
    return f"/{Resource(resource).value}/{year}/{round_number}"


def _decode(response: httpx.Response) -> JSONDocument:
    if response.status_code >= 400:
        raise ReplayAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        document = response.json()
    except ValueError as exc:
        raise ReplayAPIError(
            status_code=response.status_code,
            message="Response body is not JSON",
        ) from exc
    if not isinstance(document, (dict, list)):
        raise ReplayAPIError(
            status_code=response.status_code,
            message=f"Expected a JSON object or array, got {type(document).__name__}",
        )
    return document


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except httpx.ConnectError as exc:
        raise ReplayConnectionError(str(exc)) from exc
    except httpx.TimeoutException as exc:
        raise ReplayTimeoutError(str(exc)) from exc


def _client_options(base_url: str, timeout: float) -> dict[str, Any]:
    return {
        "base_url": base_url,
        "timeout": timeout,
        "headers": {"Accept": "application/json"},
    }


class SyncTransport:
    """Synchronous transport using httpx.Client."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.Client(**_client_options(base_url, timeout))

    def fetch(self, resource: Resource, year: int, round_number: int) -> JSONDocument:
        """GET one session document and return the decoded JSON."""
        path = session_path(resource, year, round_number)
        with _translate_errors():
            response = self._client.get(path)
        return _decode(response)

    def close(self) -> None:
        self._client.close()


class AsyncTransport:
    """Asynchronous transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(**_client_options(base_url, timeout))

    async def fetch(self, resource: Resource, year: int, round_number: int) -> JSONDocument:
        path = session_path(resource, year, round_number)
        with _translate_errors():
            response = await self._client.get(path)
        return _decode(response)

    async def close(self) -> None:
        await self._client.aclose()
