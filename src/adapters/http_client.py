"""httpx-backed implementation of `RemoteInvoker`.

Why a wrapper:
- Standardises timeouts, headers and the bearer token for every call.
- Maps httpx failures onto the client's typed errors in one place.
- Easy to test: an `httpx.MockTransport` can be injected.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import httpx

from core.config import AppSettings
from core.domain.errors import NotFound, RemoteStatusError, TransportFailure

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with the portal's defaults.

    Why a builder:
    - Centralises timeouts/headers so every call behaves the same.
    - Lets tests inject a transport without touching the network.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.access_token:
        headers["Authorization"] = f"Bearer {settings.access_token}"
    return httpx.Client(
        base_url=settings.base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _iter_chunks(response: httpx.Response, method: str, url: str) -> Iterator[bytes]:
    try:
        yield from response.iter_bytes()
    except httpx.HTTPError as exc:
        raise TransportFailure(
            f"{method} {url} failed while streaming: {exc}",
            method=method,
            url=url,
            cause=exc,
        ) from exc


class CZDSTransport:
    """Invokes portal operations over a shared `httpx.Client`."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "CZDSTransport":
        return cls(build_client(settings, transport=transport))

    def __enter__(self) -> "CZDSTransport":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def url_for(self, path: str) -> str:
        return str(self._client.base_url).rstrip("/") + "/" + path.lstrip("/")

    def call(self, method: str, path: str, payload: Any | None = None) -> Any:
        url = self.url_for(path)
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            raise TransportFailure(
                f"{method} {url} failed: {exc}",
                method=method,
                url=url,
                cause=exc,
            ) from exc

        self._raise_for_status(method, url, response)
        if not response.content.strip():
            return None
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise TransportFailure(
                f"{method} {url} returned invalid JSON",
                method=method,
                url=url,
                cause=exc,
            ) from exc

    @contextmanager
    def stream(self, method: str, path: str) -> Iterator[Iterator[bytes]]:
        url = self.url_for(path)
        logger.debug("%s %s (streamed)", method, url)
        try:
            with self._client.stream(method, path, headers={"Accept": "*/*"}) as response:
                if not response.is_success:
                    response.read()
                self._raise_for_status(method, url, response)
                yield _iter_chunks(response, method, url)
        except httpx.HTTPError as exc:
            raise TransportFailure(
                f"{method} {url} failed: {exc}",
                method=method,
                url=url,
                cause=exc,
            ) from exc

    @staticmethod
    def _raise_for_status(method: str, url: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        body = response.text
        if response.status_code == 404:
            raise NotFound(f"{url} not found", resource=url)
        raise RemoteStatusError(
            f"{method} {url} returned HTTP {response.status_code}",
            method=method,
            url=url,
            status_code=response.status_code,
            response_body=body,
        )
