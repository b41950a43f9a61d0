"""Contract for invoking the CZDS portal.

Why Protocol:
- Structural typing lets the httpx adapter and in-memory test fakes be
  swapped freely.
- Signing, retries and timeouts belong to the implementation; the services
  only ask for "invoke this operation" and "stream these bytes".
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Iterator, Protocol, runtime_checkable


@runtime_checkable
class RemoteInvoker(Protocol):
    """Minimal capability the services consume.

    Rules:
    - `call` encodes `payload` as JSON and returns the decoded JSON body
      (`None` for an empty body).
    - `stream` returns the raw body without decoding it.
    - Failures are raised as `core.domain.errors.CZDSError` subclasses.
    """

    def call(self, method: str, path: str, payload: Any | None = None) -> Any:
        ...

    def stream(self, method: str, path: str) -> AbstractContextManager[Iterator[bytes]]:
        ...

    def url_for(self, path: str) -> str:
        ...
