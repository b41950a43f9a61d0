"""In-memory fakes shared by the tests."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

BASE_URL = "https://czds.test"


class FakeInvoker:
    """In-memory `RemoteInvoker` recording every call.

    `responses` maps `(method, path)` to a JSON value, an exception to raise,
    or a zero-argument callable producing either.
    """

    def __init__(
        self,
        responses: dict[tuple[str, str], Any] | None = None,
        *,
        report_chunks: list[bytes] | None = None,
        report_error: Exception | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.report_chunks = list(report_chunks or [])
        self.report_error = report_error
        self.calls: list[tuple[str, str, Any]] = []

    def call(self, method: str, path: str, payload: Any | None = None) -> Any:
        self.calls.append((method, path, payload))
        result = self.responses[(method, path)]
        if callable(result):
            result = result()
        if isinstance(result, Exception):
            raise result
        return result

    @contextmanager
    def stream(self, method: str, path: str) -> Iterator[Iterator[bytes]]:
        self.calls.append((method, path, None))
        if self.report_error is not None:
            raise self.report_error
        yield iter(self.report_chunks)

    def url_for(self, path: str) -> str:
        return BASE_URL + path

    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]
