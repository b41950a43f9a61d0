"""Typed errors raised by the CZDS client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class CZDSError(Exception):
    """Base error for every failure surfaced by the client."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class TransportFailure(CZDSError):
    """Network, auth or serialization failure while invoking the portal."""

    method: str = ""
    url: str = ""
    cause: Exception | None = None


@dataclass(eq=False)
class RemoteStatusError(TransportFailure):
    """The portal answered with a non-success status code."""

    status_code: int = 0
    response_body: str = ""


@dataclass(eq=False)
class NotFound(CZDSError):
    """The portal does not know the requested identifier."""

    resource: str = ""


@dataclass(eq=False)
class InvalidQuery(CZDSError):
    """The portal rejected the shape of a listing filter."""

    status_code: int = 0
    detail: str = ""


@dataclass(eq=False)
class Rejected(CZDSError):
    """The portal declined a new zone request."""

    status_code: int = 0
    detail: str = ""


@dataclass(eq=False)
class EmptyReport(CZDSError):
    """The report download succeeded but produced no bytes."""

    resource: str = ""


@dataclass(eq=False)
class BulkRequestError(CZDSError):
    """A request for every eligible TLD failed after the TLDs were selected."""

    tlds: tuple[str, ...] = field(default_factory=tuple)
    cause: CZDSError | None = None
