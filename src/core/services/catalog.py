"""Read-only CZDS operations.

Each method maps one remote call onto a typed result. Nothing is cached:
every call is a fresh fetch, which matters most for the terms version.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import InvalidQuery, RemoteStatusError, TransportFailure
from core.domain.models import (
    FilterQuery,
    RequestDetail,
    RequestList,
    TermsAndConditions,
    TLDAvailability,
)
from core.interfaces.transport import RemoteInvoker

logger = logging.getLogger(__name__)

REQUESTS_PATH = "/czds/requests/all"
REQUEST_DETAIL_PATH = "/czds/requests/{request_id}"
TLDS_PATH = "/czds/tlds"
TERMS_PATH = "/czds/terms/condition"

_INVALID_QUERY_STATUS_CODES = frozenset({400, 422})

T = TypeVar("T")

_REQUEST_LIST = TypeAdapter(RequestList)
_REQUEST_DETAIL = TypeAdapter(RequestDetail)
_TLD_LIST = TypeAdapter(list[TLDAvailability])
_TERMS = TypeAdapter(TermsAndConditions)


def _decode(adapter: TypeAdapter[T], raw: Any, *, method: str, url: str) -> T:
    try:
        return adapter.validate_python(raw)
    except ValidationError as exc:
        raise TransportFailure(
            f"Unexpected response shape from {url}",
            method=method,
            url=url,
            cause=exc,
        ) from exc


class CatalogReader:
    """Request listings, request detail, TLD availability and terms."""

    def __init__(self, invoker: RemoteInvoker) -> None:
        self._invoker = invoker

    def list_requests(self, query: FilterQuery | None = None) -> RequestList:
        query = query or FilterQuery()
        logger.debug("Listing requests with %s", query.to_payload())
        try:
            raw = self._invoker.call("POST", REQUESTS_PATH, query.to_payload())
        except RemoteStatusError as exc:
            if exc.status_code not in _INVALID_QUERY_STATUS_CODES:
                raise
            raise InvalidQuery(
                f"Request filter rejected: {exc.response_body or exc.message}",
                status_code=exc.status_code,
                detail=exc.response_body,
            ) from exc
        return _decode(
            _REQUEST_LIST,
            raw if raw is not None else {},
            method="POST",
            url=self._invoker.url_for(REQUESTS_PATH),
        )

    def get_request_detail(self, request_id: str) -> RequestDetail:
        path = REQUEST_DETAIL_PATH.format(request_id=request_id)
        logger.debug("Fetching request %s", request_id)
        raw = self._invoker.call("GET", path)
        return _decode(_REQUEST_DETAIL, raw, method="GET", url=self._invoker.url_for(path))

    def list_tld_availability(self) -> list[TLDAvailability]:
        raw = self._invoker.call("GET", TLDS_PATH)
        tlds = _decode(
            _TLD_LIST,
            raw if raw is not None else [],
            method="GET",
            url=self._invoker.url_for(TLDS_PATH),
        )
        logger.debug("Portal reported %d TLDs", len(tlds))
        return tlds

    def get_current_terms(self) -> TermsAndConditions:
        """Fetch the live terms; the version must not be reused across submissions."""

        raw = self._invoker.call("GET", TERMS_PATH)
        terms = _decode(_TERMS, raw, method="GET", url=self._invoker.url_for(TERMS_PATH))
        logger.debug("Current terms version is %s", terms.version)
        return terms
