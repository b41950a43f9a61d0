"""Unit tests for the httpx-backed transport."""

from __future__ import annotations

import io
import json

import httpx
import pytest

from adapters.http_client import CZDSTransport, build_client
from core.config import AppSettings
from core.domain.errors import EmptyReport, NotFound, RemoteStatusError, TransportFailure
from core.services import CZDSServices


def _settings(**overrides: object) -> AppSettings:
    values: dict[str, object] = {
        "base_url": "https://czds.test",
        "access_token": "secret-token",
        "user_agent": "czds-tests/1.0",
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


def _transport(handler) -> CZDSTransport:
    return CZDSTransport.from_settings(_settings(), transport=httpx.MockTransport(handler))


def test_build_client_sets_auth_and_user_agent() -> None:
    client = build_client(_settings())
    try:
        assert client.headers["Authorization"] == "Bearer secret-token"
        assert client.headers["User-Agent"] == "czds-tests/1.0"
        assert str(client.base_url).rstrip("/") == "https://czds.test"
    finally:
        client.close()


def test_build_client_without_token_sends_no_authorization() -> None:
    client = build_client(_settings(access_token=None))
    try:
        assert "Authorization" not in client.headers
    finally:
        client.close()


def test_call_sends_json_and_decodes_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"requests": [], "totalRequests": 0}, request=request)

    with _transport(handler) as transport:
        result = transport.call("POST", "/czds/requests/all", {"status": ""})

    assert result == {"requests": [], "totalRequests": 0}
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://czds.test/czds/requests/all"
    assert json.loads(seen[0].content) == {"status": ""}
    assert seen[0].headers["Authorization"] == "Bearer secret-token"


def test_empty_success_body_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"", request=request)

    with _transport(handler) as transport:
        assert transport.call("POST", "/czds/requests/create", {"tldNames": ["bank"]}) is None


def test_not_found_is_mapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="no such request", request=request)

    with _transport(handler) as transport:
        with pytest.raises(NotFound) as exc_info:
            transport.call("GET", "/czds/requests/missing")

    assert exc_info.value.resource == "https://czds.test/czds/requests/missing"


def test_other_status_codes_carry_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="invalid tcVersion", request=request)

    with _transport(handler) as transport:
        with pytest.raises(RemoteStatusError) as exc_info:
            transport.call("POST", "/czds/requests/create", {})

    error = exc_info.value
    assert error.status_code == 400
    assert error.response_body == "invalid tcVersion"
    assert error.method == "POST"
    assert isinstance(error, TransportFailure)


def test_connection_failure_is_a_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _transport(handler) as transport:
        with pytest.raises(TransportFailure) as exc_info:
            transport.call("GET", "/czds/tlds")

    assert isinstance(exc_info.value.cause, httpx.ConnectError)
    assert exc_info.value.url == "https://czds.test/czds/tlds"


def test_invalid_json_is_a_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>", request=request)

    with _transport(handler) as transport:
        with pytest.raises(TransportFailure):
            transport.call("GET", "/czds/terms/condition")


def test_stream_yields_raw_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"TLD,Status\nbank,Approved\n", request=request)

    with _transport(handler) as transport:
        with transport.stream("GET", "/czds/requests/report") as chunks:
            body = b"".join(chunks)

    assert body == b"TLD,Status\nbank,Approved\n"


def test_stream_error_status_is_raised_before_reading() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="expired token", request=request)

    with _transport(handler) as transport:
        with pytest.raises(RemoteStatusError) as exc_info:
            with transport.stream("GET", "/czds/requests/report"):
                pass

    assert exc_info.value.status_code == 401
    assert exc_info.value.response_body == "expired token"


def test_services_over_http_report_and_empty_report() -> None:
    bodies = iter([b"TLD,Status\n", b""])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=next(bodies), request=request)

    with _transport(handler) as transport:
        reports = CZDSServices.from_invoker(transport).reports
        sink = io.BytesIO()
        assert reports.export_all_requests_report(sink) == len(b"TLD,Status\n")
        with pytest.raises(EmptyReport):
            reports.export_all_requests_report(io.BytesIO())

    assert sink.getvalue() == b"TLD,Status\n"


def test_services_over_http_detail_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, request=request)

    with _transport(handler) as transport:
        catalog = CZDSServices.from_invoker(transport).catalog
        with pytest.raises(NotFound):
            catalog.get_request_detail("unknown")


def test_url_for_joins_base_and_path() -> None:
    with CZDSTransport.from_settings(_settings(base_url="https://czds.test/")) as transport:
        assert transport.url_for("/czds/tlds") == "https://czds.test/czds/tlds"
        assert transport.url_for("czds/tlds") == "https://czds.test/czds/tlds"
