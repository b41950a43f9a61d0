"""Payload fixtures shared by the CZDS client tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest


@pytest.fixture
def make_terms() -> Callable[..., dict[str, Any]]:
    def _make(version: str = "v3", content: str = "<p>Terms</p>") -> dict[str, Any]:
        return {
            "version": version,
            "content": content,
            "contentUrl": "https://czds.test/terms",
            "created": "2024-05-01T12:00:00Z",
        }

    return _make


@pytest.fixture
def make_tld() -> Callable[..., dict[str, Any]]:
    def _make(tld: str, status: str, *, sftp: bool = False) -> dict[str, Any]:
        return {"tld": tld, "ulable": tld, "currentStatus": status, "sftp": sftp}

    return _make


@pytest.fixture
def make_request() -> Callable[..., dict[str, Any]]:
    def _make(
        tld: str = "bank",
        status: str = "Approved",
        *,
        request_id: str = "req-1",
        expired: str = "1970-01-01T00:00:00Z",
    ) -> dict[str, Any]:
        return {
            "requestId": request_id,
            "tld": tld,
            "ulable": tld,
            "status": status,
            "created": "2024-01-02T03:04:05Z",
            "last_updated": "2024-02-03T04:05:06Z",
            "expired": expired,
            "sftp": False,
        }

    return _make


@pytest.fixture
def make_detail(make_tld: Callable[..., dict[str, Any]]) -> Callable[..., dict[str, Any]]:
    def _make(request_id: str = "req-1", **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "requestId": request_id,
            "tld": make_tld("bank", "approved"),
            "ftpips": ["192.0.2.10"],
            "status": "approved",
            "tcVersion": "v2",
            "created": "2024-01-02T03:04:05Z",
            "requestIp": "198.51.100.7",
            "reason": "research",
            "last_updated": "2024-02-03T04:05:06Z",
            "expired": "2025-02-03T04:05:06Z",
            "history": [
                {"timestamp": "2024-01-02T03:04:05Z", "action": "requested"},
                {"timestamp": "2024-02-03T04:05:06Z", "action": "approved"},
            ],
            "ftpDetails": {"privateDataError": True},
            "privateDataError": False,
        }
        payload.update(overrides)
        return payload

    return _make
