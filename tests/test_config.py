"""Tests for settings and the user .env writer."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CZDS_BASE_URL", "https://czds.example")
    monkeypatch.setenv("CZDS_ACCESS_TOKEN", "abc")
    monkeypatch.setenv("CZDS_HTTP_TIMEOUT_SECONDS", "5")

    settings = AppSettings(_env_file=None)

    assert settings.base_url == "https://czds.example"
    assert settings.access_token == "abc"
    assert settings.http_timeout_seconds == 5.0


def test_settings_reject_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CZDS_HTTP_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_log_level_is_case_folded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CZDS_LOG_LEVEL", "info")

    assert AppSettings(_env_file=None).log_level == "INFO"


def test_settings_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CZDS_LOG_LEVEL", "VERBOSE")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_write_user_env_vars_merges_existing_values(tmp_path: Path) -> None:
    env_path = tmp_path / "czds" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nCZDS_BASE_URL='https://old.example'\nCZDS_DEFAULT_REASON=research\n", encoding="utf-8")

    write_user_env_vars({"CZDS_BASE_URL": "https://new.example", "CZDS_ACCESS_TOKEN": "t0k"}, env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "# CZDS client user config (.env)",
        "CZDS_ACCESS_TOKEN=t0k",
        "CZDS_BASE_URL=https://new.example",
        "CZDS_DEFAULT_REASON=research",
    ]
