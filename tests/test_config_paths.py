import os
from datetime import timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from routinely_core.config import Settings, parse_origins


def test_settings_repo_root_is_directory():
    s = Settings()
    root = s.repo_root()
    assert os.path.isdir(root)


def test_default_database_url_under_data_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("ROUTINELY_DB_URL", raising=False)
    monkeypatch.delenv("ROUTINELY_DATABASE_URL", raising=False)
    s = Settings()
    monkeypatch.setattr(s, 'repo_root', lambda: str(tmp_path))
    assert s.effective_database_url() == f"sqlite:///{tmp_path / 'data' / 'routinely.db'}"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ROUTINELY_DB_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "3")
    monkeypatch.setenv("ROUTINELY_ALLOW_SIGNUP", "no")
    s = Settings()
    assert s.effective_database_url() == "sqlite:///elsewhere.db"
    assert s.token_expire_hours == 3
    assert s.allow_signup is False


def test_bad_int_falls_back(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "soon")
    assert Settings().token_expire_hours == 12


def test_parse_origins():
    assert parse_origins("*") == ["*"]
    assert parse_origins("http://a, http://b ,") == ["http://a", "http://b"]
    assert parse_origins("") == []


def test_timezone(monkeypatch):
    try:
        ZoneInfo("UTC")
    except ZoneInfoNotFoundError:
        pytest.skip("no tz database available")
    monkeypatch.setenv("ROUTINELY_TIMEZONE", "UTC")
    assert Settings().tzinfo().utcoffset(None) == timezone.utc.utcoffset(None)
    monkeypatch.setenv("ROUTINELY_TIMEZONE", "Not/AZone")
    assert Settings().tzinfo() is None
    monkeypatch.delenv("ROUTINELY_TIMEZONE")
    assert Settings().tzinfo() is None
