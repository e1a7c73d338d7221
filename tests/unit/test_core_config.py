"""Tests for core configuration module."""

import pytest

from bookings_api.core.config import Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that settings have correct default values."""
    for var in ["APP_NAME", "POSTGRES_HOST", "DATABASE_URL", "WEBHOOK_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)  # type: ignore

    assert settings.app_name == "bookings-api"
    assert settings.app_env == "development"
    assert settings.api_port == 8000
    assert settings.postgres_port == 5432
    assert settings.default_locale == "en"
    assert settings.webhook_timeout == 30.0


def test_async_database_url_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test async database URL contains correct driver."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)  # type: ignore
    assert "postgresql+asyncpg://" in settings.async_database_url


def test_explicit_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test DATABASE_URL overrides the assembled URL."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///bookings.db")
    settings = Settings(_env_file=None)  # type: ignore
    assert settings.async_database_url == "sqlite+aiosqlite:///bookings.db"


def test_webhook_timeout_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test webhook timeout parsing."""
    monkeypatch.setenv("WEBHOOK_TIMEOUT", "5")
    assert Settings(_env_file=None).webhook_timeout == 5.0  # type: ignore

    monkeypatch.setenv("WEBHOOK_TIMEOUT", "0")
    assert Settings(_env_file=None).webhook_timeout is None  # type: ignore

    monkeypatch.setenv("WEBHOOK_TIMEOUT", "")
    assert Settings(_env_file=None).webhook_timeout == 30.0  # type: ignore


def test_get_settings_cached() -> None:
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
