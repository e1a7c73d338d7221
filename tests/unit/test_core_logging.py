"""Tests for core logging module."""

import structlog

from bookings_api import __version__
from bookings_api.core.logging import add_app_context, bind_log_context, get_logger


def test_add_app_context() -> None:
    """Test application context is added to every entry."""
    event_dict = add_app_context(None, "info", {"event": "booking_created"})  # type: ignore[arg-type]

    assert event_dict["app"] == "bookings-api"
    assert event_dict["version"] == __version__
    assert "env" in event_dict


def test_bind_log_context() -> None:
    """Test request-scoped values are bound and can be reset."""
    bind_log_context(clear=True, user_id=7)
    bind_log_context(booking_id=42)

    assert structlog.contextvars.get_contextvars() == {"user_id": 7, "booking_id": 42}

    bind_log_context(clear=True, user_id=8)

    assert structlog.contextvars.get_contextvars() == {"user_id": 8}
    structlog.contextvars.clear_contextvars()


def test_get_logger() -> None:
    """Test logger exposes the standard level methods."""
    logger = get_logger(__name__)

    assert callable(logger.info)
    assert callable(logger.error)
