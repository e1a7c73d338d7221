"""Tests for core exceptions module."""

from bookings_api.core.exceptions import (
    APIException,
    BadRequestException,
    BookingsApiException,
    NotFoundException,
    UnauthorizedException,
    WebhookDeliveryError,
    WebhookException,
)


def test_base_exception() -> None:
    """Test base BookingsApiException."""
    exc = BookingsApiException("Test error", details={"key": "value"})

    assert str(exc) == "Test error"
    assert exc.message == "Test error"
    assert exc.details == {"key": "value"}


def test_base_exception_no_details() -> None:
    """Test base exception without details."""
    exc = BookingsApiException("Test error")

    assert exc.details == {}


def test_webhook_delivery_error() -> None:
    """Test delivery error carries destination and status."""
    exc = WebhookDeliveryError("HTTP 500: boom", url="https://a.test", status_code=500)

    assert isinstance(exc, WebhookException)
    assert isinstance(exc, BookingsApiException)
    assert exc.url == "https://a.test"
    assert exc.status_code == 500
    assert exc.message == "HTTP 500: boom"


def test_webhook_delivery_error_without_response() -> None:
    """Test delivery error for network failures."""
    exc = WebhookDeliveryError("Request error: refused", url="https://a.test")

    assert exc.status_code is None


def test_api_exception_with_status() -> None:
    """Test API exception with status code."""
    exc = APIException("API error", status_code=500, details={"error": "internal"})

    assert exc.message == "API error"
    assert exc.status_code == 500
    assert exc.details == {"error": "internal"}


def test_not_found_exception() -> None:
    """Test NotFoundException defaults."""
    exc = NotFoundException()

    assert exc.status_code == 404
    assert exc.message == "Resource not found"


def test_bad_request_exception() -> None:
    """Test BadRequestException defaults."""
    exc = BadRequestException()

    assert exc.status_code == 400
    assert exc.message == "Bad request"


def test_unauthorized_exception() -> None:
    """Test UnauthorizedException defaults."""
    exc = UnauthorizedException()

    assert exc.status_code == 401
    assert exc.message == "Unauthorized"
