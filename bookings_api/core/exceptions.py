"""Custom exceptions for the bookings API."""

from typing import Optional


class BookingsApiException(Exception):
    """Base exception for all bookings API errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class WebhookException(BookingsApiException):
    """Exceptions related to webhook notifications."""

    pass


class WebhookDeliveryError(WebhookException):
    """A single delivery attempt to a subscriber failed."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        details: dict | None = None,
    ) -> None:
        """Initialize delivery error.

        Args:
            message: Error message
            url: Subscriber URL the attempt was sent to
            status_code: HTTP status code, if a response was received
            details: Additional error details
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class APIException(BookingsApiException):
    """API-related exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            message: Error message
            status_code: HTTP status code
            details: Additional error details
        """
        super().__init__(message, details)
        self.status_code = status_code


class NotFoundException(APIException):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found", details: dict | None = None) -> None:
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404, details=details)


class BadRequestException(APIException):
    """Bad request."""

    def __init__(self, message: str = "Bad request", details: dict | None = None) -> None:
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400, details=details)


class UnauthorizedException(APIException):
    """Unauthorized access."""

    def __init__(self, message: str = "Unauthorized", details: dict | None = None) -> None:
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401, details=details)
