"""Bookings API with webhook notifications."""

__version__ = "0.1.0"
