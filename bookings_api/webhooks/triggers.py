"""Webhook trigger events."""

from enum import Enum


class WebhookTriggerEvents(str, Enum):
    """Domain occurrences a webhook can subscribe to."""

    BOOKING_CREATED = "BOOKING_CREATED"
    BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"
