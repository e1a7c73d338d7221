"""Webhook notification system."""

from bookings_api.webhooks.dispatcher import WebhookDispatcher, send_payload
from bookings_api.webhooks.models import CalendarEvent, Subscriber
from bookings_api.webhooks.triggers import WebhookTriggerEvents

__all__ = ["CalendarEvent", "Subscriber", "WebhookDispatcher", "WebhookTriggerEvents", "send_payload"]
