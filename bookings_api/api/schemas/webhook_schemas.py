"""Pydantic schemas for webhooks."""

from datetime import datetime
from typing import Optional

from pydantic import HttpUrl

from bookings_api.api.schemas.base import CamelSchema
from bookings_api.webhooks.triggers import WebhookTriggerEvents


class WebhookCreate(CamelSchema):
    """Webhook creation request."""

    subscriber_url: HttpUrl
    event_triggers: list[WebhookTriggerEvents]
    event_type_id: Optional[int] = None
    payload_template: Optional[str] = None
    secret: Optional[str] = None
    active: bool = True


class WebhookUpdate(CamelSchema):
    """Webhook update request."""

    subscriber_url: Optional[HttpUrl] = None
    event_triggers: Optional[list[WebhookTriggerEvents]] = None
    event_type_id: Optional[int] = None
    payload_template: Optional[str] = None
    secret: Optional[str] = None
    active: Optional[bool] = None


class WebhookResponse(CamelSchema):
    """Webhook response; the secret is never returned."""

    id: int
    user_id: int
    event_type_id: Optional[int]
    subscriber_url: str
    payload_template: Optional[str]
    active: bool
    event_triggers: list[str]
    created_at: datetime
    updated_at: datetime
