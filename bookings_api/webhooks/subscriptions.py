"""Webhook subscriber lookup."""

from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.storage.database.repository import WebhookRepository
from bookings_api.webhooks.models import Subscriber
from bookings_api.webhooks.triggers import WebhookTriggerEvents


async def get_webhooks(
    session: AsyncSession,
    user_id: int,
    event_type_id: Optional[int],
    trigger_event: Union[WebhookTriggerEvents, str],
) -> list[Subscriber]:
    """Resolve the subscribers of a trigger.

    An empty list is a valid result.

    Args:
        session: Database session
        user_id: Owner of the webhooks
        event_type_id: Event type of the booking; webhooks bound to no event type always match
        trigger_event: Trigger kind

    Returns:
        Subscriber snapshots, in no particular order
    """
    trigger = getattr(trigger_event, "value", trigger_event)
    webhooks = await WebhookRepository(session).find_subscribers(user_id, event_type_id, trigger)
    return [Subscriber.model_validate(webhook) for webhook in webhooks]
