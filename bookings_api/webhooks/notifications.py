"""Booking notifications sent to webhook subscribers."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.core.i18n import get_translation
from bookings_api.core.logging import get_logger
from bookings_api.storage.database.models import Booking
from bookings_api.storage.database.repository import EventTypeRepository
from bookings_api.webhooks.models import Subscriber
from bookings_api.webhooks.payload import build_calendar_event, with_booking_id
from bookings_api.webhooks.subscriptions import get_webhooks
from bookings_api.webhooks.triggers import WebhookTriggerEvents

logger = get_logger(__name__)


class BookingNotification(BaseModel):
    """Everything needed to fan a booking event out, detached from the session."""

    trigger_event: WebhookTriggerEvents
    subscribers: list[Subscriber]
    payload: dict[str, Any]


async def prepare_booking_created(
    session: AsyncSession,
    booking: Booking,
    user_id: int,
    locale: str = "en",
) -> BookingNotification:
    """Resolve the event type and subscribers of a new booking and build its payload.

    A missing event type is not an error; the payload type then falls
    back to the booking title.
    """
    trigger_event = WebhookTriggerEvents.BOOKING_CREATED

    event_type = None
    if booking.event_type_id is not None:
        event_type = await EventTypeRepository(session).get_for_user(booking.event_type_id, user_id)
        if event_type is None:
            logger.warning(
                "event_type_not_found",
                event_type_id=booking.event_type_id,
                booking_id=booking.id,
            )

    translate = await get_translation(locale, "common")
    event = build_calendar_event(booking, event_type, translate, locale)
    subscribers = await get_webhooks(session, user_id, booking.event_type_id, trigger_event)

    return BookingNotification(
        trigger_event=trigger_event,
        subscribers=subscribers,
        payload=with_booking_id(event, booking.id),
    )
