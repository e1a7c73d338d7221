"""Notification payload construction."""

from datetime import datetime, timezone
from typing import Any, Optional

from bookings_api.core.i18n import Translate
from bookings_api.storage.database.models import Booking, EventType
from bookings_api.webhooks.models import CalendarEvent, OrganizerLanguage, Person


def to_iso(value: Optional[datetime]) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds, e.g. 1970-01-01T17:00:00.000Z.

    Naive datetimes are treated as UTC.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def build_calendar_event(
    booking: Booking,
    event_type: Optional[EventType],
    translate: Optional[Translate] = None,
    locale: str = "en",
) -> CalendarEvent:
    """Map a booking and its event type to the notification payload.

    Pure function. Absent fields fall back to empty values and the event
    type title falls back to the booking title.

    Args:
        booking: The triggering booking
        event_type: Resolved event type, or None if it could not be found
        translate: Translate function for the organizer language
        locale: Locale of the translate function

    Returns:
        CalendarEvent payload
    """
    title = booking.title or ""
    event_type_title = getattr(event_type, "title", None) if event_type is not None else None

    return CalendarEvent(
        type=event_type_title or title,
        title=title,
        description="",
        additional_notes="",
        custom_inputs={},
        start_time=to_iso(booking.start_time),
        end_time=to_iso(booking.end_time),
        organizer=Person(
            name="",
            email="",
            time_zone="",
            language=OrganizerLanguage(locale=locale, translate=translate),
        ),
        attendees=[],
        location="",
        destination_calendar=None,
        hide_calendar=False,
        uid=booking.uid or "",
        metadata={},
    )


def with_booking_id(event: CalendarEvent, booking_id: int) -> dict[str, Any]:
    """Serialize a payload and merge the triggering booking id into it."""
    data = event.model_dump(mode="json", by_alias=True)
    data["bookingId"] = booking_id
    return data
