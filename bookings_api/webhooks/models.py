"""Webhook subscriber snapshots and notification payload shapes."""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Subscriber(BaseModel):
    """Read-only view of a webhook used for delivery."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    subscriber_url: str
    payload_template: Optional[str] = None
    secret: Optional[str] = None


class CamelModel(BaseModel):
    """Model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrganizerLanguage(CamelModel):
    locale: str = "en"
    # Never part of the wire payload
    translate: Optional[Callable[[str], str]] = Field(default=None, exclude=True)


class Person(CamelModel):
    name: str = ""
    email: str = ""
    time_zone: str = ""
    language: OrganizerLanguage = Field(default_factory=OrganizerLanguage)


class CalendarEvent(CamelModel):
    """Notification payload describing a booked calendar event."""

    type: str = ""
    title: str = ""
    description: str = ""
    additional_notes: str = ""
    custom_inputs: dict[str, Any] = Field(default_factory=dict)
    start_time: str = ""
    end_time: str = ""
    organizer: Person = Field(default_factory=Person)
    attendees: list[Person] = Field(default_factory=list)
    location: str = ""
    destination_calendar: Optional[dict[str, Any]] = None
    hide_calendar: bool = False
    uid: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
