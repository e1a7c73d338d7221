"""Pydantic schemas for bookings and event types."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from bookings_api.api.schemas.base import CamelSchema


class BookingCreate(CamelSchema):
    """Booking creation request."""

    title: str = Field(min_length=1, max_length=255)
    start_time: datetime
    end_time: datetime
    event_type_id: Optional[int] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _check_times(self) -> "BookingCreate":
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class BookingRead(CamelSchema):
    """Public booking representation."""

    id: int
    uid: str
    user_id: int
    event_type_id: Optional[int]
    title: str
    description: Optional[str]
    start_time: datetime
    end_time: datetime
    status: str


class BookingResponse(BaseModel):
    booking: BookingRead
    message: Optional[str] = None


class BookingsResponse(BaseModel):
    bookings: list[BookingRead]


class EventTypeCreate(CamelSchema):
    """Event type creation request."""

    title: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255)
    length: int = Field(gt=0)
    description: Optional[str] = None
    hidden: bool = False


class EventTypeRead(CamelSchema):
    """Public event type representation."""

    id: int
    user_id: int
    title: str
    slug: str
    length: int
    description: Optional[str]
    hidden: bool
