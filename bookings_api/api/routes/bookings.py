"""Booking routes."""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.api.dependencies import get_current_user, get_webhook_dispatcher
from bookings_api.api.schemas.booking_schemas import (
    BookingCreate,
    BookingRead,
    BookingResponse,
    BookingsResponse,
)
from bookings_api.core.config import get_settings
from bookings_api.core.exceptions import BadRequestException, NotFoundException
from bookings_api.core.logging import bind_log_context, get_logger
from bookings_api.storage.database.base import get_db
from bookings_api.storage.database.models import User
from bookings_api.storage.database.repository import BookingRepository, EventTypeRepository
from bookings_api.webhooks.dispatcher import WebhookDispatcher
from bookings_api.webhooks.notifications import prepare_booking_created
from bookings_api.webhooks.triggers import WebhookTriggerEvents

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=BookingsResponse)
async def list_bookings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List all bookings of the current user."""
    bookings = await BookingRepository(db).list_for_user(current_user.id)
    return {"bookings": bookings}


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    background_tasks: BackgroundTasks,
    body: dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher),
) -> Any:
    """Create a booking and notify BOOKING_CREATED subscribers.

    The booking is committed before subscribers are resolved. Subscribers
    are notified after the response has been sent; a failure while
    preparing the notification is logged and does not fail the request.
    """
    try:
        booking_data = BookingCreate.model_validate(body)
    except ValidationError as e:
        logger.info("invalid_booking_body", user_id=current_user.id, errors=e.error_count())
        raise BadRequestException(
            "Bad request. Booking body is invalid.",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e

    user_id = current_user.id
    locale = current_user.locale or get_settings().default_locale

    if booking_data.event_type_id is not None:
        event_type = await EventTypeRepository(db).get_for_user(booking_data.event_type_id, user_id)
        if event_type is None:
            raise BadRequestException(f"Event type with id: {booking_data.event_type_id} not found")

    booking = await BookingRepository(db).create(user_id=user_id, **booking_data.model_dump())
    await db.commit()
    created = BookingRead.model_validate(booking)
    bind_log_context(booking_id=created.id)

    trigger_event = WebhookTriggerEvents.BOOKING_CREATED
    try:
        notification = await prepare_booking_created(db, booking, user_id, locale)
    except Exception as e:
        dispatcher.logger.error(
            "webhook_preparation_failed",
            trigger_event=trigger_event.value,
            booking_id=created.id,
            error=str(e),
        )
    else:
        background_tasks.add_task(
            dispatcher.dispatch,
            notification.trigger_event,
            notification.subscribers,
            notification.payload,
        )
    finally:
        # Release the connection before the fan-out runs
        await db.close()

    return {"booking": created, "message": "Booking created successfully"}


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get booking by ID."""
    booking = await BookingRepository(db).get_for_user(booking_id, current_user.id)
    if booking is None:
        raise NotFoundException(f"Booking with id: {booking_id} not found")
    return {"booking": booking}
