"""Event type routes."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.api.dependencies import get_current_user
from bookings_api.api.schemas.booking_schemas import EventTypeCreate, EventTypeRead
from bookings_api.core.exceptions import NotFoundException
from bookings_api.storage.database.base import get_db
from bookings_api.storage.database.models import User
from bookings_api.storage.database.repository import EventTypeRepository

router = APIRouter(prefix="/event-types", tags=["event-types"])


@router.get("", response_model=list[EventTypeRead])
async def list_event_types(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List event types of the current user."""
    return await EventTypeRepository(db).list_for_user(current_user.id)


@router.post("", response_model=EventTypeRead, status_code=201)
async def create_event_type(
    event_type_data: EventTypeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Create new event type."""
    return await EventTypeRepository(db).create(user_id=current_user.id, **event_type_data.model_dump())


@router.get("/{event_type_id}", response_model=EventTypeRead)
async def get_event_type(
    event_type_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get event type by ID."""
    event_type = await EventTypeRepository(db).get_for_user(event_type_id, current_user.id)
    if event_type is None:
        raise NotFoundException("Event type not found")
    return event_type
