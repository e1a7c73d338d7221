"""Database repository layer."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.core.logging import get_logger
from bookings_api.storage.database.models import ApiKey, Booking, EventType, Webhook

logger = get_logger(__name__)


class BookingRepository:
    """Repository for Booking model."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, **kwargs: Any) -> Booking:
        """Create new booking."""
        booking = Booking(**kwargs)
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        logger.info("booking_created", booking_id=booking.id, user_id=booking.user_id)
        return booking

    async def get_for_user(self, booking_id: int, user_id: int) -> Optional[Booking]:
        """Get booking by ID if owned by the user."""
        result = await self.session.execute(
            select(Booking).where(Booking.id == booking_id, Booking.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[Booking]:
        """List all bookings of a user, newest start first."""
        result = await self.session.execute(
            select(Booking).where(Booking.user_id == user_id).order_by(Booking.start_time.desc())
        )
        return list(result.scalars().all())


class EventTypeRepository:
    """Repository for EventType model."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, **kwargs: Any) -> EventType:
        """Create new event type."""
        event_type = EventType(**kwargs)
        self.session.add(event_type)
        await self.session.flush()
        await self.session.refresh(event_type)
        logger.info("event_type_created", event_type_id=event_type.id, user_id=event_type.user_id)
        return event_type

    async def get_by_id(self, event_type_id: int) -> Optional[EventType]:
        """Get event type by ID."""
        result = await self.session.execute(select(EventType).where(EventType.id == event_type_id))
        return result.scalar_one_or_none()

    async def get_for_user(self, event_type_id: int, user_id: int) -> Optional[EventType]:
        """Get event type by ID if owned by the user."""
        result = await self.session.execute(
            select(EventType).where(EventType.id == event_type_id, EventType.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[EventType]:
        """List event types of a user."""
        result = await self.session.execute(
            select(EventType).where(EventType.user_id == user_id).order_by(EventType.id)
        )
        return list(result.scalars().all())


class WebhookRepository:
    """Repository for Webhook model."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, **kwargs: Any) -> Webhook:
        """Create new webhook."""
        webhook = Webhook(**kwargs)
        self.session.add(webhook)
        await self.session.flush()
        await self.session.refresh(webhook)
        logger.info("webhook_created", webhook_id=webhook.id, user_id=webhook.user_id)
        return webhook

    async def get_for_user(self, webhook_id: int, user_id: int) -> Optional[Webhook]:
        """Get webhook by ID if owned by the user."""
        result = await self.session.execute(
            select(Webhook).where(Webhook.id == webhook_id, Webhook.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[Webhook]:
        """List webhooks of a user."""
        result = await self.session.execute(
            select(Webhook).where(Webhook.user_id == user_id).order_by(Webhook.id)
        )
        return list(result.scalars().all())

    async def find_subscribers(
        self,
        user_id: int,
        event_type_id: Optional[int],
        trigger_event: str,
    ) -> list[Webhook]:
        """Find active webhooks subscribed to a trigger.

        Webhooks without an event type match every event type.

        Args:
            user_id: Owner of the webhooks
            event_type_id: Event type of the triggering booking, if any
            trigger_event: Trigger name

        Returns:
            Matching webhooks, in no particular order
        """
        event_type_filter = Webhook.event_type_id.is_(None)
        if event_type_id is not None:
            event_type_filter = or_(event_type_filter, Webhook.event_type_id == event_type_id)

        result = await self.session.execute(
            select(Webhook).where(
                Webhook.user_id == user_id,
                Webhook.active.is_(True),
                event_type_filter,
            )
        )
        # Trigger lists are JSON, filtered here to stay dialect independent
        return [w for w in result.scalars().all() if trigger_event in (w.event_triggers or [])]


class ApiKeyRepository:
    """Repository for ApiKey model."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user_id: int, note: Optional[str] = None) -> tuple[ApiKey, str]:
        """Create a new API key.

        Returns:
            The stored key and the raw key, which is not persisted
        """
        raw_key = ApiKey.generate_key()
        api_key = ApiKey(user_id=user_id, note=note, hashed_key=ApiKey.hash_key(raw_key))
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        logger.info("api_key_created", api_key_id=api_key.id, user_id=user_id)
        return api_key, raw_key

    async def get_by_raw_key(self, raw_key: str) -> Optional[ApiKey]:
        """Look up an API key by its raw value."""
        result = await self.session.execute(
            select(ApiKey).where(ApiKey.hashed_key == ApiKey.hash_key(raw_key))
        )
        return result.scalar_one_or_none()

    async def touch(self, api_key: ApiKey) -> None:
        """Record key usage."""
        api_key.last_used_at = datetime.now(timezone.utc)
        await self.session.flush()
