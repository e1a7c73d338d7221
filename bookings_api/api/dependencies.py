"""Authentication and service dependencies for FastAPI."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.core.exceptions import UnauthorizedException
from bookings_api.core.logging import bind_log_context
from bookings_api.storage.database.base import get_db
from bookings_api.storage.database.models import User
from bookings_api.storage.database.repository import ApiKeyRepository
from bookings_api.webhooks.dispatcher import WebhookDispatcher


async def get_current_user(
    api_key: Optional[str] = Query(None, alias="apiKey"),
    x_api_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the calling user from an API key.

    The key is read from the ``apiKey`` query parameter or the
    ``X-API-Key`` header.

    Raises:
        UnauthorizedException: If the key is missing, unknown or expired
    """
    raw_key = api_key or x_api_key
    if not raw_key:
        raise UnauthorizedException("No API key provided")

    repository = ApiKeyRepository(db)
    key = await repository.get_by_raw_key(raw_key)
    if key is None:
        raise UnauthorizedException("Your API key is not valid")

    if key.expires_at is not None:
        expires_at = key.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at < datetime.now(timezone.utc):
            raise UnauthorizedException("Your API key is expired")

    user = await db.get(User, key.user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("User is inactive")

    await repository.touch(key)
    bind_log_context(clear=True, user_id=user.id)
    return user


def get_webhook_dispatcher() -> WebhookDispatcher:
    """Dispatcher used for booking notifications."""
    return WebhookDispatcher()
