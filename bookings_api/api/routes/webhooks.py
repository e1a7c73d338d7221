"""Webhook management routes."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookings_api.api.dependencies import get_current_user
from bookings_api.api.schemas.webhook_schemas import WebhookCreate, WebhookResponse, WebhookUpdate
from bookings_api.core.exceptions import NotFoundException
from bookings_api.core.logging import get_logger
from bookings_api.storage.database.base import get_db
from bookings_api.storage.database.models import User
from bookings_api.storage.database.repository import WebhookRepository
from bookings_api.webhooks.triggers import WebhookTriggerEvents

logger = get_logger(__name__)
router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.get("", response_model=list[WebhookResponse])
async def list_webhooks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List all webhooks for current user."""
    return await WebhookRepository(db).list_for_user(current_user.id)


@router.post("", response_model=WebhookResponse, status_code=201)
async def create_webhook(
    webhook_data: WebhookCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Create new webhook."""
    data = webhook_data.model_dump()
    data["subscriber_url"] = str(webhook_data.subscriber_url)
    data["event_triggers"] = [trigger.value for trigger in webhook_data.event_triggers]

    return await WebhookRepository(db).create(user_id=current_user.id, **data)


@router.get("/triggers", response_model=list[str])
async def list_triggers() -> Any:
    """List available webhook trigger events."""
    return [trigger.value for trigger in WebhookTriggerEvents]


@router.get("/{webhook_id}", response_model=WebhookResponse)
async def get_webhook(
    webhook_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get webhook by ID."""
    webhook = await WebhookRepository(db).get_for_user(webhook_id, current_user.id)

    if not webhook:
        raise NotFoundException("Webhook not found")

    return webhook


@router.patch("/{webhook_id}", response_model=WebhookResponse)
async def update_webhook(
    webhook_id: int,
    webhook_data: WebhookUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Update webhook."""
    webhook = await WebhookRepository(db).get_for_user(webhook_id, current_user.id)

    if not webhook:
        raise NotFoundException("Webhook not found")

    update_data = webhook_data.model_dump(exclude_unset=True)

    if update_data.get("event_triggers") is not None:
        update_data["event_triggers"] = [trigger.value for trigger in update_data["event_triggers"]]

    if update_data.get("subscriber_url") is not None:
        update_data["subscriber_url"] = str(update_data["subscriber_url"])

    for field, value in update_data.items():
        setattr(webhook, field, value)

    await db.flush()
    await db.refresh(webhook)

    logger.info("webhook_updated", webhook_id=webhook.id, user_id=current_user.id)

    return webhook


@router.delete("/{webhook_id}", status_code=204)
async def delete_webhook(
    webhook_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete webhook."""
    webhook = await WebhookRepository(db).get_for_user(webhook_id, current_user.id)

    if not webhook:
        raise NotFoundException("Webhook not found")

    await db.delete(webhook)
    await db.flush()

    logger.info("webhook_deleted", webhook_id=webhook_id, user_id=current_user.id)
