"""Database models for users, event types, bookings and webhooks."""

import hashlib
import secrets
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookings_api.core.config import get_settings
from bookings_api.storage.database.base import Base, TimestampMixin


class BookingStatus(str, Enum):
    """Booking lifecycle status."""

    ACCEPTED = "accepted"
    PENDING = "pending"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class User(Base, TimestampMixin):
    """Account owning event types, bookings and webhooks."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    time_zone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    locale: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', email='{self.email}')>"


class ApiKey(Base, TimestampMixin):
    """API key; only the sha256 digest of the raw key is stored."""

    __tablename__ = "api_keys"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    note: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hashed_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    @staticmethod
    def generate_key() -> str:
        """Generate a new raw API key."""
        return f"{get_settings().api_key_prefix}{secrets.token_hex(16)}"

    @staticmethod
    def hash_key(raw_key: str) -> str:
        """Hash a raw API key, ignoring the configured prefix."""
        prefix = get_settings().api_key_prefix
        if raw_key.startswith(prefix):
            raw_key = raw_key[len(prefix):]
        return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()

    def __repr__(self) -> str:
        return f"<ApiKey(id={self.id}, user_id={self.user_id})>"


class EventType(Base, TimestampMixin):
    """Bookable event type."""

    __tablename__ = "event_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    length: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<EventType(id={self.id}, slug='{self.slug}')>"


class Booking(Base, TimestampMixin):
    """A booked time slot."""

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uid: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        default=lambda: uuid.uuid4().hex,
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("event_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=BookingStatus.ACCEPTED.value, nullable=False)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, title='{self.title}')>"


class Webhook(Base, TimestampMixin):
    """Webhook subscriber configuration.

    A null ``event_type_id`` subscribes the webhook to all of the user's
    event types.
    """

    __tablename__ = "webhooks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("event_types.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    subscriber_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    payload_template: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    secret: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Trigger names (JSON array)
    event_triggers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Webhook(id={self.id}, url='{self.subscriber_url}')>"
