"""Shared fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from datetime import datetime, timezone
from typing import AsyncGenerator, Callable

import httpx
import pytest
from pytest_mock import MockerFixture
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookings_api.api.app import app
from bookings_api.api.dependencies import get_webhook_dispatcher
from bookings_api.storage.database.base import Base, get_db
from bookings_api.storage.database.models import Booking, EventType, User, Webhook
from bookings_api.storage.database.repository import ApiKeyRepository
from bookings_api.webhooks.dispatcher import WebhookDispatcher


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with all tables created and foreign keys enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def async_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def user(async_session: AsyncSession) -> User:
    user = User(email="organizer@example.com", username="organizer", name="Organizer")
    async_session.add(user)
    await async_session.commit()
    return user


@pytest.fixture
async def other_user(async_session: AsyncSession) -> User:
    user = User(email="someone@example.com", username="someone")
    async_session.add(user)
    await async_session.commit()
    return user


@pytest.fixture
async def raw_api_key(async_session: AsyncSession, user: User) -> str:
    _, raw_key = await ApiKeyRepository(async_session).create(user.id, note="tests")
    await async_session.commit()
    return raw_key


@pytest.fixture
async def event_type(async_session: AsyncSession, user: User) -> EventType:
    event_type = EventType(user_id=user.id, title="Intro call", slug="intro-call", length=15)
    async_session.add(event_type)
    await async_session.commit()
    return event_type


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Build an unsaved booking."""

    def _make(**overrides: object) -> Booking:
        fields: dict = {
            "id": 42,
            "uid": "abc123",
            "user_id": 1,
            "event_type_id": None,
            "title": "15min",
            "start_time": datetime(2024, 5, 1, 17, 0, tzinfo=timezone.utc),
            "end_time": datetime(2024, 5, 1, 17, 15, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Booking(**fields)

    return _make


@pytest.fixture
async def make_webhook(async_session: AsyncSession) -> Callable:
    """Persist a webhook subscriber."""

    async def _make(user_id: int, url: str, **overrides: object) -> Webhook:
        fields: dict = {
            "user_id": user_id,
            "subscriber_url": url,
            "event_triggers": ["BOOKING_CREATED"],
        }
        fields.update(overrides)
        webhook = Webhook(**fields)
        async_session.add(webhook)
        await async_session.commit()
        return webhook

    return _make


@pytest.fixture
def webhook_requests() -> list[httpx.Request]:
    """Requests received by the mocked subscriber endpoints."""
    return []


@pytest.fixture
def subscriber_status() -> dict[str, int]:
    """Status code per subscriber host; unknown hosts answer 200."""
    return {}


@pytest.fixture
def webhook_logger(mocker: MockerFixture):
    return mocker.Mock()


@pytest.fixture
async def webhook_client(
    webhook_requests: list[httpx.Request],
    subscriber_status: dict[str, int],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client whose transport records requests instead of sending them."""

    def handler(request: httpx.Request) -> httpx.Response:
        webhook_requests.append(request)
        return httpx.Response(subscriber_status.get(request.url.host, 200), text="ok")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
async def api_client(
    session_maker: async_sessionmaker[AsyncSession],
    webhook_client: httpx.AsyncClient,
    webhook_logger,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Client for the FastAPI app bound to the test database and mocked webhooks."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_webhook_dispatcher] = lambda: WebhookDispatcher(
        client=webhook_client,
        logger=webhook_logger,
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
