"""Service test fixtures — async DB + FastAPI test client + recording notifier.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_notifier overridden with RecordingNotifier: no queue, no email
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, so
      the schema created up front is visible to request sessions
    - ASGITransport does not run the lifespan: everything the lifespan would
      initialize is provided here
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import introhub.infrastructure.database as db_module
from introhub.db.base import Base
from introhub.infrastructure.database import DatabaseSessionManager, get_db
from introhub.infrastructure.notifications import get_notifier
from introhub.main import app
from tests.services.api_helpers import RecordingNotifier, bearer


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_engine, test_session_factory, notifier):
    """FastAPI test client with DB and notifier dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register(client):
    """Register a user through the API.

    Returns an async callable: await register("a@acme.com", first_name="A")
    → {"token", "user", "headers"}.
    """
    async def _register(
        email: str, password: str = "secret1",
        first_name: str = "Test", last_name: str = "User", **extra,
    ) -> dict:
        res = await client.post("/api/v1/auth/register", json={
            "email": email,
            "password": password,
            "password_confirm": password,
            "first_name": first_name,
            "last_name": last_name,
            **extra,
        })
        assert res.status_code == 201, res.text
        body = res.json()
        return {
            "token": body["token"],
            "user": body["user"],
            "headers": bearer(body["token"]),
        }
    return _register
