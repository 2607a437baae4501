"""Service test fixtures — async DB + FastAPI test client + logged-in users.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB session
    - db_manager patched so SessionGateMiddleware resolves sessions against the test DB
    - Each ApiUser carries its own session cookie; the client jar is kept empty

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (FOR UPDATE is a no-op here; row locking is not exercised)
    - Cookie sent as an explicit header so two users can share one client
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from scheduler.db.base import Base
from scheduler.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
import scheduler.infrastructure.database as db_module
from scheduler.main import app
from tests.services.api_helpers import (
    PASSWORD, ApiUser, login, register, session_token,
)


@pytest.fixture
async def test_engine():
    import scheduler.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Session gate opens its own sessions through db_manager
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
def make_user(client):
    """Register and log in a user; returns an ApiUser with its cookie header."""
    async def _make(username: str, email: str, password: str = PASSWORD) -> ApiUser:
        res = await register(client, username, email, password)
        assert res.status_code == 201, res.text
        user_id = res.json()["id"]
        res = await login(client, email, password)
        assert res.status_code == 200, res.text
        token = session_token(res)
        return ApiUser(
            id=user_id, username=username, email=email, password=password,
            token=token, headers={"Cookie": f"SESSION={token}"},
        )
    return _make


@pytest.fixture
async def alice(make_user) -> ApiUser:
    return await make_user("alice", "alice@example.com")


@pytest.fixture
async def bob(make_user) -> ApiUser:
    return await make_user("bob", "bob@example.com")


@pytest.fixture
def create_schedule(client):
    async def _create(user: ApiUser, title: str = "Standup", content: str = "Daily sync"):
        res = await client.post(
            "/api/schedules",
            json={"title": title, "content": content},
            headers=user.headers,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_comment(client):
    async def _create(user: ApiUser, schedule_id: int, content: str = "Sounds good"):
        res = await client.post(
            f"/api/schedules/{schedule_id}/comments",
            json={"content": content},
            headers=user.headers,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create
