"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test database

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so data written through the client is visible to test_db
    - Users created through the HTTP API, not inserted directly: the password
      hashing and token issuance under test are the real ones
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from dog_adoption.db.base import Base
from dog_adoption.infrastructure.database import get_db, DatabaseSessionManager
from dog_adoption.infrastructure.security import AuthService
from dog_adoption.services.dog_registry import DogRegistry
from dog_adoption.services.user_directory import UserDirectory
import dog_adoption.infrastructure.database as db_module
import dog_adoption.models  # noqa: F401
from dog_adoption.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
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
def auth():
    return AuthService(secret_key="test-secret-key")


@pytest.fixture
def users(test_db, auth):
    return UserDirectory(test_db, auth)


@pytest.fixture
def registry(test_db, users):
    return DogRegistry(test_db, users)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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


# ─── API helpers ─────────────────────────────────────────────────

@pytest.fixture
def make_user(client):
    """Create a user through the API. Returns {"id", "username", "headers"}."""
    async def _make(username: str, password: str = "secret1") -> dict:
        res = await client.post(
            "/api/users/register",
            json={"username": username, "password": password},
        )
        assert res.status_code == 201, res.text
        res = await client.post(
            "/api/users/login",
            json={"username": username, "password": password},
        )
        assert res.status_code == 200, res.text
        body = res.json()
        return {
            "id": body["user"]["id"],
            "username": username,
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }
    return _make


@pytest.fixture
def make_dog(client):
    """List a dog through the API as `owner`. Returns the created dog view."""
    async def _make(
        owner: dict, name: str = "Buddy", description: str = "Friendly retriever",
    ) -> dict:
        res = await client.post(
            "/api/dogs",
            json={"name": name, "description": description},
            headers=owner["headers"],
        )
        assert res.status_code == 201, res.text
        return res.json()["dog"]
    return _make


@pytest.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob")


@pytest.fixture
async def carol(make_user):
    return await make_user("carol")
