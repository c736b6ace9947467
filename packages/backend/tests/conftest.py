"""Test fixtures — a fresh in-memory database per test.

Each test gets its own SQLite (aiosqlite) engine with the schema created
from the ORM metadata, so tests never see each other's rows. StaticPool
keeps the single in-memory connection alive for the engine's lifetime.

Settings are read once at import, so the environment is set up here
before anything from shelfmark is imported.
"""

import os

os.environ.setdefault("SHELFMARK_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SHELFMARK_JWT_SECRET", "test-secret-not-for-production-0123456789")
os.environ.setdefault("SHELFMARK_BCRYPT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from shelfmark.db.engine import get_db  # noqa: E402
from shelfmark.db.models import Base  # noqa: E402
from shelfmark.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def engine():
    """Per-test in-memory database with the full schema."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Session for service- and store-level tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client against the real app with get_db pointed at the test database.

    Auth is NOT overridden: protected routes need a real token, which the
    user1/user2 fixtures below obtain through signup + signin.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _signup_and_signin(client: AsyncClient, email: str, fname: str, lname: str) -> dict:
    password = "password123"
    r = await client.post(
        "/api/v1/auth/signup",
        json={"fname": fname, "lname": lname, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    r = await client.post(
        "/api/v1/auth/signin", json={"email": email, "password": password}
    )
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    me = await client.get("/api/v1/users/me", headers=headers)
    return {
        "email": email,
        "password": password,
        "token": token,
        "headers": headers,
        "user_id": me.json()["user_id"],
    }


@pytest_asyncio.fixture()
async def user1(client):
    """Signed-in user: token, auth headers, and user id."""
    return await _signup_and_signin(client, "user1@example.com", "User", "One")


@pytest_asyncio.fixture()
async def user2(client):
    """A second, unrelated signed-in user."""
    return await _signup_and_signin(client, "user2@example.com", "User", "Two")
