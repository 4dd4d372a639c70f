"""Test fixtures — a fresh in-memory SQLite database per test.

Learn: Each test gets its own aiosqlite engine (StaticPool, so every
connection sees the same in-memory DB), the schema is created with
metadata.create_all, and the app's get_db is overridden to hand out one
shared session. Auth is NOT mocked: tests register, take the token from
the response, and send it as a Bearer header, so ownership scoping runs
for real.

The signing key must exist before blogapi.config is used, so it is set
here at import time.
"""

import os
import uuid

os.environ.setdefault("BLOGAPI_JWT_SECRET", "test-signing-key-0123456789abcdef-0123456789")
os.environ.setdefault("BLOGAPI_DATABASE_URL", "sqlite+aiosqlite://")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blogapi.auth.jwt import TokenService  # noqa: E402
from blogapi.config import Settings  # noqa: E402
from blogapi.db.engine import get_db  # noqa: E402
from blogapi.db.models import Base, User  # noqa: E402
from blogapi.main import create_app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"


@pytest.fixture()
def settings():
    return Settings(_env_file=None)


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine):
    """Per-test session on the fresh database."""
    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture()
def token_service(settings):
    return TokenService(settings)


@pytest_asyncio.fixture()
async def app(settings):
    app = create_app(settings)
    try:
        yield app
    finally:
        await app.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app, db_session):
    """HTTP client with only get_db overridden — real auth pipeline."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def make_user(db_session):
    """Insert a user row directly (no bcrypt cost) and return it."""

    async def _make(name: str = "Test User", email: str | None = None) -> User:
        user = User(
            name=name,
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            password_hash="not-a-real-hash",
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


async def register(client, email=None, name="Test User", password="password_123") -> dict:
    """Register through the API and return the response body."""
    r = await client.post(
        "/api/auth/register",
        json={
            "email": email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            "name": name,
            "password": password,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
