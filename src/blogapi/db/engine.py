"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection
pooling, AsyncSession for per-request database access, dependency
injection via FastAPI. The engine is built from Settings inside
create_app() and kept on app.state, so nothing connects at import time.
"""

from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blogapi.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the engine for settings.database_url.

    SQLite (aiosqlite) picks its own pool, so pool sizing is only passed
    for server databases.
    """
    url = make_url(settings.database_url)
    kwargs: dict = {"echo": settings.debug}
    if url.get_backend_name() != "sqlite":
        # min 5, max 20 connections
        kwargs.update(pool_size=5, max_overflow=15, pool_pre_ping=True)
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned ORM objects stay readable after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency — yields a session per request, auto-closes."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
