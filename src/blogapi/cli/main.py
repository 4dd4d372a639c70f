"""BlogAPI CLI — run the server, bootstrap a local database.

Usage:
    blogapi serve                       # uvicorn on BLOGAPI_HOST:BLOGAPI_PORT
    blogapi serve --port 9000 --reload  # dev server with autoreload
    blogapi init-db                     # create tables (local SQLite/dev only)

Production databases are managed with `alembic upgrade head`.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import click

from blogapi.config import get_settings


@click.group()
def cli():
    """BlogAPI server tools."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: BLOGAPI_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: BLOGAPI_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "blogapi.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create all tables on the configured database."""
    settings = get_settings()
    asyncio.run(_create_schema(settings.database_url))
    click.secho(f"Schema created on {_safe_url(settings.database_url)}", fg="green")


async def _create_schema(database_url: str) -> None:
    from sqlalchemy.ext.asyncio import create_async_engine

    from blogapi.db.models import Base

    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


def _safe_url(database_url: str) -> str:
    """Hide the password when echoing a database URL."""
    from sqlalchemy.engine import make_url

    return make_url(database_url).render_as_string(hide_password=True)


if __name__ == "__main__":
    cli()
