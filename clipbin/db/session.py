"""
Database Session Management with Connection Pooling

This module builds the async engine and the session factory that the
repositories use as their handle on the database.

Key Features:
- Database abstraction: engine configuration comes from the adapter
- No import-time engine: the app creates one on startup and keeps it on
  app.state, tests build their own against a throwaway database
- FastAPI dependency to hand the session factory to endpoints
"""

from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from clipbin.core.setting import settings
from clipbin.db import models  # noqa: F401  registers tables on SQLModel.metadata
from clipbin.db.sqlite_adapter import get_database_adapter


def create_session_maker(
    database_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> tuple[AsyncEngine, async_sessionmaker]:
    """
    Create the engine (and its connection pool) plus a session factory.

    Args:
        database_url: Connection string, defaults to settings.DATABASE_URL
        timeout: Busy timeout in seconds, defaults to settings.DATABASE_TIMEOUT

    Returns:
        (engine, session_maker) tuple; dispose the engine on shutdown
    """
    db_adapter = get_database_adapter(timeout=timeout)
    engine = db_adapter.create_engine(database_url or settings.DATABASE_URL)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
        autoflush=False,
    )
    return engine, session_maker


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables. Migrations are the source of truth in production."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def get_session_maker(request: Request) -> async_sessionmaker:
    """
    Dependency function for FastAPI to get the session factory.

    Usage in FastAPI:
        @router.get("/endpoint")
        async def endpoint(session_maker=Depends(get_session_maker)):
            pass
    """
    return request.app.state.session_maker
