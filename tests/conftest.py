"""
Test Configuration Module

Every test gets its own SQLite file under tmp_path, built through the same
adapter and session factory the application uses.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

from clipbin.db.repository import ApiKeyRepository, ClipRepository
from clipbin.db.session import create_session_maker, get_session_maker, init_models
from clipbin.services.api_key_service import ApiKeyService
from clipbin.services.clip_service import ClipService


@pytest_asyncio.fixture
async def session_maker(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Create an isolated database and yield its session factory"""
    engine, maker = create_session_maker(
        f"sqlite+aiosqlite:///{tmp_path / 'clipbin-test.db'}",
        timeout=30.0,
    )
    await init_models(engine)

    yield maker

    await engine.dispose()


@pytest_asyncio.fixture
async def clip_repository(session_maker) -> ClipRepository:
    return ClipRepository(session_maker)


@pytest_asyncio.fixture
async def api_key_repository(session_maker) -> ApiKeyRepository:
    return ApiKeyRepository(session_maker)


@pytest_asyncio.fixture
async def clip_service(clip_repository) -> ClipService:
    return ClipService(clip_repository)


@pytest_asyncio.fixture
async def api_key_service(api_key_repository) -> ApiKeyService:
    return ApiKeyService(api_key_repository)


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database"""
    from clipbin.main import app

    app.dependency_overrides[get_session_maker] = lambda: session_maker
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
