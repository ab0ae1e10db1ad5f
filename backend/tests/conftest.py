"""Shared fixtures: temporary SQLite database, store, ASGI test client."""

import os
import tempfile
from collections.abc import AsyncGenerator

# Settings and the engine are built at import time, so the database has
# to be chosen before anything from taskboard is imported.
_DB_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["CLIENT_DIST_DIR"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def db_engine():
    """Fresh tasks table for every test."""
    from taskboard.core.database import Base, engine
    import taskboard.models.task  # noqa: F401  registers the table

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    # pooled aiosqlite connections are bound to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    from taskboard.core.database import AsyncSessionLocal

    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def store(db_session):
    from taskboard.store.task_store import TaskStore

    return TaskStore(db_session)


@pytest_asyncio.fixture
async def app(db_engine):
    from taskboard.main import app as application

    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
