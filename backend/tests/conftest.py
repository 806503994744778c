"""
Townhall Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── repos:        AsyncMock repositories for service unit tests
    ├── db_engine:    in-memory SQLite engine with every table created
    ├── db_session:   AsyncSession on db_engine, for repository tests
    ├── test_app:     FastAPI app whose sessions come from db_engine
    └── test_client:  HTTPX AsyncClient talking to test_app over ASGI
"""

import os

# Override settings for testing BEFORE any townhall imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTH_USERS"] = "user:password,admin:admin"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_AUTO_CREATE"] = "false"

from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import townhall.models  # noqa: F401
from townhall import database
from townhall.database import Base, get_db_session, install_sqlite_functions
from townhall.main import create_app
from townhall.repositories import (
    CommentRepository,
    DiscussionRepository,
    HashtagRepository,
    LikeRepository,
    UserRepository,
)

ADMIN = ("admin", "admin")


# ══════════════════════════════════════════════════════════════════════════
# Service Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def repos():
    """
    One AsyncMock per repository, spec'd on the real class.

    Usage:
        service = UserService(users=repos.users, ...)
        repos.users.find_by_id.return_value = None
    """
    return SimpleNamespace(
        users=AsyncMock(spec=UserRepository),
        discussions=AsyncMock(spec=DiscussionRepository),
        comments=AsyncMock(spec=CommentRepository),
        likes=AsyncMock(spec=LikeRepository),
        hashtags=AsyncMock(spec=HashtagRepository),
    )


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    install_sqlite_functions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_app(db_engine, session_factory, monkeypatch):
    """The real application with sessions and /health pointed at the test engine."""
    monkeypatch.setattr(database, "engine", db_engine)
    app = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
