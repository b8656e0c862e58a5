"""
Exercise Tracker — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   An in-memory SQLite database (aiosqlite) stands in for PostgreSQL;
       the app is built with create_app() around that database and driven
       through an HTTPX AsyncClient.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── database:        Database on sqlite+aiosqlite://, tables created
    ├── db_session:      Transactional AsyncSession on that database
    ├── mock_db_session: AsyncMock session for store-failure paths
    └── test_client:     HTTPX AsyncClient bound to a fresh app
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any application import: exercise_tracker.main
# builds a module-level app from the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from exercise_tracker.config import Settings
from exercise_tracker.database import Database
import exercise_tracker.models  # noqa: F401  registers tables for create_all

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def database():
    """
    Provides an empty in-memory database with all tables created.

    StaticPool (chosen by Database for SQLite URLs) keeps one connection,
    so every session of a test sees the same data.
    """
    db = Database(TEST_DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A real AsyncSession that commits when the test body finishes."""
    async with database.session() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(DatabaseError):
            await user_service.list_users(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so no startup probe happens;
    the injected database already has its tables.
    """
    from exercise_tracker.main import create_app

    app = create_app(Settings(database_url=TEST_DATABASE_URL), database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
