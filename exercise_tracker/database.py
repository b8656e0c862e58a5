"""
Exercise Tracker — Database Client
====================================

What:  The store client: async SQLAlchemy engine, session factory and the
       FastAPI dependency that hands a session to each request.
Why:   One explicitly constructed object owns the connection pool. The app
       factory builds it, stores it on `app.state.database`, and the lifespan
       handler opens, probes and disposes it. Tests build their own against
       in-memory SQLite.
How:   `Database` wraps `create_async_engine` + `async_sessionmaker`;
       `get_db_session` resolves the instance from the running app.

Lifecycle:
    create_app()  → Database.from_settings(settings)
    startup       → connect(): SELECT 1, retried with backoff via tenacity.
                    A final failure is logged; the server still starts and
                    /health reports the database as disconnected.
    per request   → session(): commit on success, rollback on any error
    shutdown      → dispose(): close every pooled connection
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from exercise_tracker.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate
    and tests use for `create_all`.
    """
    pass


class Database:
    """
    Async store client shared by every request in the process.

    Attributes:
        engine:          AsyncEngine owning the connection pool
        session_factory: async_sessionmaker producing per-request sessions
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            # One shared connection, otherwise every session of an in-memory
            # database would see its own empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit,
        # which the response shaping relies on
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session.

        Commits when the block exits cleanly, rolls back and re-raises on
        any exception. A NotFoundError raised after an insert therefore
        discards that insert.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Run `SELECT 1`; raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def is_healthy(self) -> bool:
        try:
            await self.ping()
        except Exception as e:
            logger.warning("Database health check failed: %s", str(e))
            return False
        return True

    async def connect(self, attempts: int = 3) -> bool:
        """
        Probe the database at startup.

        Retries with exponential backoff + jitter. Returns False (after
        logging) instead of raising, so a dead database does not stop the
        process from serving /health.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential_jitter(initial=0.5, max=5),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self.ping()
        except Exception as e:
            logger.error("Database connection error: %s", str(e))
            return False

        logger.info("Database connection successful")
        return True

    async def create_all(self) -> None:
        """Create all tables from model metadata (tests and local SQLite)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections. Called from the lifespan shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
