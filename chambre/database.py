"""
Chambre API: Database Session Management
==========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` wraps an async engine with connection pooling and a session
       factory. The application factory constructs exactly one and stores it
       on `app.state.database`; the `get_db_session` dependency reads it from
       there and yields a session that is rolled back on error. Services
       commit their own writes before returning.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created by create_app(); sessions are created per-request.

Connection Pooling Strategy:
    pool_size:         Persistent connections for normal load
    max_overflow:      Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
    SQLite URLs skip the pool options (the driver manages its own file handle).
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from chambre.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic and
    `Database.create_all()` use to build the schema.
    """
    pass


class Database:
    """
    Owns the async engine (connection pool) and the session factory.

    One instance exists per application. It is handed to request handlers
    through `app.state`, never imported as a module global.
    """

    def __init__(self, settings: Settings):
        engine_kwargs: Dict[str, Any] = {
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit,
        # so services can build responses without another query
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """
        What:  Creates any missing tables registered on `Base.metadata`.
        When:  At startup when CREATE_SCHEMA_ON_STARTUP is set, and in tests.
        """
        # Import models so they register with Base.metadata
        from chambre.models import entity, room  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising when the store is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database built by create_app()."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's factory
        2. Yields it to the route handler
        3. On error: rolls back whatever the handler left uncommitted
        4. Always: closes the session (returns connection to pool)

    Commits are not issued here: cleanup of a yield dependency runs after
    the response has been sent. Mutating service methods commit instead.

    Example usage in a route:
        @router.get("/rooms")
        async def list_rooms(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()
