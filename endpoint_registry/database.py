"""
Endpoint Registry — Database Engine & Session Management
==========================================================

What:  The `Database` object (async engine + session factory), the declarative
       base for ORM models, and the per-request session dependency.
Why:   The connection pool is the only process-wide resource. Owning it in
       one object gives it an explicit lifecycle: created at startup,
       disposed at shutdown, handed to handlers through dependency injection.
How:   The application lifespan builds a `Database` from settings and stores it
       on `app.state.database`. `get_db_session` opens one session per
       request from it, commits on success and rolls back on error.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite (used by the test suite) does not take queue-pool arguments, so
    they are only applied to server databases.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from endpoint_registry.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    `Database.create_all()` uses for development/test schemas.
    """
    pass


class Database:
    """
    Owns the async engine (connection pool) and the session factory.

    Lifecycle:
        1. Built once during application startup (`Database.from_settings`)
        2. Shared by every request through `get_db_session`
        3. Disposed during shutdown (`dispose()` closes all pooled connections)
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        # expire_on_commit=False: attributes stay readable after commit,
        # which the response serialization relies on
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def engine_options(settings: Settings) -> Dict[str, Any]:
        """Pool options for the configured driver; empty for SQLite."""
        if make_url(settings.database_url).get_backend_name() == "sqlite":
            return {}
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_recycle": 3600,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Builds a Database with pool options appropriate for the configured driver."""
        return cls(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
            **cls.engine_options(settings),
        )

    async def create_all(self) -> None:
        """Creates every table registered on `Base.metadata` that does not exist yet."""
        # Models must be imported so their tables are registered
        from endpoint_registry.models import api_endpoint  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the Database stored on app.state
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns the connection to the pool)

    Example usage in a route:
        @router.get("/endpoints")
        async def list_endpoints(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
