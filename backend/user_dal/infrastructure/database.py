"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to PersistenceError (core/errors.py), cause chained
    - Cancellation (CancelledError) rolls back and propagates unchanged
    - The engine is the single shared handle; it is safe for concurrent sessions

Design Decisions:
    - One manager per process, owned by the FastAPI lifespan and injected into the store
    - expire_on_commit=False: returned rows stay readable after commit in async context
    - Pool sizing only applied to server databases; SQLite uses the dialect's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from user_dal.core.errors import ErrorContext, PersistenceError
from user_dal.db.base import Base
import user_dal.models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an existing engine (test fixtures, scripts)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "unknown",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(
                f"DB integrity error: {e}", extra={"operation": operation},
            )
            raise PersistenceError(
                "Integrity constraint violated", operation,
                ErrorContext(operation=operation, debug_info={"phase": "commit"}),
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(
                f"DB operational error: {e}", extra={"operation": operation},
            )
            raise PersistenceError(
                "Connection or operational error", operation,
                ErrorContext(operation=operation, debug_info={"phase": "execute"}),
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(
                f"DB driver error: {e}", extra={"operation": operation},
            )
            raise PersistenceError(
                "Database driver error", operation,
                ErrorContext(operation=operation, debug_info={"phase": "query"}),
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"SQLAlchemy error: {e}", extra={"operation": operation},
            )
            raise PersistenceError(
                "Database operation failed", operation,
                ErrorContext(operation=operation),
            ) from e
        except BaseException:
            # taxonomy errors and cancellation pass through untouched
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """CREATE TABLE IF NOT EXISTS for every model."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except PersistenceError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
