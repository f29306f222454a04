"""Database Engine: one async engine per process, one AsyncSession per request.

Invariants:
    - A session that sees a SQLAlchemy failure is rolled back and closed before
      the error leaves, re-raised as StoreError naming the failed phase
    - StoreError raised by a store inside the session passes through untouched
    - SQLite URLs get no pool sizing (the aiosqlite dialect rejects it)

Design Decisions:
    - Module-level db_manager set by init_db from the FastAPI lifespan; tests
      swap it for a manager bound to their in-memory engine
    - expire_on_commit=False: stores return plain values after commit, never
      touch expired ORM attributes
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from matchbox.core.errors import StoreError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError subclass DBAPIError.
_SESSION_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Database unreachable", "connect"),
    (DBAPIError, "Database driver error", "execute"),
    (SQLAlchemyError, "Database operation failed", "session"),
)


def _as_store_error(exc: SQLAlchemyError) -> StoreError:
    for exc_type, message, phase in _SESSION_FAILURES:
        if isinstance(exc, exc_type):
            return StoreError(message, phase)
    return StoreError("Database operation failed", "session")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
        echo: bool = False,
    ):
        engine_kwargs = {"pool_pre_ping": True, "echo": echo}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                store_error = _as_store_error(e)
                logger.error(
                    f"Session aborted: {e}",
                    extra={"operation": store_error.operation},
                )
                raise store_error from e

    async def ping(self) -> bool:
        """True when a trivial query round-trips. Used by the readiness probe."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (StoreError, OSError) as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    logger.info("Database engine created")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized; init_db runs in the app lifespan")
    async with db_manager.session() as session:
        yield session
