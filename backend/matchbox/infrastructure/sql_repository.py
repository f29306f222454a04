"""SQL Repository Base: shared session handling and error mapping for SQL stores.

Invariants:
    - Every public store call is its own transaction: commit on success, rollback on error
    - SQLAlchemyError never escapes a store; it becomes StoreError(operation)
    - is_unique_violation distinguishes duplicate keys from other integrity failures

Design Decisions:
    - Core insert/update statements with client-generated ids: no ORM identity map,
      no refresh after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from matchbox.core.domain_types import StoreOperation
from matchbox.core.errors import StoreError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when exc is a duplicate-key error (Postgres 23505 or SQLite UNIQUE)."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


class SqlRepository:
    """Base class for SQL-backed stores."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: StoreOperation) -> AsyncIterator[None]:
        """Map SQLAlchemy failures inside the block to StoreError."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Store {operation.value} failed: {e}",
                extra={"operation": operation.value},
            )
            raise StoreError(type(e).__name__, operation.value) from e

    async def _insert_if_absent(self, stmt) -> bool:
        """Execute an INSERT and commit. False when a unique key already holds the row."""
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            await self.db.rollback()
            return False
        return True
