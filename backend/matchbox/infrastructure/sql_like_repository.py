"""SQL Like Repository: insert-if-absent on (liker_id, liked_id)."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import insert

from matchbox.core.domain_types import InsertOutcome, StoreOperation, UserId
from matchbox.infrastructure.sql_repository import SqlRepository
from matchbox.models.like import Like


class SqlLikeRepository(SqlRepository):
    """LikeRepository backed by the likes table."""

    async def insert_like(self, liker_id: UserId, liked_id: UserId) -> InsertOutcome:
        stmt = insert(Like).values(
            id=str(uuid.uuid4()),
            liker_id=liker_id,
            liked_id=liked_id,
            created_at=datetime.now(timezone.utc),
        )
        async with self._guard(StoreOperation.INSERT_LIKE):
            inserted = await self._insert_if_absent(stmt)
        return InsertOutcome.INSERTED if inserted else InsertOutcome.CONFLICT
