"""SQL Safety Filter: blocked-user ids read from profiles.safety_settings.

Invariants:
    - Missing profile or missing settings yields an empty set
    - Parsing is delegated to core.safety.extract_blocked_user_ids
"""

from sqlalchemy import select

from matchbox.core.domain_types import StoreOperation, UserId
from matchbox.core.safety import extract_blocked_user_ids
from matchbox.infrastructure.sql_repository import SqlRepository
from matchbox.models.profile import Profile


class SqlSafetyFilter(SqlRepository):
    """SafetyFilter backed by the profiles table."""

    async def list_blocked_user_ids(self, user_id: UserId) -> set[str]:
        async with self._guard(StoreOperation.LIST_BLOCKED):
            result = await self.db.execute(
                select(Profile.safety_settings).where(Profile.id == user_id)
            )
            settings = result.scalar_one_or_none()
        return set(extract_blocked_user_ids(settings))
