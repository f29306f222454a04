"""Route Dependencies: per-request store adapters and services.

Invariants:
    - Every adapter built for a request shares that request's AsyncSession
    - Routes receive services, never a global client
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from matchbox.config import get_settings
from matchbox.infrastructure.database import get_db
from matchbox.infrastructure.sql_like_repository import SqlLikeRepository
from matchbox.infrastructure.sql_membership_store import SqlConversationStore
from matchbox.infrastructure.sql_safety_filter import SqlSafetyFilter
from matchbox.services.conversation_resolver import ConversationResolver
from matchbox.services.match_binder import MatchConversationBinder


def get_conversation_store(db: AsyncSession = Depends(get_db)) -> SqlConversationStore:
    return SqlConversationStore(db)


def get_safety_filter(db: AsyncSession = Depends(get_db)) -> SqlSafetyFilter:
    return SqlSafetyFilter(db)


def get_like_repository(db: AsyncSession = Depends(get_db)) -> SqlLikeRepository:
    return SqlLikeRepository(db)


def get_resolver(
    store: SqlConversationStore = Depends(get_conversation_store),
    safety: SqlSafetyFilter = Depends(get_safety_filter),
) -> ConversationResolver:
    return ConversationResolver(
        store, safety,
        enforce_pair_key=get_settings().conversation_pair_uniqueness,
    )


def get_binder(
    store: SqlConversationStore = Depends(get_conversation_store),
) -> MatchConversationBinder:
    return MatchConversationBinder(store)
