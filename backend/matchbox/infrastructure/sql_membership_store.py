"""SQL Conversation Store: MembershipStore, MatchRepository and ReadReceiptRepository over SQLAlchemy.

Invariants:
    - insert_membership: INSERTED for a new pair, CONFLICT for an existing one
    - Id lists come back DISTINCT and in ascending id order
    - Orphans are conversations whose only distinct member is the user, legacy or same-pair
    - Claiming an orphan is a compare-and-set on pair_key (NULL or same key only)
    - create_conversation with a pair_key returns the existing row's id when the key is taken
    - update_match_conversation_id writes only when the pointer is NULL, then reads it back

Design Decisions:
    - Generic SQL (no ON CONFLICT): identical behavior on PostgreSQL and SQLite
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import distinct, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError

from matchbox.core.domain_types import (
    ConversationId, InsertOutcome, MatchId, MatchRecord, StoreOperation, UserId,
)
from matchbox.core.errors import StoreError
from matchbox.infrastructure.sql_repository import SqlRepository, is_unique_violation
from matchbox.models.conversation import Conversation
from matchbox.models.conversation_member import ConversationMember
from matchbox.models.match import Match

logger = logging.getLogger(__name__)


def _to_record(row: Match) -> MatchRecord:
    return MatchRecord(
        id=MatchId(row.id),
        user1_id=UserId(row.user1_id),
        user2_id=UserId(row.user2_id),
        conversation_id=(
            ConversationId(row.conversation_id) if row.conversation_id else None
        ),
        created_at=row.created_at,
    )


class SqlConversationStore(SqlRepository):
    """Conversation, membership and match rows."""

    # ─── Memberships ─────────────────────────────────────────────

    async def insert_membership(
        self, conversation_id: ConversationId, user_id: UserId,
    ) -> InsertOutcome:
        stmt = insert(ConversationMember).values(
            id=str(uuid.uuid4()),
            conversation_id=conversation_id,
            user_id=user_id,
            joined_at=datetime.now(timezone.utc),
        )
        async with self._guard(StoreOperation.INSERT_MEMBERSHIP):
            inserted = await self._insert_if_absent(stmt)
        return InsertOutcome.INSERTED if inserted else InsertOutcome.CONFLICT

    async def list_conversation_ids_for_user(
        self, user_id: UserId,
    ) -> list[ConversationId]:
        async with self._guard(StoreOperation.LIST_CONVERSATIONS):
            result = await self.db.execute(
                select(ConversationMember.conversation_id)
                .where(ConversationMember.user_id == user_id)
                .distinct()
                .order_by(ConversationMember.conversation_id)
            )
            return [ConversationId(cid) for cid in result.scalars().all()]

    async def filter_conversation_ids_with_member(
        self, conversation_ids: Sequence[ConversationId], user_id: UserId,
    ) -> list[ConversationId]:
        if not conversation_ids:
            return []
        async with self._guard(StoreOperation.FILTER_CONVERSATIONS):
            result = await self.db.execute(
                select(ConversationMember.conversation_id)
                .where(ConversationMember.conversation_id.in_(list(conversation_ids)))
                .where(ConversationMember.user_id == user_id)
                .distinct()
                .order_by(ConversationMember.conversation_id)
            )
            return [ConversationId(cid) for cid in result.scalars().all()]

    async def list_orphaned_conversation_ids(
        self, user_id: UserId, pair_key: str | None,
    ) -> list[ConversationId]:
        sole_member = (
            select(ConversationMember.conversation_id)
            .group_by(ConversationMember.conversation_id)
            .having(func.count(distinct(ConversationMember.user_id)) == 1)
            .having(func.max(ConversationMember.user_id) == user_id)
        )
        key_matches = Conversation.pair_key.is_(None)
        if pair_key is not None:
            key_matches = or_(key_matches, Conversation.pair_key == pair_key)
        async with self._guard(StoreOperation.LIST_ORPHANS):
            result = await self.db.execute(
                select(Conversation.id)
                .where(Conversation.id.in_(sole_member))
                .where(key_matches)
                .order_by(Conversation.id)
            )
            return [ConversationId(cid) for cid in result.scalars().all()]

    async def claim_orphaned_conversation(
        self, conversation_id: ConversationId, pair_key: str,
    ) -> bool:
        stmt = (
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .where(or_(Conversation.pair_key.is_(None), Conversation.pair_key == pair_key))
            .values(pair_key=pair_key)
            .execution_options(synchronize_session=False)
        )
        async with self._guard(StoreOperation.CLAIM_ORPHAN):
            try:
                result = await self.db.execute(stmt)
                await self.db.commit()
            except IntegrityError as e:
                # The pair already owns another keyed conversation.
                if not is_unique_violation(e):
                    raise
                await self.db.rollback()
                return False
        return result.rowcount > 0

    async def mark_read(
        self, conversation_id: ConversationId, user_id: UserId,
    ) -> bool:
        async with self._guard(StoreOperation.MARK_READ):
            result = await self.db.execute(
                update(ConversationMember)
                .where(ConversationMember.conversation_id == conversation_id)
                .where(ConversationMember.user_id == user_id)
                .values(last_read_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount > 0

    # ─── Conversations ───────────────────────────────────────────

    async def create_conversation(
        self, owner_id: UserId, pair_key: str | None = None,
    ) -> ConversationId:
        conversation_id = str(uuid.uuid4())
        stmt = insert(Conversation).values(
            id=conversation_id,
            created_by=owner_id,
            pair_key=pair_key,
            created_at=datetime.now(timezone.utc),
        )
        async with self._guard(StoreOperation.CREATE_CONVERSATION):
            try:
                await self.db.execute(stmt)
                await self.db.commit()
            except IntegrityError as e:
                if pair_key is None or not is_unique_violation(e):
                    raise
                await self.db.rollback()
                return await self._conversation_for_pair_key(pair_key)
        return ConversationId(conversation_id)

    async def _conversation_for_pair_key(self, pair_key: str) -> ConversationId:
        result = await self.db.execute(
            select(Conversation.id).where(Conversation.pair_key == pair_key)
        )
        existing = result.scalar_one_or_none()
        if existing is None:
            raise StoreError(
                "pair_key conflict without a matching row",
                StoreOperation.CREATE_CONVERSATION.value,
            )
        logger.info(
            f"Pair key {pair_key} already taken; reusing conversation {existing}",
            extra={"conversation_id": existing},
        )
        return ConversationId(existing)

    # ─── Matches ─────────────────────────────────────────────────

    async def get_match(self, match_id: MatchId) -> MatchRecord | None:
        async with self._guard(StoreOperation.GET_MATCH):
            result = await self.db.execute(select(Match).where(Match.id == match_id))
            row = result.scalar_one_or_none()
            return _to_record(row) if row else None

    async def update_match_conversation_id(
        self, match_id: MatchId, conversation_id: ConversationId,
    ) -> ConversationId:
        async with self._guard(StoreOperation.UPDATE_MATCH):
            await self.db.execute(
                update(Match)
                .where(Match.id == match_id)
                .where(Match.conversation_id.is_(None))
                .values(conversation_id=conversation_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            result = await self.db.execute(
                select(Match.conversation_id).where(Match.id == match_id)
            )
            stored = result.scalar_one_or_none()
        if stored is None:
            raise StoreError(
                f"match {match_id} has no conversation after update",
                StoreOperation.UPDATE_MATCH.value,
            )
        return ConversationId(stored)

    async def list_matches_for_user(self, user_id: UserId) -> list[MatchRecord]:
        async with self._guard(StoreOperation.LIST_MATCHES):
            result = await self.db.execute(
                select(Match)
                .where(or_(Match.user1_id == user_id, Match.user2_id == user_id))
                .order_by(Match.created_at.desc())
            )
            return [_to_record(row) for row in result.scalars().all()]
