"""Boundary Protocols: contracts between the conversation core and the row store.

Invariants:
    - Services NEVER reach a process-wide client; stores arrive as constructor parameters
    - insert_membership returns CONFLICT for an existing pair and raises StoreError otherwise
    - Id sequences are returned in ascending id order
    - list_orphaned_conversation_ids only returns conversations whose sole member is
      user_id and whose pair_key is NULL or equal to the given key
    - update_match_conversation_id only writes when the match has no conversation yet
    - claim_orphaned_conversation stamps pair_key only when it is NULL or already
      equal to the given key; False means another pair owns the conversation

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL store and the test fake share no base
    - Async in Protocol: every store call is a suspension point
"""

from typing import Protocol, Sequence

from matchbox.core.domain_types import (
    ConversationId, InsertOutcome, MatchId, MatchRecord, UserId,
)


class SafetyFilter(Protocol):
    """Supplies the set of users a given user has blocked."""
    async def list_blocked_user_ids(self, user_id: UserId) -> set[str]: ...


class MembershipStore(Protocol):
    """Minimal capability the conversation core needs from the backend."""
    async def insert_membership(
        self, conversation_id: ConversationId, user_id: UserId,
    ) -> InsertOutcome: ...
    async def list_conversation_ids_for_user(
        self, user_id: UserId,
    ) -> list[ConversationId]: ...
    async def filter_conversation_ids_with_member(
        self, conversation_ids: Sequence[ConversationId], user_id: UserId,
    ) -> list[ConversationId]: ...
    async def list_orphaned_conversation_ids(
        self, user_id: UserId, pair_key: str | None,
    ) -> list[ConversationId]: ...
    async def claim_orphaned_conversation(
        self, conversation_id: ConversationId, pair_key: str,
    ) -> bool: ...
    async def create_conversation(
        self, owner_id: UserId, pair_key: str | None = None,
    ) -> ConversationId: ...
    async def get_match(self, match_id: MatchId) -> MatchRecord | None: ...
    async def update_match_conversation_id(
        self, match_id: MatchId, conversation_id: ConversationId,
    ) -> ConversationId: ...


class MatchRepository(Protocol):
    """Match listing for the match-list screen."""
    async def list_matches_for_user(self, user_id: UserId) -> list[MatchRecord]: ...


class ReadReceiptRepository(Protocol):
    """Per-member read markers on conversations."""
    async def mark_read(
        self, conversation_id: ConversationId, user_id: UserId,
    ) -> bool: ...


class LikeRepository(Protocol):
    """Idempotent like persistence."""
    async def insert_like(self, liker_id: UserId, liked_id: UserId) -> InsertOutcome: ...
