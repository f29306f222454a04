"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ConversationId, MatchId wrap opaque strings issued elsewhere
    - InsertOutcome is the only result of an idempotent insert; failures raise
    - MatchRecord mirrors one row of the external `matches` table

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ConversationId = NewType("ConversationId", str)
MatchId = NewType("MatchId", str)


# ─── Enums ───────────────────────────────────────────────────────

class InsertOutcome(str, Enum):
    """Result of an insert-if-absent call against a unique pair."""
    INSERTED = "inserted"
    CONFLICT = "conflict"


class StoreOperation(str, Enum):
    """Store calls named in StoreError and structured logs."""
    LIST_BLOCKED = "list_blocked_user_ids"
    INSERT_MEMBERSHIP = "insert_membership"
    LIST_CONVERSATIONS = "list_conversation_ids_for_user"
    FILTER_CONVERSATIONS = "filter_conversation_ids_with_member"
    LIST_ORPHANS = "list_orphaned_conversation_ids"
    CLAIM_ORPHAN = "claim_orphaned_conversation"
    CREATE_CONVERSATION = "create_conversation"
    GET_MATCH = "get_match"
    UPDATE_MATCH = "update_match_conversation_id"
    LIST_MATCHES = "list_matches_for_user"
    MARK_READ = "mark_read"
    INSERT_LIKE = "insert_like"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class MatchRecord:
    """Read-only view of a match row."""
    id: MatchId
    user1_id: UserId
    user2_id: UserId
    conversation_id: ConversationId | None = None
    created_at: datetime | None = None

    def other_member(self, user_id: str) -> UserId | None:
        """Return the counterpart of user_id, or None if user_id is not a member."""
        if user_id == self.user1_id:
            return self.user2_id
        if user_id == self.user2_id:
            return self.user1_id
        return None
