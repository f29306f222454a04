"""Match-to-Conversation Binder: gives a match its own conversation, attached once.

Invariants:
    - A match that already carries a conversation id is returned as-is, no rows created
    - Otherwise a fresh conversation is created (never a reused direct one, never
      tagged with a pair key), both members are ensured, then the id is attached
    - The attach is compare-and-set: the returned id is whatever the match holds afterwards
    - A missing match raises ResourceNotFoundError before any mutation
    - {user_a, user_b} must be exactly the match's two users, else InvalidPairError
      before any mutation, and a bound id is never returned to outsiders

Design Decisions:
    - No rollback: a StoreError after creation leaves an unattached conversation;
      the next bind for the same match creates another and attaches that one
"""

import logging

from matchbox.core.domain_types import ConversationId, MatchId, MatchRecord
from matchbox.core.enforce_pair import check_pair
from matchbox.core.errors import ErrorContext, InvalidPairError, ResourceNotFoundError
from matchbox.core.repository_protocols import MembershipStore
from matchbox.services.membership_guarantor import ensure_members

logger = logging.getLogger(__name__)


async def load_match_or_404(store: MembershipStore, match_id: MatchId) -> MatchRecord:
    """Fetch a match or raise ResourceNotFoundError. Shared with match entry points."""
    match = await store.get_match(match_id)
    if match is None:
        raise ResourceNotFoundError("Match", match_id, ErrorContext(match_id=match_id))
    return match


class MatchConversationBinder:
    """Creates and attaches the conversation for a match."""

    def __init__(self, store: MembershipStore):
        self.store = store

    async def bind(self, match_id: str, user_a: str, user_b: str) -> ConversationId:
        a, b = check_pair(user_a, user_b)
        match = await load_match_or_404(self.store, MatchId(match_id))
        if {a, b} != {match.user1_id, match.user2_id}:
            raise InvalidPairError(
                f"Users are not the members of match {match_id}",
                ErrorContext(user_id=a, other_user_id=b, match_id=match_id),
            )
        if match.conversation_id:
            logger.info(
                f"Match {match_id} already bound",
                extra={"match_id": match_id, "conversation_id": match.conversation_id},
            )
            return match.conversation_id

        conversation_id = await self.store.create_conversation(a)
        await ensure_members(self.store, conversation_id, a, b)
        return await attach_conversation(self.store, match.id, conversation_id)


async def attach_conversation(
    store: MembershipStore, match_id: MatchId, conversation_id: ConversationId,
) -> ConversationId:
    """Attach-once write; logs when a concurrent bind got there first."""
    stored = await store.update_match_conversation_id(match_id, conversation_id)
    if stored != conversation_id:
        logger.warning(
            f"Match {match_id} was bound concurrently; "
            f"conversation {conversation_id} left unattached",
            extra={"match_id": match_id, "conversation_id": conversation_id},
        )
    else:
        logger.info(
            f"Bound match {match_id} to conversation {conversation_id}",
            extra={"match_id": match_id, "conversation_id": conversation_id},
        )
    return stored


async def bind_match_conversation(
    store: MembershipStore, match_id: str, user_a: str, user_b: str,
) -> ConversationId:
    """Functional shorthand for MatchConversationBinder(store).bind(...)."""
    return await MatchConversationBinder(store).bind(match_id, user_a, user_b)
