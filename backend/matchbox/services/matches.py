"""Match Entry Points: the match list and "open chat" from a match.

Invariants:
    - list_matches hides matches whose other member is in the caller's blocked set
    - open_match_conversation returns the match's conversation when it has one
    - Otherwise it resolves the direct conversation through the shared resolver
      (block check and membership repair included) and attaches it once
    - self_id must be one of the two match members
"""

import logging

from matchbox.core.domain_types import ConversationId, MatchId, MatchRecord, UserId
from matchbox.core.enforce_pair import normalize_user_id
from matchbox.core.errors import ErrorContext, InvalidPairError
from matchbox.core.repository_protocols import MatchRepository, SafetyFilter
from matchbox.services.conversation_resolver import ConversationResolver
from matchbox.services.match_binder import attach_conversation, load_match_or_404

logger = logging.getLogger(__name__)


async def list_matches(
    matches: MatchRepository, safety: SafetyFilter, user_id: str,
) -> list[MatchRecord]:
    """Matches for user_id, newest first, blocked counterparts removed."""
    me = UserId(normalize_user_id(user_id))
    if not me:
        raise InvalidPairError("user_id is required")
    rows = await matches.list_matches_for_user(me)
    blocked = await safety.list_blocked_user_ids(me)
    return [m for m in rows if m.other_member(me) not in blocked]


async def open_match_conversation(
    resolver: ConversationResolver, match_id: str, self_id: str,
) -> ConversationId:
    """Conversation to navigate to when a user taps a match."""
    store = resolver.store
    match = await load_match_or_404(store, MatchId(match_id))
    me = normalize_user_id(self_id)
    other = match.other_member(me)
    if other is None:
        raise InvalidPairError(
            f"User is not a member of match {match_id}",
            ErrorContext(user_id=me or None, match_id=match_id),
        )
    if match.conversation_id:
        return match.conversation_id

    conversation_id = await resolver.resolve(me, other)
    return await attach_conversation(store, match.id, conversation_id)
