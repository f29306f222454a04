"""Conversation Resolver: find-or-create the canonical 1:1 conversation for two users.

Invariants:
    - resolve(A, A) and empty ids raise InvalidPairError before any store call
    - A blocked pair raises BlockedError before any mutation
    - At most one conversation row is created per call
    - Both members are (re-)ensured on every successful resolve, healing
      conversations left with a single member by earlier failures
    - Lookup picks the first shared conversation in ascending id order; failing
      that, the first conversation whose sole member is the caller (legacy or
      same-pair orphan), which the repair step then completes
    - An orphan is adopted only after claim_orphaned_conversation stamps it
      with this pair's key; a lost claim falls through to the next orphan or
      to create, so two pairs never share one legacy conversation

Design Decisions:
    - One resolver injected into every entry point (message button, match list,
      existing thread) so the block check and the repair step cannot drift apart
    - No locks: concurrent first-contact calls are reconciled by the store's
      unique pair_key when enforce_pair_key is on, best effort otherwise
    - No retries: StoreError propagates to the caller unchanged
"""

import logging

from matchbox.core.domain_types import ConversationId, UserId
from matchbox.core.enforce_pair import check_not_blocked, check_pair, pair_key
from matchbox.core.repository_protocols import MembershipStore, SafetyFilter
from matchbox.services.membership_guarantor import ensure_members

logger = logging.getLogger(__name__)


class ConversationResolver:
    """Resolves the direct conversation shared by two users."""

    def __init__(
        self,
        store: MembershipStore,
        safety: SafetyFilter,
        enforce_pair_key: bool = True,
    ):
        self.store = store
        self.safety = safety
        self.enforce_pair_key = enforce_pair_key

    async def resolve(self, self_id: str, other_id: str) -> ConversationId:
        """Return the conversation id shared by self_id and other_id, creating one if needed."""
        me, other = check_pair(self_id, other_id)

        blocked = await self.safety.list_blocked_user_ids(me)
        check_not_blocked(me, other, blocked)

        key = pair_key(me, other)
        conversation_id = await self._find_existing(me, other, key)
        if conversation_id is None:
            conversation_id = await self.store.create_conversation(
                me, pair_key=key if self.enforce_pair_key else None,
            )
            logger.info(
                f"Created direct conversation {conversation_id}",
                extra={"conversation_id": conversation_id, "user_id": me},
            )

        await ensure_members(self.store, conversation_id, me, other)
        return conversation_id

    async def _find_existing(
        self, me: UserId, other: UserId, key: str,
    ) -> ConversationId | None:
        """Shared conversation first, then an orphan this pair manages to claim."""
        mine = await self.store.list_conversation_ids_for_user(me)
        if not mine:
            return None
        shared = await self.store.filter_conversation_ids_with_member(mine, other)
        if shared:
            return sorted(shared)[0]
        for orphan in sorted(await self.store.list_orphaned_conversation_ids(me, key)):
            if await self.store.claim_orphaned_conversation(orphan, key):
                logger.info(
                    f"Repairing orphaned conversation {orphan}",
                    extra={"conversation_id": orphan, "user_id": me},
                )
                return orphan
            logger.info(
                f"Orphaned conversation {orphan} was claimed by another pair",
                extra={"conversation_id": orphan, "user_id": me},
            )
        return None


async def resolve_direct_conversation(
    store: MembershipStore,
    safety: SafetyFilter,
    self_id: str,
    other_id: str,
    enforce_pair_key: bool = True,
) -> ConversationId:
    """Functional shorthand for ConversationResolver(...).resolve(self_id, other_id)."""
    resolver = ConversationResolver(store, safety, enforce_pair_key)
    return await resolver.resolve(self_id, other_id)
