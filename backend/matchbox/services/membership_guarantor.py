"""Membership Guarantor: idempotently ensures a user belongs to a conversation.

Invariants:
    - A CONFLICT from the store is success (the pair already exists)
    - Any other failure surfaces as StoreError, raised by the store itself
    - Calling ensure_member N >= 1 times leaves the same membership state as once
"""

import logging

from matchbox.core.domain_types import ConversationId, InsertOutcome, UserId
from matchbox.core.repository_protocols import MembershipStore

logger = logging.getLogger(__name__)


async def ensure_member(
    store: MembershipStore, conversation_id: ConversationId, user_id: UserId,
) -> None:
    """Insert (conversation_id, user_id) unless it already exists."""
    outcome = await store.insert_membership(conversation_id, user_id)
    if outcome is InsertOutcome.CONFLICT:
        logger.debug(
            "Membership already present",
            extra={"conversation_id": conversation_id, "user_id": user_id},
        )
        return
    logger.info(
        f"Added {user_id} to conversation {conversation_id}",
        extra={"conversation_id": conversation_id, "user_id": user_id},
    )


async def ensure_members(
    store: MembershipStore, conversation_id: ConversationId, *user_ids: UserId,
) -> None:
    """ensure_member for each user, sequentially."""
    for user_id in user_ids:
        await ensure_member(store, conversation_id, user_id)
