"""Read Markers: per-member last_read_at on conversations."""

from matchbox.core.domain_types import ConversationId, UserId
from matchbox.core.enforce_pair import normalize_user_id
from matchbox.core.errors import ErrorContext, InvalidPairError, ResourceNotFoundError
from matchbox.core.repository_protocols import ReadReceiptRepository


async def mark_conversation_read(
    receipts: ReadReceiptRepository, conversation_id: str, user_id: str,
) -> None:
    """Stamp now as user_id's last read time; 404 when user_id is not a member."""
    me = normalize_user_id(user_id)
    if not me:
        raise InvalidPairError("user_id is required")
    updated = await receipts.mark_read(ConversationId(conversation_id), UserId(me))
    if not updated:
        raise ResourceNotFoundError(
            "Membership", f"{conversation_id}/{me}",
            ErrorContext(user_id=me, conversation_id=conversation_id),
        )
