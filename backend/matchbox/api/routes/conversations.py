"""Conversation Routes: resolve a direct conversation, mark it read.

Invariants:
    - POST /direct is the single entry point for "message" buttons and existing threads
    - BlockedError surfaces as 403 with a user-facing message (global handler)
"""

from fastapi import APIRouter, Depends, Response, status

from matchbox.api.dependencies import get_conversation_store, get_resolver
from matchbox.infrastructure.sql_membership_store import SqlConversationStore
from matchbox.schemas.conversation import (
    ConversationResponse, DirectConversationRequest, MarkReadRequest,
)
from matchbox.services.conversation_resolver import ConversationResolver
from matchbox.services.read_markers import mark_conversation_read

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


@router.post("/direct", response_model=ConversationResponse)
async def resolve_direct(
    body: DirectConversationRequest,
    resolver: ConversationResolver = Depends(get_resolver),
):
    """Find or create the 1:1 conversation between self_id and other_id."""
    conversation_id = await resolver.resolve(body.self_id, body.other_id)
    return ConversationResponse(conversation_id=conversation_id)


@router.post("/{conversation_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    conversation_id: str,
    body: MarkReadRequest,
    store: SqlConversationStore = Depends(get_conversation_store),
):
    """Stamp the caller's last_read_at."""
    await mark_conversation_read(store, conversation_id, body.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
