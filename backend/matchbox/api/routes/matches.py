"""Match Routes: list matches, bind a conversation, open a match chat.

Invariants:
    - GET hides matches with blocked counterparts
    - /conversation is attach-once: a bound match returns its existing conversation
    - /open reuses the match conversation or resolves the direct one
"""

from fastapi import APIRouter, Depends, Query

from matchbox.api.dependencies import (
    get_binder, get_conversation_store, get_resolver, get_safety_filter,
)
from matchbox.infrastructure.sql_membership_store import SqlConversationStore
from matchbox.infrastructure.sql_safety_filter import SqlSafetyFilter
from matchbox.schemas.conversation import ConversationResponse
from matchbox.schemas.match import (
    BindMatchRequest, MatchItem, MatchListResponse, OpenMatchRequest,
)
from matchbox.services.conversation_resolver import ConversationResolver
from matchbox.services.match_binder import MatchConversationBinder
from matchbox.services.matches import list_matches, open_match_conversation

router = APIRouter(prefix="/api/v1/matches", tags=["matches"])


@router.get("", response_model=MatchListResponse)
async def get_matches(
    user_id: str = Query(..., min_length=1, max_length=64),
    store: SqlConversationStore = Depends(get_conversation_store),
    safety: SqlSafetyFilter = Depends(get_safety_filter),
):
    """Matches for user_id, newest first."""
    user_id = user_id.strip()
    records = await list_matches(store, safety, user_id)
    return MatchListResponse(
        matches=[MatchItem.from_record(r, user_id) for r in records],
    )


@router.post("/{match_id}/conversation", response_model=ConversationResponse)
async def bind_conversation(
    match_id: str,
    body: BindMatchRequest,
    binder: MatchConversationBinder = Depends(get_binder),
):
    """Create the match's conversation (once) and return its id."""
    conversation_id = await binder.bind(match_id, body.user_a, body.user_b)
    return ConversationResponse(conversation_id=conversation_id)


@router.post("/{match_id}/open", response_model=ConversationResponse)
async def open_conversation(
    match_id: str,
    body: OpenMatchRequest,
    resolver: ConversationResolver = Depends(get_resolver),
):
    """Conversation to navigate to from the match list."""
    conversation_id = await open_match_conversation(resolver, match_id, body.self_id)
    return ConversationResponse(conversation_id=conversation_id)
