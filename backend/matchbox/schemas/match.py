"""Match Schemas: match list items, binding and open-chat requests.

Invariants:
    - MatchItem.other_user_id is computed relative to the requesting user
"""

from datetime import datetime

from pydantic import BaseModel, Field

from matchbox.core.domain_types import MatchRecord


class BindMatchRequest(BaseModel):
    """Create and attach a conversation for a match."""
    user_a: str = Field(min_length=1, max_length=64)
    user_b: str = Field(min_length=1, max_length=64)


class OpenMatchRequest(BaseModel):
    """Open the chat for a match from one member's match list."""
    self_id: str = Field(min_length=1, max_length=64)


class MatchItem(BaseModel):
    id: str
    other_user_id: str
    conversation_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: MatchRecord, user_id: str) -> "MatchItem":
        return cls(
            id=record.id,
            other_user_id=record.other_member(user_id) or "",
            conversation_id=record.conversation_id,
            created_at=record.created_at,
        )


class MatchListResponse(BaseModel):
    matches: list[MatchItem]
