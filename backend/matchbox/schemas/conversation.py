"""Conversation Schemas: direct-conversation resolve and read markers."""

from pydantic import BaseModel, Field


class DirectConversationRequest(BaseModel):
    """Resolve the direct conversation between the caller and another user."""
    self_id: str = Field(min_length=1, max_length=64)
    other_id: str = Field(min_length=1, max_length=64)


class MarkReadRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=64)


class ConversationResponse(BaseModel):
    conversation_id: str
