"""Like Schemas."""

from pydantic import BaseModel, Field


class LikeRequest(BaseModel):
    liker_id: str = Field(min_length=1, max_length=64)
    liked_id: str = Field(min_length=1, max_length=64)


class LikeResponse(BaseModel):
    """created is False when the like already existed."""
    created: bool
