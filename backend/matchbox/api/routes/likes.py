"""Like Routes: record a right-swipe."""

from fastapi import APIRouter, Depends, status

from matchbox.api.dependencies import get_like_repository
from matchbox.infrastructure.sql_like_repository import SqlLikeRepository
from matchbox.schemas.like import LikeRequest, LikeResponse
from matchbox.services.likes import record_like

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


@router.post("", response_model=LikeResponse, status_code=status.HTTP_200_OK)
async def create_like(
    body: LikeRequest,
    likes: SqlLikeRepository = Depends(get_like_repository),
):
    """Record liker -> liked; repeating a like is not an error."""
    created = await record_like(likes, body.liker_id, body.liked_id)
    return LikeResponse(created=created)
