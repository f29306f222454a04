"""Likes: idempotent right-swipe persistence.

Invariants:
    - A repeated like is success, reported as created=False
    - Liking yourself raises InvalidPairError
"""

import logging

from matchbox.core.domain_types import InsertOutcome
from matchbox.core.enforce_pair import check_pair
from matchbox.core.repository_protocols import LikeRepository

logger = logging.getLogger(__name__)


async def record_like(likes: LikeRepository, liker_id: str, liked_id: str) -> bool:
    """Persist liker -> liked. Returns True when a new row was written."""
    liker, liked = check_pair(liker_id, liked_id)
    outcome = await likes.insert_like(liker, liked)
    created = outcome is InsertOutcome.INSERTED
    if created:
        logger.info(f"{liker} liked {liked}", extra={"user_id": liker})
    return created
