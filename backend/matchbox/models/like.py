"""Like ORM: one directed right-swipe.

Invariants:
    - (liker_id, liked_id) is UNIQUE; liking twice is a conflict
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from matchbox.db.base import Base


class Like(Base):
    """Like row."""
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liker_id", "liked_id", name="uq_likes_liker_liked"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    liker_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    liked_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
