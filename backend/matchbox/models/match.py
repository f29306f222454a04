"""Match ORM: a mutual-like pairing of two users.

Invariants:
    - conversation_id starts NULL and is written once by the binder
    - Deleting the conversation clears the pointer (ON DELETE SET NULL)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from matchbox.db.base import Base


class Match(Base):
    """Match row."""
    __tablename__ = "matches"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    user1_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user2_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    conversation_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("conversations.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
