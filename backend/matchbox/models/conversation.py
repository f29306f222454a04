"""Conversation ORM: one messaging thread.

Invariants:
    - id is a string UUID generated on insert
    - pair_key is NULL or core.enforce_pair.pair_key of the two users; UNIQUE when set
    - Match-bound conversations never carry a pair_key

Design Decisions:
    - pair_key UNIQUE (NULLs allowed): the store rejects a second direct
      conversation for the same pair, closing first-contact races
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from matchbox.db.base import Base


class Conversation(Base):
    """Conversation row; members live in conversation_members."""
    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("pair_key", name="uq_conversations_pair_key"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    pair_key: Mapped[str | None] = mapped_column(String(140), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_message_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    members: Mapped[list["ConversationMember"]] = relationship(
        "ConversationMember", back_populates="conversation",
        cascade="all, delete-orphan", lazy="selectin",
    )
