"""Profile ORM: the slice of a user profile read by the safety filter.

Invariants:
    - id is the auth provider's user id
    - safety_settings is a JSON object; blocked ids live under blocked_user_ids
"""

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from matchbox.db.base import Base


class Profile(Base):
    """User profile (safety settings only)."""
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    safety_settings: Mapped[dict | None] = mapped_column(JSON, nullable=True)
