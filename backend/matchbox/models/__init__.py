"""ORM Models: SQLAlchemy declarative models for the rows this service touches.

Invariants:
    - All models inherit from Base (db/base.py)
    - User ids are opaque strings issued by the auth provider; no users table here
    - Membership and like pairs are UNIQUE at the table level

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      and alembic autogenerate run
"""

from matchbox.models.profile import Profile  # noqa: F401
from matchbox.models.conversation import Conversation  # noqa: F401
from matchbox.models.conversation_member import ConversationMember  # noqa: F401
from matchbox.models.match import Match  # noqa: F401
from matchbox.models.like import Like  # noqa: F401
