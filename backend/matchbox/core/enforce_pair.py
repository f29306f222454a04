"""Pair Enforcement: validates a (self, other) pair before any store mutation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise on violation, return normally on success
    - pair_key is order-independent: pair_key(a, b) == pair_key(b, a)

Design Decisions:
    - Exceptions (not error dicts): callers are services and routes, which let
      MatchboxError propagate to the global handler
"""

from matchbox.core.domain_types import UserId
from matchbox.core.errors import BlockedError, ErrorContext, InvalidPairError


def normalize_user_id(value: str | None) -> str:
    """Strip surrounding whitespace; None becomes ''."""
    return (value or "").strip()


def check_pair(self_id: str | None, other_id: str | None) -> tuple[UserId, UserId]:
    """Both ids non-empty and distinct. Returns the normalized pair."""
    a = normalize_user_id(self_id)
    b = normalize_user_id(other_id)
    ctx = ErrorContext(user_id=a or None, other_user_id=b or None)
    if not a or not b:
        raise InvalidPairError("Both user ids are required", ctx)
    if a == b:
        raise InvalidPairError("A user cannot start a conversation with themselves", ctx)
    return UserId(a), UserId(b)


def check_not_blocked(
    self_id: UserId, other_id: UserId, blocked_ids: set[str],
) -> None:
    """Refuse the pair when other_id is in self_id's blocked set."""
    if other_id in blocked_ids:
        raise BlockedError(ErrorContext(user_id=self_id, other_user_id=other_id))


def pair_key(a: str, b: str) -> str:
    """Canonical key for the unordered pair {a, b}: "<len(low)>:<low>:<high>".

    The length prefix keeps the key unambiguous when ids themselves contain ':'.
    """
    low, high = sorted((a, b))
    return f"{len(low)}:{low}:{high}"
