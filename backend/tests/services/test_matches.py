"""Match entry points: listing with block filtering, and opening a match chat."""

from datetime import datetime, timezone

import pytest

from matchbox.core.errors import BlockedError, InvalidPairError, ResourceNotFoundError
from matchbox.services.conversation_resolver import ConversationResolver
from matchbox.services.matches import list_matches, open_match_conversation
from tests.services.fake_store import FakeSafetyFilter


def _at(day: int) -> datetime:
    return datetime(2026, 1, day, tzinfo=timezone.utc)


# ─── list_matches ────────────────────────────────────────────────

async def test_list_returns_newest_first(store, safety):
    store.seed_match("m1", "u1", "u2", created_at=_at(1))
    store.seed_match("m2", "u3", "u1", created_at=_at(2))
    store.seed_match("m3", "u4", "u5", created_at=_at(3))

    rows = await list_matches(store, safety, "u1")

    assert [m.id for m in rows] == ["m2", "m1"]


async def test_list_hides_blocked_counterparts(store):
    store.seed_match("m1", "u1", "u2", created_at=_at(1))
    store.seed_match("m2", "u3", "u1", created_at=_at(2))
    safety = FakeSafetyFilter({"u1": {"u3"}})

    rows = await list_matches(store, safety, "u1")

    assert [m.id for m in rows] == ["m1"]


async def test_list_requires_user_id(store, safety):
    with pytest.raises(InvalidPairError):
        await list_matches(store, safety, "  ")


# ─── open_match_conversation ─────────────────────────────────────

async def test_open_returns_bound_conversation(store, resolver):
    store.seed_match("m1", "u3", "u4", conversation_id="c9")

    assert await open_match_conversation(resolver, "m1", "u4") == "c9"
    assert store.calls == ["get_match"]


async def test_open_unbound_match_resolves_and_attaches(store, resolver):
    store.seed_match("m1", "u3", "u4")

    conversation_id = await open_match_conversation(resolver, "m1", "u3")

    assert conversation_id == "c1"
    assert store.members_of("c1") == ["u3", "u4"]
    assert store.matches["m1"].conversation_id == "c1"


async def test_open_reuses_existing_direct_conversation(store, resolver):
    store.seed_conversation("c0", "u3", "u4")
    store.seed_match("m1", "u3", "u4")

    assert await open_match_conversation(resolver, "m1", "u4") == "c0"
    assert store.matches["m1"].conversation_id == "c0"


async def test_open_by_non_member_rejected(store, resolver):
    store.seed_match("m1", "u3", "u4")

    with pytest.raises(InvalidPairError):
        await open_match_conversation(resolver, "m1", "u9")

    assert store.matches["m1"].conversation_id is None


async def test_open_blocked_counterpart_rejected(store):
    store.seed_match("m1", "u3", "u4")
    resolver = ConversationResolver(store, FakeSafetyFilter({"u3": {"u4"}}))

    with pytest.raises(BlockedError):
        await open_match_conversation(resolver, "m1", "u3")

    assert store.row_count == 0
    assert store.matches["m1"].conversation_id is None


async def test_open_missing_match(store, resolver):
    with pytest.raises(ResourceNotFoundError):
        await open_match_conversation(resolver, "m404", "u3")
