"""Membership Guarantor: idempotent insert-if-absent.

Tests cover:
    - First call inserts, later calls are absorbed as success
    - N calls leave the same state as one call
    - ensure_members covers every user given
    - Non-conflict failures surface as StoreError
"""

import pytest

from matchbox.core.errors import StoreError
from matchbox.services.membership_guarantor import ensure_member, ensure_members


async def test_ensure_member_inserts_missing_pair(store):
    store.seed_conversation("c0", "u1")

    await ensure_member(store, "c0", "u2")

    assert store.members_of("c0") == ["u1", "u2"]


async def test_ensure_member_absorbs_existing_pair(store):
    store.seed_conversation("c0", "u1")

    await ensure_member(store, "c0", "u1")

    assert store.memberships == [("c0", "u1")]


@pytest.mark.parametrize("times", [1, 2, 5])
async def test_ensure_member_is_idempotent(store, times):
    store.seed_conversation("c0")
    for _ in range(times):
        await ensure_member(store, "c0", "u1")

    assert store.memberships == [("c0", "u1")]


async def test_ensure_members_adds_each_user(store):
    store.seed_conversation("c0")

    await ensure_members(store, "c0", "u1", "u2")

    assert store.members_of("c0") == ["u1", "u2"]


async def test_ensure_member_surfaces_store_error(store):
    store.fail_on.add("insert_membership")

    with pytest.raises(StoreError) as exc_info:
        await ensure_member(store, "c0", "u1")

    assert exc_info.value.operation == "insert_membership"
    assert store.memberships == []
