"""Pair Enforcement: pure checks on a (self, other) pair.

Tests:
    - check_pair normalizes whitespace and rejects empty or equal ids
    - check_not_blocked raises only when other is in the caller's set
    - pair_key is order-independent and distinct per pair
"""

import pytest

from matchbox.core.enforce_pair import (
    check_not_blocked, check_pair, normalize_user_id, pair_key,
)
from matchbox.core.errors import BlockedError, InvalidPairError


@pytest.mark.parametrize("raw,expected", [
    (" u1 ", "u1"), ("u1", "u1"), ("", ""), (None, ""), ("\tu2\n", "u2"),
])
def test_normalize_user_id(raw, expected):
    assert normalize_user_id(raw) == expected


def test_check_pair_returns_normalized_ids():
    assert check_pair(" u1", "u2 ") == ("u1", "u2")


def test_check_pair_rejects_self_after_normalization():
    with pytest.raises(InvalidPairError) as exc_info:
        check_pair("u1", " u1")

    assert exc_info.value.code == "INVALID_PAIR"
    assert exc_info.value.context.user_id == "u1"


@pytest.mark.parametrize("a,b", [("", "u2"), ("u1", None), (" ", " ")])
def test_check_pair_rejects_empty(a, b):
    with pytest.raises(InvalidPairError):
        check_pair(a, b)


def test_check_not_blocked_passes_unrelated_blocks():
    check_not_blocked("u1", "u2", {"u3", "u4"})
    check_not_blocked("u1", "u2", set())


def test_check_not_blocked_raises_for_blocked_other():
    with pytest.raises(BlockedError) as exc_info:
        check_not_blocked("u1", "u2", {"u2"})

    assert exc_info.value.context.other_user_id == "u2"


def test_pair_key_is_symmetric():
    assert pair_key("u2", "u1") == pair_key("u1", "u2") == "2:u1:u2"


def test_pair_key_distinguishes_pairs():
    assert pair_key("u1", "u2") != pair_key("u1", "u3")


@pytest.mark.parametrize("first,second", [
    (("a:b", "c"), ("a", "b:c")),
    (("1:a", "b"), ("1", "a:b")),
    (("a", "b:"), ("a:b", "")),
])
def test_pair_key_is_unambiguous_for_ids_containing_colons(first, second):
    assert pair_key(*first) != pair_key(*second)


def test_pair_key_fits_the_column_for_longest_ids():
    assert len(pair_key("x" * 64, "y" * 64)) <= 140
