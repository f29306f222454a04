"""Service test fixtures: in-memory store, safety filter and resolver.

Invariants:
    - Every test gets a fresh InMemoryStore (no shared state between tests)
    - The resolver is wired with pair-key enforcement on, like production defaults
"""

import pytest

from matchbox.services.conversation_resolver import ConversationResolver
from tests.services.fake_store import FakeSafetyFilter, InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def safety():
    return FakeSafetyFilter()


@pytest.fixture
def resolver(store, safety):
    return ConversationResolver(store, safety)
