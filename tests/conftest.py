"""Shared fixtures for learnscore tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from learnscore.coordinator import GamificationCoordinator
from learnscore.store import InMemoryUserStateStore


@pytest.fixture
def store() -> InMemoryUserStateStore:
    """Empty in-memory store."""
    return InMemoryUserStateStore()


@pytest.fixture
def coordinator(store: InMemoryUserStateStore) -> Iterator[GamificationCoordinator]:
    """Coordinator with default options and catalogs."""
    coord = GamificationCoordinator(store=store, instance_id="test")
    yield coord
    coord.shutdown()
