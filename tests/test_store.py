"""Tests for the user state store."""

from __future__ import annotations

from learnscore import const
from learnscore.store import InMemoryUserStateStore
from tests.helpers import make_state


class TestInMemoryUserStateStore:
    """Tests for get / get_or_create / upsert."""

    def test_get_never_creates(self, store: InMemoryUserStateStore) -> None:
        assert store.get("u1") is None
        assert len(store) == 0

    def test_get_or_create_defaults(self, store: InMemoryUserStateStore) -> None:
        state = store.get_or_create("u1")
        assert state[const.DATA_USER_ID] == "u1"
        assert state[const.DATA_USER_POINTS] == 0
        assert state[const.DATA_USER_STREAK][const.DATA_STREAK_CURRENT] == 0
        assert state[const.DATA_USER_STREAK][const.DATA_STREAK_LONGEST] == 0
        assert state[const.DATA_USER_ACHIEVEMENTS] == []
        assert state[const.DATA_USER_COURSES_COMPLETED] == 0
        assert state[const.DATA_USER_LEDGER] == []

    def test_get_or_create_returns_same_record(
        self, store: InMemoryUserStateStore
    ) -> None:
        first = store.get_or_create("u1")
        first[const.DATA_USER_POINTS] = 40
        assert store.get_or_create("u1") is first
        assert len(store) == 1

    def test_upsert_replaces(self, store: InMemoryUserStateStore) -> None:
        store.get_or_create("u1")
        store.upsert(make_state("u1", points=900))
        assert store.get("u1")[const.DATA_USER_POINTS] == 900

    def test_snapshot_keeps_insertion_order(
        self, store: InMemoryUserStateStore
    ) -> None:
        for user_id in ("c", "a", "b"):
            store.get_or_create(user_id)
        assert store.user_ids() == ["c", "a", "b"]
        assert [s[const.DATA_USER_ID] for s in store.snapshot()] == ["c", "a", "b"]
