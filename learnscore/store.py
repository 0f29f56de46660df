# File: store.py
"""Keyed storage of per-user gamification records.

UserStateStore is the interface every manager talks to. The reference backing
is InMemoryUserStateStore: state is resident for the life of the process and
nothing is written to disk. Another backing (database table, cache) only has
to implement the same four operations; call sites do not change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import threading
from typing import TYPE_CHECKING

from . import const
from .data_builders import build_user_state

if TYPE_CHECKING:
    from .type_defs import UserGamificationState


class UserStateStore(ABC):
    """Key -> record store abstraction.

    Creation is explicit: get() never creates, get_or_create() is the single
    auditable point where a new record appears.
    """

    @abstractmethod
    def get(self, user_id: str) -> UserGamificationState | None:
        """Return the record for user_id, or None if never seen."""

    @abstractmethod
    def get_or_create(self, user_id: str) -> UserGamificationState:
        """Return the record for user_id, creating a zero-valued one if absent."""

    @abstractmethod
    def upsert(self, state: UserGamificationState) -> None:
        """Insert or replace the record keyed by state["user_id"]."""

    @abstractmethod
    def user_ids(self) -> list[str]:
        """Return known user ids in insertion order."""

    def snapshot(self) -> list[UserGamificationState]:
        """Return the known records in insertion order.

        Ordering matters: leaderboard ties keep this order.
        """
        records: list[UserGamificationState] = []
        for user_id in self.user_ids():
            state = self.get(user_id)
            if state is not None:
                records.append(state)
        return records

    def __len__(self) -> int:
        return len(self.user_ids())


class InMemoryUserStateStore(UserStateStore):
    """Dict-backed store; insertion-ordered, guarded by a lock."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._data: dict[str, UserGamificationState] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserGamificationState | None:
        return self._data.get(user_id)

    def get_or_create(self, user_id: str) -> UserGamificationState:
        with self._lock:
            state = self._data.get(user_id)
            if state is None:
                state = build_user_state(user_id)
                self._data[user_id] = state
                const.LOGGER.debug("Created gamification state for user %s", user_id)
            return state

    def upsert(self, state: UserGamificationState) -> None:
        with self._lock:
            self._data[state[const.DATA_USER_ID]] = state

    def user_ids(self) -> list[str]:
        with self._lock:
            return list(self._data)
