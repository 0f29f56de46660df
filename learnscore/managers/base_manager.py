"""Common base for learnscore managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .. import const
from ..helpers.dispatcher import dispatcher_connect, dispatcher_send, get_event_signal

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..coordinator import GamificationCoordinator
    from ..store import UserStateStore


class BaseManager(ABC):
    """Shared plumbing for the stateful managers.

    Each manager gets the coordinator, its store, and a pair of signal helpers
    scoped to the coordinator's instance id:
    - emit(): notify other managers after a write
    - listen(): react to another manager's writes; the subscription is
      dropped by GamificationCoordinator.shutdown()

    Concrete managers implement setup() to register their listeners.
    """

    def __init__(self, coordinator: GamificationCoordinator) -> None:
        """Bind the manager to its coordinator."""
        self.coordinator = coordinator
        self.instance_id = coordinator.instance_id

    @property
    def store(self) -> UserStateStore:
        """The coordinator's user state store."""
        return self.coordinator.store

    def emit(self, suffix: str, **payload: Any) -> None:
        """Send payload on this instance's signal for suffix.

        Listeners run synchronously before emit() returns.

        Example:
            self.emit(
                const.SIGNAL_SUFFIX_STREAK_CHANGED,
                user_id=user_id,
                old_current=2,
                new_current=3,
                longest=5,
            )
        """
        signal = get_event_signal(self.instance_id, suffix)
        const.LOGGER.debug(
            "%s emitting '%s' (instance %s), keys: %s",
            self.__class__.__name__,
            suffix,
            self.instance_id,
            sorted(payload),
        )
        dispatcher_send(self.coordinator.dispatcher, signal, payload)

    def listen(self, suffix: str, callback: Callable[[dict[str, Any]], Any]) -> None:
        """Call callback with the payload of every emit() for suffix.

        Example (in setup()):
            self.listen(const.SIGNAL_SUFFIX_POINTS_CHANGED, self._on_points_changed)
        """
        signal = get_event_signal(self.instance_id, suffix)
        self.coordinator.on_unload(
            dispatcher_connect(self.coordinator.dispatcher, signal, callback)
        )
        const.LOGGER.debug(
            "%s subscribed to '%s' (instance %s)",
            self.__class__.__name__,
            suffix,
            self.instance_id,
        )

    @abstractmethod
    def setup(self) -> None:
        """Register listeners; called once by the coordinator."""
