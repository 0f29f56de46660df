"""Synchronous in-process signal dispatcher.

Managers talk to each other through named signals instead of direct calls.
Delivery is synchronous and in connection order: dispatcher_send returns
after every listener has run, so a caller observes all side effects (such as
achievement unlocks after a points change) as soon as the mutating call
returns.
"""

from __future__ import annotations

from collections.abc import Callable
import threading
from typing import Any

from .. import const

SignalCallback = Callable[[dict[str, Any]], Any]


def get_event_signal(instance_id: str, suffix: str) -> str:
    """Build an instance-scoped signal name.

    Format: 'learnscore_{instance_id}_{suffix}'

    Two coordinators in one process get separate namespaces, so managers can
    emit/listen without cross-talk.

    Args:
        instance_id: Coordinator instance id
        suffix: Signal suffix constant from const.py (e.g., SIGNAL_SUFFIX_POINTS_CHANGED)

    Returns:
        Fully qualified signal name
    """
    return f"{const.SIGNAL_PREFIX}_{instance_id}_{suffix}"


class Dispatcher:
    """Registry of signal listeners."""

    def __init__(self) -> None:
        """Initialize with no listeners."""
        self._listeners: dict[str, list[SignalCallback]] = {}
        self._lock = threading.Lock()

    def connect(self, signal: str, callback: SignalCallback) -> Callable[[], None]:
        """Connect callback to signal.

        Returns:
            A function that disconnects the callback (idempotent)
        """
        with self._lock:
            self._listeners.setdefault(signal, []).append(callback)

        def remove_listener() -> None:
            with self._lock:
                listeners = self._listeners.get(signal, [])
                if callback in listeners:
                    listeners.remove(callback)
                if not listeners:
                    self._listeners.pop(signal, None)

        return remove_listener

    def send(self, signal: str, payload: dict[str, Any]) -> None:
        """Call every listener of signal with payload.

        Listener exceptions propagate to the sender.
        """
        with self._lock:
            listeners = list(self._listeners.get(signal, ()))
        for callback in listeners:
            callback(payload)

    def listener_count(self, signal: str) -> int:
        """Number of listeners connected to signal."""
        with self._lock:
            return len(self._listeners.get(signal, ()))


def dispatcher_connect(
    dispatcher: Dispatcher, signal: str, callback: SignalCallback
) -> Callable[[], None]:
    """Connect callback to signal on dispatcher; returns the unsubscribe function."""
    return dispatcher.connect(signal, callback)


def dispatcher_send(dispatcher: Dispatcher, signal: str, payload: dict[str, Any]) -> None:
    """Send payload to every listener of signal on dispatcher."""
    dispatcher.send(signal, payload)
