"""Tests for the in-process signal dispatcher."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from learnscore.helpers.dispatcher import (
    Dispatcher,
    dispatcher_connect,
    dispatcher_send,
    get_event_signal,
)


class TestDispatcher:
    """Tests for connect / send / unsubscribe."""

    def test_signal_name(self) -> None:
        assert get_event_signal("abc", "points_changed") == "learnscore_abc_points_changed"

    def test_send_reaches_listeners_in_order(self) -> None:
        dispatcher = Dispatcher()
        calls: list[str] = []
        dispatcher_connect(dispatcher, "sig", lambda payload: calls.append("first"))
        dispatcher_connect(dispatcher, "sig", lambda payload: calls.append("second"))
        dispatcher_send(dispatcher, "sig", {})
        assert calls == ["first", "second"]

    def test_unsubscribe(self) -> None:
        dispatcher = Dispatcher()
        listener = MagicMock()
        unsub = dispatcher_connect(dispatcher, "sig", listener)
        unsub()
        unsub()
        dispatcher_send(dispatcher, "sig", {"x": 1})
        listener.assert_not_called()
        assert dispatcher.listener_count("sig") == 0

    def test_signals_are_isolated(self) -> None:
        dispatcher = Dispatcher()
        listener = MagicMock()
        dispatcher_connect(dispatcher, get_event_signal("a", "s"), listener)
        dispatcher_send(dispatcher, get_event_signal("b", "s"), {})
        listener.assert_not_called()

    def test_listener_errors_propagate(self) -> None:
        dispatcher = Dispatcher()
        dispatcher_connect(dispatcher, "sig", MagicMock(side_effect=RuntimeError("boom")))
        with pytest.raises(RuntimeError):
            dispatcher_send(dispatcher, "sig", {})
