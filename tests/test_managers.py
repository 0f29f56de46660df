"""Tests for the stateful managers and their signals.

Managers are exercised through a real coordinator; signal emission is
observed by connecting MagicMock listeners to the coordinator's dispatcher.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from freezegun import freeze_time
import pytest

from learnscore import const
from learnscore.coordinator import GamificationCoordinator
from learnscore.exceptions import InvalidCoursesError, InvalidPointsError, InvalidUserIdError
from learnscore.helpers.dispatcher import dispatcher_connect, get_event_signal


def listen(coordinator: GamificationCoordinator, suffix: str) -> MagicMock:
    """Connect a MagicMock listener to an instance-scoped signal."""
    listener = MagicMock()
    dispatcher_connect(
        coordinator.dispatcher, get_event_signal(coordinator.instance_id, suffix), listener
    )
    return listener


# =============================================================================
# UserManager
# =============================================================================


class TestUserManager:
    """Tests for record access and course counts."""

    @pytest.mark.parametrize("user_id", [None, "", 0])
    def test_rejects_falsy_user_ids(
        self, coordinator: GamificationCoordinator, user_id
    ) -> None:
        with pytest.raises(InvalidUserIdError):
            coordinator.user_manager.get_state(user_id)
        assert len(coordinator.store) == 0

    def test_set_courses_emits(self, coordinator: GamificationCoordinator) -> None:
        listener = listen(coordinator, const.SIGNAL_SUFFIX_COURSES_CHANGED)
        assert coordinator.user_manager.set_courses_completed("u1", 4) == 4
        listener.assert_called_once_with({"user_id": "u1", "old_count": 0, "new_count": 4})

    def test_increment_courses(self, coordinator: GamificationCoordinator) -> None:
        coordinator.user_manager.set_courses_completed("u1", 4)
        assert coordinator.user_manager.increment_courses_completed("u1") == 5
        assert coordinator.user_manager.increment_courses_completed("u1", by=5) == 10

    @pytest.mark.parametrize("count", [-1, 2.5, "3", True])
    def test_rejects_invalid_course_counts(
        self, coordinator: GamificationCoordinator, count
    ) -> None:
        with pytest.raises(InvalidCoursesError):
            coordinator.user_manager.set_courses_completed("u1", count)
        assert coordinator.store.get("u1") is None


# =============================================================================
# EconomyManager
# =============================================================================


class TestEconomyManager:
    """Tests for add_points and the ledger."""

    def test_add_points_emits_points_changed(
        self, coordinator: GamificationCoordinator
    ) -> None:
        listener = listen(coordinator, const.SIGNAL_SUFFIX_POINTS_CHANGED)
        coordinator.economy_manager.add_points("u1", 30, reference_id="quiz-7")
        listener.assert_called_once_with(
            {
                "user_id": "u1",
                "old_total": 0,
                "new_total": 30,
                "delta": 30,
                "source": const.POINTS_SOURCE_MANUAL,
                "reference_id": "quiz-7",
            }
        )

    def test_invalid_points_write_nothing(
        self, coordinator: GamificationCoordinator
    ) -> None:
        listener = listen(coordinator, const.SIGNAL_SUFFIX_POINTS_CHANGED)
        with pytest.raises(InvalidPointsError):
            coordinator.economy_manager.add_points("u1", -5)
        listener.assert_not_called()
        assert coordinator.store.get("u1") is None

    @freeze_time("2025-01-15 12:00:00", tz_offset=0)
    def test_ledger_history_newest_first(
        self, coordinator: GamificationCoordinator
    ) -> None:
        manager = coordinator.economy_manager
        manager.add_points("u1", 10)
        manager.add_points("u1", 20, source=const.POINTS_SOURCE_ACTIVITY)
        history = manager.get_points_history("u1")
        assert [e[const.DATA_LEDGER_AMOUNT] for e in history] == [20, 10]
        assert history[0][const.DATA_LEDGER_BALANCE_AFTER] == 30
        assert history[0][const.DATA_LEDGER_SOURCE] == const.POINTS_SOURCE_ACTIVITY
        assert history[0][const.DATA_LEDGER_TIMESTAMP] == "2025-01-15T12:00:00+00:00"
        assert len(manager.get_points_history("u1", limit=1)) == 1

    def test_ledger_pruned_to_configured_size(self) -> None:
        coordinator = GamificationCoordinator(options={const.CONF_LEDGER_MAX_ENTRIES: 3})
        for amount in range(1, 7):
            coordinator.add_points("u1", amount)
        history = coordinator.get_points_history("u1")
        assert [e[const.DATA_LEDGER_AMOUNT] for e in history] == [6, 5, 4]
        assert coordinator.get_user_points("u1") == 21

    @freeze_time("2025-01-15 12:00:00", tz_offset=0)
    def test_add_points_stamps_last_activity(
        self, coordinator: GamificationCoordinator
    ) -> None:
        coordinator.economy_manager.add_points("u1", 1)
        state = coordinator.store.get("u1")
        assert state[const.DATA_USER_LAST_ACTIVITY] == "2025-01-15T12:00:00+00:00"


# =============================================================================
# StreakManager
# =============================================================================


class TestStreakManager:
    """Tests for streak writes and signals."""

    def test_update_emits_streak_changed(
        self, coordinator: GamificationCoordinator
    ) -> None:
        listener = listen(coordinator, const.SIGNAL_SUFFIX_STREAK_CHANGED)
        coordinator.streak_manager.update_streak("u1", 4)
        listener.assert_called_once_with(
            {"user_id": "u1", "old_current": 0, "new_current": 4, "longest": 4}
        )

    def test_returned_record_is_a_copy(
        self, coordinator: GamificationCoordinator
    ) -> None:
        streak = coordinator.streak_manager.update_streak("u1", 4)
        streak[const.DATA_STREAK_CURRENT] = 99
        assert coordinator.streak_manager.get_streak("u1")[const.DATA_STREAK_CURRENT] == 4

    def test_streak_update_does_not_unlock(
        self, coordinator: GamificationCoordinator
    ) -> None:
        coordinator.streak_manager.update_streak("u1", 7)
        assert coordinator.gamification_manager.get_user_achievements("u1") == []

    def test_bonus_uses_configured_factor(self) -> None:
        coordinator = GamificationCoordinator(options={const.CONF_STREAK_BONUS_FACTOR: 10})
        coordinator.update_streak("u1", 3)
        assert coordinator.calculate_streak_bonus("u1") == 30


# =============================================================================
# GamificationManager
# =============================================================================


class TestGamificationManager:
    """Tests for achievement unlocks."""

    @freeze_time("2025-01-15 12:00:00", tz_offset=0)
    def test_unlock_emits_and_records_time(
        self, coordinator: GamificationCoordinator
    ) -> None:
        listener = listen(coordinator, const.SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED)
        coordinator.streak_manager.update_streak("u1", 3)
        records = coordinator.gamification_manager.check_achievements("u1")
        assert [r["id"] for r in records] == [const.ACHIEVEMENT_STREAK_STARTER]
        listener.assert_called_once_with(
            {
                "user_id": "u1",
                "achievement_id": const.ACHIEVEMENT_STREAK_STARTER,
                "unlocked_at": "2025-01-15T12:00:00+00:00",
            }
        )
        state = coordinator.store.get("u1")
        assert state[const.DATA_USER_ACHIEVEMENTS_UNLOCKED_AT] == {
            const.ACHIEVEMENT_STREAK_STARTER: "2025-01-15T12:00:00+00:00"
        }

    def test_points_change_triggers_check(
        self, coordinator: GamificationCoordinator
    ) -> None:
        coordinator.economy_manager.add_points("u1", 1000)
        assert coordinator.gamification_manager.get_user_achievements("u1") == [
            const.ACHIEVEMENT_FIRST_MILESTONE
        ]

    def test_shutdown_disconnects_listener(
        self, coordinator: GamificationCoordinator
    ) -> None:
        coordinator.shutdown()
        coordinator.economy_manager.add_points("u1", 1000)
        assert coordinator.gamification_manager.get_user_achievements("u1") == []

    def test_unknown_progress_logs_warning(
        self, coordinator: GamificationCoordinator, caplog: pytest.LogCaptureFixture
    ) -> None:
        assert coordinator.gamification_manager.get_badge_progress("u1", "nope") is None
        assert "unknown badge" in caplog.text
