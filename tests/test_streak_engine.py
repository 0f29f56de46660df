"""Unit tests for StreakEngine."""

from __future__ import annotations

from datetime import date

from freezegun import freeze_time
import pytest

from learnscore import const
from learnscore.data_builders import build_streak
from learnscore.engines.streak_engine import StreakEngine
from learnscore.exceptions import InvalidStreakError


def make_streak(current: int = 0, longest: int = 0, last_day: str | None = None):
    streak = build_streak("2025-01-01T00:00:00+00:00")
    streak[const.DATA_STREAK_CURRENT] = current
    streak[const.DATA_STREAK_LONGEST] = longest
    streak[const.DATA_STREAK_LAST_ACTIVITY_DAY] = last_day
    return streak


class TestValidateDays:
    """Tests for day count validation."""

    def test_accepts_zero(self) -> None:
        assert StreakEngine.validate_days(0) == 0

    @pytest.mark.parametrize("days", [-1, 2.0, "3", None, False])
    def test_rejects_invalid(self, days) -> None:
        with pytest.raises(InvalidStreakError):
            StreakEngine.validate_days(days)


class TestApplyUpdate:
    """Tests for explicit streak updates."""

    @freeze_time("2025-01-15 12:00:00", tz_offset=0)
    def test_sets_current_and_longest(self) -> None:
        streak = StreakEngine.apply_update(make_streak(), 5)
        assert streak[const.DATA_STREAK_CURRENT] == 5
        assert streak[const.DATA_STREAK_LONGEST] == 5
        assert streak[const.DATA_STREAK_LAST_ACTIVITY] == "2025-01-15T12:00:00+00:00"

    def test_longest_never_decreases(self) -> None:
        streak = StreakEngine.apply_update(make_streak(current=9, longest=12), 2)
        assert streak[const.DATA_STREAK_CURRENT] == 2
        assert streak[const.DATA_STREAK_LONGEST] == 12

    def test_reset_keeps_longest(self) -> None:
        streak = StreakEngine.apply_reset(make_streak(current=4, longest=10))
        assert streak[const.DATA_STREAK_CURRENT] == 0
        assert streak[const.DATA_STREAK_LONGEST] == 10


class TestNextDaysForActivity:
    """Tests for calendar-day streak derivation."""

    def test_first_activity_starts_at_one(self) -> None:
        assert StreakEngine.next_days_for_activity(make_streak(), date(2025, 1, 15)) == (1, True)

    def test_same_day_unchanged(self) -> None:
        streak = make_streak(current=4, longest=4, last_day="2025-01-15")
        assert StreakEngine.next_days_for_activity(streak, date(2025, 1, 15)) == (4, False)

    def test_same_day_after_reset_restarts(self) -> None:
        streak = make_streak(current=0, longest=4, last_day="2025-01-15")
        assert StreakEngine.next_days_for_activity(streak, date(2025, 1, 15)) == (1, True)

    def test_next_day_extends(self) -> None:
        streak = make_streak(current=4, longest=4, last_day="2025-01-15")
        assert StreakEngine.next_days_for_activity(streak, date(2025, 1, 16)) == (5, True)

    def test_gap_restarts(self) -> None:
        streak = make_streak(current=4, longest=4, last_day="2025-01-15")
        assert StreakEngine.next_days_for_activity(streak, date(2025, 1, 18)) == (1, True)

    def test_earlier_day_restarts(self) -> None:
        streak = make_streak(current=4, longest=4, last_day="2025-01-15")
        assert StreakEngine.next_days_for_activity(streak, date(2025, 1, 10)) == (1, True)


class TestBonusAndMilestones:
    """Tests for bonus points and milestone flags."""

    def test_seven_days_gives_fifty(self) -> None:
        assert StreakEngine.calculate_bonus(7) == 50

    def test_zero_days(self) -> None:
        assert StreakEngine.calculate_bonus(0) == 0

    def test_custom_factor(self) -> None:
        assert StreakEngine.calculate_bonus(3, factor=10) == 30

    def test_milestones(self) -> None:
        milestones = StreakEngine.milestones(14)
        assert [m["days"] for m in milestones] == [3, 7, 14, 30, 100]
        assert [m["achieved"] for m in milestones] == [True, True, True, False, False]
        assert milestones[1]["reward"] == "Weekly Dedication Badge"
