"""Streak Engine - Pure logic for consecutive-activity streaks.

This engine provides stateless, pure Python functions for:
- Applying a reported day count (current = days, longest = max)
- Resetting the current streak while keeping the historical longest
- Deriving the next day count from calendar activity days
- Streak bonus points and fixed milestone lists

Invariant maintained by every mutation helper: longest >= current.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

from .. import const
from ..exceptions import InvalidStreakError
from ..utils.dt_utils import dt_days_between, dt_now_iso, dt_parse_date
from ..utils.math_utils import is_strict_int, round_half_up

if TYPE_CHECKING:
    from ..type_defs import MilestoneRecord, StreakRecord


class StreakEngine:
    """Pure logic engine for streak calculations."""

    @staticmethod
    def validate_days(days: Any) -> int:
        """Check a day count is a non-negative integer.

        Raises:
            InvalidStreakError: If days is not an int (bools rejected) or < 0
        """
        if not is_strict_int(days) or days < 0:
            raise InvalidStreakError(placeholders={"days": str(days)})
        return days

    @staticmethod
    def apply_update(streak: StreakRecord, days: int) -> StreakRecord:
        """Set current to days and raise longest if needed (in place)."""
        streak[const.DATA_STREAK_CURRENT] = days  # type: ignore[literal-required]
        streak[const.DATA_STREAK_LONGEST] = max(  # type: ignore[literal-required]
            streak.get(const.DATA_STREAK_LONGEST, 0), days
        )
        streak[const.DATA_STREAK_LAST_ACTIVITY] = dt_now_iso()  # type: ignore[literal-required]
        return streak

    @staticmethod
    def apply_reset(streak: StreakRecord) -> StreakRecord:
        """Zero the current streak; longest is a historical record and stays."""
        streak[const.DATA_STREAK_CURRENT] = 0  # type: ignore[literal-required]
        streak[const.DATA_STREAK_LAST_ACTIVITY] = dt_now_iso()  # type: ignore[literal-required]
        return streak

    @staticmethod
    def next_days_for_activity(streak: StreakRecord, day: date) -> tuple[int, bool]:
        """Work out the streak length after activity on a calendar day.

        Rules:
        - Same day as the last recorded activity day → unchanged, except
          that a reset streak restarts at 1
        - The day right after → current + 1
        - Any other gap (or no previous day) → 1

        Returns:
            (new day count, whether the streak changed)
        """
        current = streak.get(const.DATA_STREAK_CURRENT, 0)
        last_day = dt_parse_date(streak.get(const.DATA_STREAK_LAST_ACTIVITY_DAY))

        if last_day is None:
            return 1, True

        gap = dt_days_between(last_day, day)
        if gap == 0:
            if current == 0:
                return 1, True
            return current, False
        if gap == 1:
            return current + 1, True
        # Missed days, or a day before the last one recorded
        return 1, True

    @staticmethod
    def calculate_bonus(
        current_days: int, factor: float = const.DEFAULT_STREAK_BONUS_FACTOR
    ) -> int:
        """Bonus points for a streak; factor 7.14 gives ~50 points for 7 days."""
        return round_half_up(current_days * factor)

    @staticmethod
    def milestones(current_days: int) -> list[MilestoneRecord]:
        """Return the fixed milestone list with achieved flags for current_days."""
        return [
            {"days": days, "achieved": current_days >= days, "reward": reward}
            for days, reward in const.STREAK_MILESTONES
        ]
