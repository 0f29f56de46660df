"""Streak Manager - Stateful streak operations.

Handles:
- Explicit streak updates and resets
- Calendar-day streak derivation (record_activity_day)
- Bonus and milestone reads

Emits SIGNAL_SUFFIX_STREAK_CHANGED on every write. Streak writes do not
trigger an achievement check; callers run check_achievements when they want
streak achievements evaluated.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.streak_engine import StreakEngine
from ..exceptions import InvalidStreakError
from ..utils.dt_utils import dt_parse_date, dt_today_iso
from .base_manager import BaseManager
from .user_manager import validate_user_id

if TYPE_CHECKING:
    from ..type_defs import MilestoneRecord, StreakRecord, UserGamificationState


class StreakManager(BaseManager):
    """Manages the per-user streak record."""

    def setup(self) -> None:
        """Nothing to subscribe to."""

    def _streak(self, state: UserGamificationState) -> StreakRecord:
        return state[const.DATA_USER_STREAK]  # type: ignore[literal-required]

    def _emit_changed(self, user_id: str, old_current: int, streak: StreakRecord) -> None:
        self.emit(
            const.SIGNAL_SUFFIX_STREAK_CHANGED,
            user_id=user_id,
            old_current=old_current,
            new_current=streak[const.DATA_STREAK_CURRENT],  # type: ignore[literal-required]
            longest=streak[const.DATA_STREAK_LONGEST],  # type: ignore[literal-required]
        )

    def update_streak(self, user_id: Any, days: Any) -> StreakRecord:
        """Set the current streak to days; longest never decreases.

        Raises:
            InvalidUserIdError: If user_id is falsy
            InvalidStreakError: If days is negative or not an int
        """
        validate_user_id(user_id)
        StreakEngine.validate_days(days)

        state = self.coordinator.user_manager.get_state(user_id)
        streak = self._streak(state)
        old_current = streak.get(const.DATA_STREAK_CURRENT, 0)
        StreakEngine.apply_update(streak, days)
        self.coordinator.user_manager.touch(state)

        const.LOGGER.debug(
            "StreakManager.update_streak: user=%s, old=%d, new=%d, longest=%d",
            user_id,
            old_current,
            days,
            streak[const.DATA_STREAK_LONGEST],  # type: ignore[literal-required]
        )
        self._emit_changed(user_id, old_current, streak)
        return dict(streak)  # type: ignore[return-value]

    def reset_streak(self, user_id: Any) -> StreakRecord:
        """Zero the current streak, keeping longest."""
        state = self.coordinator.user_manager.get_state(user_id)
        streak = self._streak(state)
        old_current = streak.get(const.DATA_STREAK_CURRENT, 0)
        StreakEngine.apply_reset(streak)
        self.coordinator.user_manager.touch(state)

        const.LOGGER.debug(
            "StreakManager.reset_streak: user=%s, old=%d", user_id, old_current
        )
        self._emit_changed(user_id, old_current, streak)
        return dict(streak)  # type: ignore[return-value]

    def record_activity_day(
        self, user_id: Any, day: date | datetime | str | None = None
    ) -> StreakRecord:
        """Update the streak from activity on a calendar day (default today).

        Same day as the last recorded one leaves the streak unchanged unless
        it was reset; the following day extends it; any other gap restarts
        it at 1.

        Raises:
            InvalidUserIdError: If user_id is falsy
            InvalidStreakError: If day cannot be parsed as a date
        """
        validate_user_id(user_id)
        if day is None:
            day = dt_today_iso()
        activity_day = dt_parse_date(day)
        if activity_day is None:
            raise InvalidStreakError(
                f"Invalid activity day: {day!r}", placeholders={"days": str(day)}
            )

        state = self.coordinator.user_manager.get_state(user_id)
        streak = self._streak(state)
        days, changed = StreakEngine.next_days_for_activity(streak, activity_day)
        if not changed:
            const.LOGGER.debug(
                "StreakManager.record_activity_day: user=%s already active on %s",
                user_id,
                activity_day.isoformat(),
            )
            return dict(streak)  # type: ignore[return-value]

        streak[const.DATA_STREAK_LAST_ACTIVITY_DAY] = activity_day.isoformat()  # type: ignore[literal-required]
        return self.update_streak(user_id, days)

    def get_streak(self, user_id: Any) -> StreakRecord:
        """Return a copy of the user's streak record."""
        state = self.coordinator.user_manager.get_state(user_id)
        return dict(self._streak(state))  # type: ignore[return-value]

    def calculate_streak_bonus(self, user_id: Any) -> int:
        """Bonus points for the current streak (read only)."""
        current = self.get_streak(user_id).get(const.DATA_STREAK_CURRENT, 0)
        return StreakEngine.calculate_bonus(
            current, self.coordinator.options[const.CONF_STREAK_BONUS_FACTOR]
        )

    def get_streak_milestones(self, user_id: Any) -> list[MilestoneRecord]:
        """Fixed milestone list with achieved flags for the current streak."""
        current = self.get_streak(user_id).get(const.DATA_STREAK_CURRENT, 0)
        return StreakEngine.milestones(current)
