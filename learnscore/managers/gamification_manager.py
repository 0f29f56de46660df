"""Gamification Manager - Achievement unlocks and badge status.

This manager is the single owner of the per-user unlocked-achievement set.
It listens for points_changed and re-evaluates the achievement catalog after
every add_points, so a caller observes new unlocks as soon as add_points
returns.

Badges are never stored: get_user_badges() recomputes them from current state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.gamification_engine import GamificationEngine
from ..utils.dt_utils import dt_now_iso
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import (
        AchievementDefinition,
        AchievementRecord,
        BadgeDefinition,
        BadgeRecord,
        Progress,
    )


class GamificationManager(BaseManager):
    """Manages achievement unlocks and badge evaluation.

    Listens to:
    - POINTS_CHANGED: run check_achievements for the user

    Emits:
    - ACHIEVEMENT_UNLOCKED: once per newly unlocked achievement
    """

    def setup(self) -> None:
        """Subscribe to point changes."""
        self.listen(const.SIGNAL_SUFFIX_POINTS_CHANGED, self._on_points_changed)

    @property
    def achievements(self) -> list[AchievementDefinition]:
        return self.coordinator.achievement_catalog

    @property
    def badges(self) -> list[BadgeDefinition]:
        return self.coordinator.badge_catalog

    def _on_points_changed(self, payload: dict[str, Any]) -> None:
        self.check_achievements(payload["user_id"])

    # =========================================================================
    # ACHIEVEMENTS
    # =========================================================================

    def check_achievements(self, user_id: Any) -> list[AchievementRecord]:
        """Unlock every catalog achievement whose rule now holds.

        Already unlocked achievements are skipped, so a second call with no
        state change returns [].

        Returns:
            Records for the achievements unlocked by this call only
        """
        state = self.coordinator.user_manager.get_state(user_id)
        newly_met = GamificationEngine.find_newly_met_achievements(
            state, self.achievements
        )
        if not newly_met:
            return []

        unlocked_at = dt_now_iso()
        unlocked_ids = state.setdefault(const.DATA_USER_ACHIEVEMENTS, [])  # type: ignore[misc]
        unlocked_times = state.setdefault(const.DATA_USER_ACHIEVEMENTS_UNLOCKED_AT, {})  # type: ignore[misc]

        records: list[AchievementRecord] = []
        for achievement in newly_met:
            achievement_id = achievement[const.DATA_ACHIEVEMENT_ID]  # type: ignore[literal-required]
            unlocked_ids.append(achievement_id)
            unlocked_times[achievement_id] = unlocked_at
            records.append(
                GamificationEngine.make_achievement_record(achievement, unlocked_at)
            )
            const.LOGGER.info(
                "Achievement unlocked: user=%s, achievement=%s", user_id, achievement_id
            )

        for record in records:
            self.emit(
                const.SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED,
                user_id=user_id,
                achievement_id=record[const.DATA_ACHIEVEMENT_ID],  # type: ignore[literal-required]
                unlocked_at=unlocked_at,
            )
        return records

    def get_user_achievements(self, user_id: Any) -> list[str]:
        """Return the ids of every achievement the user has unlocked."""
        state = self.coordinator.user_manager.get_state(user_id)
        return list(state.get(const.DATA_USER_ACHIEVEMENTS, []))

    def get_achievement_progress(
        self, user_id: Any, achievement_id: str
    ) -> Progress | None:
        """Progress toward an achievement, or None for an unknown id."""
        state = self.coordinator.user_manager.get_state(user_id)
        achievement = next(
            (
                item
                for item in self.achievements
                if item[const.DATA_ACHIEVEMENT_ID] == achievement_id  # type: ignore[literal-required]
            ),
            None,
        )
        if achievement is None:
            const.LOGGER.warning(
                "No progress data for unknown achievement: %s", achievement_id
            )
        return GamificationEngine.achievement_progress(state, achievement)

    # =========================================================================
    # BADGES
    # =========================================================================

    def get_user_badges(self, user_id: Any) -> list[BadgeRecord]:
        """Badges the user qualifies for right now, stamped earned_at=now."""
        state = self.coordinator.user_manager.get_state(user_id)
        return GamificationEngine.current_badges(state, self.badges, dt_now_iso())

    def get_badge_progress(self, user_id: Any, badge_id: str) -> Progress | None:
        """Progress toward a badge, or None for an unknown id."""
        state = self.coordinator.user_manager.get_state(user_id)
        badge = next(
            (
                item
                for item in self.badges
                if item[const.DATA_BADGE_ID] == badge_id  # type: ignore[literal-required]
            ),
            None,
        )
        if badge is None:
            const.LOGGER.warning("No progress data for unknown badge: %s", badge_id)
        return GamificationEngine.badge_progress(state, badge)
