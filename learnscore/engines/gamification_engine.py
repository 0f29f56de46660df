"""Gamification Engine - Pure logic for achievement and badge evaluation.

This engine provides stateless, pure Python functions for:
- Rule evaluation (points_at_least, streak_at_least, courses_at_least)
- Achievement unlock detection (skips ids already unlocked)
- Badge qualification (recomputed on every call, nothing persisted)
- Progress toward an achievement or badge

ARCHITECTURE: This is a pure logic engine with no store access.
Catalog entries carry a tagged-variant rule instead of a predicate closure,
so catalogs are plain data. A single interpreter (evaluate_rule) dispatches
through a handler registry keyed by rule kind.

The GamificationManager is responsible for reading state from the store and
applying results (recording unlocks, emitting signals).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.math_utils import calculate_percentage

if TYPE_CHECKING:
    from ..type_defs import (
        AchievementDefinition,
        AchievementRecord,
        BadgeDefinition,
        BadgeRecord,
        CriterionResult,
        Progress,
        Rule,
        UserGamificationState,
    )


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Value extractor signature: (state) -> current value for a rule kind
ValueExtractor = Callable[["UserGamificationState"], int]


def _points(state: UserGamificationState) -> int:
    return state.get(const.DATA_USER_POINTS, 0)


def _current_streak(state: UserGamificationState) -> int:
    return state.get(const.DATA_USER_STREAK, {}).get(const.DATA_STREAK_CURRENT, 0)


def _courses(state: UserGamificationState) -> int:
    return state.get(const.DATA_USER_COURSES_COMPLETED, 0) or 0


# =============================================================================
# GAMIFICATION ENGINE
# =============================================================================


class GamificationEngine:
    """Pure logic engine for gamification evaluation.

    All methods are static/class methods - no instance state.

    Evaluation Flow:
        1. Manager reads the user's state from the store
        2. Engine evaluates catalog rules against that state
        3. Engine returns results (newly met achievements, current badges)
        4. Manager records unlocks and emits signals
    """

    # Maps rule kind to the state value it compares against
    _RULE_HANDLERS: dict[str, ValueExtractor] = {
        const.RULE_KIND_POINTS_AT_LEAST: _points,
        const.RULE_KIND_STREAK_AT_LEAST: _current_streak,
        const.RULE_KIND_COURSES_AT_LEAST: _courses,
    }

    # =========================================================================
    # RULE INTERPRETER
    # =========================================================================

    @classmethod
    def evaluate_rule(
        cls, state: UserGamificationState, rule: Rule | dict[str, Any]
    ) -> CriterionResult:
        """Evaluate one tagged-variant rule against a user state.

        Pure function - no side effects.

        Args:
            state: The user's gamification record
            rule: {kind, value}

        Returns:
            CriterionResult with met, current_value, threshold, progress
        """
        kind = rule.get(const.RULE_KIND)
        threshold = int(rule.get(const.RULE_VALUE, 0) or 0)

        handler = cls._RULE_HANDLERS.get(kind) if kind else None
        if handler is None:
            const.LOGGER.warning("Unknown rule kind: %s", kind)
            return cls._make_criterion_result(
                kind=str(kind or "unknown"),
                met=False,
                current_value=0,
                threshold=threshold,
            )

        current_value = handler(state)
        return cls._make_criterion_result(
            kind=kind,
            met=current_value >= threshold,
            current_value=current_value,
            threshold=threshold,
        )

    # =========================================================================
    # ACHIEVEMENTS
    # =========================================================================

    @classmethod
    def find_newly_met_achievements(
        cls,
        state: UserGamificationState,
        catalog: Iterable[AchievementDefinition],
    ) -> list[AchievementDefinition]:
        """Return catalog entries met now and not already unlocked.

        Achievements already in state["achievements"] are skipped without
        evaluating their rule: an unlock is never re-evaluated or re-returned.
        """
        unlocked = set(state.get(const.DATA_USER_ACHIEVEMENTS, []))
        newly_met: list[AchievementDefinition] = []
        for achievement in catalog:
            if achievement[const.DATA_ACHIEVEMENT_ID] in unlocked:  # type: ignore[literal-required]
                continue
            result = cls.evaluate_rule(state, achievement[const.DATA_ACHIEVEMENT_RULE])  # type: ignore[literal-required]
            if result["met"]:
                newly_met.append(achievement)
        return newly_met

    @staticmethod
    def make_achievement_record(
        achievement: AchievementDefinition, unlocked_at: str
    ) -> AchievementRecord:
        """Build the record returned for a newly unlocked achievement."""
        return {
            const.DATA_ACHIEVEMENT_ID: achievement[const.DATA_ACHIEVEMENT_ID],  # type: ignore[literal-required]
            const.DATA_ACHIEVEMENT_NAME: achievement[const.DATA_ACHIEVEMENT_NAME],  # type: ignore[literal-required]
            const.DATA_ACHIEVEMENT_DESCRIPTION: achievement[const.DATA_ACHIEVEMENT_DESCRIPTION],  # type: ignore[literal-required]
            const.DATA_ACHIEVEMENT_ICON: achievement[const.DATA_ACHIEVEMENT_ICON],  # type: ignore[literal-required]
            const.DATA_ACHIEVEMENT_POINTS_THRESHOLD: achievement.get(
                const.DATA_ACHIEVEMENT_POINTS_THRESHOLD, 0
            ),
            const.DATA_ACHIEVEMENT_UNLOCKED_AT: unlocked_at,
        }

    @classmethod
    def achievement_progress(
        cls,
        state: UserGamificationState,
        achievement: AchievementDefinition | None,
    ) -> Progress | None:
        """Progress toward an achievement; None for an unknown achievement."""
        if achievement is None:
            return None
        result = cls.evaluate_rule(state, achievement[const.DATA_ACHIEVEMENT_RULE])  # type: ignore[literal-required]
        if result["threshold"] <= 0:
            return None
        return cls._make_progress(
            result, achievement[const.DATA_ACHIEVEMENT_DESCRIPTION]  # type: ignore[literal-required]
        )

    # =========================================================================
    # BADGES
    # =========================================================================

    @classmethod
    def current_badges(
        cls,
        state: UserGamificationState,
        catalog: Iterable[BadgeDefinition],
        earned_at: str,
    ) -> list[BadgeRecord]:
        """Return the badges whose rule holds right now, stamped earned_at.

        Badges are current status, not a ledger: nothing is recorded and a
        badge disappears as soon as its rule stops holding.
        """
        badges: list[BadgeRecord] = []
        for badge in catalog:
            if cls.evaluate_rule(state, badge[const.DATA_BADGE_RULE])["met"]:  # type: ignore[literal-required]
                badges.append(
                    {
                        const.DATA_BADGE_ID: badge[const.DATA_BADGE_ID],  # type: ignore[literal-required]
                        const.DATA_BADGE_NAME: badge[const.DATA_BADGE_NAME],  # type: ignore[literal-required]
                        const.DATA_BADGE_DESCRIPTION: badge[const.DATA_BADGE_DESCRIPTION],  # type: ignore[literal-required]
                        const.DATA_BADGE_ICON: badge[const.DATA_BADGE_ICON],  # type: ignore[literal-required]
                        const.DATA_BADGE_EARNED_AT: earned_at,
                    }
                )
        return badges

    @classmethod
    def badge_progress(
        cls,
        state: UserGamificationState,
        badge: BadgeDefinition | None,
    ) -> Progress | None:
        """Progress toward a badge; None for an unknown badge."""
        if badge is None:
            return None
        rule = badge[const.DATA_BADGE_RULE]  # type: ignore[literal-required]
        result = cls.evaluate_rule(state, rule)
        if result["threshold"] <= 0:
            return None
        # Non-course badges are described in points
        unit = (
            "courses"
            if rule.get(const.RULE_KIND) == const.RULE_KIND_COURSES_AT_LEAST
            else "points"
        )
        description = f"Complete {result['threshold']} {unit} to earn this badge"
        return cls._make_progress(result, description)

    # =========================================================================
    # RESULT BUILDERS
    # =========================================================================

    @staticmethod
    def _make_criterion_result(
        *,
        kind: str,
        met: bool,
        current_value: int,
        threshold: int,
    ) -> CriterionResult:
        progress = min(1.0, current_value / threshold) if threshold > 0 else 0.0
        return {
            "kind": kind,
            "met": met,
            "current_value": current_value,
            "threshold": threshold,
            "progress": progress,
        }

    @staticmethod
    def _make_progress(result: CriterionResult, description: str) -> Progress:
        return {
            const.DATA_PROGRESS_CURRENT: result["current_value"],
            const.DATA_PROGRESS_TARGET: result["threshold"],
            const.DATA_PROGRESS_PERCENTAGE: calculate_percentage(
                result["current_value"], result["threshold"]
            ),
            const.DATA_PROGRESS_DESCRIPTION: description,
        }
