"""Record builders for learnscore.

This module is the SINGLE SOURCE OF TRUTH for:
- Per-user state defaults (build_user_state)
- Streak record defaults (build_streak)
- Achievement and badge catalog entries (build_achievement, build_badge)
- The reference catalogs (default_achievement_catalog, default_badge_catalog)

Consumers:
- store.py (get_or_create)
- coordinator.py (catalog wiring)
- tests (fixtures)
"""

from __future__ import annotations

from . import const
from .type_defs import (
    AchievementDefinition,
    BadgeDefinition,
    Rule,
    StreakRecord,
    UserGamificationState,
)
from .utils.dt_utils import dt_now_iso

# ==============================================================================
# USER STATE
# ==============================================================================


def build_streak(now_iso: str | None = None) -> StreakRecord:
    """Build a zero-valued streak record."""
    return {
        const.DATA_STREAK_CURRENT: 0,
        const.DATA_STREAK_LONGEST: 0,
        const.DATA_STREAK_LAST_ACTIVITY: now_iso or dt_now_iso(),
        const.DATA_STREAK_LAST_ACTIVITY_DAY: None,
    }


def build_user_state(user_id: str) -> UserGamificationState:
    """Build the default gamification record for a user seen for the first time.

    Args:
        user_id: Opaque, non-empty user identifier

    Returns:
        Complete UserGamificationState with zero-valued counters
    """
    now_iso = dt_now_iso()
    return {
        const.DATA_USER_ID: user_id,
        const.DATA_USER_POINTS: 0,
        const.DATA_USER_STREAK: build_streak(now_iso),
        const.DATA_USER_ACHIEVEMENTS: [],
        const.DATA_USER_ACHIEVEMENTS_UNLOCKED_AT: {},
        const.DATA_USER_COURSES_COMPLETED: 0,
        const.DATA_USER_LAST_ACTIVITY: now_iso,
        const.DATA_USER_LEDGER: [],
    }


# ==============================================================================
# CATALOG ENTRIES
# ==============================================================================


def build_rule(kind: str, value: int) -> Rule:
    """Build a tagged-variant rule."""
    return {const.RULE_KIND: kind, const.RULE_VALUE: value}  # type: ignore[typeddict-item]


def build_achievement(
    achievement_id: str,
    name: str,
    description: str,
    icon: str,
    rule: Rule,
    *,
    points_threshold: int = 0,
) -> AchievementDefinition:
    """Build an achievement catalog entry.

    points_threshold is informational only; unlocking is decided by the rule.
    """
    return {
        const.DATA_ACHIEVEMENT_ID: achievement_id,
        const.DATA_ACHIEVEMENT_NAME: name,
        const.DATA_ACHIEVEMENT_DESCRIPTION: description,
        const.DATA_ACHIEVEMENT_ICON: icon,
        const.DATA_ACHIEVEMENT_POINTS_THRESHOLD: points_threshold,
        const.DATA_ACHIEVEMENT_RULE: rule,
    }


def build_badge(
    badge_id: str,
    name: str,
    description: str,
    icon: str,
    rule: Rule,
) -> BadgeDefinition:
    """Build a badge catalog entry."""
    return {
        const.DATA_BADGE_ID: badge_id,
        const.DATA_BADGE_NAME: name,
        const.DATA_BADGE_DESCRIPTION: description,
        const.DATA_BADGE_ICON: icon,
        const.DATA_BADGE_RULE: rule,
    }


# ==============================================================================
# REFERENCE CATALOGS
# ==============================================================================


def default_achievement_catalog() -> list[AchievementDefinition]:
    """Return the five reference achievements in evaluation order."""
    return [
        build_achievement(
            const.ACHIEVEMENT_FIRST_MILESTONE,
            "First Milestone",
            "Earned your first 1000 points",
            "star",
            build_rule(const.RULE_KIND_POINTS_AT_LEAST, 1000),
            points_threshold=1000,
        ),
        build_achievement(
            const.ACHIEVEMENT_POINT_MASTER,
            "Point Master",
            "Earned 5000 points",
            "trophy",
            build_rule(const.RULE_KIND_POINTS_AT_LEAST, 5000),
            points_threshold=5000,
        ),
        build_achievement(
            const.ACHIEVEMENT_STREAK_STARTER,
            "Streak Starter",
            "Maintained a 3-day learning streak",
            "flame",
            build_rule(const.RULE_KIND_STREAK_AT_LEAST, 3),
        ),
        build_achievement(
            const.ACHIEVEMENT_WEEKLY_WARRIOR,
            "Weekly Warrior",
            "Maintained a 7-day learning streak",
            "shield",
            build_rule(const.RULE_KIND_STREAK_AT_LEAST, 7),
        ),
        build_achievement(
            const.ACHIEVEMENT_COURSE_MASTER,
            "Course Master",
            "Completed 10 courses",
            "graduation-cap",
            build_rule(const.RULE_KIND_COURSES_AT_LEAST, 10),
        ),
    ]


def default_badge_catalog() -> list[BadgeDefinition]:
    """Return the three reference badges in evaluation order."""
    return [
        build_badge(
            const.BADGE_DEDICATED_LEARNER,
            "Dedicated Learner",
            "Maintained a 7-day learning streak",
            "flame",
            build_rule(const.RULE_KIND_STREAK_AT_LEAST, 7),
        ),
        build_badge(
            const.BADGE_POINT_COLLECTOR,
            "Point Collector",
            "Earned 2000 points",
            "coins",
            build_rule(const.RULE_KIND_POINTS_AT_LEAST, 2000),
        ),
        build_badge(
            const.BADGE_COURSE_MASTER,
            "Course Master",
            "Completed 10 courses",
            "graduation-cap",
            build_rule(const.RULE_KIND_COURSES_AT_LEAST, 10),
        ),
    ]
