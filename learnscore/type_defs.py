"""Type definitions for learnscore data structures.

TypedDict is used for every record whose keys are fixed at design time (user
state, catalog definitions, derived read models). Keys mirror the DATA_*
constants in const.py.

IMPORTANT: This file must NOT import from coordinator.py, managers or engines
to avoid circular dependencies. Only typing machinery is imported here.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation lives in the
engines (scalar checks) and in config.py / economy_engine.py (voluptuous
schemas).
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

UserId = str
AchievementId = str
BadgeId = str
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"

RuleKind = Literal["points_at_least", "streak_at_least", "courses_at_least"]
RankBadge = Literal["gold", "silver", "bronze", "participant"]
MotivationLevel = Literal["high", "medium", "low"]


# =============================================================================
# Per-user State
# =============================================================================


class StreakRecord(TypedDict):
    """Current/longest streak for one user.

    Invariant: longest >= current.
    """

    current: int
    longest: int
    last_activity: ISODatetime
    last_activity_day: NotRequired[ISODate | None]


class LedgerEntry(TypedDict):
    """Immutable record of one point transaction."""

    timestamp: ISODatetime
    amount: int
    balance_after: int
    source: str
    reference_id: str | None


class UserGamificationState(TypedDict):
    """One gamification record per user, created on first touch."""

    user_id: UserId
    points: int
    streak: StreakRecord
    achievements: list[AchievementId]  # set semantics, insertion-ordered
    achievements_unlocked_at: dict[AchievementId, ISODatetime]
    courses_completed: int
    last_activity: ISODatetime
    ledger: list[LedgerEntry]


# =============================================================================
# Catalog Definitions
# =============================================================================


class Rule(TypedDict):
    """Tagged-variant condition evaluated by GamificationEngine.evaluate_rule."""

    kind: RuleKind
    value: int


class AchievementDefinition(TypedDict):
    """Static achievement catalog entry."""

    id: AchievementId
    name: str
    description: str
    icon: str
    points_threshold: int  # informational
    rule: Rule


class BadgeDefinition(TypedDict):
    """Static badge catalog entry."""

    id: BadgeId
    name: str
    description: str
    icon: str
    rule: Rule


# =============================================================================
# Engine Results
# =============================================================================


class CriterionResult(TypedDict):
    """Result of evaluating one rule against a user state."""

    kind: str
    met: bool
    current_value: int
    threshold: int
    progress: float  # 0.0 .. 1.0


class AchievementRecord(TypedDict):
    """Achievement returned from an unlock check."""

    id: AchievementId
    name: str
    description: str
    icon: str
    points_threshold: int
    unlocked_at: ISODatetime


class BadgeRecord(TypedDict):
    """Badge the user currently qualifies for."""

    id: BadgeId
    name: str
    description: str
    icon: str
    earned_at: ISODatetime


class Progress(TypedDict):
    """Progress toward an achievement or badge."""

    current: int
    target: int
    percentage: int
    description: str


class MilestoneRecord(TypedDict):
    """One fixed streak milestone."""

    days: int
    achieved: bool
    reward: str


class LeaderboardEntry(TypedDict):
    """Derived ranking row, never stored."""

    user_id: UserId
    points: int
    streak: int
    achievements_count: int
    badges_count: int
    rank: int
    rank_badge: RankBadge


class Leaderboard(TypedDict):
    """Ranked view across all known users."""

    period: str
    users: list[LeaderboardEntry]
    last_updated: ISODatetime


class TierRecord(TypedDict):
    """Reward tier for a point total."""

    level: str
    points: int
    next_tier: str | None
    points_to_next: int
    benefits: list[str]


class RewardSuggestion(TypedDict):
    """Personalised reward recommendation."""

    type: str
    title: str
    description: str
    points: int


class MetricsRecord(TypedDict):
    """Summary metrics for analytics panels."""

    total_points: int
    current_streak: int
    achievements_unlocked: int
    badges_earned: int
    leaderboard_rank: int
    engagement_score: int


class InsightsRecord(TypedDict):
    """Qualitative motivation/risk signals."""

    motivation_level: MotivationLevel
    recommended_actions: list[str]
    risk_factors: list[str]


class ActivityAward(TypedDict):
    """Result of scoring and applying one activity."""

    points_awarded: int
    total_points: int
    unlocked: list[AchievementId]


# =============================================================================
# Inputs
# =============================================================================


class Activity(TypedDict, total=False):
    """Learning activity reported by a caller."""

    id: str
    type: str
    difficulty: str
    duration: float
    bonus: float


class UserProfile(TypedDict, total=False):
    """Caller-supplied profile used for reward suggestions."""

    interests: list[str]
    level: str


# Options mapping after OPTIONS_SCHEMA validation
GamificationOptions = dict[str, Any]
