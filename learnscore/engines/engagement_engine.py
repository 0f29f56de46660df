"""Engagement Engine - Composite engagement score and qualitative insights.

score = min(points / 100, 50) + min(streak * 5, 30) + min(achievements * 10, 20)

Each component is capped, so the rounded score is bounded to [0, 100].
Insights are simple threshold checks on top of the score and raw state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import round_half_up

if TYPE_CHECKING:
    from ..type_defs import InsightsRecord, MotivationLevel, UserGamificationState


class EngagementEngine:
    """Pure logic engine for engagement scoring and insights."""

    @staticmethod
    def calculate_score(state: UserGamificationState) -> int:
        """Weighted, capped composite of points, streak and achievement count."""
        points_score = min(
            state.get(const.DATA_USER_POINTS, 0) / const.ENGAGEMENT_POINTS_DIVISOR,
            const.ENGAGEMENT_POINTS_CAP,
        )
        streak_score = min(
            state.get(const.DATA_USER_STREAK, {}).get(const.DATA_STREAK_CURRENT, 0)
            * const.ENGAGEMENT_STREAK_WEIGHT,
            const.ENGAGEMENT_STREAK_CAP,
        )
        achievement_score = min(
            len(state.get(const.DATA_USER_ACHIEVEMENTS, []))
            * const.ENGAGEMENT_ACHIEVEMENT_WEIGHT,
            const.ENGAGEMENT_ACHIEVEMENT_CAP,
        )
        return round_half_up(points_score + streak_score + achievement_score)

    @staticmethod
    def motivation_level(score: int) -> MotivationLevel:
        """high (≥80), medium (≥60), low otherwise."""
        if score >= const.MOTIVATION_HIGH_MIN_SCORE:
            return const.MOTIVATION_HIGH  # type: ignore[return-value]
        if score >= const.MOTIVATION_MEDIUM_MIN_SCORE:
            return const.MOTIVATION_MEDIUM  # type: ignore[return-value]
        return const.MOTIVATION_LOW  # type: ignore[return-value]

    @classmethod
    def insights(
        cls,
        state: UserGamificationState,
        engagement_score: int,
        leaderboard_rank: int,
    ) -> InsightsRecord:
        """Derive motivation level, recommended actions and risk factors.

        Args:
            state: The user's gamification record
            engagement_score: Result of calculate_score
            leaderboard_rank: 1-based rank, 0 if outside the leaderboard

        Returns:
            InsightsRecord
        """
        recommended_actions: list[str] = []
        risk_factors: list[str] = []

        current_streak = state.get(const.DATA_USER_STREAK, {}).get(
            const.DATA_STREAK_CURRENT, 0
        )
        if current_streak < const.INSIGHT_LOW_STREAK_DAYS:
            recommended_actions.append(const.ACTION_DAILY_CHALLENGES)
            risk_factors.append(const.RISK_LOW_STREAK)

        if state.get(const.DATA_USER_POINTS, 0) < const.INSIGHT_LOW_POINTS:
            recommended_actions.append(const.ACTION_COURSE_COMPLETION)

        if leaderboard_rank > const.INSIGHT_LOW_RANK:
            recommended_actions.append(const.ACTION_STUDY_GROUPS)

        return {
            "motivation_level": cls.motivation_level(engagement_score),
            "recommended_actions": recommended_actions,
            "risk_factors": risk_factors,
        }
