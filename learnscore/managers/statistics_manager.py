"""Statistics Manager - Derived, read-only views over user state.

Nothing here writes to the store:
- Leaderboard (ranked snapshot of every known user)
- Reward tier and reward suggestions
- Engagement score, metrics and insights
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.engagement_engine import EngagementEngine
from ..engines.gamification_engine import GamificationEngine
from ..engines.leaderboard_engine import LeaderboardEngine
from ..engines.reward_engine import RewardEngine
from ..utils.dt_utils import dt_now_iso
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import (
        InsightsRecord,
        Leaderboard,
        MetricsRecord,
        RewardSuggestion,
        TierRecord,
        UserGamificationState,
        UserProfile,
    )


class StatisticsManager(BaseManager):
    """Computes leaderboard, tier, reward and engagement views."""

    def setup(self) -> None:
        """Nothing to subscribe to; every view is computed on demand."""

    # =========================================================================
    # LEADERBOARD
    # =========================================================================

    def get_leaderboard(
        self, period: str | None = None, limit: int | None = None
    ) -> Leaderboard:
        """Rank every known user by points.

        Args:
            period: Opaque label copied into the result (not a filter);
                defaults to the configured period
            limit: Maximum entries, capped by the configured leaderboard size
        """
        options = self.coordinator.options
        if period is None:
            period = options[const.CONF_DEFAULT_LEADERBOARD_PERIOD]
        size = options[const.CONF_LEADERBOARD_SIZE]
        if limit is not None:
            size = max(0, min(limit, size))

        earned_at = dt_now_iso()
        badges = self.coordinator.badge_catalog
        rows = []
        for state in self.store.snapshot():
            rows.append(
                {
                    "user_id": state[const.DATA_USER_ID],  # type: ignore[literal-required]
                    "points": state.get(const.DATA_USER_POINTS, 0),
                    "streak": state.get(const.DATA_USER_STREAK, {}).get(
                        const.DATA_STREAK_CURRENT, 0
                    ),
                    "achievements_count": len(
                        state.get(const.DATA_USER_ACHIEVEMENTS, [])
                    ),
                    "badges_count": len(
                        GamificationEngine.current_badges(state, badges, earned_at)
                    ),
                }
            )

        ranked = LeaderboardEngine.rank(rows, limit=size)
        const.LOGGER.debug(
            "StatisticsManager.get_leaderboard: period=%s, users=%d, ranked=%d",
            period,
            len(rows),
            len(ranked),
        )
        return LeaderboardEngine.build(period, ranked, earned_at)

    # =========================================================================
    # REWARDS
    # =========================================================================

    def get_reward_tier(self, user_id: Any) -> TierRecord:
        """Map the user's point total to its reward tier."""
        return RewardEngine.tier_for_points(
            self.coordinator.economy_manager.get_user_points(user_id)
        )

    def generate_rewards(
        self, user_id: Any, user_profile: UserProfile | None = None
    ) -> list[RewardSuggestion]:
        """Reward suggestions from profile interests and current streak."""
        current = self.coordinator.streak_manager.get_streak(user_id).get(
            const.DATA_STREAK_CURRENT, 0
        )
        return RewardEngine.suggest_rewards(current, user_profile)

    # =========================================================================
    # ENGAGEMENT
    # =========================================================================

    @staticmethod
    def calculate_engagement_score(state: UserGamificationState) -> int:
        """Bounded [0, 100] composite of points, streak and achievements."""
        return EngagementEngine.calculate_score(state)

    def _leaderboard_rank(self, user_id: str) -> int:
        return LeaderboardEngine.find_rank(self.get_leaderboard(), user_id)

    def get_gamification_metrics(self, user_id: Any) -> MetricsRecord:
        """Assemble the user's headline numbers."""
        state = self.coordinator.user_manager.get_state(user_id)
        return {
            "total_points": state.get(const.DATA_USER_POINTS, 0),
            "current_streak": state.get(const.DATA_USER_STREAK, {}).get(
                const.DATA_STREAK_CURRENT, 0
            ),
            "achievements_unlocked": len(state.get(const.DATA_USER_ACHIEVEMENTS, [])),
            "badges_earned": len(
                self.coordinator.gamification_manager.get_user_badges(user_id)
            ),
            "leaderboard_rank": self._leaderboard_rank(user_id),
            "engagement_score": self.calculate_engagement_score(state),
        }

    def get_engagement_insights(self, user_id: Any) -> InsightsRecord:
        """Motivation level, recommended actions and risk factors."""
        state = self.coordinator.user_manager.get_state(user_id)
        return EngagementEngine.insights(
            state,
            engagement_score=self.calculate_engagement_score(state),
            leaderboard_rank=self._leaderboard_rank(user_id),
        )
