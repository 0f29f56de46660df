"""Engine modules for learnscore.

Contains stateless computation engines:
- economy_engine: Activity scoring and points ledger entries
- streak_engine: Streak updates, day-based derivation, bonus and milestones
- gamification_engine: Rule interpreter, achievement and badge evaluation
- leaderboard_engine: Ranking and rank badges
- reward_engine: Reward tiers and reward suggestions
- engagement_engine: Engagement score and insights
"""

from .economy_engine import ACTIVITY_SCHEMA, EconomyEngine
from .engagement_engine import EngagementEngine
from .gamification_engine import GamificationEngine
from .leaderboard_engine import LeaderboardEngine
from .reward_engine import USER_PROFILE_SCHEMA, RewardEngine
from .streak_engine import StreakEngine

__all__ = [
    "ACTIVITY_SCHEMA",
    "USER_PROFILE_SCHEMA",
    "EconomyEngine",
    "EngagementEngine",
    "GamificationEngine",
    "LeaderboardEngine",
    "RewardEngine",
    "StreakEngine",
]
