"""Stateful managers for learnscore.

Managers own all writes to the user state store and talk to each other
through instance-scoped signals (see BaseManager.emit / BaseManager.listen).
"""

from .base_manager import BaseManager
from .economy_manager import EconomyManager
from .gamification_manager import GamificationManager
from .statistics_manager import StatisticsManager
from .streak_manager import StreakManager
from .user_manager import UserManager, validate_user_id

__all__ = [
    "BaseManager",
    "EconomyManager",
    "GamificationManager",
    "StatisticsManager",
    "StreakManager",
    "UserManager",
    "validate_user_id",
]
