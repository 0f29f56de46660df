"""learnscore: points, streaks, achievements, badges and leaderboards for learners."""

from .config import OPTIONS_SCHEMA, load_options, validate_options
from .coordinator import GamificationCoordinator
from .exceptions import (
    GamificationError,
    InvalidActivityError,
    InvalidConfigError,
    InvalidCoursesError,
    InvalidPointsError,
    InvalidStreakError,
    InvalidUserIdError,
)
from .store import InMemoryUserStateStore, UserStateStore

__all__ = [
    "OPTIONS_SCHEMA",
    "GamificationCoordinator",
    "GamificationError",
    "InMemoryUserStateStore",
    "InvalidActivityError",
    "InvalidConfigError",
    "InvalidCoursesError",
    "InvalidPointsError",
    "InvalidStreakError",
    "InvalidUserIdError",
    "UserStateStore",
    "load_options",
    "validate_options",
]
