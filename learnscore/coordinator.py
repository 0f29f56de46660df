# File: coordinator.py
"""Coordinator for the learnscore engine.

Single facade a presentation layer calls. Owns the user state store, the
signal dispatcher, the per-user locks and the managers, and forwards every
public operation to the manager responsible for it.
"""

# pylint: disable=too-many-public-methods

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, datetime
import threading
from typing import TYPE_CHECKING, Any
import uuid

from . import const
from .config import (
    validate_achievement_catalog,
    validate_badge_catalog,
    validate_options,
)
from .data_builders import default_achievement_catalog, default_badge_catalog
from .helpers.dispatcher import Dispatcher
from .managers import (
    EconomyManager,
    GamificationManager,
    StatisticsManager,
    StreakManager,
    UserManager,
    validate_user_id,
)
from .store import InMemoryUserStateStore, UserStateStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .type_defs import (
        AchievementDefinition,
        AchievementRecord,
        ActivityAward,
        BadgeDefinition,
        BadgeRecord,
        InsightsRecord,
        Leaderboard,
        LedgerEntry,
        MetricsRecord,
        MilestoneRecord,
        Progress,
        RewardSuggestion,
        StreakRecord,
        TierRecord,
        UserGamificationState,
        UserProfile,
    )


class GamificationCoordinator:
    """Coordinator for points, streaks, achievements, badges and rankings.

    Every per-user operation runs under that user's re-entrant lock, so
    concurrent callers touching the same user serialize while different users
    proceed independently.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        store: UserStateStore | None = None,
        achievements: Iterable[AchievementDefinition] | None = None,
        badges: Iterable[BadgeDefinition] | None = None,
        instance_id: str | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            options: Engine options (see config.OPTIONS_SCHEMA)
            store: User state store (defaults to an in-memory store)
            achievements: Achievement catalog (defaults to the reference catalog)
            badges: Badge catalog (defaults to the reference catalog)
            instance_id: Signal namespace (defaults to a random id)

        Raises:
            InvalidConfigError: If options or a catalog entry fail validation
        """
        self.options = validate_options(options)
        self.store = store if store is not None else InMemoryUserStateStore()
        self.achievement_catalog: list[AchievementDefinition] = (
            validate_achievement_catalog(achievements)
            if achievements is not None
            else default_achievement_catalog()
        )
        self.badge_catalog: list[BadgeDefinition] = (
            validate_badge_catalog(badges)
            if badges is not None
            else default_badge_catalog()
        )
        self.instance_id = instance_id or uuid.uuid4().hex
        self.dispatcher = Dispatcher()

        self._user_locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()
        self._unload_callbacks: list[Callable[[], None]] = []

        self.user_manager = UserManager(self)
        self.economy_manager = EconomyManager(self)
        self.streak_manager = StreakManager(self)
        self.gamification_manager = GamificationManager(self)
        self.statistics_manager = StatisticsManager(self)
        for manager in (
            self.user_manager,
            self.economy_manager,
            self.streak_manager,
            self.gamification_manager,
            self.statistics_manager,
        ):
            manager.setup()

        const.LOGGER.info(
            "Gamification coordinator %s ready: %d achievements, %d badges",
            self.instance_id,
            len(self.achievement_catalog),
            len(self.badge_catalog),
        )

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    def on_unload(self, callback: Callable[[], None]) -> None:
        """Register a callback to run on shutdown()."""
        self._unload_callbacks.append(callback)

    def shutdown(self) -> None:
        """Disconnect every manager listener."""
        while self._unload_callbacks:
            self._unload_callbacks.pop()()
        const.LOGGER.debug("Gamification coordinator %s shut down", self.instance_id)

    # -------------------------------------------------------------------------------------
    # Locking
    # -------------------------------------------------------------------------------------

    def _get_lock(self, user_id: str) -> threading.RLock:
        """Get or create the lock for a user."""
        with self._locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._user_locks[user_id] = lock
            return lock

    @contextmanager
    def _user_lock(self, user_id: Any) -> Iterator[str]:
        """Validate user_id, then hold its lock for the block."""
        user_id = validate_user_id(user_id)
        with self._get_lock(user_id):
            yield user_id

    # -------------------------------------------------------------------------------------
    # Points
    # -------------------------------------------------------------------------------------

    def calculate_points(self, activity: Any) -> int:
        """Score an activity. Pure: nothing is read or written."""
        return self.economy_manager.calculate_points(activity)

    def add_points(
        self,
        user_id: Any,
        points: Any,
        *,
        source: str = const.POINTS_SOURCE_MANUAL,
        reference_id: str | None = None,
    ) -> int:
        """Add points, run the achievement check and return the new total."""
        with self._user_lock(user_id) as uid:
            return self.economy_manager.add_points(
                uid, points, source=source, reference_id=reference_id
            )

    def award_activity(self, user_id: Any, activity: Any) -> ActivityAward:
        """Score an activity and credit it to the user.

        Returns:
            {points_awarded, total_points, unlocked} where unlocked lists the
            achievement ids unlocked by this award
        """
        with self._user_lock(user_id) as uid:
            points = self.calculate_points(activity)
            before = set(self.gamification_manager.get_user_achievements(uid))
            activity_id = activity.get(const.ATTR_ACTIVITY_ID)
            reference_id = None if activity_id is None else str(activity_id)
            total = self.economy_manager.add_points(
                uid,
                points,
                source=const.POINTS_SOURCE_ACTIVITY,
                reference_id=reference_id,
            )
            unlocked = [
                achievement_id
                for achievement_id in self.gamification_manager.get_user_achievements(uid)
                if achievement_id not in before
            ]
            return {
                "points_awarded": points,
                "total_points": total,
                "unlocked": unlocked,
            }

    def get_user_points(self, user_id: Any) -> int:
        with self._user_lock(user_id) as uid:
            return self.economy_manager.get_user_points(uid)

    def get_points_history(
        self, user_id: Any, limit: int | None = None
    ) -> list[LedgerEntry]:
        with self._user_lock(user_id) as uid:
            return self.economy_manager.get_points_history(uid, limit)

    # -------------------------------------------------------------------------------------
    # Streaks
    # -------------------------------------------------------------------------------------

    def update_streak(self, user_id: Any, days: Any) -> StreakRecord:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.update_streak(uid, days)

    def reset_streak(self, user_id: Any) -> StreakRecord:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.reset_streak(uid)

    def record_activity_day(
        self, user_id: Any, day: date | datetime | str | None = None
    ) -> StreakRecord:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.record_activity_day(uid, day)

    def get_streak(self, user_id: Any) -> StreakRecord:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.get_streak(uid)

    def calculate_streak_bonus(self, user_id: Any) -> int:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.calculate_streak_bonus(uid)

    def get_streak_milestones(self, user_id: Any) -> list[MilestoneRecord]:
        with self._user_lock(user_id) as uid:
            return self.streak_manager.get_streak_milestones(uid)

    # -------------------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------------------

    def set_courses_completed(self, user_id: Any, count: Any) -> int:
        with self._user_lock(user_id) as uid:
            return self.user_manager.set_courses_completed(uid, count)

    def increment_courses_completed(self, user_id: Any, by: Any = 1) -> int:
        with self._user_lock(user_id) as uid:
            return self.user_manager.increment_courses_completed(uid, by)

    # -------------------------------------------------------------------------------------
    # Achievements & Badges
    # -------------------------------------------------------------------------------------

    def check_achievements(self, user_id: Any) -> list[AchievementRecord]:
        with self._user_lock(user_id) as uid:
            return self.gamification_manager.check_achievements(uid)

    def get_user_achievements(self, user_id: Any) -> list[str]:
        with self._user_lock(user_id) as uid:
            return self.gamification_manager.get_user_achievements(uid)

    def get_achievement_progress(
        self, user_id: Any, achievement_id: str
    ) -> Progress | None:
        with self._user_lock(user_id) as uid:
            return self.gamification_manager.get_achievement_progress(
                uid, achievement_id
            )

    def get_user_badges(self, user_id: Any) -> list[BadgeRecord]:
        with self._user_lock(user_id) as uid:
            return self.gamification_manager.get_user_badges(uid)

    def get_badge_progress(self, user_id: Any, badge_id: str) -> Progress | None:
        with self._user_lock(user_id) as uid:
            return self.gamification_manager.get_badge_progress(uid, badge_id)

    # -------------------------------------------------------------------------------------
    # Leaderboard, Rewards & Engagement
    # -------------------------------------------------------------------------------------

    def get_leaderboard(
        self, period: str | None = None, limit: int | None = None
    ) -> Leaderboard:
        return self.statistics_manager.get_leaderboard(period, limit)

    def get_reward_tier(self, user_id: Any) -> TierRecord:
        with self._user_lock(user_id) as uid:
            return self.statistics_manager.get_reward_tier(uid)

    def generate_rewards(
        self, user_id: Any, user_profile: UserProfile | None = None
    ) -> list[RewardSuggestion]:
        with self._user_lock(user_id) as uid:
            return self.statistics_manager.generate_rewards(uid, user_profile)

    @staticmethod
    def calculate_engagement_score(state: UserGamificationState) -> int:
        return StatisticsManager.calculate_engagement_score(state)

    def get_gamification_metrics(self, user_id: Any) -> MetricsRecord:
        with self._user_lock(user_id) as uid:
            return self.statistics_manager.get_gamification_metrics(uid)

    def get_engagement_insights(self, user_id: Any) -> InsightsRecord:
        with self._user_lock(user_id) as uid:
            return self.statistics_manager.get_engagement_insights(uid)
