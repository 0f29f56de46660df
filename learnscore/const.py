# File: const.py
"""Constants for the learnscore gamification engine.

This file centralizes record keys, catalog thresholds, tier tables, signal
suffixes and configuration defaults for consistency across engines, managers
and the coordinator.
"""

import logging

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# User State Record Keys
# ------------------------------------------------------------------------------------------------
DATA_USER_ID = "user_id"
DATA_USER_POINTS = "points"
DATA_USER_STREAK = "streak"
DATA_USER_ACHIEVEMENTS = "achievements"
DATA_USER_ACHIEVEMENTS_UNLOCKED_AT = "achievements_unlocked_at"
DATA_USER_COURSES_COMPLETED = "courses_completed"
DATA_USER_LAST_ACTIVITY = "last_activity"
DATA_USER_LEDGER = "ledger"

# Streak record
DATA_STREAK_CURRENT = "current"
DATA_STREAK_LONGEST = "longest"
DATA_STREAK_LAST_ACTIVITY = "last_activity"
DATA_STREAK_LAST_ACTIVITY_DAY = "last_activity_day"

# Ledger entries
DATA_LEDGER_TIMESTAMP = "timestamp"
DATA_LEDGER_AMOUNT = "amount"
DATA_LEDGER_BALANCE_AFTER = "balance_after"
DATA_LEDGER_SOURCE = "source"
DATA_LEDGER_REFERENCE_ID = "reference_id"

# ------------------------------------------------------------------------------------------------
# Activity Scoring
# ------------------------------------------------------------------------------------------------
ATTR_ACTIVITY_ID = "id"
ATTR_ACTIVITY_TYPE = "type"
ATTR_ACTIVITY_DIFFICULTY = "difficulty"
ATTR_ACTIVITY_DURATION = "duration"
ATTR_ACTIVITY_BONUS = "bonus"

DIFFICULTY_EASY = "easy"
DIFFICULTY_MEDIUM = "medium"
DIFFICULTY_HARD = "hard"
DIFFICULTY_EXPERT = "expert"

DIFFICULTY_MULTIPLIERS: dict[str, float] = {
    DIFFICULTY_EASY: 0.5,
    DIFFICULTY_MEDIUM: 1.0,
    DIFFICULTY_HARD: 1.5,
    DIFFICULTY_EXPERT: 2.0,
}

DEFAULT_ACTIVITY_DIFFICULTY = DIFFICULTY_MEDIUM
DEFAULT_ACTIVITY_DURATION = 0
DEFAULT_ACTIVITY_BONUS = 0

# Point transaction sources
POINTS_SOURCE_MANUAL = "manual"
POINTS_SOURCE_ACTIVITY = "activity"

# ------------------------------------------------------------------------------------------------
# Rules (tagged-variant catalog conditions)
# ------------------------------------------------------------------------------------------------
RULE_KIND = "kind"
RULE_VALUE = "value"

RULE_KIND_POINTS_AT_LEAST = "points_at_least"
RULE_KIND_STREAK_AT_LEAST = "streak_at_least"
RULE_KIND_COURSES_AT_LEAST = "courses_at_least"

RULE_KINDS: tuple[str, ...] = (
    RULE_KIND_POINTS_AT_LEAST,
    RULE_KIND_STREAK_AT_LEAST,
    RULE_KIND_COURSES_AT_LEAST,
)

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_NAME = "name"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_ICON = "icon"
DATA_ACHIEVEMENT_POINTS_THRESHOLD = "points_threshold"
DATA_ACHIEVEMENT_RULE = "rule"
DATA_ACHIEVEMENT_UNLOCKED_AT = "unlocked_at"

ACHIEVEMENT_FIRST_MILESTONE = "first_milestone"
ACHIEVEMENT_POINT_MASTER = "point_master"
ACHIEVEMENT_STREAK_STARTER = "streak_starter"
ACHIEVEMENT_WEEKLY_WARRIOR = "weekly_warrior"
ACHIEVEMENT_COURSE_MASTER = "course_master"

# ------------------------------------------------------------------------------------------------
# Badges
# ------------------------------------------------------------------------------------------------
DATA_BADGE_ID = "id"
DATA_BADGE_NAME = "name"
DATA_BADGE_DESCRIPTION = "description"
DATA_BADGE_ICON = "icon"
DATA_BADGE_RULE = "rule"
DATA_BADGE_EARNED_AT = "earned_at"

BADGE_DEDICATED_LEARNER = "dedicated_learner"
BADGE_POINT_COLLECTOR = "point_collector"
BADGE_COURSE_MASTER = "course_master"

# Progress records
DATA_PROGRESS_CURRENT = "current"
DATA_PROGRESS_TARGET = "target"
DATA_PROGRESS_PERCENTAGE = "percentage"
DATA_PROGRESS_DESCRIPTION = "description"

# ------------------------------------------------------------------------------------------------
# Streaks
# ------------------------------------------------------------------------------------------------
DEFAULT_STREAK_BONUS_FACTOR = 7.14

# (days, reward label) in ascending order
STREAK_MILESTONES: tuple[tuple[int, str], ...] = (
    (3, "3-Day Streak Badge"),
    (7, "Weekly Dedication Badge"),
    (14, "Fortnight Warrior Badge"),
    (30, "Monthly Dedication Badge"),
    (100, "Century Streak Badge"),
)

# ------------------------------------------------------------------------------------------------
# Leaderboard
# ------------------------------------------------------------------------------------------------
LEADERBOARD_PERIOD_ALL_TIME = "all_time"
DEFAULT_LEADERBOARD_SIZE = 100
MAX_LEADERBOARD_SIZE = 1000

RANK_BADGE_GOLD = "gold"
RANK_BADGE_SILVER = "silver"
RANK_BADGE_BRONZE = "bronze"
RANK_BADGE_PARTICIPANT = "participant"

# (highest rank included, badge) in ascending order
RANK_BADGE_BANDS: tuple[tuple[int, str], ...] = (
    (1, RANK_BADGE_GOLD),
    (3, RANK_BADGE_SILVER),
    (10, RANK_BADGE_BRONZE),
)

# ------------------------------------------------------------------------------------------------
# Reward Tiers
# ------------------------------------------------------------------------------------------------
TIER_ROOKIE = "Rookie"
TIER_BRONZE = "Bronze"
TIER_SILVER = "Silver"
TIER_GOLD = "Gold"
TIER_DIAMOND = "Diamond"

# (name, minimum points, benefits) in descending threshold order
REWARD_TIERS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    (TIER_DIAMOND, 10000, ("VIP Support", "Exclusive Content", "Priority Access")),
    (TIER_GOLD, 5000, ("Priority Support", "Exclusive Content")),
    (TIER_SILVER, 2500, ("Priority Support", "Exclusive Content")),
    (TIER_BRONZE, 1000, ("Basic Support",)),
    (TIER_ROOKIE, 0, ("Welcome Package",)),
)

# Reward suggestions
REWARD_TYPE_COURSE_RECOMMENDATION = "course_recommendation"
REWARD_TYPE_BONUS_POINTS = "bonus_points"

PROFILE_INTERESTS = "interests"
INTEREST_PROGRAMMING = "programming"
INTEREST_DATA_SCIENCE = "data-science"

# interest tag -> (title, description, points)
INTEREST_REWARDS: dict[str, tuple[str, str, int]] = {
    INTEREST_PROGRAMMING: (
        "Advanced Python Course",
        "Perfect for your skill level",
        500,
    ),
    INTEREST_DATA_SCIENCE: (
        "Machine Learning Fundamentals",
        "Build on your data science foundation",
        750,
    ),
}

STREAK_REWARD_MIN_DAYS = 7
STREAK_REWARD = ("Streak Bonus", "Keep up the great work!", 100)

# ------------------------------------------------------------------------------------------------
# Engagement
# ------------------------------------------------------------------------------------------------
ENGAGEMENT_POINTS_DIVISOR = 100
ENGAGEMENT_POINTS_CAP = 50
ENGAGEMENT_STREAK_WEIGHT = 5
ENGAGEMENT_STREAK_CAP = 30
ENGAGEMENT_ACHIEVEMENT_WEIGHT = 10
ENGAGEMENT_ACHIEVEMENT_CAP = 20

MOTIVATION_HIGH = "high"
MOTIVATION_MEDIUM = "medium"
MOTIVATION_LOW = "low"

MOTIVATION_HIGH_MIN_SCORE = 80
MOTIVATION_MEDIUM_MIN_SCORE = 60

INSIGHT_LOW_STREAK_DAYS = 3
INSIGHT_LOW_POINTS = 1000
INSIGHT_LOW_RANK = 50

ACTION_DAILY_CHALLENGES = "Complete daily challenges"
ACTION_COURSE_COMPLETION = "Focus on course completion"
ACTION_STUDY_GROUPS = "Join study groups"
RISK_LOW_STREAK = "Low activity streak"

# ------------------------------------------------------------------------------------------------
# Signals (instance-scoped via helpers.dispatcher.get_event_signal)
# ------------------------------------------------------------------------------------------------
SIGNAL_PREFIX = "learnscore"
SIGNAL_SUFFIX_POINTS_CHANGED = "points_changed"
SIGNAL_SUFFIX_STREAK_CHANGED = "streak_changed"
SIGNAL_SUFFIX_COURSES_CHANGED = "courses_changed"
SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED = "achievement_unlocked"

# ------------------------------------------------------------------------------------------------
# Configuration Options
# ------------------------------------------------------------------------------------------------
CONF_LEADERBOARD_SIZE = "leaderboard_size"
CONF_STREAK_BONUS_FACTOR = "streak_bonus_factor"
CONF_LEDGER_MAX_ENTRIES = "ledger_max_entries"
CONF_LEDGER_MAX_AGE_DAYS = "ledger_max_age_days"
CONF_DEFAULT_LEADERBOARD_PERIOD = "default_leaderboard_period"

DEFAULT_LEDGER_MAX_ENTRIES = 50
DEFAULT_LEDGER_MAX_AGE_DAYS = None

# ------------------------------------------------------------------------------------------------
# Error Translation Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_INVALID_USER_ID = "invalid_user_id"
TRANS_KEY_INVALID_POINTS = "invalid_points"
TRANS_KEY_INVALID_STREAK = "invalid_streak"
TRANS_KEY_INVALID_ACTIVITY = "invalid_activity"
TRANS_KEY_INVALID_COURSES = "invalid_courses"
TRANS_KEY_INVALID_CONFIG = "invalid_config"
