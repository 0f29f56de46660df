"""Reward Engine - Pure logic for reward tiers and reward suggestions.

Tiers are checked from the highest threshold down; the first one the point
total reaches wins. points_to_next is always max(0, next threshold - points).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const

if TYPE_CHECKING:
    from ..type_defs import RewardSuggestion, TierRecord


# Profiles are free-form; only interests is read and must be a list of tags
USER_PROFILE_SCHEMA = vol.Schema(
    {
        vol.Optional(const.PROFILE_INTERESTS, default=list): vol.Any(
            None, [vol.Coerce(str)]
        ),
    },
    extra=vol.ALLOW_EXTRA,
)


class RewardEngine:
    """Pure logic engine for reward tiers and suggestions."""

    @staticmethod
    def tier_for_points(points: int) -> TierRecord:
        """Map a point total to its tier record.

        ≥10000 Diamond, ≥5000 Gold, ≥2500 Silver, ≥1000 Bronze, else Rookie.
        """
        next_tier: tuple[str, int] | None = None
        for name, minimum, benefits in const.REWARD_TIERS:
            # The 0-minimum tier catches everything below the lowest threshold
            if points >= minimum or minimum == 0:
                if next_tier is None:
                    next_name, points_to_next = None, 0
                else:
                    next_name = next_tier[0]
                    points_to_next = max(0, next_tier[1] - points)
                return {
                    "level": name,
                    "points": points,
                    "next_tier": next_name,
                    "points_to_next": points_to_next,
                    "benefits": list(benefits),
                }
            next_tier = (name, minimum)
        raise ValueError("REWARD_TIERS must end with a 0-minimum tier")

    @staticmethod
    def normalize_profile(user_profile: Any) -> dict[str, Any]:
        """Validate a user profile, treating a missing or malformed one as empty."""
        if not isinstance(user_profile, Mapping):
            return {const.PROFILE_INTERESTS: []}
        try:
            profile = USER_PROFILE_SCHEMA(dict(user_profile))
        except vol.Invalid as err:
            const.LOGGER.debug("Ignoring malformed user profile: %s", err)
            return {const.PROFILE_INTERESTS: []}
        if profile.get(const.PROFILE_INTERESTS) is None:
            profile[const.PROFILE_INTERESTS] = []
        return profile

    @classmethod
    def suggest_rewards(
        cls, current_streak: int, user_profile: Any
    ) -> list[RewardSuggestion]:
        """Generate reward suggestions from profile interests and streak.

        Pure recommendation generation; nothing is awarded.
        """
        interests = cls.normalize_profile(user_profile)[const.PROFILE_INTERESTS]
        rewards: list[RewardSuggestion] = []

        for tag, (title, description, points) in const.INTEREST_REWARDS.items():
            if tag in interests:
                rewards.append(
                    {
                        "type": const.REWARD_TYPE_COURSE_RECOMMENDATION,
                        "title": title,
                        "description": description,
                        "points": points,
                    }
                )

        if current_streak >= const.STREAK_REWARD_MIN_DAYS:
            title, description, points = const.STREAK_REWARD
            rewards.append(
                {
                    "type": const.REWARD_TYPE_BONUS_POINTS,
                    "title": title,
                    "description": description,
                    "points": points,
                }
            )

        return rewards
