"""Unit tests for RewardEngine - reward tiers and suggestions."""

from __future__ import annotations

import pytest

from learnscore import const
from learnscore.engines.reward_engine import RewardEngine


class TestTierForPoints:
    """Tests for tier boundaries."""

    @pytest.mark.parametrize(
        ("points", "level", "next_tier", "points_to_next"),
        [
            (0, "Rookie", "Bronze", 1000),
            (999, "Rookie", "Bronze", 1),
            (1000, "Bronze", "Silver", 1500),
            (2500, "Silver", "Gold", 2500),
            (4999, "Silver", "Gold", 1),
            (5000, "Gold", "Diamond", 5000),
            (10000, "Diamond", None, 0),
            (25000, "Diamond", None, 0),
        ],
    )
    def test_boundaries(
        self, points: int, level: str, next_tier: str | None, points_to_next: int
    ) -> None:
        tier = RewardEngine.tier_for_points(points)
        assert tier["level"] == level
        assert tier["points"] == points
        assert tier["next_tier"] == next_tier
        assert tier["points_to_next"] == points_to_next

    def test_benefits(self) -> None:
        assert RewardEngine.tier_for_points(10000)["benefits"] == [
            "VIP Support",
            "Exclusive Content",
            "Priority Access",
        ]
        assert RewardEngine.tier_for_points(0)["benefits"] == ["Welcome Package"]


class TestSuggestRewards:
    """Tests for reward suggestions."""

    def test_no_profile_no_streak(self) -> None:
        assert RewardEngine.suggest_rewards(0, None) == []

    def test_interest_suggestions(self) -> None:
        rewards = RewardEngine.suggest_rewards(
            0, {"interests": ["programming", "data-science", "art"]}
        )
        assert [r["title"] for r in rewards] == [
            "Advanced Python Course",
            "Machine Learning Fundamentals",
        ]
        assert all(r["type"] == const.REWARD_TYPE_COURSE_RECOMMENDATION for r in rewards)
        assert [r["points"] for r in rewards] == [500, 750]

    def test_streak_bonus_suggestion(self) -> None:
        rewards = RewardEngine.suggest_rewards(7, {})
        assert rewards == [
            {
                "type": const.REWARD_TYPE_BONUS_POINTS,
                "title": "Streak Bonus",
                "description": "Keep up the great work!",
                "points": 100,
            }
        ]

    def test_six_day_streak_gets_no_bonus(self) -> None:
        assert RewardEngine.suggest_rewards(6, {}) == []

    @pytest.mark.parametrize("profile", ["programming", {"interests": "programming"}, 3])
    def test_malformed_profile_treated_as_empty(self, profile) -> None:
        assert RewardEngine.suggest_rewards(0, profile) == []
