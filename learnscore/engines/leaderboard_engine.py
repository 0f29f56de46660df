"""Leaderboard Engine - Pure ranking logic across users.

Takes pre-computed rows (one per user) and returns them ranked by points,
descending. Python's sort is stable, so users with equal points keep the
order in which the store yielded them.

The period label is attached to the result only. Every period ranks all
users over all time.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import Leaderboard, LeaderboardEntry, RankBadge


class LeaderboardEngine:
    """Pure logic engine for leaderboard ranking."""

    @staticmethod
    def rank_badge(rank: int) -> RankBadge:
        """Map a 1-based rank to its badge.

        1 → gold, 2-3 → silver, 4-10 → bronze, else participant.
        """
        for max_rank, badge in const.RANK_BADGE_BANDS:
            if rank <= max_rank:
                return badge  # type: ignore[return-value]
        return const.RANK_BADGE_PARTICIPANT  # type: ignore[return-value]

    @classmethod
    def rank(
        cls,
        rows: Iterable[dict],
        limit: int = const.DEFAULT_LEADERBOARD_SIZE,
    ) -> list[LeaderboardEntry]:
        """Sort rows by points descending, truncate and assign ranks.

        Args:
            rows: Dicts with user_id, points, streak, achievements_count,
                badges_count
            limit: Maximum entries to keep

        Returns:
            Ranked LeaderboardEntry list (rank = index + 1)
        """
        ordered = sorted(rows, key=lambda row: row["points"], reverse=True)[:limit]
        return [
            {
                "user_id": row["user_id"],
                "points": row["points"],
                "streak": row["streak"],
                "achievements_count": row["achievements_count"],
                "badges_count": row["badges_count"],
                "rank": index + 1,
                "rank_badge": cls.rank_badge(index + 1),
            }
            for index, row in enumerate(ordered)
        ]

    @staticmethod
    def build(
        period: str, users: list[LeaderboardEntry], last_updated: str
    ) -> Leaderboard:
        """Wrap ranked entries with their period label and timestamp."""
        return {"period": period, "users": users, "last_updated": last_updated}

    @staticmethod
    def find_rank(leaderboard: Leaderboard, user_id: str) -> int:
        """Return user_id's rank, or 0 if absent from the (truncated) board."""
        for entry in leaderboard["users"]:
            if entry["user_id"] == user_id:
                return entry["rank"]
        return 0
