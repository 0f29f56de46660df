"""Builders shared across learnscore tests."""

from __future__ import annotations

from learnscore import const
from learnscore.data_builders import build_user_state
from learnscore.type_defs import UserGamificationState


def make_state(
    user_id: str = "u1",
    *,
    points: int = 0,
    streak: int = 0,
    longest: int | None = None,
    achievements: list[str] | None = None,
    courses: int = 0,
) -> UserGamificationState:
    """Build a user record with the given counters."""
    state = build_user_state(user_id)
    state[const.DATA_USER_POINTS] = points  # type: ignore[literal-required]
    state[const.DATA_USER_STREAK][const.DATA_STREAK_CURRENT] = streak  # type: ignore[literal-required]
    state[const.DATA_USER_STREAK][const.DATA_STREAK_LONGEST] = (  # type: ignore[literal-required]
        streak if longest is None else longest
    )
    state[const.DATA_USER_ACHIEVEMENTS] = list(achievements or [])  # type: ignore[literal-required]
    state[const.DATA_USER_COURSES_COMPLETED] = courses  # type: ignore[literal-required]
    return state
