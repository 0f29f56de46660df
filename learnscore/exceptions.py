"""Exceptions raised by the learnscore engine.

All of these are caller-input validation failures. They are raised before any
state write, so a caller catching one can assume nothing was mutated.
"""

from __future__ import annotations

from . import const


class GamificationError(Exception):
    """Base class for learnscore validation errors.

    Attributes:
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for message placeholders

    Example:
        raise InvalidPointsError(placeholders={"points": str(points)})
    """

    translation_key: str = ""
    default_message: str = "Invalid input"

    def __init__(
        self,
        message: str | None = None,
        *,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize with an optional message override and placeholders."""
        self.placeholders = placeholders or {}
        super().__init__(message or self.default_message)


class InvalidUserIdError(GamificationError, ValueError):
    """User id missing, empty or falsy on a per-user operation."""

    translation_key = const.TRANS_KEY_INVALID_USER_ID
    default_message = "Invalid user ID"


class InvalidPointsError(GamificationError, ValueError):
    """Negative or non-integer point value."""

    translation_key = const.TRANS_KEY_INVALID_POINTS
    default_message = "Points must be a non-negative integer"


class InvalidStreakError(GamificationError, ValueError):
    """Negative or non-integer streak day count."""

    translation_key = const.TRANS_KEY_INVALID_STREAK
    default_message = "Streak must be non-negative"


class InvalidActivityError(GamificationError, ValueError):
    """Missing or malformed activity object."""

    translation_key = const.TRANS_KEY_INVALID_ACTIVITY
    default_message = "Invalid activity object"


class InvalidCoursesError(GamificationError, ValueError):
    """Negative or non-integer completed course count."""

    translation_key = const.TRANS_KEY_INVALID_COURSES
    default_message = "Courses completed must be a non-negative integer"


class InvalidConfigError(GamificationError, ValueError):
    """Options mapping rejected by the options schema."""

    translation_key = const.TRANS_KEY_INVALID_CONFIG
    default_message = "Invalid gamification options"
