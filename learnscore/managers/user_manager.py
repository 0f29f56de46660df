"""User Manager - User id validation, record access and course counts.

This manager handles:
- user id validation (InvalidUserIdError before any store access)
- get-or-create access to per-user records
- The courses-completed extension point (set / increment)

The store only ever creates records through get_or_create(), so every new
record appears here and is logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..exceptions import InvalidCoursesError, InvalidUserIdError
from ..utils.dt_utils import dt_now_iso
from ..utils.math_utils import is_strict_int
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import UserGamificationState


def validate_user_id(user_id: Any) -> str:
    """Return user_id if usable, else raise InvalidUserIdError.

    Missing, empty and other falsy ids are rejected; any other id is opaque.
    """
    if not user_id:
        raise InvalidUserIdError(placeholders={"user_id": repr(user_id)})
    return user_id


class UserManager(BaseManager):
    """Manager for per-user record access.

    NOT responsible for:
    - Points (EconomyManager)
    - Streaks (StreakManager)
    - Achievements/badges (GamificationManager)
    """

    def setup(self) -> None:
        """Nothing to subscribe to."""

    def get_state(self, user_id: Any) -> UserGamificationState:
        """Validate user_id and return its record, creating it on first access."""
        return self.store.get_or_create(validate_user_id(user_id))

    def touch(self, state: UserGamificationState) -> None:
        """Stamp the record's last_activity with the current time."""
        state[const.DATA_USER_LAST_ACTIVITY] = dt_now_iso()  # type: ignore[literal-required]

    def get_courses_completed(self, user_id: Any) -> int:
        """Return the externally reported completed course count."""
        return self.get_state(user_id).get(const.DATA_USER_COURSES_COMPLETED, 0)

    def set_courses_completed(self, user_id: Any, count: Any) -> int:
        """Set the completed course count.

        Raises:
            InvalidUserIdError: If user_id is falsy
            InvalidCoursesError: If count is not a non-negative int
        """
        validate_user_id(user_id)
        if not is_strict_int(count) or count < 0:
            raise InvalidCoursesError(placeholders={"count": str(count)})

        state = self.get_state(user_id)
        old_count = state.get(const.DATA_USER_COURSES_COMPLETED, 0)
        state[const.DATA_USER_COURSES_COMPLETED] = count  # type: ignore[literal-required]
        self.touch(state)

        self.emit(
            const.SIGNAL_SUFFIX_COURSES_CHANGED,
            user_id=user_id,
            old_count=old_count,
            new_count=count,
        )
        const.LOGGER.debug(
            "UserManager.set_courses_completed: user=%s, old=%d, new=%d",
            user_id,
            old_count,
            count,
        )
        return count

    def increment_courses_completed(self, user_id: Any, by: Any = 1) -> int:
        """Add to the completed course count.

        Raises:
            InvalidUserIdError: If user_id is falsy
            InvalidCoursesError: If by is not a non-negative int
        """
        validate_user_id(user_id)
        if not is_strict_int(by) or by < 0:
            raise InvalidCoursesError(placeholders={"count": str(by)})
        current = self.get_courses_completed(user_id)
        return self.set_courses_completed(user_id, current + by)
