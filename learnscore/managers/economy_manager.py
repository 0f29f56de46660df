"""Economy Manager - Stateful point operations.

This manager handles all point transactions:
- add_points(): Add points to a user's total (with ledger entry)
- get_user_points(): Read the current total
- get_points_history(): Read the newest ledger entries

Every transaction emits SIGNAL_SUFFIX_POINTS_CHANGED so other managers can
react (GamificationManager runs the achievement check on it).

Points never decrease: there is no withdraw operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.economy_engine import EconomyEngine
from ..utils.dt_utils import dt_now_utc
from .base_manager import BaseManager
from .user_manager import validate_user_id

if TYPE_CHECKING:
    from ..type_defs import LedgerEntry


class EconomyManager(BaseManager):
    """Manages point transactions and the per-user ledger.

    Responsibilities:
    - Validate point deltas before any write
    - Append and prune ledger entries
    - Emit points_changed after every transaction

    NOT responsible for:
    - Achievement checks (GamificationManager listens for points_changed)
    - Locking (GamificationCoordinator serializes per-user calls)
    """

    def setup(self) -> None:
        """Nothing to subscribe to; EconomyManager only emits."""

    # =========================================================================
    # Core Transaction Methods
    # =========================================================================

    def add_points(
        self,
        user_id: Any,
        points: Any,
        *,
        source: str = const.POINTS_SOURCE_MANUAL,
        reference_id: str | None = None,
    ) -> int:
        """Add points to a user's total.

        Args:
            user_id: The user's identifier
            points: Non-negative integer amount
            source: Transaction source (POINTS_SOURCE_*)
            reference_id: Optional related activity/course id

        Returns:
            The new point total

        Raises:
            InvalidUserIdError: If user_id is falsy
            InvalidPointsError: If points is negative or not an int
        """
        validate_user_id(user_id)
        EconomyEngine.validate_points(points)

        state = self.coordinator.user_manager.get_state(user_id)
        old_total = state.get(const.DATA_USER_POINTS, 0)
        new_total = EconomyEngine.calculate_new_total(old_total, points)

        entry = EconomyEngine.create_ledger_entry(
            current_total=old_total,
            delta=points,
            source=source,
            reference_id=reference_id,
        )
        ledger = state.setdefault(const.DATA_USER_LEDGER, [])  # type: ignore[misc]
        ledger.append(entry)
        EconomyEngine.prune_ledger(
            ledger,
            max_entries=self.coordinator.options[const.CONF_LEDGER_MAX_ENTRIES],
            max_age_days=self.coordinator.options[const.CONF_LEDGER_MAX_AGE_DAYS],
            now_utc=dt_now_utc(),
        )

        state[const.DATA_USER_POINTS] = new_total  # type: ignore[literal-required]
        self.coordinator.user_manager.touch(state)

        const.LOGGER.debug(
            "EconomyManager.add_points: user=%s, amount=%d, source=%s, old=%d, new=%d",
            user_id,
            points,
            source,
            old_total,
            new_total,
        )

        self.emit(
            const.SIGNAL_SUFFIX_POINTS_CHANGED,
            user_id=user_id,
            old_total=old_total,
            new_total=new_total,
            delta=points,
            source=source,
            reference_id=reference_id,
        )
        return new_total

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_user_points(self, user_id: Any) -> int:
        """Return the user's current total (0 for a new user)."""
        return self.coordinator.user_manager.get_state(user_id).get(
            const.DATA_USER_POINTS, 0
        )

    def get_points_history(
        self, user_id: Any, limit: int | None = None
    ) -> list[LedgerEntry]:
        """Return ledger entries, newest first.

        Args:
            user_id: The user's identifier
            limit: Maximum entries to return (None for all retained)
        """
        ledger = self.coordinator.user_manager.get_state(user_id).get(
            const.DATA_USER_LEDGER, []
        )
        entries = [dict(entry) for entry in reversed(ledger)]
        if limit is not None:
            entries = entries[: max(0, limit)]
        return entries  # type: ignore[return-value]

    @staticmethod
    def calculate_points(activity: Any) -> int:
        """Score an activity (pure; see EconomyEngine.calculate_points)."""
        return EconomyEngine.calculate_points(activity)
