"""Economy Engine - Pure logic for activity scoring and the points ledger.

This engine provides stateless, pure Python functions for:
- Activity scoring (difficulty multiplier, fractional bonus, half-up rounding)
- Point value validation (non-negative integers only)
- Ledger entry creation and pruning

ARCHITECTURE: This is a pure logic engine with no store access.
All functions are static methods that operate on passed-in data.
State management belongs in EconomyManager.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
import math
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const
from ..exceptions import InvalidActivityError, InvalidPointsError
from ..utils.dt_utils import dt_now_iso, dt_now_utc, dt_to_utc
from ..utils.math_utils import is_strict_int, round_half_up

if TYPE_CHECKING:
    from datetime import datetime

    from ..type_defs import Activity, LedgerEntry


def _finite(value: float) -> float:
    if isinstance(value, float) and not math.isfinite(value):
        raise vol.Invalid("expected a finite number")
    return value


_NON_NEGATIVE_NUMBER = vol.All(
    vol.Any(int, float, msg="expected a number"),
    _finite,
    vol.Range(min=0),
)

ACTIVITY_SCHEMA = vol.Schema(
    {
        vol.Optional(const.ATTR_ACTIVITY_ID): vol.Any(None, str, int),
        vol.Optional(const.ATTR_ACTIVITY_TYPE): vol.Any(None, str),
        vol.Optional(
            const.ATTR_ACTIVITY_DIFFICULTY, default=const.DEFAULT_ACTIVITY_DIFFICULTY
        ): vol.In(list(const.DIFFICULTY_MULTIPLIERS)),
        vol.Optional(
            const.ATTR_ACTIVITY_DURATION, default=const.DEFAULT_ACTIVITY_DURATION
        ): _NON_NEGATIVE_NUMBER,
        vol.Optional(
            const.ATTR_ACTIVITY_BONUS, default=const.DEFAULT_ACTIVITY_BONUS
        ): _NON_NEGATIVE_NUMBER,
    },
    extra=vol.ALLOW_EXTRA,
)


class EconomyEngine:
    """Pure logic engine for point calculations and ledger operations.

    All methods are static - no instance state.
    """

    @staticmethod
    def validate_activity(activity: Any) -> Activity:
        """Validate an activity and fill in defaults.

        Raises:
            InvalidActivityError: If activity is missing, not a mapping, or
                fails ACTIVITY_SCHEMA (unknown difficulty, negative or
                non-finite duration...)
        """
        if activity is None or not isinstance(activity, Mapping):
            raise InvalidActivityError()
        # bools are ints to voluptuous; reject them explicitly
        for key in (const.ATTR_ACTIVITY_DURATION, const.ATTR_ACTIVITY_BONUS):
            if isinstance(activity.get(key), bool):
                raise InvalidActivityError(
                    f"Invalid activity object: {key} must be a number",
                    placeholders={"field": key},
                )
        try:
            return ACTIVITY_SCHEMA(dict(activity))
        except vol.Invalid as err:
            raise InvalidActivityError(
                f"Invalid activity object: {err}",
                placeholders={"field": ".".join(str(p) for p in err.path)},
            ) from err

    @staticmethod
    def calculate_points(activity: Any) -> int:
        """Score an activity.

        base = duration * difficulty multiplier
        bonus_points = base * bonus
        result = round_half_up(base + bonus_points)

        Pure function - no side effects.

        Args:
            activity: Mapping with optional type, difficulty (default medium),
                duration (minutes, default 0), bonus (fraction, default 0)

        Returns:
            Integer points

        Raises:
            InvalidActivityError: If activity fails validation or the score
                is not a finite number
        """
        validated = EconomyEngine.validate_activity(activity)
        multiplier = const.DIFFICULTY_MULTIPLIERS[
            validated[const.ATTR_ACTIVITY_DIFFICULTY]  # type: ignore[literal-required]
        ]
        try:
            base_points = validated[const.ATTR_ACTIVITY_DURATION] * multiplier  # type: ignore[literal-required]
            bonus_points = base_points * validated[const.ATTR_ACTIVITY_BONUS]  # type: ignore[literal-required]
            total = float(base_points + bonus_points)
        except OverflowError:
            total = math.inf
        # Finite inputs can still overflow (duration=1e308 on expert)
        if not math.isfinite(total):
            raise InvalidActivityError(
                "Invalid activity object: points overflow",
                placeholders={"field": const.ATTR_ACTIVITY_DURATION},
            )
        return round_half_up(total)

    @staticmethod
    def validate_points(points: Any) -> int:
        """Check a point delta is a non-negative integer.

        Raises:
            InvalidPointsError: If points is not an int (bools rejected) or < 0
        """
        if not is_strict_int(points) or points < 0:
            raise InvalidPointsError(placeholders={"points": str(points)})
        return points

    @staticmethod
    def calculate_new_total(current_total: int, delta: int) -> int:
        """Return the new total after an additive update."""
        return current_total + delta

    @staticmethod
    def create_ledger_entry(
        current_total: int,
        delta: int,
        source: str,
        reference_id: str | None = None,
    ) -> LedgerEntry:
        """Create an immutable ledger entry for a transaction.

        Args:
            current_total: Total BEFORE the transaction
            delta: Points added
            source: Transaction source (POINTS_SOURCE_*)
            reference_id: Optional id of the related activity/course

        Returns:
            LedgerEntry TypedDict with transaction details
        """
        return {
            const.DATA_LEDGER_TIMESTAMP: dt_now_iso(),
            const.DATA_LEDGER_AMOUNT: delta,
            const.DATA_LEDGER_BALANCE_AFTER: current_total + delta,
            const.DATA_LEDGER_SOURCE: source,
            const.DATA_LEDGER_REFERENCE_ID: reference_id,
        }

    @staticmethod
    def prune_ledger(
        ledger: list[LedgerEntry],
        max_entries: int = const.DEFAULT_LEDGER_MAX_ENTRIES,
        max_age_days: int | None = None,
        now_utc: datetime | None = None,
    ) -> list[LedgerEntry]:
        """Trim ledger to maximum entries, keeping most recent.

        Modifies the list in place and returns it for convenience.
        Newest entries are at the END of the list (append order).

        Args:
            ledger: List of ledger entries to prune
            max_entries: Maximum entries to keep
            max_age_days: Optional age-based retention window in days
            now_utc: Optional current time override for deterministic tests

        Returns:
            The pruned ledger list (same object, modified in place)
        """
        if max_age_days is not None and max_age_days > 0:
            cutoff = (now_utc or dt_now_utc()) - timedelta(days=max_age_days)

            retained: list[LedgerEntry] = []
            for entry in ledger:
                parsed = dt_to_utc(entry.get(const.DATA_LEDGER_TIMESTAMP))
                # Entries with unreadable timestamps are kept
                if parsed is None or parsed >= cutoff:
                    retained.append(entry)

            if len(retained) != len(ledger):
                ledger[:] = retained

        if len(ledger) > max_entries:
            del ledger[: len(ledger) - max_entries]
        return ledger
