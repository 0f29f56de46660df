# File: utils/math_utils.py
"""Math and calculation utilities for learnscore.

Pure Python math functions with no engine or manager imports.

Functions:
    - round_half_up: Round to the nearest integer, halves toward +infinity
    - calculate_percentage: Capped progress percentage as a rounded integer
    - is_strict_int: True for ints that are not bools
"""

from __future__ import annotations

import logging
import math

# Module-level logger
_LOGGER = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's built-in round() uses banker's rounding (round(2.5) == 2); point
    and score calculations always round .5 up.

    Examples:
        round_half_up(2.5) → 3
        round_half_up(49.98) → 50
        round_half_up(-2.5) → -2
    """
    return math.floor(value + 0.5)


def calculate_percentage(current: float, target: float, cap: float = 100.0) -> int:
    """Calculate a progress percentage, capped and rounded half up.

    Args:
        current: Current value
        target: Target value (0 or negative yields 0)
        cap: Upper bound for the percentage (default 100)

    Returns:
        Integer percentage in [0, cap]
    """
    if target <= 0:
        _LOGGER.debug("Percentage requested for non-positive target %s", target)
        return 0
    return round_half_up(min(current / target * 100, cap))


def is_strict_int(value: object) -> bool:
    """Return True if value is an int and not a bool."""
    return isinstance(value, int) and not isinstance(value, bool)
