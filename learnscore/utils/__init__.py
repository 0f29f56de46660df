# File: utils/__init__.py
"""Pure Python utilities for learnscore.

Submodules:
    - dt_utils: Date/time parsing and current-time helpers
    - math_utils: Rounding and progress calculations

Usage:
    from . import dt_utils
    from .math_utils import round_half_up
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
