# File: utils/dt_utils.py
"""Date and time utilities for learnscore.

Pure Python date/time functions with no engine or manager imports, so they
can be unit tested in isolation.

All stored timestamps are timezone-aware UTC ISO 8601 strings. Calendar days
used for streak derivation are ISO dates (YYYY-MM-DD).

Functions:
    - dt_now_utc: Current datetime in UTC
    - dt_now_iso: Current datetime as ISO string
    - dt_today_iso: Today's UTC date as ISO string
    - as_utc: Convert a datetime to UTC
    - dt_to_utc: Parse an ISO datetime string to an aware UTC datetime
    - dt_parse_date: Normalize date/datetime/string input to a date
    - dt_days_between: Whole calendar days from one date to another
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging

# Third-party date parsing
from dateutil import parser as dt_parser

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Fallback formats tried after ISO parsing fails
_DATE_FORMATS: tuple[str, ...] = ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d")


# ==============================================================================
# Current Time
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string."""
    return dt_now_utc().isoformat()


def dt_today_iso() -> str:
    """Return today's UTC date as an ISO string (YYYY-MM-DD)."""
    return dt_now_utc().date().isoformat()


# ==============================================================================
# Conversion and Parsing
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse an ISO 8601 datetime string into an aware UTC datetime.

    Args:
        dt_str: ISO datetime string, or None

    Returns:
        UTC datetime, or None if the input is empty or unparseable.
    """
    if not dt_str or not isinstance(dt_str, str):
        return None
    try:
        parsed = dt_parser.isoparse(dt_str)
    except ValueError:
        _LOGGER.debug("Unparseable datetime string: %s", dt_str)
        return None
    return as_utc(parsed)


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Normalize a date-like input into a `datetime.date`.

    Accepts:
    - date / datetime objects (datetimes are converted to their UTC date)
    - "2025-04-07" or a full ISO datetime string
    - "04/07/2025" (US), "07/04/2025" (European), "2025/04/07"

    Returns:
        datetime.date or None if parsing fails.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        parsed = dt_parser.isoparse(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if isinstance(parsed, datetime) and parsed.tzinfo is not None:
            return as_utc(parsed).date()
        return parsed.date()

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("Unparseable date string: %s", value)
    return None


def dt_days_between(start: date, end: date) -> int:
    """Return the number of calendar days from start to end (may be negative)."""
    return (end - start).days
