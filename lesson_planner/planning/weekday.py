"""
Weekday derivation for the lesson date.

The `day` field of a plan is derived from its `date`. Dates are parsed
as midnight local time with an explicit time-of-day so no timezone is
ever inferred.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

from ..errors import DateParseWarning
from ..models.catalog import DAYS


logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

# Zero-padded, ASCII digits only
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_lesson_date(date_text: str) -> date:
    """
    Parse a YYYY-MM-DD date anchored at midnight.

    Args:
        date_text: Date text

    Returns:
        Parsed calendar date

    Raises:
        DateParseWarning: If the text is not a zero-padded YYYY-MM-DD
            date or not a valid calendar date
    """
    if not isinstance(date_text, str):
        raise DateParseWarning(f"Date must be text, got {type(date_text).__name__}")

    date_text = date_text.strip()
    if not DATE_PATTERN.fullmatch(date_text):
        raise DateParseWarning(f"Invalid lesson date {date_text!r}: expected YYYY-MM-DD")

    try:
        return datetime.strptime(f"{date_text}T00:00:00", f"{DATE_FORMAT}T%H:%M:%S").date()
    except ValueError as e:
        raise DateParseWarning(f"Invalid lesson date {date_text!r}: {e}") from e


def weekday_label(day: date) -> str:
    """Map a calendar date to its label in DAYS (0 = Sunday)."""
    return DAYS[(day.weekday() + 1) % 7]


def derive_weekday(date_text: str, previous: Optional[str] = None) -> Optional[str]:
    """
    Derive the weekday label for a lesson date.

    Invalid dates are not an error for the caller: the warning is logged
    and `previous` is returned so the plan keeps its current weekday.

    Args:
        date_text: Date in YYYY-MM-DD format
        previous: Weekday label to keep if the date does not parse

    Returns:
        Weekday label from DAYS, or `previous` for an invalid date

    Examples:
        >>> derive_weekday("2024-03-03")
        'الأحد'
        >>> derive_weekday("not-a-date", previous="الاثنين")
        'الاثنين'
    """
    try:
        return weekday_label(parse_lesson_date(date_text))
    except DateParseWarning as e:
        logger.warning(f"Keeping previous weekday: {e}")
        return previous
