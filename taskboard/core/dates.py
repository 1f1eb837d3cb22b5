"""
FILE: taskboard/core/dates.py
PURPOSE: Deadline parsing and formatting
EXPORTS:
  - parse_deadline(text) -> datetime | None
  - parse_timestamp(iso_string) -> datetime
  - format_timestamp(dt) -> str
  - format_deadline(dt) -> str
  - format_export_deadline(dt) -> str
DEPENDENCIES:
  - datetime (stdlib)
  - taskboard.core.constants (formats)
  - taskboard.core.exceptions (InvalidDeadlineError)
NOTES:
  - All datetimes inside the board are naive local time
  - Aware timestamps (e.g. "2024-01-10T00:00:00.000Z") are converted to local time
"""

from datetime import datetime, time
from typing import Optional

from .constants import (
    DATE_INPUT_FORMAT,
    DEADLINE_INPUT_FORMATS,
    DEFAULT_DEADLINE_TIME,
    DEADLINE_DISPLAY_FORMAT,
    EXPORT_DEADLINE_FORMAT,
)
from .exceptions import InvalidDeadlineError


def parse_deadline(
    text: Optional[str],
    default_time: time = DEFAULT_DEADLINE_TIME,
) -> Optional[datetime]:
    """
    Parse user-entered deadline text.

    Args:
        text: "YYYY-MM-DD", "YYYY-MM-DD HH:MM" or an ISO-8601 timestamp.
              Empty or whitespace-only text means "no deadline".
        default_time: Time of day used when only a date is given

    Returns:
        Naive local datetime, or None for empty input

    Raises:
        InvalidDeadlineError: If text can't be parsed
    """
    if text is None or not text.strip():
        return None

    value = text.strip()

    try:
        day = datetime.strptime(value, DATE_INPUT_FORMAT)
    except ValueError:
        pass
    else:
        return datetime.combine(day.date(), default_time)

    for fmt in DEADLINE_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    try:
        return parse_timestamp(value)
    except ValueError:
        raise InvalidDeadlineError(value) from None


def parse_timestamp(iso_string: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into naive local time.

    Raises:
        ValueError: If the string isn't a valid timestamp
    """
    dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def format_timestamp(dt: datetime) -> str:
    """Serialize a datetime for storage."""
    return dt.isoformat()


def format_deadline(dt: Optional[datetime]) -> str:
    """Human-readable deadline, e.g. "Jan 10, 2024 12:00 PM"."""
    if dt is None:
        return "-"
    return dt.strftime(DEADLINE_DISPLAY_FORMAT)


def format_export_deadline(dt: Optional[datetime]) -> str:
    """Deadline cell for CSV export ("" when there is none)."""
    if dt is None:
        return ""
    return dt.strftime(EXPORT_DEADLINE_FORMAT)
