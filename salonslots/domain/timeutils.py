"""
Time-of-day helpers used by the slot calculator and its callers.

A time of day is represented as an ``int`` of minutes since midnight. The
canonical text form is the zero-padded 24-hour ``HH:MM`` string.
"""

import math
import re
from datetime import date
from typing import Union

from .exceptions import InvalidTimeError

SLOT_QUANTUM_MINUTES = 15
END_OF_DAY_MINUTES = 24 * 60

DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Storage returns "09:00:00" for time columns; seconds are ignored.
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def minutes_since_midnight(hhmm: str, allow_end_of_day: bool = False) -> int:
    """
    Parse an ``HH:MM`` (or ``HH:MM:SS``) string to minutes since midnight.

    With ``allow_end_of_day``, ``24:00`` is accepted as 1440, the value
    storage uses for a period that runs until midnight.

    Raises:
        InvalidTimeError: If the string is not a valid 24-hour time.
    """
    match = _TIME_PATTERN.match(hhmm.strip()) if isinstance(hhmm, str) else None
    if not match:
        raise InvalidTimeError(f"Invalid time of day: {hhmm!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if allow_end_of_day and hours == 24 and minutes == 0 and seconds == 0:
        return END_OF_DAY_MINUTES

    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        raise InvalidTimeError(f"Time of day out of range: {hhmm!r}")

    return hours * 60 + minutes


def to_hhmm(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    if minutes < 0:
        raise ValueError(f"Minutes must not be negative, got {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def add_minutes(hhmm: str, delta: int) -> str:
    """Shift an ``HH:MM`` string by ``delta`` minutes."""
    return to_hhmm(minutes_since_midnight(hhmm) + delta)


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Strict overlap test for two half-open intervals.

    Intervals that only touch (one ends when the other starts) do not overlap.
    """
    return max(a_start, b_start) < min(a_end, b_end)


def round_up_to_quantum(minutes: int, quantum: int = SLOT_QUANTUM_MINUTES) -> int:
    """Round ``minutes`` up to the next multiple of ``quantum``."""
    return math.ceil(minutes / quantum) * quantum


def normalize_day(value: Union[int, str, None]) -> str | None:
    """
    Map a weekday given in any of the stored forms to its 3-letter label.

    Accepts a day index (0=Sunday .. 6=Saturday), the same index as a
    string, or a weekday name such as "mon", "Monday" or "MONDAY".
    Returns None for anything unrecognised.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return DAY_LABELS[value] if 0 <= value <= 6 else None

    text = str(value).strip()
    if text.isdigit():
        index = int(text)
        return DAY_LABELS[index] if 0 <= index <= 6 else None

    prefix = text[:3].lower()
    for label in DAY_LABELS:
        if label.lower() == prefix:
            return label
    return None


def day_label_for_date(day: date) -> str:
    """Return the 3-letter weekday label of a calendar date."""
    # isoweekday: Monday=1 .. Sunday=7
    return DAY_LABELS[day.isoweekday() % 7]


def is_cancelled_status(status: str | None) -> bool:
    """
    Check whether an appointment status frees the stylist's calendar.

    Status is a free-text column; any value mentioning "cancel" in any case
    counts as cancelled. Everything else (booked, walk-in, ongoing,
    completed, ...) keeps the time occupied.
    """
    if not status:
        return False
    return "cancel" in str(status).lower()
