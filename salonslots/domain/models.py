"""
Domain models for stylist availability and bookable slots.

Times of day are stored as minutes since midnight.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from .exceptions import BookingWindowError
from .timeutils import day_label_for_date, minutes_since_midnight, normalize_day, to_hhmm


@dataclass(frozen=True)
class WeeklyWindow:
    """
    A stylist's recurring working window on one weekday.

    Several windows may exist for the same day; they are never merged.
    """
    day: str
    start: int
    end: int

    @classmethod
    def from_strings(cls, day, start: str, end: str) -> "WeeklyWindow":
        """
        Build a window from a stored schedule row.

        Raises:
            ValueError: If the day or either time cannot be parsed
        """
        label = normalize_day(day)
        if label is None:
            raise ValueError(f"Unknown weekday: {day!r}")
        return cls(
            day=label,
            start=minutes_since_midnight(start),
            end=minutes_since_midnight(end, allow_end_of_day=True),
        )

    def __str__(self) -> str:
        return f"{self.day} {to_hhmm(self.start)}-{to_hhmm(self.end)}"


@dataclass(frozen=True)
class BookedInterval:
    """An existing, non-cancelled appointment on the target date."""
    start: int
    end: int

    @classmethod
    def from_strings(cls, start: str, end: str) -> "BookedInterval":
        return cls(
            start=minutes_since_midnight(start),
            end=minutes_since_midnight(end, allow_end_of_day=True),
        )

    def __str__(self) -> str:
        return f"{to_hhmm(self.start)}-{to_hhmm(self.end)}"


@dataclass(frozen=True)
class CandidateSlot:
    """
    One offerable appointment start time.

    Invariant: ``end - start`` equals the requested duration.
    """
    start: int
    end: int

    @property
    def start_hhmm(self) -> str:
        return to_hhmm(self.start)

    @property
    def end_hhmm(self) -> str:
        return to_hhmm(self.end)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def to_dict(self) -> Dict[str, str]:
        """Wire form consumed by the booking UI."""
        return {"start": self.start_hhmm, "end": self.end_hhmm}

    def __str__(self) -> str:
        return f"{self.start_hhmm}-{self.end_hhmm}"


@dataclass(frozen=True)
class PlanOption:
    """
    A bookable plan: either a single service or a package.

    A duration of 0 means the plan is not configured and cannot be booked.
    """
    kind: str  # "service" or "package"
    plan_id: str
    name: str
    duration: int


@dataclass(frozen=True)
class Stylist:
    """A stylist customers can book."""
    stylist_id: str
    name: str


@dataclass(frozen=True)
class BookingRules:
    """
    Which calendar dates customers may book.

    A date is bookable when it is not in the past, at most
    ``max_days_ahead`` days after today and not on a closed weekday.
    """
    max_days_ahead: int = 21
    closed_days: Tuple[str, ...] = ("Sun",)

    def is_open_day(self, day: date) -> bool:
        """Check if the salon takes bookings on the given date's weekday."""
        return day_label_for_date(day) not in self.closed_days

    def check(self, day: date, today: date) -> None:
        """
        Validate a requested date.

        Raises:
            BookingWindowError: If the date cannot be booked
        """
        if day < today:
            raise BookingWindowError(f"{day.isoformat()} is in the past")
        if (day - today).days > self.max_days_ahead:
            raise BookingWindowError(
                f"{day.isoformat()} is more than {self.max_days_ahead} days ahead"
            )
        if not self.is_open_day(day):
            raise BookingWindowError(
                f"The salon is closed on {day_label_for_date(day)} ({day.isoformat()})"
            )
