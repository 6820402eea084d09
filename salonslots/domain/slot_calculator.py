"""
Core business logic for calculating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O). The current
time is passed in rather than read from the clock.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from .models import BookedInterval, CandidateSlot, WeeklyWindow
from .timeutils import SLOT_QUANTUM_MINUTES, intervals_overlap, round_up_to_quantum


class SlotCalculator:
    """
    Calculates bookable slots for one stylist on one date.

    Algorithm:
    1. If the date is today, derive a cutoff by rounding "now" up to the step
    2. For each working window, in the order given, walk start times from the
       window start (or the cutoff, whichever is later) in fixed steps
    3. Keep every start whose slot fits inside the window
    4. Drop slots that strictly overlap an existing booking
    5. Return slots in window order, chronological within each window
    """

    def __init__(self, step_minutes: int = SLOT_QUANTUM_MINUTES):
        if step_minutes <= 0:
            raise ValueError(f"step_minutes must be greater than zero, got {step_minutes}")
        self.step_minutes = step_minutes

    def find_available_slots(
        self,
        windows: Sequence[WeeklyWindow],
        duration: int,
        booked_intervals: Sequence[BookedInterval],
        target_date: Union[str, date],
        now: datetime,
    ) -> List[CandidateSlot]:
        """
        Compute the bookable slots for a date.

        Args:
            windows: Working windows already filtered to the date's weekday
            duration: Required service or package duration in minutes
            booked_intervals: Non-cancelled bookings of the stylist on that date
            target_date: The date slots are requested for (YYYY-MM-DD or date)
            now: Current local time, used for the same-day cutoff

        Returns:
            List of CandidateSlot objects; empty when nothing can be booked
        """
        if duration <= 0 or not windows:
            return []

        cutoff = self._same_day_cutoff(target_date, now)
        slots: List[CandidateSlot] = []

        for window in windows:
            start = window.start
            if cutoff is not None:
                start = max(start, cutoff)

            latest_start = window.end - duration
            if latest_start < start:
                continue

            for cursor in range(start, latest_start + 1, self.step_minutes):
                candidate_end = cursor + duration
                if self._conflicts(cursor, candidate_end, booked_intervals):
                    continue
                slots.append(CandidateSlot(start=cursor, end=candidate_end))

        return slots

    def _same_day_cutoff(self, target_date: Union[str, date], now: datetime) -> Optional[int]:
        """
        Earliest start allowed when booking for today, else None.

        Seconds are ignored: at 10:15:40 a 10:15 start is still offered.
        """
        today = now.date().isoformat()
        requested = target_date.isoformat() if isinstance(target_date, date) else str(target_date)
        if requested != today:
            return None
        return round_up_to_quantum(now.hour * 60 + now.minute, self.step_minutes)

    @staticmethod
    def _conflicts(
        start: int,
        end: int,
        booked_intervals: Sequence[BookedInterval],
    ) -> bool:
        return any(
            intervals_overlap(start, end, booked.start, booked.end)
            for booked in booked_intervals
        )


_default_calculator = SlotCalculator()


def compute_available_slots(
    windows: Sequence[WeeklyWindow],
    duration: int,
    booked_intervals: Sequence[BookedInterval],
    target_date: Union[str, date],
    now: datetime,
) -> List[CandidateSlot]:
    """Compute bookable slots with the standard 15-minute step."""
    return _default_calculator.find_available_slots(
        windows=windows,
        duration=duration,
        booked_intervals=booked_intervals,
        target_date=target_date,
        now=now,
    )
