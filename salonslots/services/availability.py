"""
Application services for finding bookable salon appointment slots.

The service fetches a stylist's schedule and bookings through a data source
adapter, turns raw rows into domain values and delegates the slot
computation to the domain-level ``SlotCalculator``. This keeps the CLI thin
and lets tests plug in a stub data source via a simple protocol.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol

import pendulum

from ..domain.exceptions import BookingWindowError, PlanNotFoundError
from ..domain.models import (
    BookedInterval,
    BookingRules,
    CandidateSlot,
    PlanOption,
    Stylist,
    WeeklyWindow,
)
from ..domain.slot_calculator import SlotCalculator
from ..domain.timeutils import (
    day_label_for_date,
    is_cancelled_status,
    minutes_since_midnight,
    normalize_day,
)

logger = logging.getLogger(__name__)

PLAN_KINDS = ("service", "package")


class SalonDataSource(Protocol):
    """Protocol describing the storage reads needed by the service."""

    def get_stylists(self) -> List[Dict[str, Any]]:
        """Return stylist rows."""

    def get_schedule(self, stylist_id: str) -> List[Dict[str, Any]]:
        """Return all weekly schedule rows of a stylist."""

    def get_appointments(self, stylist_id: str, date: str) -> List[Dict[str, Any]]:
        """Return all appointment rows of a stylist on a date."""

    def get_services(self) -> List[Dict[str, Any]]:
        """Return service rows."""

    def get_packages(self) -> List[Dict[str, Any]]:
        """Return displayable package rows."""

    def get_stylist_service_ids(self, stylist_id: str) -> List[str]:
        """Return the service ids a stylist performs."""


def parse_date(value: str | date) -> date:
    """
    Parse a ``YYYY-MM-DD`` string to a date.

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    if isinstance(value, date):
        return value
    return pendulum.from_format(value.strip(), "YYYY-MM-DD").date()


def _duration_from(row: Dict[str, Any], column: str) -> int:
    """Read a duration column; missing or unreadable values count as 0."""
    raw = row.get(column)
    try:
        return int(float(raw or 0))
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s %r in row %s", column, raw, row)
        return 0


class AvailabilityService:
    """
    Orchestrates schedule and booking retrieval and slot calculation.

    Dependency inversion toward a protocol makes it easy to plug in the
    hosted database client, the JSON snapshot store or a stub in tests.
    """

    def __init__(
        self,
        data_source: SalonDataSource,
        slot_calculator: SlotCalculator,
        booking_rules: Optional[BookingRules] = None,
    ) -> None:
        self._data_source = data_source
        self._slot_calculator = slot_calculator
        self._booking_rules = booking_rules or BookingRules()

    @property
    def booking_rules(self) -> BookingRules:
        return self._booking_rules

    def list_stylists(self) -> List[Stylist]:
        """Return all stylists."""
        return [
            Stylist(stylist_id=str(row["stylist_id"]), name=row.get("name") or "")
            for row in self._data_source.get_stylists()
            if row.get("stylist_id") is not None
        ]

    def plan_options_for_stylist(self, stylist_id: str) -> List[PlanOption]:
        """
        Build the plans a customer can book with a stylist.

        These are the stylist's own displayed services followed by all
        displayed, non-inactive packages. Plans without a configured
        duration are left out. A NULL display flag counts as displayed.
        """
        return [
            option for option in self._all_plan_options(stylist_id)
            if option.duration > 0
        ]

    def resolve_plan(self, stylist_id: str, kind: str, plan_id: str) -> PlanOption:
        """
        Look up one plan offered by a stylist.

        The returned plan may have a duration of 0; such a plan yields no slots.

        Raises:
            PlanNotFoundError: If the stylist does not offer the plan
        """
        if kind not in PLAN_KINDS:
            raise ValueError(f"Plan kind must be one of {PLAN_KINDS}, got {kind!r}")

        for option in self._all_plan_options(stylist_id):
            if option.kind == kind and option.plan_id == str(plan_id):
                return option

        raise PlanNotFoundError(
            f"Stylist {stylist_id} does not offer {kind} '{plan_id}'."
        )

    def _all_plan_options(self, stylist_id: str) -> List[PlanOption]:
        allowed_service_ids = set(self._data_source.get_stylist_service_ids(stylist_id))

        options: List[PlanOption] = []
        for row in self._data_source.get_services():
            service_id = str(row.get("service_id"))
            if service_id not in allowed_service_ids or row.get("display") is False:
                continue
            options.append(PlanOption(
                kind="service",
                plan_id=service_id,
                name=row.get("name") or service_id,
                duration=_duration_from(row, "duration"),
            ))

        for row in self._data_source.get_packages():
            if row.get("display") is False or row.get("status") == "Inactive":
                continue
            package_id = str(row.get("package_id"))
            options.append(PlanOption(
                kind="package",
                plan_id=package_id,
                name=row.get("name") or f"Package {package_id[:6]}",
                duration=_duration_from(row, "expected_duration"),
            ))

        return options

    def fetch_windows(self, stylist_id: str, target_date: str | date) -> List[WeeklyWindow]:
        """
        Fetch the stylist's working windows for the weekday of a date.

        Rows stay in storage order and are not merged. Rows with unreadable
        times are skipped with a warning.
        """
        day_label = day_label_for_date(parse_date(target_date))
        windows: List[WeeklyWindow] = []

        for row in self._data_source.get_schedule(stylist_id):
            if normalize_day(row.get("day_of_week")) != day_label:
                continue
            try:
                windows.append(WeeklyWindow.from_strings(
                    row.get("day_of_week"),
                    row.get("start_time"),
                    row.get("end_time"),
                ))
            except ValueError as e:
                logger.warning("Skipping schedule row %s: %s", row.get("stylistSchedule_id"), e)

        logger.debug("Stylist %s has %d window(s) on %s", stylist_id, len(windows), day_label)
        return windows

    def fetch_booked_intervals(self, stylist_id: str, target_date: str | date) -> List[BookedInterval]:
        """
        Fetch the intervals already taken on a date.

        Cancelled appointments free their time; every other status counts.
        """
        day = parse_date(target_date).isoformat()
        intervals: List[BookedInterval] = []

        for row in self._data_source.get_appointments(stylist_id, day):
            if is_cancelled_status(row.get("status")):
                continue
            try:
                intervals.append(BookedInterval.from_strings(
                    row.get("expectedStart_time"),
                    row.get("expectedEnd_time"),
                ))
            except ValueError as e:
                logger.warning("Skipping appointment %s: %s", row.get("appointment_id"), e)

        logger.debug("Stylist %s has %d booking(s) on %s", stylist_id, len(intervals), day)
        return intervals

    async def find_slots(
        self,
        *,
        stylist_id: str,
        target_date: str | date,
        plan: PlanOption,
        now: datetime,
    ) -> List[CandidateSlot]:
        """
        Fetch a fresh schedule and booking snapshot and compute slots.

        Raises:
            BookingWindowError: If the date is outside the bookable range
        """
        day = parse_date(target_date)
        self._booking_rules.check(day, now.date())

        windows, booked = await asyncio.gather(
            asyncio.to_thread(self.fetch_windows, stylist_id, day),
            asyncio.to_thread(self.fetch_booked_intervals, stylist_id, day),
        )

        return self.calculate_slots(
            windows=windows,
            duration=plan.duration,
            booked_intervals=booked,
            target_date=day,
            now=now,
        )

    def calculate_slots(
        self,
        *,
        windows: List[WeeklyWindow],
        duration: int,
        booked_intervals: List[BookedInterval],
        target_date: str | date,
        now: datetime,
    ) -> List[CandidateSlot]:
        """Calculate bookable slots from an already fetched snapshot."""
        return self._slot_calculator.find_available_slots(
            windows=windows,
            duration=duration,
            booked_intervals=booked_intervals,
            target_date=target_date,
            now=now,
        )

    async def is_slot_available(
        self,
        *,
        stylist_id: str,
        target_date: str | date,
        plan: PlanOption,
        start: str,
        now: datetime,
    ) -> bool:
        """
        Re-check a chosen start time right before booking it.

        Slots shown earlier may have been taken since; this recomputes them
        from current data.
        """
        start_minutes = minutes_since_midnight(start)

        try:
            slots = await self.find_slots(
                stylist_id=stylist_id,
                target_date=target_date,
                plan=plan,
                now=now,
            )
        except BookingWindowError as e:
            logger.info("Slot %s on %s is not bookable: %s", start, target_date, e)
            return False

        return any(slot.start == start_minutes for slot in slots)
