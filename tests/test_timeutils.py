"""
Tests for time-of-day helpers.
"""

from datetime import date

import pytest

from salonslots.domain.exceptions import InvalidTimeError
from salonslots.domain.timeutils import (
    add_minutes,
    day_label_for_date,
    intervals_overlap,
    is_cancelled_status,
    minutes_since_midnight,
    normalize_day,
    round_up_to_quantum,
    to_hhmm,
)


class TestMinutesSinceMidnight:
    """Tests for parsing HH:MM strings."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("00:00", 0),
            ("09:30", 570),
            ("23:59", 1439),
            ("9:05", 545),
            ("14:00:00", 840),
            (" 08:15 ", 495),
        ],
    )
    def test_valid_times(self, text, expected):
        assert minutes_since_midnight(text) == expected

    @pytest.mark.parametrize("text", ["", "9am", "24:00", "12:60", "12", "ab:cd", None])
    def test_invalid_times_raise_error(self, text):
        with pytest.raises(InvalidTimeError):
            minutes_since_midnight(text)

    def test_invalid_time_is_a_value_error(self):
        with pytest.raises(ValueError):
            minutes_since_midnight("25:00")

    @pytest.mark.parametrize("text", ["24:00", "24:00:00"])
    def test_end_of_day_allowed_when_requested(self, text):
        assert minutes_since_midnight(text, allow_end_of_day=True) == 1440

    @pytest.mark.parametrize("text", ["24:01", "24:00:30", "25:00"])
    def test_past_end_of_day_still_rejected(self, text):
        with pytest.raises(InvalidTimeError):
            minutes_since_midnight(text, allow_end_of_day=True)


class TestFormatting:
    """Tests for to_hhmm and add_minutes."""

    def test_to_hhmm_pads(self):
        assert to_hhmm(0) == "00:00"
        assert to_hhmm(545) == "09:05"
        assert to_hhmm(1439) == "23:59"

    def test_to_hhmm_negative_raises_error(self):
        with pytest.raises(ValueError):
            to_hhmm(-1)

    def test_add_minutes(self):
        assert add_minutes("09:45", 30) == "10:15"
        assert add_minutes("10:15", -30) == "09:45"


class TestIntervalsOverlap:
    """Tests for the strict overlap predicate."""

    def test_partial_overlap(self):
        assert intervals_overlap(570, 630, 600, 660)
        assert intervals_overlap(600, 660, 570, 630)

    def test_containment(self):
        assert intervals_overlap(540, 720, 600, 630)

    def test_touching_intervals_do_not_overlap(self):
        assert not intervals_overlap(540, 600, 600, 660)
        assert not intervals_overlap(600, 660, 540, 600)

    def test_disjoint(self):
        assert not intervals_overlap(540, 570, 600, 660)


class TestRoundUpToQuantum:

    @pytest.mark.parametrize(
        "minutes, expected",
        [(0, 0), (1, 15), (607, 615), (615, 615), (890, 900), (1439, 1440)],
    )
    def test_rounds_up_to_quarter_hour(self, minutes, expected):
        assert round_up_to_quantum(minutes) == expected

    def test_custom_quantum(self):
        assert round_up_to_quantum(545, 30) == 570


class TestNormalizeDay:
    """Tests for weekday normalization."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "Sun"),
            (6, "Sat"),
            ("3", "Wed"),
            ("Thu", "Thu"),
            ("thursday", "Thu"),
            ("FRIDAY", "Fri"),
            ("  mon ", "Mon"),
        ],
    )
    def test_recognised_values(self, value, expected):
        assert normalize_day(value) == expected

    @pytest.mark.parametrize("value", [7, -1, "9", "", "Someday", None, True])
    def test_unrecognised_values(self, value):
        assert normalize_day(value) is None

    def test_day_label_for_date(self):
        assert day_label_for_date(date(2026, 10, 18)) == "Sun"
        assert day_label_for_date(date(2026, 10, 20)) == "Tue"


class TestIsCancelledStatus:
    """Tests for the cancelled-status policy."""

    @pytest.mark.parametrize("status", ["Cancelled", "canceled", "CANCELLED BY CUSTOMER", "Auto-cancel"])
    def test_cancelled(self, status):
        assert is_cancelled_status(status)

    @pytest.mark.parametrize("status", ["Booked", "Walk-In", "Ongoing", "Completed", "", None])
    def test_occupying(self, status):
        assert not is_cancelled_status(status)
