"""
Domain-specific exception hierarchy for the salon slot finder.
"""


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeError(SalonSlotsError, ValueError):
    """Raised when a time-of-day string is not a valid HH:MM value."""


class DataSourceError(SalonSlotsError):
    """Raised when schedule or booking data cannot be fetched or parsed."""


class PlanNotFoundError(SalonSlotsError):
    """Raised when a service or package is unknown or not offered by a stylist."""


class BookingWindowError(SalonSlotsError):
    """Raised when a date lies outside the bookable range."""
