"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import BookedInterval, BookingRules, CandidateSlot, PlanOption, Stylist, WeeklyWindow
from .slot_calculator import SlotCalculator, compute_available_slots

__all__ = [
    "BookedInterval",
    "BookingRules",
    "CandidateSlot",
    "PlanOption",
    "Stylist",
    "WeeklyWindow",
    "SlotCalculator",
    "compute_available_slots",
]
