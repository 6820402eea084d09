"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, SalonDataSource, parse_date

__all__ = ["AvailabilityService", "SalonDataSource", "parse_date"]
