"""
File-backed salon data source for offline use and tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ..domain.exceptions import DataSourceError

logger = logging.getLogger(__name__)

SAMPLE_DATA_FILE = Path(__file__).parent / "sample_salon_data.json"


class JsonSalonStore:
    """
    Data source that serves salon rows from a JSON snapshot.

    The snapshot mirrors the hosted database: one top-level key per table
    (``Stylists``, ``StylistSchedules``, ``Appointments``,
    ``AppointmentStylists``, ``Services``, ``Package``, ``StylistServices``),
    each holding a list of row objects with the same column names.
    """

    def __init__(self, path: Path | None = None):
        """
        Initialize the store.

        Args:
            path: JSON snapshot to load. Defaults to the bundled sample data.
        """
        self.path = Path(path) if path else SAMPLE_DATA_FILE
        self.tables = self._load_tables()

    def _load_tables(self) -> Dict[str, List[Dict[str, Any]]]:
        """Load all tables from the snapshot file."""
        if not self.path.exists():
            raise DataSourceError(f"Salon data file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Invalid JSON in {self.path}: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DataSourceError(f"Could not read salon data file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise DataSourceError("Salon data file must contain an object at the root level.")

        logger.debug("Loaded salon snapshot %s with tables %s", self.path, sorted(data))
        return data

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self.tables.get(table, []))

    def get_stylists(self) -> List[Dict[str, Any]]:
        """Return all stylist rows."""
        return self._rows("Stylists")

    def get_schedule(self, stylist_id: str) -> List[Dict[str, Any]]:
        """Return every weekly schedule row of a stylist (all days)."""
        return [
            row for row in self._rows("StylistSchedules")
            if str(row.get("stylist_id")) == str(stylist_id)
        ]

    def get_appointments(self, stylist_id: str, date: str) -> List[Dict[str, Any]]:
        """Return all appointments of a stylist on a date, whatever their status."""
        appointment_ids = {
            str(link.get("appointment_id"))
            for link in self._rows("AppointmentStylists")
            if str(link.get("stylist_id")) == str(stylist_id)
        }
        return [
            row for row in self._rows("Appointments")
            if str(row.get("appointment_id")) in appointment_ids
            and row.get("date") == date
        ]

    def get_services(self) -> List[Dict[str, Any]]:
        """Return all service rows."""
        return self._rows("Services")

    def get_packages(self) -> List[Dict[str, Any]]:
        """Return package rows not hidden from display (a missing flag counts as shown)."""
        return [row for row in self._rows("Package") if row.get("display") is not False]

    def get_stylist_service_ids(self, stylist_id: str) -> List[str]:
        """Return the distinct service ids a stylist performs."""
        ids: List[str] = []
        for link in self._rows("StylistServices"):
            if str(link.get("stylist_id")) != str(stylist_id):
                continue
            service_id = str(link.get("service_id"))
            if service_id not in ids:
                ids.append(service_id)
        return ids
