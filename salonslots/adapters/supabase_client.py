"""
Hosted database client reading salon tables over the PostgREST interface.
"""

import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import DataSourceError

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Read-only client for the salon tables of a Supabase project.

    Uses the auto-generated REST endpoints under ``/rest/v1``. Filters use
    the PostgREST ``column=eq.value`` syntax.
    """

    REST_PATH = "/rest/v1"

    def __init__(self, url: str, api_key: str, timeout: int = 30):
        """
        Initialize the client.

        Args:
            url: Project URL, e.g. https://abc.supabase.co
            api_key: Anon or service key sent as apikey and bearer token
            timeout: Request timeout in seconds
        """
        self.base_url = url.rstrip("/") + self.REST_PATH
        self.timeout = timeout
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Run a select against one table.

        Raises:
            DataSourceError: If the request fails or the body is not a list
        """
        url = f"{self.base_url}/{table}"

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise DataSourceError(f"Failed to read {table} from Supabase: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Invalid JSON from Supabase for {table}: {e}") from e

        if not isinstance(data, list):
            raise DataSourceError(f"Unexpected response for {table}: expected a list of rows")

        logger.debug("Fetched %d row(s) from %s", len(data), table)
        return data

    def get_stylists(self) -> List[Dict[str, Any]]:
        return self._select("Stylists", {"select": "stylist_id,name"})

    def get_schedule(self, stylist_id: str) -> List[Dict[str, Any]]:
        """Return every weekly schedule row of a stylist (all days)."""
        return self._select(
            "StylistSchedules",
            {
                "select": "stylistSchedule_id,stylist_id,day_of_week,start_time,end_time",
                "stylist_id": f"eq.{stylist_id}",
            },
        )

    def get_appointments(self, stylist_id: str, date: str) -> List[Dict[str, Any]]:
        """
        Return all appointments of a stylist on a date.

        The stylist link lives in the AppointmentStylists join table, so it is
        embedded with an inner join and filtered on the embedded column.
        """
        return self._select(
            "Appointments",
            {
                "select": (
                    "appointment_id,date,expectedStart_time,expectedEnd_time,status,"
                    "AppointmentStylists!inner(stylist_id)"
                ),
                "date": f"eq.{date}",
                "AppointmentStylists.stylist_id": f"eq.{stylist_id}",
            },
        )

    def get_services(self) -> List[Dict[str, Any]]:
        return self._select(
            "Services",
            {"select": "service_id,name,duration,min_price,max_price,display"},
        )

    def get_packages(self) -> List[Dict[str, Any]]:
        """Return package rows not hidden from display (NULL counts as shown)."""
        return self._select(
            "Package",
            {
                "select": "package_id,name,price,status,start_date,end_date,expected_duration,display",
                "display": "not.is.false",
            },
        )

    def get_stylist_service_ids(self, stylist_id: str) -> List[str]:
        """Return the distinct service ids a stylist performs."""
        rows = self._select(
            "StylistServices",
            {
                "select": "stylistServices_id,stylist_id,service_id",
                "stylist_id": f"eq.{stylist_id}",
            },
        )
        ids: List[str] = []
        for row in rows:
            service_id = str(row.get("service_id"))
            if service_id not in ids:
                ids.append(service_id)
        return ids
