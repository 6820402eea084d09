"""
Tests for the JSON snapshot data source.
"""

import json

import pytest

from salonslots.adapters.json_store import SAMPLE_DATA_FILE, JsonSalonStore
from salonslots.domain.exceptions import DataSourceError


@pytest.fixture
def store():
    return JsonSalonStore()


class TestSampleData:
    """The bundled sample snapshot is loaded by default."""

    def test_default_path_is_sample(self, store):
        assert store.path == SAMPLE_DATA_FILE

    def test_stylists(self, store):
        assert [row["stylist_id"] for row in store.get_stylists()] == ["sty-ana", "sty-marco"]

    def test_schedule_for_one_stylist(self, store):
        rows = store.get_schedule("sty-marco")

        assert {row["stylist_id"] for row in rows} == {"sty-marco"}
        assert len(rows) == 4

    def test_appointments_joined_through_stylist_links(self, store):
        rows = store.get_appointments("sty-ana", "2026-10-20")

        assert [row["appointment_id"] for row in rows] == ["apt-1", "apt-2", "apt-3"]

    def test_appointments_filtered_by_date(self, store):
        assert [row["appointment_id"] for row in store.get_appointments("sty-ana", "2026-10-21")] == ["apt-4"]
        assert store.get_appointments("sty-ana", "2026-10-22") == []

    def test_packages_hide_undisplayed_rows(self, store):
        ids = [row["package_id"] for row in store.get_packages()]

        assert "pkg-hidden" not in ids
        assert "pkg-bridal" in ids

    def test_stylist_service_ids_are_distinct(self, store):
        assert store.get_stylist_service_ids("sty-marco") == ["svc-cut", "svc-mani"]


class TestLoading:
    """Error handling when loading snapshots."""

    def test_missing_file_raises_error(self, tmp_path):
        with pytest.raises(DataSourceError, match="not found"):
            JsonSalonStore(tmp_path / "missing.json")

    def test_invalid_json_raises_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DataSourceError, match="Invalid JSON"):
            JsonSalonStore(path)

    def test_unreadable_path_raises_error(self, tmp_path):
        """A directory exists but cannot be opened as a file."""
        with pytest.raises(DataSourceError, match="Could not read"):
            JsonSalonStore(tmp_path)

    def test_undecodable_bytes_raise_error(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b"\xff\xfe{")

        with pytest.raises(DataSourceError):
            JsonSalonStore(path)

    def test_non_object_root_raises_error(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(DataSourceError, match="object at the root"):
            JsonSalonStore(path)

    def test_missing_tables_are_empty(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"Stylists": [{"stylist_id": 7, "name": "Jo"}]}), encoding="utf-8")

        store = JsonSalonStore(path)

        assert store.get_schedule("7") == []
        assert store.get_services() == []
