"""
Tests for the Typer command line interface, run against the bundled sample data.
"""

import pytest
from typer.testing import CliRunner

from salonslots import __version__
from salonslots.cli.app import app

runner = CliRunner()

MONDAY_MORNING = "2026-10-19T08:00:00"


@pytest.fixture(autouse=True)
def _no_local_config(tmp_path, monkeypatch):
    """Run every command from an empty directory so no config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


def test_stylists_lists_sample_stylists():
    result = runner.invoke(app, ["stylists", "--mock"])

    assert result.exit_code == 0
    assert "Ana Reyes" in result.output
    assert "Marco Santos" in result.output


def test_plans_only_bookable_options():
    result = runner.invoke(app, ["plans", "sty-ana", "--mock"])

    assert result.exit_code == 0
    assert "Haircut" in result.output
    assert "Bridal Glow" in result.output
    assert "Beard Trim" not in result.output  # no duration
    assert "Summer Refresh" not in result.output  # inactive


def test_slots_for_service():
    result = runner.invoke(app, [
        "slots", "sty-ana",
        "--service", "svc-cut",
        "--date", "2026-10-20",
        "--now", MONDAY_MORNING,
        "--mock",
    ])

    assert result.exit_code == 0, result.output
    assert "Haircut" in result.output
    assert "09:00" in result.output
    assert "14:30" in result.output
    assert "17 slot(s) available." in result.output


def test_slots_empty_state_is_not_an_error():
    """Marco's only Saturday row is malformed, so nothing is bookable."""
    result = runner.invoke(app, [
        "slots", "sty-marco",
        "--service", "svc-cut",
        "--date", "2026-10-24",
        "--now", MONDAY_MORNING,
        "--mock",
    ])

    assert result.exit_code == 0
    assert "No available time slots." in result.output


def test_slots_on_closed_day_fails():
    result = runner.invoke(app, [
        "slots", "sty-ana",
        "--service", "svc-cut",
        "--date", "2026-10-25",
        "--now", MONDAY_MORNING,
        "--mock",
    ])

    assert result.exit_code == 1
    assert "closed" in result.output


def test_slots_requires_exactly_one_plan():
    result = runner.invoke(app, [
        "slots", "sty-ana",
        "--service", "svc-cut",
        "--package", "pkg-bridal",
        "--mock",
    ])

    assert result.exit_code == 1
    assert "exactly one" in result.output


def test_slots_unknown_plan_fails():
    result = runner.invoke(app, ["slots", "sty-ana", "--service", "svc-mani", "--mock"])

    assert result.exit_code == 1
    assert "does not offer" in result.output


def test_check_available_start():
    result = runner.invoke(app, [
        "check", "sty-ana", "11:00",
        "--service", "svc-cut",
        "--date", "2026-10-20",
        "--now", MONDAY_MORNING,
        "--mock",
    ])

    assert result.exit_code == 0
    assert "is available" in result.output


def test_check_taken_start():
    result = runner.invoke(app, [
        "check", "sty-ana", "10:30",
        "--service", "svc-cut",
        "--date", "2026-10-20",
        "--now", MONDAY_MORNING,
        "--mock",
    ])

    assert result.exit_code == 1
    assert "no longer available" in result.output


def test_missing_explicit_config_fails(tmp_path):
    result = runner.invoke(app, ["stylists", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_config_file_points_to_snapshot(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "data_source:\n  kind: json\n  path: nowhere.json\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["stylists"])

    assert result.exit_code == 1
    assert "Salon data file not found" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
