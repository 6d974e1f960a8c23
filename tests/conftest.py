"""
Pytest fixtures for recovery plan tests.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jetlag_recovery.scheduler import RecoveryPlanGenerator
from jetlag_recovery.types import PlanRequest

# Fixed stamp so plans compare equal across calls
GENERATED_AT = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def generator():
    """Serial RecoveryPlanGenerator instance."""
    return RecoveryPlanGenerator()


@pytest.fixture
def generated_at():
    return GENERATED_AT


@pytest.fixture
def london_to_new_york_request():
    """LHR → JFK in June (5h west, delay direction)."""
    return PlanRequest(
        origin_tz="Europe/London",
        dest_tz="America/New_York",
        departure_datetime="2026-06-10T10:00",
        arrival_datetime="2026-06-10T13:00",
        flight_duration_hours=8,
    )


@pytest.fixture
def new_york_to_london_request():
    """JFK → LHR overnight in June (5h east, advance direction)."""
    return PlanRequest(
        origin_tz="America/New_York",
        dest_tz="Europe/London",
        departure_datetime="2026-06-10T19:00",
        arrival_datetime="2026-06-11T07:00",
        flight_duration_hours=7,
    )


@pytest.fixture
def taipei_to_vancouver_request():
    """
    TPE → YVR across the dateline.

    Naive offset is -15h, so the shorter path is a 9h eastward advance even
    though the flight heads east geographically and lands "yesterday".
    """
    return PlanRequest(
        origin_tz="Asia/Taipei",
        dest_tz="America/Vancouver",
        departure_datetime="2025-10-10T23:40",
        arrival_datetime="2025-10-10T19:30",
        flight_duration_hours=10.8,
    )


@pytest.fixture
def same_offset_request():
    """New York → Toronto (no shift)."""
    return PlanRequest(
        origin_tz="America/New_York",
        dest_tz="America/Toronto",
        departure_datetime="2026-06-10T09:00",
        arrival_datetime="2026-06-10T10:30",
        flight_duration_hours=1.5,
    )
