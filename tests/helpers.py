"""
Test helper functions for recovery plan analysis.

These functions can be imported by test modules for plan inspection.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jetlag_recovery.science.prc import ADVANCING_EFFECTS
from jetlag_recovery.types import (
    LightTherapySession,
    PlanRequest,
    RecoveryDay,
    RecoveryPlan,
    UserPreferences,
)


def get_day(plan: RecoveryPlan, day: int) -> RecoveryDay:
    """
    Get a recovery day by its 1-based index.

    Raises:
        AssertionError: If the plan has no such day
    """
    for recovery_day in plan.recovery_days:
        if recovery_day.day == day:
            return recovery_day
    raise AssertionError(f"Plan has no day {day}")


def get_sessions_by_type(
    plan: RecoveryPlan, session_type: str, day: int | None = None
) -> list[LightTherapySession]:
    """
    Extract light sessions of one type ("seek" or "avoid").

    Args:
        plan: RecoveryPlan from generator
        session_type: "seek" or "avoid"
        day: Optional recovery day filter

    Returns:
        Matching sessions in plan order
    """
    results = []
    for recovery_day in plan.recovery_days:
        if day is not None and recovery_day.day != day:
            continue
        results.extend(s for s in recovery_day.light_therapy if s.type == session_type)
    return results


def all_sessions(plan: RecoveryPlan) -> list[LightTherapySession]:
    """Every light session in the plan, pre-flight included."""
    sessions = list(plan.pre_flight.light_therapy)
    for recovery_day in plan.recovery_days:
        sessions.extend(recovery_day.light_therapy)
    return sessions


def advancing_seeks(day: RecoveryDay) -> list[LightTherapySession]:
    return [
        s for s in day.light_therapy if s.type == "seek" and s.effect_on_phase in ADVANCING_EFFECTS
    ]


def make_request(
    origin_tz: str,
    dest_tz: str,
    departure: str,
    arrival: str,
    duration: float,
    **preference_overrides,
) -> PlanRequest:
    """Build a PlanRequest with default preferences plus overrides."""
    return PlanRequest(
        origin_tz=origin_tz,
        dest_tz=dest_tz,
        departure_datetime=departure,
        arrival_datetime=arrival,
        flight_duration_hours=duration,
        preferences=UserPreferences(**preference_overrides),
    )


# Realistic itineraries used for property-style checks
ROUTES = [
    # (origin, destination, departure, arrival, duration)
    ("America/New_York", "Europe/London", "2026-06-10T19:00", "2026-06-11T07:00", 7),
    ("Europe/London", "America/New_York", "2026-06-10T10:00", "2026-06-10T13:00", 8),
    ("America/Los_Angeles", "Asia/Tokyo", "2026-01-15T11:00", "2026-01-16T15:00", 11),
    ("Asia/Tokyo", "America/Los_Angeles", "2026-01-20T17:00", "2026-01-20T10:00", 10),
    ("Asia/Taipei", "America/Vancouver", "2025-10-10T23:40", "2025-10-10T19:30", 10.8),
    ("America/Los_Angeles", "Europe/Paris", "2026-05-01T16:00", "2026-05-02T11:30", 10.5),
    ("Europe/Paris", "America/Los_Angeles", "2026-05-10T10:00", "2026-05-10T12:30", 11.5),
    ("Australia/Sydney", "Europe/London", "2026-02-01T21:00", "2026-02-02T06:00", 22),
    ("Asia/Kolkata", "America/Chicago", "2026-09-01T02:00", "2026-09-01T14:00", 22.5),
    ("Pacific/Honolulu", "America/Los_Angeles", "2026-04-01T08:00", "2026-04-01T16:00", 5),
    ("America/Chicago", "America/New_York", "2026-04-01T08:00", "2026-04-01T11:00", 2),
]
