"""
Recovery duration estimates.

Scientific basis:
- Conservative rates: passive adaptation research, ~0.9 days per hour
  eastward (advances are harder) and ~0.6 days per hour westward
- Aggressive protocol: Burgess & Eastman (2005) report 2-3h/day shifts with
  intensive light, caffeine and nap timing; capped at 3 days for compliance

Key principles:
- The two modes are separate policies and are never blended
- Age and chronotype never adjust estimates (20-40% individual variation);
  they only produce informational notes
- Conservative recovery never exceeds 1.2x the shift
"""

import math
from dataclasses import dataclass

from ..types import Direction, RecoveryMode, RecoveryPhase

# Recovery must never exceed this multiple of the shift (conservative mode)
MAX_RECOVERY_MULTIPLIER = 1.2

# Shifts below this produce no jet lag worth planning for
MIN_SHIFT_FOR_RECOVERY_HOURS = 1

# Phase thresholds (day since arrival, inclusive)
ACUTE_PHASE_LAST_DAY = 3
ADAPTATION_PHASE_LAST_DAY = 7


@dataclass(frozen=True)
class RecoveryModeConfig:
    """Configuration for a recovery mode.

    Light session durations scale by recovery phase: aggressive mode uses
    2-4 hour sessions, conservative mode 45-120 minutes.
    """

    morning_seek_minutes: dict[RecoveryPhase, int]  # Eastward morning light
    evening_seek_minutes: dict[RecoveryPhase, int]  # Westward evening light
    rate_days_per_hour: dict[Direction, float] | None = None  # Conservative only


RECOVERY_MODE_CONFIGS: dict[RecoveryMode, RecoveryModeConfig] = {
    "conservative": RecoveryModeConfig(
        morning_seek_minutes={"acute": 60, "adaptation": 90, "maintenance": 45},
        evening_seek_minutes={"acute": 120, "adaptation": 90, "maintenance": 60},
        rate_days_per_hour={"east": 0.9, "west": 0.6, "none": 0.75},
    ),
    "aggressive": RecoveryModeConfig(
        morning_seek_minutes={"acute": 180, "adaptation": 240, "maintenance": 120},
        evening_seek_minutes={"acute": 240, "adaptation": 180, "maintenance": 120},
    ),
}


def get_recovery_mode_config(mode: RecoveryMode) -> RecoveryModeConfig:
    """Get the configuration for a recovery mode."""
    return RECOVERY_MODE_CONFIGS[mode]


def recovery_phase_for_day(day: int) -> RecoveryPhase:
    """Tag a recovery day: acute (<=3), adaptation (<=7), maintenance."""
    if day <= ACUTE_PHASE_LAST_DAY:
        return "acute"
    if day <= ADAPTATION_PHASE_LAST_DAY:
        return "adaptation"
    return "maintenance"


def max_reasonable_recovery_days(shift_hours: float) -> int:
    """Upper bound on conservative recovery for a shift."""
    return math.ceil(round(shift_hours * MAX_RECOVERY_MULTIPLIER, 6))


def _conservative_days(shift_hours: float, direction: Direction) -> int:
    rate = RECOVERY_MODE_CONFIGS["conservative"].rate_days_per_hour[direction]
    days = math.ceil(round(shift_hours * rate, 6))

    # Minimum-day floors
    if shift_hours < 2:
        days = max(1, days)
    elif shift_hours < 3:
        days = max(2, days)
    else:
        days = max(3, days)

    return min(days, max_reasonable_recovery_days(shift_hours))


def _aggressive_days(shift_hours: float) -> int:
    # Hawaii->LA (3h): 2 days, LA->Nadi (5h): 3 days, LA->London (8h): 3 days
    if shift_hours < 2:
        return 1
    if shift_hours < 4:
        return 2
    return 3


def estimate_recovery_days(
    shift_hours: float,
    direction: Direction,
    mode: RecoveryMode = "conservative",
) -> int:
    """
    Estimate days until the body clock matches the destination.

    Args:
        shift_hours: Shorter-path shift in hours (0-12)
        direction: "east", "west" or "none"
        mode: "conservative" (research rates) or "aggressive" (3-day protocol)

    Returns:
        Non-negative day count; 0 only when shift_hours < 1
    """
    if shift_hours < MIN_SHIFT_FOR_RECOVERY_HOURS:
        return 0

    if mode == "aggressive":
        return _aggressive_days(shift_hours)
    return _conservative_days(shift_hours, direction)
