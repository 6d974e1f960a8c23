"""
Jet Lag Recovery Planning

Models how far a traveler's body clock has drifted toward the destination
on each recovery day and schedules light, sleep, meals, caffeine and naps
so that every recommendation pushes the clock the right way.

Main entry points: generate_recovery_plan and generate_multi_leg_plan
(RecoveryPlanGenerator)
"""

from .circadian_math import calculate_timezone_shift, get_timezone_offset_hours
from .errors import (
    CalculationWarning,
    ImplausibleTiming,
    InvalidDuration,
    InvalidItinerary,
    InvalidPreferences,
    InvalidTimezone,
    JetlagPlanError,
)
from .scheduler import (
    RecoveryPlanGenerator,
    generate_multi_leg_plan,
    generate_recovery_plan,
    plan_to_dict,
)
from .science.recovery import estimate_recovery_days
from .types import (
    FlightLeg,
    LightTherapySession,
    MultiLegPlan,
    MultiLegRequest,
    PlanRequest,
    RecoveryDay,
    RecoveryPlan,
    TimezoneShift,
    UserPreferences,
)
from .validation import (
    ValidationResult,
    check_plan_sanity,
    validate_flight_connections,
    validate_multi_leg_request,
    validate_plan_request,
)

__all__ = [
    # Types
    "PlanRequest",
    "UserPreferences",
    "TimezoneShift",
    "LightTherapySession",
    "RecoveryDay",
    "RecoveryPlan",
    "FlightLeg",
    "MultiLegRequest",
    "MultiLegPlan",
    # Errors
    "JetlagPlanError",
    "InvalidTimezone",
    "InvalidDuration",
    "ImplausibleTiming",
    "InvalidPreferences",
    "InvalidItinerary",
    "CalculationWarning",
    # Calculations
    "get_timezone_offset_hours",
    "calculate_timezone_shift",
    "estimate_recovery_days",
    # Validation
    "ValidationResult",
    "validate_plan_request",
    "validate_multi_leg_request",
    "validate_flight_connections",
    "check_plan_sanity",
    # Scheduler
    "RecoveryPlanGenerator",
    "generate_recovery_plan",
    "generate_multi_leg_plan",
    "plan_to_dict",
]
