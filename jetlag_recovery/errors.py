"""Canonical jet lag planning error types.

Fatal conditions are raised as JetlagPlanError subclasses before any
day-by-day generation begins. Non-fatal model defects are reported as
CalculationWarning values and never raised.

Standard error codes:
- INVALID_TIMEZONE: An IANA timezone identifier could not be resolved
- INVALID_DURATION: Flight duration is outside [0, 48] hours
- IMPLAUSIBLE_TIMING: Arrival is more than 12 hours before departure
- INVALID_PREFERENCES: Sleep preferences or recovery mode are out of range
- INVALID_ITINERARY: A multi-leg journey has no legs
"""

from dataclasses import dataclass


class JetlagPlanError(ValueError):
    """Raised when a plan request cannot be turned into a plan.

    Attributes:
        code: Error code (e.g., "INVALID_TIMEZONE", "INVALID_DURATION")
        message: Human-readable description of the first problem
        details: All problem descriptions collected during validation
    """

    code = "JETLAG_PLAN_ERROR"

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details if details is not None else [message]
        super().__init__(f"{self.code}: {message}")


class InvalidTimezone(JetlagPlanError):
    """Unresolvable IANA timezone identifier."""

    code = "INVALID_TIMEZONE"

    def __init__(self, timezone: str, details: list[str] | None = None):
        self.timezone = timezone
        super().__init__(f"Invalid timezone: {timezone!r}", details)


class InvalidDuration(JetlagPlanError):
    """Flight duration outside the accepted bounds."""

    code = "INVALID_DURATION"


class ImplausibleTiming(JetlagPlanError):
    """Arrival far enough before departure to suggest a data error."""

    code = "IMPLAUSIBLE_TIMING"


class InvalidPreferences(JetlagPlanError):
    """Sleep preferences or recovery mode out of range."""

    code = "INVALID_PREFERENCES"


class InvalidItinerary(JetlagPlanError):
    """Multi-leg journey that cannot be planned as given."""

    code = "INVALID_ITINERARY"


@dataclass(frozen=True)
class CalculationWarning:
    """
    Non-fatal signal that the model produced a suspicious result.

    These indicate a model defect and are logged for the operator; they are
    not shown to the traveler and never block plan generation.
    """

    code: str  # e.g. "WEST_SLOWER_THAN_EAST"
    message: str
