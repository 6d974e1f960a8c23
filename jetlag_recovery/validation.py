"""
Request validation and result sanity checks.

Validators never log or raise on their own. They return a ValidationResult
(fatal errors plus advisories) or a list of CalculationWarning values, and
the plan generator decides what to raise and what to log.

Timing rules:
- Arrival before departure by more than 12h is fatal (likely a data or
  timezone error)
- Any smaller negative gap is advisory only (dateline-crossing itineraries)
- A positive elapsed time more than 12h away from the stated flight
  duration is advisory (layovers or input error)

Multi-leg journeys run the same checks per leg, then check each connection.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime

from .circadian_math import get_pytz_timezone, hours_between, localize
from .errors import (
    CalculationWarning,
    ImplausibleTiming,
    InvalidDuration,
    InvalidItinerary,
    InvalidPreferences,
    InvalidTimezone,
    JetlagPlanError,
)
from .types import (
    Direction,
    FlightLeg,
    MultiLegRequest,
    PlanRequest,
    RecoveryMode,
    UserPreferences,
)

MIN_FLIGHT_HOURS = 0
MAX_FLIGHT_HOURS = 48
IMPLAUSIBLE_NEGATIVE_HOURS = 12  # Arrival this far before departure is rejected
DURATION_MISMATCH_HOURS = 12

# Connections between legs
MIN_CONNECTION_HOURS = 1
LONG_LAYOVER_HOURS = 24
SEPARATE_TRIP_HOURS = 168

RECOVERY_MODES: tuple[RecoveryMode, ...] = ("conservative", "aggressive")

# Sanity ceilings
RECOVERY_CEILING_MULTIPLIER = 1.5
EAST_EQUIVALENT_RATE = 0.9
AGGRESSIVE_MAX_DAYS = 3

# Known routes and their expected conservative recovery ranges (days)
BENCHMARK_ROUTES: dict[tuple[str, str], tuple[int, int]] = {
    ("America/Los_Angeles", "Asia/Tokyo"): (4, 6),  # LAX->NRT, 7h west via the short path
    ("America/New_York", "Europe/London"): (4, 7),  # JFK->LHR, 5h east
    ("Europe/London", "America/New_York"): (3, 5),  # LHR->JFK, 5h west
}


@dataclass
class ValidationResult:
    """Outcome of boundary validation."""

    errors: list[JetlagPlanError] = field(default_factory=list)
    advisories: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """
        Raise the first fatal error, if any.

        The raised error's details carry every fatal message so callers see
        the full picture in one exception.
        """
        if not self.errors:
            return
        first = self.errors[0]
        first.details = [error.message for error in self.errors]
        raise first


def validate_preferences(preferences: UserPreferences) -> list[JetlagPlanError]:
    errors: list[JetlagPlanError] = []

    for name in ("normal_bedtime", "normal_wake_time"):
        value = getattr(preferences, name)
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 23:
            errors.append(
                InvalidPreferences(f"{name} must be an hour between 0 and 23, got {value!r}")
            )

    if not errors and preferences.normal_bedtime == preferences.normal_wake_time:
        errors.append(InvalidPreferences("normal_bedtime and normal_wake_time cannot be equal"))

    if preferences.recovery_mode not in RECOVERY_MODES:
        errors.append(
            InvalidPreferences(
                f"recovery_mode must be one of {', '.join(RECOVERY_MODES)}, "
                f"got {preferences.recovery_mode!r}"
            )
        )

    return errors


def _check_timezone(tz_name: str, result: ValidationResult) -> bool:
    try:
        get_pytz_timezone(tz_name)
    except InvalidTimezone as exc:
        result.errors.append(exc)
        return False
    return True


def _localize_or_report(
    value: datetime | str, tz_name: str, label: str, result: ValidationResult
) -> datetime | None:
    try:
        return localize(value, tz_name)
    except (AttributeError, TypeError, ValueError):
        result.errors.append(ImplausibleTiming(f"Unparseable {label}: {value!r}"))
        return None


def _validate_flight(
    origin_tz: str,
    dest_tz: str,
    departure_datetime: datetime | str,
    arrival_datetime: datetime | str,
    flight_duration_hours: float,
    result: ValidationResult,
    label: str = "",
) -> tuple[datetime, datetime] | None:
    """
    Check one flight's timezones, duration and timing into result.

    Returns the localized (departure, arrival) pair, or None when either
    could not be resolved.
    """
    origin_ok = _check_timezone(origin_tz, result)
    dest_ok = _check_timezone(dest_tz, result)

    duration = flight_duration_hours
    if not isinstance(duration, (int, float)) or not (
        MIN_FLIGHT_HOURS <= duration <= MAX_FLIGHT_HOURS
    ):
        result.errors.append(
            InvalidDuration(
                f"{label}Flight duration ({duration}h) must be between "
                f"{MIN_FLIGHT_HOURS} and {MAX_FLIGHT_HOURS} hours"
            )
        )
        duration = None

    if not (origin_ok and dest_ok):
        return None

    departure = _localize_or_report(
        departure_datetime, origin_tz, f"{label}departure_datetime", result
    )
    arrival = _localize_or_report(arrival_datetime, dest_tz, f"{label}arrival_datetime", result)
    if departure is None or arrival is None:
        return None

    actual_hours = hours_between(arrival, departure)
    if actual_hours < -IMPLAUSIBLE_NEGATIVE_HOURS:
        result.errors.append(
            ImplausibleTiming(
                f"{label}Arrival time appears before departure time by "
                f"{abs(actual_hours):.1f}h. Please verify flight times and timezones."
            )
        )
    elif actual_hours < 0:
        result.advisories.append(
            f"{label}Arrival is {abs(actual_hours):.1f}h before departure - "
            "this may indicate timezone handling issues"
        )

    if (
        duration is not None
        and actual_hours > 0
        and abs(actual_hours - duration) > DURATION_MISMATCH_HOURS
    ):
        result.advisories.append(
            f"{label}Flight duration ({duration}h) differs significantly from actual time "
            f"difference ({actual_hours:.1f}h) - might indicate input error or long layover"
        )

    return departure, arrival


def validate_plan_request(request: PlanRequest) -> ValidationResult:
    """
    Validate a plan request before any generation work.

    Args:
        request: Incoming PlanRequest

    Returns:
        ValidationResult with fatal errors and advisory messages
    """
    result = ValidationResult()

    result.errors.extend(validate_preferences(request.preferences))

    flight = _validate_flight(
        request.origin_tz,
        request.dest_tz,
        request.departure_datetime,
        request.arrival_datetime,
        request.flight_duration_hours,
        result,
    )
    if flight is None:
        return result
    _, arrival = flight

    if request.return_departure_datetime is not None:
        return_departure = _localize_or_report(
            request.return_departure_datetime,
            request.dest_tz,
            "return_departure_datetime",
            result,
        )
        if return_departure is not None and return_departure < arrival:
            result.errors.append(
                ImplausibleTiming("Return departure is before arrival at the destination")
            )

    return result


def validate_flight_connections(
    flights: list[tuple[FlightLeg, datetime, datetime]],
) -> ValidationResult:
    """
    Check how consecutive legs connect.

    Rules:
    - Next leg departing before the previous one lands is fatal
    - A connection under MIN_CONNECTION_HOURS is advisory (missed-flight risk)
    - A stop of 1-7 days, or 7+ days, is advisory (missing flights or
      separate trips)
    - Legs whose timezones do not meet are advisory; no layover is planned
      between them

    Args:
        flights: (leg, localized departure, localized arrival) in travel order
    """
    result = ValidationResult()

    for index in range(len(flights) - 1):
        leg, _, arrival = flights[index]
        next_leg, next_departure, _ = flights[index + 1]
        gap_hours = hours_between(next_departure, arrival)
        position = f"Leg {index + 2}"

        if gap_hours < 0:
            result.errors.append(
                ImplausibleTiming(
                    f"{position} departs {abs(gap_hours):.1f}h before leg {index + 1} arrives"
                )
            )
            continue

        if leg.dest_tz != next_leg.origin_tz:
            result.advisories.append(
                f"{position} does not continue from leg {index + 1} "
                f"({leg.dest_tz} -> {next_leg.origin_tz}); treated as separate travel segments"
            )
            continue

        if gap_hours < MIN_CONNECTION_HOURS:
            result.advisories.append(
                f"Only {gap_hours * 60:.0f} minute connection before {position.lower()} - "
                "you risk missing it if there are any delays"
            )
        elif gap_hours >= SEPARATE_TRIP_HOURS:
            result.advisories.append(
                f"{int(gap_hours // 24)} day stay in {leg.dest_tz} before {position.lower()} - "
                "consider separate outbound and onward plans"
            )
        elif gap_hours >= LONG_LAYOVER_HOURS:
            result.advisories.append(
                f"{int(gap_hours // 24)} day layover in {leg.dest_tz} before "
                f"{position.lower()} - check for missing flights"
            )

    return result


def validate_multi_leg_request(request: MultiLegRequest) -> ValidationResult:
    """
    Validate every leg, then how the legs connect.

    Leg messages are prefixed with their 1-based position.
    """
    result = ValidationResult()
    result.errors.extend(validate_preferences(request.preferences))

    if not request.legs:
        result.errors.append(InvalidItinerary("Journey must have at least one leg"))
        return result

    flights = []
    for index, leg in enumerate(request.legs, start=1):
        flight = _validate_flight(
            leg.origin_tz,
            leg.dest_tz,
            leg.departure_datetime,
            leg.arrival_datetime,
            leg.flight_duration_hours,
            result,
            label=f"Leg {index}: ",
        )
        if flight is not None:
            flights.append((leg, *flight))

    # Connections are only meaningful once every leg resolved
    if len(flights) == len(request.legs):
        connections = validate_flight_connections(flights)
        result.errors.extend(connections.errors)
        result.advisories.extend(connections.advisories)

    return result


def check_plan_sanity(
    origin_tz: str,
    dest_tz: str,
    recovery_days: int,
    shift_hours: float,
    direction: Direction,
    recovery_mode: RecoveryMode,
    check_benchmarks: bool = True,
) -> list[CalculationWarning]:
    """
    Compare a computed recovery estimate against model ceilings and benchmarks.

    A warning here means the model produced something suspicious; it is
    reported to the operator and never blocks the plan. Benchmarks only hold
    for direct trips, so callers that adapted en route turn them off.
    """
    warnings: list[CalculationWarning] = []

    ceiling = shift_hours * RECOVERY_CEILING_MULTIPLIER
    if recovery_days > ceiling:
        warnings.append(
            CalculationWarning(
                "RECOVERY_EXCEEDS_CEILING",
                f"{recovery_days} days exceeds maximum reasonable ({ceiling:.0f} days) "
                f"for {shift_hours:g}h timezone difference",
            )
        )

    if direction == "west":
        east_equivalent = math.ceil(round(shift_hours * EAST_EQUIVALENT_RATE, 6))
        if recovery_days > east_equivalent:
            warnings.append(
                CalculationWarning(
                    "WEST_SLOWER_THAN_EAST",
                    f"Westward recovery ({recovery_days}) should not exceed equivalent "
                    f"eastward ({east_equivalent})",
                )
            )

    if recovery_mode == "aggressive" and recovery_days > AGGRESSIVE_MAX_DAYS:
        warnings.append(
            CalculationWarning(
                "AGGRESSIVE_CAP_EXCEEDED",
                f"Aggressive mode produced {recovery_days} days (cap {AGGRESSIVE_MAX_DAYS})",
            )
        )

    # Benchmarks describe conservative research rates
    benchmark = BENCHMARK_ROUTES.get((origin_tz, dest_tz))
    if check_benchmarks and benchmark is not None and recovery_mode == "conservative":
        low, high = benchmark
        if not low <= recovery_days <= high:
            warnings.append(
                CalculationWarning(
                    "BENCHMARK_OUT_OF_RANGE",
                    f"{origin_tz}->{dest_tz}: {recovery_days} days outside expected range "
                    f"({low}-{high})",
                )
            )

    return warnings
