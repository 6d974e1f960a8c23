"""
Recovery plan assembly.

Pipeline:
1. Validate the request up front (fatal errors raise, nothing is built)
2. Resolve the shorter-path shift at the departure instant
3. Estimate recovery days and run sanity checks (logged, never raised)
4. Build every recovery day independently (optionally in parallel)
5. Attach the pre-flight taper, in-flight advice and static guidance

Journeys with connections go through the same steps, with layovers
absorbing part of the shift before the final destination.

Everything except generated_at is a pure function of the request.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from datetime import UTC, date, datetime, timedelta

from loguru import logger

from .circadian_math import calculate_timezone_shift, localize
from .errors import CalculationWarning
from .guidance import (
    generate_alternative_strategies,
    generate_environment_optimization,
    generate_recovery_timeline,
    generate_return_journey_plan,
    generate_safety_information,
    get_adaptation_message,
)
from .science.body_clock import BodyClockModel
from .science.recovery import estimate_recovery_days
from .scheduling.day_planner import DayPlanner
from .scheduling.in_flight import (
    detect_overnight_flight,
    generate_flight_recommendation,
    generate_in_flight_plan,
)
from .scheduling.multi_leg import (
    MultiLegPlanner,
    calculate_layovers,
    en_route_progression_rate,
    final_arrival,
    first_departure,
)
from .scheduling.pre_flight import PreFlightPlanner
from .types import MultiLegPlan, MultiLegRequest, PlanRequest, RecoveryDay, RecoveryPlan
from .validation import (
    ValidationResult,
    check_plan_sanity,
    validate_multi_leg_request,
    validate_plan_request,
)


def _raise_for_validation(validation: ValidationResult, **context) -> None:
    for advisory in validation.advisories:
        logger.info("[JETLAG] Request advisory", advisory=advisory, **context)
    if not validation.is_valid:
        logger.warning(
            "[JETLAG] Rejecting plan request",
            codes=[error.code for error in validation.errors],
            errors=[error.message for error in validation.errors],
            **context,
        )
    validation.raise_for_errors()


def _log_calculation_warnings(
    warnings: list[CalculationWarning], origin_tz: str, dest_tz: str
) -> None:
    for warning in warnings:
        logger.warning(
            "[JETLAG] Calculation warning",
            code=warning.code,
            detail=warning.message,
            origin_tz=origin_tz,
            dest_tz=dest_tz,
        )


class RecoveryPlanGenerator:
    """
    Build complete recovery plans.

    Days share no state, so with max_workers > 1 they are fanned out over a
    thread pool and collected back in day order.
    """

    def __init__(self, max_workers: int | None = None):
        """
        Initialize generator.

        Args:
            max_workers: Thread pool size for day generation (None or 1 = serial)
        """
        self.max_workers = max_workers

    def generate(self, request: PlanRequest, generated_at: datetime | None = None) -> RecoveryPlan:
        """
        Generate a recovery plan for a single itinerary.

        Args:
            request: PlanRequest with itinerary and preferences
            generated_at: Timestamp stamped on the plan (defaults to now, UTC)

        Returns:
            RecoveryPlan with every timestamp in destination local time

        Raises:
            JetlagPlanError: If the request fails validation
        """
        _raise_for_validation(
            validate_plan_request(request), origin_tz=request.origin_tz, dest_tz=request.dest_tz
        )

        if generated_at is None:
            generated_at = datetime.now(UTC)

        preferences = request.preferences
        departure = localize(request.departure_datetime, request.origin_tz)
        arrival = localize(request.arrival_datetime, request.dest_tz)

        shift = calculate_timezone_shift(request.origin_tz, request.dest_tz, departure)
        recovery_days = estimate_recovery_days(
            shift.shift_hours, shift.direction, preferences.recovery_mode
        )

        warnings = check_plan_sanity(
            request.origin_tz,
            request.dest_tz,
            recovery_days,
            shift.shift_hours,
            shift.direction,
            preferences.recovery_mode,
        )
        _log_calculation_warnings(warnings, request.origin_tz, request.dest_tz)

        body_clock = BodyClockModel(
            origin_tz=request.origin_tz,
            total_shift_hours=shift.shift_hours,
            total_recovery_days=recovery_days,
            direction=shift.direction,
        )
        day_planner = DayPlanner(
            dest_tz=request.dest_tz,
            preferences=preferences,
            direction=shift.direction,
            shift_hours=shift.shift_hours,
            body_clock=body_clock,
        )

        # Day 1 is the first full destination-local day after landing
        first_day = arrival.date() + timedelta(days=1)
        days = self._plan_days(day_planner, first_day, recovery_days)

        is_overnight = detect_overnight_flight(
            departure, arrival, request.origin_tz, request.dest_tz
        )
        pre_flight = PreFlightPlanner(
            request.origin_tz, request.dest_tz, preferences, shift.direction
        ).plan(departure)

        return_journey = None
        if request.return_departure_datetime is not None:
            return_journey = generate_return_journey_plan(
                arrival=arrival,
                return_departure=localize(request.return_departure_datetime, request.dest_tz),
                outbound_shift_hours=shift.shift_hours,
                outbound_recovery_days=recovery_days,
                outbound_direction=shift.direction,
            )

        logger.info(
            "[JETLAG] Generated recovery plan",
            origin_tz=request.origin_tz,
            dest_tz=request.dest_tz,
            shift_hours=shift.shift_hours,
            direction=shift.direction,
            recovery_days=recovery_days,
            recovery_mode=preferences.recovery_mode,
        )

        return RecoveryPlan(
            generated_at=generated_at,
            origin_tz=request.origin_tz,
            dest_tz=request.dest_tz,
            timezone_shift=shift.raw_offset_hours,
            shift_hours=shift.shift_hours,
            direction=shift.direction,
            recovery_mode=preferences.recovery_mode,
            estimated_recovery_days=recovery_days,
            adaptation=get_adaptation_message(
                shift.direction, shift.shift_hours, request.origin_tz, request.dest_tz
            ),
            flight_recommendation=generate_flight_recommendation(shift.direction, is_overnight),
            pre_flight=pre_flight,
            in_flight=generate_in_flight_plan(
                departure, request.dest_tz, shift.direction, is_overnight
            ),
            recovery_days=days,
            recovery_timeline=generate_recovery_timeline(first_day, recovery_days),
            safety_information=generate_safety_information(preferences),
            environment_optimization=generate_environment_optimization(),
            alternative_strategies=generate_alternative_strategies(shift.direction),
            return_journey=return_journey,
            warnings=tuple(warnings),
        )

    def generate_multi_leg(
        self, request: MultiLegRequest, generated_at: datetime | None = None
    ) -> MultiLegPlan:
        """
        Generate a recovery plan for a journey with connections.

        The shift runs from the first origin to the final destination. Long
        layovers absorb part of it; the final destination recovers the rest
        with the same day planner as a direct trip.

        Args:
            request: MultiLegRequest with legs in travel order
            generated_at: Timestamp stamped on the plan (defaults to now, UTC)

        Returns:
            MultiLegPlan

        Raises:
            JetlagPlanError: If any leg or connection fails validation
        """
        legs = request.legs
        origin_tz = legs[0].origin_tz if legs else None
        dest_tz = legs[-1].dest_tz if legs else None
        _raise_for_validation(
            validate_multi_leg_request(request), origin_tz=origin_tz, dest_tz=dest_tz
        )

        if generated_at is None:
            generated_at = datetime.now(UTC)

        preferences = request.preferences
        departure = first_departure(legs)
        arrival = final_arrival(legs)
        shift = calculate_timezone_shift(origin_tz, dest_tz, departure)

        layovers = calculate_layovers(legs)
        days_en_route = sum(layover.duration_hours for layover in layovers) / 24
        rate = en_route_progression_rate(shift.shift_hours, shift.direction, days_en_route)
        stops = MultiLegPlanner(origin_tz, preferences, shift).plan_stops(layovers, rate)

        adapted = stops[-1].cumulative_shift_hours if stops else 0.0
        remaining = round(shift.shift_hours - adapted, 2)
        recovery_days = estimate_recovery_days(
            remaining, shift.direction, preferences.recovery_mode
        )

        warnings = check_plan_sanity(
            origin_tz,
            dest_tz,
            recovery_days,
            remaining,
            shift.direction,
            preferences.recovery_mode,
            check_benchmarks=len(legs) == 1,
        )
        _log_calculation_warnings(warnings, origin_tz, dest_tz)

        body_clock = BodyClockModel(
            origin_tz=origin_tz,
            total_shift_hours=shift.shift_hours,
            total_recovery_days=recovery_days,
            direction=shift.direction,
            pre_adapted_hours=adapted,
        )
        day_planner = DayPlanner(
            dest_tz=dest_tz,
            preferences=preferences,
            direction=shift.direction,
            shift_hours=shift.shift_hours,
            body_clock=body_clock,
        )
        first_day = arrival.date() + timedelta(days=1)
        days = self._plan_days(day_planner, first_day, recovery_days)

        in_flight = []
        for leg in legs:
            leg_departure = localize(leg.departure_datetime, leg.origin_tz)
            leg_arrival = localize(leg.arrival_datetime, leg.dest_tz)
            is_overnight = detect_overnight_flight(
                leg_departure, leg_arrival, leg.origin_tz, leg.dest_tz
            )
            in_flight.append(
                generate_in_flight_plan(leg_departure, leg.dest_tz, shift.direction, is_overnight)
            )

        logger.info(
            "[JETLAG] Generated multi-leg recovery plan",
            origin_tz=origin_tz,
            dest_tz=dest_tz,
            legs=len(legs),
            shift_hours=shift.shift_hours,
            adapted_en_route=adapted,
            direction=shift.direction,
            recovery_days=recovery_days,
        )

        return MultiLegPlan(
            generated_at=generated_at,
            origin_tz=origin_tz,
            dest_tz=dest_tz,
            timezone_shift=shift.raw_offset_hours,
            shift_hours=shift.shift_hours,
            direction=shift.direction,
            recovery_mode=preferences.recovery_mode,
            days_en_route=round(days_en_route, 2),
            progression_rate=round(rate, 2),
            stops=stops,
            remaining_shift_hours=remaining,
            estimated_recovery_days=recovery_days,
            total_journey_days=math.ceil(round(days_en_route, 6)) + recovery_days,
            adaptation=get_adaptation_message(
                shift.direction, shift.shift_hours, origin_tz, dest_tz
            ),
            pre_flight=PreFlightPlanner(origin_tz, dest_tz, preferences, shift.direction).plan(
                departure
            ),
            in_flight=tuple(in_flight),
            recovery_days=days,
            recovery_timeline=generate_recovery_timeline(first_day, recovery_days),
            safety_information=generate_safety_information(preferences),
            environment_optimization=generate_environment_optimization(),
            alternative_strategies=generate_alternative_strategies(shift.direction),
            warnings=tuple(warnings),
        )

    def _plan_days(
        self, planner: DayPlanner, first_day: date, count: int
    ) -> tuple[RecoveryDay, ...]:
        def build(day: int) -> RecoveryDay:
            return planner.plan_day(day, first_day + timedelta(days=day - 1))

        day_indices = range(1, count + 1)
        if self.max_workers is not None and self.max_workers > 1 and count > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                # map() yields results in submission order
                return tuple(pool.map(build, day_indices))
        return tuple(build(day) for day in day_indices)


def generate_recovery_plan(
    request: PlanRequest,
    generated_at: datetime | None = None,
    max_workers: int | None = None,
) -> RecoveryPlan:
    """
    Main entry point for plan generation.

    Args:
        request: PlanRequest with itinerary and preferences
        generated_at: Optional timestamp for the plan (defaults to now)
        max_workers: Optional thread pool size for day generation

    Returns:
        RecoveryPlan
    """
    return RecoveryPlanGenerator(max_workers=max_workers).generate(request, generated_at)


def generate_multi_leg_plan(
    request: MultiLegRequest,
    generated_at: datetime | None = None,
    max_workers: int | None = None,
) -> MultiLegPlan:
    """Entry point for journeys with connections (see generate_multi_leg)."""
    return RecoveryPlanGenerator(max_workers=max_workers).generate_multi_leg(
        request, generated_at
    )


def _to_primitive(value: object) -> object:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    return value


def plan_to_dict(plan: RecoveryPlan | MultiLegPlan) -> dict:
    """Convert a plan to JSON-ready primitives (ISO 8601 timestamps, lists)."""
    return _to_primitive(asdict(plan))
