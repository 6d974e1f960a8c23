"""
Progressive adaptation across layovers.

The jet lag of a journey with connections is the shift from the first
origin to the final destination, never the sum of the legs. Layovers are
chances to get part of the way there before landing:

- Layover under 24h: anchor sleep, hold the schedule you already have
- Layover of 24h or more: shift toward the final destination at the
  progression rate, never past the total shift
- Progression rate: total shift / days en route, capped at what the body
  can manage (about 1.2h/day advancing, 1.8h/day delaying)

Whatever is left on landing is recovered at the final destination with the
regular day planner.
"""

from datetime import datetime, timedelta

from ..circadian_math import at_local_hour, get_zone, hours_between, localize
from ..types import (
    Direction,
    FlightLeg,
    Layover,
    SleepBlock,
    StopAdaptation,
    TimezoneShift,
    UserPreferences,
)

# Physiological ceiling on en-route shifting (hours per day)
MAX_EN_ROUTE_SHIFT_PER_DAY: dict[Direction, float] = {"east": 1.2, "west": 1.8, "none": 0.0}

PROGRESSIVE_MIN_LAYOVER_HOURS = 24
VERY_SHORT_LAYOVER_HOURS = 8


def calculate_layovers(legs: tuple[FlightLeg, ...]) -> tuple[Layover, ...]:
    """
    Layovers between consecutive legs.

    Legs that do not continue from the previous leg's timezone, or that
    depart before it lands, have no layover between them.
    """
    layovers = []
    for index in range(len(legs) - 1):
        leg, next_leg = legs[index], legs[index + 1]
        if leg.dest_tz != next_leg.origin_tz:
            continue

        arrival = localize(leg.arrival_datetime, leg.dest_tz)
        departure = localize(next_leg.departure_datetime, next_leg.origin_tz)
        duration = hours_between(departure, arrival)
        if duration < 0:
            continue

        layovers.append(
            Layover(
                leg_index=index,
                timezone=leg.dest_tz,
                arrival=arrival,
                departure=departure,
                duration_hours=round(duration, 2),
            )
        )
    return tuple(layovers)


def en_route_progression_rate(
    shift_hours: float, direction: Direction, days_en_route: float
) -> float:
    """Hours per day to shift on layovers: what is needed, within what is possible."""
    if days_en_route <= 0:
        return 0.0
    return min(shift_hours / days_en_route, MAX_EN_ROUTE_SHIFT_PER_DAY[direction])


class MultiLegPlanner:
    """Walk the layovers in order and decide how far to adapt at each."""

    def __init__(self, origin_tz: str, preferences: UserPreferences, shift: TimezoneShift):
        self.origin_tz = origin_tz
        self.preferences = preferences
        self.shift = shift

    def plan_stops(
        self, layovers: tuple[Layover, ...], progression_rate: float
    ) -> tuple[StopAdaptation, ...]:
        """
        Adaptation for every layover.

        Args:
            layovers: Layovers in travel order
            progression_rate: Hours per day to shift on long layovers

        Returns:
            One StopAdaptation per layover; the last one's
            remaining_shift_hours is what the final destination must recover
        """
        total = self.shift.shift_hours
        cumulative = 0.0
        stops = []

        for layover in layovers:
            too_short = layover.duration_hours < PROGRESSIVE_MIN_LAYOVER_HOURS
            if too_short or self.shift.direction == "none":
                strategy = "anchor_sleep"
                shifted = 0.0
            else:
                strategy = "progressive"
                days_at_stop = layover.duration_hours / 24
                shifted = min(progression_rate * days_at_stop, total - cumulative)

            cumulative += shifted
            stops.append(
                StopAdaptation(
                    layover=layover,
                    strategy=strategy,
                    shift_during_stop_hours=round(shifted, 2),
                    cumulative_shift_hours=round(cumulative, 2),
                    remaining_shift_hours=round(total - cumulative, 2),
                    sleep=self.stop_sleep(layover, cumulative),
                    recommendations=self._recommendations(strategy, shifted, cumulative),
                    reasoning=self._reasoning(layover, strategy, shifted, progression_rate),
                )
            )

        return tuple(stops)

    def stop_sleep(self, layover: Layover, cumulative_shift: float) -> SleepBlock | None:
        """
        First target sleep inside a layover.

        The usual origin bedtime, moved by the hours already adapted (earlier
        for eastward, later for westward), expressed in the stop's local time.
        Returns None when that bedtime does not fall before the next departure.
        """
        bed_hour = self.preferences.normal_bedtime
        sleep_hours = (self.preferences.normal_wake_time - bed_hour) % 24
        signed = -cumulative_shift if self.shift.direction == "west" else cumulative_shift

        origin_date = layover.arrival.astimezone(get_zone(self.origin_tz)).date()
        bedtime = at_local_hour(origin_date - timedelta(days=1), bed_hour, self.origin_tz)
        bedtime -= timedelta(hours=signed)
        while bedtime < layover.arrival:
            bedtime += timedelta(days=1)

        if bedtime + timedelta(hours=sleep_hours) > layover.departure:
            return None

        stop_zone = get_zone(layover.timezone)
        bedtime = bedtime.astimezone(stop_zone)
        wake_time = (bedtime + timedelta(hours=sleep_hours)).astimezone(stop_zone)
        return SleepBlock(
            bedtime=bedtime,
            wake_time=wake_time,
            duration_hours=round(hours_between(wake_time, bedtime), 2),
            quality="target",
            notes=(
                f"Progressive adaptation: {cumulative_shift:.1f}h shifted from origin"
                if cumulative_shift > 0
                else "Origin sleep schedule - no adaptation yet"
            ),
        )

    def _recommendations(
        self, strategy: str, shifted: float, cumulative: float
    ) -> tuple[str, ...]:
        if strategy == "anchor_sleep":
            return (
                "Keep your current sleep schedule",
                "Avoid trying to adapt - you'll be leaving soon",
                "Use 20-30 minute naps if needed for alertness",
                "Stay in dim light during your usual bedtime hours",
                "Seek bright light during your usual wake hours",
            )

        total = self.shift.shift_hours
        return (
            f"Shift sleep schedule {shifted:.1f} hours toward final destination",
            f"You've now adapted {cumulative:.1f}h of {total:.1f}h total "
            f"({cumulative / total * 100:.0f}%)",
            "Seek bright morning light to advance your clock"
            if self.shift.direction == "east"
            else "Seek bright evening light to delay your clock",
            "Eat meals at intermediate schedule times",
            "Light exercise helps reinforce new rhythm",
        )

    @staticmethod
    def _reasoning(layover: Layover, strategy: str, shifted: float, rate: float) -> str:
        if strategy == "progressive":
            return (
                f"Layover of {layover.duration_hours:.1f}h allows progressive adaptation. "
                f"Shifting {shifted:.1f}h toward final destination (rate: {rate:.1f}h/day)."
            )
        if layover.duration_hours < VERY_SHORT_LAYOVER_HOURS:
            return (
                f"Very short layover ({layover.duration_hours:.1f}h). "
                "Stay on your current schedule and rest where you can."
            )
        return (
            f"Short layover ({layover.duration_hours:.1f}h). "
            "Maintain your current sleep schedule to avoid disruption."
        )


def first_departure(legs: tuple[FlightLeg, ...]) -> datetime:
    return localize(legs[0].departure_datetime, legs[0].origin_tz)


def final_arrival(legs: tuple[FlightLeg, ...]) -> datetime:
    return localize(legs[-1].arrival_datetime, legs[-1].dest_tz)
