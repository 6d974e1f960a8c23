"""
In-flight advice and departure timing.

Advice is static and keyed only by direction and whether the flight is an
overnight flight (departs evening, lands morning, long enough to sleep).
"""

from datetime import datetime

from ..circadian_math import get_zone, hours_between, local_hour
from ..types import Direction, FlightRecommendation, InFlightPlan, MealTiming

OVERNIGHT_MIN_DEPARTURE_HOUR = 18
OVERNIGHT_MAX_ARRIVAL_HOUR = 10
OVERNIGHT_MIN_FLIGHT_HOURS = 5

SLEEP_ADVICE: dict[tuple[Direction, bool], tuple[str, ...]] = {
    ("east", True): (
        "CRITICAL: Sleep as much as possible during this overnight flight",
        "Take melatonin 30-60 minutes after takeoff to help you sleep",
        "Use eye mask, earplugs, and neck pillow",
        "Decline meal service if it interferes with sleep",
        "Set your watch to destination time immediately",
    ),
    ("west", True): (
        "Try to stay awake as long as possible, even on this overnight flight",
        "Watch movies, read, or work to stay alert",
        "If you must sleep, limit it to 2-3 hours maximum",
        "Use bright light (reading light, screen) to stay awake",
        "Avoid melatonin - it will make staying awake harder",
    ),
    ("east", False): (
        "Try to sleep during the flight to arrive rested",
        "Use eye mask and earplugs for better sleep",
        "Avoid alcohol and caffeine 4 hours before planned sleep",
    ),
}

# West day flights and no-shift flights share the stay-awake advice
DEFAULT_SLEEP_ADVICE = (
    "Stay awake during the flight if possible",
    "Use bright light and screens to stay alert",
    "Short 20-minute power naps are OK if needed",
)

HYDRATION_ADVICE = (
    "Drink 8oz of water every hour",
    "Avoid alcohol - it worsens jetlag",
    "Limit caffeine to morning hours only",
)

MOVEMENT_ADVICE = (
    "Walk the aisles every 2 hours",
    "Stretch in your seat every 30 minutes",
    "Do ankle circles and leg raises",
)

# direction -> (start hour, end hour, reasoning, alternative)
DEPARTURE_WINDOWS: dict[Direction, tuple[int, int, str, str]] = {
    "east": (
        18,
        22,
        "Overnight flights allow you to sleep during the flight and arrive in the morning, "
        "making it easier to adjust to the earlier timezone. You can start your day aligned "
        "with local time.",
        "If only day flights available, try to stay awake during flight and go to bed at "
        "normal local time upon arrival.",
    ),
    "west": (
        8,
        14,
        "Day flights help you stay awake during the journey, which aligns with your goal of "
        "delaying your circadian rhythm. Arrive in the afternoon/evening and stay up until "
        "normal local bedtime.",
        "If only overnight flights available, try to stay awake as much as possible and use "
        "bright light upon arrival.",
    ),
    "none": (
        8,
        18,
        "No significant timezone change - flight timing is less critical.",
        "Any flight time works.",
    ),
}


def detect_overnight_flight(
    departure: datetime, arrival: datetime, origin_tz: str, dest_tz: str
) -> bool:
    """
    True for evening departures that land in the morning with time to sleep.

    Departure hour is read at the origin, arrival hour at the destination.
    """
    return (
        local_hour(departure, origin_tz) >= OVERNIGHT_MIN_DEPARTURE_HOUR
        and local_hour(arrival, dest_tz) <= OVERNIGHT_MAX_ARRIVAL_HOUR
        and hours_between(arrival, departure) > OVERNIGHT_MIN_FLIGHT_HOURS
    )


def generate_flight_recommendation(
    direction: Direction, is_overnight_flight: bool
) -> FlightRecommendation:
    """Best departure window for this direction of travel."""
    start, end, reasoning, alternative = DEPARTURE_WINDOWS[direction]
    return FlightRecommendation(
        optimal_departure_start_hour=start,
        optimal_departure_end_hour=end,
        reasoning=reasoning,
        alternative_if_unavailable=alternative,
        is_overnight_flight=is_overnight_flight,
    )


def generate_in_flight_plan(
    departure: datetime,
    dest_tz: str,
    direction: Direction,
    is_overnight_flight: bool,
) -> InFlightPlan:
    """
    Static in-flight advice.

    Args:
        departure: Aware departure datetime
        dest_tz: Destination timezone (the meal time is reported there)
        direction: Adaptation direction
        is_overnight_flight: Result of detect_overnight_flight

    Returns:
        InFlightPlan with sleep, meal, hydration and movement advice
    """
    sleep_advice = SLEEP_ADVICE.get((direction, is_overnight_flight), DEFAULT_SLEEP_ADVICE)
    return InFlightPlan(
        is_overnight_flight=is_overnight_flight,
        sleep_recommendations=sleep_advice,
        meal_timing=(
            MealTiming(
                time=departure.astimezone(get_zone(dest_tz)),
                type="snack",
                description="Light meal aligned with destination time",
            ),
        ),
        hydration=HYDRATION_ADVICE,
        movement=MOVEMENT_ADVICE,
    )
