"""
Tests for overnight detection, in-flight advice and departure windows.
"""

from jetlag_recovery.circadian_math import localize
from jetlag_recovery.scheduling.in_flight import (
    DEFAULT_SLEEP_ADVICE,
    detect_overnight_flight,
    generate_flight_recommendation,
    generate_in_flight_plan,
)


class TestOvernightDetection:
    """Evening departure, morning arrival, long enough to sleep."""

    def test_transatlantic_red_eye(self):
        departure = localize("2026-06-10T19:00", "America/New_York")
        arrival = localize("2026-06-11T07:00", "Europe/London")

        assert detect_overnight_flight(departure, arrival, "America/New_York", "Europe/London")

    def test_afternoon_departure_is_not_overnight(self):
        departure = localize("2026-06-10T17:00", "America/New_York")
        arrival = localize("2026-06-11T05:00", "Europe/London")

        assert not detect_overnight_flight(
            departure, arrival, "America/New_York", "Europe/London"
        )

    def test_short_late_flight_is_not_overnight(self):
        departure = localize("2026-06-10T22:00", "America/New_York")
        arrival = localize("2026-06-11T02:00", "America/New_York")

        assert not detect_overnight_flight(
            departure, arrival, "America/New_York", "America/New_York"
        )

    def test_evening_arrival_is_not_overnight(self):
        departure = localize("2025-10-10T23:40", "Asia/Taipei")
        arrival = localize("2025-10-10T19:30", "America/Vancouver")

        assert not detect_overnight_flight(
            departure, arrival, "Asia/Taipei", "America/Vancouver"
        )


class TestFlightRecommendation:
    def test_eastward_prefers_evening_departure(self):
        rec = generate_flight_recommendation("east", True)

        assert (rec.optimal_departure_start_hour, rec.optimal_departure_end_hour) == (18, 22)
        assert rec.is_overnight_flight

    def test_westward_prefers_day_flight(self):
        rec = generate_flight_recommendation("west", False)

        assert (rec.optimal_departure_start_hour, rec.optimal_departure_end_hour) == (8, 14)

    def test_no_shift_any_time(self):
        rec = generate_flight_recommendation("none", False)

        assert (rec.optimal_departure_start_hour, rec.optimal_departure_end_hour) == (8, 18)


class TestInFlightPlan:
    def test_eastward_overnight_sleep_advice(self):
        departure = localize("2026-06-10T19:00", "America/New_York")

        plan = generate_in_flight_plan(departure, "Europe/London", "east", True)

        assert plan.is_overnight_flight
        assert plan.sleep_recommendations[0].startswith("CRITICAL")

    def test_westward_overnight_stays_awake(self):
        departure = localize("2026-06-10T21:00", "Europe/London")

        plan = generate_in_flight_plan(departure, "America/New_York", "west", True)

        assert any("Avoid melatonin" in line for line in plan.sleep_recommendations)

    def test_default_advice(self):
        departure = localize("2026-06-10T10:00", "Europe/London")

        assert (
            generate_in_flight_plan(departure, "America/New_York", "west", False)
            .sleep_recommendations
            == DEFAULT_SLEEP_ADVICE
        )
        assert (
            generate_in_flight_plan(departure, "America/Toronto", "none", False)
            .sleep_recommendations
            == DEFAULT_SLEEP_ADVICE
        )

    def test_meal_reported_in_destination_time(self):
        departure = localize("2026-06-10T19:00", "America/New_York")

        plan = generate_in_flight_plan(departure, "Europe/London", "east", True)
        (meal,) = plan.meal_timing

        assert meal.type == "snack"
        assert meal.time == departure
        assert meal.time.tzinfo.key == "Europe/London"
        assert meal.time.hour == 0

    def test_hydration_and_movement_present(self):
        departure = localize("2026-06-10T19:00", "America/New_York")

        plan = generate_in_flight_plan(departure, "Europe/London", "east", False)

        assert plan.hydration
        assert plan.movement
