"""
Practical Scheduling Layer.

Turns the science layer's answers into concrete, timestamped schedules.

Modules:
- light_planner: Seek/avoid light windows for one recovery day
- day_planner: Sleep, meals, exercise, caffeine, naps and melatonin per day
- pre_flight: Three-day taper before departure
- in_flight: In-flight advice and departure timing recommendation
- multi_leg: Layovers and progressive adaptation for journeys with connections
"""

from .day_planner import DayPlanner
from .in_flight import (
    detect_overnight_flight,
    generate_flight_recommendation,
    generate_in_flight_plan,
)
from .light_planner import DayContext, LightTherapyPlanner
from .multi_leg import MultiLegPlanner, calculate_layovers, en_route_progression_rate
from .pre_flight import PreFlightPlanner, taper_shift_minutes

__all__ = [
    "DayContext",
    "DayPlanner",
    "LightTherapyPlanner",
    "MultiLegPlanner",
    "calculate_layovers",
    "en_route_progression_rate",
    "PreFlightPlanner",
    "taper_shift_minutes",
    "detect_overnight_flight",
    "generate_flight_recommendation",
    "generate_in_flight_plan",
]
