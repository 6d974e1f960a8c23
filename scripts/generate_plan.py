#!/usr/bin/env python3
"""
Generate a recovery plan from a JSON request file.

Usage: python3 scripts/generate_plan.py <request_file.json>

Reads a plan request from a JSON file and writes the generated plan as JSON
to stdout. Errors are reported as {"error": ...} with exit status 1.

Request fields: origin_tz, dest_tz, departure_datetime, arrival_datetime,
flight_duration_hours, and optionally normal_bedtime, normal_wake_time,
recovery_mode, uses_melatonin, age, chronotype, return_departure_datetime.

A request with a "legs" list (each leg: origin_tz, dest_tz,
departure_datetime, arrival_datetime, flight_duration_hours and optionally
flight_number) is planned as a journey with connections; the top-level
itinerary fields are then not used.
"""

import json
import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from jetlag_recovery import (  # noqa: E402
    JetlagPlanError,
    generate_multi_leg_plan,
    generate_recovery_plan,
    plan_to_dict,
)
from jetlag_recovery.types import (  # noqa: E402
    FlightLeg,
    MultiLegRequest,
    PlanRequest,
    UserPreferences,
)


def preferences_from_dict(data: dict) -> UserPreferences:
    return UserPreferences(
        normal_bedtime=data.get("normal_bedtime", 22),
        normal_wake_time=data.get("normal_wake_time", 6),
        recovery_mode=data.get("recovery_mode", "conservative"),
        uses_melatonin=data.get("uses_melatonin", True),
        age=data.get("age"),
        chronotype=data.get("chronotype"),
    )


def request_from_dict(data: dict) -> PlanRequest:
    """Build a PlanRequest from decoded JSON."""
    return PlanRequest(
        origin_tz=data["origin_tz"],
        dest_tz=data["dest_tz"],
        departure_datetime=data["departure_datetime"],
        arrival_datetime=data["arrival_datetime"],
        flight_duration_hours=data["flight_duration_hours"],
        preferences=preferences_from_dict(data),
        return_departure_datetime=data.get("return_departure_datetime"),
    )


def multi_leg_request_from_dict(data: dict) -> MultiLegRequest:
    """Build a MultiLegRequest from decoded JSON with a "legs" list."""
    legs = tuple(
        FlightLeg(
            origin_tz=leg["origin_tz"],
            dest_tz=leg["dest_tz"],
            departure_datetime=leg["departure_datetime"],
            arrival_datetime=leg["arrival_datetime"],
            flight_duration_hours=leg["flight_duration_hours"],
            flight_number=leg.get("flight_number"),
        )
        for leg in data["legs"]
    )
    return MultiLegRequest(legs=legs, preferences=preferences_from_dict(data))


def main() -> None:
    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: generate_plan.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        if "legs" in data:
            plan = generate_multi_leg_plan(multi_leg_request_from_dict(data))
        else:
            plan = generate_recovery_plan(request_from_dict(data))
        print(json.dumps(plan_to_dict(plan)))

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
        sys.exit(1)
    except KeyError as e:
        print(json.dumps({"error": f"Missing required field: {e}"}))
        sys.exit(1)
    except JetlagPlanError as e:
        print(json.dumps({"error": e.message, "code": e.code, "details": e.details}))
        sys.exit(1)


if __name__ == "__main__":
    main()
