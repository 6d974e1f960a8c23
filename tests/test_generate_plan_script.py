"""
Tests for the JSON request script.
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "generate_plan.py"

_spec = importlib.util.spec_from_file_location("generate_plan", SCRIPT)
generate_plan = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(generate_plan)


REQUEST = {
    "origin_tz": "Europe/London",
    "dest_tz": "America/New_York",
    "departure_datetime": "2026-06-10T10:00",
    "arrival_datetime": "2026-06-10T13:00",
    "flight_duration_hours": 8,
    "recovery_mode": "aggressive",
}

JOURNEY = {
    "legs": [
        {
            "origin_tz": "America/Los_Angeles",
            "dest_tz": "America/New_York",
            "departure_datetime": "2026-06-01T08:00",
            "arrival_datetime": "2026-06-01T16:30",
            "flight_duration_hours": 5.5,
            "flight_number": "AA 2",
        },
        {
            "origin_tz": "America/New_York",
            "dest_tz": "Europe/London",
            "departure_datetime": "2026-06-03T16:30",
            "arrival_datetime": "2026-06-04T04:30",
            "flight_duration_hours": 7,
        },
    ],
}


def run_script(monkeypatch, capsys, *args) -> tuple[int, dict]:
    monkeypatch.setattr(sys, "argv", ["generate_plan.py", *args])
    code = 0
    try:
        generate_plan.main()
    except SystemExit as exc:
        code = exc.code
    return code, json.loads(capsys.readouterr().out)


class TestRequestFromDict:
    def test_defaults(self):
        request = generate_plan.request_from_dict(
            {key: value for key, value in REQUEST.items() if key != "recovery_mode"}
        )

        assert request.preferences.normal_bedtime == 22
        assert request.preferences.recovery_mode == "conservative"
        assert request.return_departure_datetime is None

    def test_preferences_passed_through(self):
        request = generate_plan.request_from_dict({**REQUEST, "age": 70, "normal_wake_time": 7})

        assert request.preferences.recovery_mode == "aggressive"
        assert request.preferences.age == 70
        assert request.preferences.normal_wake_time == 7

    def test_legs(self):
        request = generate_plan.multi_leg_request_from_dict({**JOURNEY, "normal_bedtime": 23})

        assert len(request.legs) == 2
        assert request.legs[0].flight_number == "AA 2"
        assert request.legs[1].flight_number is None
        assert request.preferences.normal_bedtime == 23


class TestMain:
    def test_writes_plan(self, tmp_path, monkeypatch, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps(REQUEST))

        code, output = run_script(monkeypatch, capsys, str(request_file))

        assert code == 0
        assert output["direction"] == "west"
        assert output["estimated_recovery_days"] == 3

    def test_writes_multi_leg_plan(self, tmp_path, monkeypatch, capsys):
        request_file = tmp_path / "journey.json"
        request_file.write_text(json.dumps(JOURNEY))

        code, output = run_script(monkeypatch, capsys, str(request_file))

        assert code == 0
        assert output["stops"][0]["strategy"] == "progressive"
        assert output["remaining_shift_hours"] == 5.6
        assert output["total_journey_days"] == 8

    def test_missing_file(self, tmp_path, monkeypatch, capsys):
        code, output = run_script(monkeypatch, capsys, str(tmp_path / "missing.json"))

        assert code == 1
        assert "not found" in output["error"]

    def test_missing_field(self, tmp_path, monkeypatch, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps({"origin_tz": "Europe/London"}))

        code, output = run_script(monkeypatch, capsys, str(request_file))

        assert code == 1
        assert output["error"].startswith("Missing required field")

    def test_validation_error(self, tmp_path, monkeypatch, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps({**REQUEST, "dest_tz": "Nowhere/Special"}))

        code, output = run_script(monkeypatch, capsys, str(request_file))

        assert code == 1
        assert output["code"] == "INVALID_TIMEZONE"
        assert output["details"]

    def test_usage(self, monkeypatch, capsys):
        code, output = run_script(monkeypatch, capsys)

        assert code == 1
        assert output["error"].startswith("Usage")
