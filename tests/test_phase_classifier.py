"""
Tests for the light phase response curve table.

Every internal hour maps to exactly one bucket, and every (bucket, action)
pair has a fixed effect.
"""

import pytest

from jetlag_recovery.science.prc import (
    LIGHT_PRC_TABLE,
    circadian_effect,
    classify_phase,
    is_harmful_seek,
    should_seek,
)

EXPECTED_SEEK = {
    "biological_late_night": "advance",
    "biological_morning": "advance",
    "biological_afternoon": "weak_advance",
    "biological_evening": "delay",
}

EXPECTED_AVOID = {
    "biological_late_night": "neutral",
    "biological_morning": "neutral",
    "biological_afternoon": "neutral",
    "biological_evening": "advance",
}


def expected_phase(hour: float) -> str:
    if hour < 4:
        return "biological_late_night"
    if hour < 12:
        return "biological_morning"
    if hour < 18:
        return "biological_afternoon"
    return "biological_evening"


class TestClassifyPhase:
    """Bucket boundaries on the internal clock."""

    def test_every_half_hour(self):
        for half_hours in range(48):
            hour = half_hours / 2
            assert classify_phase(hour) == expected_phase(hour), hour

    @pytest.mark.parametrize(
        "hour,phase",
        [
            (0, "biological_late_night"),
            (3.99, "biological_late_night"),
            (4, "biological_morning"),
            (11.99, "biological_morning"),
            (12, "biological_afternoon"),
            (17.99, "biological_afternoon"),
            (18, "biological_evening"),
            (23.99, "biological_evening"),
        ],
    )
    def test_boundaries_are_half_open(self, hour, phase):
        assert classify_phase(hour) == phase

    def test_wraps_around_the_clock(self):
        assert classify_phase(24) == "biological_late_night"
        assert classify_phase(26.5) == "biological_late_night"
        assert classify_phase(-1) == "biological_evening"


class TestCircadianEffect:
    """The full (bucket, action) matrix."""

    def test_table_is_complete(self):
        for phase in EXPECTED_SEEK:
            assert (phase, "seek") in LIGHT_PRC_TABLE
            assert (phase, "avoid") in LIGHT_PRC_TABLE

    def test_seek_and_avoid_for_every_hour(self):
        for hour in range(24):
            phase = expected_phase(hour)
            seek = circadian_effect(hour, "seek")
            avoid = circadian_effect(hour, "avoid")

            assert seek.phase == avoid.phase == phase
            assert seek.effect == EXPECTED_SEEK[phase], hour
            assert avoid.effect == EXPECTED_AVOID[phase], hour
            assert seek.description
            assert avoid.description


class TestSeekRules:
    """Which effects each direction may seek."""

    @pytest.mark.parametrize(
        "direction,effect,allowed",
        [
            ("east", "advance", True),
            ("east", "weak_advance", True),
            ("east", "delay", False),
            ("east", "neutral", False),
            ("west", "delay", True),
            ("west", "advance", False),
            ("west", "weak_advance", False),
            ("none", "advance", False),
        ],
    )
    def test_should_seek(self, direction, effect, allowed):
        assert should_seek(direction, effect) is allowed

    def test_harmful_seeks(self):
        assert is_harmful_seek("east", "delay")
        assert not is_harmful_seek("east", "weak_advance")
        assert is_harmful_seek("west", "advance")
        assert is_harmful_seek("west", "weak_advance")
        assert not is_harmful_seek("west", "delay")
        assert not is_harmful_seek("east", None)
