"""
Tests for the linear body clock drift model.

Day 1 reads origin time exactly; the final day onward reads destination time.
"""

from datetime import datetime

import pytest

from jetlag_recovery.circadian_math import localize
from jetlag_recovery.science.body_clock import BodyClockModel, shift_progress


@pytest.fixture
def taipei_model():
    """TPE -> YVR: 9h east over 9 days."""
    return BodyClockModel("Asia/Taipei", 9, 9, "east")


@pytest.fixture
def london_model():
    """LHR -> JFK: 5h west over 3 days."""
    return BodyClockModel("Europe/London", 5, 3, "west")


class TestShiftProgress:
    def test_day_one_is_unshifted(self):
        assert shift_progress(1, 5) == 0

    def test_linear_progress(self):
        assert shift_progress(3, 4) == 0.5

    def test_capped_after_recovery(self):
        assert shift_progress(6, 5) == 1
        assert shift_progress(30, 5) == 1

    def test_zero_recovery_days(self):
        assert shift_progress(1, 0) == 0


class TestBodyClockModel:
    """Internal time for destination-local instants."""

    def test_day_one_reads_origin_time(self, taipei_model):
        wake = localize("2025-10-11T06:00", "America/Vancouver")

        estimate = taipei_model.estimate(wake, day=1)

        # 06:00 PDT is 21:00 in Taipei
        assert estimate.internal_time == datetime(2025, 10, 11, 21, 0)
        assert estimate.hours_shifted == 0
        assert estimate.remaining_shift_hours == 9

    def test_eastward_progress_adds_hours(self, taipei_model):
        wake = localize("2025-10-14T06:00", "America/Vancouver")

        estimate = taipei_model.estimate(wake, day=4)

        assert estimate.hours_shifted == pytest.approx(3)
        assert estimate.internal_hour == 0  # 21:00 + 3h

    def test_fully_shifted_reads_destination_time(self, taipei_model):
        wake = localize("2025-10-20T06:00", "America/Vancouver")

        estimate = taipei_model.estimate(wake, day=10)

        assert estimate.hours_shifted == 9
        assert estimate.remaining_shift_hours == 0
        assert estimate.internal_hour == 6

    def test_westward_progress_subtracts_hours(self, london_model):
        seek = localize("2026-06-12T14:00", "America/New_York")

        hour = london_model.internal_hour(seek, day=2)

        # 19:00 London minus 1h40 shifted
        assert hour == pytest.approx(17 + 20 / 60, abs=0.02)

    def test_no_direction_never_shifts(self):
        model = BodyClockModel("America/New_York", 0, 0, "none")
        noon = localize("2026-06-12T12:00", "America/Toronto")

        assert model.hours_shifted(5) == 0
        assert model.internal_hour(noon, day=5) == 12

    def test_estimates_are_pure(self, london_model):
        seek = localize("2026-06-12T14:00", "America/New_York")

        assert london_model.estimate(seek, 2) == london_model.estimate(seek, 2)

    def test_pre_adapted_hours_shift_the_start(self):
        """LAX -> JFK (48h) -> LHR: 2.4h of 8h done on the stopover."""
        model = BodyClockModel("America/Los_Angeles", 8, 6, "east", pre_adapted_hours=2.4)
        wake = localize("2026-06-05T06:00", "Europe/London")

        estimate = model.estimate(wake, day=1)

        assert estimate.hours_shifted == pytest.approx(2.4)
        assert estimate.internal_time == datetime(2026, 6, 5, 0, 24)
        assert model.hours_shifted(6) == pytest.approx(8)


class TestDayBodyClock:
    """Per-day binding with a pre-resolved origin offset."""

    def test_offset_resolved_once(self, taipei_model):
        wake = localize("2025-10-11T06:00", "America/Vancouver")

        clock = taipei_model.for_day(1, wake)

        assert clock.origin_offset_hours == 8
        assert clock.estimate(wake) == taipei_model.estimate(wake, 1)

    def test_effect_classifies_internal_hour(self, taipei_model):
        wake = localize("2025-10-11T06:00", "America/Vancouver")
        clock = taipei_model.for_day(1, wake)

        _, morning = clock.effect(wake, "seek")
        _, evening_seek = clock.effect(localize("2025-10-11T18:00", "America/Vancouver"), "seek")

        assert morning.phase == "biological_evening"
        assert morning.effect == "delay"
        assert evening_seek.phase == "biological_morning"
        assert evening_seek.effect == "advance"
