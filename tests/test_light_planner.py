"""
Tests for per-day light therapy planning.

Every seek session must push the clock the way the traveler needs to go:
advances (weak or strong) for eastward travel, delays for westward travel.
"""

from dataclasses import replace
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from loguru import logger

from helpers import ROUTES, advancing_seeks, all_sessions, get_day, make_request
from jetlag_recovery.scheduler import generate_recovery_plan
from jetlag_recovery.scheduling.day_planner import DayPlanner
from jetlag_recovery.scheduling.light_planner import DayContext, LightTherapyPlanner
from jetlag_recovery.science.body_clock import BodyClockModel, DayBodyClock
from jetlag_recovery.science.prc import LIGHT_PRC_TABLE
from jetlag_recovery.types import UserPreferences

NEW_YORK = ZoneInfo("America/New_York")
VANCOUVER = ZoneInfo("America/Vancouver")
LONDON = ZoneInfo("Europe/London")


def westward_planner(**preferences) -> DayPlanner:
    """LHR -> JFK: 5h west over 3 days."""
    model = BodyClockModel("Europe/London", 5, 3, "west")
    return DayPlanner("America/New_York", UserPreferences(**preferences), "west", 5, model)


def eastward_planner(**preferences) -> DayPlanner:
    """JFK -> LHR: 5h east over 5 days."""
    model = BodyClockModel("America/New_York", 5, 5, "east")
    return DayPlanner("Europe/London", UserPreferences(**preferences), "east", 5, model)


class TestWestwardDayOne:
    """London -> New York, first day after arrival."""

    def test_single_delaying_seek(self, london_to_new_york_request, generated_at):
        plan = generate_recovery_plan(london_to_new_york_request, generated_at)
        day_one = get_day(plan, 1)

        seeks = [s for s in day_one.light_therapy if s.type == "seek"]

        assert len(seeks) == 1
        assert seeks[0].effect_on_phase == "delay"
        assert seeks[0].circadian_phase == "biological_evening"
        assert seeks[0].start == datetime(2026, 6, 11, 14, 0, tzinfo=NEW_YORK)
        assert seeks[0].duration_min == 120

    def test_morning_avoid_and_pre_bed_dimming(self, london_to_new_york_request, generated_at):
        plan = generate_recovery_plan(london_to_new_york_request, generated_at)
        sessions = get_day(plan, 1).light_therapy

        assert [s.type for s in sessions] == ["avoid", "seek", "avoid"]
        assert sessions[0].start == datetime(2026, 6, 11, 6, 0, tzinfo=NEW_YORK)
        assert sessions[0].duration_min == 120
        assert sessions[2].start == datetime(2026, 6, 11, 21, 0, tzinfo=NEW_YORK)
        assert sessions[2].duration_min == 60

    def test_at_most_one_advancing_seek_in_acute_days(
        self, london_to_new_york_request, generated_at
    ):
        plan = generate_recovery_plan(london_to_new_york_request, generated_at)

        for day in plan.recovery_days:
            if day.phase == "acute":
                assert len(advancing_seeks(day)) <= 1, day.day


class TestWestwardEveningWindow:
    """Evening seek placement against bedtime."""

    def test_ends_before_bed(self):
        day = westward_planner().plan_day(1, date(2026, 6, 11))
        seek = next(s for s in day.light_therapy if s.type == "seek")

        assert seek.end <= day.bedtime - timedelta(minutes=30)

    def test_moves_earlier_instead_of_shrinking(self):
        day = westward_planner(normal_bedtime=17, recovery_mode="aggressive").plan_day(
            1, date(2026, 6, 11)
        )
        seek = next(s for s in day.light_therapy if s.type == "seek")

        assert seek.duration_min == 240
        assert seek.start == datetime(2026, 6, 11, 12, 30, tzinfo=NEW_YORK)
        assert seek.end == datetime(2026, 6, 11, 16, 30, tzinfo=NEW_YORK)

    def test_pre_bed_dimming_dropped_when_it_overlaps(self):
        day = westward_planner(normal_bedtime=17, recovery_mode="aggressive").plan_day(
            1, date(2026, 6, 11)
        )

        assert [s.type for s in day.light_therapy] == ["avoid", "seek"]

    def test_short_waking_day_clamps_to_wake(self):
        day = westward_planner(
            normal_wake_time=6, normal_bedtime=7, recovery_mode="aggressive"
        ).plan_day(1, date(2026, 6, 11))
        seek = next(s for s in day.light_therapy if s.type == "seek")

        assert seek.start == day.wake_time
        assert seek.duration_min == 30

    def test_later_phases_use_later_offset(self):
        day = westward_planner().plan_day(4, date(2026, 6, 14))
        seek = next(s for s in day.light_therapy if s.type == "seek")

        assert seek.start == datetime(2026, 6, 14, 15, 0, tzinfo=NEW_YORK)
        assert seek.duration_min == 90


class TestEastwardDayOne:
    """Eastward morning decision driven by the internal clock at wake."""

    def test_morning_seek_when_wake_is_late_night(self):
        day = eastward_planner().plan_day(1, date(2026, 6, 12))
        sessions = day.light_therapy

        assert [s.type for s in sessions] == ["seek", "seek", "avoid"]
        morning, midday, pre_bed = sessions

        assert morning.start == datetime(2026, 6, 12, 6, 0, tzinfo=LONDON)
        assert morning.duration_min == 60
        assert morning.circadian_phase == "biological_late_night"
        assert morning.effect_on_phase == "advance"
        assert any("late night" in note for note in morning.practical_notes)

        assert midday.start == datetime(2026, 6, 12, 12, 0, tzinfo=LONDON)
        assert midday.priority == "maintenance"

        assert pre_bed.start == datetime(2026, 6, 12, 20, 0, tzinfo=LONDON)
        assert pre_bed.duration_min == 120

    def test_aggressive_morning_session_is_longer(self):
        day = eastward_planner(recovery_mode="aggressive").plan_day(1, date(2026, 6, 12))

        assert day.light_therapy[0].duration_min == 180
        assert day.light_therapy[0].description.startswith("AGGRESSIVE")

    def test_no_midday_boost_in_maintenance(self):
        model = BodyClockModel("America/New_York", 9, 9, "east")
        planner = DayPlanner("Europe/London", UserPreferences(), "east", 9, model)

        day = planner.plan_day(9, date(2026, 6, 20))

        assert day.phase == "maintenance"
        assert all(s.start.hour != 12 for s in day.light_therapy)
        assert day.light_therapy[-1].duration_min == 90


class TestDatelineEastward:
    """Taipei -> Vancouver: wake lands in the biological evening."""

    def test_day_one_morning_is_avoid(self, taipei_to_vancouver_request, generated_at):
        plan = generate_recovery_plan(taipei_to_vancouver_request, generated_at)
        morning = get_day(plan, 1).light_therapy[0]

        assert morning.type == "avoid"
        assert morning.start == datetime(2025, 10, 11, 6, 0, tzinfo=VANCOUVER)
        assert morning.circadian_phase == "biological_evening"
        assert morning.effect_on_phase == "advance"

    def test_day_one_later_seek_advances(self, taipei_to_vancouver_request, generated_at):
        plan = generate_recovery_plan(taipei_to_vancouver_request, generated_at)
        day_one = get_day(plan, 1)
        seeks = [s for s in day_one.light_therapy if s.type == "seek"]

        later = next(s for s in seeks if s.start.hour == 18)
        pre_bed = day_one.light_therapy[-1]

        assert later.effect_on_phase == "advance"
        assert later.circadian_phase == "biological_morning"
        assert later.duration_min == 120
        assert later.end <= pre_bed.start
        assert later.end <= day_one.bedtime - timedelta(minutes=30)

    def test_day_one_session_order(self, taipei_to_vancouver_request, generated_at):
        plan = generate_recovery_plan(taipei_to_vancouver_request, generated_at)
        sessions = get_day(plan, 1).light_therapy

        assert [(s.start.hour, s.type) for s in sessions] == [
            (6, "avoid"),
            (12, "seek"),
            (18, "seek"),
            (20, "avoid"),
        ]

    def test_morning_seek_returns_once_clock_advances(
        self, taipei_to_vancouver_request, generated_at
    ):
        plan = generate_recovery_plan(taipei_to_vancouver_request, generated_at)
        last = get_day(plan, 9)

        assert last.light_therapy[0].type == "seek"
        assert last.light_therapy[0].start.hour == 6


class TestDirectionInvariants:
    """Property-style checks across realistic routes and both modes."""

    @pytest.mark.parametrize("mode", ["conservative", "aggressive"])
    @pytest.mark.parametrize("route", ROUTES, ids=lambda r: f"{r[0]}->{r[1]}")
    def test_seeks_match_direction(self, route, mode, generated_at):
        plan = generate_recovery_plan(make_request(*route, recovery_mode=mode), generated_at)

        for session in all_sessions(plan):
            assert session.duration_min >= 30
            if session.type != "seek":
                continue
            if plan.direction == "east":
                assert session.effect_on_phase != "delay"
            elif plan.direction == "west":
                assert session.effect_on_phase is not None

        if plan.direction == "west":
            for day in plan.recovery_days:
                if day.phase == "acute":
                    assert len(advancing_seeks(day)) <= 1
                for session in day.light_therapy:
                    if session.type == "seek":
                        assert session.end <= day.bedtime - timedelta(minutes=30)

    @pytest.mark.parametrize("route", ROUTES, ids=lambda r: f"{r[0]}->{r[1]}")
    def test_sessions_sorted_and_classified(self, route, generated_at):
        plan = generate_recovery_plan(make_request(*route), generated_at)

        for day in plan.recovery_days:
            starts = [s.start for s in day.light_therapy]
            assert starts == sorted(starts)
            for session in day.light_therapy:
                assert session.circadian_phase is not None
                assert session.effect_on_phase is not None
                assert session.end - session.start == timedelta(minutes=session.duration_min)

    def test_no_shift_has_no_sessions(self):
        model = BodyClockModel("America/New_York", 0, 0, "none")
        planner = DayPlanner("America/Toronto", UserPreferences(), "none", 0, model)

        assert planner.plan_day(1, date(2026, 6, 11)).light_therapy == ()


class TestHarmfulSeekGuard:
    """The planner never returns a seek that fights the required direction."""

    @pytest.fixture
    def dropped_seek_logs(self):
        messages = []
        handler_id = logger.add(
            messages.append,
            level="WARNING",
            format="{message}",
            filter=lambda record: "Dropping seek" in record["message"],
        )
        yield messages
        logger.remove(handler_id)

    def westward_context(self, origin_offset_hours: float) -> DayContext:
        model = BodyClockModel("Europe/London", 5, 3, "west")
        wake = datetime(2026, 6, 11, 6, 0, tzinfo=NEW_YORK)
        return DayContext(
            day=1,
            phase="acute",
            wake_time=wake,
            bedtime=datetime(2026, 6, 11, 22, 0, tzinfo=NEW_YORK),
            direction="west",
            shift_hours=5,
            recovery_mode="conservative",
            clock=DayBodyClock(model=model, day=1, origin_offset_hours=origin_offset_hours),
        )

    def test_delaying_evening_seek_is_kept(self):
        sessions = LightTherapyPlanner().plan(self.westward_context(1))

        assert [s.type for s in sessions] == ["avoid", "seek", "avoid"]

    def test_one_advancing_westward_seek_is_allowed(self):
        # 14:00 EDT is 18:00 UTC; a -10h body clock reads 08:00 (biological morning)
        sessions = LightTherapyPlanner().plan(self.westward_context(-10))

        assert [s.type for s in sessions] == ["avoid", "seek", "avoid"]
        assert sessions[1].effect_on_phase == "advance"

    def test_second_advancing_westward_seek_is_dropped(self, dropped_seek_logs):
        ctx = self.westward_context(-10)
        planner = LightTherapyPlanner()
        seek = next(s for s in planner._plan_westward(ctx) if s.type == "seek")
        hour = timedelta(hours=1)
        later = replace(seek, start=seek.start + hour, end=seek.end + hour)
        planner._strategies["west"] = lambda _: [seek, later]

        assert planner.plan(ctx) == (seek,)
        assert len(dropped_seek_logs) == 1

    def test_delaying_eastward_seek_is_dropped(self, dropped_seek_logs):
        ctx = self.westward_context(1)
        planner = LightTherapyPlanner()
        seek = next(s for s in planner._plan_westward(ctx) if s.type == "seek")
        planner._strategies["east"] = lambda _: [seek]

        assert seek.effect_on_phase == "delay"
        assert planner.plan(replace(ctx, direction="east")) == ()
        assert len(dropped_seek_logs) == 1

    @pytest.mark.parametrize("route", ROUTES, ids=lambda r: f"{r[0]}->{r[1]}")
    def test_east_morning_avoid_effect_comes_from_table(self, route, generated_at):
        plan = generate_recovery_plan(make_request(*route), generated_at)
        if plan.direction != "east":
            pytest.skip("eastward routes only")

        for day in plan.recovery_days:
            morning = day.light_therapy[0]
            if morning.type != "avoid":
                continue
            expected, _ = LIGHT_PRC_TABLE[(morning.circadian_phase, "avoid")]
            assert morning.effect_on_phase == expected
