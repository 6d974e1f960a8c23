"""
Pre-flight taper for the three days before departure.

Bed and wake times move toward the destination by 30 minutes per day
(90/60/30 minutes on days 3/2/1 before departure): earlier for eastward
travel, later for westward. Before departure the body still runs on origin
time, so light windows are classified on the origin wall clock.

Timestamps are built in origin local time and returned in destination
local time like the rest of the plan.
"""

from datetime import date, datetime, timedelta

from ..circadian_math import at_local_hour, get_zone, hours_between
from ..science.prc import circadian_effect, should_seek
from ..types import (
    Direction,
    LightTherapySession,
    LuxRange,
    PreFlightSchedule,
    Recommendation,
    SleepBlock,
    UserPreferences,
    Wavelength,
)
from .light_planner import BRIGHT_INDOOR_TIER

TAPER_DAYS = 3
TAPER_STEP_MINUTES = 30

EAST_MORNING_SEEK_MINUTES = 30
EVENING_AVOID_MINUTES = 120  # Eastward: dim lights 2h before bed
WEST_SEEK_START_BEFORE_BED_MINUTES = 120  # Westward: seek from bed-2h to bed-1h
WEST_SEEK_MINUTES = 60

TAPER_SEEK_LUX = LuxRange(minimum=5000, ideal=10000)


def taper_shift_minutes(days_before: int, direction: Direction) -> int:
    """
    Signed bed/wake shift for a day before departure.

    Args:
        days_before: 1-3 (3 is furthest from departure)
        direction: Adaptation direction

    Returns:
        Minutes to add to the normal bed/wake time: negative (earlier) for
        east, positive (later) for west, 0 for none
    """
    if direction == "none":
        return 0
    minutes = TAPER_STEP_MINUTES * days_before
    return -minutes if direction == "east" else minutes


def _hour_of(instant: datetime) -> float:
    return instant.hour + instant.minute / 60


class PreFlightPlanner:
    """Gradual pre-departure shift of sleep and light."""

    def __init__(
        self,
        origin_tz: str,
        dest_tz: str,
        preferences: UserPreferences,
        direction: Direction,
    ):
        self.origin_tz = origin_tz
        self.dest_tz = dest_tz
        self.preferences = preferences
        self.direction = direction
        self._dest_zone = get_zone(dest_tz)

    def _to_dest(self, instant: datetime) -> datetime:
        return instant.astimezone(self._dest_zone)

    def _adjusted_sleep(self, day_date: date, shift: int) -> tuple[datetime, datetime]:
        wake_hour = self.preferences.normal_wake_time
        bed_hour = self.preferences.normal_bedtime

        bed_date = day_date if bed_hour > wake_hour else day_date + timedelta(days=1)
        bedtime = at_local_hour(bed_date, bed_hour, self.origin_tz, minutes=shift)
        wake = at_local_hour(day_date + timedelta(days=1), wake_hour, self.origin_tz, minutes=shift)
        return bedtime, wake

    def plan(self, departure: datetime) -> PreFlightSchedule:
        """
        Build the taper for the three origin-local days before departure.

        Args:
            departure: Aware departure datetime

        Returns:
            PreFlightSchedule (empty when no shift is needed)
        """
        if self.direction == "none":
            return PreFlightSchedule()

        departure_date = departure.astimezone(get_zone(self.origin_tz)).date()
        light: list[LightTherapySession] = []
        sleep: list[SleepBlock] = []

        for days_before in range(TAPER_DAYS, 0, -1):
            shift = taper_shift_minutes(days_before, self.direction)
            bedtime, wake = self._adjusted_sleep(
                departure_date - timedelta(days=days_before), shift
            )

            if self.direction == "east":
                light.extend(self._east_sessions(bedtime, wake))
                when = "earlier"
            else:
                light.extend(self._west_sessions(bedtime))
                when = "later"

            sleep.append(
                SleepBlock(
                    bedtime=self._to_dest(bedtime),
                    wake_time=self._to_dest(wake),
                    duration_hours=round(hours_between(wake, bedtime), 2),
                    quality="target",
                    notes=f"Go to bed {abs(shift)} minutes {when} than usual",
                )
            )

        return PreFlightSchedule(
            light_therapy=tuple(sorted(light, key=lambda s: s.start)),
            sleep=tuple(sleep),
        )

    def _east_sessions(self, bedtime: datetime, wake: datetime) -> list[LightTherapySession]:
        sessions = []

        # Bedtime falls before the next wake, so the evening session comes first
        avoid_start = bedtime - timedelta(minutes=EVENING_AVOID_MINUTES)
        avoid_effect = circadian_effect(_hour_of(avoid_start), "avoid")
        sessions.append(
            LightTherapySession(
                start=self._to_dest(avoid_start),
                end=self._to_dest(bedtime),
                duration_min=EVENING_AVOID_MINUTES,
                type="avoid",
                intensity="dim",
                priority="critical",
                target_lux=LuxRange(minimum=0, ideal=50),
                description="Dim lights in evening, wear blue light blocking glasses",
                circadian_phase=avoid_effect.phase,
                effect_on_phase=avoid_effect.effect,
                wavelength=Wavelength(
                    optimal="Warm light <2700K", avoid="Blue-enriched light >5000K"
                ),
                recommendations=(
                    Recommendation("best", "Dim all lights to <50 lux"),
                    Recommendation("good", "Use blue-blocking glasses if using screens"),
                    Recommendation("acceptable", "Enable device night modes and reduce brightness"),
                ),
                practical_notes=(
                    "Helps begin shifting melatonin production earlier",
                    "Makes first day at destination easier",
                ),
            )
        )

        seek_effect = circadian_effect(_hour_of(wake), "seek")
        if should_seek("east", seek_effect.effect):
            sessions.append(
                LightTherapySession(
                    start=self._to_dest(wake),
                    end=self._to_dest(wake + timedelta(minutes=EAST_MORNING_SEEK_MINUTES)),
                    duration_min=EAST_MORNING_SEEK_MINUTES,
                    type="seek",
                    intensity="bright",
                    priority="critical",
                    target_lux=TAPER_SEEK_LUX,
                    description="Get bright morning sunlight to shift circadian rhythm earlier",
                    circadian_phase=seek_effect.phase,
                    effect_on_phase=seek_effect.effect,
                    recommendations=(
                        Recommendation("best", "Natural outdoor sunlight for 30 min"),
                        Recommendation("good", "10,000 lux light box for 30 min"),
                        Recommendation("acceptable", "Very bright indoor lighting for 45-60 min"),
                    ),
                    practical_notes=(
                        "Pre-flight preparation helps ease transition",
                        "Even partial compliance is beneficial",
                    ),
                )
            )

        return sessions

    def _west_sessions(self, bedtime: datetime) -> list[LightTherapySession]:
        start = bedtime - timedelta(minutes=WEST_SEEK_START_BEFORE_BED_MINUTES)
        effect = circadian_effect(_hour_of(start), "seek")
        if not should_seek("west", effect.effect):
            return []

        return [
            LightTherapySession(
                start=self._to_dest(start),
                end=self._to_dest(start + timedelta(minutes=WEST_SEEK_MINUTES)),
                duration_min=WEST_SEEK_MINUTES,
                type="seek",
                intensity="bright",
                priority="critical",
                target_lux=TAPER_SEEK_LUX,
                description="Get bright evening light to delay circadian rhythm",
                circadian_phase=effect.phase,
                effect_on_phase=effect.effect,
                wavelength=Wavelength(optimal="460-480nm blue-enriched light"),
                recommendations=(
                    Recommendation("best", "Natural outdoor light for 60 min"),
                    Recommendation("good", "10,000 lux light box for 60 min"),
                    BRIGHT_INDOOR_TIER,
                ),
                practical_notes=(
                    "Pre-flight preparation helps ease transition",
                    "Staying up later becomes easier at destination",
                ),
            )
        ]
