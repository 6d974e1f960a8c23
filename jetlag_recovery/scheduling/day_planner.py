"""
Full schedule for one recovery day.

Each day is computed independently from its index and the plan's fixed
parameters, so days can be generated in any order (or in parallel) and
still come out identical.

Everything is anchored to the day's wake time in destination local time:
- Meals: breakfast +30 min, lunch +5h, dinner +11h
- Exercise: light walk +3h
- Caffeine: strategic doses (aggressive, days 1-3) or basic guidance
- Naps: aggressive mode, shift >= 4h, days 1-2 only
- Melatonin: days 1-5, 2h before bed
"""

from datetime import date, datetime, timedelta

from ..circadian_math import at_local_hour, hours_between
from ..science.body_clock import BodyClockModel
from ..science.recovery import recovery_phase_for_day
from ..types import (
    CaffeineDose,
    Direction,
    ExerciseSession,
    MealTiming,
    MelatoninDose,
    RecoveryDay,
    SleepBlock,
    StrategicNap,
    UserPreferences,
)
from .light_planner import DayContext, LightTherapyPlanner

# Meal offsets from wake (hours)
MEAL_OFFSETS: tuple[tuple[float, str, str], ...] = (
    (0.5, "breakfast", "Protein-rich breakfast within 1 hour of waking"),
    (5, "lunch", "Balanced meal with complex carbs"),
    (11, "dinner", "Light dinner, avoid heavy foods before bed"),
)

EXERCISE_OFFSET_HOURS = 3
EXERCISE_MINUTES = 30

# Strategic caffeine applies to the acute days of aggressive mode only
AGGRESSIVE_CAFFEINE_LAST_DAY = 3

# Naps: aggressive mode, large shifts, first two days
NAP_MIN_SHIFT_HOURS = 4
NAP_LAST_DAY = 2
WEST_NAP_MIN_SHIFT_HOURS = 6

MELATONIN_LAST_DAY = 5
MELATONIN_HOURS_BEFORE_BED = 2
MELATONIN_FULL_DOSE_LAST_DAY = 2


def sleep_notes(day: int) -> str:
    """Phase-specific guidance attached to each night's sleep block."""
    if day == 1:
        return (
            "May be difficult - stay in bed even if awake. "
            "Your body needs time to adjust to this schedule."
        )
    if day <= 3:
        return "Acute adjustment phase - strict adherence critical. Keep same schedule every day."
    if day <= 7:
        return (
            "Should feel more natural - your circadian rhythm is adapting. Maintain consistency."
        )
    return "Maintenance phase - body is fully adjusted. Continue healthy sleep habits."


def plan_meals(wake_time: datetime) -> tuple[MealTiming, ...]:
    return tuple(
        MealTiming(time=wake_time + timedelta(hours=offset), type=meal_type, description=text)
        for offset, meal_type, text in MEAL_OFFSETS
    )


def plan_exercise(wake_time: datetime) -> tuple[ExerciseSession, ...]:
    return (
        ExerciseSession(
            time=wake_time + timedelta(hours=EXERCISE_OFFSET_HOURS),
            type="Light walk or stretching",
            duration_min=EXERCISE_MINUTES,
        ),
    )


def plan_caffeine(
    wake_time: datetime, direction: Direction, day: int, recovery_mode: str
) -> tuple[CaffeineDose, ...]:
    """
    Caffeine timing for a recovery day.

    Aggressive mode (days 1-3) uses caffeine to hold wakefulness through the
    critical window: late evening for eastward travel, late afternoon into
    evening for westward. Everything else gets basic morning guidance.
    """

    def at(hours: float) -> datetime:
        return wake_time + timedelta(hours=hours)

    strategic = recovery_mode == "aggressive" and day <= AGGRESSIVE_CAFFEINE_LAST_DAY

    if strategic and direction == "east":
        return (
            CaffeineDose(
                at(0.5),
                "1-2 cups coffee (200mg caffeine)",
                "CRITICAL: Morning caffeine to establish wakefulness",
            ),
            CaffeineDose(at(5), "1 cup coffee (100mg)", "Midday boost to prevent afternoon crash"),
            CaffeineDose(
                at(9),
                "1 cup coffee or green tea (50-100mg)",
                "CRITICAL: Strategic evening caffeine to stay awake until local bedtime"
                if day == 1
                else "Evening boost if needed (reduce as you adapt)",
            ),
        )

    if strategic and direction == "west":
        return (
            CaffeineDose(at(0.5), "1-2 cups coffee (200mg)", "Morning caffeine boost"),
            CaffeineDose(
                at(8),
                "1-2 cups coffee (200mg)",
                "CRITICAL: Late afternoon/evening caffeine to delay sleep onset",
            ),
            CaffeineDose(
                at(11),
                "Green tea or small coffee (50mg)",
                "Optional late boost to stay awake until delayed bedtime"
                if day == 1
                else "Reduce as you adapt",
            ),
        )

    return (
        CaffeineDose(at(0.5), "1-2 cups coffee", "Morning caffeine to boost alertness"),
        CaffeineDose(
            at(6), "1 cup coffee (optional)", "Afternoon boost if needed - no caffeine after 2pm"
        ),
    )


def plan_naps(
    wake_time: datetime,
    direction: Direction,
    day: int,
    shift_hours: float,
    recovery_mode: str,
) -> tuple[StrategicNap, ...]:
    """
    At most one strategic nap per day.

    Eastward: 90-min prophylactic nap (one full sleep cycle) 6h after wake to
    bank sleep before the late evening. Westward, day 1 and shift >= 6h only:
    60-min recovery nap 7h after the early wake.
    """
    if recovery_mode != "aggressive" or day > NAP_LAST_DAY or shift_hours < NAP_MIN_SHIFT_HOURS:
        return ()

    def at(hours: float) -> datetime:
        return wake_time + timedelta(hours=hours)

    if direction == "east":
        return (
            StrategicNap(
                time=at(6),
                duration_min=90,
                type="prophylactic",
                timing="during_transition",
                purpose="Banking sleep to stay awake later in the evening and delay bedtime",
                window_start=at(5),
                window_end=at(8),
                instructions=(
                    "Set alarm for exactly 90 minutes (1 complete sleep cycle)",
                    "Nap in dark, quiet environment if possible",
                    "Wake up no later than 8 hours before target bedtime",
                    "Use coffee nap technique: drink coffee right before napping "
                    "(kicks in as you wake)",
                    "If you can't fall asleep within 20 minutes, rest quietly instead",
                ),
            ),
        )

    if direction == "west" and day == 1 and shift_hours >= WEST_NAP_MIN_SHIFT_HOURS:
        return (
            StrategicNap(
                time=at(7),
                duration_min=60,
                type="recovery",
                timing="post_arrival",
                purpose=(
                    "Recovery from extremely early wake time without compromising "
                    "delayed bedtime"
                ),
                window_start=at(6),
                window_end=at(9),
                instructions=(
                    "Maximum 60 minutes - set alarm!",
                    "Skip this nap if you can manage without it",
                    "Earlier is better - no naps after 2pm local time",
                    "Keep room moderately lit (not complete darkness)",
                    "If unable to sleep, just rest with eyes closed",
                ),
            ),
        )

    return ()


def plan_melatonin(bedtime: datetime, day: int, uses_melatonin: bool) -> MelatoninDose | None:
    if not uses_melatonin or day > MELATONIN_LAST_DAY:
        return None
    full_dose = day <= MELATONIN_FULL_DOSE_LAST_DAY
    return MelatoninDose(
        time=bedtime - timedelta(hours=MELATONIN_HOURS_BEFORE_BED),
        dosage="1-3mg" if full_dose else "0.5-1mg",
        notes="Take 2 hours before target bedtime (acute phase)"
        if full_dose
        else "Reduced dose - tapering off (adaptation phase)",
    )


class DayPlanner:
    """Build RecoveryDay objects for one plan's fixed parameters."""

    def __init__(
        self,
        dest_tz: str,
        preferences: UserPreferences,
        direction: Direction,
        shift_hours: float,
        body_clock: BodyClockModel,
    ):
        self.dest_tz = dest_tz
        self.preferences = preferences
        self.direction = direction
        self.shift_hours = shift_hours
        self.body_clock = body_clock
        self.light_planner = LightTherapyPlanner()

    def wake_and_bedtime(self, day_date: date) -> tuple[datetime, datetime]:
        """
        Wake and bed for a calendar day in destination local time.

        Bedtime falls on the same date, or on the next date when the bed hour
        is at or before the wake hour (e.g. bed 01:00, wake 09:00).
        """
        wake_hour = self.preferences.normal_wake_time
        bed_hour = self.preferences.normal_bedtime

        wake = at_local_hour(day_date, wake_hour, self.dest_tz)
        bed_date = day_date if bed_hour > wake_hour else day_date + timedelta(days=1)
        bedtime = at_local_hour(bed_date, bed_hour, self.dest_tz)
        return wake, bedtime

    def plan_sleep(self, day: int, day_date: date, bedtime: datetime) -> tuple[SleepBlock, ...]:
        next_wake = at_local_hour(
            day_date + timedelta(days=1), self.preferences.normal_wake_time, self.dest_tz
        )
        return (
            SleepBlock(
                bedtime=bedtime,
                wake_time=next_wake,
                duration_hours=round(hours_between(next_wake, bedtime), 2),
                quality="target",
                notes=sleep_notes(day),
            ),
        )

    def plan_day(self, day: int, day_date: date) -> RecoveryDay:
        """
        Generate the complete schedule for one recovery day.

        Args:
            day: 1-based recovery day index
            day_date: Destination-local calendar date

        Returns:
            RecoveryDay with every item in destination local time
        """
        wake, bedtime = self.wake_and_bedtime(day_date)
        phase = recovery_phase_for_day(day)
        mode = self.preferences.recovery_mode

        ctx = DayContext(
            day=day,
            phase=phase,
            wake_time=wake,
            bedtime=bedtime,
            direction=self.direction,
            shift_hours=self.shift_hours,
            recovery_mode=mode,
            clock=self.body_clock.for_day(day, wake),
        )

        return RecoveryDay(
            day=day,
            date=day_date,
            phase=phase,
            wake_time=wake,
            bedtime=bedtime,
            light_therapy=self.light_planner.plan(ctx),
            sleep=self.plan_sleep(day, day_date, bedtime),
            meals=plan_meals(wake),
            exercise=plan_exercise(wake),
            caffeine=plan_caffeine(wake, self.direction, day, mode),
            naps=plan_naps(wake, self.direction, day, self.shift_hours, mode),
            melatonin=plan_melatonin(bedtime, day, self.preferences.uses_melatonin),
        )
