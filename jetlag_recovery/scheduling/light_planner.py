"""
Light therapy planning for a single recovery day.

Walks the day's candidate windows in temporal order (wake, morning, midday,
evening, pre-bed) and asks the phase classifier, on the traveler's internal
clock, what light would do in each one.

Eastward (advance needed):
- Morning seek at wake only if the internal clock is in an advance window;
  otherwise avoid morning light and check ~12h after wake for a seek
- Midday boost (acute/adaptation) only if it confirms an advance
- Pre-bed avoidance always

Westward (delay needed):
- Morning avoidance always
- Evening seek ending at least 30 min before bed, moved earlier (never
  truncated below 30 min) when the ideal window runs late
- Short pre-bed dimming when it fits after the evening seek

Optional sessions that fail classification are omitted, never emitted with
an unchecked effect.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from loguru import logger

from ..circadian_math import format_time
from ..science.body_clock import BodyClockEstimate, DayBodyClock
from ..science.prc import CircadianEffect, is_harmful_seek, should_seek
from ..science.recovery import get_recovery_mode_config
from ..types import (
    Direction,
    LightAction,
    LightIntensity,
    LightTherapySession,
    LuxRange,
    Recommendation,
    RecoveryMode,
    RecoveryPhase,
    SessionPriority,
    Wavelength,
)

# Eastward windows
EAST_AVOID_MORNING_MINUTES = 120  # Used when wake falls in the delay window
EAST_LATER_SEEK_OFFSET_HOURS = 12  # Later seek when morning light would delay
EAST_LATER_SEEK_MINUTES = 120
MIDDAY_OFFSET_HOURS = 6  # Fixed offset from wake; does not scale with shift
MIDDAY_MINUTES = 60
EAST_PRE_BED_MINUTES = {"acute": 120, "adaptation": 90, "maintenance": 90}

# Westward windows
WEST_AVOID_MORNING_MINUTES = {"acute": 120, "adaptation": 60, "maintenance": 60}
WEST_EVENING_OFFSET_HOURS = {"acute": 8, "adaptation": 9, "maintenance": 9}
WEST_EVENING_END_BEFORE_BED_MINUTES = 30
WEST_PRE_BED_MINUTES = 60
WEST_ADVANCING_SEEK_ALLOWANCE = 1  # Transitional evening seek that lands on the advance side

MIN_SESSION_MINUTES = 30

BRIGHT_LUX = LuxRange(minimum=10000, ideal=50000)
MIDDAY_LUX = LuxRange(minimum=2000, ideal=10000)
MORNING_AVOID_LUX = LuxRange(minimum=0, ideal=500)
EAST_PRE_BED_LUX = LuxRange(minimum=0, ideal=50)
WEST_PRE_BED_LUX = LuxRange(minimum=0, ideal=100)

BLUE_ENRICHED = Wavelength(
    optimal="460-480nm blue-enriched light",
    avoid="Avoid pure red light (>600nm has minimal circadian effect)",
)
WARM_DIM = Wavelength(
    optimal="Warm light <2700K (minimal blue wavelengths)",
    avoid="Avoid blue-enriched light >5000K",
)

BRIGHT_INDOOR_TIER = Recommendation(
    "acceptable", "Very bright indoor lighting with blue-enriched bulbs"
)

MORNING_AVOID_TIERS = (
    Recommendation("best", "Stay indoors with curtains/blinds closed"),
    Recommendation("good", "Wear sunglasses if you must go outside"),
    Recommendation("good", "Use warm, dim lighting indoors (500-1000 lux)"),
    Recommendation("acceptable", "Brief outdoor exposure (<10 min) for necessities"),
)


@dataclass(frozen=True)
class DayContext:
    """Fixed inputs for planning one recovery day."""

    day: int
    phase: RecoveryPhase
    wake_time: datetime
    bedtime: datetime
    direction: Direction
    shift_hours: float
    recovery_mode: RecoveryMode
    clock: DayBodyClock


def _minutes(later: datetime, earlier: datetime) -> int:
    return int((later - earlier).total_seconds() // 60)


def _body_clock_label(estimate: BodyClockEstimate) -> str:
    return f"body clock: {format_time(estimate.internal_time)}"


def _progress_note(ctx: DayContext, estimate: BodyClockEstimate) -> str:
    return f"Body has shifted {estimate.hours_shifted:.1f}h of {ctx.shift_hours:g}h total"


def _session(
    start: datetime,
    duration_min: int,
    action: LightAction,
    intensity: LightIntensity,
    priority: SessionPriority,
    target_lux: LuxRange,
    effect: CircadianEffect,
    description: str,
    recommendations: tuple[Recommendation, ...],
    practical_notes: list[str | None],
    wavelength: Wavelength | None = None,
) -> LightTherapySession:
    return LightTherapySession(
        start=start,
        end=start + timedelta(minutes=duration_min),
        duration_min=duration_min,
        type=action,
        intensity=intensity,
        priority=priority,
        target_lux=target_lux,
        description=description,
        circadian_phase=effect.phase,
        effect_on_phase=effect.effect,
        wavelength=wavelength,
        recommendations=recommendations,
        practical_notes=tuple(note for note in practical_notes if note),
    )


class LightTherapyPlanner:
    """
    Decide seek and avoid windows for one day from the phase classifier.

    Strategy per direction is selected from a table so the behavior matrix
    stays data rather than nested branching.
    """

    def __init__(self):
        self._strategies = {
            "east": self._plan_eastward,
            "west": self._plan_westward,
            "none": lambda ctx: [],
        }

    def plan(self, ctx: DayContext) -> tuple[LightTherapySession, ...]:
        """
        Generate the day's light sessions, sorted by start time.

        Seeks that would push the clock the wrong way are dropped as a last
        guard, whatever the strategy produced. A westward day may keep one
        advancing seek (the transitional evening window); eastward days keep
        none that delay.

        Args:
            ctx: DayContext for the recovery day

        Returns:
            Tuple of LightTherapySession (empty for direction "none")
        """
        sessions = []
        allowance = WEST_ADVANCING_SEEK_ALLOWANCE if ctx.direction == "west" else 0
        for session in self._strategies[ctx.direction](ctx):
            if session.type == "seek" and is_harmful_seek(ctx.direction, session.effect_on_phase):
                if allowance:
                    allowance -= 1
                    sessions.append(session)
                    continue
                logger.warning(
                    "[LIGHT] Dropping seek that works against adaptation",
                    day=ctx.day,
                    direction=ctx.direction,
                    start=session.start.isoformat(),
                    effect=session.effect_on_phase,
                )
                continue
            sessions.append(session)
        return tuple(sorted(sessions, key=lambda s: s.start))

    # =========================================================================
    # Eastward: advance the clock
    # =========================================================================

    def _plan_eastward(self, ctx: DayContext) -> list[LightTherapySession]:
        sessions: list[LightTherapySession] = []
        pre_bed_minutes = EAST_PRE_BED_MINUTES[ctx.phase]
        pre_bed_start = ctx.bedtime - timedelta(minutes=pre_bed_minutes)

        wake_estimate, wake_effect = ctx.clock.effect(ctx.wake_time, "seek")
        if should_seek("east", wake_effect.effect):
            sessions.append(self._east_morning_seek(ctx, wake_estimate, wake_effect))
        else:
            # Body is still in its delay window: morning light would push the wrong way
            sessions.append(self._east_morning_avoid(ctx, wake_estimate))
            later_seek = self._east_later_seek(ctx, pre_bed_start)
            if later_seek is not None:
                sessions.append(later_seek)

        if ctx.phase in ("acute", "adaptation"):
            midday = self._east_midday_seek(ctx)
            if midday is not None:
                sessions.append(midday)

        sessions.append(self._east_pre_bed_avoid(ctx, pre_bed_start, pre_bed_minutes))
        return sessions

    def _east_morning_seek(
        self, ctx: DayContext, estimate: BodyClockEstimate, effect: CircadianEffect
    ) -> LightTherapySession:
        duration = get_recovery_mode_config(ctx.recovery_mode).morning_seek_minutes[ctx.phase]
        label = _body_clock_label(estimate)

        if ctx.recovery_mode == "aggressive":
            description = {
                "acute": f"AGGRESSIVE: Extended 3-hour morning light session ({label})",
                "adaptation": (
                    f"AGGRESSIVE: Maximum 4-hour light exposure - peak shifting window ({label})"
                ),
                "maintenance": f"AGGRESSIVE: 2-hour maintenance light ({label})",
            }[ctx.phase]
        else:
            description = {
                "acute": f"Morning bright light - gradual phase advance ({label})",
                "adaptation": f"Maximum morning bright light - peak adaptation window ({label})",
                "maintenance": "Maintenance morning light",
            }[ctx.phase]

        outdoor_minutes = round(duration / 2) if duration >= 60 else duration
        return _session(
            start=ctx.wake_time,
            duration_min=duration,
            action="seek",
            intensity="bright",
            priority="critical",
            target_lux=BRIGHT_LUX,
            effect=effect,
            description=description,
            recommendations=(
                Recommendation(
                    "best", f"Natural outdoor light for {outdoor_minutes} min (10,000-100,000 lux)"
                ),
                Recommendation("best", "Even cloudy/shaded outdoor > brightest indoor light box"),
                Recommendation("good", f"10,000 lux light box for {duration} min at 16-24 inches"),
                Recommendation("good", "Position at 45° angle (not directly in front of eyes)"),
                Recommendation(
                    "acceptable", f"Very bright indoor lighting (>2,500 lux) for {duration * 2} min"
                ),
                Recommendation(
                    "avoid", "Regular room lighting (<500 lux) is too weak for circadian shifting"
                ),
            ),
            practical_notes=[
                "You can read, eat, or work during session",
                "Keep light in peripheral vision - no need to stare",
                effect.description,
                "Your body thinks it's late night - this light is critical for shifting"
                if ctx.day <= 2 and estimate.internal_hour < 4
                else None,
                "This is THE most important intervention for eastward travel"
                if ctx.phase == "adaptation"
                else None,
                _progress_note(ctx, estimate),
            ],
            wavelength=BLUE_ENRICHED,
        )

    def _east_morning_avoid(
        self, ctx: DayContext, estimate: BodyClockEstimate
    ) -> LightTherapySession:
        _, effect = ctx.clock.effect(ctx.wake_time, "avoid")
        return _session(
            start=ctx.wake_time,
            duration_min=EAST_AVOID_MORNING_MINUTES,
            action="avoid",
            intensity="moderate",
            priority="critical",
            target_lux=MORNING_AVOID_LUX,
            effect=effect,
            description=f"Avoid bright morning light ({_body_clock_label(estimate)})",
            recommendations=MORNING_AVOID_TIERS,
            practical_notes=[
                "Your body thinks it's evening - morning light would cause DELAY "
                "(opposite of goal!)",
                "This is CRITICAL for first few days until body shifts into advance window",
                _progress_note(ctx, estimate),
                "As you adapt, morning light will become beneficial",
            ],
        )

    def _east_later_seek(
        self, ctx: DayContext, latest_end: datetime
    ) -> LightTherapySession | None:
        start = ctx.wake_time + timedelta(hours=EAST_LATER_SEEK_OFFSET_HOURS)
        end = min(start + timedelta(minutes=EAST_LATER_SEEK_MINUTES), latest_end)
        duration = _minutes(end, start)
        if duration < MIN_SESSION_MINUTES:
            return None

        estimate, effect = ctx.clock.effect(start, "seek")
        if not should_seek("east", effect.effect):
            return None

        return _session(
            start=start,
            duration_min=duration,
            action="seek",
            intensity="bright",
            priority="critical",
            target_lux=BRIGHT_LUX,
            effect=effect,
            description=(
                f"Evening bright light - causes phase advance ({_body_clock_label(estimate)})"
            ),
            recommendations=(
                Recommendation("best", "Natural outdoor light if still daylight (60-120 min)"),
                Recommendation("best", "Late afternoon/early evening sun is very bright"),
                Recommendation("good", f"10,000 lux light box for {duration} min"),
                Recommendation("good", "Can use light box while relaxing, watching TV, or reading"),
                BRIGHT_INDOOR_TIER,
            ),
            practical_notes=[
                effect.description,
                "This is THE most important session for large eastward shifts",
                "Your body thinks it's early morning - this light advances your rhythm",
                "Stop when your evening dim-light window begins",
            ],
            wavelength=Wavelength(optimal=BLUE_ENRICHED.optimal),
        )

    def _east_midday_seek(self, ctx: DayContext) -> LightTherapySession | None:
        start = ctx.wake_time + timedelta(hours=MIDDAY_OFFSET_HOURS)
        estimate, effect = ctx.clock.effect(start, "seek")
        if not should_seek("east", effect.effect):
            return None

        return _session(
            start=start,
            duration_min=MIDDAY_MINUTES,
            action="seek",
            intensity="moderate",
            priority="maintenance",
            target_lux=MIDDAY_LUX,
            effect=effect,
            description=f"Midday light boost ({_body_clock_label(estimate)})",
            recommendations=(
                Recommendation("best", "Get outside for 30-60 min during lunch break"),
                Recommendation("good", "Work near a window with natural light"),
                Recommendation("acceptable", "Use bright indoor lighting (2000+ lux)"),
            ),
            practical_notes=[
                effect.description,
                "Not as critical as morning session, but helps reinforce shift",
                "Can skip if schedule conflicts",
            ],
        )

    def _east_pre_bed_avoid(
        self, ctx: DayContext, start: datetime, duration: int
    ) -> LightTherapySession:
        estimate, effect = ctx.clock.effect(start, "avoid")
        return _session(
            start=start,
            duration_min=duration,
            action="avoid",
            intensity="dim",
            priority="critical",
            target_lux=EAST_PRE_BED_LUX,
            effect=effect,
            description=f"Dim lights for melatonin production ({_body_clock_label(estimate)})",
            recommendations=(
                Recommendation("best", "Dim all lights to <50 lux (about candlelight level)"),
                Recommendation("best", "Use warm-toned bulbs (2700K or lower) in evening"),
                Recommendation("good", "Amber-tinted blue-blocking glasses if using screens"),
                Recommendation("good", "Enable Night Shift (iOS) or Night Light (Android/Windows)"),
                Recommendation("acceptable", "Keep screens at lowest brightness with warm filters"),
                Recommendation("avoid", "Overhead lights, bright bathrooms, blue-enriched LEDs"),
            ),
            practical_notes=[
                effect.description,
                "Melatonin production starts ~2h before natural bedtime",
                "Even 30 min of dim light helps significantly",
                "Brief bright light (<5 min) for safety is OK",
                "Extra critical during first 3 days"
                if ctx.phase == "acute"
                else "Maintain this even after full adjustment",
            ],
            wavelength=WARM_DIM,
        )

    # =========================================================================
    # Westward: delay the clock
    # =========================================================================

    def _plan_westward(self, ctx: DayContext) -> list[LightTherapySession]:
        sessions = [self._west_morning_avoid(ctx)]

        evening_seek = self._west_evening_seek(ctx)
        sessions.append(evening_seek)

        pre_bed_start = ctx.bedtime - timedelta(minutes=WEST_PRE_BED_MINUTES)
        if pre_bed_start > evening_seek.end:
            sessions.append(self._west_pre_bed_avoid(ctx, pre_bed_start))

        return sessions

    def _west_morning_avoid(self, ctx: DayContext) -> LightTherapySession:
        acute = ctx.phase == "acute"
        estimate, effect = ctx.clock.effect(ctx.wake_time, "avoid")
        return _session(
            start=ctx.wake_time,
            duration_min=WEST_AVOID_MORNING_MINUTES[ctx.phase],
            action="avoid",
            intensity="moderate",
            priority="critical" if acute else "maintenance",
            target_lux=MORNING_AVOID_LUX,
            effect=effect,
            description=f"Avoid bright morning light ({_body_clock_label(estimate)})",
            recommendations=MORNING_AVOID_TIERS,
            practical_notes=[
                "Morning light would advance your rhythm (opposite of what you need)",
                "Extra critical during first 3 days" if acute else "Less critical as you adapt",
                "You can gradually increase morning light after day 3",
            ],
        )

    def _west_evening_window(self, ctx: DayContext) -> tuple[datetime, int]:
        """
        Place the evening seek window.

        Starts 8h (acute) or 9h after wake. When that would run past
        bedtime - 30 min, the whole window moves earlier instead of shrinking.
        """
        duration = get_recovery_mode_config(ctx.recovery_mode).evening_seek_minutes[ctx.phase]
        start = ctx.wake_time + timedelta(hours=WEST_EVENING_OFFSET_HOURS[ctx.phase])
        latest_end = ctx.bedtime - timedelta(minutes=WEST_EVENING_END_BEFORE_BED_MINUTES)

        if start + timedelta(minutes=duration) > latest_end:
            start = latest_end - timedelta(minutes=duration)

        # Short waking days cannot fit the full window before wake
        if start < ctx.wake_time:
            start = ctx.wake_time
            duration = max(MIN_SESSION_MINUTES, _minutes(latest_end, start))

        return start, duration

    def _west_evening_seek(self, ctx: DayContext) -> LightTherapySession:
        start, duration = self._west_evening_window(ctx)
        estimate, effect = ctx.clock.effect(start, "seek")
        label = _body_clock_label(estimate)
        acute = ctx.phase == "acute"
        outdoor_minutes = round(duration / 2) if duration >= 60 else duration

        return _session(
            start=start,
            duration_min=duration,
            action="seek",
            intensity="bright",
            priority="critical",
            target_lux=BRIGHT_LUX,
            effect=effect,
            description=(
                f"Evening bright light - maximum phase delay ({label})"
                if acute
                else f"Late afternoon/evening bright light ({label})"
            ),
            recommendations=(
                Recommendation("best", f"Natural outdoor light for {outdoor_minutes} min"),
                Recommendation("best", "Late afternoon sun is ideal (still very bright)"),
                Recommendation("good", f"10,000 lux light box for {duration} min"),
                Recommendation("good", "Can use light box while watching TV or working"),
                BRIGHT_INDOOR_TIER,
            ),
            practical_notes=[
                "This is THE most important intervention for westward travel",
                "Longer duration during acute phase for maximum effect" if acute else None,
                "Can break into two 60-min sessions if needed",
                "Stop at least 30 min before bedtime to allow melatonin production",
            ],
            wavelength=Wavelength(optimal=BLUE_ENRICHED.optimal),
        )

    def _west_pre_bed_avoid(self, ctx: DayContext, start: datetime) -> LightTherapySession:
        _, effect = ctx.clock.effect(start, "avoid")
        return _session(
            start=start,
            duration_min=WEST_PRE_BED_MINUTES,
            action="avoid",
            intensity="dim",
            priority="maintenance",
            target_lux=WEST_PRE_BED_LUX,
            effect=effect,
            description="Dim lights before bed",
            recommendations=(
                Recommendation("best", "Gradual dimming to signal bedtime"),
                Recommendation("good", "Use warm lighting (<2700K)"),
            ),
            practical_notes=[
                "Less critical than eastward travel",
                "Helps signal bedtime approaching",
            ],
        )
