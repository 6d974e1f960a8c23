"""
Data structures for recovery plan generation.

Every plan object is a frozen dataclass: a plan is built once per request
and returned as an immutable tree. Sequences are tuples for the same reason.
All timestamps are timezone-aware datetimes in destination local time.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from .errors import CalculationWarning

# =============================================================================
# Literal aliases
# =============================================================================

Direction = Literal["east", "west", "none"]

# Conservative: research-based passive adaptation rates.
# Aggressive: fixed 3-day protocol with intensive interventions.
# See RECOVERY_MODE_CONFIGS in science/recovery.py.
RecoveryMode = Literal["conservative", "aggressive"]

RecoveryPhase = Literal[
    "acute",  # Days 1-3
    "adaptation",  # Days 4-7
    "maintenance",  # Day 8 onward
]

LightAction = Literal["seek", "avoid"]

CircadianPhase = Literal[
    "biological_late_night",  # Internal clock 00:00-04:00
    "biological_morning",  # Internal clock 04:00-12:00
    "biological_afternoon",  # Internal clock 12:00-18:00
    "biological_evening",  # Internal clock 18:00-24:00
]

PhaseEffect = Literal["advance", "weak_advance", "neutral", "delay"]

LightIntensity = Literal["bright", "moderate", "dim"]
SessionPriority = Literal["critical", "maintenance"]
RecommendationTier = Literal["best", "good", "acceptable", "avoid"]
Chronotype = Literal["morning_lark", "night_owl", "intermediate"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
NapType = Literal["prophylactic", "recovery"]
NapTiming = Literal["during_transition", "post_arrival"]
SleepQuality = Literal["target", "nap", "avoid"]
ReturnStrategy = Literal["stay_on_home_time", "anchor_sleep", "full_adaptation"]
Practicality = Literal["easy", "moderate", "difficult"]
Difficulty = Literal["easy", "moderate", "hard", "very_hard"]
StopStrategy = Literal[
    "anchor_sleep",  # Hold the current sleep schedule (layover under 24h)
    "progressive",  # Shift toward the final destination during the layover
]


# =============================================================================
# Request Types
# =============================================================================


@dataclass(frozen=True)
class UserPreferences:
    """Traveler sleep habits and protocol choice."""

    normal_bedtime: int = 22  # Hour of day (0-23)
    normal_wake_time: int = 6  # Hour of day (0-23)
    recovery_mode: RecoveryMode = "conservative"
    uses_melatonin: bool = True
    age: int | None = None  # Informational warnings only, never changes estimates
    chronotype: Chronotype | None = None  # Informational warnings only


@dataclass(frozen=True)
class PlanRequest:
    """
    Input for a single-itinerary recovery plan.

    Datetimes may be timezone-aware, naive (interpreted as local time at the
    origin for departure and at the destination for arrival), or ISO strings.
    """

    origin_tz: str  # IANA timezone (e.g., "Europe/London")
    dest_tz: str  # IANA timezone (e.g., "America/New_York")
    departure_datetime: datetime | str
    arrival_datetime: datetime | str
    flight_duration_hours: float
    preferences: UserPreferences = field(default_factory=UserPreferences)
    return_departure_datetime: datetime | str | None = None  # Round trips only


@dataclass(frozen=True)
class FlightLeg:
    """One flight of a multi-leg journey (same datetime rules as PlanRequest)."""

    origin_tz: str
    dest_tz: str
    departure_datetime: datetime | str
    arrival_datetime: datetime | str
    flight_duration_hours: float
    flight_number: str | None = None


@dataclass(frozen=True)
class MultiLegRequest:
    """
    Input for a journey with connections.

    Legs are in travel order. The shift is taken from the first origin to
    the final destination; intermediate stops are adaptation opportunities,
    not separate jet lag events.
    """

    legs: tuple[FlightLeg, ...]
    preferences: UserPreferences = field(default_factory=UserPreferences)


# =============================================================================
# Shift Types
# =============================================================================


@dataclass(frozen=True)
class TimezoneShift:
    """
    Shorter-circadian-path shift between two timezones.

    raw_offset_hours is the naive destination-minus-origin offset. shift_hours
    and direction describe the adjustment the body actually makes, which wraps
    around the clock face when the naive offset exceeds 12 hours.
    """

    raw_offset_hours: float
    shift_hours: float  # Always within [0, 12]
    direction: Direction


# =============================================================================
# Session Types
# =============================================================================


@dataclass(frozen=True)
class LuxRange:
    """Target illuminance for a light session."""

    minimum: int
    ideal: int


@dataclass(frozen=True)
class Wavelength:
    """Spectral guidance for a light session."""

    optimal: str
    avoid: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """One tier of a tiered recommendation (outdoor > light box > indoor)."""

    tier: RecommendationTier
    text: str


@dataclass(frozen=True)
class LightTherapySession:
    """
    Single light exposure (seek) or light avoidance window.

    circadian_phase and effect_on_phase always come from the phase classifier
    evaluated on the traveler's internal clock at the session start.
    """

    start: datetime
    end: datetime
    duration_min: int
    type: LightAction
    intensity: LightIntensity
    priority: SessionPriority
    target_lux: LuxRange
    description: str
    circadian_phase: CircadianPhase | None = None
    effect_on_phase: PhaseEffect | None = None
    wavelength: Wavelength | None = None
    recommendations: tuple[Recommendation, ...] = ()
    practical_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SleepBlock:
    """Target sleep window from bedtime to the following wake time."""

    bedtime: datetime
    wake_time: datetime
    duration_hours: float
    quality: SleepQuality
    notes: str


@dataclass(frozen=True)
class MealTiming:
    """Meal anchored to the day's wake time."""

    time: datetime
    type: MealType
    description: str


@dataclass(frozen=True)
class ExerciseSession:
    """Light activity block."""

    time: datetime
    type: str
    duration_min: int


@dataclass(frozen=True)
class CaffeineDose:
    """Caffeine guidance at a point in the day."""

    time: datetime
    amount: str
    notes: str


@dataclass(frozen=True)
class StrategicNap:
    """Aggressive-mode nap with its allowed window."""

    time: datetime
    duration_min: int
    type: NapType
    timing: NapTiming
    purpose: str
    window_start: datetime
    window_end: datetime
    instructions: tuple[str, ...] = ()


@dataclass(frozen=True)
class MelatoninDose:
    """Melatonin timing for the acute and early adaptation days."""

    time: datetime
    dosage: str
    notes: str


# =============================================================================
# Schedule Types
# =============================================================================


@dataclass(frozen=True)
class RecoveryDay:
    """
    One calendar day after arrival.

    day is 1-based: day 1 is the first full destination-local calendar day
    after landing.
    """

    day: int
    date: date  # Destination-local calendar date
    phase: RecoveryPhase
    wake_time: datetime
    bedtime: datetime
    light_therapy: tuple[LightTherapySession, ...] = ()
    sleep: tuple[SleepBlock, ...] = ()
    meals: tuple[MealTiming, ...] = ()
    exercise: tuple[ExerciseSession, ...] = ()
    caffeine: tuple[CaffeineDose, ...] = ()
    naps: tuple[StrategicNap, ...] = ()
    melatonin: MelatoninDose | None = None


@dataclass(frozen=True)
class PreFlightSchedule:
    """Three-day taper before departure."""

    light_therapy: tuple[LightTherapySession, ...] = ()
    sleep: tuple[SleepBlock, ...] = ()
    meals: tuple[MealTiming, ...] = ()


@dataclass(frozen=True)
class InFlightPlan:
    """Static in-flight advice keyed by direction and overnight detection."""

    is_overnight_flight: bool
    sleep_recommendations: tuple[str, ...]
    meal_timing: tuple[MealTiming, ...]
    hydration: tuple[str, ...]
    movement: tuple[str, ...]


@dataclass(frozen=True)
class FlightRecommendation:
    """Preferred departure window for this direction of travel."""

    optimal_departure_start_hour: int
    optimal_departure_end_hour: int
    reasoning: str
    alternative_if_unavailable: str
    is_overnight_flight: bool


# =============================================================================
# Guidance Types
# =============================================================================


@dataclass(frozen=True)
class RecoveryTimelineEntry:
    """Expected progress on a recovery day."""

    day: int
    date: date  # Destination-local calendar date of the recovery day
    recovery_percentage: int
    expected_feeling: str
    tips: tuple[str, ...]


@dataclass(frozen=True)
class AlternativeStrategy:
    """Fallback when the traveler misses part of the plan."""

    scenario: str
    backup: str
    instructions: tuple[str, ...]
    max_delay: str | None = None
    impact: str | None = None


@dataclass(frozen=True)
class AlternativeStrategies:
    """All fallbacks shipped with a plan."""

    missed_morning_light: AlternativeStrategy
    cannot_sleep: AlternativeStrategy
    urgent_nap: AlternativeStrategy
    missed_melatonin: AlternativeStrategy


@dataclass(frozen=True)
class SafetyInformation:
    """Disclaimer and contraindications. Shown before anything else."""

    disclaimer: str
    melatonin_contraindications: tuple[str, ...]
    melatonin_interactions: tuple[str, ...]
    melatonin_starting_dosage: str
    light_therapy_contraindications: tuple[str, ...]
    light_therapy_warnings: tuple[str, ...]
    seek_medical_advice: tuple[str, ...]
    important_notes: tuple[str, ...]


@dataclass(frozen=True)
class EnvironmentOptimization:
    """Bedroom and light environment advice."""

    bedroom_temperature: str
    bedroom_darkness: str
    bedroom_noise: str
    bedroom_humidity: str
    morning_light_timing: str
    morning_light_sources: tuple[str, ...]
    light_box_guidance: str
    evening_light_timing: str
    evening_light_recommendations: tuple[str, ...]
    evening_light_technology: tuple[str, ...]


@dataclass(frozen=True)
class ReturnJourneyPlan:
    """Strategy for the return leg of a round trip."""

    estimated_recovery_days: int
    trip_duration_days: int
    strategy: ReturnStrategy
    practicality: Practicality
    reasoning: str
    recommendation: str
    tradeoffs: tuple[str, ...]


@dataclass(frozen=True)
class AdaptationMessage:
    """User-facing advance/delay wording for a shift."""

    type: Literal["advance", "delay", "none"]
    short_description: str
    detailed_description: str
    strategy: str
    difficulty_level: Difficulty
    user_friendly_direction: str


# =============================================================================
# Plan
# =============================================================================


@dataclass(frozen=True)
class RecoveryPlan:
    """
    Root output of plan generation.

    Everything except generated_at is a pure function of the request, so two
    calls with the same request produce equal plans apart from that field.
    """

    generated_at: datetime
    origin_tz: str
    dest_tz: str
    timezone_shift: float  # Naive destination-minus-origin offset
    shift_hours: float  # Shorter circadian path
    direction: Direction
    recovery_mode: RecoveryMode
    estimated_recovery_days: int
    adaptation: AdaptationMessage
    flight_recommendation: FlightRecommendation
    pre_flight: PreFlightSchedule
    in_flight: InFlightPlan
    recovery_days: tuple[RecoveryDay, ...]
    recovery_timeline: tuple[RecoveryTimelineEntry, ...]
    safety_information: SafetyInformation
    environment_optimization: EnvironmentOptimization
    alternative_strategies: AlternativeStrategies
    return_journey: ReturnJourneyPlan | None = None
    warnings: tuple[CalculationWarning, ...] = ()


# =============================================================================
# Multi-Leg Types
# =============================================================================


@dataclass(frozen=True)
class Layover:
    """Time on the ground between two connected legs."""

    leg_index: int  # Index of the leg arriving at this stop
    timezone: str
    arrival: datetime  # Stop local time
    departure: datetime  # Stop local time
    duration_hours: float


@dataclass(frozen=True)
class StopAdaptation:
    """How much to adapt during one layover, and the sleep to aim for there."""

    layover: Layover
    strategy: StopStrategy
    shift_during_stop_hours: float
    cumulative_shift_hours: float  # Shifted since leaving the origin
    remaining_shift_hours: float  # Still to adapt at the final destination
    sleep: SleepBlock | None  # None when no bedtime falls inside the layover
    recommendations: tuple[str, ...]
    reasoning: str


@dataclass(frozen=True)
class MultiLegPlan:
    """
    Root output for a journey with connections.

    Recovery days, timeline and pre-flight sessions are in final destination
    local time; each stop carries its own local time and each in-flight
    plan is in its leg's arrival zone.
    """

    generated_at: datetime
    origin_tz: str
    dest_tz: str  # Final destination
    timezone_shift: float  # Naive final-minus-origin offset
    shift_hours: float  # Shorter circadian path, origin to final destination
    direction: Direction
    recovery_mode: RecoveryMode
    days_en_route: float  # Layover time only
    progression_rate: float  # Hours adapted per day on layovers
    stops: tuple[StopAdaptation, ...]
    remaining_shift_hours: float
    estimated_recovery_days: int  # At the final destination
    total_journey_days: int
    adaptation: AdaptationMessage
    pre_flight: PreFlightSchedule
    in_flight: tuple[InFlightPlan, ...]  # One per leg
    recovery_days: tuple[RecoveryDay, ...]
    recovery_timeline: tuple[RecoveryTimelineEntry, ...]
    safety_information: SafetyInformation
    environment_optimization: EnvironmentOptimization
    alternative_strategies: AlternativeStrategies
    warnings: tuple[CalculationWarning, ...] = ()
