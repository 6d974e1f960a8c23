"""
Static and lightly parameterized guidance shipped with every plan.

Age and chronotype never change recovery estimates (individual variation
is 20-40% between people with similar demographics). They only add
informational notes to the safety section.
"""

import math
from datetime import date, datetime, timedelta

from .circadian_math import hours_between
from .types import (
    AdaptationMessage,
    AlternativeStrategies,
    AlternativeStrategy,
    Direction,
    EnvironmentOptimization,
    RecoveryTimelineEntry,
    ReturnJourneyPlan,
    SafetyInformation,
    UserPreferences,
)

SENIOR_AGE = 65

# Return leg recovery rates (days per hour)
RETURN_RATES: dict[Direction, float] = {"east": 0.9, "west": 0.6, "none": 0.6}
STAY_ON_HOME_TIME_MAX_DAYS = 2
ANCHOR_SLEEP_RECOVERY_FACTOR = 0.7  # Partial adaptation shortens the return


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# =============================================================================
# Adaptation language
# =============================================================================


def get_adaptation_message(
    direction: Direction, hours: float, origin: str, destination: str
) -> AdaptationMessage:
    """
    Describe the shift as what the traveler has to do (advance or delay sleep).

    Geographic east/west is an internal detail; travelers think in terms of
    going to bed earlier or later.
    """
    if direction == "none" or hours == 0:
        return AdaptationMessage(
            type="none",
            short_description="No timezone adjustment needed",
            detailed_description=(
                f"{origin} and {destination} are in the same timezone. "
                "You won't experience jetlag from this flight."
            ),
            strategy="Maintain your normal sleep schedule",
            difficulty_level="easy",
            user_friendly_direction="Same timezone",
        )

    if direction == "east":
        difficulty = "moderate" if hours <= 3 else "hard" if hours <= 6 else "very_hard"
        return AdaptationMessage(
            type="advance",
            short_description=f"Advance your sleep schedule by {hours:g} hours",
            detailed_description=(
                "Your body needs to shift to an earlier sleep schedule. You'll need to go "
                f"to bed {hours:g} hours earlier than your body expects."
            ),
            strategy=(
                "Gradually shift your bedtime earlier by 1-2 hours per day. Use morning "
                "bright light and avoid evening light to help your body adjust."
            ),
            difficulty_level=difficulty,
            user_friendly_direction=f"{hours:g}h earlier" + (" (challenging)" if hours > 6 else ""),
        )

    difficulty = "easy" if hours <= 4 else "moderate" if hours <= 8 else "hard"
    return AdaptationMessage(
        type="delay",
        short_description=f"Delay your sleep schedule by {hours:g} hours",
        detailed_description=(
            "Your body needs to shift to a later sleep schedule. You'll need to stay up "
            f"{hours:g} hours later than your body expects."
        ),
        strategy=(
            "Gradually shift your bedtime later by 2-3 hours per day. Use evening bright "
            "light and avoid morning light to help your body adjust."
        ),
        difficulty_level=difficulty,
        user_friendly_direction=f"{hours:g}h later" + (" (moderate effort)" if hours > 8 else ""),
    )


# =============================================================================
# Recovery timeline
# =============================================================================


def _timeline_guidance(day: int) -> tuple[str, tuple[str, ...]]:
    if day == 1:
        return "Tired, disoriented, foggy", (
            "Stay hydrated",
            "Get sunlight at the right times",
            "Resist the urge to nap for more than 20 minutes",
        )
    if day <= 3:
        return "Improving but still adjusting", (
            "Stick to your sleep schedule",
            "Continue light therapy",
            "Avoid alcohol",
        )
    if day <= 5:
        return "Mostly adjusted, occasional tiredness", (
            "Maintain consistent wake times",
            "You can relax light therapy somewhat",
        )
    return "Fully adjusted!", ("Maintain healthy sleep habits",)


def generate_recovery_timeline(
    first_day: date, recovery_days: int
) -> tuple[RecoveryTimelineEntry, ...]:
    """
    Expected progress for each recovery day.

    Args:
        first_day: Destination-local date of recovery day 1
        recovery_days: Total estimated recovery days

    Returns:
        One entry per recovery day, percentage capped at 100
    """
    entries = []
    for day in range(1, recovery_days + 1):
        feeling, tips = _timeline_guidance(day)
        entries.append(
            RecoveryTimelineEntry(
                day=day,
                date=first_day + timedelta(days=day - 1),
                recovery_percentage=min(_round_half_up(day / recovery_days * 100), 100),
                expected_feeling=feeling,
                tips=tips,
            )
        )
    return tuple(entries)


# =============================================================================
# Return journey
# =============================================================================


def generate_return_journey_plan(
    arrival: datetime,
    return_departure: datetime,
    outbound_shift_hours: float,
    outbound_recovery_days: int,
    outbound_direction: Direction,
) -> ReturnJourneyPlan:
    """
    Pick a strategy for the return leg based on time at the destination.

    - <= 2 days: stay on home time (avoid double jetlag)
    - shorter than outbound recovery: anchor sleep near home time
    - otherwise: fully adapt, then recover again on return
    """
    trip_days = _round_half_up(hours_between(return_departure, arrival) / 24)
    return_direction: Direction = {"east": "west", "west": "east", "none": "none"}[
        outbound_direction
    ]
    return_days = math.ceil(round(outbound_shift_hours * RETURN_RATES[return_direction], 6))

    if trip_days <= STAY_ON_HOME_TIME_MAX_DAYS:
        return ReturnJourneyPlan(
            estimated_recovery_days=0,
            trip_duration_days=trip_days,
            strategy="stay_on_home_time",
            practicality="difficult",
            reasoning=(
                f"Trip is only {trip_days} days - too short to justify adjusting your "
                "circadian rhythm."
            ),
            recommendation=(
                "Keep your sleep schedule close to home time. Use strategic napping and "
                "caffeine to handle daytime obligations. This avoids double jetlag "
                "(outbound + return)."
            ),
            tradeoffs=(
                "Pro: No recovery time needed after return",
                "Con: Will feel misaligned during trip",
                "Con: Difficult for daytime meetings/activities",
                "Best for: Critical short trips where post-return performance matters",
            ),
        )

    if trip_days < outbound_recovery_days:
        return ReturnJourneyPlan(
            estimated_recovery_days=math.ceil(
                round(return_days * ANCHOR_SLEEP_RECOVERY_FACTOR, 6)
            ),
            trip_duration_days=trip_days,
            strategy="anchor_sleep",
            practicality="moderate",
            reasoning=(
                f"You'll be at destination for {trip_days} days, which is less than the "
                f"{outbound_recovery_days} days needed for full adjustment."
            ),
            recommendation=(
                "Anchor your core sleep window closer to home time while adapting meals and "
                'activities to local schedule. This "split difference" approach minimizes '
                "total jetlag."
            ),
            tradeoffs=(
                "Pro: Reduced post-return recovery time",
                "Con: May need blackout curtains at unusual hours",
                "Con: Sleep timing may conflict with social/work obligations",
                "Best for: Trips of 3-6 days with flexible schedules",
            ),
        )

    if trip_days < outbound_recovery_days * 2:
        direction_tip = (
            "Returning eastward is harder - prioritize morning light and strict sleep schedule."
            if return_direction == "east"
            else "Returning westward is easier - focus on evening light and staying up later."
        )
        return ReturnJourneyPlan(
            estimated_recovery_days=return_days,
            trip_duration_days=trip_days,
            strategy="full_adaptation",
            practicality="easy",
            reasoning=(
                f"You'll spend {trip_days} days at destination - enough time to fully adapt "
                "before returning."
            ),
            recommendation=(
                "Fully adapt to destination timezone using this plan. On return, expect "
                f"{return_days} days recovery. {direction_tip}"
            ),
            tradeoffs=(
                "Pro: Full adjustment allows normal functioning at destination",
                "Pro: Easy to follow - align with local schedules",
                f"Con: Need {return_days} days recovery after return",
                "Best for: Trips of 7-14 days, business travel, vacations",
            ),
        )

    return ReturnJourneyPlan(
        estimated_recovery_days=return_days,
        trip_duration_days=trip_days,
        strategy="full_adaptation",
        practicality="easy",
        reasoning=(
            f"Trip is {trip_days} days - long enough to fully adapt and enjoy destination "
            "on local time."
        ),
        recommendation=(
            "Use this plan for both outbound and return journeys. Long trip duration makes "
            "full adaptation the only practical approach."
        ),
        tradeoffs=(
            "Pro: Full adjustment allows normal life at destination",
            "Pro: Trip is long enough to make adjustment worthwhile",
            f"Con: Need {return_days} days recovery after return",
            "Best for: Extended stays, relocations, long vacations",
        ),
    )


# =============================================================================
# Fallbacks, safety and environment
# =============================================================================


def generate_alternative_strategies(direction: Direction) -> AlternativeStrategies:
    missed_light_last_step = (
        "Keep your evening light session - it matters more than morning light when "
        "traveling west"
        if direction == "west"
        else "Be extra strict with evening light avoidance"
    )

    return AlternativeStrategies(
        missed_morning_light=AlternativeStrategy(
            scenario="Missed morning light therapy session",
            backup="Use 10,000 lux light box for 30-60 minutes ASAP",
            max_delay="2 hours from target time",
            impact="Each hour delayed = ~15 minutes slower adaptation",
            instructions=(
                "Get outside or use light box as soon as possible",
                "Extend duration by 15 minutes if delayed >1 hour",
                "Continue with rest of day's schedule normally",
                missed_light_last_step,
            ),
        ),
        cannot_sleep=AlternativeStrategy(
            scenario="Cannot fall asleep after 30 minutes in bed",
            backup="Get up and do quiet, dim-light activity",
            impact="Staying in bed awake can increase sleep anxiety",
            instructions=(
                "Leave bedroom and do relaxing activity (reading, stretching)",
                "Keep lights very dim (< 50 lux)",
                "Avoid screens completely",
                "Return to bed when you feel drowsy (usually 20-30 min)",
                "Do NOT check the time repeatedly",
            ),
        ),
        urgent_nap=AlternativeStrategy(
            scenario="Overwhelming fatigue, must nap",
            backup='Strategic 20-minute "power nap" only',
            max_delay="No naps after 3 PM local time",
            impact="Longer naps will delay nighttime sleep and slow adaptation",
            instructions=(
                "Set alarm for exactly 20 minutes",
                "Nap in chair/couch (not bed) to prevent deep sleep",
                "Immediately get bright light exposure upon waking",
                "Move your body - take a brisk 10-minute walk",
                "Avoid caffeine for 1 hour after nap",
            ),
        ),
        missed_melatonin=AlternativeStrategy(
            scenario="Forgot to take melatonin 2 hours before bed",
            backup="Take immediately if >1 hour before bedtime, otherwise skip",
            impact="Taking too close to bedtime may cause next-day grogginess",
            instructions=(
                "If >1 hour before bed: Take half dose now",
                "If <1 hour before bed: Skip tonight, resume tomorrow",
                "Focus on other sleep hygiene: dim lights, cool room, no screens",
                "Consider gentle stretching or meditation instead",
                "Don't stress - one missed dose won't derail recovery",
            ),
        ),
    )


DISCLAIMER = (
    "IMPORTANT MEDICAL DISCLAIMER: This jetlag recovery plan is for general informational "
    "and educational purposes only and does NOT constitute medical advice, diagnosis, or "
    "treatment. Individual recovery times vary significantly (20-40% between people) based "
    "on genetics, health status, and other factors. Age and chronotype preferences are used "
    "only for general guidance, not precise predictions. Always consult with a qualified "
    "healthcare provider before starting any supplement regimen (including melatonin), "
    "especially if you have underlying health conditions, take medications, are "
    "pregnant/nursing, or are over 65. This plan should not replace professional medical "
    "advice."
)

AGGRESSIVE_MODE_NOTICE = (
    " AGGRESSIVE MODE NOTICE: This protocol requires strict compliance with 2-4 hour daily "
    "light therapy sessions, strategic caffeine timing (3 doses/day), strategic naps during "
    "acute phase (60-90 minutes), and precise sleep scheduling. Recovery estimates assume "
    "80%+ compliance. Non-compliance may result in slower recovery similar to conservative "
    "mode. Not recommended for individuals with work/family obligations that prevent "
    "extended light therapy sessions or scheduled naps."
)

CHRONOTYPE_NOTES = {
    "morning_lark": (
        "CHRONOTYPE NOTE: Morning larks may find eastward travel slightly easier and "
        "westward travel more challenging. Adjust expectations accordingly."
    ),
    "night_owl": (
        "CHRONOTYPE NOTE: Night owls may find westward travel slightly easier and eastward "
        "travel more challenging. Adjust expectations accordingly."
    ),
}


def generate_safety_information(preferences: UserPreferences) -> SafetyInformation:
    """Disclaimer, contraindications and personalized notes."""
    disclaimer = DISCLAIMER
    if preferences.recovery_mode == "aggressive":
        disclaimer += AGGRESSIVE_MODE_NOTICE

    personal_notes = []
    if preferences.age is not None and preferences.age >= SENIOR_AGE:
        personal_notes.append(
            "AGE CONSIDERATION: Adults 65+ may need 20-30% longer recovery time than "
            "estimated. Monitor your symptoms closely and allow extra time for important "
            "activities."
        )
    if preferences.chronotype in CHRONOTYPE_NOTES:
        personal_notes.append(CHRONOTYPE_NOTES[preferences.chronotype])

    return SafetyInformation(
        disclaimer=disclaimer,
        melatonin_contraindications=(
            "Pregnancy or breastfeeding",
            "Autoimmune disorders (lupus, rheumatoid arthritis, etc.)",
            "Seizure disorders or history of seizures",
            "Depression or other mood disorders",
            "Bleeding disorders or taking blood thinners",
            "Diabetes or blood sugar regulation issues",
            "High or low blood pressure",
        ),
        melatonin_interactions=(
            "Blood pressure medications (may enhance effects)",
            "Diabetes medications (may affect blood sugar)",
            "Immunosuppressants (may interfere with effectiveness)",
            "Sedatives or sleep medications (increased drowsiness)",
            "Blood thinners (may slow blood clotting)",
            "Contraceptive drugs (may reduce effectiveness)",
        ),
        melatonin_starting_dosage=(
            "Always start with the lowest dose (0.5mg) to assess your individual response. "
            "Take 2 hours before planned bedtime. Do not exceed 5mg without medical supervision."
        ),
        light_therapy_contraindications=(
            "Retinal disorders or macular degeneration",
            "Photosensitivity or light-sensitive skin conditions",
            "Taking photosensitizing medications (certain antibiotics, antifungals, NSAIDs)",
            "History of skin cancer or suspicious moles",
            "Bipolar disorder or history of mania (can trigger manic episodes)",
            "Recent eye surgery or eye injury",
        ),
        light_therapy_warnings=(
            "Stop immediately if you experience eye pain, visual disturbances, or headaches",
            "Do not look directly at light therapy devices",
            "Position light box 16-24 inches from face at a 45-degree angle",
            "If using SAD/light therapy lamp, follow manufacturer guidelines",
            "Start with 10-15 minutes and gradually increase to recommended duration",
        ),
        seek_medical_advice=(
            "Severe insomnia lasting more than 3 consecutive days",
            "Extreme fatigue that affects your ability to function safely",
            "Significant mood changes, depression, or anxiety",
            "Confusion, disorientation, or memory problems beyond typical jetlag",
            "Persistent digestive issues or loss of appetite",
            "Any concerning physical or mental health symptoms",
        ),
        important_notes=(
            *personal_notes,
            "Individual variation is HIGH: Research shows 20-40% difference in recovery time "
            "between people with similar demographics",
            "Chronic health conditions may complicate jetlag recovery",
            "Alcohol significantly worsens jetlag symptoms - avoid for first 48 hours",
            "If you feel unsafe driving or operating machinery, do not do so",
            "This plan assumes you are generally healthy without significant medical conditions",
            "Recovery estimates are based on population averages, not individual predictions",
        ),
    )


def generate_environment_optimization() -> EnvironmentOptimization:
    return EnvironmentOptimization(
        bedroom_temperature=(
            "60-67°F (15-19°C) - Cooler temperatures promote better sleep. "
            "Lower your thermostat or use a fan."
        ),
        bedroom_darkness=(
            "Complete darkness is ideal. Use blackout curtains, cover LED lights with tape, "
            "or wear a comfortable sleep mask."
        ),
        bedroom_noise=(
            "Quiet environment reduces sleep disruptions. Use earplugs, white noise machine, "
            "or fan for consistent background sound."
        ),
        bedroom_humidity=(
            "30-50% relative humidity. Use a humidifier if air is dry (winter/airplane "
            "travel), or dehumidifier if too humid."
        ),
        morning_light_timing=(
            "Get bright light within 15 minutes of waking. "
            "Earlier is better for circadian adjustment."
        ),
        morning_light_sources=(
            "Natural sunlight (best option): Go outside or sit by open window",
            "Light therapy box: 10,000 lux at 16-24 inches distance",
            "Open all curtains/blinds immediately upon waking",
            "Eat breakfast near a bright window",
        ),
        light_box_guidance=(
            "If using a light therapy device: Position at 45-degree angle (not directly in "
            "front of eyes). You can read, eat, or work during session - just keep device in "
            "peripheral vision."
        ),
        evening_light_timing=(
            "Begin dimming lights 2-3 hours before planned bedtime. This signals your body "
            "to produce melatonin naturally."
        ),
        evening_light_recommendations=(
            "Replace bright white bulbs with warm-toned bulbs (2700K or lower) in bedroom",
            "Use dimmers or table lamps instead of overhead lights",
            "Avoid bright bathroom lights - use nightlight or dim options",
            "Keep bedroom lighting minimal - under 50 lux ideally",
        ),
        evening_light_technology=(
            "Enable blue light filters on all devices (phones, tablets, computers) after 6 PM",
            "iOS: Settings → Display & Brightness → Night Shift",
            "Android: Settings → Display → Night Light",
            "Computer: Use f.lux software or built-in night mode",
            "Consider amber-tinted blue-blocking glasses for evening screen use",
        ),
    )
