"""
Phase Response Curve for bright light.

Scientific basis:
- Light PRC: Khalsa SBS et al. (2003). J Physiol, 549(3), 945-952.
- Eastward protocols: Burgess HJ & Eastman CI (2005).

Four-bucket model on the internal (body) clock, assuming the core body
temperature minimum falls around 03:00-04:00 for a 06:00 wake:
- 00:00-04:00 late night: strongest advance window (near CBTmin)
- 04:00-12:00 morning: advance
- 12:00-18:00 afternoon: weak advance
- 18:00-24:00 evening: delay (before CBTmin)

LIGHT_PRC_TABLE is the single source of truth for what light does at a given
internal hour. Schedulers never re-derive it.
"""

from dataclasses import dataclass

from ..types import CircadianPhase, Direction, LightAction, PhaseEffect

# Bucket upper bounds (hours, exclusive), in clock order
PHASE_BOUNDARIES: tuple[tuple[float, CircadianPhase], ...] = (
    (4, "biological_late_night"),
    (12, "biological_morning"),
    (18, "biological_afternoon"),
    (24, "biological_evening"),
)

ADVANCING_EFFECTS: frozenset[PhaseEffect] = frozenset({"advance", "weak_advance"})


@dataclass(frozen=True)
class CircadianEffect:
    """What light (or its absence) does at a point on the internal clock."""

    phase: CircadianPhase
    effect: PhaseEffect
    description: str


# (phase, action) -> (effect, description)
LIGHT_PRC_TABLE: dict[tuple[CircadianPhase, LightAction], tuple[PhaseEffect, str]] = {
    ("biological_late_night", "seek"): (
        "advance",
        "Light near body temperature minimum causes maximum phase advance (strongest effect)",
    ),
    ("biological_late_night", "avoid"): (
        "neutral",
        "Late biological night - near wake time",
    ),
    ("biological_morning", "seek"): (
        "advance",
        "Light during biological morning causes phase advance (strong effect)",
    ),
    ("biological_morning", "avoid"): (
        "neutral",
        "Avoiding light during biological morning has little circadian effect",
    ),
    ("biological_afternoon", "seek"): (
        "weak_advance",
        "Light during biological afternoon has weak circadian effect",
    ),
    ("biological_afternoon", "avoid"): (
        "neutral",
        "Biological afternoon - neutral for light avoidance",
    ),
    ("biological_evening", "seek"): (
        "delay",
        "Light during biological evening causes phase delay",
    ),
    ("biological_evening", "avoid"): (
        "advance",
        "Avoiding light during biological evening prevents unwanted delays and promotes melatonin",
    ),
}

# Effects a seek session may carry for each direction of adaptation.
# Eastward travel needs advances; westward travel needs delays.
SEEK_ALLOWED: dict[Direction, frozenset[PhaseEffect]] = {
    "east": ADVANCING_EFFECTS,
    "west": frozenset({"delay"}),
    "none": frozenset(),
}


def classify_phase(hour: float) -> CircadianPhase:
    """
    Map an internal-clock hour to its PRC bucket.

    Buckets are half-open ([0,4), [4,12), [12,18), [18,24)); hours outside
    0-24 wrap around the clock.
    """
    hour = hour % 24
    for upper, phase in PHASE_BOUNDARIES:
        if hour < upper:
            return phase
    return "biological_evening"


def circadian_effect(hour: float, action: LightAction) -> CircadianEffect:
    """
    Look up the physiological effect of seeking or avoiding light.

    Args:
        hour: Hour of day on the internal clock
        action: "seek" or "avoid"

    Returns:
        CircadianEffect with phase bucket, effect and display description
    """
    phase = classify_phase(hour)
    effect, description = LIGHT_PRC_TABLE[(phase, action)]
    return CircadianEffect(phase=phase, effect=effect, description=description)


def should_seek(direction: Direction, effect: PhaseEffect) -> bool:
    """True if seeking light with this effect moves the clock the right way."""
    return effect in SEEK_ALLOWED[direction]


def is_harmful_seek(direction: Direction, effect: PhaseEffect | None) -> bool:
    """
    True if a seek session with this effect works against adaptation.

    Eastward: any delay is harmful. Westward: any advance (weak or strong)
    is harmful.
    """
    if effect is None:
        return False
    if direction == "east":
        return effect == "delay"
    if direction == "west":
        return effect in ADVANCING_EFFECTS
    return False
