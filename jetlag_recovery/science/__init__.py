"""
Circadian Science Layer.

Pure circadian science functions without flight/travel awareness.

Modules:
- prc: Light Phase Response Curve buckets and the seek/avoid decision table
- body_clock: Linear drift of the internal clock across recovery days
- recovery: Recovery-duration estimates (conservative and aggressive modes)
"""

from .body_clock import BodyClockEstimate, BodyClockModel, DayBodyClock
from .prc import CircadianEffect, circadian_effect, classify_phase, is_harmful_seek, should_seek
from .recovery import (
    estimate_recovery_days,
    get_recovery_mode_config,
    max_reasonable_recovery_days,
    recovery_phase_for_day,
)

__all__ = [
    "BodyClockEstimate",
    "BodyClockModel",
    "DayBodyClock",
    "CircadianEffect",
    "circadian_effect",
    "classify_phase",
    "is_harmful_seek",
    "should_seek",
    "estimate_recovery_days",
    "get_recovery_mode_config",
    "max_reasonable_recovery_days",
    "recovery_phase_for_day",
]
