"""
Body clock drift during recovery.

The internal clock starts on origin time and moves linearly toward
destination time across the recovery window:
- Day 1: 0% shifted (the body still reads origin time exactly)
- Final day and beyond: 100% shifted (the body reads destination time)

The internal time for a destination-local instant is that instant moved by
the hours shifted so far (+ for eastward, - for westward) and read on the
origin wall clock. Estimates are recomputed per query and never stored.

After a multi-leg journey the body may already have moved part of the way
during layovers; that pre-adapted amount is the starting point on day 1 and
the drift covers only what remains.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ..circadian_math import get_timezone_offset_hours
from ..types import Direction, LightAction
from .prc import CircadianEffect, circadian_effect


@dataclass(frozen=True)
class BodyClockEstimate:
    """Where the internal clock is at a given moment."""

    internal_time: datetime  # Naive wall time on the internal clock
    hours_shifted: float  # Hours of the total shift completed so far
    remaining_shift_hours: float

    @property
    def internal_hour(self) -> float:
        """Hour of day on the internal clock, with minutes as a fraction."""
        return self.internal_time.hour + self.internal_time.minute / 60


def shift_progress(day: int, total_recovery_days: int) -> float:
    """
    Fraction of the shift completed at the start of a recovery day.

    (day - 1) / total_days, capped at 1. Day 1 is exactly 0.
    """
    if total_recovery_days <= 0:
        return 0.0
    return min((day - 1) / total_recovery_days, 1.0)


class BodyClockModel:
    """
    Linear drift model bound to one plan's fixed parameters.

    Pure: the same (local_time, day) always yields the same estimate.
    """

    def __init__(
        self,
        origin_tz: str,
        total_shift_hours: float,
        total_recovery_days: int,
        direction: Direction,
        pre_adapted_hours: float = 0.0,
    ):
        """
        Initialize model.

        Args:
            origin_tz: Origin IANA timezone (the clock the body starts on)
            total_shift_hours: Shorter-path shift in hours
            total_recovery_days: Estimated recovery days
            direction: "east", "west" or "none"
            pre_adapted_hours: Hours of the shift already completed on arrival
        """
        self.origin_tz = origin_tz
        self.total_shift_hours = total_shift_hours
        self.total_recovery_days = total_recovery_days
        self.direction = direction
        self.pre_adapted_hours = pre_adapted_hours

    def hours_shifted(self, day: int) -> float:
        """Hours of the shift completed by the start of a recovery day."""
        if self.direction == "none":
            return 0.0
        remaining = self.total_shift_hours - self.pre_adapted_hours
        return self.pre_adapted_hours + shift_progress(day, self.total_recovery_days) * remaining

    def signed_shift(self, day: int) -> float:
        """Hours the internal clock has moved, signed by direction."""
        hours = self.hours_shifted(day)
        return -hours if self.direction == "west" else hours

    def estimate(
        self,
        local_time: datetime,
        day: int,
        origin_offset_hours: float | None = None,
    ) -> BodyClockEstimate:
        """
        Estimate the internal clock at a destination-local instant.

        Args:
            local_time: Aware destination-local datetime
            day: Recovery day index (1-based)
            origin_offset_hours: Pre-resolved origin UTC offset; looked up at
                local_time when omitted

        Returns:
            BodyClockEstimate for that instant
        """
        if origin_offset_hours is None:
            origin_offset_hours = get_timezone_offset_hours(self.origin_tz, local_time)

        hours_shifted = self.hours_shifted(day)
        utc_wall = local_time.astimezone(UTC).replace(tzinfo=None)
        internal_time = utc_wall + timedelta(hours=origin_offset_hours + self.signed_shift(day))

        return BodyClockEstimate(
            internal_time=internal_time,
            hours_shifted=hours_shifted,
            remaining_shift_hours=self.total_shift_hours - hours_shifted,
        )

    def internal_hour(self, local_time: datetime, day: int) -> float:
        """Hour of day on the internal clock at a destination-local instant."""
        return self.estimate(local_time, day).internal_hour

    def for_day(self, day: int, reference: datetime) -> "DayBodyClock":
        """
        Bind the model to one recovery day.

        The origin offset is resolved once at reference and reused for every
        session of that day.
        """
        return DayBodyClock(
            model=self,
            day=day,
            origin_offset_hours=get_timezone_offset_hours(self.origin_tz, reference),
        )


@dataclass(frozen=True)
class DayBodyClock:
    """A BodyClockModel fixed to a single day and origin offset."""

    model: BodyClockModel
    day: int
    origin_offset_hours: float

    def estimate(self, local_time: datetime) -> BodyClockEstimate:
        return self.model.estimate(local_time, self.day, self.origin_offset_hours)

    def effect(
        self, local_time: datetime, action: LightAction
    ) -> tuple[BodyClockEstimate, CircadianEffect]:
        """Classify light at local_time on the internal clock."""
        estimate = self.estimate(local_time)
        return estimate, circadian_effect(estimate.internal_hour, action)
