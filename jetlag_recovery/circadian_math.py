"""
Timezone and clock calculations.

Resolves UTC offsets (DST-aware) and derives the shorter circadian path
between two timezones. Also holds the small wall-clock helpers the
schedulers share.
"""

import math
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytz

from .errors import InvalidTimezone
from .types import TimezoneShift


def format_time(t: time | datetime) -> str:
    """Format time as "HH:MM" (24-hour format for data fields)."""
    return f"{t.hour:02d}:{t.minute:02d}"


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 datetime string.

    Accepts a trailing "Z" for UTC. Strings without an offset come back naive.
    """
    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))


def get_pytz_timezone(tz_name: str) -> pytz.BaseTzInfo:
    """
    Resolve an IANA identifier with pytz.

    Raises:
        InvalidTimezone: If the identifier is empty or unknown
    """
    if not isinstance(tz_name, str) or not tz_name.strip():
        raise InvalidTimezone(str(tz_name))
    try:
        return pytz.timezone(tz_name.strip())
    except pytz.UnknownTimeZoneError as exc:
        raise InvalidTimezone(tz_name) from exc


def get_zone(tz_name: str) -> ZoneInfo:
    """
    Get a ZoneInfo for wall-clock arithmetic.

    Validates through pytz first so both libraries agree on which names exist.
    """
    return ZoneInfo(get_pytz_timezone(tz_name).zone)


def get_timezone_offset_hours(tz_name: str, reference_date: datetime | None = None) -> float:
    """
    Get UTC offset in hours for a timezone at a given instant.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")
        reference_date: Instant to check offset (for DST). Aware datetimes are
            converted; naive ones are read as wall time in tz_name. Defaults to now.

    Returns:
        Offset in hours (e.g., -8.0 for PST, -7.0 for PDT, 5.5 for IST)

    Raises:
        InvalidTimezone: If tz_name cannot be resolved
    """
    tz = get_pytz_timezone(tz_name)

    if reference_date is None:
        reference_date = datetime.now(UTC)

    if reference_date.tzinfo is None:
        localized = tz.localize(reference_date)
    else:
        localized = reference_date.astimezone(tz)

    return localized.utcoffset().total_seconds() / 3600


def shift_from_offsets(origin_offset: float, dest_offset: float) -> TimezoneShift:
    """
    Derive the shorter circadian path from two UTC offsets.

    The body reacts to the smaller clock adjustment, not to geography:
    - |raw| > 12: the path wraps around the clock face, so the shift is
      24 - |raw| and the direction is the opposite of the naive sign
    - otherwise: the shift is |raw| and positive raw means east

    Examples:
        TPE (+8) -> YVR (-7): raw -15 -> 9h east
        LAX (-8) -> NRT (+9): raw +17 -> 7h west
        JFK (-5) -> LHR (+0): raw +5 -> 5h east
    """
    raw_diff = dest_offset - origin_offset

    if raw_diff == 0:
        return TimezoneShift(raw_offset_hours=0.0, shift_hours=0.0, direction="none")

    # Offsets span UTC-12 to UTC+14, so a difference can exceed a full day
    path_diff = raw_diff
    if abs(path_diff) > 24:
        path_diff -= math.copysign(24, path_diff)

    if abs(path_diff) > 12:
        shift_hours = 24 - abs(path_diff)
        direction = "west" if path_diff > 0 else "east"
    else:
        shift_hours = abs(path_diff)
        direction = "east" if path_diff > 0 else "west"

    # A full day apart (e.g. UTC+14 vs UTC-10) is the same clock face
    if shift_hours == 0:
        direction = "none"

    return TimezoneShift(
        raw_offset_hours=raw_diff,
        shift_hours=shift_hours,
        direction=direction,
    )


def calculate_timezone_shift(
    origin_tz: str, dest_tz: str, reference_date: datetime | None = None
) -> TimezoneShift:
    """
    Calculate the timezone shift and adaptation direction.

    Both offsets are resolved at the same reference instant so DST is applied
    consistently.

    Args:
        origin_tz: Origin IANA timezone
        dest_tz: Destination IANA timezone
        reference_date: Instant used for DST-correct offsets (defaults to now)

    Returns:
        TimezoneShift along the shorter circadian path

    Raises:
        InvalidTimezone: If either timezone cannot be resolved
    """
    if reference_date is None:
        reference_date = datetime.now(UTC)

    origin_offset = get_timezone_offset_hours(origin_tz, reference_date)
    dest_offset = get_timezone_offset_hours(dest_tz, reference_date)
    return shift_from_offsets(origin_offset, dest_offset)


def localize(value: datetime | str, tz_name: str) -> datetime:
    """
    Make a request datetime timezone-aware.

    Naive values are wall time in tz_name; aware values are converted to it.
    """
    if isinstance(value, str):
        value = parse_iso_datetime(value)
    zone = get_zone(tz_name)
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def at_local_hour(day: date, hour: int, tz_name: str, minutes: int = 0) -> datetime:
    """
    Build a wall-clock datetime on a calendar day in a timezone.

    minutes may be negative or exceed an hour; it is applied as wall-clock
    offset from hour:00 on that day.
    """
    base = datetime.combine(day, time(hour), tzinfo=get_zone(tz_name))
    return base + timedelta(minutes=minutes)


def hours_between(later: datetime, earlier: datetime) -> float:
    """Elapsed hours between two aware datetimes (negative if reversed)."""
    # Same-tzinfo subtraction is wall-clock; convert so DST jumps count
    return (later.astimezone(UTC) - earlier.astimezone(UTC)).total_seconds() / 3600


def local_hour(instant: datetime, tz_name: str) -> int:
    """Hour of day (0-23) of an instant on a timezone's wall clock."""
    return instant.astimezone(get_zone(tz_name)).hour
