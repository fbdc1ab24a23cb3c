"""
12-hour clock arithmetic for booking slots

Times are stored and exchanged as "H:MM AM" strings and compared as
minutes since midnight (0-1439).
"""
import re
from typing import List

SLOT_STEP_MINUTES = 30
MINUTES_PER_DAY = 24 * 60

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp][Mm])\s*$")


class InvalidTimeError(ValueError):
    """Time string or minute value outside the 12-hour clock contract"""


def parse_time(time_str: str) -> int:
    """
    Convert "9:30 AM" to minutes since midnight.

    12 AM is midnight (0), 12 PM is noon (720). Minutes may be omitted
    ("9 AM"). Raises InvalidTimeError for anything else.
    """
    if not isinstance(time_str, str):
        raise InvalidTimeError(f"Expected a time string, got {type(time_str).__name__}")

    match = _TIME_RE.match(time_str)
    if not match:
        raise InvalidTimeError(f"Invalid time '{time_str}', expected 'H:MM AM' or 'H:MM PM'")

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    period = match.group(3).upper()

    if not 1 <= hours <= 12 or minutes > 59:
        raise InvalidTimeError(f"Invalid time '{time_str}'")

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Inverse of parse_time: 570 -> "9:30 AM" """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeError(f"Minutes out of range: {minutes}")

    hours, mins = divmod(minutes, 60)
    period = "PM" if hours >= 12 else "AM"

    if hours > 12:
        hours -= 12
    elif hours == 0:
        hours = 12

    return f"{hours}:{mins:02d} {period}"


def normalize_time(time_str: str) -> str:
    """Canonical spelling of a time string ("09:00 am" -> "9:00 AM")"""
    return format_time(parse_time(time_str))


def generate_time_slots(
    start_time: str,
    end_time: str,
    include_end: bool = False,
    step: int = SLOT_STEP_MINUTES
) -> List[str]:
    """
    Slot points from start_time every `step` minutes.

    The interval is half-open [start, end) unless include_end is set, in
    which case a point landing exactly on end_time is included as well.
    An inverted range yields no points.
    """
    start = parse_time(start_time)
    end = parse_time(end_time)

    slots = []
    current = start
    while current < end:
        slots.append(format_time(current))
        current += step

    if include_end and current == end:
        slots.append(format_time(current))

    return slots


def is_time_in_range(time_str: str, start_time: str, end_time: str, include_end: bool = False) -> bool:
    """start <= time < end, or start <= time <= end with include_end"""
    minutes = parse_time(time_str)
    start = parse_time(start_time)
    end = parse_time(end_time)

    if include_end:
        return start <= minutes <= end
    return start <= minutes < end
