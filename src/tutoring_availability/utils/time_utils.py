from __future__ import annotations

from datetime import time
import re
from typing import Tuple

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import MalformedRangeError

_CLOCK_RE = re.compile(r"^(\d{2}):(\d{2})$")


def time_to_minutes(t: time, *, is_end_time: bool = False) -> int:
    """
    Convert time to minutes since midnight.

    Args:
        t: Time object.
        is_end_time: If True, treat time(0, 0) as 1440 (end of day).

    Returns:
        Minutes since midnight (0-1440).
    """
    minutes = t.hour * 60 + t.minute
    if is_end_time and minutes == 0:
        return MINUTES_PER_DAY
    return minutes


def minutes_to_time_str(minutes: int) -> str:
    """
    Convert minutes since midnight to HH:MM.

    1440 (end of day) is rendered as "00:00", the label the grid uses for
    the last cell of the day ("23:00-00:00").
    """
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_clock(value: str, *, is_end_time: bool = False) -> int:
    """Parse a zero-padded 24-hour "HH:MM" string into minutes since midnight."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"invalid time format: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise ValueError(f"invalid time: {value!r}")
    total = hours * 60 + minutes
    if is_end_time and total == 0:
        return MINUTES_PER_DAY
    if not is_end_time and total == MINUTES_PER_DAY:
        raise ValueError(f"start time cannot be 24:00: {value!r}")
    return total


def parse_range(value: str) -> Tuple[int, int]:
    """Parse "HH:MM-HH:MM" into (start, end) minutes; end "00:00" means midnight."""
    parts = value.split("-")
    if len(parts) != 2:
        raise MalformedRangeError(value, "expected HH:MM-HH:MM")
    try:
        start = parse_clock(parts[0])
        end = parse_clock(parts[1], is_end_time=True)
    except ValueError as exc:
        raise MalformedRangeError(value, str(exc)) from exc
    if start >= end:
        raise MalformedRangeError(value, "start must be before end")
    return start, end


def format_range(start: int, end: int) -> str:
    return f"{minutes_to_time_str(start)}-{minutes_to_time_str(end)}"


def format_12h(minutes: int, *, compact: bool = False, spaced: bool = False) -> str:
    """
    Render minutes since midnight as a 12-hour label.

    "2:00PM" by default, "2PM" when compact, "2:00 PM" when spaced.
    Midnight (0 or 1440) renders as 12 AM.
    """
    minutes %= MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    if compact:
        return f"{display_hour}{suffix}"
    separator = " " if spaced else ""
    return f"{display_hour}:{minute:02d}{separator}{suffix}"
