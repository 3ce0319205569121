# wall-clock time helpers: 12-hour display strings and minutes since midnight
# all times are local wall-clock values, no timezone conversion happens here

import re
from datetime import datetime

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*(AM|PM)\s*$", re.IGNORECASE)


def parse_wall_clock(display: str) -> int:
    """parse a 12-hour time like "9:00 AM" or "1 PM" into minutes since midnight.
    returns 0 for anything that doesn't parse: callers rely on this never raising."""
    if not isinstance(display, str):
        return 0

    match = _TIME_PATTERN.match(display)
    if not match:
        return 0

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    if not 1 <= hours <= 12 or minutes > 59:
        return 0

    period = match.group(3).upper()
    if period == "AM" and hours == 12:
        hours = 0
    elif period == "PM" and hours != 12:
        hours += 12

    return hours * 60 + minutes


def format_wall_clock(instant: datetime) -> str:
    """format an instant as "9:00 AM": must stay parseable by parse_wall_clock"""
    hour_12 = instant.hour % 12 or 12
    period = "AM" if instant.hour < 12 else "PM"
    return f"{hour_12}:{instant.minute:02d} {period}"


def minutes_since_midnight(instant: datetime) -> int:
    return instant.hour * 60 + instant.minute
