"""Coercion of raw form values into numbers and times of day."""

import re
from datetime import datetime, time
from typing import Any, Optional, Tuple, Union

from dateutil import parser as dateutil_parser

# Leading integer, the way browsers read numeric form fields ("45 min" -> 45)
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")

TimeLike = Union[str, time, datetime, Tuple[int, int]]


def parse_int(value: Any) -> Optional[int]:
    """Read the leading integer of a raw value.

    Args:
        value: An int, a numeric string such as "45" or "45min", or anything else.

    Returns:
        The parsed integer, or None if the value has no leading integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if not isinstance(value, str):
        return None
    match = LEADING_INT_PATTERN.match(value)
    if match:
        return int(match.group(1))
    return None


def normalize_time_string(time_str: str) -> str:
    """Handle common human formats like '20:00h' or '20h15' before parsing.

    Args:
        time_str: The time string to normalize.

    Returns:
        A normalized time string that dateutil can parse.
    """
    s = time_str.strip()

    # Convert European "20.00" to "20:00" for dateutil
    if re.match(r"^\d{1,2}\.\d{2}$", s):
        s = s.replace(".", ":")

    # Handle "20:00h", "20h", "20h15" styles
    match = re.match(r"^\s*(\d{1,2})(?:[:\.]?(\d{2}))?\s*h(?:rs?)?\.?\s*$", s, re.IGNORECASE)
    if match:
        hour = int(match.group(1))
        minute = match.group(2) or "00"
        return f"{hour:02d}:{minute}"

    match = re.match(r"^\s*(\d{1,2})h(\d{2})\s*$", s, re.IGNORECASE)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"

    return s


def parse_time_of_day(value: TimeLike) -> Tuple[int, int]:
    """Turn a raw time-of-day into an (hour, minute) pair.

    Range checking is left to the caller: "25:00" comes back as (25, 0).

    Args:
        value: "HH:MM" (or another format dateutil understands, e.g. "7pm"),
            a ``time``/``datetime``, or an (hour, minute) pair.

    Returns:
        Tuple of (hour, minute).

    Raises:
        ValueError: If the value cannot be read as a time of day.
    """
    if isinstance(value, datetime):
        return value.hour, value.minute
    if isinstance(value, time):
        return value.hour, value.minute
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise ValueError(f"expected (hour, minute), got {value!r}")
        hour, minute = (parse_int(part) for part in value)
        if hour is None or minute is None:
            raise ValueError(f"expected (hour, minute), got {value!r}")
        return hour, minute
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"not a time of day: {value!r}")

    s = normalize_time_string(value)

    # Plain "HH:MM" is read directly so out-of-range parts reach validation
    match = re.match(r"^(\d{1,2}):(\d{2})(?::\d{2})?$", s)
    if match:
        return int(match.group(1)), int(match.group(2))

    parsed = dateutil_parser.parse(s, default=datetime(2000, 1, 1))
    return parsed.hour, parsed.minute
