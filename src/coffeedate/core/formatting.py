"""Timestamp renderings used by the display and the calendar exporters."""

from datetime import datetime, tzinfo
from typing import Optional

import pytz

from coffeedate.core.timezone_utils import attach_timezone

LOCAL_COMPACT_FORMAT = "%Y%m%dT%H%M%S"


def _compact(dt: datetime) -> str:
    # Explicit padding: strftime("%Y") does not zero-pad years below 1000 on glibc
    return (
        f"{dt.year:04d}{dt.month:02d}{dt.day:02d}"
        f"T{dt.hour:02d}{dt.minute:02d}{dt.second:02d}"
    )


def to_display_string(instant: datetime) -> str:
    """Human-readable rendering, e.g. "Mon, Jan 15, 2024, 9:00 AM".

    Weekday/month names and the AM/PM marker follow the process locale.
    Presentational only; never parsed back.
    """
    hour = instant.hour % 12 or 12
    return (
        f"{instant:%a}, {instant:%b} {instant.day}, {instant.year}, "
        f"{hour}:{instant:%M} {instant:%p}"
    )


def to_utc_compact_timestamp(instant: datetime) -> str:
    """Render as ``YYYYMMDDTHHMMSSZ`` in UTC (calendar-service links)."""
    return _compact(instant.astimezone(pytz.utc)) + "Z"


def to_local_compact_timestamp(instant: datetime) -> str:
    """Render as ``YYYYMMDDTHHMMSS`` in the instant's local time (floating ICS time)."""
    return _compact(instant)


def parse_local_compact_timestamp(text: str, tz: Optional[tzinfo] = None) -> datetime:
    """Read a floating ``YYYYMMDDTHHMMSS`` timestamp.

    Args:
        text: The compact timestamp.
        tz: Zone to attach; without it the result stays naive.

    Returns:
        The parsed datetime.

    Raises:
        ValueError: If the text is not a local compact timestamp.
    """
    parsed = datetime.strptime(text.strip(), LOCAL_COMPACT_FORMAT)
    if tz is None:
        return parsed
    return attach_timezone(tz, parsed)
