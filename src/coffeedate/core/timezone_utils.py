"""Timezone resolution and the injectable local clock."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Tuple

import pytz
import tzlocal
from dateutil import tz as du_tz

from coffeedate.config.constants import ABBR_TO_TZ
from coffeedate.exceptions.errors import TimezoneResolutionError

logger = logging.getLogger(__name__)


def resolve_timezone(tz_str: Optional[str], strict: bool = False) -> Tuple[tzinfo, Optional[str]]:
    """Resolve a timezone string to a timezone object.

    Args:
        tz_str: The timezone string (e.g., "EST", "America/New_York", "local").
        strict: Raise instead of falling back to UTC for unknown names.

    Returns:
        Tuple of (timezone_object, warning_message or None).

    Raises:
        TimezoneResolutionError: If the name is unknown and ``strict`` is set.
    """
    tz_str_raw = tz_str or "local"
    tz_upper = tz_str_raw.upper()
    warning = None

    if tz_upper == "LOCAL":
        # Host zone (DST aware)
        local_tz_obj = tzlocal.get_localzone()
        tz_name = getattr(local_tz_obj, "zone", str(local_tz_obj))
    else:
        tz_name = ABBR_TO_TZ.get(tz_upper, tz_str_raw)

    try:
        local_tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        # Last-ditch attempt with dateutil (may return fixed offset)
        local_tz = du_tz.gettz(tz_name)
        if local_tz is None:
            if strict:
                raise TimezoneResolutionError(tz_str_raw, "UTC")
            local_tz = pytz.utc
            warning = f"Couldn't resolve timezone '{tz_str_raw}' - using UTC."
            logger.warning(warning)

    return local_tz, warning


def attach_timezone(tzobj: tzinfo, naive_dt: datetime) -> datetime:
    """Return timezone-aware datetime, using proper DST rules where possible.

    Ambiguous wall-clock times (the repeated hour when clocks go back) resolve
    to the earlier, daylight-saving reading. Non-existent times (the skipped
    hour when clocks go forward) are pushed forward by the size of the gap,
    so 02:30 on a spring-forward night becomes 03:30.

    Args:
        tzobj: The timezone object (pytz, zoneinfo or dateutil).
        naive_dt: A naive datetime to attach the timezone to.

    Returns:
        A timezone-aware datetime.
    """
    if hasattr(tzobj, "localize"):
        try:
            return tzobj.localize(naive_dt, is_dst=None)
        except pytz.exceptions.AmbiguousTimeError:
            return tzobj.localize(naive_dt, is_dst=True)
        except pytz.exceptions.NonExistentTimeError:
            return tzobj.normalize(tzobj.localize(naive_dt, is_dst=False))
    # zoneinfo/dateutil: fold=0 reads the earlier offset; the UTC round trip
    # turns a skipped wall time into the real instant it names
    return naive_dt.replace(tzinfo=tzobj).astimezone(timezone.utc).astimezone(tzobj)


def to_zone(tzobj: tzinfo, aware_dt: datetime) -> datetime:
    """Convert an aware datetime to ``tzobj`` keeping pytz offsets normalized."""
    converted = aware_dt.astimezone(tzobj)
    if hasattr(tzobj, "normalize"):
        converted = tzobj.normalize(converted)
    return converted


def as_utc(aware_dt: datetime) -> datetime:
    return aware_dt.astimezone(timezone.utc)


def add_elapsed(aware_dt: datetime, delta: timedelta) -> datetime:
    """Add real elapsed time, staying in the datetime's own zone.

    Plain ``aware_dt + delta`` is wall-clock arithmetic for zoneinfo and
    dateutil zones, which gains or loses an hour across a DST change.
    """
    if aware_dt.tzinfo is None:
        return aware_dt + delta
    return to_zone(aware_dt.tzinfo, as_utc(aware_dt) + delta)


def elapsed_between(start: datetime, end: datetime) -> timedelta:
    """Real time between two datetimes; naive values are compared as-is."""
    if start.tzinfo is None or end.tzinfo is None:
        return end - start
    return as_utc(end) - as_utc(start)


@dataclass(frozen=True)
class LocalClock:
    """Source of "now" and of the local zone used for calendar arithmetic.

    The recurrence engine never asks the host for its zone directly; it is
    handed a clock. ``LocalClock.system()`` reproduces the host behaviour,
    while ``LocalClock.fixed()`` pins both zone and instant for tests.
    """

    tz: tzinfo
    frozen_at: Optional[datetime] = None

    @classmethod
    def system(cls) -> "LocalClock":
        tz_obj, _ = resolve_timezone("local")
        return cls(tz=tz_obj)

    @classmethod
    def for_zone(cls, tz_name: str) -> "LocalClock":
        tz_obj, _ = resolve_timezone(tz_name, strict=True)
        return cls(tz=tz_obj)

    @classmethod
    def fixed(cls, tz_name: str, local_now: datetime) -> "LocalClock":
        """Build a clock that always reports ``local_now`` in ``tz_name``.

        Args:
            tz_name: Zone name understood by :func:`resolve_timezone`.
            local_now: Naive wall-clock time, or an aware datetime.
        """
        tz_obj, _ = resolve_timezone(tz_name, strict=True)
        if local_now.tzinfo is None:
            frozen = attach_timezone(tz_obj, local_now)
        else:
            frozen = to_zone(tz_obj, local_now)
        return cls(tz=tz_obj, frozen_at=frozen)

    def now(self) -> datetime:
        if self.frozen_at is not None:
            return self.frozen_at
        return datetime.now(self.tz)

    def to_local(self, aware_dt: datetime) -> datetime:
        return to_zone(self.tz, aware_dt)
