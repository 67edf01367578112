"""Recurrence engine: first occurrence and series generation.

All arithmetic is done on local wall-clock time and only then attached to
the zone, so a 09:00 coffee date stays at 09:00 across daylight-saving
changes (its UTC offset moves instead). Event durations are elapsed time.
"""

import logging
from datetime import datetime, time, timedelta, tzinfo
from typing import Optional

from dateutil.relativedelta import relativedelta

from coffeedate.config.constants import MONTHLY_CADENCE
from coffeedate.config.settings import SERIES_CONFIG, MonthOverflow
from coffeedate.core.event_model import Event, EventSeries, RecurrenceParams
from coffeedate.core.timezone_utils import LocalClock, as_utc, attach_timezone, to_zone

logger = logging.getLogger(__name__)


def weekday_sunday_first(day: datetime) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def add_months(naive_dt: datetime, months: int, policy: MonthOverflow = SERIES_CONFIG.month_overflow) -> datetime:
    """Move a wall-clock datetime by whole calendar months.

    Args:
        naive_dt: Local wall-clock datetime (no tzinfo).
        months: Number of months to move forward.
        policy: What to do when the day-of-month does not exist in the target month.

    Returns:
        The shifted wall-clock datetime, same time of day.
    """
    if policy == MonthOverflow.CLAMP:
        return naive_dt + relativedelta(months=months)

    # Roll over: Jan 31 + 1 month is "Feb 31", i.e. Mar 3 (or Mar 2 in leap years)
    year, month_index = divmod(naive_dt.year * 12 + naive_dt.month - 1 + months, 12)
    first_of_month = naive_dt.replace(year=year, month=month_index + 1, day=1)
    return first_of_month + timedelta(days=naive_dt.day - 1)


def _zone_for(now: datetime, tz: Optional[tzinfo]) -> tzinfo:
    if tz is not None:
        return tz
    if now.tzinfo is not None:
        return now.tzinfo
    return LocalClock.system().tz


def _as_aware(now: datetime, zone: tzinfo) -> datetime:
    if now.tzinfo is None:
        return attach_timezone(zone, now)
    return to_zone(zone, now)


def compute_first_occurrence(
    now: datetime,
    target_weekday: int,
    time_of_day: time,
    cadence_days: int,
    tz: Optional[tzinfo] = None,
    month_overflow: MonthOverflow = SERIES_CONFIG.month_overflow,
) -> datetime:
    """Find the first occurrence strictly after ``now``.

    The candidate is the next ``target_weekday`` (today included) at
    ``time_of_day``. When that moment is not in the future the candidate
    moves one week ahead, or one calendar month ahead for monthly cadence.

    Args:
        now: Reference instant. Naive values are read as local wall-clock time.
        target_weekday: 0 = Sunday ... 6 = Saturday.
        time_of_day: Local start time; seconds are ignored.
        cadence_days: Days between occurrences, 30 meaning monthly.
        tz: Local zone; defaults to the zone of ``now`` or the host zone.
        month_overflow: Where monthly dates land when the day-of-month is missing.

    Returns:
        Aware datetime in the local zone, strictly greater than ``now``.
    """
    zone = _zone_for(now, tz)
    local_now = _as_aware(now, zone)

    base = local_now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    diff = (target_weekday - weekday_sunday_first(base) + 7) % 7
    candidate = datetime.combine(
        (base + timedelta(days=diff)).date(),
        time(time_of_day.hour, time_of_day.minute),
    )

    result = attach_timezone(zone, candidate)
    if as_utc(result) <= as_utc(local_now):
        if cadence_days == MONTHLY_CADENCE:
            candidate = add_months(candidate, 1, month_overflow)
        else:
            candidate = candidate + timedelta(days=7)
        result = attach_timezone(zone, candidate)

    return result


def occurrence_start(
    first_start: datetime,
    index: int,
    cadence_days: int,
    tz: Optional[tzinfo] = None,
    month_overflow: MonthOverflow = SERIES_CONFIG.month_overflow,
) -> datetime:
    """Start of the ``index``-th occurrence, counted from ``first_start``.

    Monthly occurrences are always derived from the first start, never
    chained, so a series anchored on the 31st keeps aiming at the 31st.
    """
    zone = tz or first_start.tzinfo
    wall_clock = first_start.replace(tzinfo=None)
    if cadence_days == MONTHLY_CADENCE:
        shifted = add_months(wall_clock, index, month_overflow)
    else:
        shifted = wall_clock + timedelta(days=cadence_days * index)
    return attach_timezone(zone, shifted)


def generate_series(
    now: datetime,
    params: RecurrenceParams,
    tz: Optional[tzinfo] = None,
    month_overflow: MonthOverflow = SERIES_CONFIG.month_overflow,
) -> EventSeries:
    """Generate the events for one set of recurrence parameters.

    Pure function of ``now`` and ``params``; the caller owns the result.

    Args:
        now: Reference instant.
        params: Validated recurrence parameters.
        tz: Local zone; defaults to the zone of ``now`` or the host zone.
        month_overflow: Where monthly dates land when the day-of-month is missing.

    Returns:
        EventSeries of ``params.occurrence_count`` events in chronological order.
    """
    zone = _zone_for(now, tz)
    first_start = compute_first_occurrence(
        now,
        params.target_weekday,
        params.time_of_day,
        params.cadence_days,
        tz=zone,
        month_overflow=month_overflow,
    )

    events = []
    for index in range(params.occurrence_count):
        start = occurrence_start(first_start, index, params.cadence_days, tz=zone, month_overflow=month_overflow)
        events.append(Event.starting_at(start, params.duration_minutes, params.location))

    logger.debug(
        "Generated %d events every %s starting %s",
        len(events),
        "month" if params.cadence_days == MONTHLY_CADENCE else f"{params.cadence_days} days",
        first_start.isoformat(),
    )
    return EventSeries(tuple(events))


def generate_series_now(params: RecurrenceParams, clock: Optional[LocalClock] = None) -> EventSeries:
    """Generate a series relative to the clock's current instant and zone."""
    clock = clock or LocalClock.system()
    return generate_series(clock.now(), params, tz=clock.tz)
