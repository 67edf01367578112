"""Data model for recurrence parameters and generated events."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Any, Iterator, Optional, Tuple

from coffeedate.config.constants import EVENT_ID_PREFIX, STATUS_GENERATED
from coffeedate.config.settings import SERIES_CONFIG, SeriesConfig
from coffeedate.exceptions.errors import InvalidParameters
from coffeedate.core.timezone_utils import add_elapsed, elapsed_between
from coffeedate.utils.date_parsing import TimeLike, parse_int, parse_time_of_day

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def resolve_occurrence_count(value: Any, config: SeriesConfig = SERIES_CONFIG) -> int:
    """Apply the default/clamp rule to a raw occurrence count.

    Unparsable, zero or negative counts fall back to the default (5);
    anything above the maximum (50) is clamped to it.
    """
    count = parse_int(value)
    if count is None or count <= 0:
        logger.debug("Occurrence count %r unusable, using %d", value, config.default_occurrences)
        return config.default_occurrences
    if count > config.max_occurrences:
        logger.debug("Occurrence count %d clamped to %d", count, config.max_occurrences)
        return config.max_occurrences
    return count


def resolve_duration(value: Any, config: SeriesConfig = SERIES_CONFIG) -> int:
    """Apply the default rule to a raw duration in minutes."""
    minutes = parse_int(value)
    if minutes is None or minutes <= 0:
        logger.debug("Duration %r unusable, using %d minutes", value, config.default_duration_minutes)
        return config.default_duration_minutes
    return minutes


def _validate_time_of_day(value: TimeLike) -> time:
    try:
        hour, minute = parse_time_of_day(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidParameters("time_of_day", value, str(exc)) from exc
    if not 0 <= hour <= 23:
        raise InvalidParameters("time_of_day", value, "hour must be between 0 and 23")
    if not 0 <= minute <= 59:
        raise InvalidParameters("time_of_day", value, "minute must be between 0 and 59")
    return time(hour, minute)


@dataclass(frozen=True)
class RecurrenceParams:
    """Validated inputs for one series generation.

    Construction validates everything up front: a bad weekday, time of day or
    cadence raises :class:`InvalidParameters` before any event exists. Counts
    and durations are never rejected, only defaulted or clamped.
    """

    cadence_days: int
    target_weekday: int  # 0 = Sunday
    time_of_day: time
    duration_minutes: int = SERIES_CONFIG.default_duration_minutes
    occurrence_count: int = SERIES_CONFIG.default_occurrences
    location: str = ""

    def __post_init__(self):
        cadence = parse_int(self.cadence_days)
        if cadence is None:
            raise InvalidParameters("cadence_days", self.cadence_days, "not a number")
        if cadence <= 0:
            raise InvalidParameters("cadence_days", self.cadence_days, "must be positive")

        weekday = parse_int(self.target_weekday)
        if weekday is None:
            raise InvalidParameters("target_weekday", self.target_weekday, "not a number")
        if not 0 <= weekday <= 6:
            raise InvalidParameters(
                "target_weekday", self.target_weekday, "must be between 0 (Sunday) and 6"
            )

        object.__setattr__(self, "cadence_days", cadence)
        object.__setattr__(self, "target_weekday", weekday)
        object.__setattr__(self, "time_of_day", _validate_time_of_day(self.time_of_day))
        object.__setattr__(self, "duration_minutes", resolve_duration(self.duration_minutes))
        object.__setattr__(self, "occurrence_count", resolve_occurrence_count(self.occurrence_count))
        object.__setattr__(self, "location", str(self.location or "").strip())

    @classmethod
    def from_raw(
        cls,
        cadence: Any,
        weekday: Any,
        time_value: Any,
        duration: Any = None,
        location: Optional[str] = None,
        occurrences: Any = None,
    ) -> "RecurrenceParams":
        """Create params from unparsed form values.

        Args:
            cadence: Days between occurrences, or 30 for monthly.
            weekday: Weekday of the first occurrence, 0 = Sunday.
            time_value: "HH:MM" or any other accepted time-of-day form.
            duration: Minutes; unparsable values become 60.
            location: Free text, stripped of surrounding whitespace.
            occurrences: How many events; defaulted to 5, clamped to 50.

        Returns:
            A validated RecurrenceParams instance.

        Raises:
            InvalidParameters: If cadence, weekday or time of day is invalid.
        """
        return cls(
            cadence_days=cadence,
            target_weekday=weekday,
            time_of_day=time_value,
            duration_minutes=duration,
            occurrence_count=occurrences,
            location=location or "",
        )


def epoch_millis(instant: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware datetime."""
    return (instant - EPOCH) // timedelta(milliseconds=1)


def make_event_id(start: datetime) -> str:
    return f"{EVENT_ID_PREFIX}{epoch_millis(start)}"


@dataclass(frozen=True)
class Event:
    """One occurrence of the coffee date."""

    id: str
    start: datetime
    end: datetime
    location: str = ""

    @classmethod
    def starting_at(cls, start: datetime, duration_minutes: int, location: str = "") -> "Event":
        """Create an event whose id is derived from its start instant.

        ``end`` is ``duration_minutes`` of elapsed time after ``start``, so a
        DST change inside the event moves its wall-clock end, not its length.
        """
        end = add_elapsed(start, timedelta(minutes=duration_minutes))
        return cls(id=make_event_id(start), start=start, end=end, location=location)

    @property
    def duration_minutes(self) -> int:
        return int(elapsed_between(self.start, self.end) // timedelta(minutes=1))


@dataclass(frozen=True)
class EventSeries:
    """Chronologically ordered, immutable collection of generated events."""

    events: Tuple[Event, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "events", tuple(self.events))

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __getitem__(self, index: int) -> Event:
        return self.events[index]

    def __bool__(self) -> bool:
        return bool(self.events)

    def find(self, event_id: str) -> Optional[Event]:
        """Resolve a deep-link identifier to an event.

        Args:
            event_id: The event id, optionally given as a URL fragment ("#event-...").

        Returns:
            The event whose id matches exactly, or None.
        """
        wanted = event_id[1:] if event_id.startswith("#") else event_id
        for event in self.events:
            if event.id == wanted:
                return event
        return None


def describe_series(series: EventSeries) -> str:
    """Summary line shown above a series download."""
    return STATUS_GENERATED.format(count=len(series))
