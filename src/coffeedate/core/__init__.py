"""Core business logic for CoffeeDate."""

from coffeedate.core.event_model import Event, EventSeries, RecurrenceParams, describe_series
from coffeedate.core.recurrence import compute_first_occurrence, generate_series, generate_series_now
from coffeedate.core.formatting import (
    to_display_string,
    to_utc_compact_timestamp,
    to_local_compact_timestamp,
    parse_local_compact_timestamp,
)
from coffeedate.core.ics_builder import (
    IcsDownload,
    escape_ics_text,
    build_ics_document,
    export_event,
    export_series,
    read_ics_events,
)
from coffeedate.core.links import build_calendar_service_link, build_event_link, build_share_link
from coffeedate.core.timezone_utils import LocalClock

__all__ = [
    "Event",
    "EventSeries",
    "RecurrenceParams",
    "describe_series",
    "compute_first_occurrence",
    "generate_series",
    "generate_series_now",
    "to_display_string",
    "to_utc_compact_timestamp",
    "to_local_compact_timestamp",
    "parse_local_compact_timestamp",
    "IcsDownload",
    "escape_ics_text",
    "build_ics_document",
    "export_event",
    "export_series",
    "read_ics_events",
    "build_calendar_service_link",
    "build_event_link",
    "build_share_link",
    "LocalClock",
]
