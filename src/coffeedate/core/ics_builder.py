"""ICS document building and reading.

Documents are assembled line by line so the field order, escaping and
floating local timestamps are exactly what calendar apps receive; reading
goes through the icalendar parser.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Union

from icalendar import Calendar

from coffeedate.config.constants import (
    EVENT_DESCRIPTION,
    EVENT_SUMMARY,
    ICS_LINE_SEPARATOR,
    ICS_MIME_TYPE,
    ICS_PRODID,
    ICS_VERSION,
    SERIES_FILENAME,
    SINGLE_EVENT_FILENAME,
)
from coffeedate.core.event_model import Event, EventSeries
from coffeedate.core.formatting import to_local_compact_timestamp
from coffeedate.core.timezone_utils import attach_timezone, to_zone
from coffeedate.exceptions.errors import IcsParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IcsDownload:
    """An ICS document packaged for download."""
    filename: str
    content_type: str
    data: bytes


def escape_ics_text(text: str) -> str:
    """Escape backslashes, then semicolons, then commas for an ICS text value.

    Backslashes go first so the ones added for ``;`` and ``,`` are not
    escaped a second time.
    """
    return str(text).replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")


def _event_lines(event: Event, stamp: str) -> List[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.id}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{to_local_compact_timestamp(event.start)}",
        f"DTEND:{to_local_compact_timestamp(event.end)}",
        f"SUMMARY:{EVENT_SUMMARY}",
    ]
    if event.location:
        lines.append(f"LOCATION:{escape_ics_text(event.location)}")
    lines.append(f"DESCRIPTION:{EVENT_DESCRIPTION}")
    lines.append("END:VEVENT")
    return lines


def build_ics_document(events: Iterable[Event], now_stamp: Union[datetime, str]) -> str:
    """Build one VCALENDAR holding a VEVENT per event.

    Works the same for a single event and for a whole series.

    Args:
        events: Events in the order they should appear.
        now_stamp: Generation time, as a datetime or an already rendered
            local compact timestamp; used for every DTSTAMP.

    Returns:
        ICS text with CRLF line endings (no trailing line break).
    """
    if isinstance(now_stamp, datetime):
        stamp = to_local_compact_timestamp(now_stamp)
    else:
        stamp = now_stamp

    lines = [
        "BEGIN:VCALENDAR",
        f"VERSION:{ICS_VERSION}",
        f"PRODID:{ICS_PRODID}",
    ]
    count = 0
    for event in events:
        lines.extend(_event_lines(event, stamp))
        count += 1
    lines.append("END:VCALENDAR")

    logger.debug("Built ICS document with %d event(s)", count)
    return ICS_LINE_SEPARATOR.join(lines)


def export_event(event: Event, now: datetime) -> IcsDownload:
    """Package a single event as ``coffee-date.ics``."""
    content = build_ics_document([event], now)
    return IcsDownload(
        filename=SINGLE_EVENT_FILENAME,
        content_type=ICS_MIME_TYPE,
        data=content.encode("utf-8"),
    )


def export_series(series: EventSeries, now: datetime) -> IcsDownload:
    """Package a whole series as ``coffee-dates-series.ics``."""
    content = build_ics_document(series, now)
    return IcsDownload(
        filename=SERIES_FILENAME,
        content_type=ICS_MIME_TYPE,
        data=content.encode("utf-8"),
    )


def _decode_instant(component, prop: str, tz: Optional[tzinfo]) -> datetime:
    value = component.decoded(prop)
    if not isinstance(value, datetime):
        raise IcsParseError(f"{prop} is not a date-time: {value!r}")
    if tz is None:
        return value
    if value.tzinfo is None:
        return attach_timezone(tz, value)
    return to_zone(tz, value)


def read_ics_events(ics: Union[str, bytes], tz: Optional[tzinfo] = None) -> List[Event]:
    """Parse an ICS document back into events.

    Args:
        ics: ICS text or bytes.
        tz: Zone for floating DTSTART/DTEND values; without it they stay naive.

    Returns:
        One Event per VEVENT, in document order.

    Raises:
        IcsParseError: If the payload is not a readable calendar.
    """
    data = ics.encode("utf-8") if isinstance(ics, str) else ics
    try:
        calendar = Calendar.from_ical(data)
    except ValueError as exc:
        raise IcsParseError(f"Failed to parse ICS payload: {exc}") from exc

    events = []
    for index, component in enumerate(calendar.walk("VEVENT")):
        try:
            start = _decode_instant(component, "DTSTART", tz)
            end = _decode_instant(component, "DTEND", tz)
        except KeyError as exc:
            raise IcsParseError(f"VEVENT {index + 1} is missing {exc}") from exc
        events.append(
            Event(
                id=str(component.get("UID", "")),
                start=start,
                end=end,
                location=str(component.get("LOCATION", "")),
            )
        )

    logger.debug("Read %d event(s) from ICS payload", len(events))
    return events
