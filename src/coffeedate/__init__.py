"""
CoffeeDate - Recurring Coffee Date Planner

Generates a recurring series of coffee dates and exports each one as
iCalendar text, a Google Calendar link and an SMS share link.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from coffeedate.config.settings import SERIES_CONFIG, MonthOverflow
from coffeedate.exceptions.errors import (
    CoffeeDateError,
    InvalidParameters,
    IcsParseError,
)
from coffeedate.core.event_model import Event, EventSeries, RecurrenceParams
from coffeedate.core.recurrence import compute_first_occurrence, generate_series
from coffeedate.core.ics_builder import build_ics_document, escape_ics_text, read_ics_events
from coffeedate.core.links import build_calendar_service_link, build_share_link
from coffeedate.core.timezone_utils import LocalClock

__all__ = [
    # Version
    "__version__",
    # Config
    "SERIES_CONFIG",
    "MonthOverflow",
    # Exceptions
    "CoffeeDateError",
    "InvalidParameters",
    "IcsParseError",
    # Core
    "Event",
    "EventSeries",
    "RecurrenceParams",
    "compute_first_occurrence",
    "generate_series",
    "build_ics_document",
    "escape_ics_text",
    "read_ics_events",
    "build_calendar_service_link",
    "build_share_link",
    "LocalClock",
]
