"""Configuration module for CoffeeDate."""

from coffeedate.config.settings import SERIES_CONFIG, SeriesConfig, MonthOverflow
from coffeedate.config.constants import (
    MONTHLY_CADENCE,
    EVENT_ID_PREFIX,
    ICS_PRODID,
    ICS_MIME_TYPE,
    EVENT_SUMMARY,
    EVENT_DESCRIPTION,
)

__all__ = [
    "SERIES_CONFIG",
    "SeriesConfig",
    "MonthOverflow",
    "MONTHLY_CADENCE",
    "EVENT_ID_PREFIX",
    "ICS_PRODID",
    "ICS_MIME_TYPE",
    "EVENT_SUMMARY",
    "EVENT_DESCRIPTION",
]
