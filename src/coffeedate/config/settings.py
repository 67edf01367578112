"""Tunable settings for series generation."""

from dataclasses import dataclass
from enum import Enum


class MonthOverflow(str, Enum):
    """What monthly cadence does with a day-of-month the target month lacks.

    ROLL_OVER moves the surplus days into the following month
    (Jan 31 + 1 month -> Mar 3 in a common year). CLAMP pins the date to the
    last day of the target month (Jan 31 + 1 month -> Feb 28).
    """

    ROLL_OVER = "roll_over"
    CLAMP = "clamp"


@dataclass(frozen=True)
class SeriesConfig:
    """Defaults and limits applied when coercing raw series parameters."""

    default_occurrences: int = 5
    max_occurrences: int = 50
    default_duration_minutes: int = 60
    month_overflow: MonthOverflow = MonthOverflow.ROLL_OVER


SERIES_CONFIG = SeriesConfig()
