"""Exception hierarchy for CoffeeDate."""

from typing import Any


class CoffeeDateError(Exception):
    """Base class for all CoffeeDate errors."""


class InvalidParameters(CoffeeDateError):
    """Raised when a recurrence parameter is outside its valid range.

    Attributes:
        field: Name of the offending parameter.
        value: The rejected value, as supplied.
        reason: Human-readable explanation.
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class TimezoneResolutionError(CoffeeDateError):
    """Raised when a timezone name cannot be resolved and no fallback is allowed."""

    def __init__(self, tz_name: str, fallback: str = "UTC"):
        self.tz_name = tz_name
        self.fallback = fallback
        super().__init__(
            f"Could not resolve timezone '{tz_name}', fallback would be '{fallback}'"
        )


class IcsParseError(CoffeeDateError, ValueError):
    """Raised when an iCalendar payload cannot be read back into events."""
