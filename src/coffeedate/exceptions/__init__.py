"""Custom exceptions for CoffeeDate."""

from coffeedate.exceptions.errors import (
    CoffeeDateError,
    InvalidParameters,
    TimezoneResolutionError,
    IcsParseError,
)

__all__ = [
    "CoffeeDateError",
    "InvalidParameters",
    "TimezoneResolutionError",
    "IcsParseError",
]
