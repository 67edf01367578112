"""Utility functions for CoffeeDate."""

from coffeedate.utils.date_parsing import parse_int, parse_time_of_day
from coffeedate.utils.encoding import encode_uri_component

__all__ = [
    "parse_int",
    "parse_time_of_day",
    "encode_uri_component",
]
