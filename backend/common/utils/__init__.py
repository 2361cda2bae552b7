"""Common utility functions."""

from .geo import (
    distance_km,
    eta_minutes,
    format_distance,
    format_time,
    format_clock_time,
)
from .fares import calculate_fare

__all__ = [
    "distance_km",
    "eta_minutes",
    "format_distance",
    "format_time",
    "format_clock_time",
    "calculate_fare",
]
