"""
Geographic utility functions.

Distance/ETA primitives shared by route matching and proximity monitoring.
All distances are kilometres; coordinates are ``(latitude, longitude)`` in
decimal degrees.
"""

from datetime import datetime, timedelta
from math import asin, cos, inf, radians, sin, sqrt
from typing import Optional, Tuple

from django.utils import timezone

EARTH_RADIUS_KM = 6371.0
DEFAULT_AVG_SPEED_KMH = 30.0

LatLng = Tuple[float, float]


def distance_km(a: LatLng, b: LatLng) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Args:
        a: ``(lat, lon)`` of the first point
        b: ``(lat, lon)`` of the second point

    Returns:
        Distance in kilometres (always >= 0, symmetric)
    """
    lat1, lon1 = float(a[0]), float(a[1])
    lat2, lon2 = float(b[0]), float(b[1])
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    c = 2 * asin(sqrt(min(1.0, h)))
    return c * EARTH_RADIUS_KM


def eta_minutes(distance: float, avg_speed_kmh: float = DEFAULT_AVG_SPEED_KMH) -> float:
    """
    Linear travel-time estimate in minutes.

    Ignores the road network; used for coarse banding and display only.
    """
    if avg_speed_kmh <= 0:
        return inf
    return distance / avg_speed_kmh * 60


def format_distance(distance: float) -> str:
    """Render a distance for humans: metres below 1 km, one decimal above."""
    if distance < 1:
        return f"{round(distance * 1000)}m"
    return f"{distance:.1f}km"


def format_time(minutes: float) -> str:
    """Render a duration in minutes, e.g. ``"7 minutes"`` or ``"1h 5m"``."""
    if minutes < 1:
        return "less than a minute"
    if minutes < 60:
        rounded = round(minutes)
        return f"{rounded} minute" if rounded == 1 else f"{rounded} minutes"
    hours = int(minutes // 60)
    remaining = round(minutes % 60)
    return f"{hours}h {remaining}m"


def format_clock_time(minutes_from_now: float, now: Optional[datetime] = None) -> str:
    """Local ``HH:MM`` at which something ``minutes_from_now`` away will happen."""
    now = now or timezone.now()
    arrival = now + timedelta(minutes=round(minutes_from_now))
    if timezone.is_aware(arrival):
        arrival = timezone.localtime(arrival)
    return arrival.strftime("%H:%M")
