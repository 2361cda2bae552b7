"""
Directional scoring of a fixed route against a passenger's journey.

A route is useful to a rider only if it passes near the pickup, passes near
the drop-off, and reaches the drop-off stop *after* the pickup stop.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from common.utils import distance_km

ORIGIN_WEIGHT = 0.6
DESTINATION_WEIGHT = 0.4


@dataclass
class RouteScore:
    score: float
    origin_proximity: float
    destination_proximity: float
    origin_stop: Optional[object]
    destination_stop: Optional[object]
    is_directional: bool

    def passes(self, max_origin_distance: float, max_destination_distance: float) -> bool:
        """True if this route is a matching candidate for the given limits."""
        return (
            self.is_directional
            and self.origin_proximity <= max_origin_distance
            and self.destination_proximity <= max_destination_distance
        )


def _stop_coordinates(stop) -> Tuple[float, float]:
    return (stop.latitude, stop.longitude)


def find_closest_stop(stops: Sequence, point: Tuple[float, float]):
    """Return ``(stop, distance_km)`` for the stop nearest ``point``."""
    closest = None
    min_distance = math.inf
    for stop in stops:
        distance = distance_km(point, _stop_coordinates(stop))
        if distance < min_distance:
            min_distance = distance
            closest = stop
    return closest, min_distance


def score_route(
    stops: Sequence,
    origin: Tuple[float, float],
    destination: Tuple[float, float],
) -> RouteScore:
    """
    Score a route's ordered stop list for an origin/destination pair.

    Args:
        stops: Stops with ``latitude``, ``longitude`` and integer ``order``
        origin: Pickup ``(lat, lon)``
        destination: Drop-off ``(lat, lon)``

    Returns:
        RouteScore; lower ``score`` is better. A route without stops scores
        ``inf`` and is never a candidate.
    """
    if not stops:
        return RouteScore(
            score=math.inf,
            origin_proximity=math.inf,
            destination_proximity=math.inf,
            origin_stop=None,
            destination_stop=None,
            is_directional=False,
        )

    origin_stop, origin_proximity = find_closest_stop(stops, origin)
    destination_stop, destination_proximity = find_closest_stop(stops, destination)

    # Same stop for both ends is a zero-length direction
    is_directional = destination_stop.order > origin_stop.order

    return RouteScore(
        score=ORIGIN_WEIGHT * origin_proximity + DESTINATION_WEIGHT * destination_proximity,
        origin_proximity=origin_proximity,
        destination_proximity=destination_proximity,
        origin_stop=origin_stop,
        destination_stop=destination_stop,
        is_directional=is_directional,
    )
