"""
Route and taxi matching service.

This module handles:
    - Directional scoring of fixed routes against a journey
    - Joining passing routes with nearby assigned drivers
    - Ranking and paging the candidate list
"""

from .route_scorer import RouteScore, score_route, find_closest_stop
from .taxi_matcher import find_taxis, NO_ROUTES_MESSAGE
from .results import MatchResult, AvailableTaxi, RouteInfo

__all__ = [
    "RouteScore",
    "score_route",
    "find_closest_stop",
    "find_taxis",
    "NO_ROUTES_MESSAGE",
    "MatchResult",
    "AvailableTaxi",
    "RouteInfo",
]
