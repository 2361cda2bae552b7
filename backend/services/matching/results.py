"""Typed results for taxi matching."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class StopMatch:
    """Closest stop on a route to a query point."""
    stop_id: str
    name: str
    coordinates: Tuple[float, float]
    order: int
    distance: float


@dataclass
class RouteInfo:
    """Why a driver was offered: the route-match facts."""
    route_id: str
    route_name: str
    taxi_association: str
    fare: float
    estimated_duration: int
    start_proximity: float
    end_proximity: float
    total_score: float
    passenger_displacement: float
    calculated_fare: float
    closest_start_stop: Optional[StopMatch]
    closest_end_stop: Optional[StopMatch]


@dataclass
class DriverLocation:
    latitude: float
    longitude: float
    last_updated: str


@dataclass
class AvailableTaxi:
    driver_id: int
    user_id: int
    name: str
    phone_number: str
    vehicle_registration: str
    vehicle_model: str
    vehicle_color: str
    vehicle_year: Optional[int]
    is_available: bool
    number_of_rides_completed: int
    average_rating: float
    taxi_association: str
    current_location: DriverLocation
    distance_to_origin: float
    route_info: RouteInfo


@dataclass
class MatchingRoute:
    route_id: str
    route_name: str
    taxi_association: str
    fare: float
    available_drivers: int
    start_proximity: float
    end_proximity: float
    total_score: float
    passenger_displacement: float
    calculated_fare: float


@dataclass
class SearchCriteria:
    origin: Tuple[float, float]
    destination: Tuple[float, float]
    max_origin_distance: float
    max_destination_distance: float
    max_taxi_distance: float
    max_results: int


@dataclass
class MatchResult:
    success: bool
    search_criteria: SearchCriteria
    message: str
    available_taxis: List[AvailableTaxi] = field(default_factory=list)
    matching_routes: List[MatchingRoute] = field(default_factory=list)
    total_taxis_found: int = 0
    total_routes_checked: int = 0
    valid_routes_found: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
