"""
Find taxis for a passenger journey.

Joins the route catalogue (scored by ``route_scorer``) with drivers assigned
to passing routes whose current location is close to the pickup. The result
explains every offer through its ``route_info`` so the UI can show *why* a
driver was suggested.
"""

import logging
from typing import List, Tuple

from common.utils import distance_km, calculate_fare
from drivers.models import DriverProfile
from locations.models import LocationSample
from routes.models import Route

from .results import (
    AvailableTaxi,
    DriverLocation,
    MatchingRoute,
    MatchResult,
    RouteInfo,
    SearchCriteria,
    StopMatch,
)
from .route_scorer import RouteScore, score_route

logger = logging.getLogger(__name__)

NO_ROUTES_MESSAGE = "No taxi routes found that pass near both your pickup location and destination"
DRIVER_LOCATION_ROLES = ("driver", "both")


def _round(value: float) -> float:
    return round(value, 2)


def _stop_match(stop, distance: float):
    if stop is None:
        return None
    return StopMatch(
        stop_id=stop.stop_id,
        name=stop.name,
        coordinates=(stop.latitude, stop.longitude),
        order=stop.order,
        distance=_round(distance),
    )


def _route_info(route: Route, route_score: RouteScore, displacement: float, fare: float) -> RouteInfo:
    return RouteInfo(
        route_id=route.route_id,
        route_name=route.name,
        taxi_association=route.taxi_association,
        fare=float(route.fare),
        estimated_duration=route.estimated_duration,
        start_proximity=_round(route_score.origin_proximity),
        end_proximity=_round(route_score.destination_proximity),
        total_score=_round(route_score.score),
        passenger_displacement=_round(displacement),
        calculated_fare=_round(fare),
        closest_start_stop=_stop_match(route_score.origin_stop, route_score.origin_proximity),
        closest_end_stop=_stop_match(route_score.destination_stop, route_score.destination_proximity),
    )


def _available_taxi(
    profile: DriverProfile,
    location: LocationSample,
    distance_to_origin: float,
    route: Route,
    route_info: RouteInfo,
) -> AvailableTaxi:
    taxi = getattr(profile, "taxi", None)
    user = profile.user
    return AvailableTaxi(
        driver_id=profile.id,
        user_id=user.id,
        name=user.display_name,
        phone_number=user.phone_number,
        vehicle_registration=taxi.license_plate if taxi else "Not available",
        vehicle_model=taxi.model if taxi else "Not available",
        vehicle_color=(taxi.color or "Not specified") if taxi else "Not specified",
        vehicle_year=taxi.year if taxi else None,
        is_available=taxi.is_available if taxi else True,
        number_of_rides_completed=profile.number_of_rides_completed,
        average_rating=profile.average_rating or 0.0,
        taxi_association=profile.taxi_association or route.taxi_association,
        current_location=DriverLocation(
            latitude=location.latitude,
            longitude=location.longitude,
            last_updated=location.updated_at.isoformat(),
        ),
        distance_to_origin=_round(distance_to_origin),
        route_info=route_info,
    )


def _score_active_routes(
    origin: Tuple[float, float],
    destination: Tuple[float, float],
    criteria: SearchCriteria,
) -> Tuple[int, List[Tuple[Route, RouteScore]]]:
    """Score every active route; return (routes checked, passing candidates)."""
    routes = list(Route.objects.active().prefetch_related("stops"))
    candidates = []
    for route in routes:
        route_score = score_route(route.scoring_stops(), origin, destination)
        if route_score.passes(criteria.max_origin_distance, criteria.max_destination_distance):
            candidates.append((route, route_score))
        else:
            logger.debug(
                "Route %s rejected (origin=%.3fkm destination=%.3fkm directional=%s)",
                route.route_id,
                route_score.origin_proximity,
                route_score.destination_proximity,
                route_score.is_directional,
            )
    return len(routes), candidates


def _drivers_near_origin(route: Route, origin: Tuple[float, float], max_taxi_distance: float):
    """Yield ``(profile, location, distance)`` for located drivers on ``route``."""
    profiles = list(DriverProfile.objects.on_route(route))
    if not profiles:
        return

    locations = {
        sample.user_id: sample
        for sample in LocationSample.objects.filter(
            user_id__in=[profile.user_id for profile in profiles],
            role__in=DRIVER_LOCATION_ROLES,
        )
    }

    for profile in profiles:
        location = locations.get(profile.user_id)
        if location is None:
            continue
        distance = distance_km(origin, location.coordinates)
        if distance <= max_taxi_distance:
            yield profile, location, distance


def _find_taxis(criteria: SearchCriteria) -> MatchResult:
    origin, destination = criteria.origin, criteria.destination

    routes_checked, candidates = _score_active_routes(origin, destination, criteria)
    if not candidates:
        return MatchResult(
            success=True,
            search_criteria=criteria,
            message=NO_ROUTES_MESSAGE,
            total_routes_checked=routes_checked,
        )

    displacement = distance_km(origin, destination)
    fare = calculate_fare(displacement)

    available_taxis: List[AvailableTaxi] = []
    matching_routes: List[MatchingRoute] = []

    for route, route_score in candidates:
        route_info = _route_info(route, route_score, displacement, fare)
        drivers_on_route = 0

        for profile, location, distance in _drivers_near_origin(route, origin, criteria.max_taxi_distance):
            available_taxis.append(_available_taxi(profile, location, distance, route, route_info))
            drivers_on_route += 1

        matching_routes.append(MatchingRoute(
            route_id=route.route_id,
            route_name=route.name,
            taxi_association=route.taxi_association,
            fare=float(route.fare),
            available_drivers=drivers_on_route,
            start_proximity=route_info.start_proximity,
            end_proximity=route_info.end_proximity,
            total_score=route_info.total_score,
            passenger_displacement=route_info.passenger_displacement,
            calculated_fare=route_info.calculated_fare,
        ))

    matching_routes.sort(key=lambda item: item.total_score)

    # Best route first; among equally good routes the closer driver wins
    available_taxis.sort(key=lambda taxi: (taxi.route_info.total_score, taxi.distance_to_origin))
    page = available_taxis[:criteria.max_results]

    if page:
        message = f"Found {len(page)} available taxis on {len(matching_routes)} matching routes"
    else:
        message = f"No taxis available right now on {len(matching_routes)} matching routes"

    logger.info(
        "Matched %d taxis (%d shown) on %d/%d routes",
        len(available_taxis), len(page), len(candidates), routes_checked,
    )

    return MatchResult(
        success=True,
        search_criteria=criteria,
        message=message,
        available_taxis=page,
        matching_routes=matching_routes,
        total_taxis_found=len(available_taxis),
        total_routes_checked=routes_checked,
        valid_routes_found=len(candidates),
    )


def find_taxis(
    origin: Tuple[float, float],
    destination: Tuple[float, float],
    max_origin_distance: float = 1.0,
    max_destination_distance: float = 1.0,
    max_taxi_distance: float = 2.0,
    max_results: int = 10,
) -> MatchResult:
    """
    Find taxis whose route serves the journey and who are near the pickup.

    Args:
        origin: Pickup ``(lat, lon)``
        destination: Drop-off ``(lat, lon)``
        max_origin_distance: Max km from pickup to the route's closest stop
        max_destination_distance: Max km from drop-off to the route's closest stop
        max_taxi_distance: Max km from pickup to the driver's current location
        max_results: Page size; ``total_taxis_found`` reports the full count

    Returns:
        MatchResult. Never raises: failures come back as ``success=False``.
    """
    criteria = SearchCriteria(
        origin=(float(origin[0]), float(origin[1])),
        destination=(float(destination[0]), float(destination[1])),
        max_origin_distance=max_origin_distance,
        max_destination_distance=max_destination_distance,
        max_taxi_distance=max_taxi_distance,
        max_results=max_results,
    )
    try:
        return _find_taxis(criteria)
    except Exception as exc:
        logger.exception("Error finding available taxis for %s -> %s", origin, destination)
        return MatchResult(
            success=False,
            search_criteria=criteria,
            message=f"Error finding available taxis: {exc}",
        )
