"""
Core ride lifecycle operations.

Every transition loads the ride, checks the actor and the current status,
then writes the new state inside one transaction. Notifying the other party
is best-effort: a failed notification never undoes a transition.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from common.utils.fares import calculate_fare
from common.utils.geo import distance_km
from drivers.models import DriverProfile
from rides.models import Ride
from services.matching import find_taxis
from services.notifications import send_ride_notification
from .exceptions import (
    DriverNotAvailableError,
    RideNotAuthorizedError,
    RideNotFoundError,
    RideStateError,
)

logger = logging.getLogger(__name__)

# Wider than the passenger-facing search so a driver picked from a
# slightly stale result still verifies.
REQUEST_VERIFY_SEARCH = {
    "max_origin_distance": 3.0,
    "max_destination_distance": 3.0,
    "max_taxi_distance": 5.0,
    "max_results": 50,
}


@dataclass
class RideTransitionResult:
    """Result object for ride operations."""
    ride_id: str
    message: str
    ride: Ride
    is_duplicate: bool = False


def _get_ride(ride_id: str) -> Ride:
    try:
        return Ride.objects.select_related("passenger", "driver").get(ride_id=ride_id)
    except Ride.DoesNotExist:
        raise RideNotFoundError("Ride not found")


def _notify(ride: Ride, event: str, actor_id: Optional[int] = None):
    try:
        with transaction.atomic():
            send_ride_notification(ride, event, actor_id=actor_id)
    except Exception:
        logger.exception("Failed to send %s notification for ride %s", event, ride.ride_id)


def _to_decimal(amount: float) -> Decimal:
    return Decimal(str(round(amount, 2)))


# ===================== Passenger Operations =====================

@transaction.atomic
def create_ride_request(
    passenger,
    driver_id: int,
    start: Tuple[float, float],
    end: Tuple[float, float],
    start_address: str = "",
    end_address: str = "",
) -> RideTransitionResult:
    """
    Request a ride from a specific driver found through taxi search.

    Args:
        passenger: User model instance (passenger)
        driver_id: User ID of the chosen driver
        start: Pickup ``(lat, lon)``
        end: Drop-off ``(lat, lon)``

    Returns:
        RideTransitionResult. An identical open request is returned as is,
        flagged ``is_duplicate``.

    Raises:
        DriverNotAvailableError: If the driver does not serve this journey
        RuntimeError: If the driver search itself failed
    """
    existing = Ride.objects.filter(
        passenger=passenger, driver_id=driver_id, status=Ride.REQUESTED,
    ).first()
    if existing:
        return RideTransitionResult(
            existing.ride_id, "You already have a pending request with this driver", existing,
            is_duplicate=True,
        )

    result = find_taxis(start, end, **REQUEST_VERIFY_SEARCH)
    if not result.success:
        logger.error("Driver verification failed for passenger %s: %s", passenger.id, result.message)
        raise RuntimeError(f"Failed to create ride request: {result.message}")

    match = next((taxi for taxi in result.available_taxis if taxi.user_id == driver_id), None)
    if match is None:
        raise DriverNotAvailableError("Driver is not available for this route or no matching route found")

    ride = Ride.objects.create(
        passenger=passenger,
        driver_id=driver_id,
        start_latitude=start[0],
        start_longitude=start[1],
        start_address=start_address,
        end_latitude=end[0],
        end_longitude=end[1],
        end_address=end_address,
        status=Ride.REQUESTED,
        estimated_fare=_to_decimal(match.route_info.calculated_fare),
        estimated_distance=match.route_info.passenger_displacement,
    )
    logger.info("Ride %s requested by %s from driver %s", ride.ride_id, passenger.id, driver_id)

    _notify(ride, "ride_request")

    return RideTransitionResult(ride.ride_id, "Ride request sent to driver", ride)


@transaction.atomic
def cancel_ride(ride_id: str, actor_id: int) -> RideTransitionResult:
    """Cancel by either party; the other party is told who cancelled."""
    ride = _get_ride(ride_id)

    if actor_id not in (ride.passenger_id, ride.driver_id):
        raise RideNotAuthorizedError("User is not authorized to cancel this ride")

    if ride.is_terminal:
        raise RideStateError("Ride can no longer be cancelled")

    ride.status = Ride.CANCELLED
    ride.cancelled_at = timezone.now()
    ride.save(update_fields=["status", "cancelled_at"])
    logger.info("Ride %s cancelled by %s", ride.ride_id, actor_id)

    _notify(ride, "ride_cancelled", actor_id=actor_id)

    return RideTransitionResult(ride.ride_id, "Ride cancelled successfully", ride)


@transaction.atomic
def start_ride(ride_id: str, actor_id: int) -> RideTransitionResult:
    ride = _get_ride(ride_id)

    if actor_id != ride.passenger_id:
        raise RideNotAuthorizedError("Only the passenger can start the ride")

    if ride.status != Ride.ACCEPTED:
        raise RideStateError("Ride is not ready to start")

    ride.status = Ride.IN_PROGRESS
    ride.started_at = timezone.now()
    ride.save(update_fields=["status", "started_at"])
    logger.info("Ride %s started", ride.ride_id)

    _notify(ride, "ride_started", actor_id=actor_id)

    return RideTransitionResult(ride.ride_id, "Ride started successfully", ride)


@transaction.atomic
def end_ride(ride_id: str, actor_id: int) -> RideTransitionResult:
    """
    Complete a ride.

    The final fare is the fare quoted at request time; rides without a quote
    are charged by the fare rule on the straight-line trip distance.
    """
    ride = _get_ride(ride_id)

    if actor_id != ride.passenger_id:
        raise RideNotAuthorizedError("Only the assigned passenger can end this ride")

    if ride.status not in (Ride.ACCEPTED, Ride.STARTED, Ride.IN_PROGRESS):
        raise RideStateError("Ride is not in progress or started")

    if ride.estimated_fare is not None:
        final_fare = ride.estimated_fare
    else:
        final_fare = _to_decimal(calculate_fare(distance_km(ride.start_location, ride.end_location)))

    ride.status = Ride.COMPLETED
    ride.completed_at = timezone.now()
    ride.final_fare = final_fare
    ride.save(update_fields=["status", "completed_at", "final_fare"])
    logger.info("Ride %s completed, fare %s", ride.ride_id, final_fare)

    if ride.driver_id:
        DriverProfile.objects.filter(user_id=ride.driver_id).update(
            number_of_rides_completed=F("number_of_rides_completed") + 1
        )

    _notify(ride, "ride_completed", actor_id=actor_id)

    return RideTransitionResult(ride.ride_id, "Ride completed successfully", ride)


# ===================== Driver Operations =====================

@transaction.atomic
def accept_ride(ride_id: str, actor_id: int) -> RideTransitionResult:
    """Accept a requested ride. Unassigned rides go to the first driver to accept."""
    ride = _get_ride(ride_id)

    if actor_id == ride.passenger_id:
        raise RideNotAuthorizedError("Only the assigned driver can accept this ride")

    if ride.driver_id is not None and ride.driver_id != actor_id:
        raise RideNotAuthorizedError("Only the assigned driver can accept this ride")

    if ride.status != Ride.REQUESTED:
        raise RideStateError("Ride is not available for acceptance")

    ride.driver_id = actor_id
    ride.status = Ride.ACCEPTED
    ride.accepted_at = timezone.now()
    ride.save(update_fields=["driver", "status", "accepted_at"])
    logger.info("Ride %s accepted by driver %s", ride.ride_id, actor_id)

    _notify(ride, "ride_accepted", actor_id=actor_id)

    return RideTransitionResult(ride.ride_id, "Ride accepted successfully", ride)


@transaction.atomic
def decline_ride(ride_id: str, actor_id: int) -> RideTransitionResult:
    ride = _get_ride(ride_id)

    if ride.driver_id != actor_id:
        raise RideNotAuthorizedError("Only the assigned driver can decline this ride")

    if ride.status not in (Ride.REQUESTED, Ride.ACCEPTED):
        raise RideStateError("Ride is not pending")

    ride.status = Ride.DECLINED
    ride.save(update_fields=["status"])
    logger.info("Ride %s declined by driver %s", ride.ride_id, actor_id)

    _notify(ride, "ride_declined", actor_id=actor_id)

    return RideTransitionResult(ride.ride_id, "Ride declined", ride)
