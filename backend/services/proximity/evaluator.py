"""
Proximity evaluation for a single ride.

Classifies the driver-passenger distance into a band and emits the matching
passenger alert, plus the driver alert when an in-progress passenger has
reached the drop-off.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from django.conf import settings

from common.utils.geo import distance_km, eta_minutes, format_clock_time, format_distance
from locations.models import LocationSample
from rides.models import Ride
from services.notifications import NotificationDebouncer, emit_notification

logger = logging.getLogger(__name__)

ARRIVED = "arrived"
NEAR = "near"
APPROACHING = "approaching"
FAR = "far"

# Upper bounds in km, checked in order
BAND_THRESHOLDS = (
    (ARRIVED, 0.1),
    (NEAR, 1.0),
    (APPROACHING, 3.0),
)
AT_STOP_KM = 0.1

BAND_ALERTS = {
    APPROACHING: ("driver_approaching", "Driver Approaching", "high"),
    NEAR: ("driver_nearby", "Driver Nearby", "high"),
    ARRIVED: ("driver_arrived", "Driver Arrived", "urgent"),
}


def classify_band(distance: float) -> str:
    for band, limit in BAND_THRESHOLDS:
        if distance <= limit:
            return band
    return FAR


@dataclass
class ProximityReport:
    ride_id: str
    evaluated: bool
    skipped_reason: str = ""
    distance: Optional[float] = None
    band: Optional[str] = None
    eta_minutes: Optional[float] = None
    passenger_at_stop: bool = False
    notifications_sent: List[str] = field(default_factory=list)


def _band_message(band: str, distance: float, eta: float, now: Optional[datetime]) -> str:
    arrival = format_clock_time(eta, now=now)
    if band == ARRIVED:
        return f"Your driver has arrived at your pickup location ({arrival})."
    if band == NEAR:
        return f"Your driver is {format_distance(distance)} away and will arrive at about {arrival}."
    return f"Your driver is approaching, {format_distance(distance)} away. Expected arrival: {arrival}."


def evaluate_proximity(
    ride: Ride,
    debouncer: Optional[NotificationDebouncer] = None,
    now: Optional[datetime] = None,
) -> ProximityReport:
    """
    Evaluate one monitored ride and emit any due proximity alerts.

    Args:
        ride: Ride in ``accepted`` or ``in_progress``
        debouncer: Shared debouncer; a default one is built if omitted
        now: Clock override for the debounce window and ETA display

    Returns:
        ProximityReport. Missing inputs produce ``evaluated=False``.
    """
    if ride.status not in Ride.MONITORED_STATUSES:
        return ProximityReport(ride.ride_id, False, skipped_reason=f"status is {ride.status}")

    if not ride.driver_id:
        logger.debug("Ride %s has no driver, skipping proximity", ride.ride_id)
        return ProximityReport(ride.ride_id, False, skipped_reason="no driver assigned")

    driver_location = LocationSample.objects.latest_for(ride.driver_id)
    passenger_location = LocationSample.objects.latest_for(ride.passenger_id)
    if driver_location is None or passenger_location is None:
        logger.debug("Ride %s is missing a location sample, skipping proximity", ride.ride_id)
        return ProximityReport(ride.ride_id, False, skipped_reason="location unavailable")

    debouncer = debouncer or NotificationDebouncer()
    distance = distance_km(driver_location.coordinates, passenger_location.coordinates)
    band = classify_band(distance)
    eta = eta_minutes(distance, settings.AVERAGE_SPEED_KMH)

    report = ProximityReport(
        ride_id=ride.ride_id,
        evaluated=True,
        distance=round(distance, 3),
        band=band,
        eta_minutes=round(eta, 1),
    )

    alert = BAND_ALERTS.get(band)
    if alert is not None:
        notification_type, title, priority = alert
        sent = emit_notification(
            ride.passenger_id,
            notification_type,
            ride.ride_id,
            title,
            _band_message(band, distance, eta, now),
            priority,
            metadata={"distance": report.distance, "eta": report.eta_minutes},
            debouncer=debouncer,
            now=now,
        )
        if sent is not None:
            report.notifications_sent.append(notification_type)

    if ride.status == Ride.IN_PROGRESS:
        to_destination = distance_km(passenger_location.coordinates, ride.end_location)
        report.passenger_at_stop = to_destination <= AT_STOP_KM
        if report.passenger_at_stop:
            sent = emit_notification(
                ride.driver_id,
                "passenger_at_stop",
                ride.ride_id,
                "Passenger At Stop",
                "Your passenger has reached their drop-off stop.",
                "medium",
                metadata={"distance": round(to_destination, 3)},
                debouncer=debouncer,
                now=now,
            )
            if sent is not None:
                report.notifications_sent.append("passenger_at_stop")

    logger.debug("Ride %s: %.3f km (%s)", ride.ride_id, distance, band)
    return report


def evaluate_ride_proximity(
    ride_id: str,
    debouncer: Optional[NotificationDebouncer] = None,
    now: Optional[datetime] = None,
) -> ProximityReport:
    """Look up a ride by id and evaluate it. Raises ``Ride.DoesNotExist`` for unknown ids."""
    ride = Ride.objects.get(ride_id=ride_id)
    return evaluate_proximity(ride, debouncer=debouncer, now=now)
