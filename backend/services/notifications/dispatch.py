"""
Record notifications and push them to the recipient.

``emit_notification`` is the debounced entry point used by the proximity
sweep; ``send_ride_notification`` renders the one-shot messages that ride
lifecycle transitions produce.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.utils import timezone

from notifications.models import Notification
from realtime.notifications import push_to_user

from .debouncer import NotificationDebouncer

logger = logging.getLogger(__name__)


def _push_payload(notification: Notification) -> Dict[str, Any]:
    return {
        "notification_id": notification.notification_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "priority": notification.priority,
        "ride_id": notification.ride_id,
        "created_at": notification.created_at.isoformat(),
    }


def record_notification(
    user_id: int,
    notification_type: str,
    ride_id: str,
    title: str,
    message: str,
    priority: str = "medium",
    metadata: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Notification:
    """
    Store a notification and hand it to the push transport.

    The push is best-effort; the stored row is what the inbox shows.
    """
    metadata = {"rideId": ride_id, **(metadata or {})}
    notification = Notification.objects.create(
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        priority=priority,
        ride_id=ride_id,
        metadata=metadata,
        created_at=now or timezone.now(),
    )

    try:
        pushed = push_to_user(user_id, _push_payload(notification))
    except Exception:
        logger.exception("Push failed for notification %s", notification.notification_id)
        pushed = False

    if pushed:
        notification.is_push = True
        notification.save(update_fields=["is_push"])

    return notification


def emit_notification(
    user_id: int,
    notification_type: str,
    ride_id: str,
    title: str,
    message: str,
    priority: str,
    metadata: Optional[Dict[str, Any]] = None,
    debouncer: Optional[NotificationDebouncer] = None,
    now: Optional[datetime] = None,
) -> Optional[Notification]:
    """
    Record a notification unless the same one went out within the window.

    Returns:
        The new Notification, or None if it was debounced
    """
    debouncer = debouncer or NotificationDebouncer()
    if not debouncer.allow(user_id, notification_type, ride_id, now=now):
        return None

    notification = record_notification(
        user_id, notification_type, ride_id, title, message,
        priority=priority, metadata=metadata, now=now,
    )
    logger.info("Sent %s to user %s for ride %s", notification_type, user_id, ride_id)
    return notification


# ---------------------- Ride Event Notifications ----------------------

def _format_fare(amount) -> str:
    if amount is None:
        return "R0.00"
    return f"R{float(amount):.2f}"


def send_ride_notification(ride, event: str, actor_id: Optional[int] = None) -> List[Notification]:
    """
    Notify the parties of a ride about a lifecycle event.

    Args:
        ride: Ride model instance (already in its new state)
        event: ride_request, ride_accepted, ride_declined, ride_started,
            ride_completed or ride_cancelled
        actor_id: Who caused the event; decides the recipient of
            ride_cancelled

    Returns:
        Notifications created
    """
    ride_id = ride.ride_id
    messages = []

    if event == "ride_request":
        if ride.driver_id:
            messages.append((
                ride.driver_id, "ride_request", "New Ride Request",
                f"New ride request from {ride.start_address} to {ride.end_address}",
                "high", {"passengerId": ride.passenger_id},
            ))

    elif event == "ride_accepted":
        messages.append((
            ride.passenger_id, "ride_accepted", "Ride Accepted",
            "Your ride has been accepted. Driver is on the way!",
            "high", {"driverId": ride.driver_id},
        ))

    elif event == "ride_declined":
        messages.append((
            ride.passenger_id, "ride_declined", "Ride Declined",
            "Your ride request was declined by the driver.",
            "high", {"driverId": ride.driver_id},
        ))

    elif event == "ride_started":
        messages.append((
            ride.passenger_id, "ride_started", "Ride Started",
            "Your ride has started. Enjoy your journey!",
            "medium", {},
        ))
        if ride.driver_id:
            messages.append((
                ride.driver_id, "ride_started", "Ride Started",
                "Your passenger has started the ride.",
                "medium", {},
            ))

    elif event == "ride_completed":
        amount = float(ride.final_fare) if ride.final_fare is not None else None
        messages.append((
            ride.passenger_id, "ride_completed", "Ride Completed",
            "Your ride has been completed. Thank you for riding with us!",
            "medium", {"amount": amount},
        ))
        if ride.driver_id:
            messages.append((
                ride.driver_id, "ride_completed", "Ride Completed",
                f"Ride completed successfully. Fare: {_format_fare(ride.final_fare)}",
                "medium", {"amount": amount},
            ))

    elif event == "ride_cancelled":
        cancelled_by_driver = actor_id is not None and actor_id == ride.driver_id
        if cancelled_by_driver:
            messages.append((
                ride.passenger_id, "ride_cancelled", "Ride Cancelled",
                "Your ride has been cancelled by the driver.",
                "high", {"driverId": ride.driver_id},
            ))
        elif ride.driver_id:
            messages.append((
                ride.driver_id, "ride_cancelled", "Ride Cancelled",
                "The ride has been cancelled by the passenger.",
                "high", {"passengerId": ride.passenger_id},
            ))

    else:
        raise ValueError(f"Unknown ride event: {event}")

    return [
        record_notification(user_id, notification_type, ride_id, title, message, priority, metadata)
        for user_id, notification_type, title, message, priority, metadata in messages
    ]
