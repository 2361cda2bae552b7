"""
Ride management service - Core ride lifecycle operations.

This module handles:
    - Creating ride requests against a searched driver
    - Accepting/declining rides
    - Starting and ending rides
    - Cancelling rides
"""

from .ride_lifecycle import (
    RideTransitionResult,
    create_ride_request,
    accept_ride,
    decline_ride,
    cancel_ride,
    start_ride,
    end_ride,
)

from .exceptions import (
    RideLifecycleError,
    RideNotFoundError,
    RideNotAuthorizedError,
    RideStateError,
    DriverNotAvailableError,
)

__all__ = [
    # Lifecycle operations
    "RideTransitionResult",
    "create_ride_request",
    "accept_ride",
    "decline_ride",
    "cancel_ride",
    "start_ride",
    "end_ride",
    # Exceptions
    "RideLifecycleError",
    "RideNotFoundError",
    "RideNotAuthorizedError",
    "RideStateError",
    "DriverNotAvailableError",
]
