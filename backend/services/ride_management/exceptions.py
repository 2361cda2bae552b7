"""Custom exceptions for ride management."""


class RideLifecycleError(Exception):
    """Base class for rejected ride operations. ``str(exc)`` is user-facing."""
    pass


class RideNotFoundError(RideLifecycleError):
    """Raised when a ride cannot be found."""
    pass


class RideNotAuthorizedError(RideLifecycleError):
    """Raised when the acting user plays the wrong part in the ride."""
    pass


class RideStateError(RideLifecycleError):
    """Raised when a ride is not in a state that allows the operation."""
    pass


class DriverNotAvailableError(RideLifecycleError):
    """Raised when the requested driver does not serve the journey."""
    pass
