class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class OutOfRangeError(DomainError):
    """Raised when a geofence is configured and the position lies outside it."""

    def __init__(self, message: str, *, distance_meters: float, radius_meters: float):
        super().__init__(message)
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class MalformedEventError(DomainError):
    """Raised when a stored attendance event cannot be summarized.

    Carries the offending record id so the data can be repaired.
    """

    def __init__(self, message: str, *, event_id=None):
        super().__init__(f"{message} (event_id={event_id!r})")
        self.event_id = event_id
