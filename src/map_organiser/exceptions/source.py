"""Event source exceptions: ORIS API access, missing users, empty input."""

from typing import Optional

from .base import MapOrganiserError


class EventSourceError(MapOrganiserError):
    """Raised when the ORIS API cannot be queried or returns garbage."""

    def __init__(self, method: str, reason: str):
        super().__init__(
            f"ORIS request {method} failed",
            details={"method": method, "reason": reason},
        )
        self.method = method
        self.reason = reason


class MissingUserError(MapOrganiserError):
    """Raised when a registration number does not resolve to an ORIS user."""

    def __init__(self, registration_number: str):
        super().__init__(
            f"User with registration number {registration_number} not found",
            details={"registration_number": registration_number},
        )
        self.registration_number = registration_number


class NoEventsError(MapOrganiserError):
    """Raised when there is nothing to index."""

    def __init__(self, reason: str, source: Optional[str] = None):
        super().__init__(
            f"No events to process: {reason}",
            details={"reason": reason, "source": source},
        )
        self.reason = reason
        self.source = source
