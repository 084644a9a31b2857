"""Geocoding exceptions."""

from .base import MapOrganiserError


class GeocodeError(MapOrganiserError):
    """Raised when a geocoding request fails.

    Covers transport failures, non-2xx responses and payloads that are not
    the JSON shape Nominatim documents. The address resolver recovers from
    this error; it never aborts a run.
    """

    def __init__(self, operation: str, query: str, reason: str):
        super().__init__(
            f"Geocoding {operation} failed for '{query}'",
            details={"operation": operation, "query": query, "reason": reason},
        )
        self.operation = operation
        self.query = query
        self.reason = reason
