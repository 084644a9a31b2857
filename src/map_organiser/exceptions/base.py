"""Base exception for map-organiser."""

from typing import Any, Mapping, Optional


class MapOrganiserError(Exception):
    """Base exception for map-organiser errors.

    `details` holds the request or value that failed (operation, query,
    ORIS method, config key, ...). Entries whose value is None are
    dropped, so callers can pass optional context unconditionally.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in (details or {}).items() if v is not None}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
