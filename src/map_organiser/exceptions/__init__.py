"""Exception hierarchy for Map Organiser."""

from .base import MapOrganiserError
from .config import ConfigurationError, InvalidConfigError
from .geocode import GeocodeError
from .source import EventSourceError, MissingUserError, NoEventsError

__all__ = [
    "MapOrganiserError",
    "ConfigurationError",
    "InvalidConfigError",
    "GeocodeError",
    "EventSourceError",
    "MissingUserError",
    "NoEventsError",
]
