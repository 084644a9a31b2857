"""
Map Organiser - region and map indexes for orienteering events

Turns the events a competitor has entered in ORIS into a numbered event
list plus two indexes: by district (okres) and by map name. Event
locations come from Nominatim, queried at most once per second.
"""

__version__ = "0.1.0"
__author__ = "Tomáš Hula"

from .config import OrganiserConfig, load_config
from .indexer import Index, number_events
from .models import Event, EventLocation, ResolvedAddress
from .pipeline import OrganiserResult, organise

__all__ = [
    "organise",  # Main entry point
    "load_config",
    "OrganiserConfig",
    "OrganiserResult",
    "Event",
    "EventLocation",
    "ResolvedAddress",
    "Index",
    "number_events",
]
