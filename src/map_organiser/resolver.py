"""Address resolution for single events.

For each event the resolver picks exactly one geocoding lookup, walking
the parent chain when the event itself carries no location:

1. coordinates of the event or its nearest ancestor that has some
   -> reverse lookup
2. otherwise the place text of the event or its nearest ancestor that
   has one -> search lookup
3. otherwise no lookup, no address

Coordinates win over text anywhere in the chain because reverse lookups
are far more precise than free-text search.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union

from .exceptions import GeocodeError
from .hierarchy import EventHierarchy
from .logging_config import get_logger
from .models import Coordinates, Event, ResolvedAddress

logger = get_logger(__name__)


class Geocoder(Protocol):
    """What the resolver needs from a geocoding client."""

    def reverse(self, lat: float, lon: float) -> Optional[ResolvedAddress]: ...

    def search(self, text: str) -> Optional[ResolvedAddress]: ...


@dataclass(frozen=True)
class Lookup:
    """The single geocoding call chosen for an event."""

    source_id: str
    query: Union[Coordinates, str]

    @property
    def operation(self) -> str:
        return "search" if isinstance(self.query, str) else "reverse"

    @property
    def key(self) -> tuple:
        return (self.operation, self.query)


class AddressResolver:
    """Resolves events to addresses, one geocoding call at most per event.

    With `dedupe=True`, answers are remembered for the lifetime of the
    resolver keyed by the lookup (coordinates or text), so sibling events
    sharing a parent's location cost one request. "No address" answers
    are remembered too; `GeocodeError` failures are not, and the next
    event needing that lookup tries again.
    """

    def __init__(self, geocoder: Geocoder, hierarchy: EventHierarchy, dedupe: bool = True):
        self.geocoder = geocoder
        self.hierarchy = hierarchy
        self.dedupe = dedupe
        self.lookups = 0
        self.failures = 0
        self.memo_hits = 0
        self._memo: dict[tuple, Optional[ResolvedAddress]] = {}

    def choose_lookup(self, event: Event) -> Optional[Lookup]:
        """Pick the lookup for `event` without calling the geocoder."""
        chain = list(self.hierarchy.lineage(event))

        for node in chain:
            coordinates = node.coordinates
            if coordinates is not None:
                return Lookup(source_id=node.id, query=coordinates)

        for node in chain:
            place = node.place_text
            if place is not None:
                return Lookup(source_id=node.id, query=place)

        return None

    def resolve(self, event: Event) -> Optional[ResolvedAddress]:
        """Return the resolved address of `event`, or None.

        Never raises `GeocodeError`: failed lookups are logged and count as
        "address unavailable".
        """
        lookup = self.choose_lookup(event)
        if lookup is None:
            logger.info(f"Event {event.id}: no coordinates or place in its chain")
            return None

        if lookup.source_id != event.id:
            logger.debug(f"Event {event.id}: using location of event {lookup.source_id}")

        if self.dedupe and lookup.key in self._memo:
            self.memo_hits += 1
            return self._memo[lookup.key]

        self.lookups += 1
        try:
            if isinstance(lookup.query, str):
                address = self.geocoder.search(lookup.query)
            else:
                lat, lon = lookup.query
                address = self.geocoder.reverse(lat, lon)
        except GeocodeError as e:
            self.failures += 1
            logger.warning(f"Event {event.id}: {e}")
            return None

        if self.dedupe:
            self._memo[lookup.key] = address
        return address
