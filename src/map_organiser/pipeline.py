"""Organiser pipeline: events -> numbering -> addresses -> labels -> indexes.

Example:
    >>> from map_organiser import load_config, organise
    >>> result = organise(events, load_config())
    >>> result.region_index.to_dict()
    {'Beroun': {'Hořovice': [1, 3], 'Zdice': [2]}, ...}

Resolution is strictly sequential: every event goes through the same
rate-limited geocode client, one after another. The indexes are built
only after every event is resolved, so an interrupted run produces
nothing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Optional

from .classifier import determine_place_name, determine_region
from .collation import Collator, LocaleCollator
from .config import OrganiserConfig
from .exceptions import NoEventsError
from .geocode import GeocodeClient
from .hierarchy import EventHierarchy
from .indexer import EventNumbering, Index, build_map_index, build_region_index, number_events
from .logging_config import get_logger
from .models import Event, EventLocation
from .resolver import AddressResolver, Geocoder

logger = get_logger(__name__)

# Called with (events done, events total, event just resolved)
ProgressCallback = Optional[Callable[[int, int, Event], None]]


@dataclass(frozen=True)
class OrganiserResult:
    """Everything renderers need from one run."""

    numbering: EventNumbering
    locations: tuple[EventLocation, ...]
    region_index: Index
    map_index: Index
    geocode_calls: int
    failed_lookups: int

    @property
    def event_count(self) -> int:
        return len(self.numbering)

    @property
    def unresolved(self) -> tuple[EventLocation, ...]:
        """Locations that ended up without a region."""
        return tuple(loc for loc in self.locations if loc.region is None)


def locate_events(
    events: Sequence[Event],
    numbering: EventNumbering,
    resolver: AddressResolver,
    config: OrganiserConfig,
    on_progress: ProgressCallback = None,
) -> tuple[EventLocation, ...]:
    """Resolve and classify every event, in supplied order."""
    hierarchy = resolver.hierarchy
    locations = []
    total = len(events)

    for done, event in enumerate(events, 1):
        address = resolver.resolve(event)
        region = determine_region(address, config.capital_city_name, config.district_prefixes)
        place = determine_place_name(event, address, hierarchy, config.capital_city_name)
        locations.append(
            EventLocation(
                event=event,
                number=numbering.number_of(event),
                address=address,
                region=region,
                place=place,
            )
        )
        logger.debug(f"Event {event.id} ({event.name}): region={region!r}, place={place!r}")
        if on_progress is not None:
            on_progress(done, total, event)

    return tuple(locations)


def organise(
    events: Sequence[Event],
    config: OrganiserConfig,
    geocoder: Optional[Geocoder] = None,
    collator: Optional[Collator] = None,
    on_progress: ProgressCallback = None,
) -> OrganiserResult:
    """Number, locate and index the given events.

    Args:
        events: Events to index, already filtered, in grid order
        config: Run configuration
        geocoder: Geocoding client; a `GeocodeClient` for `config` by default
        collator: Label ordering; `LocaleCollator(config.collation_locale)`
            by default
        on_progress: Optional per-event progress callback

    Raises:
        NoEventsError: If `events` is empty
        ValueError: If two events share an id
    """
    if not events:
        raise NoEventsError("event list is empty")

    numbering = number_events(events)
    hierarchy = EventHierarchy(events)
    collator = collator or LocaleCollator(config.collation_locale)

    owned_client: Optional[GeocodeClient] = None
    if geocoder is None:
        owned_client = GeocodeClient(config)
        geocoder = owned_client

    resolver = AddressResolver(geocoder, hierarchy, dedupe=config.dedupe_lookups)
    try:
        logger.info(f"Locating {len(events)} events")
        locations = locate_events(events, numbering, resolver, config, on_progress)
    finally:
        if owned_client is not None:
            owned_client.close()

    region_index = build_region_index(
        locations, collator, config.unknown_region_label, config.unknown_place_label
    )
    map_index = build_map_index(
        locations, collator, config.unknown_map_label, config.unknown_place_label
    )

    logger.info(
        f"Indexed {len(events)} events: {len(region_index)} regions, {len(map_index)} maps, "
        f"{resolver.lookups} geocode lookups ({resolver.failures} failed, "
        f"{resolver.memo_hits} reused)"
    )

    return OrganiserResult(
        numbering=numbering,
        locations=locations,
        region_index=region_index,
        map_index=map_index,
        geocode_calls=resolver.lookups,
        failed_lookups=resolver.failures,
    )
