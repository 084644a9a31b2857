"""
Indexes (region -> place -> event numbers, map -> place -> event numbers)
=========================================================================

Every event gets a 1-based number from the order the events were
supplied in. The QR-code grid prints events in that order and both
indexes refer to events only by number, so the numbering is computed
once (`number_events`) and handed to everything else.

An index is two levels of labels over sorted number lists:

    Beroun
        Hořovice   1, 3
        Zdice      2
    Neznámý okres
        Neznámé místo   4, 5

Missing labels become sentinel labels, never missing keys. Labels are
ordered with an injected collator; numbers ascend numerically.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from .collation import Collator
from .models import Event, EventLocation


class EventNumbering:
    """Bijection event id <-> 1-based number."""

    def __init__(self, ids: Iterable[str]):
        self.ids: tuple[str, ...] = tuple(ids)
        self._numbers = {event_id: i for i, event_id in enumerate(self.ids, 1)}

    def __len__(self) -> int:
        return len(self.ids)

    def number_of(self, event: Event) -> int:
        """Return the event's number; KeyError for events outside the run."""
        return self._numbers[event.id]

    def event_id(self, number: int) -> str:
        if number < 1:
            raise IndexError(f"event numbers start at 1, got {number}")
        return self.ids[number - 1]

    def as_dict(self) -> dict[str, int]:
        return dict(self._numbers)


def number_events(events: Sequence[Event]) -> EventNumbering:
    """Number events in the order given, starting at 1.

    Raises:
        ValueError: If two events share an id
    """
    counts = Counter(event.id for event in events)
    duplicates = sorted(event_id for event_id, count in counts.items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate event ids: {', '.join(duplicates)}")
    return EventNumbering(event.id for event in events)


@dataclass(frozen=True)
class IndexEntry:
    """Inner level: one label and its event numbers."""

    label: str
    numbers: tuple[int, ...]


@dataclass(frozen=True)
class IndexGroup:
    """Outer level: one label and its entries."""

    label: str
    entries: tuple[IndexEntry, ...]

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(sorted(n for entry in self.entries for n in entry.numbers))


@dataclass(frozen=True)
class Index:
    """An ordered, immutable two-level index."""

    groups: tuple[IndexGroup, ...]

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def labels(self) -> list[str]:
        return [group.label for group in self.groups]

    def group(self, label: str) -> Optional[IndexGroup]:
        for group in self.groups:
            if group.label == label:
                return group
        return None

    def to_dict(self) -> dict[str, dict[str, list[int]]]:
        """Nested plain data for renderers; dict order is index order."""
        return {
            group.label: {entry.label: list(entry.numbers) for entry in group.entries}
            for group in self.groups
        }


def _label(value: Optional[str], sentinel: str) -> str:
    if value is None or not value.strip():
        return sentinel
    return value.strip()


def build_index(
    locations: Iterable[EventLocation],
    outer: Callable[[EventLocation], Optional[str]],
    inner: Callable[[EventLocation], Optional[str]],
    collator: Collator,
    unknown_outer: str,
    unknown_inner: str,
) -> Index:
    """Group locations by `outer` then `inner` label and order everything.

    Labels that differ only in case share one bucket, shown with the
    spelling of its lowest-numbered event.

    Args:
        locations: One entry per numbered event
        outer: Outer label of a location (None -> `unknown_outer`)
        inner: Inner label of a location (None -> `unknown_inner`)
        collator: Ordering of labels at both levels
        unknown_outer: Sentinel for missing outer labels
        unknown_inner: Sentinel for missing inner labels
    """
    # casefolded outer -> casefolded inner -> numbers, plus the shown spellings
    buckets: dict[str, dict[str, list[int]]] = {}
    spellings: dict[str, str] = {}
    inner_spellings: dict[tuple[str, str], str] = {}

    for location in sorted(locations, key=lambda loc: loc.number):
        outer_label = _label(outer(location), unknown_outer)
        inner_label = _label(inner(location), unknown_inner)
        outer_key, inner_key = outer_label.casefold(), inner_label.casefold()
        spellings.setdefault(outer_key, outer_label)
        inner_spellings.setdefault((outer_key, inner_key), inner_label)
        buckets.setdefault(outer_key, {}).setdefault(inner_key, []).append(location.number)

    groups = []
    for outer_key in sorted(buckets, key=lambda k: collator.key(spellings[k])):
        places = buckets[outer_key]
        entries = tuple(
            IndexEntry(label=inner_spellings[outer_key, inner_key], numbers=tuple(places[inner_key]))
            for inner_key in sorted(
                places, key=lambda k: collator.key(inner_spellings[outer_key, k])
            )
        )
        groups.append(IndexGroup(label=spellings[outer_key], entries=entries))

    return Index(groups=tuple(groups))


def build_region_index(
    locations: Iterable[EventLocation],
    collator: Collator,
    unknown_region: str,
    unknown_place: str,
) -> Index:
    """Region -> place -> event numbers."""
    return build_index(
        locations,
        outer=lambda loc: loc.region,
        inner=lambda loc: loc.place,
        collator=collator,
        unknown_outer=unknown_region,
        unknown_inner=unknown_place,
    )


def build_map_index(
    locations: Iterable[EventLocation],
    collator: Collator,
    unknown_map: str,
    unknown_place: str,
) -> Index:
    """Map name -> place -> event numbers."""
    return build_index(
        locations,
        outer=lambda loc: loc.event.map,
        inner=lambda loc: loc.place,
        collator=collator,
        unknown_outer=unknown_map,
        unknown_inner=unknown_place,
    )
