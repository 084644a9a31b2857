"""Parent/child view over a flat event collection.

ORIS models multi-stage events as a forest: a race category or stage
points at its umbrella event through `parent_id`. Children often leave
their location blank and rely on the parent's.

Nothing validates that the `parent_id` links are acyclic, so walking
the chain goes through `lineage`, which stops at the first repeated id.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from .logging_config import get_logger
from .models import Event

logger = get_logger(__name__)


class EventHierarchy:
    """Read-only id -> event lookup over the in-scope events."""

    def __init__(self, events: Iterable[Event]):
        self._by_id: dict[str, Event] = {}
        for event in events:
            # First occurrence wins, matching the order events were supplied in
            self._by_id.setdefault(event.id, event)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._by_id

    def get(self, event_id: Optional[str]) -> Optional[Event]:
        if event_id is None:
            return None
        return self._by_id.get(event_id)

    def find_parent(self, event: Event) -> Optional[Event]:
        """Return the parent event, or None.

        A missing `parent_id` or one that points outside the collection
        ends the chain; neither is an error.
        """
        if event.parent_id is None:
            return None
        parent = self._by_id.get(event.parent_id)
        if parent is None:
            logger.debug(f"Event {event.id}: parent {event.parent_id} not in scope")
        return parent

    def lineage(self, event: Event) -> Iterator[Event]:
        """Yield the event, then its ancestors nearest-first.

        Stops when the chain ends or revisits an event already yielded.
        """
        seen: set[str] = set()
        current: Optional[Event] = event
        while current is not None:
            if current.id in seen:
                logger.warning(
                    f"Event {event.id}: parent chain loops back to {current.id}, "
                    "ignoring the rest of the chain"
                )
                return
            seen.add(current.id)
            yield current
            current = self.find_parent(current)
