"""
Data model (Event, ResolvedAddress, EventLocation)
==================================================

Events come from the ORIS API (or an offline JSON dump) and are kept
immutable (`frozen=True`) so that:
- the hierarchy, resolver and index builder can share them freely, and
- derived values (addresses, regions, places) live next to events rather
  than being written into them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional, Tuple

Coordinates = Tuple[float, float]


def _clean(value: Any) -> Optional[str]:
    """Return a stripped string, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # ORIS stores "0" for events without a GPS position
    if number == 0.0 or number != number:
        return None
    return number


@dataclass(frozen=True)
class Event:
    """One event as supplied by the event source.

    `latitude` and `longitude` stay the strings the source sent; use
    `coordinates` to get usable numbers.
    """

    id: str
    name: str = ""
    parent_id: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    place: Optional[str] = None
    date: Optional[str] = None
    map: Optional[str] = None
    discipline: Optional[str] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        """(lat, lon) when both parse to non-zero numbers, else None."""
        lat = _parse_coordinate(self.latitude)
        lon = _parse_coordinate(self.longitude)
        if lat is None or lon is None:
            return None
        return lat, lon

    @property
    def place_text(self) -> Optional[str]:
        """Organizer-entered place, None when blank."""
        return _clean(self.place)

    @classmethod
    def from_oris(cls, data: Mapping[str, Any]) -> "Event":
        """Build an event from an ORIS ``getEvent`` payload."""
        discipline = data.get("Discipline")
        if isinstance(discipline, Mapping):
            discipline = discipline.get("ShortName")
        parent_id = _clean(data.get("ParentID"))
        # ORIS uses "0" for "no parent"
        if parent_id == "0":
            parent_id = None
        return cls(
            id=str(data["ID"]),
            name=_clean(data.get("Name")) or "",
            parent_id=parent_id,
            latitude=_clean(data.get("GPSLat")),
            longitude=_clean(data.get("GPSLon")),
            place=_clean(data.get("Place")),
            date=_clean(data.get("Date")),
            map=_clean(data.get("Map")),
            discipline=_clean(discipline),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an event from the snake_case form written by `to_dict`."""
        return cls(
            id=str(data["id"]),
            name=_clean(data.get("name")) or "",
            parent_id=_clean(data.get("parent_id")),
            latitude=_clean(data.get("latitude")),
            longitude=_clean(data.get("longitude")),
            place=_clean(data.get("place")),
            date=_clean(data.get("date")),
            map=_clean(data.get("map")),
            discipline=_clean(data.get("discipline")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ResolvedAddress:
    """The parts of a Nominatim address the classifier looks at."""

    municipality: Optional[str] = None
    city_district: Optional[str] = None
    city: Optional[str] = None
    village: Optional[str] = None
    town: Optional[str] = None

    @classmethod
    def from_json(cls, address: Mapping[str, Any]) -> "ResolvedAddress":
        """Build from the ``address`` object of a Nominatim response.

        Unknown keys are ignored; non-string values count as missing.
        """

        def text(key: str) -> Optional[str]:
            value = address.get(key)
            return _clean(value) if isinstance(value, str) else None

        return cls(
            municipality=text("municipality"),
            city_district=text("city_district"),
            city=text("city"),
            village=text("village"),
            town=text("town"),
        )

    def is_empty(self) -> bool:
        return not any(asdict(self).values())


@dataclass(frozen=True)
class EventLocation:
    """Everything the index builder needs to know about one event."""

    event: Event
    number: int
    address: Optional[ResolvedAddress]
    region: Optional[str]
    place: Optional[str]
