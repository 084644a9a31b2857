"""Region and place classification.

Pure functions over a resolved address (possibly None) and the event it
was resolved for. Both are total: every input yields a label or None,
and the index builder maps None to its sentinel labels.

Regions are districts ("okres Beroun" -> "Beroun"). Prague has no
district in OpenStreetMap's `municipality` field, so its city districts
("obvod Praha 5" -> "Praha 5") serve as regions and Prague events get
no place of their own.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .config import PRAGUE_CITY_NAME
from .hierarchy import EventHierarchy
from .models import Event, ResolvedAddress

DEFAULT_DISTRICT_PREFIXES = ("okres ", "obvod ")


def strip_district_prefix(
    value: Optional[str], prefixes: Iterable[str] = DEFAULT_DISTRICT_PREFIXES
) -> Optional[str]:
    """Remove a leading district marker; None for missing/blank results."""
    if value is None:
        return None
    text = value.strip()
    for prefix in prefixes:
        if text.lower().startswith(prefix.lower()):
            text = text[len(prefix):].strip()
            break
    return text or None


def is_capital(address: Optional[ResolvedAddress], capital_city_name: str = PRAGUE_CITY_NAME) -> bool:
    return address is not None and address.city == capital_city_name


def determine_region(
    address: Optional[ResolvedAddress],
    capital_city_name: str = PRAGUE_CITY_NAME,
    prefixes: Iterable[str] = DEFAULT_DISTRICT_PREFIXES,
) -> Optional[str]:
    """Return the region label for an address.

    Example:
        >>> determine_region(ResolvedAddress(municipality="okres Beroun"))
        'Beroun'
        >>> determine_region(ResolvedAddress(city="Hlavní město Praha", city_district="obvod Praha 5"))
        'Praha 5'
    """
    if address is None:
        return None

    if address.municipality is not None:
        return strip_district_prefix(address.municipality, prefixes)

    if is_capital(address, capital_city_name):
        return strip_district_prefix(address.city_district, prefixes)

    return None


def determine_place_name(
    event: Event,
    address: Optional[ResolvedAddress],
    hierarchy: Optional[EventHierarchy] = None,
    capital_city_name: str = PRAGUE_CITY_NAME,
) -> Optional[str]:
    """Return the place label for an event.

    Order: the event's own place text; nothing for capital addresses;
    the address's village, then town; then the same steps for the parent
    event with the same address (the address is not re-resolved).
    """
    lineage = hierarchy.lineage(event) if hierarchy is not None else iter((event,))

    for node in lineage:
        place = node.place_text
        if place is not None:
            return place

        if address is not None:
            if is_capital(address, capital_city_name):
                return None
            if address.village is not None:
                return address.village
            if address.town is not None:
                return address.town

    return None
