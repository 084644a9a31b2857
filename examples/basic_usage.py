#!/usr/bin/env python3
"""
Example: Basic usage of Map Organiser as a Python library
"""

from map_organiser import Event, load_config, organise

events = [
    Event(id="1", name="Jarní Hořovice", latitude="49.836", longitude="13.903", map="Hřebeny"),
    Event(id="2", name="Zdický sprint", place="Zdice", map="Zdice centrum"),
    Event(id="3", name="Hořovice E2", parent_id="1", map="Hřebeny"),
]

# Queries nominatim.openstreetmap.org, one request per second
result = organise(events, load_config())

for group in result.region_index:
    print(group.label)
    for entry in group.entries:
        print(f"  {entry.label}: {', '.join(str(n) for n in entry.numbers)}")

print(f"{result.event_count} events, {result.geocode_calls} geocoding requests")
