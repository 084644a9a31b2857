"""
Event sources: the ORIS API and offline JSON files.

ORIS (https://oris.orientacnisporty.cz/API/) answers every method with an
envelope::

    {"Method": "getEvent", "Format": "json", "Status": "OK", "Data": {...}}

Downloading a user's events takes one `getUser`, one
`getUserEventEntries` and one `getEvent` per entry. The `getEvent` calls
are independent and run on a thread pool; ORIS has no rate policy like
Nominatim's.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Optional

import requests

from .config import OrganiserConfig
from .exceptions import EventSourceError, MissingUserError, NoEventsError
from .logging_config import get_logger
from .models import Event

logger = get_logger(__name__)


class OrisClient:
    """Minimal client for the ORIS JSON API."""

    def __init__(self, config: OrganiserConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self._headers = {"User-Agent": config.user_agent}

    def _call(self, method: str, **params: Any) -> Any:
        query = {"format": "json", "method": method, **params}
        try:
            response = self.session.get(
                self.config.oris_url,
                params=query,
                headers=self._headers,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise EventSourceError(method, str(e)) from e
        except ValueError as e:
            raise EventSourceError(method, f"malformed JSON: {e}") from e

        if not isinstance(payload, dict):
            raise EventSourceError(method, "expected a JSON object")
        status = payload.get("Status")
        if status not in (None, "OK"):
            raise EventSourceError(method, f"status {status}")
        return payload.get("Data")

    def get_user(self, registration_number: str) -> Optional[dict[str, Any]]:
        """Return the user record for a registration number, or None."""
        data = self._call("getUser", rgnum=registration_number)
        # Unknown users come back as an empty list or null
        if not isinstance(data, dict) or not data.get("ID"):
            return None
        return data

    def get_user_event_entries(self, user_id: str) -> list[dict[str, Any]]:
        data = self._call("getUserEventEntries", userid=user_id)
        if not data:
            return []
        if not isinstance(data, dict):
            raise EventSourceError("getUserEventEntries", "expected an object of entries")
        return [entry for entry in data.values() if isinstance(entry, dict)]

    def get_event(self, event_id: str) -> Event:
        data = self._call("getEvent", id=event_id)
        if not isinstance(data, dict) or "ID" not in data:
            raise EventSourceError("getEvent", f"event {event_id} has no data")
        return Event.from_oris(data)

    def fetch_user_events(self, registration_number: str) -> list[Event]:
        """Download every event the user has entered, in entry order.

        Raises:
            MissingUserError: If the registration number is unknown
            EventSourceError: If any request fails
        """
        user = self.get_user(registration_number)
        if user is None:
            raise MissingUserError(registration_number)

        entries = self.get_user_event_entries(str(user["ID"]))
        event_ids = [str(entry["EventID"]) for entry in entries if entry.get("EventID")]
        logger.info(f"User {registration_number}: {len(event_ids)} event entries")

        with ThreadPoolExecutor(max_workers=self.config.fetch_workers) as executor:
            return list(executor.map(self.get_event, event_ids))

    def close(self) -> None:
        self.session.close()


def load_events_json(path: Path) -> list[Event]:
    """Load events from a JSON file.

    The file holds a list of events, either as written by `Event.to_dict`
    or as raw ORIS `getEvent` payloads.

    Raises:
        EventSourceError: If the file is unreadable or not a list of objects
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise EventSourceError("load", f"{path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise EventSourceError("load", f"{path}: expected a JSON list of objects")

    try:
        return [Event.from_oris(item) if "ID" in item else Event.from_dict(item) for item in data]
    except KeyError as e:
        raise EventSourceError("load", f"{path}: event without {e}") from e


def filter_events(events: Iterable[Event], excluded_disciplines: Sequence[str]) -> list[Event]:
    """Drop events whose discipline is in `excluded_disciplines`.

    Raises:
        NoEventsError: If nothing is left
    """
    excluded = set(excluded_disciplines)
    events = list(events)
    kept = [event for event in events if event.discipline not in excluded]
    if len(kept) < len(events):
        logger.info(f"Dropped {len(events) - len(kept)} events of disciplines {sorted(excluded)}")
    if not kept:
        raise NoEventsError("no events left after filtering disciplines")
    return kept
