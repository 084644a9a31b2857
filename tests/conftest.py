"""Shared test fixtures for Map Organiser tests."""

from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from map_organiser.config import OrganiserConfig
from map_organiser.exceptions import GeocodeError
from map_organiser.models import Event, ResolvedAddress
from map_organiser.ratelimit import RateLimiter

PRAGUE = "Hlavní město Praha"


class FakeClock:
    """Monotonic clock whose sleep just moves time forward."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGeocoder:
    """Geocoder answering from dicts and recording every call."""

    def __init__(
        self,
        reverse: Optional[dict[tuple[float, float], Any]] = None,
        search: Optional[dict[str, Any]] = None,
    ):
        self.reverse_answers = reverse or {}
        self.search_answers = search or {}
        self.calls: list[tuple[str, Any]] = []

    def _answer(self, operation: str, query: Any, answers: dict) -> Optional[ResolvedAddress]:
        self.calls.append((operation, query))
        answer = answers.get(query)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def reverse(self, lat: float, lon: float) -> Optional[ResolvedAddress]:
        return self._answer("reverse", (lat, lon), self.reverse_answers)

    def search(self, text: str) -> Optional[ResolvedAddress]:
        return self._answer("search", text, self.search_answers)


class FakeResponse:
    def __init__(self, payload: Any = None, status: int = 200, body_error: bool = False):
        self.payload = payload
        self.status_code = status
        self.body_error = body_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if self.body_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, params=None, headers=None, timeout=None):
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def config() -> OrganiserConfig:
    """Config that never waits between requests."""
    return OrganiserConfig(min_request_interval=0.0)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(fake_clock: FakeClock) -> RateLimiter:
    """One-second limiter on fake time."""
    return RateLimiter(min_interval=1.0, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def geocoder_factory():
    return FakeGeocoder


@pytest.fixture
def session_factory():
    return FakeSession


@pytest.fixture
def response_factory():
    return FakeResponse


@pytest.fixture
def geocode_error():
    def make(operation: str = "reverse", query: str = "50.0,14.0") -> GeocodeError:
        return GeocodeError(operation, query, "503 Service Unavailable")

    return make


@pytest.fixture
def beroun() -> ResolvedAddress:
    return ResolvedAddress(municipality="okres Beroun", village="Hředle")


@pytest.fixture
def prague() -> ResolvedAddress:
    return ResolvedAddress(city=PRAGUE, city_district="obvod Praha 5")


@pytest.fixture
def stage_events() -> list[Event]:
    """Umbrella event with coordinates and two stages without any location."""
    return [
        Event(id="100", name="Velká cena Brd", latitude="49.95", longitude="13.90", map="Brdy"),
        Event(id="101", name="E1 - klasika", parent_id="100", map="Brdy"),
        Event(id="102", name="E2 - krátká", parent_id="100", map="Brdy"),
    ]
