"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from map_organiser.exceptions import (
    ConfigurationError,
    EventSourceError,
    GeocodeError,
    InvalidConfigError,
    MapOrganiserError,
    MissingUserError,
    NoEventsError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            GeocodeError("search", "Zdice", "timeout"),
            EventSourceError("getEvent", "timeout"),
            MissingUserError("ABC1234"),
            NoEventsError("empty"),
            InvalidConfigError("fetch_workers", 0, "must be at least 1"),
        ],
    )
    def test_all_derive_from_base(self, error):
        assert isinstance(error, MapOrganiserError)

    def test_invalid_config_is_configuration_error(self):
        assert issubclass(InvalidConfigError, ConfigurationError)


class TestMessages:
    def test_details_in_str(self):
        err = GeocodeError("reverse", "49.9,13.9", "503 Service Unavailable")
        assert str(err) == (
            "Geocoding reverse failed for '49.9,13.9' "
            "(operation=reverse, query=49.9,13.9, reason=503 Service Unavailable)"
        )

    def test_plain_message(self):
        assert str(MapOrganiserError("boom")) == "boom"

    def test_missing_user(self):
        err = MissingUserError("ABC1234")
        assert err.message == "User with registration number ABC1234 not found"
        assert err.details == {"registration_number": "ABC1234"}

    def test_none_details_dropped(self):
        err = NoEventsError("nothing left after filtering")
        assert err.details == {"reason": "nothing left after filtering"}
        assert str(err) == (
            "No events to process: nothing left after filtering "
            "(reason=nothing left after filtering)"
        )

    def test_non_string_details(self):
        err = MapOrganiserError("Lookup failed", details={"lat": 49.836, "attempt": 2})
        assert str(err) == "Lookup failed (lat=49.836, attempt=2)"
