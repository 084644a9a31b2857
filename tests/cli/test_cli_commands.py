"""Tests for the index and locate commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from map_organiser.cli import app
from map_organiser.models import Event, ResolvedAddress

runner = CliRunner()

BEROUN = ResolvedAddress(municipality="okres Beroun", town="Hořovice")


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_client(monkeypatch, geocoder_factory):
    """Replace the Nominatim client the pipeline builds."""
    geocoder = geocoder_factory(
        reverse={(49.836, 13.903): BEROUN},
        search={"Zdice": ResolvedAddress(municipality="okres Beroun", town="Zdice")},
    )
    geocoder.close = lambda: None
    monkeypatch.setattr("map_organiser.pipeline.GeocodeClient", lambda config: geocoder)
    return geocoder


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    events = [
        Event(id="1", name="Hořovice", latitude="49.836", longitude="13.903", map="Hřebeny"),
        Event(id="2", name="Zdice", place="Zdice", discipline="SP"),
        Event(id="3", name="Soustředění", discipline="S"),
    ]
    path.write_text(json.dumps([e.to_dict() for e in events]), encoding="utf-8")
    return path


class TestIndexCommand:
    def test_writes_indexes(self, tmp_path, events_file, fake_client):
        result = runner.invoke(
            app,
            ["index", "--events-file", str(events_file), "-x", "S", "-o", str(tmp_path / "r.json"),
             "--map-output", str(tmp_path / "m.json"), "--grid-output", str(tmp_path / "g.json")],
        )
        assert result.exit_code == 0, result.output

        regions = json.loads((tmp_path / "r.json").read_text(encoding="utf-8"))
        assert regions["index"] == {"Beroun": {"Hořovice": [1], "Zdice": [2]}}
        assert regions["events"] == {"1": "1", "2": "2"}

        maps = json.loads((tmp_path / "m.json").read_text(encoding="utf-8"))
        assert maps["index"]["Hřebeny"] == {"Hořovice": [1]}

        grid = json.loads((tmp_path / "g.json").read_text(encoding="utf-8"))
        assert [row["number"] for row in grid] == [1, 2]

    def test_needs_a_source(self):
        result = runner.invoke(app, ["index"])
        assert result.exit_code == 2

    def test_rejects_both_sources(self, events_file, fake_client):
        result = runner.invoke(app, ["index", "ABC1234", "--events-file", str(events_file)])

        assert result.exit_code == 2
        assert fake_client.calls == []
        assert not (events_file.parent / "region_index.json").exists()

    def test_no_events_left(self, tmp_path, fake_client):
        path = tmp_path / "camps.json"
        path.write_text(json.dumps([Event(id="9", discipline="S").to_dict()]), encoding="utf-8")

        result = runner.invoke(app, ["index", "--events-file", str(path), "-x", "S"])

        assert result.exit_code == 1
        assert not (tmp_path / "region_index.json").exists()
        assert fake_client.calls == []


class TestLocateCommand:
    def test_requires_input(self):
        result = runner.invoke(app, ["locate", "--lat", "49.8"])
        assert result.exit_code == 2

    def test_prints_classification(self, monkeypatch, geocoder_factory):
        geocoder = geocoder_factory(search={"Hořovice": BEROUN})

        class Client:
            def __init__(self, config):
                pass

            def __enter__(self):
                return geocoder

            def __exit__(self, *exc_info):
                return None

        monkeypatch.setattr("map_organiser.cli.locate.GeocodeClient", Client)
        result = runner.invoke(app, ["locate", "--place", "Hořovice"])

        assert result.exit_code == 0, result.output
        assert "Beroun" in result.output
        assert "Hořovice" in result.output
