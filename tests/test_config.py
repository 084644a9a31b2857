"""Tests for configuration defaults, validation and source merging."""

from __future__ import annotations

import os

import pytest

from map_organiser.config import OrganiserConfig, load_config
from map_organiser.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No global/project config files and no MAP_ORGANISER_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("MAP_ORGANISER_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_values(self):
        config = load_config()
        assert config.min_request_interval == 1.0
        assert config.capital_city_name == "Hlavní město Praha"
        assert config.district_prefixes == ("okres ", "obvod ")
        assert config.reverse_url == "https://nominatim.openstreetmap.org/reverse"
        assert config.search_url == "https://nominatim.openstreetmap.org/search"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("min_request_interval", -0.5),
            ("request_timeout", 0),
            ("fetch_workers", 0),
            ("unknown_region_label", " "),
            ("verbosity", "loud"),
        ],
    )
    def test_validation(self, field, value):
        with pytest.raises(InvalidConfigError):
            OrganiserConfig(**{field: value})


class TestMerging:
    def test_project_file(self, tmp_path):
        (tmp_path / "map-organiser.toml").write_text(
            'min_request_interval = 2.5\nexcluded_disciplines = ["S"]\n', encoding="utf-8"
        )
        config = load_config()
        assert config.min_request_interval == 2.5
        assert config.excluded_disciplines == ("S",)

    def test_section_table(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[map-organiser]\ncollation_locale = "sk_SK.UTF-8"\n', encoding="utf-8")
        assert load_config(config_file=path).collation_locale == "sk_SK.UTF-8"

    def test_env_over_file(self, tmp_path, monkeypatch):
        (tmp_path / "map-organiser.toml").write_text("fetch_workers = 2\n", encoding="utf-8")
        monkeypatch.setenv("MAP_ORGANISER_FETCH_WORKERS", "4")
        monkeypatch.setenv("MAP_ORGANISER_DEDUPE_LOOKUPS", "off")
        monkeypatch.setenv("MAP_ORGANISER_DISTRICT_PREFIXES", "okres ,obvod ,kraj ")
        config = load_config()
        assert config.fetch_workers == 4
        assert config.dedupe_lookups is False
        assert config.district_prefixes == ("okres ", "obvod ", "kraj ")

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("MAP_ORGANISER_MIN_REQUEST_INTERVAL", "3")
        config = load_config(min_request_interval=1.5, verbose=True)
        assert config.min_request_interval == 1.5
        assert config.verbosity == "verbose"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("MAP_ORGANISER_DEDUPE_LOOKUPS", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("colour = 'red'\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "nope.toml")

    def test_broken_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("min_request_interval = \n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)
