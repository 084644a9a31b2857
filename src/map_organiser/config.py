"""Configuration loading and management for Map Organiser.

Configuration sources are merged in priority order:
    1. Defaults (defined in OrganiserConfig)
    2. Global config (~/.map-organiser.toml)
    3. Project config (./map-organiser.toml)
    4. Explicit config file
    5. Environment variables (MAP_ORGANISER_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(min_request_interval=2.0)
    >>> config.min_request_interval
    2.0
    >>> config.capital_city_name
    'Hlavní město Praha'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, Tuple, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "MAP_ORGANISER_"

# Name OpenStreetMap gives Prague in the `city` field of an address
PRAGUE_CITY_NAME = "Hlavní město Praha"


@dataclass(frozen=True)
class OrganiserConfig:
    """Configuration for one organiser run.

    Constructed once per run and handed to the geocode client, the
    resolver and the index builder. Nothing reads configuration from
    module globals.

    Attributes:
        Services:
            nominatim_url: Base URL of the Nominatim instance
            oris_url: Base URL of the ORIS JSON API
            user_agent: User-Agent header sent to both services
            request_timeout: Per-request timeout in seconds

        Rate limiting:
            min_request_interval: Seconds between the starts of two
                geocoding requests (Nominatim usage policy asks for 1s)

        Classification:
            capital_city_name: `city` value identifying the capital, whose
                districts become regions instead of places
            district_prefixes: Markers stripped from region names

        Indexing:
            collation_locale: Locale used to order index keys
            unknown_region_label: Sentinel for events without a region
            unknown_place_label: Sentinel for events without a place
            unknown_map_label: Sentinel for events without a map name

        Event source:
            excluded_disciplines: ORIS discipline short names dropped
                before numbering
            fetch_workers: Parallel requests when downloading events

        Behaviour:
            dedupe_lookups: Reuse identical geocode answers within a run
            verbosity: Logging verbosity level
    """

    # Services
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    oris_url: str = "https://oris.orientacnisporty.cz/API/"
    user_agent: str = "https://github.com/tomhula/map-organiser"
    request_timeout: float = 10.0

    # Rate limiting
    min_request_interval: float = 1.0

    # Classification
    capital_city_name: str = PRAGUE_CITY_NAME
    district_prefixes: Tuple[str, ...] = ("okres ", "obvod ")

    # Indexing
    collation_locale: str = "cs_CZ.UTF-8"
    unknown_region_label: str = "Neznámý okres"
    unknown_place_label: str = "Neznámé místo"
    unknown_map_label: str = "Neznámá mapa"

    # Event source
    excluded_disciplines: Tuple[str, ...] = ()
    fetch_workers: int = 8

    # Behaviour
    dedupe_lookups: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.min_request_interval < 0:
            raise InvalidConfigError(
                "min_request_interval", self.min_request_interval, "must be non-negative"
            )
        if self.request_timeout <= 0:
            raise InvalidConfigError("request_timeout", self.request_timeout, "must be positive")
        if self.fetch_workers < 1:
            raise InvalidConfigError("fetch_workers", self.fetch_workers, "must be at least 1")
        if not self.capital_city_name:
            raise InvalidConfigError("capital_city_name", self.capital_city_name, "must not be empty")

        for field_name in ("unknown_region_label", "unknown_place_label", "unknown_map_label"):
            if not getattr(self, field_name).strip():
                raise InvalidConfigError(field_name, getattr(self, field_name), "must not be blank")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def reverse_url(self) -> str:
        """Nominatim reverse-geocoding endpoint."""
        return self.nominatim_url.rstrip("/") + "/reverse"

    @property
    def search_url(self) -> str:
        """Nominatim free-text search endpoint."""
        return self.nominatim_url.rstrip("/") + "/search"


_TUPLE_FIELDS = ("district_prefixes", "excluded_disciplines")


def load_config(config_file: Optional[Path] = None, **overrides) -> OrganiserConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated OrganiserConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".map-organiser.toml"
    if global_config.exists():
        merged.update(_load_toml_section(global_config))

    project_config = Path.cwd() / "map-organiser.toml"
    if project_config.exists():
        merged.update(_load_toml_section(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_section(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # TOML arrays arrive as lists
    for field_name in _TUPLE_FIELDS:
        if field_name in merged:
            merged[field_name] = tuple(merged[field_name])

    try:
        return OrganiserConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MAP_ORGANISER_* environment variables.

    Tuple fields take comma-separated values, e.g.
    ``MAP_ORGANISER_EXCLUDED_DISCIPLINES=S,T``.

    Returns:
        Dict of field_name -> parsed_value for any MAP_ORGANISER_* vars found.
    """
    type_hints = get_type_hints(OrganiserConfig)

    result: dict[str, Any] = {}

    for field_name in OrganiserConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return tuple(part for part in value.split(",") if part)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_section(path: Path) -> dict:
    """Load a TOML config file.

    Settings may sit at the top level or under a ``[map-organiser]`` table.
    """
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("map-organiser", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file '{path}': [map-organiser] must be a table")
    return dict(section)


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
