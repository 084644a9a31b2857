"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import OrganiserConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    interval: Optional[float] = None,
    excluded: Optional[List[str]] = None,
    locale_name: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> OrganiserConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if interval is not None:
        overrides["min_request_interval"] = interval
    if excluded:
        overrides["excluded_disciplines"] = tuple(excluded)
    if locale_name is not None:
        overrides["collation_locale"] = locale_name
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
