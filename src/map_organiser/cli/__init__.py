"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="map-organiser",
    help="Map Organiser - region and map indexes for ORIS events",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .index import index as _index  # noqa: F401, E402
from .locate import locate as _locate  # noqa: F401, E402
