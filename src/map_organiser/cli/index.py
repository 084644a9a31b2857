"""Index command — download events, locate them and write the indexes."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from ..exceptions import MapOrganiserError
from ..logging_config import get_logger, setup_logging
from ..output import grid_payload, index_payload, write_json_files
from ..pipeline import OrganiserResult, organise
from ..source import OrisClient, filter_events, load_events_json
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)


def _summary_table(result: OrganiserResult) -> Table:
    table = Table(title=f"Region index ({result.event_count} events)", show_lines=False)
    table.add_column("Region", style="cyan")
    table.add_column("Place")
    table.add_column("Events", justify="right", style="yellow")

    for group in result.region_index:
        for i, entry in enumerate(group.entries):
            table.add_row(
                group.label if i == 0 else "",
                entry.label,
                ", ".join(str(n) for n in entry.numbers),
            )
    return table


@app.command()
def index(
    registration_number: Optional[str] = typer.Argument(
        None,
        help="ORIS registration number of the competitor (e.g. ABC1234)",
    ),
    events_file: Optional[Path] = typer.Option(
        None,
        "--events-file",
        "-e",
        help="Read events from a JSON file instead of ORIS",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        Path("region_index.json"),
        "--output",
        "-o",
        help="Where to write the region index",
    ),
    map_output: Path = typer.Option(
        Path("map_index.json"),
        "--map-output",
        help="Where to write the map index",
    ),
    grid_output: Path = typer.Option(
        Path("event_grid.json"),
        "--grid-output",
        help="Where to write the numbered event list for the grid",
    ),
    exclude_discipline: Optional[List[str]] = typer.Option(
        None,
        "--exclude-discipline",
        "-x",
        help="ORIS discipline short name to leave out (repeatable)",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        help="Seconds between geocoding requests",
        min=0.0,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Build the region and map indexes for a competitor's events.

    Nothing is written unless every event has been processed.

    [bold cyan]Examples:[/bold cyan]

      map-organiser index ABC1234

      map-organiser index --events-file events.json -o regions.json
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    if (registration_number is None) == (events_file is None):
        console.print("[red]Error:[/red] give either a registration number or --events-file")
        raise typer.Exit(2)

    try:
        settings = resolve_config(
            config=config,
            interval=interval,
            excluded=exclude_discipline,
            verbose=verbose,
            quiet=quiet,
        )

        if events_file is not None:
            events = load_events_json(events_file)
            console.print(f"Loaded {len(events)} events from {events_file}")
        else:
            console.print(f"Downloading events of user {registration_number}...")
            client = OrisClient(settings)
            try:
                events = client.fetch_user_events(registration_number)
            finally:
                client.close()

        events = filter_events(events, settings.excluded_disciplines)

        with Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Locating events", total=len(events))
            result = organise(
                events,
                settings,
                on_progress=lambda done, total, event: progress.update(task, completed=done),
            )

    except MapOrganiserError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Indexing interrupted by user")
        console.print("\n[yellow]Interrupted, nothing written[/yellow]")
        raise typer.Exit(130)

    write_json_files(
        {
            grid_output: grid_payload(result.locations),
            output: index_payload(result.region_index, result.numbering),
            map_output: index_payload(result.map_index, result.numbering),
        }
    )

    if not quiet:
        console.print(_summary_table(result))
    if result.unresolved:
        console.print(
            f"[yellow]{len(result.unresolved)} events without a region[/yellow] "
            f"({result.failed_lookups} failed lookups)"
        )
    console.print(f"[green]Wrote[/green] {grid_output}, {output}, {map_output}")
