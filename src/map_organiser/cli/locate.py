"""Locate command — one geocoding lookup and its classification."""

from pathlib import Path
from typing import Optional

import typer

from ..classifier import determine_place_name, determine_region
from ..exceptions import MapOrganiserError
from ..geocode import GeocodeClient
from ..logging_config import setup_logging
from ..models import Event
from . import app
from ._common import console, resolve_config


@app.command()
def locate(
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude"),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude"),
    place: Optional[str] = typer.Option(None, "--place", "-p", help="Free-text place"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Show how a position or place name would be classified.

    [bold cyan]Examples:[/bold cyan]

      map-organiser locate --lat 49.96 --lon 13.89

      map-organiser locate --place "Hořovice"
    """
    setup_logging(verbose=verbose)

    if (lat is None) != (lon is None) or (lat is None and place is None):
        console.print("[red]Error:[/red] give --lat and --lon, or --place")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        with GeocodeClient(settings) as client:
            if lat is not None and lon is not None:
                address = client.reverse(lat, lon)
            else:
                address = client.search(place)
    except MapOrganiserError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if address is None:
        console.print("[yellow]No address found[/yellow]")
        raise typer.Exit(1)

    region = determine_region(address, settings.capital_city_name, settings.district_prefixes)
    # Blank event: classify the address alone, not the text that was searched
    place_name = determine_place_name(
        Event(id="locate"), address, capital_city_name=settings.capital_city_name
    )

    console.print(f"Municipality: [blue]{address.municipality or '-'}[/blue]")
    console.print(f"City: [blue]{address.city or '-'}[/blue]")
    console.print(f"City district: [blue]{address.city_district or '-'}[/blue]")
    console.print(f"Village / town: [blue]{address.village or address.town or '-'}[/blue]")
    console.print()
    console.print(f"Region: [bold cyan]{region or settings.unknown_region_label}[/bold cyan]")
    console.print(f"Place: [bold cyan]{place_name or settings.unknown_place_label}[/bold cyan]")
