"""Typer CLI root application with forward and reverse lookup commands."""

import json

import httpx
import typer

from locationiq_geocoder.core.config import get_settings
from locationiq_geocoder.core.logging import setup_logging
from locationiq_geocoder.lib.geocoder import (
    CredentialsError,
    GeocodeQuery,
    GeocoderError,
    LocationIqAddress,
    LocationIqGeocoder,
    ReverseQuery,
    get_configured_geocoder,
)

app = typer.Typer(name="locationiq-geocoder", help="LocationIQ forward and reverse geocoding CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


def _build_geocoder() -> LocationIqGeocoder:
    try:
        return get_configured_geocoder(get_settings())
    except CredentialsError as e:
        typer.echo(f"Error: {e} Set LOCATIONIQ_API_KEY.", err=True)
        raise typer.Exit(code=1) from e


def _echo_results(results: list[LocationIqAddress]) -> None:
    typer.echo(json.dumps([result.to_dict() for result in results], indent=2, ensure_ascii=False))


@app.command()
def forward(
    text: str = typer.Argument(..., help="Free-form address to look up"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Maximum number of results"),
    locale: str | None = typer.Option(None, "--locale", help="Preferred result language (e.g. de)"),
) -> None:
    """Geocode an address into matching places."""
    geocoder = _build_geocoder()
    query = GeocodeQuery(text=text, limit=limit or get_settings().locationiq_default_limit, locale=locale)

    try:
        results = geocoder.geocode_query(query)
    except GeocoderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except httpx.HTTPError as e:
        typer.echo(f"Transport error: {e}", err=True)
        raise typer.Exit(code=2) from e

    _echo_results(results)


@app.command()
def reverse(
    lat: float = typer.Option(..., "--lat", min=-90, max=90, help="Latitude (-90 to 90)"),
    lon: float = typer.Option(..., "--lon", min=-180, max=180, help="Longitude (-180 to 180)"),
    zoom: int = typer.Option(18, "--zoom", min=0, max=18, help="Level of detail (0 = country, 18 = building)"),
    locale: str | None = typer.Option(None, "--locale", help="Preferred result language (e.g. de)"),
) -> None:
    """Reverse geocode a coordinate pair into an address."""
    geocoder = _build_geocoder()
    query = ReverseQuery.from_coordinates(lat, lon, locale=locale).with_data("zoom", zoom)

    try:
        results = geocoder.reverse_query(query)
    except GeocoderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except httpx.HTTPError as e:
        typer.echo(f"Transport error: {e}", err=True)
        raise typer.Exit(code=2) from e

    _echo_results(results)
