"""Mini README: Entry point CLI for planning and inspecting Waygen missions.

This script exposes a Typer CLI that plans a survey from a GeoJSON boundary,
prints flight metrics, writes KMZ packages, inspects existing packages, and
starts the FastAPI planning service with uvicorn. Settings come from an
optional JSON file so the same snapshot can be reused between runs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from pydantic import ValidationError

from waygen.configuration import get_settings
from waygen.errors import InvalidGeometryError, MissionDecodeError
from waygen.export import MissionCodec
from waygen.logging_utils import set_log_level
from waygen.metrics import evaluate_mission
from waygen.mission import MissionSettings
from waygen.profiles import REGISTRY
from waygen.route_planning import synthesize_path
from waygen.utils import boundary_from_geojson, format_distance, format_duration, format_speed

cli = typer.Typer(help="Plan, export and inspect drone photo-survey missions.")


def _load_settings(settings_file: Optional[Path]) -> MissionSettings:
    if settings_file is None:
        return MissionSettings()
    try:
        payload = json.loads(settings_file.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise TypeError("settings file must hold a JSON object")
        return MissionSettings(**payload)
    except (OSError, json.JSONDecodeError, TypeError, ValidationError) as error:
        typer.echo(f"Invalid settings file {settings_file}: {error}", err=True)
        raise typer.Exit(code=2) from error


@cli.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    set_log_level(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
def plan(
    boundary_file: Path = typer.Argument(..., exists=True, help="GeoJSON polygon describing the survey area."),
    settings_file: Optional[Path] = typer.Option(None, "--settings", exists=True, help="MissionSettings JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the mission as a KMZ package."),
) -> None:
    """Generate a survey path and report its flight metrics."""

    settings = _load_settings(settings_file)
    try:
        boundary = boundary_from_geojson(boundary_file.read_text(encoding="utf-8"))
    except InvalidGeometryError as error:
        typer.echo(f"Invalid boundary: {error.message}", err=True)
        raise typer.Exit(code=2) from error

    result = synthesize_path(boundary, settings)
    for diagnostic in result.diagnostics:
        typer.echo(f"[{diagnostic.kind.value}] {diagnostic.message}", err=True)
    if not result.waypoints:
        raise typer.Exit(code=1)

    metrics = evaluate_mission(result.waypoints, settings)
    typer.echo(f"Waypoints: {metrics.waypoint_count}")
    typer.echo(f"Distance: {format_distance(metrics.total_distance, settings.units)}")
    typer.echo(f"Max speed: {format_speed(metrics.max_safe_speed, settings.units)}")
    typer.echo(f"Est. mission time: {format_duration(metrics.mission_time_seconds)}")
    typer.echo(f"Flight time status: {metrics.warning_level.value}")

    if output is not None:
        MissionCodec().write(output, result.waypoints, settings, boundary)
        typer.echo(f"Mission written to {output}")


@cli.command()
def inspect(package: Path = typer.Argument(..., exists=True, help="KMZ or KML mission file.")) -> None:
    """Summarise the waypoints and session data stored in a package."""

    try:
        mission = MissionCodec().read(package)
    except MissionDecodeError as error:
        typer.echo(f"Unable to read {package}: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"Waypoints: {len(mission.waypoints)}")
    typer.echo(f"Session restored: {'yes' if mission.session_restored else 'no'}")
    if mission.settings is not None:
        typer.echo(f"Path type: {mission.settings.path_type.value}")
        typer.echo(f"Drone: {mission.settings.selected_drone}")
    if mission.boundary is not None:
        typer.echo(f"Boundary vertices: {len(mission.boundary.vertices)}")
    for diagnostic in mission.diagnostics:
        typer.echo(f"[{diagnostic.kind.value}] {diagnostic.message}")


@cli.command()
def profiles() -> None:
    """List the built-in drone profiles."""

    for profile in REGISTRY.profiles():
        limit = f"{profile.max_flight_time:g} min" if profile.has_flight_limit else "unlimited"
        typer.echo(
            f"{profile.profile_id}: {profile.display_name} "
            f"(HFOV {profile.horizontal_fov:g}°, {limit}, photo every {profile.photo_cadence:g}s)"
        )


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI planning service using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    set_log_level(logging.INFO)

    # 0.0.0.0 is a bind address, not something a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Waygen on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "waygen.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
