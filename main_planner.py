"""Mini README: Command line entry point for the SkyAvoid planner.

This script exposes a Typer CLI with two commands:

    * serve - start the FastAPI planning service with uvicorn.
    * plan  - run a single avoidance search and print the commands as JSON.

Both draw defaults from ``SKYAVOID_`` environment variables. ``plan`` exits
with status 2 when the iteration budget ran out (worth retrying with a
larger budget) and status 1 for unreadable obstacle or coverage files and
any other planning failure.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from skyavoid.collision import ObstacleMap
from skyavoid.configuration import get_settings
from skyavoid.geo import GeoPoint
from skyavoid.logging_utils import set_log_level
from skyavoid.route_planning import AvoidancePlanner, PathPlanningError

cli = typer.Typer(help="Plan collision-free avoidance paths and serve the planning API.")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the planning service using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    set_log_level(settings.log_level)

    # Browsers cannot open the 0.0.0.0 sentinel, so point operators at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting SkyAvoid on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "skyavoid.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def plan(
    start_lat: float = typer.Option(..., help="Vehicle latitude in degrees."),
    start_lon: float = typer.Option(..., help="Vehicle longitude in degrees."),
    heading: float = typer.Option(..., help="Vehicle heading in degrees."),
    altitude: float = typer.Option(..., help="Planning altitude in meters AMSL."),
    target_lat: float = typer.Option(..., help="Target latitude in degrees."),
    target_lon: float = typer.Option(..., help="Target longitude in degrees."),
    iterations: Optional[int] = typer.Option(None, min=0, help="Iteration budget."),
    obstacles: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="GeoJSON obstacle file (overrides settings)."
    ),
    coverage: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="GeoJSON coverage polygon (overrides settings)."
    ),
    seed: Optional[int] = typer.Option(None, help="Random seed for a reproducible search."),
    cruise_speed: float = typer.Option(6.5, help="Cruise speed written into each command."),
) -> None:
    """Run one avoidance search and print navigation commands."""

    settings = get_settings()
    set_log_level(settings.log_level)
    try:
        oracle = ObstacleMap.from_files(
            obstacles or settings.obstacle_file, coverage or settings.coverage_file
        )
    except (OSError, ValueError) as error:
        typer.echo(f"Cannot load obstacle data: {error}", err=True)
        raise typer.Exit(code=1) from error
    rng = random.Random(seed) if seed is not None else None
    planner = AvoidancePlanner(oracle, settings=settings, rng=rng)

    try:
        flight_path = planner.plan(
            GeoPoint(start_lat, start_lon),
            heading,
            altitude,
            GeoPoint(target_lat, target_lon),
            iterations,
        )
    except PathPlanningError as error:
        typer.echo(f"Cannot plan path: {error}", err=True)
        raise typer.Exit(code=2 if error.retryable else 1) from error

    typer.echo(json.dumps(flight_path.as_commands(cruise_speed=cruise_speed), indent=2))


if __name__ == "__main__":
    cli()
