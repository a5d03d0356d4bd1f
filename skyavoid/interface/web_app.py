"""Mini README: FastAPI planning service for SkyAvoid.

Structure:
    * create_application - application factory wiring routes to a planner.
    * load_default_oracle - obstacle map from the configured GeoJSON files.
    * request_oracle - per-request obstacle and coverage overrides.

The service accepts form-encoded planning requests and returns the avoidance
waypoints as navigation commands, ready for the mission encoder. Searches
run in the worker thread pool because a large iteration budget can block
for a noticeable time.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..collision import CollisionOracle, ObstacleMap
from ..configuration import SkyAvoidSettings, get_settings
from ..geo import GeoPoint
from ..logging_utils import get_logger, set_log_level
from ..route_planning import (
    AvoidancePlanner,
    FlightPath,
    FlightWaypoint,
    SearchState,
    SpaceUnavailableError,
)
from ..utils import bounds_from_geojson

LOGGER = get_logger(__name__)

DEFAULT_CRUISE_SPEED = 6.5


def load_default_oracle(settings: SkyAvoidSettings) -> CollisionOracle:
    """Build the obstacle map named by the settings (empty and unbounded when unset)."""

    if settings.obstacle_file is None:
        LOGGER.warning("No obstacle file configured; planning against an empty obstacle map")
    return ObstacleMap.from_files(settings.obstacle_file, settings.coverage_file)


def request_oracle(
    default: CollisionOracle,
    obstacles_geojson: Optional[str] = None,
    coverage_geojson: Optional[str] = None,
) -> CollisionOracle:
    """Return the oracle for one request, swapping in supplied obstacles or coverage.

    Whatever the request leaves out is taken from ``default`` when it is an
    ``ObstacleMap``. Malformed GeoJSON raises ``ValueError``.
    """

    if not obstacles_geojson and not coverage_geojson:
        return default
    base = default if isinstance(default, ObstacleMap) else ObstacleMap()
    obstacles = (
        ObstacleMap.from_geojson(obstacles_geojson).obstacles if obstacles_geojson else base.obstacles
    )
    coverage = bounds_from_geojson(coverage_geojson) if coverage_geojson else base.coverage
    return ObstacleMap(obstacles, coverage=coverage, terrain=base.terrain)


def create_application(
    oracle: Optional[CollisionOracle] = None,
    *,
    settings: Optional[SkyAvoidSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    set_log_level(settings.log_level)
    app = FastAPI(title="SkyAvoid Planning Service", version="0.1.0")
    default_planner = AvoidancePlanner(oracle or load_default_oracle(settings), settings=settings)

    @app.get("/health")
    async def health() -> JSONResponse:
        """Report liveness and the active planner configuration."""

        return JSONResponse(
            {
                "status": "ok",
                "environment": settings.environment,
                "goal_bias": default_planner.goal_bias,
                "default_iterations": default_planner.default_iterations,
            }
        )

    @app.post("/plan-path")
    async def plan_path(
        start_lat: float = Form(...),
        start_lon: float = Form(...),
        heading: float = Form(...),
        altitude: float = Form(...),
        target_lat: float = Form(...),
        target_lon: float = Form(...),
        iterations: Optional[int] = Form(None),
        obstacles_geojson: Optional[str] = Form(None),
        coverage_geojson: Optional[str] = Form(None),
        cruise_speed: float = Form(DEFAULT_CRUISE_SPEED),
    ) -> JSONResponse:
        """Plan avoidance waypoints and return them as navigation commands."""

        if iterations is not None and iterations < 0:
            raise HTTPException(status_code=400, detail="iterations must be zero or positive")

        try:
            oracle = request_oracle(default_planner.oracle, obstacles_geojson, coverage_geojson)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        planner = default_planner
        if oracle is not default_planner.oracle:
            planner = AvoidancePlanner(oracle, settings=settings)

        start = GeoPoint(start_lat, start_lon)
        target = GeoPoint(target_lat, target_lon)
        try:
            result = await run_in_threadpool(
                planner.search, start, heading, altitude, target, iterations
            )
        except SpaceUnavailableError as error:
            raise HTTPException(
                status_code=422,
                detail={"state": "space_unavailable", "message": str(error), "retryable": False},
            ) from error

        if result.state is SearchState.BLOCKED:
            raise HTTPException(
                status_code=409,
                detail={
                    "state": result.state.value,
                    "message": "Target is blocked",
                    "retryable": False,
                },
            )
        if result.state is SearchState.EXHAUSTED:
            raise HTTPException(
                status_code=422,
                detail={
                    "state": result.state.value,
                    "message": f"No path found within {result.iterations} iterations",
                    "retryable": True,
                },
            )

        flight_path = FlightPath(
            waypoints=[FlightWaypoint.at(point, altitude) for point in result.waypoints],
            description="RRT avoidance path",
        )
        LOGGER.info(
            "Planned path with %s waypoints in %s iterations",
            len(flight_path.waypoints),
            result.iterations,
        )
        return JSONResponse(
            {
                "state": result.state.value,
                "iterations": result.iterations,
                "node_count": result.node_count,
                "commands": flight_path.as_commands(cruise_speed=cruise_speed),
            }
        )

    return app
