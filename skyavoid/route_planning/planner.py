"""Mini README: Avoidance route planning for vehicle missions.

Structure:
    * FlightWaypoint - dataclass capturing GPS position and altitude.
    * FlightPath - ordered waypoints plus command export for the mission encoder.
    * AvoidancePlanner - configures RRT searches and shapes their output.

``AvoidancePlanner.plan`` returns only the intermediate waypoints needed to
steer around obstacles. ``AvoidancePlanner.connect`` is the leg-level
helper: a clear leg is returned as-is, a blocked leg gets the avoidance
waypoints spliced between its ends. Failures surface as the exceptions in
``route_planning.exceptions`` so callers can decide whether to retry.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..collision import CollisionOracle
from ..configuration import SkyAvoidSettings, get_settings
from ..geo import GeoPoint, bearing_deg, distance_m
from ..logging_utils import get_logger
from .rrt import RrtSearch, SearchResult
from .search_space import SpaceGeometry

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class FlightWaypoint:
    """Single waypoint coordinate."""

    latitude: float
    longitude: float
    altitude: float

    @classmethod
    def at(cls, point: GeoPoint, altitude: float) -> "FlightWaypoint":
        return cls(latitude=point.latitude, longitude=point.longitude, altitude=altitude)

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(slots=True)
class FlightPath:
    """Ordered collection of waypoints forming a mission leg."""

    waypoints: List[FlightWaypoint] = field(default_factory=list)
    description: str = ""

    def total_distance_m(self) -> float:
        """Great-circle length of the path in meters."""

        return sum(
            distance_m(first.position, second.position)
            for first, second in zip(self.waypoints, self.waypoints[1:])
        )

    def as_commands(self, cruise_speed: float) -> List[dict]:
        """Convert waypoints to command dictionaries for the mission encoder."""

        commands: List[dict] = []
        for waypoint in self.waypoints:
            commands.append(
                {
                    "action": "navigate_to",
                    "latitude": waypoint.latitude,
                    "longitude": waypoint.longitude,
                    "altitude": waypoint.altitude,
                    "cruise_speed": cruise_speed,
                }
            )
        return commands


def _waypoints_at(points: Iterable[GeoPoint], altitude: float) -> List[FlightWaypoint]:
    return [FlightWaypoint.at(point, altitude) for point in points]


class AvoidancePlanner:
    """Plan collision-free legs with one RRT search per request."""

    def __init__(
        self,
        oracle: CollisionOracle,
        *,
        settings: Optional[SkyAvoidSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        settings = settings or get_settings()
        self.oracle = oracle
        self.goal_bias = settings.goal_bias
        self.geometry = SpaceGeometry(
            front_scale=settings.front_scale,
            front_angle_deg=settings.front_angle_deg,
            rear_angle_divisor=settings.rear_angle_divisor,
        )
        self.branch_length_m = settings.branch_length_m
        self.default_iterations = settings.default_iterations
        # Each search receives its own seed so concurrent searches never share a generator.
        self._seeds = rng if rng is not None else random.Random(settings.random_seed)
        LOGGER.debug(
            "Initialised AvoidancePlanner goal_bias=%s geometry=%s iterations=%s",
            self.goal_bias,
            self.geometry,
            self.default_iterations,
        )

    def search(
        self,
        start: GeoPoint,
        heading_deg: float,
        altitude: float,
        target: GeoPoint,
        iterations: Optional[int] = None,
    ) -> SearchResult:
        """Run a single search and return its raw result."""

        budget = self.default_iterations if iterations is None else iterations
        search = RrtSearch(
            start,
            heading_deg,
            altitude,
            target,
            self.oracle,
            goal_bias=self.goal_bias,
            geometry=self.geometry,
            branch_length_m=self.branch_length_m,
            seed=self._seeds.getrandbits(64),
        )
        return search.run_search(budget)

    def plan(
        self,
        start: GeoPoint,
        heading_deg: float,
        altitude: float,
        target: GeoPoint,
        iterations: Optional[int] = None,
    ) -> FlightPath:
        """Return the intermediate avoidance waypoints between ``start`` and ``target``."""

        LOGGER.info(
            "Planning avoidance path from %s to %s heading=%.1f altitude=%s",
            start,
            target,
            heading_deg,
            altitude,
        )
        result = self.search(start, heading_deg, altitude, target, iterations)
        result.raise_for_status()
        return FlightPath(
            waypoints=_waypoints_at(result.waypoints, altitude),
            description=f"RRT avoidance path ({result.iterations} iterations)",
        )

    def connect(
        self,
        first: GeoPoint,
        second: GeoPoint,
        altitude: float,
        *,
        heading_deg: Optional[float] = None,
        iterations: Optional[int] = None,
    ) -> FlightPath:
        """Return a collision-free leg from ``first`` to ``second`` including both ends.

        ``heading_deg`` orients the search space and defaults to the leg bearing.
        """

        if not self.oracle.segment_blocked(first, second, altitude):
            LOGGER.debug("Direct leg %s -> %s is clear", first, second)
            return FlightPath(
                waypoints=_waypoints_at([first, second], altitude), description="Direct leg"
            )

        heading = bearing_deg(first, second) if heading_deg is None else heading_deg
        avoidance = self.plan(first, heading, altitude, second, iterations)
        waypoints = [
            FlightWaypoint.at(first, altitude),
            *avoidance.waypoints,
            FlightWaypoint.at(second, altitude),
        ]
        LOGGER.info(
            "Leg %s -> %s rerouted through %s waypoints", first, second, len(avoidance.waypoints)
        )
        return FlightPath(waypoints=waypoints, description="Avoidance leg")
