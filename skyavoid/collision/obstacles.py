"""Mini README: Polygon obstacle map implementing ``CollisionOracle``.

Structure:
    * Obstacle - footprint polygon with a top elevation.
    * ObstacleMap - collision oracle over obstacles, optional terrain and coverage.

A position is blocked when it lies inside (or on the edge of) an obstacle
whose elevation reaches the flight altitude, or when the terrain hook reports
ground at or above the altitude. A leg is blocked when the straight line
touches such an obstacle or its end point is blocked. Geometry is planar in
(longitude, latitude), which is adequate for the short legs the planner
checks. Coverage is an optional bounding box, usually taken from a GeoJSON
polygon; positions on or outside its edge count as uncovered.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point, Polygon

from ..geo import GeoPoint
from ..logging_utils import get_logger
from ..utils.geojson import bounds_from_geojson, obstacles_from_geojson
from .base import CollisionOracle

LOGGER = get_logger(__name__)

Bounds = Tuple[float, float, float, float]
TerrainLookup = Callable[[GeoPoint], Optional[float]]

MIN_POLYGON_VERTICES = 3


@dataclass(frozen=True)
class Obstacle:
    """Obstacle footprint and the elevation (meters AMSL) of its top."""

    name: str
    polygon: Polygon
    elevation_m: float

    @classmethod
    def from_ring(
        cls, ring: Sequence[Tuple[float, float]], elevation_m: float, *, name: str = ""
    ) -> "Obstacle":
        """Build an obstacle from ``(latitude, longitude)`` vertices, closing the ring if needed."""

        coords = [(float(lon), float(lat)) for lat, lon in ring]
        if coords and coords[0] != coords[-1]:
            coords.append(coords[0])
        if len(set(coords)) < MIN_POLYGON_VERTICES:
            raise ValueError(
                f"Obstacle '{name}' needs at least {MIN_POLYGON_VERTICES} distinct vertices"
            )
        return cls(name=name, polygon=Polygon(coords), elevation_m=float(elevation_m))

    def reaches(self, altitude: float) -> bool:
        return altitude <= self.elevation_m


class ObstacleMap(CollisionOracle):
    """Collision oracle backed by polygon obstacles."""

    def __init__(
        self,
        obstacles: Optional[Iterable[Obstacle]] = None,
        *,
        coverage: Optional[Bounds] = None,
        terrain: Optional[TerrainLookup] = None,
    ) -> None:
        self.obstacles: List[Obstacle] = list(obstacles or [])
        if coverage is not None and len(coverage) != 4:
            raise ValueError("Coverage must be (lat_min, lon_min, lat_max, lon_max)")
        self.coverage = coverage
        self.terrain = terrain
        LOGGER.debug(
            "ObstacleMap initialised with %s obstacles coverage=%s terrain=%s",
            len(self.obstacles),
            coverage,
            terrain is not None,
        )

    @classmethod
    def from_geojson(
        cls,
        obstacles_geojson: str,
        *,
        coverage: Optional[Bounds] = None,
        terrain: Optional[TerrainLookup] = None,
    ) -> "ObstacleMap":
        """Create a map from a GeoJSON Feature/FeatureCollection of obstacle polygons."""

        obstacles = [
            Obstacle.from_ring(footprint.ring, footprint.elevation_m, name=footprint.name)
            for footprint in obstacles_from_geojson(obstacles_geojson)
        ]
        LOGGER.info("Loaded %s obstacles from GeoJSON", len(obstacles))
        return cls(obstacles, coverage=coverage, terrain=terrain)

    @classmethod
    def from_files(
        cls,
        obstacle_file: Optional[Path] = None,
        coverage_file: Optional[Path] = None,
        *,
        terrain: Optional[TerrainLookup] = None,
    ) -> "ObstacleMap":
        """Load obstacles and a coverage polygon from GeoJSON files; either may be omitted."""

        coverage = None
        if coverage_file is not None:
            coverage = bounds_from_geojson(coverage_file.read_text(encoding="utf-8"))
            LOGGER.info("Coverage limited to %s from %s", coverage, coverage_file)
        if obstacle_file is None:
            return cls(coverage=coverage, terrain=terrain)
        LOGGER.info("Loading obstacles from %s", obstacle_file)
        return cls.from_geojson(
            obstacle_file.read_text(encoding="utf-8"), coverage=coverage, terrain=terrain
        )

    def _terrain_blocks(self, position: GeoPoint, altitude: float) -> bool:
        if self.terrain is None:
            return False
        elevation = self.terrain(position)
        return elevation is not None and altitude <= elevation

    def point_blocked(self, position: GeoPoint, altitude: float) -> bool:
        point = Point(position.as_lon_lat())
        for obstacle in self.obstacles:
            if obstacle.reaches(altitude) and obstacle.polygon.covers(point):
                return True
        return self._terrain_blocks(position, altitude)

    def segment_blocked(self, point_a: GeoPoint, point_b: GeoPoint, altitude: float) -> bool:
        if point_a == point_b:
            return self.point_blocked(point_b, altitude)
        line = LineString([point_a.as_lon_lat(), point_b.as_lon_lat()])
        for obstacle in self.obstacles:
            if obstacle.reaches(altitude) and obstacle.polygon.intersects(line):
                return True
        return self._terrain_blocks(point_b, altitude)

    def within_coverage(self, position: GeoPoint) -> bool:
        if self.coverage is None:
            return True
        lat_min, lon_min, lat_max, lon_max = self.coverage
        return lat_min < position.latitude < lat_max and lon_min < position.longitude < lon_max
