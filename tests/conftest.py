"""Mini README: Shared fixtures and stub collision oracles for the test suite.

The stubs answer the three oracle questions deterministically and count how
often they are asked, which lets tests assert on call patterns as well as
search outcomes.
"""

from __future__ import annotations

import json
from typing import Callable, Optional, Type

import pytest

from skyavoid.collision import CollisionOracle, Obstacle, ObstacleMap
from skyavoid.geo import GeoPoint


class StubOracle(CollisionOracle):
    """Oracle driven by plain callables; everything is clear by default."""

    def __init__(
        self,
        *,
        point: Optional[Callable[[GeoPoint, float], bool]] = None,
        segment: Optional[Callable[[GeoPoint, GeoPoint, float], bool]] = None,
        coverage: Optional[Callable[[GeoPoint], bool]] = None,
    ) -> None:
        self._point = point or (lambda position, altitude: False)
        self._segment = segment or (lambda first, second, altitude: False)
        self._coverage = coverage or (lambda position: True)
        self.point_calls = 0
        self.segment_calls = 0
        self.coverage_calls = 0

    def point_blocked(self, position: GeoPoint, altitude: float) -> bool:
        self.point_calls += 1
        return self._point(position, altitude)

    def segment_blocked(self, point_a: GeoPoint, point_b: GeoPoint, altitude: float) -> bool:
        self.segment_calls += 1
        return self._segment(point_a, point_b, altitude)

    def within_coverage(self, position: GeoPoint) -> bool:
        self.coverage_calls += 1
        return self._coverage(position)


# Obstacle box sitting across the straight line from (0, 0) to (0, 0.01).
STRADDLING_RING = [(-0.002, 0.004), (-0.002, 0.006), (0.002, 0.006), (0.002, 0.004)]


@pytest.fixture
def stub_oracle() -> Type[StubOracle]:
    return StubOracle


@pytest.fixture
def open_sky() -> StubOracle:
    return StubOracle()


@pytest.fixture
def straddling_obstacle() -> Obstacle:
    return Obstacle.from_ring(STRADDLING_RING, elevation_m=500.0, name="tower")


@pytest.fixture
def obstacle_map(straddling_obstacle: Obstacle) -> ObstacleMap:
    return ObstacleMap([straddling_obstacle])


@pytest.fixture
def straddling_geojson() -> str:
    """FeatureCollection holding the straddling obstacle as GeoJSON text."""

    ring = [[lon, lat] for lat, lon in STRADDLING_RING]
    ring.append(ring[0])
    return json.dumps(
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {"name": "tower", "elevation": 500},
                    "geometry": {"type": "Polygon", "coordinates": [ring]},
                }
            ],
        }
    )


@pytest.fixture
def coverage_geojson() -> Callable[[float, float, float, float], str]:
    """Factory for a rectangular GeoJSON coverage polygon from lat/lon bounds."""

    def build(lat_min: float, lon_min: float, lat_max: float, lon_max: float) -> str:
        ring = [
            [lon_min, lat_min],
            [lon_max, lat_min],
            [lon_max, lat_max],
            [lon_min, lat_max],
            [lon_min, lat_min],
        ]
        return json.dumps({"type": "Polygon", "coordinates": [ring]})

    return build
