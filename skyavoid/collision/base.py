"""Mini README: Abstract collision oracle consumed by the planner.

Structure:
    * CollisionOracle - interface for terrain/obstacle and coverage predicates.

The planner never inspects obstacle geometry itself. Anything able to answer
the three questions below can drive a search: the bundled ``ObstacleMap``,
a terrain service adapter, or a deterministic stub in tests. Implementations
must behave as pure predicates for the duration of a search.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..geo import GeoPoint


class CollisionOracle(ABC):
    """Terrain/obstacle collision and data coverage predicates."""

    @abstractmethod
    def point_blocked(self, position: GeoPoint, altitude: float) -> bool:
        """Return ``True`` when ``position`` at ``altitude`` is inside terrain or an obstacle."""

    @abstractmethod
    def segment_blocked(self, point_a: GeoPoint, point_b: GeoPoint, altitude: float) -> bool:
        """Return ``True`` when the straight leg ``point_a`` -> ``point_b`` collides."""

    @abstractmethod
    def within_coverage(self, position: GeoPoint) -> bool:
        """Return ``True`` when elevation/obstacle data covers ``position``."""
