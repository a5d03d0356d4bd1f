"""Mini README: Collision avoidance data sources for the planner.

Re-exports the ``CollisionOracle`` interface the search engine consumes and
the bundled polygon ``ObstacleMap`` implementation. Production deployments
plug a terrain/obstacle service in by subclassing ``CollisionOracle``.
"""

from .base import CollisionOracle
from .obstacles import Obstacle, ObstacleMap

__all__ = ["CollisionOracle", "Obstacle", "ObstacleMap"]
