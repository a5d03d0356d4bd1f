"""Mini README: Core package initializer for the SkyAvoid planner.

SkyAvoid computes collision-free waypoint sequences for unmanned vehicles
with a rapidly-exploring random tree search. The heavy lifting lives in
``skyavoid.route_planning``; this module only re-exports the entry points
most callers need so scripts can stay on a single import line.
"""

from .collision import CollisionOracle, ObstacleMap
from .geo import GeoPoint
from .logging_utils import get_logger
from .route_planning import AvoidancePlanner, RrtSearch, SearchResult, SearchState

__all__ = [
    "AvoidancePlanner",
    "CollisionOracle",
    "GeoPoint",
    "ObstacleMap",
    "RrtSearch",
    "SearchResult",
    "SearchState",
    "get_logger",
]
