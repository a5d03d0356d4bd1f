"""Mini README: Route planning subsystem for obstacle avoidance.

Exports the RRT search engine, its supporting structures, the high-level
``AvoidancePlanner`` and the planning error types. Interfaces and scripts
should import from here rather than from individual modules.
"""

from .exceptions import (
    PathPlanningError,
    SearchExhaustedError,
    SpaceUnavailableError,
    TargetBlockedError,
)
from .planner import AvoidancePlanner, FlightPath, FlightWaypoint
from .rrt import RrtSearch, SearchResult, SearchState, prune_waypoints
from .search_space import SearchSpace, SpaceGeometry, build_search_space
from .search_tree import SearchTree, TreeNode
from .spatial_index import GeoKDTree

__all__ = [
    "AvoidancePlanner",
    "FlightPath",
    "FlightWaypoint",
    "GeoKDTree",
    "PathPlanningError",
    "RrtSearch",
    "SearchExhaustedError",
    "SearchResult",
    "SearchSpace",
    "SearchState",
    "SearchTree",
    "SpaceGeometry",
    "SpaceUnavailableError",
    "TargetBlockedError",
    "TreeNode",
    "build_search_space",
    "prune_waypoints",
]
