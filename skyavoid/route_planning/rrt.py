"""Mini README: Rapidly-exploring random tree search for obstacle avoidance.

Structure:
    * SearchState - lifecycle states of a single search.
    * SearchResult - outcome returned by ``RrtSearch.run_search``.
    * prune_waypoints - greedy forward shortcutting of an extracted path.
    * RrtSearch - one-shot search instance (space, tree, random source).

A search grows a tree from the vehicle position inside a heading-biased
search space. Each step samples either the literal target (goal bias) or a
uniform point of the space, finds the nearest tree node, and extends one
branch length towards the sample. The first step always aims at the target
itself, so an unobstructed target is reached straight away. Edges are only
accepted when the collision oracle reports the leg clear. Once a clear edge
reaches the target, the root-to-target path is pruned and the intermediate
waypoints are returned. Instances are single use; build a new one per request.
"""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..collision import CollisionOracle
from ..geo import GeoPoint, bearing_deg, destination, distance_m, normalize_bearing
from ..logging_utils import get_logger
from .exceptions import SearchExhaustedError, TargetBlockedError
from .search_space import SearchSpace, SpaceGeometry, build_search_space
from .search_tree import SearchTree

LOGGER = get_logger(__name__)

DEFAULT_GOAL_BIAS = 0.3


class SearchState(str, Enum):
    """Lifecycle of a single search."""

    INITIALIZING = "initializing"
    GROWING = "growing"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    BLOCKED = "blocked"

    @property
    def is_terminal(self) -> bool:
        return self in (SearchState.SUCCEEDED, SearchState.EXHAUSTED, SearchState.BLOCKED)


@dataclass(slots=True)
class SearchResult:
    """Outcome of ``RrtSearch.run_search``.

    ``waypoints`` excludes the vehicle position and the target itself and
    may legitimately be empty when the target is directly reachable.
    """

    state: SearchState
    target: GeoPoint
    altitude: float
    waypoints: List[GeoPoint] = field(default_factory=list)
    iterations: int = 0
    node_count: int = 1
    elapsed_seconds: float = 0.0

    @property
    def found(self) -> bool:
        return self.state is SearchState.SUCCEEDED

    @property
    def retryable(self) -> bool:
        return self.state is SearchState.EXHAUSTED

    def raise_for_status(self) -> None:
        """Raise the planning error matching a failed search."""

        if self.state is SearchState.BLOCKED:
            raise TargetBlockedError(self.target, self.altitude)
        if self.state is SearchState.EXHAUSTED:
            raise SearchExhaustedError(self.iterations)


def prune_waypoints(
    waypoints: Sequence[GeoPoint],
    segment_blocked: Callable[[GeoPoint, GeoPoint], bool],
) -> List[GeoPoint]:
    """Drop waypoints that can be skipped by a clear straight leg.

    The first waypoint (the vehicle position) is never used as a shortcut
    anchor, so the leg leaving it is kept as planned. For each anchor ``i``
    the leg ``i -> i+2`` is tested; when clear, ``i+1`` is removed and the
    anchor steps back one place (never below 1) because its own ``+2``
    neighbour has just changed. Otherwise the anchor advances. The result is
    a new list and pruning it again changes nothing.
    """

    pruned = list(waypoints)
    anchor = 1
    while anchor + 2 < len(pruned):
        if segment_blocked(pruned[anchor], pruned[anchor + 2]):
            anchor += 1
        else:
            del pruned[anchor + 1]
            anchor = max(1, anchor - 1)
    return pruned


class RrtSearch:
    """Single-use RRT search between a vehicle position and a target.

    The search space is built in the constructor, so a space that leaves
    data coverage raises ``SpaceUnavailableError`` before any growth.
    """

    def __init__(
        self,
        start: GeoPoint,
        heading_deg: float,
        altitude: float,
        target: GeoPoint,
        oracle: CollisionOracle,
        *,
        goal_bias: float = DEFAULT_GOAL_BIAS,
        geometry: Optional[SpaceGeometry] = None,
        branch_length_m: Optional[float] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 <= goal_bias <= 1.0:
            raise ValueError("goal_bias must lie within [0, 1]")
        if branch_length_m is not None and branch_length_m <= 0:
            raise ValueError("branch_length_m must be positive")

        self.start = start
        self.target = target
        self.heading_deg = normalize_bearing(heading_deg)
        self.altitude = altitude
        self.oracle = oracle
        self.goal_bias = goal_bias
        self._rng = rng if rng is not None else random.Random(seed)

        self.target_distance_m = distance_m(start, target)
        self.branch_length_m = (
            branch_length_m if branch_length_m is not None else self.target_distance_m
        )

        self.state = SearchState.INITIALIZING
        self.space: SearchSpace = build_search_space(
            start,
            self.heading_deg,
            self.target_distance_m,
            oracle.within_coverage,
            geometry or SpaceGeometry(),
        )
        self.tree = SearchTree(start)
        self.accepted_steps = 0
        self.rejected_steps = 0
        self._consumed = False
        LOGGER.debug(
            "RrtSearch created start=%s target=%s heading=%.1f altitude=%s branch=%.1fm",
            start,
            target,
            self.heading_deg,
            altitude,
            self.branch_length_m,
        )

    def _random_point(self) -> GeoPoint:
        """Uniform draw along both space axes, expressed as an offset from the origin."""

        along_width = self._rng.random() * self.space.width_m
        along_height = self._rng.random() * self.space.height_m
        offset = math.hypot(along_width, along_height)
        if offset == 0.0:
            return self.space.origin
        # 0 deg runs along the front edge, 90 deg along the left edge towards the rear.
        angle = math.degrees(math.acos(min(1.0, along_width / offset)))
        bearing = normalize_bearing(self.space.heading_deg + 90.0 + angle)
        return destination(self.space.origin, bearing, offset)

    def _step(self, force_target: bool = False) -> bool:
        """Run one growth step; return ``True`` once a clear edge reaches the target."""

        toward_target = force_target or self._rng.random() < self.goal_bias
        candidate = self.target if toward_target else self._random_point()
        nearest = self.tree.nearest_to(candidate)

        reaching_target = (
            toward_target and distance_m(nearest.point, candidate) <= self.branch_length_m
        )
        if not reaching_target:
            candidate = destination(
                nearest.point, bearing_deg(nearest.point, candidate), self.branch_length_m
            )

        if self.oracle.segment_blocked(nearest.point, candidate, self.altitude):
            self.rejected_steps += 1
            return False
        self.tree.add(candidate, nearest)
        self.accepted_steps += 1
        return reaching_target

    def _extract_waypoints(self) -> List[GeoPoint]:
        path = self.tree.path_to_root(self.tree.nearest_to(self.target))
        pruned = prune_waypoints(
            path, lambda first, second: self.oracle.segment_blocked(first, second, self.altitude)
        )
        LOGGER.debug("Extracted path of %s points, %s after pruning", len(path), len(pruned))
        # Drop the vehicle position, then the node reaching the target.
        waypoints = pruned[1:]
        if waypoints:
            waypoints.pop()
        return waypoints

    def _result(
        self, iterations: int, started: float, waypoints: Optional[List[GeoPoint]] = None
    ) -> SearchResult:
        return SearchResult(
            state=self.state,
            target=self.target,
            altitude=self.altitude,
            waypoints=waypoints or [],
            iterations=iterations,
            node_count=self.tree.size(),
            elapsed_seconds=time.perf_counter() - started,
        )

    def run_search(self, iterations: int) -> SearchResult:
        """Grow the tree for at most ``iterations`` steps and return the outcome."""

        if iterations < 0:
            raise ValueError("iterations must be zero or positive")
        if self._consumed:
            raise RuntimeError("RrtSearch instances are single use; create a new search")
        self._consumed = True
        started = time.perf_counter()

        if self.oracle.point_blocked(self.target, self.altitude):
            self.state = SearchState.BLOCKED
            LOGGER.warning(
                "Target %s is blocked at altitude %s; no path possible", self.target, self.altitude
            )
            return self._result(0, started)

        if self.target_distance_m == 0.0:
            self.state = SearchState.SUCCEEDED
            LOGGER.info("Target coincides with the vehicle position; nothing to plan")
            return self._result(0, started)

        self.state = SearchState.GROWING
        used = 0
        while used < iterations:
            used += 1
            # The opening step always tries the straight leg from the root.
            if self._step(force_target=used == 1):
                self.state = SearchState.SUCCEEDED
                break

        if self.state is not SearchState.SUCCEEDED:
            self.state = SearchState.EXHAUSTED
            result = self._result(used, started)
            LOGGER.warning(
                "RRT path not found after %s iterations (%s nodes, %.3fs)",
                used,
                result.node_count,
                result.elapsed_seconds,
            )
            return result

        result = self._result(used, started, self._extract_waypoints())
        LOGGER.info(
            "Collision-free path found in %s iterations with %s waypoints (%s nodes, %.3fs)",
            used,
            len(result.waypoints),
            result.node_count,
            result.elapsed_seconds,
        )
        for position, waypoint in enumerate(result.waypoints):
            LOGGER.debug(
                "RRT waypoint %s lat=%.7f lon=%.7f alt=%s",
                position,
                waypoint.latitude,
                waypoint.longitude,
                self.altitude,
            )
        return result
