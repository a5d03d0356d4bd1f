"""Mini README: Error taxonomy for avoidance path planning.

Structure:
    * PathPlanningError - base class for every recoverable planning failure.
    * SpaceUnavailableError - search space corner outside data coverage.
    * TargetBlockedError - target lies inside terrain or an obstacle.
    * SearchExhaustedError - iteration budget consumed without a path.

None of these are fatal; callers decide whether to retry. Only
``SearchExhaustedError`` is marked retryable.
"""

from __future__ import annotations

from typing import Optional

from ..geo import GeoPoint


class PathPlanningError(Exception):
    """Base class for planner failures surfaced to callers."""

    retryable: bool = False


class SpaceUnavailableError(PathPlanningError):
    """A search space corner fell outside elevation/obstacle data coverage."""

    def __init__(self, corner: str, position: GeoPoint) -> None:
        self.corner = corner
        self.position = position
        super().__init__(
            f"Search space {corner} corner ({position.latitude:.6f}, {position.longitude:.6f}) "
            "lies outside data coverage"
        )


class TargetBlockedError(PathPlanningError):
    """The requested target is itself inside terrain or an obstacle footprint."""

    def __init__(self, target: GeoPoint, altitude: Optional[float] = None) -> None:
        self.target = target
        self.altitude = altitude
        super().__init__(
            f"Target ({target.latitude:.6f}, {target.longitude:.6f}) is blocked"
            + (f" at altitude {altitude}" if altitude is not None else "")
        )


class SearchExhaustedError(PathPlanningError):
    """Iteration budget ran out before the tree reached the target."""

    retryable = True

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        super().__init__(f"No collision-free path found within {iterations} iterations")
