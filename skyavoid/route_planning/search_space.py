"""Mini README: Heading-biased sampling space for the RRT search.

Structure:
    * SpaceGeometry - tunable corner angles and distance scale.
    * SearchSpace - immutable quadrilateral (origin, width, height, corners).
    * build_search_space - compute and validate the quadrilateral.

The space extends further ahead of the vehicle than behind it. Front corners
sit ``front_angle`` either side of the heading at ``front_scale * d``; rear
corners sit ``90 + front_angle / rear_divisor`` either side at a distance
scaled so that the rear corners project onto the same lateral width. The
front-left corner is the sampling origin; width runs towards the front-right
corner and height towards the rear-left corner. Earth curvature makes the
opposite edges slightly unequal, which is accepted.

The space only scales random sampling. Path validity is always decided by
the collision oracle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict

from ..geo import GeoPoint, destination, distance_m, normalize_bearing
from ..logging_utils import get_logger
from .exceptions import SpaceUnavailableError

LOGGER = get_logger(__name__)

CORNER_ORDER = ("front_left", "front_right", "rear_left", "rear_right")


@dataclass(frozen=True, slots=True)
class SpaceGeometry:
    """Shape parameters of the search quadrilateral."""

    front_scale: float = 3.0
    front_angle_deg: float = 45.0
    rear_angle_divisor: float = 2.0

    def __post_init__(self) -> None:
        if self.front_scale <= 0:
            raise ValueError("front_scale must be positive")
        if not 0 < self.front_angle_deg < 90:
            raise ValueError("front_angle_deg must lie strictly between 0 and 90")
        if self.rear_angle_divisor < 1:
            raise ValueError("rear_angle_divisor must be at least 1")

    @property
    def rear_angle_deg(self) -> float:
        return self.front_angle_deg / self.rear_angle_divisor

    @property
    def rear_scale(self) -> float:
        return (
            self.front_scale
            * math.cos(math.radians(self.front_angle_deg))
            / math.cos(math.radians(self.rear_angle_deg))
        )


@dataclass(frozen=True, slots=True)
class SearchSpace:
    """Sampling bounds computed once per search."""

    origin: GeoPoint
    width_m: float
    height_m: float
    heading_deg: float
    corners: Dict[str, GeoPoint]


def corner_positions(
    vehicle: GeoPoint,
    heading_deg: float,
    target_distance_m: float,
    geometry: SpaceGeometry,
) -> Dict[str, GeoPoint]:
    """Return the four corners keyed by name, without any coverage check."""

    front = geometry.front_scale * target_distance_m
    rear = geometry.rear_scale * target_distance_m
    rear_offset = 90.0 + geometry.rear_angle_deg
    bearings = {
        "front_left": (normalize_bearing(heading_deg - geometry.front_angle_deg), front),
        "front_right": (normalize_bearing(heading_deg + geometry.front_angle_deg), front),
        "rear_left": (normalize_bearing(heading_deg - rear_offset), rear),
        "rear_right": (normalize_bearing(heading_deg + rear_offset), rear),
    }
    return {
        name: destination(vehicle, bearing, distance)
        for name, (bearing, distance) in bearings.items()
    }


def build_search_space(
    vehicle: GeoPoint,
    heading_deg: float,
    target_distance_m: float,
    within_coverage: Callable[[GeoPoint], bool],
    geometry: SpaceGeometry = SpaceGeometry(),
) -> SearchSpace:
    """Compute the sampling quadrilateral, failing if any corner lacks data coverage."""

    heading = normalize_bearing(heading_deg)
    corners = corner_positions(vehicle, heading, target_distance_m, geometry)
    for name in CORNER_ORDER:
        if not within_coverage(corners[name]):
            LOGGER.warning("Search space %s corner %s is outside coverage", name, corners[name])
            raise SpaceUnavailableError(name, corners[name])

    space = SearchSpace(
        origin=corners["front_left"],
        width_m=distance_m(corners["front_left"], corners["front_right"]),
        height_m=distance_m(corners["front_left"], corners["rear_left"]),
        heading_deg=heading,
        corners=corners,
    )
    LOGGER.debug(
        "Search space heading=%.1f width=%.1fm height=%.1fm origin=%s",
        heading,
        space.width_m,
        space.height_m,
        space.origin,
    )
    return space
