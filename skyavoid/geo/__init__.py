"""Mini README: Geographic primitives shared by the planner.

Exports the ``GeoPoint`` value type and the great-circle helpers used by the
search space builder, the spatial index and the RRT engine.
"""

from .metric import (
    EARTH_RADIUS_M,
    GeoPoint,
    bearing_deg,
    destination,
    distance_m,
    normalize_bearing,
)

__all__ = [
    "EARTH_RADIUS_M",
    "GeoPoint",
    "bearing_deg",
    "destination",
    "distance_m",
    "normalize_bearing",
]
