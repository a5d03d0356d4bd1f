"""Mini README: Great-circle geometry on a spherical Earth.

Structure:
    * GeoPoint - immutable latitude/longitude pair in degrees.
    * distance_m - haversine (orthodromic) distance in meters.
    * bearing_deg - initial bearing from one point towards another.
    * destination - point reached after travelling a distance on a bearing.
    * normalize_bearing - wrap any angle into [0, 360).

All planner geometry (space corners, nearest-node queries, branch extension)
goes through these functions so that every distance and bearing shares the
same Earth model. Logging is deliberately absent: these are hot-path calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS_M = 6_371_008.8


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return ``(latitude, longitude)``."""

        return (self.latitude, self.longitude)

    def as_lon_lat(self) -> Tuple[float, float]:
        """Return ``(longitude, latitude)`` as used by GeoJSON and shapely."""

        return (self.longitude, self.latitude)


def normalize_bearing(bearing: float) -> float:
    """Wrap a bearing in degrees into [0, 360)."""

    wrapped = math.fmod(bearing, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # fmod of a tiny negative number plus 360 can round up to exactly 360
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def distance_m(origin: GeoPoint, other: GeoPoint) -> float:
    """Haversine great-circle distance between two points in meters."""

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(other.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(other.longitude - origin.longitude)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))


def bearing_deg(origin: GeoPoint, towards: GeoPoint) -> float:
    """Initial bearing in degrees [0, 360) from ``origin`` towards ``towards``.

    Coincident points yield ``0.0`` (north).
    """

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(towards.latitude)
    dlon = math.radians(towards.longitude - origin.longitude)
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def destination(origin: GeoPoint, bearing: float, distance: float) -> GeoPoint:
    """Point reached from ``origin`` after ``distance`` meters on ``bearing`` degrees."""

    lat = math.radians(origin.latitude)
    lon = math.radians(origin.longitude)
    theta = math.radians(bearing)
    delta = distance / EARTH_RADIUS_M

    dest_lat = math.asin(
        math.sin(lat) * math.cos(delta) + math.cos(lat) * math.sin(delta) * math.cos(theta)
    )
    dest_lon = lon + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat),
        math.cos(delta) - math.sin(lat) * math.sin(dest_lat),
    )
    longitude = (math.degrees(dest_lon) + 540.0) % 360.0 - 180.0
    return GeoPoint(latitude=math.degrees(dest_lat), longitude=longitude)
