"""Mini README: GeoJSON helper utilities for SkyAvoid.

Structure:
    * ObstacleFootprint - plain record of a parsed obstacle polygon.
    * bounds_from_geojson - polygon payload to (lat_min, lon_min, lat_max, lon_max).
    * obstacles_from_geojson - Feature/FeatureCollection to obstacle footprints.

GeoJSON stores coordinates as ``[longitude, latitude]``; everything returned
here is flipped to ``(latitude, longitude)`` to match ``GeoPoint``. Keeping
the parsing separate from shapely lets the web layer validate payloads
before any geometry is built.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, NamedTuple, Tuple


class ObstacleFootprint(NamedTuple):
    """Outer ring of an obstacle with its top elevation in meters."""

    name: str
    ring: List[Tuple[float, float]]
    elevation_m: float


def _load(payload: str) -> Dict[str, Any]:
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as error:
        raise ValueError("GeoJSON payload is invalid JSON") from error
    if not isinstance(document, dict):
        raise ValueError("GeoJSON payload must be an object")
    return document


def _outer_ring(geometry: Any) -> List[Tuple[float, float]]:
    if not isinstance(geometry, dict) or geometry.get("type") != "Polygon":
        raise ValueError("Only polygon GeoJSON payloads are supported")
    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list) or not coordinates or not isinstance(coordinates[0], list):
        raise ValueError("Polygon coordinates are required")
    if not coordinates[0]:
        raise ValueError("Polygon outer ring is empty")
    try:
        return [(float(point[1]), float(point[0])) for point in coordinates[0]]
    except (TypeError, ValueError, IndexError, KeyError) as error:
        raise ValueError("Polygon positions must be [longitude, latitude] number pairs") from error


def bounds_from_geojson(area_geojson: str) -> Tuple[float, float, float, float]:
    """Validate GeoJSON and return bounding coordinates as (lat_min, lon_min, lat_max, lon_max)."""

    geojson = _load(area_geojson)
    geometry = geojson.get("geometry") if geojson.get("type") == "Feature" else geojson
    ring = _outer_ring(geometry)
    lats = [lat for lat, _ in ring]
    lons = [lon for _, lon in ring]
    return (min(lats), min(lons), max(lats), max(lons))


def obstacles_from_geojson(obstacles_geojson: str) -> List[ObstacleFootprint]:
    """Parse polygon features carrying an ``elevation`` property (meters AMSL)."""

    geojson = _load(obstacles_geojson)
    if geojson.get("type") == "FeatureCollection":
        features = geojson.get("features") or []
        if not isinstance(features, list):
            raise ValueError("FeatureCollection 'features' must be a list")
    elif geojson.get("type") == "Feature":
        features = [geojson]
    else:
        raise ValueError("Obstacles must be a GeoJSON Feature or FeatureCollection")

    footprints: List[ObstacleFootprint] = []
    for position, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise ValueError(f"Obstacle feature {position} is not a GeoJSON object")
        properties = feature.get("properties") or {}
        if not isinstance(properties, dict):
            raise ValueError(f"Obstacle feature {position} has malformed properties")
        if "elevation" not in properties:
            raise ValueError(f"Obstacle feature {position} has no 'elevation' property")
        try:
            elevation = float(properties["elevation"])
        except (TypeError, ValueError) as error:
            raise ValueError(f"Obstacle feature {position} has a non-numeric elevation") from error
        name = str(properties.get("name", f"obstacle_{position}"))
        footprints.append(
            ObstacleFootprint(
                name=name,
                ring=_outer_ring(feature.get("geometry")),
                elevation_m=elevation,
            )
        )
    return footprints
