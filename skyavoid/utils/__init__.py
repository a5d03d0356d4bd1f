"""Mini README: Utility helpers for SkyAvoid.

Exports the GeoJSON parsers used to load obstacle footprints and coverage
bounds from operator supplied files and HTTP payloads.
"""

from .geojson import ObstacleFootprint, bounds_from_geojson, obstacles_from_geojson

__all__ = ["ObstacleFootprint", "bounds_from_geojson", "obstacles_from_geojson"]
