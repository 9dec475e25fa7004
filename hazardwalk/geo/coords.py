"""Geographic coordinates and the conversions between them.

Two distance models live here:

- ``calculate_distance_meters`` is the haversine great-circle distance. It is
  the only distance used to score damage.
- ``offsets_to_coords`` / ``coords_to_offsets`` use the equirectangular
  approximation around a reference coordinate. They are only accurate for
  offsets of a few hundred meters and are used internally by the moving
  hazard and the position filter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from hazardwalk.constants.tracking import TrackingConstants as Tracking
from hazardwalk.types import Degrees, Meters, Vec2


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in decimal degrees."""

    latitude: Degrees
    longitude: Degrees

    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


def meters_per_degree_lon(latitude: Degrees) -> float:
    """Length of one degree of longitude at ``latitude``."""
    return math.cos(math.radians(latitude)) * Tracking.METERS_PER_DEGREE_LAT


def offsets_to_coords(
    center: Coordinate, offset_x: Meters, offset_y: Meters
) -> Coordinate:
    """Convert a local east/north offset from ``center`` into a coordinate."""
    delta_lat = offset_y / Tracking.METERS_PER_DEGREE_LAT
    delta_lon = offset_x / meters_per_degree_lon(center.latitude)
    return Coordinate(center.latitude + delta_lat, center.longitude + delta_lon)


def coords_to_offsets(center: Coordinate, coordinate: Coordinate) -> Vec2:
    """Inverse of :func:`offsets_to_coords` for the same ``center``."""
    offset_x = (coordinate.longitude - center.longitude) * meters_per_degree_lon(
        center.latitude
    )
    offset_y = (coordinate.latitude - center.latitude) * Tracking.METERS_PER_DEGREE_LAT
    return Vec2(offset_x, offset_y)


def calculate_distance_meters(origin: Coordinate, target: Coordinate) -> Meters:
    """Great-circle distance between two coordinates (haversine)."""
    d_lat = math.radians(target.latitude - origin.latitude)
    d_lon = math.radians(target.longitude - origin.longitude)
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return Tracking.EARTH_RADIUS_METERS * c


def calculate_distances_meters(
    origin: Coordinate, latitudes: np.ndarray, longitudes: np.ndarray
) -> np.ndarray:
    """Vectorized haversine from ``origin`` to many targets.

    Args:
        origin: The observer's coordinate.
        latitudes: Target latitudes in degrees.
        longitudes: Target longitudes in degrees, same shape as ``latitudes``.

    Returns:
        Float64 array of distances in meters, one per target.
    """
    lats = np.radians(np.asarray(latitudes, dtype=np.float64))
    lons = np.radians(np.asarray(longitudes, dtype=np.float64))
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    a = (
        np.sin((lats - lat1) / 2) ** 2
        + math.cos(lat1) * np.cos(lats) * np.sin((lons - lon1) / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return Tracking.EARTH_RADIUS_METERS * c
