"""Geo math and planar kinematics."""

from .coords import (
    Coordinate,
    calculate_distance_meters,
    calculate_distances_meters,
    coords_to_offsets,
    meters_per_degree_lon,
    offsets_to_coords,
)
from .kinematics import (
    CircleStep,
    advance_within_circle,
    clamp_offset_to_radius,
    heading_from_degrees,
    normalize_vector,
)

__all__ = [
    "CircleStep",
    "Coordinate",
    "advance_within_circle",
    "calculate_distance_meters",
    "calculate_distances_meters",
    "clamp_offset_to_radius",
    "coords_to_offsets",
    "heading_from_degrees",
    "meters_per_degree_lon",
    "normalize_vector",
    "offsets_to_coords",
]
