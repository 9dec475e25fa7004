"""Particle motion inside a disk with elastic reflection at the rim.

Everything here works on value types in a local planar frame whose origin is
the center of the disk. No state is kept between calls.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from hazardwalk.constants.tracking import TrackingConstants as Tracking
from hazardwalk.types import Degrees, Meters, Vec2


class CircleStep(NamedTuple):
    """Result of advancing a point inside a circle."""

    position: Vec2
    direction: Vec2


def normalize_vector(vector: Vec2) -> Vec2:
    """Scale ``vector`` to unit length. A zero vector stays zero."""
    length = math.hypot(vector.x, vector.y) or 1.0
    return Vec2(vector.x / length, vector.y / length)


def heading_from_degrees(degrees: Degrees) -> Vec2:
    """Unit heading for an angle measured counter-clockwise from east."""
    radians = math.radians(degrees)
    return normalize_vector(Vec2(math.cos(radians), math.sin(radians)))


def clamp_offset_to_radius(
    offset: Vec2,
    radius: Meters,
    fraction: float = Tracking.INITIAL_OFFSET_RADIUS_FRACTION,
) -> Vec2:
    """Pull an offset lying outside ``radius`` back to ``fraction * radius``.

    Offsets already inside the circle are returned unchanged.
    """
    length = math.hypot(offset.x, offset.y)
    if length == 0:
        return Vec2(0.0, 0.0)
    if length <= radius:
        return Vec2(offset.x, offset.y)
    scale = (radius * fraction) / length
    return Vec2(offset.x * scale, offset.y * scale)


def _project_onto_boundary(position: Vec2, radius: Meters) -> Vec2:
    length = math.hypot(position.x, position.y)
    if length == 0:
        return position
    scale = radius / length
    return Vec2(position.x * scale, position.y * scale)


def advance_within_circle(
    offset: Vec2,
    direction: Vec2,
    distance: Meters,
    radius: Meters,
    max_reflections: int = Tracking.MAX_REFLECTIONS_PER_STEP,
) -> CircleStep:
    """Move ``distance`` along ``direction``, bouncing off the circle's rim.

    The point travels in a straight line until it would leave the circle of
    ``radius`` centered at the origin. At the rim the heading is mirrored about
    the outward normal (``v' = v - 2(v.n)n``) and travel continues with the
    remaining distance. At most ``max_reflections`` bounces are resolved per
    call; any distance left after that is dropped with the point on the rim.

    Args:
        offset: Current position relative to the circle's center.
        direction: Heading; normalized before use.
        distance: Distance to travel in meters.
        radius: Radius of the bounding circle, must be positive.
        max_reflections: Bounce budget for this call.

    Returns:
        The new position and heading.
    """
    position = Vec2(offset.x, offset.y)
    heading = normalize_vector(direction)
    radius_squared = radius * radius

    if position.x * position.x + position.y * position.y > radius_squared:
        position = _project_onto_boundary(position, radius)

    remaining = distance
    reflections = 0
    while remaining > 0 and reflections < max_reflections:
        target = Vec2(
            position.x + heading.x * remaining, position.y + heading.y * remaining
        )
        if math.hypot(target.x, target.y) <= radius:
            position = target
            break

        pd = position.x * heading.x + position.y * heading.y
        pp = position.x * position.x + position.y * position.y
        discriminant = pd * pd - (pp - radius_squared)

        if discriminant < 0:
            # No forward intersection left; settle on the rim and stop.
            position = _project_onto_boundary(position, radius)
            break

        travel_to_boundary = -pd + math.sqrt(discriminant)
        position = Vec2(
            position.x + heading.x * travel_to_boundary,
            position.y + heading.y * travel_to_boundary,
        )
        remaining = max(remaining - travel_to_boundary, 0.0)

        normal = Vec2(position.x / radius, position.y / radius)
        dot = heading.x * normal.x + heading.y * normal.y
        heading = normalize_vector(
            Vec2(heading.x - 2 * dot * normal.x, heading.y - 2 * dot * normal.y)
        )
        reflections += 1

    return CircleStep(position, heading)
