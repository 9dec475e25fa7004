"""Runtime state of the roaming hazard."""

from __future__ import annotations

from hazardwalk.geo.coords import Coordinate, offsets_to_coords
from hazardwalk.geo.kinematics import (
    advance_within_circle,
    clamp_offset_to_radius,
    heading_from_degrees,
)
from hazardwalk.types import DeltaTime, Vec2

from .zones import MovingHazardConfig


class MovingHazard:
    """A hazard bouncing around inside its motion circle.

    The hazard keeps its position as a local offset from the circle's center
    and derives its geographic coordinate from that offset after every move.
    Motion is deterministic: the same sequence of deltas always yields the
    same path.

    Attributes:
        config: Immutable shape and motion parameters.
        offset: Position relative to ``config.center`` in meters.
        heading: Unit heading of travel.
        coordinate: Geographic position derived from ``offset``.
    """

    def __init__(self, config: MovingHazardConfig) -> None:
        self.config = config
        initial = config.initial_offset or Vec2(config.radius_meters * 0.5, 0.0)
        self.offset = clamp_offset_to_radius(initial, config.radius_meters)
        self.heading = heading_from_degrees(config.initial_heading_degrees)
        self.coordinate = self._derive_coordinate()

    def advance(self, delta_time: DeltaTime) -> Coordinate:
        """Travel for ``delta_time`` seconds and return the new coordinate."""
        travel = self.config.speed_mps * delta_time
        step = advance_within_circle(
            self.offset, self.heading, travel, self.config.radius_meters
        )
        self.offset = step.position
        self.heading = step.direction
        self.coordinate = self._derive_coordinate()
        return self.coordinate

    def _derive_coordinate(self) -> Coordinate:
        return offsets_to_coords(self.config.center, self.offset.x, self.offset.y)
