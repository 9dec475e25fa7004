"""Stabilization of noisy GPS fixes before they reach the damage model.

Fixes are projected into a local east/north frame anchored at the first fix
after a reset. Each axis runs its own alpha-beta tracker, fed only by fixes
that pass a plausibility gate. The tracker output is smoothed once more with
an exponential moving average and projected back to a coordinate.

Known trade-off: movement below the noise threshold is rejected, so small
genuine steps are smoothed away together with the jitter.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from hazardwalk.constants.tracking import TrackingConstants as Tracking
from hazardwalk.geo.coords import (
    Coordinate,
    calculate_distance_meters,
    coords_to_offsets,
    offsets_to_coords,
)
from hazardwalk.types import FixTimestamp, Vec2

logger = logging.getLogger(__name__)


def clamp_filter_dt(dt: float) -> float:
    """Bound a tracker step to ``[0.05, 3]`` seconds.

    Non-finite or non-positive deltas fall back to one second.
    """
    if not math.isfinite(dt) or dt <= 0:
        return Tracking.FILTER_FALLBACK_DT_SECONDS
    return min(max(dt, Tracking.FILTER_MIN_DT_SECONDS), Tracking.FILTER_MAX_DT_SECONDS)


@dataclass
class AxisTracker:
    """Alpha-beta estimator for one planar axis."""

    position: float = 0.0
    velocity: float = 0.0
    initialized: bool = False

    def step(
        self, measurement: float | None, dt: float, alpha: float, beta: float
    ) -> float:
        """Advance by ``dt`` and fold in ``measurement`` when there is one.

        A missing measurement leaves the prediction in place (dead reckoning).
        The first measurement seeds the position with zero velocity.
        """
        if not self.initialized:
            if measurement is not None:
                self.position = measurement
                self.velocity = 0.0
                self.initialized = True
            return self.position

        predicted = self.position + self.velocity * dt
        if measurement is None:
            self.position = predicted
            return self.position

        residual = measurement - predicted
        self.position = predicted + alpha * residual
        self.velocity += (beta / dt) * residual
        return self.position

    def reset(self) -> None:
        self.position = 0.0
        self.velocity = 0.0
        self.initialized = False


class PositionFilter:
    """Turns a stream of raw fixes into a stabilized coordinate stream.

    Attributes:
        reference: Anchor of the local frame, the first fix since reset.
        stabilized: Most recent output coordinate.
        last_update_accepted: Whether the latest fix passed the gate.
    """

    def __init__(
        self,
        alpha: float = Tracking.FILTER_ALPHA,
        beta: float = Tracking.FILTER_BETA,
        smoothing: float = Tracking.SMOOTHING_ALPHA,
    ) -> None:
        self.alpha = alpha
        self.beta = beta
        self.smoothing = smoothing
        self.x_tracker = AxisTracker()
        self.y_tracker = AxisTracker()
        self.reference: Coordinate | None = None
        self.stabilized: Coordinate | None = None
        self.last_update_accepted = False
        self._smoothed_offset: Vec2 | None = None
        self._last_stable: Coordinate | None = None
        self._last_stable_time: FixTimestamp | None = None
        self._last_timestamp: FixTimestamp | None = None

    def reset(self) -> None:
        """Forget everything. Called when tracking is interrupted."""
        self.x_tracker.reset()
        self.y_tracker.reset()
        self.reference = None
        self.stabilized = None
        self.last_update_accepted = False
        self._smoothed_offset = None
        self._last_stable = None
        self._last_stable_time = None
        self._last_timestamp = None

    def update(
        self, coordinate: Coordinate, timestamp: FixTimestamp
    ) -> Coordinate | None:
        """Feed one raw fix and return the stabilized coordinate.

        Returns:
            The filtered coordinate, or None while no usable fix has been seen
            since the last reset.
        """
        usable = coordinate.is_finite()
        if self.reference is None:
            if not usable:
                logger.debug("Ignoring non-finite fix before the filter is anchored")
                return None
            self.reference = coordinate

        if self._last_timestamp is None:
            dt = Tracking.FILTER_FALLBACK_DT_SECONDS
        else:
            dt = clamp_filter_dt(timestamp - self._last_timestamp)
        self._last_timestamp = timestamp

        accepted = usable and self._passes_gate(coordinate, timestamp)
        self.last_update_accepted = accepted

        measurement: Vec2 | None = None
        if accepted:
            measurement = coords_to_offsets(self.reference, coordinate)
            self._last_stable = coordinate
            self._last_stable_time = timestamp

        x = self.x_tracker.step(
            measurement.x if measurement else None, dt, self.alpha, self.beta
        )
        y = self.y_tracker.step(
            measurement.y if measurement else None, dt, self.alpha, self.beta
        )

        if self._smoothed_offset is None:
            self._smoothed_offset = Vec2(x, y)
        else:
            prev = self._smoothed_offset
            self._smoothed_offset = Vec2(
                prev.x + self.smoothing * (x - prev.x),
                prev.y + self.smoothing * (y - prev.y),
            )

        self.stabilized = offsets_to_coords(
            self.reference, self._smoothed_offset.x, self._smoothed_offset.y
        )
        return self.stabilized

    def _passes_gate(self, coordinate: Coordinate, timestamp: FixTimestamp) -> bool:
        """Accept plausible movement, reject jumps and sub-noise jitter."""
        if self._last_stable is None or self._last_stable_time is None:
            return True

        movement = calculate_distance_meters(self._last_stable, coordinate)
        elapsed = timestamp - self._last_stable_time
        if not math.isfinite(elapsed) or elapsed <= 0:
            elapsed = Tracking.FILTER_FALLBACK_DT_SECONDS
        elapsed = max(elapsed, Tracking.FILTER_MIN_DT_SECONDS)

        speed = movement / elapsed
        if speed > Tracking.MAX_PLAUSIBLE_SPEED_MPS:
            logger.debug(f"Rejected fix implying {speed:.1f} m/s")
            return False
        return movement >= Tracking.MIN_ACCEPTED_MOVEMENT_METERS
