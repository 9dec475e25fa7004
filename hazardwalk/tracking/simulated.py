"""A scripted location provider for demos and tests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import numpy as np

from hazardwalk.geo.coords import (
    Coordinate,
    calculate_distance_meters,
    coords_to_offsets,
    offsets_to_coords,
)
from hazardwalk.types import FixTimestamp, Meters, RandomSeed

from .provider import (
    FixCallback,
    LocationCoords,
    LocationFix,
    LocationProvider,
    LocationSubscription,
    LocationUnavailableError,
    PermissionStatus,
)

logger = logging.getLogger(__name__)


def walk_path(
    start: Coordinate,
    end: Coordinate,
    *,
    speed_mps: float = 1.4,
    start_time: FixTimestamp = 0.0,
    interval_seconds: float = 1.0,
    jitter_meters: Meters = 0.0,
    accuracy: Meters | None = 5.0,
    seed: RandomSeed = None,
) -> list[LocationFix]:
    """Generate fixes for a straight walk from ``start`` to ``end``.

    Positions are sampled every ``interval_seconds``. When ``jitter_meters``
    is positive each fix gets independent Gaussian noise of that standard
    deviation on both axes, mimicking consumer GPS scatter.
    """
    total = coords_to_offsets(start, end)
    length = float(np.hypot(total.x, total.y))
    duration = length / speed_mps if speed_mps > 0 else 0.0
    steps = int(np.ceil(duration / interval_seconds)) if duration > 0 else 0

    fractions = np.linspace(0.0, 1.0, steps + 1)
    xs = fractions * total.x
    ys = fractions * total.y
    if jitter_meters > 0:
        generator = np.random.default_rng(seed)
        xs = xs + generator.normal(0.0, jitter_meters, size=xs.shape)
        ys = ys + generator.normal(0.0, jitter_meters, size=ys.shape)

    fixes: list[LocationFix] = []
    for i, (x, y) in enumerate(zip(xs, ys, strict=True)):
        coordinate = offsets_to_coords(start, float(x), float(y))
        fixes.append(
            LocationFix(
                coords=LocationCoords(
                    latitude=coordinate.latitude,
                    longitude=coordinate.longitude,
                    accuracy=accuracy,
                ),
                timestamp=start_time + i * interval_seconds,
            )
        )
    return fixes


class _ReplaySubscription(LocationSubscription):
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done() and not self._task.cancelling()

    def remove(self) -> None:
        if not self._task.done():
            self._task.cancel()


class SimulatedLocationProvider(LocationProvider):
    """Replays a fixed list of fixes.

    The first fix answers ``get_current_position()``; the rest are pushed to
    the watch callback, one every ``push_interval`` seconds of real time,
    skipping fixes closer than the requested distance interval to the last
    one pushed.
    """

    def __init__(
        self,
        fixes: Sequence[LocationFix],
        *,
        permission: PermissionStatus = PermissionStatus.GRANTED,
        push_interval: float = 1.0,
        failure: Exception | None = None,
    ) -> None:
        self.fixes = list(fixes)
        self.permission = permission
        self.push_interval = push_interval
        self.failure = failure
        self.permission_requests = 0
        self.subscriptions: list[_ReplaySubscription] = []

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        return self.permission

    async def get_current_position(self) -> LocationFix:
        if self.failure is not None:
            raise self.failure
        if not self.fixes:
            raise LocationUnavailableError("No simulated fixes available")
        return self.fixes[0]

    async def watch_position(
        self, callback: FixCallback, *, distance_interval: Meters
    ) -> LocationSubscription:
        task = asyncio.create_task(self._replay(callback, distance_interval))
        subscription = _ReplaySubscription(task)
        self.subscriptions = [s for s in self.subscriptions if s.active]
        self.subscriptions.append(subscription)
        return subscription

    async def _replay(self, callback: FixCallback, distance_interval: Meters) -> None:
        last_pushed = self.fixes[0].coords.coordinate if self.fixes else None
        for fix in self.fixes[1:]:
            await asyncio.sleep(self.push_interval)
            coordinate = fix.coords.coordinate
            if (
                last_pushed is not None
                and calculate_distance_meters(last_pushed, coordinate)
                < distance_interval
            ):
                continue
            last_pushed = coordinate
            try:
                callback(fix)
            except Exception:
                logger.exception("Error delivering simulated fix")
        logger.debug("Simulated fix stream exhausted")
