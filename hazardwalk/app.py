"""Runtime wiring: location provider, survival session and the 1 Hz timer.

Everything runs on one asyncio event loop. Fixes arrive through the
provider's callback and ticks through a background task; both mutate the
same session, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from contextlib import suppress

from hazardwalk import config
from hazardwalk.game.haptics import HapticBackend
from hazardwalk.game.session import SurvivalSession
from hazardwalk.tracking.controller import TrackingController
from hazardwalk.tracking.provider import LocationProvider
from hazardwalk.util.clock import Clock
from hazardwalk.view.hud import HudSnapshot, build_hud_snapshot

logger = logging.getLogger(__name__)


class SurvivalApp:
    """Owns the session and drives it from the provider and the timer.

    Args:
        provider: Platform (or simulated) location provider.
        session: Session to drive. A fresh one is created when omitted.
        haptic_backend: Actuator for a freshly created session.
        use_position_filter: Filter setting for a freshly created session.
        tick_period: Seconds between timer ticks.
        on_tick: Called after every tick, e.g. to redraw the HUD.
    """

    def __init__(
        self,
        provider: LocationProvider,
        *,
        session: SurvivalSession | None = None,
        haptic_backend: HapticBackend | None = None,
        use_position_filter: bool = config.POSITION_FILTER_ENABLED,
        tick_period: float = config.TICK_PERIOD_SECONDS,
        on_tick: Callable[[SurvivalApp], None] | None = None,
    ) -> None:
        self.session = session or SurvivalSession(
            haptic_backend=haptic_backend, use_position_filter=use_position_filter
        )
        self.tracking = TrackingController(provider, self.session)
        self.clock = Clock()
        self.tick_period = tick_period
        self.on_tick = on_tick
        self._tick_task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def start(self) -> bool:
        """Start tracking and the tick timer.

        The timer runs even when tracking fails, so the moving hazard keeps
        moving and the HUD keeps refreshing while the user fixes permissions.

        Returns:
            True if the fix stream is live.
        """
        tracking = await self.tracking.start()
        if not self.is_running:
            self.clock.reset()
            self._tick_task = asyncio.create_task(self._tick_loop())
        return tracking

    async def retry(self) -> bool:
        """User-triggered retry of location acquisition."""
        return await self.tracking.retry()

    async def stop(self) -> None:
        """Unsubscribe from fixes and cancel the timer."""
        self.tracking.stop()
        if self._tick_task is not None:
            self._tick_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._tick_task
            self._tick_task = None

    async def run(self, duration: float | None = None) -> None:
        """Run until ``duration`` seconds have passed, or until cancelled."""
        await self.start()
        try:
            if duration is None:
                assert self._tick_task is not None
                await self._tick_task
            else:
                await asyncio.sleep(duration)
        finally:
            await self.stop()

    def hud(self) -> HudSnapshot:
        """Snapshot for the rendering layer."""
        return build_hud_snapshot(self.session, self.tracking)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_period)
            try:
                measured = self.clock.tick()
                if measured > config.MAX_TICK_DELTA_SECONDS:
                    logger.warning(
                        f"Tick stalled for {measured:.2f}s "
                        f"(mean {self.clock.mean_interval:.2f}s, "
                        f"max {self.clock.max_interval:.2f}s)"
                    )
                self.session.tick(measured)
                if self.on_tick is not None:
                    self.on_tick(self)
            except Exception:
                logger.exception("Error during game tick")
