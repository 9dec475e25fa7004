"""Location permission and subscription lifecycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hazardwalk import config
from hazardwalk.events import TrackingStatusEvent, publish_event

from .provider import (
    LocationFix,
    LocationProvider,
    LocationSubscription,
    PermissionStatus,
)

if TYPE_CHECKING:
    from hazardwalk.game.session import SurvivalSession

logger = logging.getLogger(__name__)


class TrackingController:
    """
    Connects a location provider to a survival session.

    ``start()`` asks for permission, feeds one immediate fix to the session
    and then subscribes to pushed fixes. It is the only place that suspends,
    and it runs once at startup and again on every manual ``retry()``.
    Failures never raise out of ``start()``; they end up in ``error_message``
    for the HUD to show.

    Attributes:
        permission_status: Last status reported by the provider, or None
            before the first request.
        location: Most recent raw fix delivered to the session.
        error_message: User-visible error, or None when healthy.
    """

    def __init__(self, provider: LocationProvider, session: SurvivalSession) -> None:
        self.provider = provider
        self.session = session
        self.permission_status: PermissionStatus | None = None
        self.location: LocationFix | None = None
        self.error_message: str | None = None
        self._subscription: LocationSubscription | None = None

    @property
    def is_tracking(self) -> bool:
        return self._subscription is not None

    async def start(self) -> bool:
        """Acquire permission and a first fix, then watch for more.

        Returns:
            True if the fix stream is live.
        """
        try:
            status = await self.provider.request_permission()
            self.permission_status = status

            if status is not PermissionStatus.GRANTED:
                logger.warning(f"Location permission not granted: {status.value}")
                self._remove_subscription()
                self.location = None
                self.error_message = config.PERMISSION_DENIED_MESSAGE
                self.session.on_tracking_lost()
                self._publish_status()
                return False

            self.error_message = None
            self._remove_subscription()
            self.session.reset_tracking()
            current = await self.provider.get_current_position()
            self._handle_fix(current)

            self._subscription = await self.provider.watch_position(
                self._handle_fix,
                distance_interval=config.LOCATION_DISTANCE_INTERVAL_METERS,
            )
        except Exception as e:
            logger.exception("Location acquisition failed")
            self.error_message = str(e) or config.LOCATION_FAILURE_MESSAGE
            self._publish_status()
            return False

        logger.info("Location tracking started")
        self._publish_status()
        return True

    async def retry(self) -> bool:
        """Manual retry offered to the user after a denial or failure."""
        logger.info("Retrying location tracking")
        return await self.start()

    def stop(self) -> None:
        """Unsubscribe from fixes and tell the session tracking is gone."""
        was_tracking = self.is_tracking
        self._remove_subscription()
        self.location = None
        self.session.on_tracking_lost()
        if was_tracking:
            logger.info("Location tracking stopped")

    def _handle_fix(self, fix: LocationFix) -> None:
        self.location = fix
        self.session.on_fix(fix)

    def _remove_subscription(self) -> None:
        if self._subscription is not None:
            self._subscription.remove()
            self._subscription = None

    def _publish_status(self) -> None:
        publish_event(
            TrackingStatusEvent(
                permission=self.permission_status, error=self.error_message
            )
        )
