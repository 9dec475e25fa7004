"""Tests for the permission and subscription lifecycle."""

from __future__ import annotations

import asyncio
import logging

import pytest

from hazardwalk import config
from hazardwalk.events import TrackingStatusEvent, subscribe_to_event
from hazardwalk.game.session import SurvivalSession
from hazardwalk.tracking.controller import TrackingController
from hazardwalk.tracking.provider import (
    LocationFix,
    LocationUnavailableError,
    PermissionStatus,
)
from hazardwalk.tracking.simulated import SimulatedLocationProvider
from tests.helpers import FAR_AWAY, ORIGIN, coordinate_at, fix_at, make_zone_set


def make_controller(
    fixes: list[LocationFix] | None = None, **provider_options: object
) -> tuple[TrackingController, SimulatedLocationProvider]:
    provider = SimulatedLocationProvider(
        fixes if fixes is not None else [fix_at(FAR_AWAY)],
        **provider_options,  # type: ignore[arg-type]
    )
    session = SurvivalSession(make_zone_set(), use_position_filter=False)
    return TrackingController(provider, session), provider


class TestStart:
    def test_granted_feeds_first_fix_and_subscribes(self) -> None:
        statuses: list[TrackingStatusEvent] = []
        subscribe_to_event(TrackingStatusEvent, statuses.append)
        controller, provider = make_controller(push_interval=60)

        async def scenario() -> bool:
            started = await controller.start()
            controller.stop()
            return started

        started = asyncio.run(scenario())

        assert started
        assert controller.permission_status is PermissionStatus.GRANTED
        assert controller.error_message is None
        assert len(provider.subscriptions) == 1
        assert statuses == [
            TrackingStatusEvent(permission=PermissionStatus.GRANTED, error=None)
        ]

    def test_first_fix_reaches_the_session(self) -> None:
        controller, _ = make_controller([fix_at(ORIGIN)], push_interval=60)

        async def scenario() -> None:
            await controller.start()
            assert controller.is_tracking
            assert controller.location == fix_at(ORIGIN)
            assert controller.session.current_coordinate == ORIGIN
            assert controller.session.stats.hp == 987
            controller.stop()

        asyncio.run(scenario())

    def test_pushed_fixes_reach_the_session(self) -> None:
        fixes = [fix_at(coordinate_at(0, 10 * i), float(i)) for i in range(4)]
        controller, _ = make_controller(fixes, push_interval=0)

        async def scenario() -> None:
            await controller.start()
            await asyncio.sleep(0.05)
            assert controller.location == fixes[-1]
            assert controller.session.current_coordinate == fixes[-1].coords.coordinate
            controller.stop()

        asyncio.run(scenario())

    def test_denied_reports_error_and_clears_session(self) -> None:
        controller, provider = make_controller(permission=PermissionStatus.DENIED)

        started = asyncio.run(controller.start())

        assert not started
        assert controller.permission_status is PermissionStatus.DENIED
        assert controller.error_message == config.PERMISSION_DENIED_MESSAGE
        assert controller.location is None
        assert not controller.is_tracking
        assert provider.subscriptions == []
        assert controller.session.current_coordinate is None

    def test_acquisition_failure_is_logged_and_surfaced(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        controller, _ = make_controller(failure=RuntimeError("GPS off"))

        with caplog.at_level(logging.ERROR):
            started = asyncio.run(controller.start())

        assert not started
        assert controller.error_message == "GPS off"
        assert "Location acquisition failed" in caplog.text
        assert "RuntimeError" in caplog.text

    def test_failure_without_message_uses_fallback_text(self) -> None:
        controller, _ = make_controller(failure=LocationUnavailableError())

        asyncio.run(controller.start())

        assert controller.error_message == config.LOCATION_FAILURE_MESSAGE


class TestRetryAndStop:
    def test_retry_after_denial(self) -> None:
        controller, provider = make_controller(
            permission=PermissionStatus.DENIED, push_interval=60
        )

        async def scenario() -> bool:
            await controller.start()
            provider.permission = PermissionStatus.GRANTED
            started = await controller.retry()
            controller.stop()
            return started

        assert asyncio.run(scenario())
        assert provider.permission_requests == 2
        assert controller.error_message is None

    def test_retry_replaces_the_subscription(self) -> None:
        controller, provider = make_controller(
            [fix_at(FAR_AWAY), fix_at(ORIGIN, 1.0)], push_interval=60
        )

        async def scenario() -> None:
            await controller.start()
            (first,) = provider.subscriptions
            await controller.retry()
            await asyncio.sleep(0)
            assert not first.active
            assert len(provider.subscriptions) == 1
            assert provider.subscriptions[0] is not first
            assert provider.subscriptions[0].active
            controller.stop()

        asyncio.run(scenario())

    def test_failed_retry_drops_the_previous_stream(self) -> None:
        controller, provider = make_controller(
            [fix_at(FAR_AWAY), fix_at(ORIGIN, 1.0)], push_interval=60
        )

        async def scenario() -> bool:
            await controller.start()
            provider.failure = RuntimeError("GPS off")
            started = await controller.retry()
            await asyncio.sleep(0)
            assert not provider.subscriptions[0].active
            return started

        assert not asyncio.run(scenario())
        assert not controller.is_tracking
        assert controller.error_message == "GPS off"

    def test_stop_clears_location_and_session(self) -> None:
        controller, _ = make_controller([fix_at(ORIGIN)], push_interval=60)

        async def scenario() -> None:
            await controller.start()
            controller.stop()

        asyncio.run(scenario())

        assert not controller.is_tracking
        assert controller.location is None
        assert controller.session.current_coordinate is None
        assert controller.session.zone_summaries == []

    def test_resume_reanchors_the_position_filter(self) -> None:
        """A far-away fix after a retry is taken as-is, not gated as a jump."""
        provider = SimulatedLocationProvider([fix_at(ORIGIN, 0.0)], push_interval=60)
        session = SurvivalSession(make_zone_set(), use_position_filter=True)
        controller = TrackingController(provider, session)

        async def scenario() -> None:
            await controller.start()
            provider.fixes = [fix_at(FAR_AWAY, 1.0)]
            await controller.retry()
            assert session.current_coordinate == FAR_AWAY
            controller.stop()

        asyncio.run(scenario())

        assert session.stats.hp == 987  # only the first fix hurt
