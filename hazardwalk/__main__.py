"""Demo entry point: walk a simulated player through the shipped zones.

Usage:
    python -m hazardwalk --seconds 600 --report-every 30
    python -m hazardwalk --realtime --seconds 20
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Callable

from . import config
from .app import SurvivalApp
from .events import (
    HealingZoneChangedEvent,
    PlayerDownedEvent,
    PlayerRevivedEvent,
    subscribe_to_event,
    unsubscribe_from_event,
)
from .game.haptics import RecordingHapticBackend
from .game.session import SurvivalSession
from .game.zone_definitions import HAZARD_ZONES, HEALING_ZONE
from .tracking.provider import LocationFix
from .tracking.simulated import SimulatedLocationProvider, walk_path
from .view.hud import HudSnapshot, build_hud_snapshot, render_hud_lines

logger = logging.getLogger(__name__)


def _print_frame(label: str, snapshot: HudSnapshot) -> None:
    print(f"=== {label} ===")
    for line in render_hud_lines(snapshot):
        print(line)
    print()


def _subscribe_notifications() -> list[tuple[type, Callable]]:
    """Print toasts for the notable events. Returns what to unsubscribe."""
    handlers: list[tuple[type, Callable]] = [
        (PlayerDownedEvent, lambda e: print("*** You collapsed ***")),
        (PlayerRevivedEvent, lambda e: print(f"*** Revived at {e.hp:g} HP ***")),
        (
            HealingZoneChangedEvent,
            lambda e: print(
                f"*** {'Entered' if e.inside else 'Left'} the sanctuary ***"
            ),
        ),
    ]
    for event_type, handler in handlers:
        subscribe_to_event(event_type, handler)
    return handlers


def _build_walk(seed: int, jitter: float) -> list[LocationFix]:
    """Sanctuary to the Garakuta hazard at walking pace."""
    return walk_path(
        HEALING_ZONE.center,
        HAZARD_ZONES["garakuta"].center,
        speed_mps=1.4,
        jitter_meters=jitter,
        seed=seed,
    )


def run_replay(
    fixes: list[LocationFix],
    seconds: int,
    report_every: int,
    use_position_filter: bool,
) -> SurvivalSession:
    """Replay one fix per simulated second, without sleeping."""
    haptics = RecordingHapticBackend()
    session = SurvivalSession(
        haptic_backend=haptics, use_position_filter=use_position_filter
    )
    for second in range(1, seconds + 1):
        if second - 1 < len(fixes):
            session.on_fix(fixes[second - 1])
        session.tick(config.TICK_PERIOD_SECONDS)
        if second % report_every == 0:
            _print_frame(f"t={second}s", build_hud_snapshot(session))

    print(f"Haptic pulses fired: {len(haptics.pulses)}")
    return session


async def run_realtime(
    fixes: list[LocationFix], seconds: float, use_position_filter: bool
) -> None:
    """Run the asyncio app against the simulated provider in real time."""
    provider = SimulatedLocationProvider(fixes, push_interval=1.0)
    app = SurvivalApp(
        provider,
        haptic_backend=RecordingHapticBackend(),
        use_position_filter=use_position_filter,
        on_tick=lambda a: _print_frame(f"t={a.session.now:g}s", a.hud()),
    )
    await app.run(duration=seconds)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Walk a simulated player past the hazard zones"
    )
    parser.add_argument(
        "--seconds", type=int, default=600, help="Simulated duration in seconds"
    )
    parser.add_argument(
        "--report-every", type=int, default=30, help="Seconds between HUD frames"
    )
    parser.add_argument(
        "--no-filter", action="store_true", help="Score raw fixes (variant 1)"
    )
    parser.add_argument(
        "--jitter", type=float, default=3.0, help="GPS noise std-dev in meters"
    )
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED)
    parser.add_argument(
        "--realtime", action="store_true", help="Run the asyncio app in real time"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    notifications = _subscribe_notifications()

    fixes = _build_walk(args.seed, args.jitter)
    use_filter = not args.no_filter
    logger.info(
        f"Simulating {args.seconds}s over {len(fixes)} fixes "
        f"({'filtered' if use_filter else 'raw'})"
    )

    try:
        if args.realtime:
            asyncio.run(run_realtime(fixes, args.seconds, use_filter))
        else:
            run_replay(fixes, args.seconds, max(args.report_every, 1), use_filter)
    finally:
        for event_type, handler in notifications:
            unsubscribe_from_event(event_type, handler)


if __name__ == "__main__":
    main()
