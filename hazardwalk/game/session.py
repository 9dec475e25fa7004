"""
The survival session: all mutable game state and the rules that change it.

Two triggers drive a session, and both end in the same ``evaluate()`` call:

1. ``on_fix()`` whenever the location provider pushes a new fix. The fix is
   stabilized by the position filter (when enabled) and scored at once.
2. ``tick()`` once per second from the game timer. A tick moves the roaming
   hazard, applies regeneration, paces haptics and re-scores the last known
   coordinate, which is how damage keeps accruing while the player stands
   still and no new fix arrives.

The two triggers can interleave in any order. Each handler reads the session
as it is at call time; there are no staleness checks.

Tick order:
    1. Normalize the delta, advance the session clock and the moving hazard.
    2. Passive regen while 0 < hp < max.
    3. Healing-zone regen, gated by the zero-HP dwell timer.
    4. Haptic cadence.
    5. Re-evaluate proximity at the last known coordinate.
"""

from __future__ import annotations

import logging

from hazardwalk import config
from hazardwalk.events import (
    HealingZoneChangedEvent,
    PlayerDownedEvent,
    PlayerRevivedEvent,
    publish_event,
)
from hazardwalk.geo.coords import Coordinate, calculate_distance_meters
from hazardwalk.tracking.filter import PositionFilter
from hazardwalk.tracking.provider import LocationFix
from hazardwalk.types import DeltaTime, Meters, SessionTime
from hazardwalk.util.clock import normalize_tick_delta

from .haptics import HapticBackend, HapticCadence, NullHapticBackend
from .moving_hazard import MovingHazard
from .proximity import ProximityEvaluator, ProximityReport, ZoneSummary
from .stats import PlayerStats
from .zone_definitions import default_zone_set
from .zones import ZoneSet

logger = logging.getLogger(__name__)


class SurvivalSession:
    """
    Owns the player's survival state for one tracking session.

    Attributes:
        zones: Zone layout being played.
        stats: Player HP, guard and resonance.
        moving_hazard: Roaming hazard state, or None if the layout has none.
        haptics: Haptic stage and pulse pacing.
        position_filter: Fix stabilizer, or None for unfiltered tracking.
        now: Session clock in seconds, advanced only by normalized ticks.
        last_fix: The most recent raw fix from the provider.
        current_coordinate: The coordinate damage is scored at (filtered
            when the filter is enabled).
        zone_summaries: Per-zone results of the latest evaluation.
        in_healing_zone: Whether the latest evaluation was inside the
            healing zone.
        healing_dwell_seconds: Time spent at 0 HP inside the healing zone.
        last_damage: Total mitigated damage of the latest evaluation.
    """

    def __init__(
        self,
        zones: ZoneSet | None = None,
        *,
        stats: PlayerStats | None = None,
        haptic_backend: HapticBackend | None = None,
        use_position_filter: bool = config.POSITION_FILTER_ENABLED,
    ) -> None:
        self.zones = zones if zones is not None else default_zone_set()
        self.stats = stats if stats is not None else PlayerStats()
        self.evaluator = ProximityEvaluator(self.zones)
        self.moving_hazard = (
            MovingHazard(self.zones.moving_hazard)
            if self.zones.moving_hazard is not None
            else None
        )
        self.haptics = HapticCadence(haptic_backend or NullHapticBackend())
        self.position_filter = PositionFilter() if use_position_filter else None

        self.now = SessionTime(0.0)
        self.last_fix: LocationFix | None = None
        self.current_coordinate: Coordinate | None = None
        self.zone_summaries: list[ZoneSummary] = []
        self.in_healing_zone = False
        self.healing_dwell_seconds = 0.0
        self.last_damage = 0.0

    # ------------------------------------------------------------------
    # Location triggers
    # ------------------------------------------------------------------

    def on_fix(self, fix: LocationFix) -> ProximityReport | None:
        """Handle a fresh fix from the provider.

        Returns:
            The evaluation report, or None if the fix produced no usable
            coordinate (the last known coordinate is kept in that case).
        """
        self.last_fix = fix
        raw = fix.coords.coordinate
        if self.position_filter is not None:
            coordinate = self.position_filter.update(raw, fix.timestamp)
        else:
            coordinate = raw if raw.is_finite() else None

        if coordinate is None:
            logger.debug("Fix produced no usable coordinate")
            return None

        self.current_coordinate = coordinate
        return self.evaluate(coordinate)

    def on_tracking_lost(self) -> None:
        """Forget the player's position after permission loss or teardown."""
        self.last_fix = None
        self.current_coordinate = None
        if self.position_filter is not None:
            self.position_filter.reset()
        self.evaluate(None)
        self.haptics.reset()

    def reset_tracking(self) -> None:
        """Prepare for a fresh fix stream after tracking resumes."""
        if self.position_filter is not None:
            self.position_filter.reset()
        self.healing_dwell_seconds = 0.0

    @property
    def filter_deviation(self) -> Meters | None:
        """Distance between the raw fix and the stabilized coordinate."""
        if self.position_filter is None or self.last_fix is None:
            return None
        if self.current_coordinate is None:
            return None
        raw = self.last_fix.coords.coordinate
        if not raw.is_finite():
            return None
        return calculate_distance_meters(raw, self.current_coordinate)

    # ------------------------------------------------------------------
    # Shared evaluation
    # ------------------------------------------------------------------

    def evaluate(self, coordinate: Coordinate | None) -> ProximityReport | None:
        """Score ``coordinate`` against every zone and apply the damage.

        Passing None clears the per-zone results and healing-zone state.
        """
        if coordinate is None:
            self.zone_summaries = []
            self.last_damage = 0.0
            self._set_in_healing_zone(False)
            self.healing_dwell_seconds = 0.0
            return None

        moving_coordinate = (
            self.moving_hazard.coordinate if self.moving_hazard is not None else None
        )
        report = self.evaluator.evaluate(
            coordinate, self.stats.guard, moving_coordinate
        )

        self._set_in_healing_zone(report.inside_healing_zone)
        if not report.inside_healing_zone:
            self.healing_dwell_seconds = 0.0

        self.zone_summaries = report.summaries
        self.haptics.update(report.total_damage, self.now)

        if report.total_damage > 0:
            was_alive = self.stats.is_alive()
            self.stats.take_damage(report.total_damage)
            if was_alive and not self.stats.is_alive():
                logger.info("Player downed")
                publish_event(PlayerDownedEvent(damage=report.total_damage))

        self.last_damage = report.total_damage
        return report

    # ------------------------------------------------------------------
    # Timer trigger
    # ------------------------------------------------------------------

    def tick(self, delta_seconds: float) -> DeltaTime:
        """Advance the session by one timer tick.

        Args:
            delta_seconds: Measured wall-clock time since the previous tick.

        Returns:
            The normalized delta that was actually applied.
        """
        delta_time = normalize_tick_delta(delta_seconds)
        self.now = SessionTime(self.now + delta_time)

        if self.moving_hazard is not None:
            self.moving_hazard.advance(delta_time)

        self._apply_passive_regen(delta_time)
        self._apply_healing_zone_regen(delta_time)
        self.haptics.tick(self.now)

        if self.current_coordinate is not None:
            self.evaluate(self.current_coordinate)
        return delta_time

    def _apply_passive_regen(self, delta_time: DeltaTime) -> None:
        if not self.stats.is_alive() or self.stats.is_full:
            return
        self._heal(config.PASSIVE_REGEN_PER_SECOND * delta_time)

    def _apply_healing_zone_regen(self, delta_time: DeltaTime) -> None:
        if not self.in_healing_zone:
            self.healing_dwell_seconds = 0.0
            return

        if self.stats.is_alive():
            self.healing_dwell_seconds = 0.0
        else:
            self.healing_dwell_seconds = min(
                self.healing_dwell_seconds + delta_time,
                config.HEALING_ZONE_ZERO_HP_DELAY_SECONDS,
            )

        can_regen = (
            self.stats.is_alive()
            or self.healing_dwell_seconds >= config.HEALING_ZONE_ZERO_HP_DELAY_SECONDS
        )
        if not can_regen or self.stats.is_full:
            return

        self._heal(config.HEALING_ZONE_REGEN_PER_SECOND * delta_time)
        if self.stats.is_alive():
            self.healing_dwell_seconds = 0.0

    def _heal(self, amount: float) -> None:
        was_alive = self.stats.is_alive()
        self.stats.heal(amount)
        if not was_alive and self.stats.is_alive():
            logger.info("Player revived")
            publish_event(PlayerRevivedEvent(hp=self.stats.hp))

    def _set_in_healing_zone(self, inside: bool) -> None:
        if inside == self.in_healing_zone:
            return
        self.in_healing_zone = inside
        healing_zone = self.zones.healing_zone
        if healing_zone is not None:
            publish_event(
                HealingZoneChangedEvent(zone_id=healing_zone.zone_id, inside=inside)
            )
