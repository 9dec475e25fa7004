"""Per-location scoring of every zone against the player's position."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from hazardwalk.constants.damage import DamageConstants as Damage
from hazardwalk.geo.coords import (
    Coordinate,
    calculate_distance_meters,
    calculate_distances_meters,
)
from hazardwalk.types import Meters, ZoneId

from .zones import HazardZone, ZoneSet, evaluate_zone_damage


@dataclass(frozen=True)
class ZoneSummary:
    """How one zone affects the player at the evaluated position."""

    zone_id: ZoneId
    name: str
    distance: Meters
    raw_damage: float
    mitigated_damage: float
    max_damage: float | None
    is_dynamic: bool = False


@dataclass(frozen=True)
class ProximityReport:
    """Outcome of one evaluation, before it is applied to the player."""

    summaries: list[ZoneSummary] = field(default_factory=list)
    total_damage: float = 0.0  # Sum of mitigated damage, rounded
    inside_healing_zone: bool = False

    @property
    def active_hazard_count(self) -> int:
        return sum(1 for summary in self.summaries if summary.mitigated_damage > 0)


class ProximityEvaluator:
    """Scores a coordinate against a fixed :class:`ZoneSet`.

    Static zone centers are packed into arrays once so each evaluation is a
    single vectorized haversine. The evaluator holds no per-session state;
    applying the report to the player is the session's job.
    """

    def __init__(self, zones: ZoneSet) -> None:
        self.zones = zones
        self._latitudes = np.array(
            [zone.center.latitude for zone in zones.hazards], dtype=np.float64
        )
        self._longitudes = np.array(
            [zone.center.longitude for zone in zones.hazards], dtype=np.float64
        )

    def is_inside_healing_zone(self, coordinate: Coordinate) -> bool:
        healing_zone = self.zones.healing_zone
        if healing_zone is None:
            return False
        distance = calculate_distance_meters(coordinate, healing_zone.center)
        return distance <= healing_zone.radius_meters

    def evaluate(
        self,
        coordinate: Coordinate,
        guard: float,
        moving_coordinate: Coordinate | None = None,
    ) -> ProximityReport:
        """Score every zone for a player standing at ``coordinate``.

        Args:
            coordinate: The player's (possibly filtered) position.
            guard: Flat mitigation subtracted from each zone's raw damage.
            moving_coordinate: Current position of the moving hazard, if any.

        Returns:
            Per-zone summaries, the rounded total and healing-zone membership.
        """
        inside_healing_zone = self.is_inside_healing_zone(coordinate)

        summaries: list[ZoneSummary] = []
        if self.zones.hazards:
            distances = calculate_distances_meters(
                coordinate, self._latitudes, self._longitudes
            )
            for zone, distance in zip(self.zones.hazards, distances, strict=True):
                summaries.append(
                    self._summarize(
                        zone, float(distance), guard, inside_healing_zone, False
                    )
                )

        moving_hazard = self.zones.moving_hazard
        if moving_hazard is not None and moving_coordinate is not None:
            distance = calculate_distance_meters(coordinate, moving_coordinate)
            summaries.append(
                self._summarize(
                    moving_hazard, distance, guard, inside_healing_zone, True
                )
            )

        total = sum(summary.mitigated_damage for summary in summaries)
        return ProximityReport(
            summaries=summaries,
            total_damage=round(total, Damage.DAMAGE_DECIMALS),
            inside_healing_zone=inside_healing_zone,
        )

    @staticmethod
    def _summarize(
        zone: HazardZone,
        distance: Meters,
        guard: float,
        inside_healing_zone: bool,
        is_dynamic: bool,
    ) -> ZoneSummary:
        raw_damage = (
            0.0 if inside_healing_zone else evaluate_zone_damage(distance, zone)
        )
        return ZoneSummary(
            zone_id=zone.zone_id,
            name=zone.name,
            distance=distance,
            raw_damage=raw_damage,
            mitigated_damage=max(raw_damage - guard, 0.0),
            max_damage=zone.max_damage,
            is_dynamic=is_dynamic,
        )
