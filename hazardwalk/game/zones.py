"""Zone definitions and the distance-to-damage model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from hazardwalk.constants.damage import DamageConstants as Damage
from hazardwalk.geo.coords import Coordinate
from hazardwalk.types import Degrees, Meters, Vec2, ZoneId


@dataclass(frozen=True, kw_only=True)
class HazardZone:
    """A fixed-location source of continuous proximity damage.

    Damage falls off inversely with distance from the edge of the source:

        effective = max(0, distance - source_radius)
        damage = base_damage + scale / max(effective + offset, 0.1)

    and is zero once ``effective`` reaches ``safe_radius``.
    """

    zone_id: ZoneId
    name: str
    center: Coordinate
    safe_radius: Meters
    source_radius: Meters = 0.0  # Damage peaks at the edge of the source
    base_damage: float = 0.0
    scale: float = 0.0
    offset: float = 0.0
    max_damage: float | None = None  # None = uncapped


@dataclass(frozen=True, kw_only=True)
class MovingHazardConfig(HazardZone):
    """A hazard that wanders inside a circle around ``center``.

    ``center`` is the center of the motion circle, not the hazard's position.
    """

    radius_meters: Meters
    speed_mps: float
    initial_heading_degrees: Degrees = 0.0
    initial_offset: Vec2 | None = None  # None = half the radius, due east


@dataclass(frozen=True, kw_only=True)
class HealingZone:
    """An area that nullifies damage and grants regeneration."""

    zone_id: ZoneId
    name: str
    center: Coordinate
    radius_meters: Meters


@dataclass(frozen=True)
class ZoneSet:
    """Every zone one session plays against."""

    hazards: tuple[HazardZone, ...] = field(default_factory=tuple)
    moving_hazard: MovingHazardConfig | None = None
    healing_zone: HealingZone | None = None


def evaluate_zone_damage(distance_meters: Meters | None, zone: HazardZone) -> float:
    """Raw damage dealt by ``zone`` to a player ``distance_meters`` away.

    Missing or non-finite distances deal no damage. The result is capped at
    ``zone.max_damage`` when one is configured.
    """
    if distance_meters is None or not math.isfinite(distance_meters):
        return 0.0

    effective_distance = max(0.0, distance_meters - zone.source_radius)
    if effective_distance >= zone.safe_radius:
        return 0.0

    denominator = max(
        effective_distance + zone.offset, Damage.MIN_FALLOFF_DENOMINATOR
    )
    damage = zone.base_damage + zone.scale / denominator
    if zone.max_damage is None:
        return damage
    return min(zone.max_damage, damage)
