from __future__ import annotations

from typing import Any

from hazardwalk.game.haptics import HapticBackend, ImpactStyle
from hazardwalk.game.zones import HazardZone, HealingZone, MovingHazardConfig, ZoneSet
from hazardwalk.geo.coords import Coordinate, offsets_to_coords
from hazardwalk.tracking.provider import LocationCoords, LocationFix

ORIGIN = Coordinate(37.5, 140.0)


def coordinate_at(offset_x: float, offset_y: float) -> Coordinate:
    """Coordinate ``offset_x`` m east and ``offset_y`` m north of ORIGIN."""
    return offsets_to_coords(ORIGIN, offset_x, offset_y)


HEALING_CENTER = coordinate_at(0, 1000)
FAR_AWAY = coordinate_at(5000, 5000)


def fix_at(coordinate: Coordinate, timestamp: float = 0.0) -> LocationFix:
    return LocationFix(
        coords=LocationCoords(coordinate.latitude, coordinate.longitude),
        timestamp=timestamp,
    )


def make_hazard(
    zone_id: str = "hazard", center: Coordinate = ORIGIN, **overrides: Any
) -> HazardZone:
    """A hazard with the standard 60 m profile capped at 18 damage."""
    params: dict[str, Any] = {
        "safe_radius": 60,
        "base_damage": 6,
        "scale": 30,
        "offset": 0.1,
        "max_damage": 18,
    }
    params.update(overrides)
    return HazardZone(zone_id=zone_id, name=zone_id.title(), center=center, **params)


def make_moving_hazard(**overrides: Any) -> MovingHazardConfig:
    params: dict[str, Any] = {
        "zone_id": "roamer",
        "name": "Roamer",
        "center": coordinate_at(0, -2000),
        "radius_meters": 300,
        "source_radius": 5,
        "safe_radius": 60,
        "base_damage": 6,
        "scale": 135,
        "offset": 0.1,
        "speed_mps": 4,
        "initial_heading_degrees": 45,
    }
    params.update(overrides)
    return MovingHazardConfig(**params)


def make_zone_set(
    *,
    hazards: tuple[HazardZone, ...] | None = None,
    moving_hazard: MovingHazardConfig | None = None,
    healing: bool = True,
) -> ZoneSet:
    """One hazard at ORIGIN and a 50 m healing zone 1 km north, by default."""
    return ZoneSet(
        hazards=hazards if hazards is not None else (make_hazard(),),
        moving_hazard=moving_hazard,
        healing_zone=(
            HealingZone(
                zone_id="sanctuary",
                name="Sanctuary",
                center=HEALING_CENTER,
                radius_meters=50,
            )
            if healing
            else None
        ),
    )


class FailingHapticBackend(HapticBackend):
    """Actuator that always fails, like a device with haptics disabled."""

    def __init__(self) -> None:
        self.attempts = 0

    def impact(self, style: ImpactStyle) -> None:
        self.attempts += 1
        raise RuntimeError("Haptics unavailable")
