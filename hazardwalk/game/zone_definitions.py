"""Zone configuration for the shipped play area."""

from __future__ import annotations

from hazardwalk.geo.coords import Coordinate
from hazardwalk.types import Vec2, ZoneId

from .zones import HazardZone, HealingZone, MovingHazardConfig, ZoneSet

# Built-in hazard zones, keyed by zone id.
# In a real deployment these would come from a content file.
HAZARD_ZONES: dict[ZoneId, HazardZone] = {
    "garakuta": HazardZone(
        zone_id="garakuta",
        name="Garakuta",
        center=Coordinate(37.5637209353559, 140.99321916494142),
        safe_radius=60,
        base_damage=6,
        scale=30,
        offset=0.1,
        max_damage=18,
    ),
    "station-rift": HazardZone(
        zone_id="station-rift",
        name="Tech Workshop",
        center=Coordinate(37.56385812102285, 140.99152814703658),
        safe_radius=60,
        base_damage=6,
        scale=30,
        offset=0.1,
        max_damage=18,
    ),
    "area-center": HazardZone(
        zone_id="area-center",
        name="Community Center Plaza",
        center=Coordinate(37.56434331449345, 140.99237426307516),
        safe_radius=60,
        base_damage=6,
        scale=30,
        offset=0.1,
        max_damage=18,
    ),
    "puku": HazardZone(
        zone_id="puku",
        name="Puku",
        center=Coordinate(37.56334549068359, 140.98913906488454),
        safe_radius=60,
        base_damage=6,
        scale=30,
        offset=0.1,
        max_damage=18,
    ),
    "haccoba": HazardZone(
        zone_id="haccoba",
        name="Sake Brewery",
        center=Coordinate(37.561486942859, 140.9914438352546),
        safe_radius=60,
        base_damage=6,
        scale=30,
        offset=0.1,
        max_damage=18,
    ),
}

# Roams a 300 m circle around the town center at a brisk walk. Damage reaches
# 65 m from its position: the 5 m source plus the 60 m safe radius.
MOVING_HAZARD = MovingHazardConfig(
    zone_id="phantom-scout",
    name="Phantom Scout",
    center=Coordinate(37.563886, 140.991698),
    radius_meters=300,
    source_radius=5,
    safe_radius=60,
    base_damage=6,
    scale=135,
    offset=0.1,
    speed_mps=4,
    initial_heading_degrees=45,
    initial_offset=Vec2(120, -60),
)

HEALING_ZONE = HealingZone(
    zone_id="sanctuary-courtyard",
    name="Sanctuary Courtyard",
    center=Coordinate(37.568509, 140.990278),
    radius_meters=58,
)


def default_zone_set() -> ZoneSet:
    """The zone layout sessions use unless one is injected."""
    return ZoneSet(
        hazards=tuple(HAZARD_ZONES.values()),
        moving_hazard=MOVING_HAZARD,
        healing_zone=HEALING_ZONE,
    )
