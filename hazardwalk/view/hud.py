"""Read-only HUD state and its plain-text rendering.

The real rendering layer lives on the device. It only ever sees a
:class:`HudSnapshot`, rebuilt on every render. ``render_hud_lines`` is the
text rendering used by the demo CLI.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from hazardwalk.game.proximity import ZoneSummary
from hazardwalk.game.stats import PlayerStats
from hazardwalk.geo.coords import Coordinate
from hazardwalk.tracking.provider import LocationFix, PermissionStatus
from hazardwalk.types import Meters

if TYPE_CHECKING:
    from hazardwalk.game.session import SurvivalSession
    from hazardwalk.tracking.controller import TrackingController


@dataclass(frozen=True)
class HudSnapshot:
    """Everything the HUD shows for one frame."""

    permission_status: PermissionStatus | None
    location: LocationFix | None
    error_message: str | None
    stats: PlayerStats
    zone_summaries: list[ZoneSummary] = field(default_factory=list)
    in_healing_zone: bool = False
    last_damage: float = 0.0
    stabilized_coordinate: Coordinate | None = None
    filter_deviation: Meters | None = None

    @property
    def active_hazard_count(self) -> int:
        return sum(1 for zone in self.zone_summaries if zone.mitigated_damage > 0)

    @property
    def total_hazard_count(self) -> int:
        return len(self.zone_summaries)


def build_hud_snapshot(
    session: SurvivalSession, controller: TrackingController | None = None
) -> HudSnapshot:
    """Capture the current tracking and session state.

    Without a controller (offline replay) permission counts as granted once
    the session has seen a fix.
    """
    if controller is not None:
        permission = controller.permission_status
        location = controller.location
        error_message = controller.error_message
    else:
        location = session.last_fix
        permission = PermissionStatus.GRANTED if location is not None else None
        error_message = None

    return HudSnapshot(
        permission_status=permission,
        location=location,
        error_message=error_message,
        stats=dataclasses.replace(session.stats),
        zone_summaries=list(session.zone_summaries),
        in_healing_zone=session.in_healing_zone,
        last_damage=session.last_damage,
        stabilized_coordinate=(
            session.current_coordinate
            if session.position_filter is not None
            else None
        ),
        filter_deviation=session.filter_deviation,
    )


def format_distance(distance_meters: Meters) -> str:
    """Human-readable distance: meters below 1 km, kilometers above."""
    if not math.isfinite(distance_meters):
        return "---"
    if distance_meters >= 1000:
        return f"{distance_meters / 1000:.2f} km"
    return f"{distance_meters:.1f} m"


def nearest_zone(summaries: Sequence[ZoneSummary]) -> ZoneSummary | None:
    """The zone with the smallest finite distance, if any."""
    closest: ZoneSummary | None = None
    for zone in summaries:
        if not math.isfinite(zone.distance):
            continue
        if closest is None or zone.distance < closest.distance:
            closest = zone
    return closest


def _status_lines(snapshot: HudSnapshot) -> list[str]:
    if snapshot.error_message:
        lines = [f"Error: {snapshot.error_message}"]
        if snapshot.permission_status is PermissionStatus.DENIED:
            lines.append("Allow location access, then retry.")
        return lines
    if snapshot.permission_status is None:
        return ["Checking location permission..."]
    if snapshot.permission_status is not PermissionStatus.GRANTED:
        return ["Allow location access, then retry."]
    if snapshot.location is None:
        return ["Acquiring current position..."]

    coords = snapshot.location.coords
    lines = [f"Lat: {coords.latitude:.6f}", f"Lon: {coords.longitude:.6f}"]
    if coords.altitude is not None:
        lines.append(f"Altitude: {coords.altitude:.1f} m")
    if coords.accuracy is not None:
        lines.append(f"Accuracy: +/-{coords.accuracy:.1f} m")
    timestamp = snapshot.location.timestamp
    if math.isfinite(timestamp):
        updated = datetime.fromtimestamp(timestamp, tz=UTC)
        lines.append(f"Updated: {updated:%Y-%m-%d %H:%M:%S} UTC")
    if snapshot.filter_deviation is not None:
        lines.append(f"Filter deviation: {format_distance(snapshot.filter_deviation)}")
    closest = nearest_zone(snapshot.zone_summaries)
    if closest is not None:
        lines.append(
            f"Nearest hazard: {closest.name} ({format_distance(closest.distance)})"
        )
    return lines


def render_hud_lines(snapshot: HudSnapshot) -> list[str]:
    """Render a snapshot as plain text lines."""
    stats = snapshot.stats
    last_damage = f"{snapshot.last_damage:.1f}" if snapshot.last_damage > 0 else "0"

    lines = _status_lines(snapshot)
    lines.append(f"HP: {stats.hp:g}/{stats.max_hp:g}")
    lines.append(f"Guard: {stats.guard:g}  Resonance: {stats.resonance:g}")
    lines.append(f"Last damage: -{last_damage} HP")
    active, total = snapshot.active_hazard_count, snapshot.total_hazard_count
    lines.append(f"Active hazards: {active}/{total}")
    lines.append(f"Healing zone: {'inside' if snapshot.in_healing_zone else 'outside'}")

    for zone in snapshot.zone_summaries:
        moving = " (moving)" if zone.is_dynamic else ""
        cap = f"-{zone.max_damage:.1f} HP" if zone.max_damage is not None else "none"
        lines.append(
            f"  {zone.name}{moving}: {format_distance(zone.distance)}, "
            f"raw -{zone.raw_damage:.1f}, guarded -{zone.mitigated_damage:.1f}, "
            f"cap {cap}"
        )
    return lines
