"""Survival game state: zones, damage, regeneration and haptics."""

from .haptics import (
    HapticBackend,
    HapticCadence,
    HapticConfig,
    ImpactStyle,
    NullHapticBackend,
    RecordingHapticBackend,
    haptic_config_for,
)
from .moving_hazard import MovingHazard
from .proximity import ProximityEvaluator, ProximityReport, ZoneSummary
from .session import SurvivalSession
from .stats import PlayerStats
from .zone_definitions import default_zone_set
from .zones import (
    HazardZone,
    HealingZone,
    MovingHazardConfig,
    ZoneSet,
    evaluate_zone_damage,
)

__all__ = [
    "HapticBackend",
    "HapticCadence",
    "HapticConfig",
    "HazardZone",
    "HealingZone",
    "ImpactStyle",
    "MovingHazard",
    "MovingHazardConfig",
    "NullHapticBackend",
    "PlayerStats",
    "ProximityEvaluator",
    "ProximityReport",
    "RecordingHapticBackend",
    "SurvivalSession",
    "ZoneSet",
    "ZoneSummary",
    "default_zone_set",
    "evaluate_zone_damage",
    "haptic_config_for",
]
