"""Location tracking: provider interface, fix filtering and lifecycle."""

from .filter import AxisTracker, PositionFilter, clamp_filter_dt
from .provider import (
    LocationCoords,
    LocationFix,
    LocationProvider,
    LocationSubscription,
    LocationUnavailableError,
    PermissionStatus,
)
from .simulated import SimulatedLocationProvider, walk_path

__all__ = [
    "AxisTracker",
    "LocationCoords",
    "LocationFix",
    "LocationProvider",
    "LocationSubscription",
    "LocationUnavailableError",
    "PermissionStatus",
    "PositionFilter",
    "SimulatedLocationProvider",
    "clamp_filter_dt",
    "walk_path",
]
