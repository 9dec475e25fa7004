"""Constants packages for implementation details.

These are distinct from config.py which contains tuning values for the game.
Constants here are implementation details that need descriptive names.
"""

from .damage import DamageConstants
from .tracking import TrackingConstants

__all__ = [
    "DamageConstants",
    "TrackingConstants",
]
