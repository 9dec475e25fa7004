from __future__ import annotations

from typing import NamedTuple, NewType, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

# Planar distance on the ground, in meters.
Meters: TypeAlias = float

# Geographic angles in decimal degrees (WGS84).
Degrees: TypeAlias = float


class Vec2(NamedTuple):
    """A local planar vector in meters (x = east, y = north).

    Used both for offsets from a reference coordinate and for unit headings.
    """

    x: float
    y: float


# =============================================================================
# TIME-RELATED TYPES
# =============================================================================

# Real-world time elapsed between two ticks of the session, in seconds.
# Measured from the wall clock, then normalised before it reaches game logic.
DeltaTime = NewType("DeltaTime", float)

# A point on the session's own clock, in seconds since the session started.
# Only ever advanced by normalised tick deltas.
SessionTime = NewType("SessionTime", float)

# Platform timestamp of a location fix, in seconds since the epoch.
FixTimestamp: TypeAlias = float

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Stable identifier for a configured zone (e.g. "garakuta", "phantom-scout").
ZoneId: TypeAlias = str

# Haptic intensity tier: 0 = silent, 3 = strongest.
HapticStageLevel: TypeAlias = int

# Seed for the simulated location provider's GPS jitter.
RandomSeed: TypeAlias = int | None
