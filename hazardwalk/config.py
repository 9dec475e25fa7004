"""
Configuration constants.

Centralizes the tuning values of the survival model. Organized by functional
area. Zone geometry lives in ``hazardwalk.game.zone_definitions``.
"""

# =============================================================================
# GENERAL
# =============================================================================

# Seed for the simulated provider's GPS jitter (demo only).
RANDOM_SEED = 7

# =============================================================================
# PLAYER STATS
# =============================================================================

MAX_HP = 1000

INITIAL_HP = 1000
INITIAL_GUARD = 5
INITIAL_RESONANCE = 5  # Tracked and displayed, no rule reads it yet

# Decimal places kept on every HP mutation
HP_DECIMALS = 2

# =============================================================================
# REGENERATION
# =============================================================================

PASSIVE_REGEN_PER_SECOND = 1
HEALING_ZONE_REGEN_PER_SECOND = 3

# Seconds spent at 0 HP inside the healing zone before regen may revive
HEALING_ZONE_ZERO_HP_DELAY_SECONDS = 60

# =============================================================================
# TICK ENGINE
# =============================================================================

TICK_PERIOD_SECONDS = 1.0

# Longest elapsed time a single tick may account for. Absorbs stalls such as
# the app being backgrounded.
MAX_TICK_DELTA_SECONDS = 2.0

# Delta used when the measured one is non-finite or not positive.
FALLBACK_TICK_DELTA_SECONDS = 1.0

# =============================================================================
# LOCATION TRACKING
# =============================================================================

# Variant 2: stabilize fixes with the position filter before scoring damage.
POSITION_FILTER_ENABLED = True

# Minimum movement in meters between pushed fixes, requested from the provider.
LOCATION_DISTANCE_INTERVAL_METERS = 5

PERMISSION_DENIED_MESSAGE = "Location permission was denied"
LOCATION_FAILURE_MESSAGE = "Failed to acquire the current position"
