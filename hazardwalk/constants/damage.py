"""Constants for the damage model and haptic feedback."""


class DamageConstants:
    """Constants for the damage model and haptic feedback."""

    # Smallest denominator of the inverse falloff. Keeps damage finite when
    # the player stands on the source.
    MIN_FALLOFF_DENOMINATOR = 0.1

    # Total mitigated damage is rounded before it is applied.
    DAMAGE_DECIMALS = 2

    # --- Haptic stage thresholds (total mitigated damage per evaluation) ---
    HAPTIC_STAGE_1_THRESHOLD = 1.0
    HAPTIC_STAGE_2_THRESHOLD = 3.0
    HAPTIC_STAGE_3_THRESHOLD = 6.0

    # --- Haptic pulse cadence per stage (milliseconds) ---
    HAPTIC_STAGE_1_INTERVAL_MS = 3000
    HAPTIC_STAGE_2_INTERVAL_MS = 2000
    HAPTIC_STAGE_3_INTERVAL_MS = 1000
