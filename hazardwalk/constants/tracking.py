"""Constants for geo math, hazard motion and the position filter."""


class TrackingConstants:
    """Constants for geo math, hazard motion and the position filter."""

    # --- Geo math ---
    METERS_PER_DEGREE_LAT = 111320.0
    EARTH_RADIUS_METERS = 6371000.0

    # --- Moving hazard ---
    # Upper bound on boundary reflections resolved within one advance.
    MAX_REFLECTIONS_PER_STEP = 4
    # Initial offsets outside the motion circle are pulled to this fraction
    # of the radius.
    INITIAL_OFFSET_RADIUS_FRACTION = 0.98

    # --- Alpha-beta tracker ---
    FILTER_ALPHA = 0.5  # Position correction gain
    FILTER_BETA = 0.1  # Velocity correction gain
    FILTER_MIN_DT_SECONDS = 0.05
    FILTER_MAX_DT_SECONDS = 3.0
    FILTER_FALLBACK_DT_SECONDS = 1.0

    # --- Measurement gate ---
    # Walking/jogging pace. Anything faster is treated as a GPS jump.
    MAX_PLAUSIBLE_SPEED_MPS = 5.5
    # Movement below this is indistinguishable from sensor noise.
    MIN_ACCEPTED_MOVEMENT_METERS = 0.75

    # --- Output smoothing ---
    SMOOTHING_ALPHA = 0.35  # Exponential moving average weight of new samples
