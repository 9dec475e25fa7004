"""Wall-clock measurement of the game tick."""

import math
import statistics
import time
from collections import deque

from hazardwalk import config
from hazardwalk.types import DeltaTime

# Number of tick interval samples to track.
_TICK_SAMPLE_SIZE = 64


def normalize_tick_delta(delta_seconds: float) -> DeltaTime:
    """Turn a measured tick interval into the delta game logic may use.

    Non-finite or non-positive intervals become one tick period. Long stalls
    (backgrounding, a paused debugger) are capped so a single tick never
    applies more than ``MAX_TICK_DELTA_SECONDS`` of regeneration or motion.
    """
    if not math.isfinite(delta_seconds) or delta_seconds <= 0:
        delta_seconds = config.FALLBACK_TICK_DELTA_SECONDS
    return DeltaTime(min(delta_seconds, config.MAX_TICK_DELTA_SECONDS))


class Clock:
    """Measure the real interval between ticks of the game timer."""

    def __init__(self) -> None:
        self.last_time = time.perf_counter()
        self.last_delta_time: DeltaTime = DeltaTime(0.0)
        self.time_samples: deque[float] = deque(maxlen=_TICK_SAMPLE_SIZE)

    def reset(self) -> None:
        """Restart measurement from now, e.g. when the timer is re-armed."""
        self.last_time = time.perf_counter()
        self.last_delta_time = DeltaTime(0.0)
        self.time_samples.clear()

    def tick(self) -> DeltaTime:
        """
        Measures the raw time since the last tick and returns it.

        The returned delta is not normalized; pass it through
        ``normalize_tick_delta`` (the session does) before applying it.
        """
        current_time = time.perf_counter()
        delta_time = DeltaTime(max(0, current_time - self.last_time))
        self.last_time = current_time
        self.last_delta_time = delta_time
        self.time_samples.append(delta_time)
        return delta_time

    @property
    def mean_interval(self) -> float:
        """Mean measured tick interval in seconds."""
        if not self.time_samples:
            return 0
        return statistics.fmean(self.time_samples)

    @property
    def max_interval(self) -> float:
        """Longest measured tick interval in seconds (stall detection)."""
        if not self.time_samples:
            return 0
        return max(self.time_samples)
