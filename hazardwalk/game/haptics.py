"""Haptic feedback: damage stages, pulse cadence and the actuator interface.

The actuator is an external collaborator. It is driven fire-and-forget: a
failing pulse is logged and dropped, never retried or surfaced.
"""

from __future__ import annotations

import abc
import logging
import math
from dataclasses import dataclass
from enum import Enum

from hazardwalk.constants.damage import DamageConstants as Damage
from hazardwalk.events import HapticPulseEvent, publish_event
from hazardwalk.types import HapticStageLevel, SessionTime

logger = logging.getLogger(__name__)


class ImpactStyle(Enum):
    """Intensity of a single haptic impact."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


@dataclass(frozen=True)
class HapticConfig:
    """Pulse settings for one damage stage."""

    stage: HapticStageLevel
    interval_ms: int
    style: ImpactStyle


_SILENT = HapticConfig(0, 0, ImpactStyle.LIGHT)


def haptic_config_for(damage: float) -> HapticConfig:
    """Map the total mitigated damage of an evaluation to a haptic stage.

    ``< 1`` is silent, ``[1, 3)`` light every 3 s, ``[3, 6)`` medium every
    2 s and ``>= 6`` heavy every second.
    """
    if not math.isfinite(damage) or damage < Damage.HAPTIC_STAGE_1_THRESHOLD:
        return _SILENT
    if damage >= Damage.HAPTIC_STAGE_3_THRESHOLD:
        return HapticConfig(3, Damage.HAPTIC_STAGE_3_INTERVAL_MS, ImpactStyle.HEAVY)
    if damage >= Damage.HAPTIC_STAGE_2_THRESHOLD:
        return HapticConfig(2, Damage.HAPTIC_STAGE_2_INTERVAL_MS, ImpactStyle.MEDIUM)
    return HapticConfig(1, Damage.HAPTIC_STAGE_1_INTERVAL_MS, ImpactStyle.LIGHT)


class HapticBackend(abc.ABC):
    """Abstract base class for the platform's haptic actuator."""

    @abc.abstractmethod
    def impact(self, style: ImpactStyle) -> None:
        """Fire a single impact pulse.

        Implementations may raise; callers treat any failure as a dropped pulse.

        Args:
            style: Intensity of the pulse.
        """
        ...


class NullHapticBackend(HapticBackend):
    """Backend for devices without a haptic actuator."""

    def impact(self, style: ImpactStyle) -> None:
        pass


class RecordingHapticBackend(HapticBackend):
    """Backend that keeps every pulse it receives. Used by the demo and tests."""

    def __init__(self) -> None:
        self.pulses: list[ImpactStyle] = []

    def impact(self, style: ImpactStyle) -> None:
        self.pulses.append(style)


class HapticCadence:
    """Paces haptic pulses according to the current damage stage.

    ``update()`` is called after every proximity evaluation and fires
    immediately when the stage rises or when pulsing resumes from silence.
    ``tick()`` is called once per game tick and re-fires once the stage's
    interval has elapsed since the last pulse.

    Times are on the session clock, in seconds.
    """

    def __init__(self, backend: HapticBackend) -> None:
        self.backend = backend
        self.stage: HapticStageLevel = 0
        self.interval_ms = 0
        self.style = ImpactStyle.LIGHT
        self.last_fired_at: SessionTime | None = None

    def reset(self) -> None:
        """Return to silence, forgetting the last pulse."""
        self.stage = 0
        self.interval_ms = 0
        self.style = ImpactStyle.LIGHT
        self.last_fired_at = None

    def update(self, damage: float, now: SessionTime) -> None:
        """Select the stage for ``damage`` and pulse on escalation."""
        haptic = haptic_config_for(damage)
        previous_stage = self.stage

        self.stage = haptic.stage
        self.interval_ms = haptic.interval_ms
        self.style = haptic.style

        if haptic.stage == 0:
            self.last_fired_at = None
            return

        if previous_stage < haptic.stage or self.last_fired_at is None:
            self._pulse(now)

    def tick(self, now: SessionTime) -> None:
        """Re-fire the active stage if its interval has elapsed."""
        if self.stage <= 0 or self.interval_ms <= 0:
            return
        last = self.last_fired_at if self.last_fired_at is not None else 0.0
        if (now - last) * 1000 >= self.interval_ms:
            self._pulse(now)

    def _pulse(self, now: SessionTime) -> None:
        self.last_fired_at = now
        try:
            self.backend.impact(self.style)
        except Exception:
            logger.debug("Haptic pulse dropped", exc_info=True)
            return
        publish_event(HapticPulseEvent(stage=self.stage, style=self.style.value))
