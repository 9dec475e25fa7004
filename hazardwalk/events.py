"""Global event system for decoupling HUD notifications from the game state.

This event bus is designed for UI feedback and cross-system notifications only.
It uses a global instance for simplicity and to keep the session free of
references to whatever renders it.

USE FOR:
- Toasts and banners on the HUD (downed, revived, entered the sanctuary)
- Mirroring haptic pulses visually
- Surfacing tracking/permission status changes

DO NOT USE FOR:
- Core game mechanics (damage, regeneration, hazard motion)
- Anything that must return a value or confirm delivery
- Error handling or exception propagation

The event bus is fire-and-forget: publish an event without expecting return values
or confirmations. All handlers execute immediately (synchronously). If you need a
return value or confirmation, use direct method calls.
"""

import logging
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from hazardwalk.types import HapticStageLevel, ZoneId

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """Base class for all game events."""

    pass


@dataclass
class PlayerDownedEvent(GameEvent):
    """HP reached zero."""

    damage: float  # Damage of the evaluation that finished the player


@dataclass
class PlayerRevivedEvent(GameEvent):
    """HP rose above zero again after being downed."""

    hp: float


@dataclass
class HealingZoneChangedEvent(GameEvent):
    """The player entered or left the healing zone."""

    zone_id: ZoneId
    inside: bool


@dataclass
class HapticPulseEvent(GameEvent):
    """A haptic pulse was sent to the actuator.

    Attributes:
        stage: Damage stage that produced the pulse (1-3).
        style: Name of the impact style ("light", "medium", "heavy").
    """

    stage: HapticStageLevel
    style: str


@dataclass
class TrackingStatusEvent(GameEvent):
    """Location permission or acquisition status changed.

    Attributes:
        permission: Permission status value, or None while unknown.
        error: User-visible error text, or None when tracking is healthy.
    """

    permission: Any  # PermissionStatus; avoids a tracking -> events cycle
    error: str | None = None


class EventBus:
    """Simple event bus for publish/subscribe pattern."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = {}

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers:
            with suppress(ValueError):
                self._handlers[event_type].remove(handler)

    def publish(self, event: GameEvent) -> None:
        """Publish an event to all subscribed handlers."""
        event_type = type(event)
        if event_type in self._handlers:
            # Copy the handler list to allow safe subscribe/unsubscribe during dispatch
            for handler in list(self._handlers[event_type]):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error handling event {event_type.__name__}")


# Global event bus instance
_global_event_bus = EventBus()


# Public API functions


def subscribe_to_event(event_type: type, handler: Callable) -> None:
    """Subscribe to an event type globally."""
    _global_event_bus.subscribe(event_type, handler)


def unsubscribe_from_event(event_type: type, handler: Callable) -> None:
    """Unsubscribe from an event type globally."""
    _global_event_bus.unsubscribe(event_type, handler)


def publish_event(event: GameEvent) -> None:
    """Publish an event globally."""
    _global_event_bus.publish(event)


def reset_event_bus_for_testing() -> None:
    """Reset the global event bus. Use only in tests."""
    global _global_event_bus
    _global_event_bus = EventBus()
