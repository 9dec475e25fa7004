"""Abstract interface to the platform's location services.

The session never talks to GPS hardware directly. A platform layer implements
:class:`LocationProvider`, and ``TrackingController`` drives it: ask for
permission, take one fix, then subscribe to pushed fixes.
"""

from __future__ import annotations

import abc
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from hazardwalk.geo.coords import Coordinate
from hazardwalk.types import Degrees, FixTimestamp, Meters


class PermissionStatus(Enum):
    """Foreground location permission as reported by the platform."""

    UNDETERMINED = "undetermined"
    GRANTED = "granted"
    DENIED = "denied"


class LocationUnavailableError(Exception):
    """The provider could not produce a fix."""


@dataclass(frozen=True)
class LocationCoords:
    """Position part of a fix. Altitude and accuracy are optional."""

    latitude: Degrees
    longitude: Degrees
    altitude: Meters | None = None
    accuracy: Meters | None = None  # Horizontal radius of uncertainty

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class LocationFix:
    """One position report from the provider."""

    coords: LocationCoords
    timestamp: FixTimestamp  # Seconds since the epoch


FixCallback: TypeAlias = Callable[[LocationFix], None]


class LocationSubscription(abc.ABC):
    """Handle for a live stream of pushed fixes."""

    @abc.abstractmethod
    def remove(self) -> None:
        """Stop delivering fixes. Safe to call more than once."""
        ...


class LocationProvider(abc.ABC):
    """Abstract base class for a platform location provider."""

    @abc.abstractmethod
    async def request_permission(self) -> PermissionStatus:
        """Query, and if needed request, foreground location permission."""
        ...

    @abc.abstractmethod
    async def get_current_position(self) -> LocationFix:
        """Return a single fresh fix.

        Raises:
            LocationUnavailableError: If no fix could be obtained.
        """
        ...

    @abc.abstractmethod
    async def watch_position(
        self, callback: FixCallback, *, distance_interval: Meters
    ) -> LocationSubscription:
        """Start pushing fixes to ``callback``.

        Args:
            callback: Invoked on the event loop for every new fix.
            distance_interval: Minimum movement in meters between pushes.

        Returns:
            A subscription whose ``remove()`` ends the stream.
        """
        ...
