"""Player statistics."""

from __future__ import annotations

from dataclasses import dataclass

from hazardwalk import config


@dataclass
class PlayerStats:
    """Handles the player's HP and the stats that modify incoming damage.

    ``hp`` always stays within ``[0, max_hp]`` and is rounded to
    ``config.HP_DECIMALS`` places on every mutation. ``guard`` is subtracted
    from each zone's raw damage. ``resonance`` is carried for display only.
    """

    hp: float = config.INITIAL_HP
    guard: float = config.INITIAL_GUARD
    resonance: float = config.INITIAL_RESONANCE
    max_hp: float = config.MAX_HP

    def __post_init__(self) -> None:
        self.hp = self._bounded(self.hp)

    def _bounded(self, value: float) -> float:
        return round(min(max(value, 0.0), self.max_hp), config.HP_DECIMALS)

    def take_damage(self, amount: float) -> float:
        """Reduce HP by ``amount``, flooring at zero.

        Returns:
            The HP actually lost.
        """
        if amount <= 0:
            return 0.0
        previous = self.hp
        self.hp = self._bounded(self.hp - amount)
        return previous - self.hp

    def heal(self, amount: float) -> float:
        """Restore ``amount`` HP, capped at ``max_hp``.

        Returns:
            The HP actually restored.
        """
        if amount <= 0:
            return 0.0
        previous = self.hp
        self.hp = self._bounded(self.hp + amount)
        return self.hp - previous

    def is_alive(self) -> bool:
        """Return True if HP is above zero."""
        return self.hp > 0

    @property
    def is_full(self) -> bool:
        return self.hp >= self.max_hp
