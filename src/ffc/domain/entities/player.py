"""Player and player-wide modifier models."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MEALS = 10


@dataclass(slots=True)
class Player:
    """Current and maximum adventurer stats plus consumables."""

    skill: int = 0
    stamina: int = 0
    luck: int = 0
    magic: int = 0
    max_skill: int = 0
    max_stamina: int = 0
    max_luck: int = 0
    max_magic: int = 0
    meals: int = DEFAULT_MEALS
    potion: str | None = None
    potion_used: bool = False

    @property
    def is_defeated(self) -> bool:
        return self.stamina <= 0


@dataclass(slots=True)
class InitialStats:
    """Starting values rolled at new game; restoration spells cap here."""

    skill: int = 0
    stamina: int = 0
    luck: int = 0
    magic: int = 0


@dataclass(slots=True)
class PlayerModifiers:
    """Global adjustments applied to every exchange, each within [-99, 99]."""

    damage_done: int = 0
    damage_received: int = 0
    skill_bonus: int = 0

    def reset(self) -> None:
        self.damage_done = 0
        self.damage_received = 0
        self.skill_bonus = 0
