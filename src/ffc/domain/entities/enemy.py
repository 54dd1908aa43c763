"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ModifierMode = Literal["delta"]


@dataclass(slots=True)
class EnemyModifiers:
    """Per-enemy damage deltas layered on the base damage."""

    damage_dealt: int = 0
    damage_received: int = 0
    player_damage_bonus: int = 0
    player_damage_taken_bonus: int = 0
    mode: ModifierMode = "delta"


@dataclass(slots=True, eq=False)
class Enemy:
    """A roster slot. Compared by identity so a removed record is never confused with a lookalike."""

    id: int
    name: str
    skill: int = 0
    stamina: int = 0
    modifiers: EnemyModifiers = field(default_factory=EnemyModifiers)
    is_copy: bool = False
    copied_from_id: int | None = None

    @property
    def can_fight(self) -> bool:
        return self.skill > 0 and self.stamina > 0
