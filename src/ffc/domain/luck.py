"""Luck-test contexts and outcomes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True, slots=True)
class GeneralLuck:
    """A plain Luck test with no follow-up consequence."""


@dataclass(frozen=True, slots=True)
class PlayerHitEnemy:
    """Press a successful hit: lucky deals 2 more, unlucky lets the foe recover 1."""

    enemy_id: int


@dataclass(frozen=True, slots=True)
class PlayerHitByEnemy:
    """Soften a wound: lucky restores 1 Stamina, unlucky costs 1 more."""


LuckContext = Union[GeneralLuck, PlayerHitEnemy, PlayerHitByEnemy]

LuckOutcome = Literal["none", "missing", "general", "playerHitEnemy", "playerHitByEnemy"]


@dataclass(frozen=True, slots=True)
class LuckResult:
    outcome: LuckOutcome
    lucky: bool
    roll: int | None = None
    enemy_defeated: bool = False
