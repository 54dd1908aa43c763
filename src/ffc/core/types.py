"""Shared type aliases for the core and domain layers."""
from typing import Literal

Tone = Literal["info", "action", "success", "warning", "danger"]

VisualKey = Literal[
    "newGame",
    "eatMeal",
    "drinkPotion",
    "castSpell",
    "escape",
    "blockEnemy",
    "enemyHitYou",
    "playerHitEnemy",
    "playerMissEnemy",
    "playerFailAttack",
    "defeatEnemy",
    "loseCombat",
    "lucky",
    "unlucky",
]

SpellEffect = Literal["creatureCopy", "restoreLuck", "restoreStamina", "log"]

__all__ = ["SpellEffect", "Tone", "VisualKey"]
