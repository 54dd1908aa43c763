"""Gamebook rule definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True, slots=True)
class ExtraStatDef:
    """A book-specific stat rolled as `dice`D6 + `bonus` at new game."""

    key: str
    label: str
    dice: int
    bonus: int

    @property
    def helper(self) -> str:
        return f"Roll {self.dice}D6 + {self.bonus}"


@dataclass(frozen=True, slots=True)
class BookDef:
    """Rules toggles for one Fighting Fantasy title."""

    name: str
    supports_potions: bool = True
    supports_meals: bool = True
    supports_multi_combat: bool = False
    extra_stats: Tuple[ExtraStatDef, ...] = ()
    spell_keys: Tuple[str, ...] = ()
    spell_limit_stat: str | None = None
    starting_notes: Dict[str, str] = field(default_factory=dict)
