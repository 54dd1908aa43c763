"""Spell definitions."""
from __future__ import annotations

from dataclasses import dataclass

from ffc.core.types import SpellEffect


@dataclass(frozen=True, slots=True)
class SpellDef:
    key: str
    name: str
    description: str
    effect: SpellEffect
