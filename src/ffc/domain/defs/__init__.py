"""Definition dataclasses exported for repository use."""

from .book_def import BookDef, ExtraStatDef
from .spell_def import SpellDef

__all__ = [
    "BookDef",
    "ExtraStatDef",
    "SpellDef",
]
