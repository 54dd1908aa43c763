"""Spell library repository."""
from __future__ import annotations

from typing import Dict

from ffc.data.errors import DataValidationError
from ffc.data.repositories.base import RepositoryBase
from ffc.domain.defs import SpellDef

_EFFECTS = ("creatureCopy", "restoreLuck", "restoreStamina", "log")


class SpellsRepository(RepositoryBase[SpellDef]):
    """Loads and validates the shared spell catalog."""

    def __init__(self, base_path=None) -> None:
        super().__init__("spells.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SpellDef]:
        spells: Dict[str, SpellDef] = {}
        for key, payload in raw.items():
            context = f"spell '{key}'"
            data = self._require_mapping(payload, context)
            effect = data.get("effect", "log")
            if effect not in _EFFECTS:
                raise DataValidationError(f"{context} effect must be one of {list(_EFFECTS)}.")
            spells[key] = SpellDef(
                key=key,
                name=self._require_str(data.get("name"), f"{context} name"),
                description=self._require_str(data.get("description"), f"{context} description"),
                effect=effect,
            )
        return spells
