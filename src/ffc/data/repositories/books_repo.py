"""Book rules repository."""
from __future__ import annotations

from typing import Dict, List, Tuple

from ffc.data.errors import DataReferenceError, DataValidationError
from ffc.data.repositories.base import RepositoryBase
from ffc.data.repositories.spells_repo import SpellsRepository
from ffc.domain.defs import BookDef, ExtraStatDef


class BooksRepository(RepositoryBase[BookDef]):
    """Loads book titles and their rule toggles, checking spell references."""

    def __init__(self, base_path=None, spells_repo: SpellsRepository | None = None) -> None:
        super().__init__("books.json", base_path)
        self._spells_repo = spells_repo or SpellsRepository(base_path)

    def rules_for(self, name: str) -> BookDef:
        """Rules for `name`; titles without an entry play with the default rules."""
        try:
            return self.get(name)
        except KeyError:
            return BookDef(name=name)

    def names(self) -> List[str]:
        return [book.name for book in self.all()]

    def _build(self, raw: dict[str, object]) -> Dict[str, BookDef]:
        books: Dict[str, BookDef] = {}
        for name, payload in raw.items():
            context = f"book '{name}'"
            data = self._require_mapping(payload, context)
            spell_keys = tuple(self._require_str_list(data.get("spells", []), f"{context} spells"))
            for key in spell_keys:
                try:
                    self._spells_repo.get(key)
                except KeyError as exc:
                    raise DataReferenceError(f"{context} references unknown spell '{key}'.", missing=key) from exc

            extra_stats = self._build_extra_stats(data.get("extra_stats", {}), context)
            spell_limit_stat = data.get("spell_limit_stat")
            if spell_limit_stat is not None:
                spell_limit_stat = self._require_str(spell_limit_stat, f"{context} spell_limit_stat")

            notes_raw = self._require_mapping(data.get("starting_notes", {}), f"{context} starting_notes")
            starting_notes = {
                key: self._require_str(value, f"{context} starting_notes.{key}")
                for key, value in notes_raw.items()
            }

            books[name] = BookDef(
                name=name,
                supports_potions=self._require_bool(data.get("supports_potions", True), f"{context} supports_potions"),
                supports_meals=self._require_bool(data.get("supports_meals", True), f"{context} supports_meals"),
                supports_multi_combat=self._require_bool(
                    data.get("supports_multi_combat", False), f"{context} supports_multi_combat"
                ),
                extra_stats=extra_stats,
                spell_keys=spell_keys,
                spell_limit_stat=spell_limit_stat,
                starting_notes=starting_notes,
            )
        return books

    def _build_extra_stats(self, value: object, context: str) -> Tuple[ExtraStatDef, ...]:
        mapping = self._require_mapping(value, f"{context} extra_stats")
        stats: List[ExtraStatDef] = []
        for key, payload in mapping.items():
            stat_context = f"{context} extra_stats.{key}"
            data = self._require_mapping(payload, stat_context)
            dice = self._require_int(data.get("dice"), f"{stat_context} dice")
            if dice <= 0:
                raise DataValidationError(f"{stat_context} dice must be positive.")
            stats.append(
                ExtraStatDef(
                    key=key,
                    label=self._require_str(data.get("label"), f"{stat_context} label"),
                    dice=dice,
                    bonus=self._require_int(data.get("bonus", 0), f"{stat_context} bonus"),
                )
            )
        return tuple(stats)
