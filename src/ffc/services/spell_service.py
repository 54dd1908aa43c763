"""Prepared spells: selection limits and casting."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from ffc.data.repositories import BooksRepository, SpellsRepository
from ffc.domain.defs import SpellDef
from ffc.domain.dice import parse_number
from ffc.domain.roster import EnemyRoster, format_enemy_name
from ffc.domain.state import GameState
from ffc.services.errors import SpellError
from ffc.services.hooks import CombatHooks

logger = logging.getLogger(__name__)

SPELL_COUNT_MAX = 999


@dataclass(slots=True)
class CastResult:
    ok: bool
    spell_key: str
    reason: str | None = None
    created_enemy_id: int | None = None
    restored: int = 0


class SpellService:
    """Looks up the current book's spells and applies their effects."""

    def __init__(self, books_repo: BooksRepository, spells_repo: SpellsRepository) -> None:
        self._books_repo = books_repo
        self._spells_repo = spells_repo

    def available_spells(self, book: str) -> List[SpellDef]:
        rules = self._books_repo.rules_for(book)
        return [self._spells_repo.get(key) for key in rules.spell_keys]

    def validate_selection(self, book: str, selection: Mapping[str, Any], limit: int) -> Dict[str, int]:
        """Return the cleaned selection or raise SpellError."""
        allowed = {spell.key for spell in self.available_spells(book)}
        cleaned: Dict[str, int] = {}
        for key, raw_count in selection.items():
            if key not in allowed:
                raise SpellError(f"Spell '{key}' is not available for {book or 'this adventure'}.")
            count = parse_number(raw_count, -1, -1, SPELL_COUNT_MAX)
            if count < 0:
                raise SpellError(f"Spell '{key}' needs a non-negative count.")
            if count:
                cleaned[key] = count
        total = sum(cleaned.values())
        if total > limit:
            raise SpellError(f"Selected {total} spells but only {limit} may be prepared.")
        return cleaned

    # -----------------------
    # Casting
    # -----------------------
    async def cast_spell(self, state: GameState, spell_key: str, hooks: CombatHooks | None = None) -> CastResult:
        """Cast one prepared copy of `spell_key`.

        Creature Copy is only spent once an ally has actually been created.
        """
        hooks = hooks or CombatHooks()
        spell = next((entry for entry in self.available_spells(state.book) if entry.key == spell_key), None)
        if spell is None:
            hooks.log_message("That spell is not available for this adventure.", "warning")
            return CastResult(ok=False, spell_key=spell_key, reason="unavailable")
        remaining = parse_number(state.spells.prepared.get(spell_key), 0, 0, SPELL_COUNT_MAX)
        if remaining <= 0:
            hooks.log_message("No prepared copies of that spell remain.", "warning")
            return CastResult(ok=False, spell_key=spell_key, reason="not_prepared")

        result = CastResult(ok=True, spell_key=spell_key)
        if spell.effect == "creatureCopy":
            created_id = await self._creature_copy(state, hooks)
            if created_id is None:
                return CastResult(ok=False, spell_key=spell_key, reason="cancelled")
            result.created_enemy_id = created_id
            self._spend(state, spell_key, remaining)
        else:
            self._spend(state, spell_key, remaining)
            result.restored = self._apply_effect(state, spell, hooks)

        logger.debug("Cast %s; %d prepared copies left", spell_key, state.spells.prepared[spell_key])
        hooks.show_action_visual("castSpell", subline=spell.description or "You unleash a prepared spell.")
        return result

    @staticmethod
    def _spend(state: GameState, spell_key: str, remaining: int) -> None:
        state.spells.prepared[spell_key] = max(0, remaining - 1)

    async def _creature_copy(self, state: GameState, hooks: CombatHooks) -> int | None:
        candidates = [enemy for enemy in state.roster if not enemy.is_copy]
        if not candidates:
            hooks.log_message("No eligible enemies to copy. Add a foe first.", "warning")
            return None
        source_id = await hooks.select_enemy("Select an enemy to duplicate as your ally.", candidates)
        if source_id is None:
            return None
        source = state.roster.find_by_id(source_id)
        if source is None or source.is_copy:
            hooks.log_message("That enemy is no longer available.", "warning")
            return None
        ally = state.roster.add(EnemyRoster.create_copied_enemy_from(source), at_top=True)
        hooks.log_message(f"Creature Copy creates an ally from {format_enemy_name(source)}.", "success")
        hooks.render_enemies()
        return ally.id

    @staticmethod
    def _apply_effect(state: GameState, spell: SpellDef, hooks: CombatHooks) -> int:
        player = state.player
        if spell.effect in ("restoreLuck", "restoreStamina"):
            stat = "luck" if spell.effect == "restoreLuck" else "stamina"
            label = stat.title()
            initial = getattr(state.initial_stats, stat)
            before = getattr(player, stat)
            ceiling = initial or getattr(player, f"max_{stat}") or before
            setattr(player, stat, min(ceiling, before + initial // 2))
            hooks.sync_player_inputs()
            gained = getattr(player, stat) - before
            if gained > 0:
                hooks.log_message(f"{spell.name} restores {gained} {label} (up to {ceiling}).", "success")
            else:
                hooks.log_message(
                    f"{spell.name} has no effect; {label} is already at its starting value.", "info"
                )
            return max(0, gained)

        hooks.log_message(f"Spell cast: {spell.name}. {spell.description}", "info")
        return 0

    # -----------------------
    # Save Restoration
    # -----------------------
    def apply_spells_state(self, state: GameState, saved: Any) -> None:
        data: Mapping[str, Any] = saved if isinstance(saved, Mapping) else {}
        allowed = {spell.key for spell in self.available_spells(state.book)}
        prepared_raw = data.get("prepared")
        prepared: Dict[str, int] = {}
        if isinstance(prepared_raw, Mapping):
            for key, raw_count in prepared_raw.items():
                count = parse_number(raw_count, 0, 0, SPELL_COUNT_MAX)
                if key in allowed and count > 0:
                    prepared[key] = count
        state.spells.prepared = prepared
        state.spells.limit = parse_number(data.get("limit"), state.initial_stats.magic, 0, SPELL_COUNT_MAX)
