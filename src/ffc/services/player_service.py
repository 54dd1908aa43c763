"""Player lifecycle: new game setup, meals, potions, modifiers and manual edits."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping

from ffc.data.repositories import BooksRepository
from ffc.domain.defs import BookDef
from ffc.domain.dice import clamp, parse_number
from ffc.domain.entities import InitialStats, Player
from ffc.domain.modifiers import MODIFIER_MAX, MODIFIER_MIN
from ffc.domain.state import NOTE_FIELDS, GameState
from ffc.services.factories import StatRoll, create_player_from_rolls, roll_starting_stats
from ffc.services.hooks import CombatHooks

logger = logging.getLogger(__name__)

MEAL_STAMINA = 4
STAT_MAX = 999

POTION_OPTIONS: tuple[tuple[str, str], ...] = (
    ("Potion of Skill", "Restores Skill to full."),
    ("Potion of Strength", "Restores Stamina to full."),
    ("Potion of Fortune", "Restores Luck to full and increases your maximum by 1."),
)
POTION_NAMES = tuple(name for name, _ in POTION_OPTIONS)

_EDITABLE_FIELDS = {
    "skill": "max_skill",
    "stamina": "max_stamina",
    "luck": "max_luck",
    "magic": "max_magic",
}
EDITABLE_STATS: tuple[str, ...] = (*_EDITABLE_FIELDS, *_EDITABLE_FIELDS.values(), "meals")


@dataclass(slots=True)
class ActionResult:
    """Outcome of a player action that may be refused by the rules."""

    ok: bool
    reason: str | None = None


class PlayerService:
    """Applies non-combat rules to the session's player record."""

    def __init__(self, books_repo: BooksRepository) -> None:
        self._books_repo = books_repo

    def book_rules(self, state: GameState) -> BookDef:
        return self._books_repo.rules_for(state.book)

    def roll_stats(self, state: GameState, book: str) -> List[StatRoll]:
        return roll_starting_stats(self._books_repo.rules_for(book), state.rng)

    # -----------------------
    # New Game
    # -----------------------
    def start_new_game(
        self,
        state: GameState,
        rolls: Mapping[str, int],
        *,
        book: str,
        potion_choice: str | None = None,
        spell_selection: Mapping[str, int] | None = None,
        hooks: CombatHooks | None = None,
    ) -> None:
        """Reset the session and apply freshly rolled stats for `book`."""
        hooks = hooks or CombatHooks()
        rules = self._books_repo.rules_for(book)
        potion = potion_choice if rules.supports_potions and potion_choice in POTION_NAMES else None
        player, initial = create_player_from_rolls(rolls, meals_enabled=rules.supports_meals, potion=potion)

        state.book = book
        state.page_number = ""
        state.player = player
        state.initial_stats = initial
        state.player_modifiers.reset()
        state.roster.reset()
        state.log.clear()
        state.decisions.clear()
        state.game_over = False
        state.notes = {key: rules.starting_notes.get(key, "") for key in NOTE_FIELDS}

        spell_limit = rolls.get(rules.spell_limit_stat, 0) if rules.spell_limit_stat else 0
        state.spells.prepared = {
            key: count for key, count in (spell_selection or {}).items() if count > 0 and key in rules.spell_keys
        }
        state.spells.limit = max(0, spell_limit)

        logger.debug("New game for %s with rolls %s", book or "unknown book", dict(rolls))
        hooks.sync_player_inputs()
        hooks.render_enemies()
        hooks.log_message(f"New game started for {book or 'Unknown Book'}. Roll results applied.", "success")
        hooks.show_action_visual("newGame")

    # -----------------------
    # Consumables
    # -----------------------
    def eat_meal(self, state: GameState, hooks: CombatHooks | None = None) -> ActionResult:
        hooks = hooks or CombatHooks()
        player = state.player
        if not self.book_rules(state).supports_meals:
            hooks.log_message("Meals are not available for this adventure.", "warning")
            return ActionResult(ok=False, reason="meals_disabled")
        if player.meals <= 0:
            hooks.log_message("No meals left.", "warning")
            return ActionResult(ok=False, reason="no_meals")
        player.meals -= 1
        player.stamina = clamp(player.stamina + MEAL_STAMINA, 0, player.max_stamina)
        hooks.sync_player_inputs()
        hooks.log_message(f"You eat a meal and regain {MEAL_STAMINA} Stamina.", "success")
        hooks.show_action_visual("eatMeal")
        return ActionResult(ok=True)

    def apply_potion(self, state: GameState, hooks: CombatHooks | None = None) -> ActionResult:
        hooks = hooks or CombatHooks()
        player = state.player
        if not self.book_rules(state).supports_potions:
            hooks.log_message("Potions cannot be used for this adventure.", "warning")
            return ActionResult(ok=False, reason="potions_disabled")
        if not player.potion or player.potion_used:
            hooks.log_message("No potion available or it has already been used.", "warning")
            return ActionResult(ok=False, reason="no_potion")

        subline = "Potion restores your vigor."
        if player.potion == "Potion of Skill":
            player.skill = player.max_skill
            hooks.log_message("Potion of Skill used. Skill restored.", "success")
            subline = "Skill returns to its peak."
        elif player.potion == "Potion of Strength":
            player.stamina = player.max_stamina
            hooks.log_message("Potion of Strength used. Stamina restored.", "success")
            subline = "Stamina surges to full."
        elif player.potion == "Potion of Fortune":
            player.max_luck += 1
            player.luck = player.max_luck
            state.initial_stats.luck = player.max_luck
            hooks.log_message("Potion of Fortune used. Luck increased and restored.", "success")
            subline = "Luck rises and refills."
        player.potion_used = True
        hooks.sync_player_inputs()
        hooks.show_action_visual("drinkPotion", subline=subline)
        return ActionResult(ok=True)

    # -----------------------
    # Settings And Manual Edits
    # -----------------------
    def update_player_modifiers(
        self,
        state: GameState,
        *,
        damage_done: Any,
        damage_received: Any,
        skill_bonus: Any,
        hooks: CombatHooks | None = None,
    ) -> None:
        hooks = hooks or CombatHooks()
        modifiers = state.player_modifiers
        modifiers.damage_done = parse_number(damage_done, 0, MODIFIER_MIN, MODIFIER_MAX)
        modifiers.damage_received = parse_number(damage_received, 0, MODIFIER_MIN, MODIFIER_MAX)
        modifiers.skill_bonus = parse_number(skill_bonus, 0, MODIFIER_MIN, MODIFIER_MAX)
        hooks.render_enemies()
        hooks.log_message("Player modifiers updated.", "info")

    def set_player_stat(self, state: GameState, field_name: str, value: Any) -> int:
        """Manually set a current or max stat; current values never exceed their max."""
        player = state.player
        if field_name in _EDITABLE_FIELDS:
            max_value = getattr(player, _EDITABLE_FIELDS[field_name])
            new_value = clamp(parse_number(value, getattr(player, field_name), 0, STAT_MAX), 0, max_value)
            setattr(player, field_name, new_value)
            return new_value
        if field_name in _EDITABLE_FIELDS.values():
            new_max = parse_number(value, getattr(player, field_name), 0, STAT_MAX)
            setattr(player, field_name, new_max)
            current_field = field_name.removeprefix("max_")
            setattr(player, current_field, min(getattr(player, current_field), new_max))
            return new_max
        if field_name == "meals":
            player.meals = parse_number(value, player.meals, 0, STAT_MAX)
            return player.meals
        raise ValueError(f"Unknown player field '{field_name}'.")

    def record_decision(self, state: GameState, page_number: Any, decision: str) -> ActionResult:
        page = parse_number(page_number, 0, 0, 9999)
        if page <= 0 or not decision.strip():
            return ActionResult(ok=False, reason="invalid_decision")
        state.decisions.add(page, decision.strip())
        state.page_number = str(page)
        return ActionResult(ok=True)

    def edit_decision(self, state: GameState, index: int, page_number: Any, decision: str) -> ActionResult:
        if not 0 <= index < len(state.decisions):
            return ActionResult(ok=False, reason="no_decision")
        page = parse_number(page_number, 0, 0, 9999)
        if page <= 0 or not decision.strip():
            return ActionResult(ok=False, reason="invalid_decision")
        state.decisions.edit(index, page, decision.strip())
        return ActionResult(ok=True)

    # -----------------------
    # Save Restoration
    # -----------------------
    @staticmethod
    def hydrate_player(saved_player: Any, saved_initial: Any) -> tuple[Player, InitialStats]:
        """Rebuild the player from save data, clamping every value into range."""
        data: Mapping[str, Any] = saved_player if isinstance(saved_player, Mapping) else {}
        initial_data: Mapping[str, Any] = saved_initial if isinstance(saved_initial, Mapping) else {}

        def restore(stat: str) -> tuple[int, int]:
            current = parse_number(data.get(stat), 0, 0, STAT_MAX)
            max_value = parse_number(data.get(f"max{stat.title()}"), current, 0, STAT_MAX)
            return min(current, max_value), max_value

        skill, max_skill = restore("skill")
        stamina, max_stamina = restore("stamina")
        luck, max_luck = restore("luck")
        magic, max_magic = restore("magic")
        potion = data.get("potion")
        player = Player(
            skill=skill,
            stamina=stamina,
            luck=luck,
            magic=magic,
            max_skill=max_skill,
            max_stamina=max_stamina,
            max_luck=max_luck,
            max_magic=max_magic,
            meals=parse_number(data.get("meals"), Player().meals, 0, STAT_MAX),
            potion=potion if isinstance(potion, str) else None,
            potion_used=bool(data.get("potionUsed", False)),
        )
        initial = InitialStats(
            skill=parse_number(initial_data.get("skill"), 0, 0, STAT_MAX),
            stamina=parse_number(initial_data.get("stamina"), 0, 0, STAT_MAX),
            luck=parse_number(initial_data.get("luck"), 0, 0, STAT_MAX),
            magic=parse_number(initial_data.get("magic"), 0, 0, STAT_MAX),
        )
        return player, initial
