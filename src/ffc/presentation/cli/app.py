"""Console-driven UI loop for the Fighting Fantasy companion."""
from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Callable, Dict, List, Sequence

from ffc.core.rng import RNG
from ffc.core.types import Tone, VisualKey
from ffc.data.repositories import BooksRepository, SpellsRepository
from ffc.domain.dice import general_roll_labels, parse_number, roll_general
from ffc.domain.entities import Enemy
from ffc.domain.luck import GeneralLuck
from ffc.domain.modifiers import normalize_enemy_modifiers
from ffc.domain.roster import format_enemy_option_label
from ffc.domain.state import GameState
from ffc.presentation.cli import render
from ffc.presentation.cli.config import load_config
from ffc.presentation.cli.save_files import SaveFileInfo, SaveFileStore
from ffc.services import (
    EDITABLE_STATS,
    POTION_OPTIONS,
    CombatHooks,
    CombatService,
    LuckService,
    PlayerService,
    SaveLoadError,
    SaveService,
    SpellError,
    SpellService,
)

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1

_ACTIONS: List[tuple[str, str]] = [
    ("attack", "Attack an enemy"),
    ("add_enemy", "Add an enemy"),
    ("edit_modifiers", "Edit enemy damage modifiers"),
    ("remove_enemy", "Remove an enemy"),
    ("copy_attack", "Command a copied creature"),
    ("escape", "Escape combat"),
    ("luck", "Test your Luck"),
    ("dice", "Roll dice"),
    ("meal", "Eat a meal"),
    ("potion", "Drink potion"),
    ("spell", "Cast a spell"),
    ("player_modifiers", "Set player modifiers"),
    ("edit_stat", "Edit a player stat"),
    ("decision", "Record a page decision"),
    ("edit_decision", "Edit a page decision"),
    ("log", "Show recent log"),
    ("save", "Save game"),
    ("load", "Load game"),
    ("delete_save", "Delete a save"),
    ("new_game", "New game"),
    ("quit", "Quit"),
]


class CompanionApp:
    """Wires the services to stdin/stdout through a CombatHooks bundle."""

    def __init__(
        self,
        *,
        books_repo: BooksRepository | None = None,
        spells_repo: SpellsRepository | None = None,
        store: SaveFileStore | None = None,
        default_book: str = "",
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self._spells_repo = spells_repo or SpellsRepository()
        self._books_repo = books_repo or BooksRepository(spells_repo=self._spells_repo)
        self._store = store or SaveFileStore()
        self._default_book = default_book
        self._input = input_fn
        self.luck_service = LuckService()
        self.combat_service = CombatService(self.luck_service)
        self.player_service = PlayerService(self._books_repo)
        self.spell_service = SpellService(self._books_repo, self._spells_repo)
        self.save_service = SaveService(spell_service=self.spell_service)
        self.state = GameState(rng=RNG(secrets.randbelow(_MAX_RANDOM_SEED)))
        self.hooks = self._build_hooks()

    # -----------------------
    # Hooks
    # -----------------------
    def _build_hooks(self) -> CombatHooks:
        return CombatHooks(
            log_message=self._log_message,
            show_action_visual=self._show_visual,
            show_action_visual_and_wait=self._show_visual_and_wait,
            prompt_luck_after_player_hit=self._prompt_luck_after_hit,
            confirm_luck_after_enemy_hit=self._confirm_luck_after_wound,
            select_enemy=self._select_enemy,
            sync_player_inputs=self._render_player,
            render_enemies=self._render_enemies,
        )

    def _log_message(self, text: str, tone: Tone) -> None:
        self.state.log.add(text, tone)
        render.render_log_message(text, tone)

    def _show_visual(self, key: VisualKey, subline: str | None = None) -> None:
        render.render_visual(key, subline)

    async def _show_visual_and_wait(self, key: VisualKey, subline: str | None = None) -> None:
        render.render_visual(key, subline)
        self._input("(press Enter) ")

    async def _prompt_luck_after_hit(self, enemy_label: str) -> bool:
        return self._confirm(f"Test your Luck to press the hit on {enemy_label}?")

    async def _confirm_luck_after_wound(self) -> bool:
        return self._confirm("Test your Luck to soften the wound?")

    async def _select_enemy(self, title: str, candidates: Sequence[Enemy]) -> int | None:
        render.render_menu(title, [format_enemy_option_label(enemy) for enemy in candidates])
        choice = self._prompt_index(len(candidates), allow_cancel=True)
        return None if choice is None else candidates[choice].id

    def _render_player(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Player now %s", self.state.player)

    def _render_enemies(self) -> None:
        return None

    # -----------------------
    # Prompts
    # -----------------------
    def _confirm(self, question: str) -> bool:
        return self._input(f"{question} [y/N]: ").strip().lower() in ("y", "yes")

    def _prompt_index(self, count: int, *, allow_cancel: bool = False) -> int | None:
        suffix = " (blank to cancel)" if allow_cancel else ""
        while True:
            raw = self._input(f"Select an option{suffix}: ").strip()
            if not raw and allow_cancel:
                return None
            if raw.isdigit() and 1 <= int(raw) <= count:
                return int(raw) - 1
            print(f"Invalid selection. Please enter a number between 1 and {count}.")

    def _prompt_text(self, label: str, default: str = "") -> str:
        raw = self._input(f"{label}{f' [{default}]' if default else ''}: ").strip()
        return raw or default

    def _prompt_enemy(self, title: str) -> Enemy | None:
        enemies = list(self.state.roster)
        if not enemies:
            print("No enemies.")
            return None
        render.render_menu(title, [format_enemy_option_label(enemy) for enemy in enemies])
        choice = self._prompt_index(len(enemies), allow_cancel=True)
        return None if choice is None else enemies[choice]

    # -----------------------
    # Loop
    # -----------------------
    async def run(self) -> None:
        print("=== Fighting Fantasy Companion ===")
        await self.new_game()
        while True:
            self._render_status()
            render.render_menu("Actions", [label for _, label in _ACTIONS])
            index = self._prompt_index(len(_ACTIONS))
            action = _ACTIONS[index][0]
            if action == "quit":
                break
            try:
                await self.dispatch(action)
            except (SaveLoadError, SpellError) as exc:
                render.render_log_message(str(exc), "warning")
        print("Goodbye!")

    def _render_status(self) -> None:
        rules = self.player_service.book_rules(self.state)
        mode = ", multi-combat" if rules.supports_multi_combat else ""
        render.render_heading(f"{self.state.book or 'Unknown Book'} (page {self.state.page_number or '?'}{mode})")
        render.render_bullet_lines(
            render.format_player_lines(
                self.state.player, self.state.player_modifiers, show_magic=bool(rules.spell_keys)
            )
        )
        if self.state.game_over:
            print("You have been killed. Start a new game or load a save.")
        render.render_enemies(list(self.state.roster), self.state.player_modifiers)

    async def dispatch(self, action: str) -> None:
        handlers: Dict[str, Callable[[], object]] = {
            "attack": self._attack,
            "add_enemy": self._add_enemy,
            "edit_modifiers": self._edit_modifiers,
            "remove_enemy": self._remove_enemy,
            "copy_attack": self._copy_attack,
            "escape": self._escape,
            "luck": self._test_luck,
            "dice": self._roll_dice,
            "meal": lambda: self.player_service.eat_meal(self.state, self.hooks),
            "potion": lambda: self.player_service.apply_potion(self.state, self.hooks),
            "spell": self._cast_spell,
            "player_modifiers": self._set_player_modifiers,
            "edit_stat": self._edit_stat,
            "decision": self._record_decision,
            "edit_decision": self._edit_decision,
            "log": self._show_log,
            "save": self._save,
            "load": self._load,
            "delete_save": self._delete_save,
            "new_game": self.new_game,
        }
        outcome = handlers[action]()
        if asyncio.iscoroutine(outcome):
            await outcome

    async def new_game(self) -> None:
        names = self._books_repo.names()
        render.render_menu("Choose your book", names)
        default_hint = f" (blank for {self._default_book})" if self._default_book else ""
        raw = self._input(f"Book number{default_hint}: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(names):
            book = names[int(raw) - 1]
        else:
            book = self._default_book or names[0]

        rolls = self.player_service.roll_stats(self.state, book)
        render.render_heading("Starting stats")
        render.render_bullet_lines(f"{roll.label}: {roll.detail}" for roll in rolls)
        totals = {roll.key: roll.total for roll in rolls}

        rules = self._books_repo.rules_for(book)
        potion = None
        if rules.supports_potions:
            render.render_menu("Choose a potion", [f"{name}: {helper}" for name, helper in POTION_OPTIONS])
            potion = POTION_OPTIONS[self._prompt_index(len(POTION_OPTIONS))][0]

        selection: Dict[str, int] = {}
        limit = totals.get(rules.spell_limit_stat, 0) if rules.spell_limit_stat else 0
        if limit:
            selection = self._prompt_spell_selection(book, limit)

        self.player_service.start_new_game(
            self.state,
            totals,
            book=book,
            potion_choice=potion,
            spell_selection=selection,
            hooks=self.hooks,
        )

    def _prompt_spell_selection(self, book: str, limit: int) -> Dict[str, int]:
        while True:
            render.render_heading(f"Prepare up to {limit} spells")
            raw_counts: Dict[str, str] = {}
            for spell in self.spell_service.available_spells(book):
                raw_counts[spell.key] = self._input(f"{spell.name} ({spell.description}) count [0]: ").strip() or "0"
            try:
                return self.spell_service.validate_selection(book, raw_counts, limit)
            except SpellError as exc:
                print(exc)

    # -----------------------
    # Actions
    # -----------------------
    async def _attack(self) -> None:
        enemy = self._prompt_enemy("Attack which enemy?")
        if enemy is not None:
            await self.combat_service.perform_attack(self.state, enemy.id, self.hooks)

    def _add_enemy(self) -> None:
        name = self._prompt_text("Name", f"Enemy {self.state.roster.next_id}")
        skill = parse_number(self._prompt_text("Skill", "0"), 0, 0, 999)
        stamina = parse_number(self._prompt_text("Stamina", "0"), 0, 0, 999)
        enemy = self.state.roster.add({"name": name, "skill": skill, "stamina": stamina})
        logger.debug("Added enemy %s from console", enemy.id)

    def _edit_modifiers(self) -> None:
        enemy = self._prompt_enemy("Edit which enemy?")
        if enemy is None:
            return
        current = enemy.modifiers
        enemy.modifiers = normalize_enemy_modifiers(
            {
                "mode": "delta",
                "damageDealt": self._prompt_text("Damage it deals (+/-)", str(current.damage_dealt)),
                "damageReceived": self._prompt_text("Damage it takes (+/-)", str(current.damage_received)),
                "playerDamageBonus": self._prompt_text(
                    "Your damage bonus vs it", str(current.player_damage_bonus)
                ),
                "playerDamageTakenBonus": self._prompt_text(
                    "Extra damage you take from it", str(current.player_damage_taken_bonus)
                ),
            }
        )

    def _remove_enemy(self) -> None:
        enemy = self._prompt_enemy("Remove which enemy?")
        if enemy is not None:
            self.state.roster.remove_by_id(enemy.id)

    async def _copy_attack(self) -> None:
        copies = [enemy for enemy in self.state.roster if enemy.is_copy]
        if not copies:
            print("No copied creatures.")
            return
        copy_id = await self._select_enemy("Which copied creature attacks?", copies)
        if copy_id is not None:
            await self.combat_service.command_copy_attack(self.state, copy_id, self.hooks)

    def _escape(self) -> None:
        if self._confirm("Are you sure you want to run away? You will lose 2 Stamina."):
            self.combat_service.escape_combat(self.state, self.hooks)

    def _test_luck(self) -> None:
        self.luck_service.test_luck(self.state, GeneralLuck(), self.hooks)

    def _roll_dice(self) -> None:
        options = general_roll_labels()
        render.render_menu("Roll which dice?", [label for _, label in options])
        choice = self._prompt_index(len(options), allow_cancel=True)
        if choice is None:
            return
        label, roll = roll_general(options[choice][0], self.state.rng)
        self._log_message(f"Rolled {label}: {roll.describe()}", "action")

    async def _cast_spell(self) -> None:
        spells = [
            spell
            for spell in self.spell_service.available_spells(self.state.book)
            if self.state.spells.prepared.get(spell.key, 0) > 0
        ]
        if not spells:
            print("No prepared spells.")
            return
        render.render_menu(
            "Cast which spell?", [f"{spell.name} x{self.state.spells.prepared[spell.key]}" for spell in spells]
        )
        choice = self._prompt_index(len(spells), allow_cancel=True)
        if choice is not None:
            await self.spell_service.cast_spell(self.state, spells[choice].key, self.hooks)

    def _set_player_modifiers(self) -> None:
        modifiers = self.state.player_modifiers
        self.player_service.update_player_modifiers(
            self.state,
            damage_done=self._prompt_text("Damage done (+/-)", str(modifiers.damage_done)),
            damage_received=self._prompt_text("Damage received (+/-)", str(modifiers.damage_received)),
            skill_bonus=self._prompt_text("Skill bonus (+/-)", str(modifiers.skill_bonus)),
            hooks=self.hooks,
        )

    def _edit_stat(self) -> None:
        player = self.state.player
        render.render_menu(
            "Edit which stat?",
            [f"{name.replace('_', ' ')} ({getattr(player, name)})" for name in EDITABLE_STATS],
        )
        choice = self._prompt_index(len(EDITABLE_STATS), allow_cancel=True)
        if choice is None:
            return
        field_name = EDITABLE_STATS[choice]
        value = self.player_service.set_player_stat(
            self.state, field_name, self._prompt_text("New value", str(getattr(player, field_name)))
        )
        self._log_message(f"{field_name.replace('_', ' ').capitalize()} set to {value}.", "info")

    def _record_decision(self) -> None:
        page = self._prompt_text("Page number", self.state.page_number)
        decision = self._prompt_text("Decision")
        result = self.player_service.record_decision(self.state, page, decision)
        if not result.ok:
            print("A page number and a decision are both required.")

    def _edit_decision(self) -> None:
        decisions = list(self.state.decisions)
        if not decisions:
            print("No decisions recorded.")
            return
        render.render_menu("Edit which decision?", [entry.message for entry in decisions])
        choice = self._prompt_index(len(decisions), allow_cancel=True)
        if choice is None:
            return
        entry = decisions[choice]
        page = self._prompt_text("Page number", str(entry.page_number or ""))
        decision = self._prompt_text("Decision", entry.decision)
        result = self.player_service.edit_decision(self.state, choice, page, decision)
        if not result.ok:
            print("A page number and a decision are both required.")

    def _show_log(self) -> None:
        render.render_heading("Recent log")
        for entry in list(self.state.log)[:15]:
            render.render_log_message(entry.message, entry.tone)
        render.render_heading("Decisions")
        for decision in list(self.state.decisions)[:10]:
            print(decision.message)

    def _save(self) -> None:
        path = self._store.write(self.save_service.build_payload(self.state))
        self._log_message(f"Game saved to {path.name}.", "success")

    def _prompt_save(self, title: str) -> SaveFileInfo | None:
        saves = self._store.list_saves()
        if not saves:
            print("No saves found.")
            return None
        render.render_menu(
            title,
            [
                f"{info.path.name} (corrupt)" if info.is_corrupt else f"{info.book or 'Unknown Book'}, page "
                f"{info.page_number or '?'} ({info.saved_at or 'unknown time'})"
                for info in saves
            ],
        )
        choice = self._prompt_index(len(saves), allow_cancel=True)
        return None if choice is None else saves[choice]

    def _load(self) -> None:
        info = self._prompt_save("Load which save?")
        if info is None:
            return
        payload = self._store.read(info.path)
        self.state = self.save_service.apply_payload(payload, rng=self.state.rng)
        self._log_message("Save loaded.", "success")

    def _delete_save(self) -> None:
        info = self._prompt_save("Delete which save?")
        if info is None or not self._confirm(f"Delete {info.path.name}?"):
            return
        self._store.delete(info.path)
        self._log_message(f"Deleted {info.path.name}.", "warning")


def main(default_book: str | None = None) -> None:
    """Start the interactive CLI session."""
    config = load_config()
    app = CompanionApp(default_book=default_book or config["default_book"])
    try:
        asyncio.run(app.run())
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")
