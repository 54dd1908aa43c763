"""Combat exchanges: player attacks, Creature Copy command attacks, and escape."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from ffc.domain.dice import clamp, roll_dice
from ffc.domain.entities import Enemy
from ffc.domain.luck import LuckResult, PlayerHitByEnemy, PlayerHitEnemy
from ffc.domain.modifiers import BASE_DAMAGE, get_enemy_damage_profile
from ffc.domain.roster import format_enemy_name
from ffc.domain.state import GameState
from ffc.services.hooks import CombatHooks
from ffc.services.luck_service import LuckService

logger = logging.getLogger(__name__)

ESCAPE_STAMINA_COST = 2

AttackOutcome = Literal["invalid", "standoff", "player_hit", "enemy_hit"]
CopyAttackOutcome = Literal["invalid", "cancelled", "standoff", "copy_hit", "target_hit"]


@dataclass(slots=True)
class AttackResult:
    """What one attack invocation did, in the order it happened."""

    outcome: AttackOutcome
    enemy_id: int | None = None
    reason: str | None = None
    monster_attack: int = 0
    player_attack: int = 0
    damage: int = 0
    enemy_defeated: bool = False
    player_defeated: bool = False
    luck: LuckResult | None = None


@dataclass(slots=True)
class CopyAttackResult:
    outcome: CopyAttackOutcome
    reason: str | None = None
    copy_roll: int = 0
    target_roll: int = 0
    damage: int = 0
    defeated_id: int | None = None


@dataclass(slots=True)
class EscapeResult:
    stamina_lost: int
    player_defeated: bool


class CombatService:
    """Resolves opposed 2D6 + Skill exchanges against the session roster."""

    def __init__(self, luck_service: LuckService | None = None) -> None:
        self._luck_service = luck_service or LuckService()

    # -----------------------
    # Player Attacks
    # -----------------------
    async def perform_attack_at(self, state: GameState, index: int, hooks: CombatHooks) -> AttackResult:
        """Attack the enemy shown at `index`; the index is turned into an id straight away."""
        enemy = state.roster.get(index)
        return await self.perform_attack(state, enemy.id if enemy else None, hooks)

    async def perform_attack(self, state: GameState, enemy_id: int | None, hooks: CombatHooks) -> AttackResult:
        """Run one attack round against the enemy with `enemy_id`.

        Damage from the opposed roll is applied before any prompt is awaited.
        After each await the enemy is looked up again by id, since the roster
        may have changed while the player was deciding.
        """
        enemy = state.roster.find_by_id(enemy_id)
        if enemy is None:
            hooks.log_message("Enemy not found.", "warning")
            return AttackResult(outcome="invalid", enemy_id=enemy_id, reason="missing")
        if not enemy.can_fight:
            hooks.log_message("Set enemy Skill and Stamina before attacking.", "warning")
            return AttackResult(outcome="invalid", enemy_id=enemy.id, reason="unready")

        player = state.player
        modifiers = state.player_modifiers
        monster_attack = roll_dice(2, state.rng) + enemy.skill
        player_attack = roll_dice(2, state.rng) + max(0, player.skill + modifiers.skill_bonus)
        label = format_enemy_name(enemy)
        logger.debug("Attack on enemy %s: monster %d vs player %d", enemy.id, monster_attack, player_attack)
        hooks.log_message(f"Combat vs {label}: Monster {monster_attack} vs Player {player_attack}.", "action")

        result = AttackResult(
            outcome="standoff",
            enemy_id=enemy.id,
            monster_attack=monster_attack,
            player_attack=player_attack,
        )
        if monster_attack == player_attack:
            hooks.log_message("Standoff! No damage dealt.", "info")
            return result

        if player_attack > monster_attack:
            await self._resolve_player_hit(state, enemy, label, result, hooks)
        else:
            await self._resolve_enemy_hit(state, enemy, label, result, hooks)
        return result

    async def _resolve_player_hit(
        self,
        state: GameState,
        enemy: Enemy,
        label: str,
        result: AttackResult,
        hooks: CombatHooks,
    ) -> None:
        result.outcome = "player_hit"
        result.damage = get_enemy_damage_profile(enemy, state.player_modifiers).damage_to_enemy
        enemy.stamina = max(0, enemy.stamina - result.damage)
        hooks.log_message(f"You hit {label} for {result.damage} damage.", "success")
        hooks.show_action_visual("playerHitEnemy")

        defeated_by_hit = enemy.stamina == 0
        if not defeated_by_hit:
            wants_luck = await hooks.prompt_luck_after_player_hit(label)
            if wants_luck:
                result.luck = self._luck_service.test_luck(state, PlayerHitEnemy(enemy.id), hooks)

        if defeated_by_hit:
            hooks.log_message(f"{label} is defeated.", "success")
            hooks.show_action_visual("defeatEnemy")
            if state.roster.contains(enemy):
                state.roster.remove_by_id(enemy.id)
            result.enemy_defeated = True
        elif result.luck is not None and result.luck.enemy_defeated:
            hooks.show_action_visual("defeatEnemy")
            result.enemy_defeated = True
        elif not state.roster.contains(enemy):
            logger.debug("Enemy %s left the roster during the Luck prompt", enemy.id)
        hooks.render_enemies()

    async def _resolve_enemy_hit(
        self,
        state: GameState,
        enemy: Enemy,
        label: str,
        result: AttackResult,
        hooks: CombatHooks,
    ) -> None:
        player = state.player
        result.outcome = "enemy_hit"
        result.damage = get_enemy_damage_profile(enemy, state.player_modifiers).damage_to_player
        player.stamina = clamp(player.stamina - result.damage, 0, player.max_stamina)
        hooks.sync_player_inputs()
        hooks.log_message(f"{label} hits you for {result.damage} damage.", "danger")

        await hooks.show_action_visual_and_wait("playerFailAttack")
        if await hooks.confirm_luck_after_enemy_hit():
            result.luck = self._luck_service.test_luck(state, PlayerHitByEnemy(), hooks)

        if player.is_defeated:
            self._signal_defeat(state, hooks)
            result.player_defeated = True
        hooks.render_enemies()

    # -----------------------
    # Creature Copy Allies
    # -----------------------
    def eligible_copy_targets(self, state: GameState, copy_id: int) -> List[Enemy]:
        return [
            enemy
            for enemy in state.roster
            if enemy.id != copy_id and not enemy.is_copy and enemy.stamina > 0
        ]

    async def command_copy_attack(self, state: GameState, copy_id: int, hooks: CombatHooks) -> CopyAttackResult:
        """Ask the UI for a target and let the copied ally attack it."""
        copied = state.roster.find_by_id(copy_id)
        if copied is None or not copied.is_copy:
            hooks.log_message("Copied creature not found.", "warning")
            return CopyAttackResult(outcome="invalid", reason="missing")

        candidates = self.eligible_copy_targets(state, copy_id)
        if not candidates:
            hooks.log_message("No valid enemies to attack.", "warning")
            return CopyAttackResult(outcome="invalid", reason="no_targets")

        target_id = await hooks.select_enemy(f"Choose a target for {format_enemy_name(copied)}.", candidates)
        if target_id is None:
            return CopyAttackResult(outcome="cancelled")
        return self.resolve_copied_creature_attack(state, copy_id, target_id, hooks)

    def resolve_copied_creature_attack(
        self, state: GameState, copy_id: int, target_id: int, hooks: CombatHooks
    ) -> CopyAttackResult:
        """Opposed roll between an ally copy and a foe. Both sides trade unmodified base damage."""
        copied = state.roster.find_by_id(copy_id)
        target = state.roster.find_by_id(target_id)
        if copied is None or target is None or copied is target or not copied.is_copy or target.is_copy:
            hooks.log_message("One of the selected creatures is no longer available.", "warning")
            return CopyAttackResult(outcome="invalid", reason="missing")
        if not copied.can_fight:
            hooks.log_message("Set Skill and Stamina for the copied creature before attacking.", "warning")
            return CopyAttackResult(outcome="invalid", reason="copy_unready")
        if not target.can_fight:
            hooks.log_message("Set Skill and Stamina for the target before attacking.", "warning")
            return CopyAttackResult(outcome="invalid", reason="target_unready")

        copy_roll = roll_dice(2, state.rng) + copied.skill
        target_roll = roll_dice(2, state.rng) + target.skill
        copy_label = format_enemy_name(copied)
        target_label = format_enemy_name(target)
        hooks.log_message(f"{copy_label} attacks {target_label}: {copy_roll} vs {target_roll}.", "action")

        result = CopyAttackResult(outcome="standoff", copy_roll=copy_roll, target_roll=target_roll)
        if copy_roll == target_roll:
            hooks.log_message("The copied creature trades feints with no damage dealt.", "info")
            return result

        result.damage = BASE_DAMAGE
        if copy_roll > target_roll:
            result.outcome = "copy_hit"
            target.stamina = max(0, target.stamina - BASE_DAMAGE)
            hooks.log_message(f"{target_label} takes {BASE_DAMAGE} damage from the copied creature.", "success")
            if target.stamina == 0:
                hooks.log_message(f"{target_label} is defeated by the copied creature.", "success")
                state.roster.remove_by_id(target.id)
                result.defeated_id = target.id
        else:
            result.outcome = "target_hit"
            copied.stamina = max(0, copied.stamina - BASE_DAMAGE)
            hooks.log_message(f"{copy_label} takes {BASE_DAMAGE} damage.", "danger")
            if copied.stamina == 0:
                hooks.log_message(f"{copy_label} is destroyed.", "warning")
                state.roster.remove_by_id(copied.id)
                result.defeated_id = copied.id
        hooks.render_enemies()
        return result

    # -----------------------
    # Escape
    # -----------------------
    def escape_combat(self, state: GameState, hooks: CombatHooks) -> EscapeResult:
        """Run away at a fixed cost of 2 Stamina; asking for confirmation is the caller's job."""
        player = state.player
        before = player.stamina
        player.stamina = clamp(player.stamina - ESCAPE_STAMINA_COST, 0, player.max_stamina)
        hooks.sync_player_inputs()
        hooks.log_message(f"You escaped combat and lost {ESCAPE_STAMINA_COST} Stamina.", "warning")
        defeated = player.is_defeated
        if defeated:
            self._signal_defeat(state, hooks)
        else:
            hooks.show_action_visual("escape", subline=f"You escape, losing {ESCAPE_STAMINA_COST} Stamina.")
        hooks.render_enemies()
        return EscapeResult(stamina_lost=max(0, before - player.stamina), player_defeated=defeated)

    @staticmethod
    def _signal_defeat(state: GameState, hooks: CombatHooks) -> None:
        state.game_over = True
        logger.debug("Player stamina reached 0; game over")
        hooks.log_message("You have been killed. Game Over.", "danger")
        hooks.show_action_visual("loseCombat")
