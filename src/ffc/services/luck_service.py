"""Luck tests and their context-specific consequences."""
from __future__ import annotations

import logging

from ffc.domain.dice import clamp, roll_dice
from ffc.domain.luck import (
    GeneralLuck,
    LuckContext,
    LuckResult,
    PlayerHitByEnemy,
    PlayerHitEnemy,
)
from ffc.domain.roster import format_enemy_name
from ffc.domain.state import GameState
from ffc.services.hooks import CombatHooks

logger = logging.getLogger(__name__)

LUCKY_EXTRA_DAMAGE = 2
UNLUCKY_ENEMY_RECOVERY = 1
WOUND_ADJUSTMENT = 1


class LuckService:
    """Spends one Luck point per test and applies the outcome to the session."""

    def test_luck(
        self,
        state: GameState,
        context: LuckContext | None = None,
        hooks: CombatHooks | None = None,
    ) -> LuckResult:
        """Roll 2D6 against current Luck; lucky when the roll does not exceed it.

        Luck drops by one whatever the result. Running out of Luck, or pressing a
        hit on an enemy that has since left the roster, is reported through the
        result rather than raised.
        """
        hooks = hooks or CombatHooks()
        context = context or GeneralLuck()
        player = state.player

        if player.luck <= 0:
            hooks.log_message("You have no Luck remaining.", "warning")
            return LuckResult(outcome="none", lucky=False)

        luck_before = player.luck
        roll = roll_dice(2, state.rng)
        lucky = roll <= luck_before
        player.luck = max(0, player.luck - 1)
        hooks.sync_player_inputs()
        logger.debug("Luck test rolled %d vs %d (lucky=%s) context=%r", roll, luck_before, lucky, context)
        hooks.log_message(
            f"Testing Luck: rolled {roll} vs {luck_before}. {'Lucky!' if lucky else 'Unlucky.'}",
            "action",
        )

        if isinstance(context, PlayerHitEnemy):
            return self._press_hit(state, context, roll, lucky, hooks)
        if isinstance(context, PlayerHitByEnemy):
            return self._soften_wound(state, roll, lucky, hooks)

        hooks.show_action_visual(
            "lucky" if lucky else "unlucky",
            subline="Luck holds firm." if lucky else "Luck slips away.",
        )
        return LuckResult(outcome="general", lucky=lucky, roll=roll)

    def _press_hit(
        self,
        state: GameState,
        context: PlayerHitEnemy,
        roll: int,
        lucky: bool,
        hooks: CombatHooks,
    ) -> LuckResult:
        hooks.show_action_visual(
            "playerHitEnemy" if lucky else "playerMissEnemy",
            subline="Extra damage lands true." if lucky else "The foe steadies.",
        )
        enemy = state.roster.find_by_id(context.enemy_id)
        if enemy is None:
            hooks.log_message("The selected enemy is no longer present.", "warning")
            return LuckResult(outcome="missing", lucky=False, roll=roll)

        # No ceiling on recovery: an unlucky roll can leave the foe above its starting Stamina.
        adjustment = -LUCKY_EXTRA_DAMAGE if lucky else UNLUCKY_ENEMY_RECOVERY
        enemy.stamina = max(0, enemy.stamina + adjustment)
        label = format_enemy_name(enemy)
        if lucky:
            hooks.log_message(f"Lucky strike! {label} loses an additional {LUCKY_EXTRA_DAMAGE} Stamina.", "success")
        else:
            hooks.log_message(f"Unlucky! {label} regains {UNLUCKY_ENEMY_RECOVERY} Stamina.", "danger")

        defeated = enemy.stamina == 0
        if defeated:
            hooks.log_message(f"{label} is defeated.", "success")
            state.roster.remove_by_id(enemy.id)
        hooks.render_enemies()
        return LuckResult(outcome="playerHitEnemy", lucky=lucky, roll=roll, enemy_defeated=defeated)

    def _soften_wound(self, state: GameState, roll: int, lucky: bool, hooks: CombatHooks) -> LuckResult:
        player = state.player
        adjustment = WOUND_ADJUSTMENT if lucky else -WOUND_ADJUSTMENT
        player.stamina = clamp(player.stamina + adjustment, 0, player.max_stamina)
        hooks.sync_player_inputs()
        if lucky:
            hooks.log_message("Lucky! You reduce the damage by gaining 1 Stamina.", "success")
        else:
            hooks.log_message("Unlucky! You lose an additional 1 Stamina.", "danger")
        hooks.show_action_visual("blockEnemy" if lucky else "enemyHitYou")
        return LuckResult(outcome="playerHitByEnemy", lucky=lucky, roll=roll)
