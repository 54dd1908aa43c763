import asyncio

from ffc.domain.entities import Player, PlayerModifiers
from ffc.domain.state import GameState
from ffc.services.combat_service import CombatService
from tests.helpers.recording_hooks import HookRecorder
from tests.helpers.scripted_rng import ScriptedRNG


def _state(rolls: list[int], *, skill: int = 12, stamina: int = 20, luck: int = 9) -> GameState:
    state = GameState(rng=ScriptedRNG(rolls))
    state.player = Player(
        skill=skill,
        stamina=stamina,
        luck=luck,
        max_skill=skill,
        max_stamina=20,
        max_luck=luck,
    )
    return state


def test_player_win_removes_enemy_at_zero_stamina() -> None:
    # monster 1+1+7=9, player 1+1+12=14
    state = _state([1, 1, 1, 1])
    enemy = state.roster.add({"name": "Goblin", "skill": 7, "stamina": 2})
    recorder = HookRecorder()

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert result.outcome == "player_hit"
    assert result.damage == 2
    assert result.enemy_defeated is True
    assert enemy.stamina == 0
    assert len(state.roster) == 0
    assert recorder.prompted_labels == []
    assert "defeatEnemy" in recorder.visual_keys()
    assert recorder.messages()[0] == "Combat vs Goblin: Monster 9 vs Player 14."


def test_tie_is_a_standoff_with_no_damage() -> None:
    # monster 3+3+8=14, player 1+1+12=14
    state = _state([3, 3, 1, 1])
    enemy = state.roster.add({"name": "Orc", "skill": 8, "stamina": 6})

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, HookRecorder().hooks()))

    assert result.outcome == "standoff"
    assert enemy.stamina == 6
    assert state.player.stamina == 20


def test_skill_bonus_counts_and_never_goes_below_zero() -> None:
    state = _state([1, 1, 1, 1], skill=3)
    state.player_modifiers = PlayerModifiers(skill_bonus=-10)
    enemy = state.roster.add({"name": "Orc", "skill": 1, "stamina": 6})

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, HookRecorder().hooks()))

    # monster 1+1+1=3, player 1+1+max(0, 3-10)=2
    assert result.player_attack == 2
    assert result.outcome == "enemy_hit"


def test_unready_and_missing_enemies_are_rejected_without_rolling() -> None:
    state = _state([])
    unready = state.roster.add({"name": "Blank", "skill": 0, "stamina": 5})
    recorder = HookRecorder()
    service = CombatService()

    unready_result = asyncio.run(service.perform_attack(state, unready.id, recorder.hooks()))
    missing_result = asyncio.run(service.perform_attack_at(state, 4, recorder.hooks()))

    assert (unready_result.outcome, unready_result.reason) == ("invalid", "unready")
    assert (missing_result.outcome, missing_result.reason) == ("invalid", "missing")
    assert [tone for _, tone in recorder.logs] == ["warning", "warning"]


def test_player_hit_uses_damage_profile_and_offers_luck() -> None:
    # monster 1+1+5=7, player 2+2+12=16, then Luck 1+1 (lucky)
    state = _state([1, 1, 2, 2, 1, 1])
    enemy = state.roster.add(
        {"name": "Troll", "skill": 5, "stamina": 10, "modifiers": {"mode": "delta", "damageReceived": 1}}
    )
    recorder = HookRecorder(luck_after_hit=[True])

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert result.damage == 3
    assert recorder.prompted_labels == ["Troll"]
    assert result.luck is not None and result.luck.lucky
    assert enemy.stamina == 10 - 3 - 2
    assert state.player.luck == 8


def test_luck_follow_up_can_defeat_the_enemy() -> None:
    state = _state([1, 1, 2, 2, 1, 1])
    enemy = state.roster.add({"name": "Bat", "skill": 5, "stamina": 4})
    recorder = HookRecorder(luck_after_hit=[True])

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert result.enemy_defeated is True
    assert state.roster.find_by_id(enemy.id) is None
    assert recorder.messages().count("Bat is defeated.") == 1


def test_enemy_removed_during_luck_prompt_is_not_double_removed() -> None:
    state = _state([1, 1, 2, 2, 1, 1])
    enemy = state.roster.add({"name": "Wraith", "skill": 5, "stamina": 8})
    other = state.roster.add({"name": "Skeleton", "skill": 5, "stamina": 8})
    recorder = HookRecorder(luck_after_hit=[True])
    recorder.on_luck_prompt = lambda: state.roster.remove_by_id(enemy.id)

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert result.outcome == "player_hit"
    assert result.luck is not None and result.luck.outcome == "missing"
    assert result.enemy_defeated is False
    assert [e.id for e in state.roster] == [other.id]
    assert other.stamina == 8


def test_declining_luck_keeps_primary_damage() -> None:
    state = _state([1, 1, 2, 2])
    enemy = state.roster.add({"name": "Orc", "skill": 5, "stamina": 8})

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, HookRecorder().hooks()))

    assert result.luck is None
    assert enemy.stamina == 6
    assert state.player.luck == 9


def test_enemy_hit_damages_player_then_offers_luck() -> None:
    # monster 6+6+8=20, player 1+1+12=14, then Luck 1+1 (lucky) softens by 1
    state = _state([6, 6, 1, 1, 1, 1])
    enemy = state.roster.add(
        {"name": "Giant", "skill": 8, "stamina": 12, "modifiers": {"mode": "delta", "damageDealt": 5}}
    )
    recorder = HookRecorder(luck_after_wound=[True])

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert result.outcome == "enemy_hit"
    assert result.damage == 7
    assert recorder.waited_visuals == ["playerFailAttack"]
    assert state.player.stamina == 20 - 7 + 1
    assert result.player_defeated is False
    assert state.game_over is False


def test_enemy_hit_to_zero_signals_defeat() -> None:
    state = _state([6, 6, 1, 1], stamina=2)
    enemy = state.roster.add({"name": "Giant", "skill": 8, "stamina": 12})
    recorder = HookRecorder()

    result = asyncio.run(CombatService().perform_attack(state, enemy.id, recorder.hooks()))

    assert state.player.stamina == 0
    assert result.player_defeated is True
    assert state.game_over is True
    assert "loseCombat" in recorder.visual_keys()
    assert "You have been killed. Game Over." in recorder.messages()


def test_perform_attack_at_resolves_index_to_enemy() -> None:
    state = _state([1, 1, 1, 1])
    state.roster.add({"name": "First", "skill": 7, "stamina": 9})
    second = state.roster.add({"name": "Second", "skill": 7, "stamina": 9})

    result = asyncio.run(CombatService().perform_attack_at(state, 1, HookRecorder().hooks()))

    assert result.enemy_id == second.id
    assert second.stamina == 7


def test_escape_costs_two_stamina() -> None:
    state = _state([], stamina=10)
    recorder = HookRecorder()

    result = CombatService().escape_combat(state, recorder.hooks())

    assert state.player.stamina == 8
    assert result.stamina_lost == 2
    assert result.player_defeated is False
    assert "escape" in recorder.visual_keys()


def test_escape_at_two_stamina_is_fatal() -> None:
    state = _state([], stamina=2)
    recorder = HookRecorder()

    result = CombatService().escape_combat(state, recorder.hooks())

    assert state.player.stamina == 0
    assert result.player_defeated is True
    assert state.game_over is True
    assert "loseCombat" in recorder.visual_keys()


def test_copy_attack_trades_base_damage_only() -> None:
    # copy 6+6+5=17 vs target 1+1+5=7
    state = _state([6, 6, 1, 1])
    target = state.roster.add(
        {"name": "Ogre", "skill": 5, "stamina": 9, "modifiers": {"mode": "delta", "damageReceived": -2}}
    )
    copy = state.roster.add({"name": "Copy of Ogre", "skill": 5, "stamina": 9, "isCopy": True}, at_top=True)

    result = CombatService().resolve_copied_creature_attack(state, copy.id, target.id, HookRecorder().hooks())

    assert result.outcome == "copy_hit"
    assert result.damage == 2
    assert target.stamina == 7


def test_copy_attack_loser_is_removed_by_identity() -> None:
    state = _state([1, 1, 6, 6])
    target = state.roster.add({"name": "Ogre", "skill": 5, "stamina": 9})
    copy = state.roster.add({"name": "Copy of Rat", "skill": 2, "stamina": 2, "isCopy": True}, at_top=True)

    result = CombatService().resolve_copied_creature_attack(state, copy.id, target.id, HookRecorder().hooks())

    assert result.outcome == "target_hit"
    assert result.defeated_id == copy.id
    assert [enemy.id for enemy in state.roster] == [target.id]


def test_command_copy_attack_prompts_with_eligible_targets() -> None:
    state = _state([6, 6, 1, 1])
    dead = state.roster.add({"name": "Corpse", "skill": 5, "stamina": 0})
    target = state.roster.add({"name": "Orc", "skill": 5, "stamina": 4})
    copy = state.roster.add({"name": "Copy of Orc", "skill": 5, "stamina": 4, "isCopy": True}, at_top=True)
    recorder = HookRecorder(selections=[target.id])

    result = asyncio.run(CombatService().command_copy_attack(state, copy.id, recorder.hooks()))

    assert recorder.selection_candidates == [[target.id]]
    assert dead.id not in recorder.selection_candidates[0]
    assert result.outcome == "copy_hit"
    assert target.stamina == 2


def test_command_copy_attack_cancel_and_no_targets() -> None:
    state = _state([])
    copy = state.roster.add({"name": "Copy", "skill": 5, "stamina": 4, "isCopy": True})
    service = CombatService()

    no_targets = asyncio.run(service.command_copy_attack(state, copy.id, HookRecorder().hooks()))
    state.roster.add({"name": "Orc", "skill": 5, "stamina": 4})
    cancelled = asyncio.run(service.command_copy_attack(state, copy.id, HookRecorder().hooks()))

    assert (no_targets.outcome, no_targets.reason) == ("invalid", "no_targets")
    assert cancelled.outcome == "cancelled"
