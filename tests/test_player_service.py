import pytest

from ffc.data.repositories import BooksRepository
from ffc.domain.entities import Player
from ffc.domain.state import GameState
from ffc.services.factories import create_player_from_rolls, roll_starting_stats
from ffc.services.player_service import PlayerService
from tests.helpers.recording_hooks import HookRecorder
from tests.helpers.scripted_rng import ScriptedRNG


def _service() -> PlayerService:
    return PlayerService(BooksRepository())


def _state(book: str = "Deathtrap Dungeon") -> GameState:
    state = GameState(rng=ScriptedRNG())
    state.book = book
    state.player = Player(
        skill=8, stamina=10, luck=7, max_skill=11, max_stamina=20, max_luck=10, meals=2, potion=None
    )
    return state


def test_roll_starting_stats_formula_and_detail() -> None:
    books = BooksRepository()
    rolls = roll_starting_stats(books.rules_for("Deathtrap Dungeon"), ScriptedRNG([3, 4, 5, 2]))

    assert [(roll.key, roll.total) for roll in rolls] == [("skill", 9), ("stamina", 21), ("luck", 8)]
    assert rolls[1].detail == "4 + 5 + 12 = 21"


def test_citadel_of_chaos_also_rolls_magic() -> None:
    books = BooksRepository()
    rolls = roll_starting_stats(books.rules_for("Citadel of Chaos"), ScriptedRNG([1, 1, 1, 1, 6, 6]))

    assert rolls[-1].key == "magic"
    assert rolls[-1].total == 18


def test_create_player_from_rolls_sets_max_values() -> None:
    player, initial = create_player_from_rolls(
        {"skill": 10, "stamina": 20, "luck": 9}, meals_enabled=False, potion="Potion of Skill"
    )

    assert (player.max_skill, player.max_stamina, player.max_luck) == (10, 20, 9)
    assert player.meals == 0
    assert initial.stamina == 20


def test_start_new_game_resets_session_and_applies_notes() -> None:
    state = _state()
    state.roster.add({"name": "Leftover"})
    state.player_modifiers.damage_done = 3
    state.log.add("old", "info")
    recorder = HookRecorder()

    _service().start_new_game(
        state,
        {"skill": 10, "stamina": 20, "luck": 9},
        book="City of Thieves",
        potion_choice="Potion of Fortune",
        hooks=recorder.hooks(),
    )

    assert state.book == "City of Thieves"
    assert len(state.roster) == 0
    assert state.roster.next_id == 1
    assert state.player_modifiers.damage_done == 0
    assert state.notes == {"gold": "30gp", "treasure": "", "equipment": "Sword"}
    assert state.player.potion == "Potion of Fortune"
    assert state.player.meals == 10
    assert "New game started for City of Thieves. Roll results applied." in recorder.messages()
    assert recorder.visual_keys() == ["newGame"]


def test_start_new_game_respects_books_without_potions_or_meals() -> None:
    state = _state()

    _service().start_new_game(
        state,
        {"skill": 10, "stamina": 20, "luck": 9, "magic": 14},
        book="Citadel of Chaos",
        potion_choice="Potion of Skill",
        spell_selection={"luck": 2, "fire": 0, "unknown": 3},
    )

    assert state.player.potion is None
    assert state.player.meals == 0
    assert state.player.magic == 14
    assert state.spells.prepared == {"luck": 2}
    assert state.spells.limit == 14


def test_eat_meal_restores_four_up_to_max() -> None:
    state = _state()
    state.player.stamina = 18
    recorder = HookRecorder()

    result = _service().eat_meal(state, recorder.hooks())

    assert result.ok
    assert state.player.stamina == 20
    assert state.player.meals == 1
    assert "eatMeal" in recorder.visual_keys()


def test_eat_meal_refused_when_none_left_or_disabled() -> None:
    state = _state()
    state.player.meals = 0
    assert _service().eat_meal(state).reason == "no_meals"

    citadel = _state("Citadel of Chaos")
    assert _service().eat_meal(citadel).reason == "meals_disabled"
    assert citadel.player.meals == 2


@pytest.mark.parametrize(
    "potion, field_name, expected",
    [
        ("Potion of Skill", "skill", 11),
        ("Potion of Strength", "stamina", 20),
        ("Potion of Fortune", "luck", 11),
    ],
)
def test_potions_restore_their_stat(potion: str, field_name: str, expected: int) -> None:
    state = _state()
    state.player.potion = potion

    result = _service().apply_potion(state)

    assert result.ok
    assert getattr(state.player, field_name) == expected
    assert state.player.potion_used is True


def test_fortune_raises_max_and_initial_luck() -> None:
    state = _state()
    state.player.potion = "Potion of Fortune"

    _service().apply_potion(state)

    assert state.player.max_luck == 11
    assert state.initial_stats.luck == 11


def test_potion_can_only_be_used_once() -> None:
    state = _state()
    state.player.potion = "Potion of Skill"
    service = _service()

    assert service.apply_potion(state).ok
    assert service.apply_potion(state).reason == "no_potion"


def test_update_player_modifiers_clamps_and_parses() -> None:
    state = _state()

    _service().update_player_modifiers(state, damage_done="3", damage_received=-200, skill_bonus="x")

    assert state.player_modifiers.damage_done == 3
    assert state.player_modifiers.damage_received == -99
    assert state.player_modifiers.skill_bonus == 0


def test_set_player_stat_keeps_current_within_max() -> None:
    state = _state()
    service = _service()

    assert service.set_player_stat(state, "stamina", 50) == 20
    assert service.set_player_stat(state, "max_stamina", 12) == 12
    assert state.player.stamina == 12
    with pytest.raises(ValueError):
        service.set_player_stat(state, "charisma", 3)


def test_record_decision_sets_page_number() -> None:
    state = _state()
    service = _service()

    assert service.record_decision(state, "212", "Take the left tunnel").ok
    assert state.page_number == "212"
    assert state.decisions[0].message == "Page 212: Take the left tunnel"
    assert service.record_decision(state, "", "Nothing").reason == "invalid_decision"


def test_edit_decision_rewrites_entry_in_place() -> None:
    state = _state()
    service = _service()
    service.record_decision(state, "12", "Open the door")

    assert service.edit_decision(state, 0, "13", " Go back ").ok
    assert len(state.decisions) == 1
    assert state.decisions[0].message == "Page 13: Go back"
    assert service.edit_decision(state, 1, "13", "Go back").reason == "no_decision"
    assert service.edit_decision(state, 0, "0", "Go back").reason == "invalid_decision"
    assert service.edit_decision(state, 0, "13", "  ").reason == "invalid_decision"
    assert state.decisions[0].message == "Page 13: Go back"


def test_hydrate_player_clamps_saved_values() -> None:
    player, initial = PlayerService.hydrate_player(
        {
            "skill": 15,
            "maxSkill": 12,
            "stamina": "18",
            "maxStamina": 20,
            "luck": -3,
            "maxLuck": 9,
            "meals": "7",
            "potion": "Potion of Skill",
            "potionUsed": True,
        },
        {"skill": 12, "stamina": 20, "luck": 9},
    )

    assert (player.skill, player.max_skill) == (12, 12)
    assert player.stamina == 18
    assert player.luck == 0
    assert player.meals == 7
    assert player.potion == "Potion of Skill"
    assert player.potion_used is True
    assert initial.luck == 9


def test_hydrate_player_defaults_missing_max_to_current() -> None:
    player, _ = PlayerService.hydrate_player({"skill": 9}, None)

    assert player.max_skill == 9
    assert player.skill == 9
    assert player.potion is None
