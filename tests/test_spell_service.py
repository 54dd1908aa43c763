import asyncio

import pytest

from ffc.data.repositories import BooksRepository, SpellsRepository
from ffc.domain.entities import InitialStats, Player
from ffc.domain.state import GameState
from ffc.services.errors import SpellError
from ffc.services.spell_service import SpellService
from tests.helpers.recording_hooks import HookRecorder
from tests.helpers.scripted_rng import ScriptedRNG

CITADEL = "Citadel of Chaos"


def _service() -> SpellService:
    spells = SpellsRepository()
    return SpellService(BooksRepository(spells_repo=spells), spells)


def _state(prepared: dict[str, int] | None = None) -> GameState:
    state = GameState(rng=ScriptedRNG())
    state.book = CITADEL
    state.player = Player(skill=10, stamina=6, luck=3, magic=14, max_skill=10, max_stamina=20, max_luck=9)
    state.initial_stats = InitialStats(skill=10, stamina=20, luck=9, magic=14)
    state.spells.prepared = dict(prepared or {})
    state.spells.limit = 14
    return state


def test_available_spells_follow_the_book() -> None:
    service = _service()

    keys = [spell.key for spell in service.available_spells(CITADEL)]

    assert "creatureCopy" in keys and "luck" in keys
    assert service.available_spells("Deathtrap Dungeon") == []


def test_validate_selection_accepts_within_limit() -> None:
    cleaned = _service().validate_selection(CITADEL, {"luck": "2", "fire": 0, "stamina": 3}, 5)

    assert cleaned == {"luck": 2, "stamina": 3}


@pytest.mark.parametrize(
    "selection, limit",
    [
        ({"luck": 3, "fire": 3}, 5),
        ({"teleport": 1}, 5),
        ({"luck": -1}, 5),
        ({"luck": "lots"}, 5),
    ],
)
def test_validate_selection_rejects_bad_input(selection: dict, limit: int) -> None:
    with pytest.raises(SpellError):
        _service().validate_selection(CITADEL, selection, limit)


def test_restore_luck_adds_half_initial_capped_at_initial() -> None:
    state = _state({"luck": 2})
    recorder = HookRecorder()

    result = asyncio.run(_service().cast_spell(state, "luck", recorder.hooks()))

    assert result.ok
    assert result.restored == 4
    assert state.player.luck == 7
    assert state.spells.prepared["luck"] == 1
    assert "Luck restores 4 Luck (up to 9)." in recorder.messages()
    assert recorder.visual_keys() == ["castSpell"]

    asyncio.run(_service().cast_spell(state, "luck", recorder.hooks()))
    assert state.player.luck == 9


def test_restore_stamina_at_full_has_no_effect_but_is_spent() -> None:
    state = _state({"stamina": 1})
    state.player.stamina = 20
    recorder = HookRecorder()

    result = asyncio.run(_service().cast_spell(state, "stamina", recorder.hooks()))

    assert result.restored == 0
    assert state.spells.prepared["stamina"] == 0
    assert "Stamina has no effect; Stamina is already at its starting value." in recorder.messages()


def test_log_only_spell_logs_description() -> None:
    state = _state({"fire": 1})
    recorder = HookRecorder()

    asyncio.run(_service().cast_spell(state, "fire", recorder.hooks()))

    assert recorder.messages()[0].startswith("Spell cast: Fire.")


def test_unprepared_or_unavailable_spell_is_refused() -> None:
    state = _state({"fire": 0})
    service = _service()

    assert asyncio.run(service.cast_spell(state, "fire")).reason == "not_prepared"
    assert asyncio.run(service.cast_spell(state, "teleport")).reason == "unavailable"


def test_creature_copy_adds_ally_at_top_and_spends_spell() -> None:
    state = _state({"creatureCopy": 1})
    source = state.roster.add({"name": "Manticore", "skill": 11, "stamina": 18})
    recorder = HookRecorder(selections=[source.id])

    result = asyncio.run(_service().cast_spell(state, "creatureCopy", recorder.hooks()))

    ally = state.roster.get(0)
    assert result.ok
    assert result.created_enemy_id == ally.id
    assert ally.is_copy and ally.copied_from_id == source.id
    assert ally.name == "Copy of Manticore"
    assert state.spells.prepared["creatureCopy"] == 0
    assert "Creature Copy creates an ally from Manticore." in recorder.messages()


def test_creature_copy_offers_only_non_copies() -> None:
    state = _state({"creatureCopy": 1})
    source = state.roster.add({"name": "Orc", "skill": 6, "stamina": 5})
    state.roster.add({"name": "Copy of Orc", "skill": 6, "stamina": 5, "isCopy": True})
    recorder = HookRecorder()

    asyncio.run(_service().cast_spell(state, "creatureCopy", recorder.hooks()))

    assert recorder.selection_candidates == [[source.id]]


def test_cancelled_creature_copy_is_not_spent() -> None:
    state = _state({"creatureCopy": 1})
    state.roster.add({"name": "Orc", "skill": 6, "stamina": 5})

    result = asyncio.run(_service().cast_spell(state, "creatureCopy", HookRecorder().hooks()))

    assert result.reason == "cancelled"
    assert state.spells.prepared["creatureCopy"] == 1
    assert len(state.roster) == 1


def test_apply_spells_state_filters_and_defaults_limit() -> None:
    state = _state()

    _service().apply_spells_state(state, {"prepared": {"luck": "2", "fire": 0, "teleport": 4}})

    assert state.spells.prepared == {"luck": 2}
    assert state.spells.limit == 14
