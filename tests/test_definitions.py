import json
from pathlib import Path

import pytest

from ffc.data import (
    DEFINITIONS_ENV_VAR,
    DataLoadError,
    DataReferenceError,
    DataValidationError,
    get_definitions_path,
)
from ffc.data.repositories import BooksRepository, SpellsRepository


def _write(base: Path, name: str, payload: object) -> None:
    (base / name).write_text(json.dumps(payload), encoding="utf-8")


def test_definitions_path_points_at_checkout_data(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEFINITIONS_ENV_VAR, raising=False)
    path = get_definitions_path()
    assert (path / "books.json").exists()
    assert (path / "spells.json").exists()


def test_definitions_dir_can_be_overridden_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DEFINITIONS_ENV_VAR, str(tmp_path))
    _write(tmp_path, "spells.json", {"zap": {"name": "Zap", "description": "Zap!", "effect": "log"}})

    assert get_definitions_path() == tmp_path
    assert get_definitions_path("elsewhere") == Path("elsewhere")
    assert [spell.key for spell in SpellsRepository().all()] == ["zap"]


def test_every_book_loads_and_references_known_spells() -> None:
    books = BooksRepository()
    names = books.names()

    assert "Warlock of Firetop Mountain (The)" in names
    assert len(names) == 10
    citadel = books.rules_for("Citadel of Chaos")
    assert citadel.supports_potions is False
    assert citadel.supports_meals is False
    assert citadel.spell_limit_stat == "magic"
    assert [stat.key for stat in citadel.extra_stats] == ["magic"]
    assert citadel.extra_stats[0].helper == "Roll 2D6 + 6"


def test_unknown_book_gets_default_rules() -> None:
    rules = BooksRepository().rules_for("Some Homebrew Adventure")

    assert rules.supports_potions and rules.supports_meals
    assert rules.spell_keys == ()


def test_spell_effects_are_typed() -> None:
    spells = SpellsRepository()

    assert spells.get("luck").effect == "restoreLuck"
    assert spells.get("stamina").effect == "restoreStamina"
    assert spells.get("creatureCopy").effect == "creatureCopy"
    with pytest.raises(KeyError):
        spells.get("teleport")


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "spells.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError, match="line 1") as excinfo:
        SpellsRepository(tmp_path).all()
    assert excinfo.value.source == tmp_path / "spells.json"
    assert str(excinfo.value).startswith("spells.json: ")


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError):
        SpellsRepository(tmp_path).all()


def test_bad_spell_effect_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path, "spells.json", {"zap": {"name": "Zap", "description": "Zap!", "effect": "explode"}})

    with pytest.raises(DataValidationError):
        SpellsRepository(tmp_path).all()


def test_book_with_unknown_spell_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path, "spells.json", {"zap": {"name": "Zap", "description": "Zap!", "effect": "log"}})
    _write(tmp_path, "books.json", {"Homebrew": {"spells": ["zap", "boom"]}})

    with pytest.raises(DataReferenceError) as excinfo:
        BooksRepository(tmp_path).all()
    assert excinfo.value.missing == "boom"


def test_book_toggles_must_be_booleans(tmp_path: Path) -> None:
    _write(tmp_path, "spells.json", {})
    _write(tmp_path, "books.json", {"Homebrew": {"supports_meals": "yes"}})

    with pytest.raises(DataValidationError):
        BooksRepository(tmp_path).all()


def test_top_level_list_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path, "spells.json", [{"name": "Zap"}])

    with pytest.raises(DataValidationError, match="expected an object, found list"):
        SpellsRepository(tmp_path).all()
