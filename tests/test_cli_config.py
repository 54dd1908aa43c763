import json
from pathlib import Path

from ffc.presentation.cli import config


def test_missing_config_returns_defaults(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "absent.json") == {"default_book": "", "log_level": "WARNING"}


def test_corrupt_config_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_save_and_load_normalizes(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    config.save_config({"default_book": " Forest of Doom ", "log_level": "debug", "extra": "x"}, path)

    assert json.loads(path.read_text(encoding="utf-8")) == {"default_book": "Forest of Doom", "log_level": "DEBUG"}
    assert config.load_config(path)["log_level"] == "DEBUG"


def test_unknown_log_level_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "LOUD"}), encoding="utf-8")

    assert config.load_config(path)["log_level"] == "WARNING"


def test_save_dir_lives_under_user_data_dir() -> None:
    assert config.get_save_dir().parent == config.get_user_data_dir()
