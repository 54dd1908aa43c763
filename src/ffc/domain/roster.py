"""Ordered, id-stable collection of enemies for the current session."""
from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Sequence

from ffc.domain.dice import parse_number
from ffc.domain.entities import Enemy
from ffc.domain.modifiers import modifiers_to_payload, normalize_enemy_modifiers

logger = logging.getLogger(__name__)

STAT_MAX = 999


def format_enemy_name(enemy: Enemy | None) -> str:
    if enemy is None:
        return "Enemy"
    if enemy.name:
        return enemy.name
    return f"Enemy {enemy.id}"


def format_enemy_option_label(enemy: Enemy) -> str:
    return f"{format_enemy_name(enemy)} (Skill {enemy.skill}, Stamina {enemy.stamina})"


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _clean_name(value: Any, enemy_id: int) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return f"Enemy {enemy_id}"


class EnemyRoster:
    """Owns enemy records and issues ids that are never reused within a session.

    Positional access exists for numbered display; anything that may outlive an
    awaited prompt should hold an id and re-resolve it with `find_by_id`.
    """

    def __init__(self) -> None:
        self._enemies: List[Enemy] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._enemies)

    def __iter__(self) -> Iterator[Enemy]:
        return iter(list(self._enemies))

    @property
    def next_id(self) -> int:
        return self._next_id

    def get(self, index: int) -> Enemy | None:
        if 0 <= index < len(self._enemies):
            return self._enemies[index]
        return None

    def find_by_id(self, enemy_id: int | None) -> Enemy | None:
        if enemy_id is None:
            return None
        for enemy in self._enemies:
            if enemy.id == enemy_id:
                return enemy
        return None

    def index_of(self, enemy_id: int) -> int:
        for index, enemy in enumerate(self._enemies):
            if enemy.id == enemy_id:
                return index
        return -1

    def contains(self, enemy: Enemy) -> bool:
        return any(existing is enemy for existing in self._enemies)

    def add(self, initial: Mapping[str, Any] | None = None, *, at_top: bool = False) -> Enemy:
        """Create a normalized enemy; newly summoned allies go `at_top`."""
        data = initial or {}
        supplied_id = _optional_int(data.get("id"))
        if supplied_id is None:
            enemy_id = self._next_id
            self._next_id += 1
        else:
            enemy_id = supplied_id
        self._next_id = max(self._next_id, enemy_id + 1)

        enemy = self._build(data, enemy_id)
        if at_top:
            self._enemies.insert(0, enemy)
        else:
            self._enemies.append(enemy)
        logger.debug("Added enemy %s (%s) at_top=%s", enemy.id, enemy.name, at_top)
        return enemy

    def remove(self, index: int) -> Enemy | None:
        if 0 <= index < len(self._enemies):
            enemy = self._enemies.pop(index)
            logger.debug("Removed enemy %s", enemy.id)
            return enemy
        return None

    def remove_by_id(self, enemy_id: int) -> bool:
        """Remove the enemy with `enemy_id`; False (no error) if it is already gone."""
        index = self.index_of(enemy_id)
        if index < 0:
            return False
        self.remove(index)
        return True

    def reset(self) -> None:
        self._enemies.clear()
        self._next_id = 1

    @staticmethod
    def create_copied_enemy_from(source: Enemy) -> dict[str, Any]:
        """Initial data for a Creature Copy ally; modifiers are not inherited."""
        return {
            "name": f"Copy of {format_enemy_name(source)}",
            "skill": parse_number(source.skill, 0, 0, STAT_MAX),
            "stamina": parse_number(source.stamina, 0, 0, STAT_MAX),
            "modifiers": None,
            "isCopy": True,
            "copiedFromId": source.id,
        }

    def apply_state(self, saved: Sequence[Any] | None) -> None:
        """Replace the roster from persisted data, keeping ids collision-free."""
        entries: List[Mapping[str, Any]] = []
        if isinstance(saved, (list, tuple)):
            entries = [entry if isinstance(entry, Mapping) else {} for entry in saved]
        used: set[int] = set()
        for data in entries:
            enemy_id = _optional_int(data.get("id"))
            if enemy_id is not None:
                used.add(enemy_id)
        self._next_id = max(used, default=0) + 1

        restored: List[Enemy] = []
        for data in entries:
            enemy_id = _optional_int(data.get("id"))
            if enemy_id is None or any(enemy.id == enemy_id for enemy in restored):
                # Missing or duplicated ids get fresh ones above every saved id.
                enemy_id = self._next_id
                self._next_id += 1
            restored.append(self._build(data, enemy_id))
        self._enemies = restored
        logger.debug("Restored %d enemies; next id %d", len(restored), self._next_id)

    def to_payload(self) -> List[dict[str, Any]]:
        return [
            {
                "id": enemy.id,
                "name": enemy.name,
                "skill": enemy.skill,
                "stamina": enemy.stamina,
                "modifiers": modifiers_to_payload(enemy.modifiers),
                "isCopy": enemy.is_copy,
                "copiedFromId": enemy.copied_from_id,
            }
            for enemy in self._enemies
        ]

    @staticmethod
    def _build(data: Mapping[str, Any], enemy_id: int) -> Enemy:
        return Enemy(
            id=enemy_id,
            name=_clean_name(data.get("name"), enemy_id),
            skill=parse_number(data.get("skill"), 0, 0, STAT_MAX),
            stamina=parse_number(data.get("stamina"), 0, 0, STAT_MAX),
            modifiers=normalize_enemy_modifiers(data.get("modifiers")),
            is_copy=bool(data.get("isCopy", data.get("is_copy", False))),
            copied_from_id=_optional_int(data.get("copiedFromId", data.get("copied_from_id"))),
        )
