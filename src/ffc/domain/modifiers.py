"""Damage modifier model: normalization and the per-exchange damage profile."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ffc.domain.dice import parse_number
from ffc.domain.entities import Enemy, EnemyModifiers, PlayerModifiers

BASE_DAMAGE = 2
MODIFIER_MIN = -99
MODIFIER_MAX = 99

# Save files use camelCase; snake_case is accepted for hand-built payloads.
_FIELD_ALIASES = {
    "damage_dealt": ("damageDealt", "damage_dealt"),
    "damage_received": ("damageReceived", "damage_received"),
    "player_damage_bonus": ("playerDamageBonus", "player_damage_bonus"),
    "player_damage_taken_bonus": ("playerDamageTakenBonus", "player_damage_taken_bonus"),
}


@dataclass(frozen=True, slots=True)
class DamageProfile:
    """Damage each side transfers when it wins an exchange."""

    modifiers: EnemyModifiers
    damage_to_enemy: int
    damage_to_player: int


def _pick(raw: Mapping[str, Any], field_name: str) -> Any:
    for key in _FIELD_ALIASES[field_name]:
        if key in raw:
            return raw[key]
    return None


def _parse_delta(value: Any) -> int:
    return parse_number(value, 0, MODIFIER_MIN, MODIFIER_MAX)


def _parse_legacy_absolute(value: Any) -> int:
    # Pre-delta saves stored the resulting damage, not the adjustment.
    return parse_number(value, BASE_DAMAGE, 0, MODIFIER_MAX) - BASE_DAMAGE


def normalize_enemy_modifiers(raw: Mapping[str, Any] | EnemyModifiers | None) -> EnemyModifiers:
    """Return modifiers in the delta representation.

    A mapping tagged ``mode: "delta"`` is read as deltas. Any other mapping is a
    legacy absolute-value payload and is migrated once, here, on load. The two
    player bonus fields were introduced with the delta model and are always
    deltas.
    """
    if raw is None:
        return EnemyModifiers()
    if isinstance(raw, EnemyModifiers):
        return EnemyModifiers(
            damage_dealt=_parse_delta(raw.damage_dealt),
            damage_received=_parse_delta(raw.damage_received),
            player_damage_bonus=_parse_delta(raw.player_damage_bonus),
            player_damage_taken_bonus=_parse_delta(raw.player_damage_taken_bonus),
        )
    if not isinstance(raw, Mapping):
        return EnemyModifiers()

    parse_damage = _parse_delta if raw.get("mode") == "delta" else _parse_legacy_absolute
    return EnemyModifiers(
        damage_dealt=parse_damage(_pick(raw, "damage_dealt")),
        damage_received=parse_damage(_pick(raw, "damage_received")),
        player_damage_bonus=_parse_delta(_pick(raw, "player_damage_bonus")),
        player_damage_taken_bonus=_parse_delta(_pick(raw, "player_damage_taken_bonus")),
    )


def modifiers_to_payload(modifiers: EnemyModifiers) -> dict[str, Any]:
    return {
        "damageDealt": modifiers.damage_dealt,
        "damageReceived": modifiers.damage_received,
        "playerDamageBonus": modifiers.player_damage_bonus,
        "playerDamageTakenBonus": modifiers.player_damage_taken_bonus,
        "mode": modifiers.mode,
    }


def get_enemy_damage_profile(enemy: Enemy, player_modifiers: PlayerModifiers) -> DamageProfile:
    """Single source of truth for damage traded with `enemy`. Never negative."""
    modifiers = normalize_enemy_modifiers(enemy.modifiers)
    damage_to_enemy = max(
        0,
        BASE_DAMAGE
        + modifiers.damage_received
        + player_modifiers.damage_done
        + modifiers.player_damage_bonus,
    )
    damage_to_player = max(
        0,
        BASE_DAMAGE
        + modifiers.damage_dealt
        + player_modifiers.damage_received
        + modifiers.player_damage_taken_bonus,
    )
    return DamageProfile(
        modifiers=modifiers,
        damage_to_enemy=damage_to_enemy,
        damage_to_player=damage_to_player,
    )


def summarize_enemy_modifiers(enemy: Enemy) -> str:
    """Compact label for the roster, e.g. ``dealt +3 shield 2``."""
    modifiers = normalize_enemy_modifiers(enemy.modifiers)
    pieces: list[str] = []
    if modifiers.damage_dealt:
        prefix = "+" if modifiers.damage_dealt > 0 else ""
        pieces.append(f"dealt {prefix}{modifiers.damage_dealt}")
    if modifiers.damage_received > 0:
        pieces.append(f"takes +{modifiers.damage_received}")
    elif modifiers.damage_received < 0:
        pieces.append(f"shield {abs(modifiers.damage_received)}")
    return " ".join(pieces)
