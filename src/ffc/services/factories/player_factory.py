"""Factory for rolling starting stats and creating the adventurer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

from ffc.core.rng import RNG
from ffc.domain.defs import BookDef
from ffc.domain.dice import roll_custom_dice
from ffc.domain.entities import InitialStats, Player
from ffc.domain.entities.player import DEFAULT_MEALS


@dataclass(frozen=True, slots=True)
class StatRoll:
    """One rolled starting stat with its dice breakdown."""

    key: str
    label: str
    total: int
    detail: str


# key -> (label, dice, bonus)
_BASE_STATS: Dict[str, tuple[str, int, int]] = {
    "skill": ("Skill", 1, 6),
    "stamina": ("Stamina", 2, 12),
    "luck": ("Luck", 1, 6),
}


def _roll_stat(key: str, label: str, dice: int, bonus: int, rng: RNG) -> StatRoll:
    result = roll_custom_dice(dice, 6, rng)
    total = result.total + bonus
    faces = " + ".join(str(value) for value in result.values)
    return StatRoll(key=key, label=label, total=total, detail=f"{faces} + {bonus} = {total}")


def roll_starting_stats(book: BookDef, rng: RNG) -> List[StatRoll]:
    """Roll Skill 1D6+6, Stamina 2D6+12, Luck 1D6+6 and any book-specific stats."""
    rolls = [_roll_stat(key, label, dice, bonus, rng) for key, (label, dice, bonus) in _BASE_STATS.items()]
    for extra in book.extra_stats:
        rolls.append(_roll_stat(extra.key, extra.label, extra.dice, extra.bonus, rng))
    return rolls


def create_player_from_rolls(
    rolls: Mapping[str, int],
    *,
    meals_enabled: bool,
    potion: str | None,
) -> tuple[Player, InitialStats]:
    """Build a fresh player whose current and maximum stats equal the rolls."""
    skill = rolls.get("skill", 0)
    stamina = rolls.get("stamina", 0)
    luck = rolls.get("luck", 0)
    magic = rolls.get("magic", 0)
    player = Player(
        skill=skill,
        stamina=stamina,
        luck=luck,
        magic=magic,
        max_skill=skill,
        max_stamina=stamina,
        max_luck=luck,
        max_magic=magic,
        meals=DEFAULT_MEALS if meals_enabled else 0,
        potion=potion,
        potion_used=False,
    )
    initial = InitialStats(skill=skill, stamina=stamina, luck=luck, magic=magic)
    return player, initial
