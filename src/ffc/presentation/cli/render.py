"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, List, Sequence

from ffc.core.types import Tone, VisualKey
from ffc.domain.entities import Enemy, Player, PlayerModifiers
from ffc.domain.modifiers import get_enemy_damage_profile, summarize_enemy_modifiers
from ffc.domain.roster import format_enemy_name

_TONE_PREFIX = {
    "info": "  ",
    "action": "> ",
    "success": "+ ",
    "warning": "! ",
    "danger": "x ",
}

_VISUAL_TITLES = {
    "newGame": "A new adventure begins",
    "eatMeal": "You eat a meal",
    "drinkPotion": "You drink your potion",
    "castSpell": "Spell cast",
    "escape": "You flee",
    "blockEnemy": "Blow softened",
    "enemyHitYou": "The blow lands hard",
    "playerHitEnemy": "You strike",
    "playerMissEnemy": "Your strike falters",
    "playerFailAttack": "You are wounded",
    "defeatEnemy": "Enemy defeated",
    "loseCombat": "You have fallen",
    "lucky": "Lucky!",
    "unlucky": "Unlucky",
}


def debug_enabled() -> bool:
    """Return True only when FFC_DEBUG is explicitly set to '1'."""
    return os.getenv("FFC_DEBUG") == "1"


def wrap_text(text: str, width: int = 72) -> list[str]:
    """Wrap on word boundaries, indenting continuation lines."""
    if not text or width <= 0:
        return [text] if text else [""]
    return textwrap.fill(
        text,
        width=width,
        subsequent_indent="  ",
        break_long_words=False,
        break_on_hyphens=False,
    ).split("\n")


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(f"- {line}")


def format_log_line(text: str, tone: Tone) -> List[str]:
    prefix = _TONE_PREFIX.get(tone, "  ")
    return [f"{prefix}{line}" for line in wrap_text(text)]


def render_log_message(text: str, tone: Tone) -> None:
    for line in format_log_line(text, tone):
        print(line)


def format_visual(key: VisualKey, subline: str | None = None) -> str:
    title = _VISUAL_TITLES.get(key, key)
    return f"*** {title} ***" if not subline else f"*** {title} *** {subline}"


def render_visual(key: VisualKey, subline: str | None = None) -> None:
    print(format_visual(key, subline))


def format_player_lines(player: Player, modifiers: PlayerModifiers, *, show_magic: bool = False) -> List[str]:
    lines = [
        f"Skill {player.skill}/{player.max_skill}",
        f"Stamina {player.stamina}/{player.max_stamina}",
        f"Luck {player.luck}/{player.max_luck}",
    ]
    if show_magic:
        lines.append(f"Magic {player.magic}/{player.max_magic}")
    lines.append(f"Meals {player.meals}")
    if player.potion:
        lines.append(f"{player.potion}{' (used)' if player.potion_used else ''}")
    if modifiers.damage_done or modifiers.damage_received or modifiers.skill_bonus:
        lines.append(
            f"Modifiers: damage done {modifiers.damage_done:+d}, "
            f"damage received {modifiers.damage_received:+d}, skill {modifiers.skill_bonus:+d}"
        )
    return lines


def format_enemy_line(position: int, enemy: Enemy, player_modifiers: PlayerModifiers) -> str:
    profile = get_enemy_damage_profile(enemy, player_modifiers)
    label = format_enemy_name(enemy)
    if enemy.is_copy:
        label += " [ally]"
    line = (
        f"{position}. {label}: Skill {enemy.skill}, Stamina {enemy.stamina} "
        f"(you deal {profile.damage_to_enemy}, it deals {profile.damage_to_player})"
    )
    summary = summarize_enemy_modifiers(enemy)
    if summary:
        line += f" [{summary}]"
    if debug_enabled():
        line += f" #id={enemy.id}"
    return line


def render_enemies(enemies: Sequence[Enemy], player_modifiers: PlayerModifiers) -> None:
    render_heading("Enemies")
    if not enemies:
        print("No enemies.")
        return
    for position, enemy in enumerate(enemies, start=1):
        print(format_enemy_line(position, enemy, player_modifiers))
