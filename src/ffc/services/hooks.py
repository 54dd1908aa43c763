"""Collaborator interface the rules engine reports through."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from ffc.core.types import Tone, VisualKey
from ffc.domain.entities import Enemy


def _ignore_log(text: str, tone: Tone) -> None:
    del text, tone


def _ignore_visual(key: VisualKey, subline: str | None = None) -> None:
    del key, subline


async def _skip_visual(key: VisualKey, subline: str | None = None) -> None:
    del key, subline


async def _decline_luck_after_hit(enemy_label: str) -> bool:
    del enemy_label
    return False


async def _decline_luck_after_wound() -> bool:
    return False


async def _select_nothing(title: str, candidates: Sequence[Enemy]) -> int | None:
    del title, candidates
    return None


def _noop() -> None:
    return None


@dataclass(slots=True)
class CombatHooks:
    """
    Callbacks supplied by the UI layer.

    The awaitable members are the only points where an action can suspend;
    services re-resolve enemies by id after awaiting any of them. Every member
    defaults to a silent no-op (prompts decline), which is what tests and
    headless callers usually want.
    """

    log_message: Callable[[str, Tone], None] = _ignore_log
    show_action_visual: Callable[..., None] = _ignore_visual
    show_action_visual_and_wait: Callable[..., Awaitable[None]] = _skip_visual
    prompt_luck_after_player_hit: Callable[[str], Awaitable[bool]] = _decline_luck_after_hit
    confirm_luck_after_enemy_hit: Callable[[], Awaitable[bool]] = _decline_luck_after_wound
    select_enemy: Callable[[str, Sequence[Enemy]], Awaitable[int | None]] = _select_nothing
    sync_player_inputs: Callable[[], None] = _noop
    render_enemies: Callable[[], None] = _noop
