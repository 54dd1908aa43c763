"""Session state passed explicitly into every service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ffc.core.rng import RNG
from ffc.domain.entities import InitialStats, Player, PlayerModifiers
from ffc.domain.logs import DecisionLog, LogHistory
from ffc.domain.roster import EnemyRoster

NOTE_FIELDS: tuple[str, ...] = ("gold", "treasure", "equipment")


def _empty_notes() -> Dict[str, str]:
    return {key: "" for key in NOTE_FIELDS}


@dataclass(slots=True)
class PreparedSpells:
    prepared: Dict[str, int] = field(default_factory=dict)
    limit: int = 0


@dataclass
class GameState:
    """Everything one adventure tracks: player, foes, spells, notes and logs."""

    rng: RNG
    book: str = ""
    page_number: str = ""
    player: Player = field(default_factory=Player)
    initial_stats: InitialStats = field(default_factory=InitialStats)
    player_modifiers: PlayerModifiers = field(default_factory=PlayerModifiers)
    roster: EnemyRoster = field(default_factory=EnemyRoster)
    spells: PreparedSpells = field(default_factory=PreparedSpells)
    notes: Dict[str, str] = field(default_factory=_empty_notes)
    log: LogHistory = field(default_factory=LogHistory)
    decisions: DecisionLog = field(default_factory=DecisionLog)
    game_over: bool = False
