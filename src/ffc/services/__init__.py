"""Service layer exports."""

from .errors import SaveLoadError, SpellError
from .hooks import CombatHooks
from .luck_service import LuckService
from .combat_service import AttackResult, CombatService, CopyAttackResult, EscapeResult
from .player_service import EDITABLE_STATS, POTION_OPTIONS, ActionResult, PlayerService
from .spell_service import CastResult, SpellService
from .save_service import SaveService, build_save_filename

__all__ = [
    "SaveLoadError",
    "SpellError",
    "CombatHooks",
    "LuckService",
    "AttackResult",
    "CombatService",
    "CopyAttackResult",
    "EscapeResult",
    "EDITABLE_STATS",
    "POTION_OPTIONS",
    "ActionResult",
    "PlayerService",
    "CastResult",
    "SpellService",
    "SaveService",
    "build_save_filename",
]
