"""Factory helpers for runtime entities."""

from .player_factory import StatRoll, create_player_from_rolls, roll_starting_stats

__all__ = [
    "StatRoll",
    "create_player_from_rolls",
    "roll_starting_stats",
]
