"""Runtime entity exports."""

from .enemy import Enemy, EnemyModifiers
from .player import InitialStats, Player, PlayerModifiers

__all__ = [
    "Enemy",
    "EnemyModifiers",
    "InitialStats",
    "Player",
    "PlayerModifiers",
]
