"""Fighting Fantasy gamebook companion: stats, enemies, Luck and combat rolls."""

__version__ = "0.1.0"
