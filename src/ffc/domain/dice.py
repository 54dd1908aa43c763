"""Dice primitives shared by stat rolls, Luck tests, and combat."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ffc.core.rng import RNG

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class DiceRoll:
    """Total of a roll plus the individual die faces."""

    total: int
    values: Tuple[int, ...]

    def describe(self) -> str:
        if len(self.values) > 1:
            return f"{' + '.join(str(value) for value in self.values)} = {self.total}"
        return str(self.total)


def roll_dice(count: int, rng: RNG) -> int:
    """Sum `count` six-sided dice."""
    return sum(rng.randint(1, 6) for _ in range(max(0, count)))


def roll_custom_dice(count: int, sides: int, rng: RNG) -> DiceRoll:
    """Roll `count` dice with `sides` faces and keep the breakdown."""
    values = tuple(rng.randint(1, sides) for _ in range(max(0, count)))
    return DiceRoll(total=sum(values), values=values)


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def parse_number(value: object, fallback: int, low: int = 0, high: int = 999) -> int:
    """Parse an integer leniently and clamp it, or return `fallback` untouched.

    Strings are read up to the first non-digit ("12abc" -> 12), floats are
    truncated, booleans and anything unparseable fall back.
    """
    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if math.isfinite(value):
            parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            parsed = int(match.group(1))
    if parsed is None:
        return fallback
    return clamp(parsed, low, high)


# Miscellaneous rolls offered outside combat.
GENERAL_ROLL_OPTIONS: Dict[str, Tuple[str, int, int]] = {
    "1d6": ("1D6", 1, 6),
    "1d4": ("1D4", 1, 4),
    "1d2": ("1D2", 1, 2),
    "2d6": ("2D6", 2, 6),
    "percent": ("Percent Die", 1, 100),
}


def roll_general(option: str, rng: RNG) -> tuple[str, DiceRoll]:
    """Roll one of the GENERAL_ROLL_OPTIONS and return its label and result."""
    try:
        label, count, sides = GENERAL_ROLL_OPTIONS[option]
    except KeyError as exc:
        raise ValueError(f"Unknown roll option '{option}'.") from exc
    return label, roll_custom_dice(count, sides, rng)


def general_roll_labels() -> List[tuple[str, str]]:
    return [(key, label) for key, (label, _, _) in GENERAL_ROLL_OPTIONS.items()]
