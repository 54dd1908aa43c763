"""Repository exports."""

from .books_repo import BooksRepository
from .spells_repo import SpellsRepository

__all__ = [
    "BooksRepository",
    "SpellsRepository",
]
