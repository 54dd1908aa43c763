"""Exceptions raised while loading book and spell definitions."""
from __future__ import annotations

from pathlib import Path


class DataError(Exception):
    """Base exception for the data layer; ``source`` names the offending file."""

    def __init__(self, message: str, *, source: Path | str | None = None) -> None:
        self.source = Path(source) if source is not None else None
        super().__init__(f"{self.source.name}: {message}" if self.source is not None else message)


class DataLoadError(DataError):
    """A definition file is missing, unreadable or not JSON."""


class DataValidationError(DataError):
    """A definition has the wrong shape or field types."""


class DataReferenceError(DataError):
    """A book lists a spell key the spell library lacks."""

    def __init__(self, message: str, *, missing: str, source: Path | str | None = None) -> None:
        self.missing = missing
        super().__init__(message, source=source)
