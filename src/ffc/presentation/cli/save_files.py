"""File-system helpers for save file storage."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from ffc.presentation.cli import config
from ffc.services.errors import SaveLoadError
from ffc.services.save_service import build_save_filename


@dataclass(slots=True)
class SaveFileInfo:
    """Describes one save file for menu display."""

    path: Path
    book: str | None = None
    page_number: str | None = None
    saved_at: str | None = None
    is_corrupt: bool = False


class SaveFileStore:
    """Reads and writes named save documents in one directory."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def list_saves(self) -> List[SaveFileInfo]:
        """Return save files, newest name first."""
        if not self._base_dir.exists():
            return []
        saves: List[SaveFileInfo] = []
        for path in sorted(self._base_dir.glob("*.json"), reverse=True):
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                saves.append(SaveFileInfo(path=path, is_corrupt=True))
                continue
            if not isinstance(payload, dict):
                saves.append(SaveFileInfo(path=path, is_corrupt=True))
                continue
            book = payload.get("book")
            page = payload.get("pageNumber")
            saved_at = payload.get("savedAt")
            saves.append(
                SaveFileInfo(
                    path=path,
                    book=book if isinstance(book, str) else None,
                    page_number=str(page) if page not in (None, "") else None,
                    saved_at=saved_at if isinstance(saved_at, str) else None,
                )
            )
        return saves

    def write(self, payload: Dict[str, Any], now: datetime | None = None) -> Path:
        """Persist the payload under a name derived from its book and page."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._base_dir / build_save_filename(payload.get("book"), payload.get("pageNumber"), now)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def read(self, path: Path | str) -> Dict[str, Any]:
        """Load and parse a save document."""
        target = Path(path)
        if not target.is_absolute() and not target.exists():
            target = self._base_dir / target
        try:
            payload = json.loads(target.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SaveLoadError(f"Could not read save file '{target.name}'.") from exc
        except ValueError as exc:
            raise SaveLoadError(f"Save file '{target.name}' is not valid JSON.") from exc
        if not isinstance(payload, dict):
            raise SaveLoadError("Save data must be a JSON object.")
        return payload

    def delete(self, path: Path | str) -> None:
        try:
            Path(path).unlink()
        except FileNotFoundError:
            return
