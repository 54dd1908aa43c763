"""Capped action log and page-decision log kept with the session."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterator, List, Sequence

from ffc.core.types import Tone
from ffc.domain.dice import parse_number

LOG_HISTORY_LIMIT = 1000
DECISION_LOG_HISTORY_LIMIT = 1000
_TONES: tuple[str, ...] = ("info", "action", "success", "warning", "danger")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _coerce_tone(value: Any) -> Tone:
    return value if value in _TONES else "info"


@dataclass(slots=True)
class LogEntry:
    message: str
    tone: Tone
    timestamp: str


@dataclass(slots=True)
class DecisionEntry:
    page_number: int | None
    decision: str
    message: str
    timestamp: str
    tone: Tone = "info"


class LogHistory:
    """Newest-first history of player-facing messages."""

    def __init__(self, limit: int = LOG_HISTORY_LIMIT) -> None:
        self._limit = limit
        self._entries: List[LogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self._entries[index]

    def add(self, message: str, tone: Tone = "info") -> LogEntry:
        entry = LogEntry(message=message, tone=tone, timestamp=_now())
        self._entries.insert(0, entry)
        del self._entries[self._limit :]
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def apply_state(self, saved: Sequence[Any] | None) -> None:
        self._entries = []
        if not isinstance(saved, (list, tuple)):
            return
        for raw in saved[: self._limit]:
            if isinstance(raw, dict) and isinstance(raw.get("message"), str):
                self._entries.append(
                    LogEntry(
                        message=raw["message"],
                        tone=_coerce_tone(raw.get("tone")),
                        timestamp=raw.get("timestamp") or _now(),
                    )
                )

    def to_payload(self) -> List[dict[str, Any]]:
        return [
            {"message": entry.message, "tone": entry.tone, "timestamp": entry.timestamp}
            for entry in self._entries
        ]


class DecisionLog:
    """Newest-first record of choices made on numbered book pages."""

    def __init__(self, limit: int = DECISION_LOG_HISTORY_LIMIT) -> None:
        self._limit = limit
        self._entries: List[DecisionEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DecisionEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> DecisionEntry:
        return self._entries[index]

    def add(self, page_number: int, decision: str) -> DecisionEntry:
        entry = DecisionEntry(
            page_number=page_number,
            decision=decision,
            message=f"Page {page_number}: {decision}",
            timestamp=_now(),
        )
        self._entries.insert(0, entry)
        del self._entries[self._limit :]
        return entry

    def edit(self, index: int, page_number: int, decision: str) -> DecisionEntry:
        entry = self._entries[index]
        entry.page_number = page_number
        entry.decision = decision
        entry.message = f"Page {page_number}: {decision}"
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def apply_state(self, saved: Sequence[Any] | None) -> None:
        self._entries = []
        if not isinstance(saved, (list, tuple)):
            return
        for raw in saved[: self._limit]:
            if not isinstance(raw, dict) or not isinstance(raw.get("decision"), str):
                continue
            page = parse_number(raw.get("pageNumber"), 0, 1, 9999) or None
            decision = raw["decision"]
            message = raw.get("message")
            if not isinstance(message, str) or not message:
                message = f"Page {page}: {decision}" if page else decision
            self._entries.append(
                DecisionEntry(
                    page_number=page,
                    decision=decision,
                    message=message,
                    timestamp=raw.get("timestamp") or _now(),
                    tone=_coerce_tone(raw.get("tone")),
                )
            )

    def to_payload(self) -> List[dict[str, Any]]:
        return [
            {
                "pageNumber": entry.page_number,
                "decision": entry.decision,
                "message": entry.message,
                "timestamp": entry.timestamp,
                "tone": entry.tone,
            }
            for entry in self._entries
        ]
