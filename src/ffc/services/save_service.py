"""Serialization helpers for manual save/load."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from ffc.core.rng import RNG
from ffc.domain.dice import parse_number
from ffc.domain.entities import PlayerModifiers
from ffc.domain.modifiers import MODIFIER_MAX, MODIFIER_MIN
from ffc.domain.state import NOTE_FIELDS, GameState
from ffc.services.errors import SaveLoadError
from ffc.services.player_service import PlayerService
from ffc.services.spell_service import SpellService

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]+")
_UNSAFE_PAGE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def _book_slug(book: str | None) -> str:
    if not book:
        return "book-unknown"
    slug = _UNSAFE_FILENAME_CHARS.sub("-", book.lower()).strip("-")
    return slug or "book-unknown"


def build_save_filename(book: str | None, page: Any, now: datetime | None = None) -> str:
    """Return e.g. ``warlock-of-firetop-mountain-ff-save-page-12-2024-05-01_18-30.json``."""
    moment = now or datetime.now()
    page_label = str(page).strip() if page is not None else ""
    page_label = _UNSAFE_PAGE_CHARS.sub("-", page_label).strip("-")
    safe_page = f"page-{page_label}" if page_label else "page-unknown"
    return f"{_book_slug(book)}-ff-save-{safe_page}-{moment:%Y-%m-%d_%H-%M}.json"


class SaveService:
    """Converts a session to and from the version 5 save document."""

    SAVE_VERSION = 5

    def __init__(self, *, spell_service: SpellService) -> None:
        self._spell_service = spell_service

    def build_payload(self, state: GameState, saved_at: datetime | None = None) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        moment = saved_at or datetime.now(timezone.utc)
        player = state.player
        initial = state.initial_stats
        modifiers = state.player_modifiers
        return {
            "version": self.SAVE_VERSION,
            "savedAt": moment.isoformat(),
            "pageNumber": state.page_number,
            "book": state.book or None,
            "player": {
                "skill": player.skill,
                "stamina": player.stamina,
                "luck": player.luck,
                "magic": player.magic,
                "maxSkill": player.max_skill,
                "maxStamina": player.max_stamina,
                "maxLuck": player.max_luck,
                "maxMagic": player.max_magic,
                "meals": player.meals,
                "potion": player.potion,
                "potionUsed": player.potion_used,
            },
            "initialStats": {
                "skill": initial.skill,
                "stamina": initial.stamina,
                "luck": initial.luck,
                "magic": initial.magic,
            },
            "playerModifiers": {
                "damageDone": modifiers.damage_done,
                "damageReceived": modifiers.damage_received,
                "skillBonus": modifiers.skill_bonus,
            },
            "notes": {key: state.notes.get(key, "") for key in NOTE_FIELDS},
            "enemies": state.roster.to_payload(),
            "log": state.log.to_payload(),
            "decisionLog": state.decisions.to_payload(),
            "spells": {
                "prepared": dict(state.spells.prepared),
                "limit": state.spells.limit,
            },
        }

    def apply_payload(self, payload: Any, rng: RNG | None = None) -> GameState:
        """Rebuild a session from a parsed save document.

        Only the player and initial stats are required; every other section is
        clamped or defaulted so that hand-edited and older saves still load.
        """
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        if not isinstance(payload.get("player"), Mapping) or not isinstance(payload.get("initialStats"), Mapping):
            raise SaveLoadError("Save missing required fields.")

        state = GameState(rng=rng or RNG())
        book = payload.get("book")
        state.book = book if isinstance(book, str) else ""
        page = payload.get("pageNumber")
        state.page_number = str(page) if isinstance(page, (str, int)) and not isinstance(page, bool) else ""
        state.player, state.initial_stats = PlayerService.hydrate_player(
            payload.get("player"), payload.get("initialStats")
        )
        state.player_modifiers = self._parse_player_modifiers(payload.get("playerModifiers"))

        notes = payload.get("notes")
        notes_data: Mapping[str, Any] = notes if isinstance(notes, Mapping) else {}
        state.notes = {
            key: notes_data[key] if isinstance(notes_data.get(key), str) else "" for key in NOTE_FIELDS
        }

        state.roster.apply_state(payload.get("enemies"))
        state.log.apply_state(payload.get("log"))
        state.decisions.apply_state(payload.get("decisionLog"))
        self._spell_service.apply_spells_state(state, payload.get("spells"))
        state.game_over = False
        logger.debug(
            "Applied save version %s for %s with %d enemies",
            payload.get("version"),
            state.book or "unknown book",
            len(state.roster),
        )
        return state

    @staticmethod
    def _parse_player_modifiers(raw: Any) -> PlayerModifiers:
        data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        return PlayerModifiers(
            damage_done=parse_number(data.get("damageDone"), 0, MODIFIER_MIN, MODIFIER_MAX),
            damage_received=parse_number(data.get("damageReceived"), 0, MODIFIER_MIN, MODIFIER_MAX),
            skill_bonus=parse_number(data.get("skillBonus"), 0, MODIFIER_MIN, MODIFIER_MAX),
        )
