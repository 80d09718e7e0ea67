"""Save/load of an in-progress game as a single JSON blob on disk.

Sets and maps are flattened to arrays and entry lists. Testimony is not
stored; it is re-derived from the case seed when a save is loaded. Any
failure to read or write degrades to "no saved game" with a warning.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from ..domain.case import Case
from ..domain.types import ClueId, GamePhase, LocationId, StatementId, SuspectId
from .state import (
    DEFAULT_SEARCH_TOKENS,
    Accusation,
    GameResult,
    GameState,
    InterrogationState,
    PlayerKnowledge,
    derive_testimonies,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "black_rabbit_save"
DEFAULT_SAVE_PATH = Path.home() / ".black_rabbit" / f"{STORAGE_KEY}.json"

_LOAD_ERRORS = (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError)


@dataclass(frozen=True)
class LoadedGame:
    state: GameState
    seed: str


def serialize_game(state: GameState, seed: str) -> dict[str, Any]:
    """Flatten ``state`` into the JSON-compatible save layout."""
    knowledge = state.player_knowledge
    interrogation = state.interrogation
    return {
        "phase": state.phase.value,
        "generatedCase": state.case.model_dump(mode="json", by_alias=True),
        "playerKnowledge": {
            "discoveredClues": list(knowledge.discovered_clues),
            "examinedLocations": list(knowledge.examined_locations),
            "interrogatedSuspects": list(knowledge.interrogated_suspects),
            "revealedContradictions": list(knowledge.revealed_contradictions),
            "notes": [[k, v] for k, v in knowledge.notes.items()],
        },
        "currentLocation": state.current_location,
        "interrogation": (
            {
                "suspectId": interrogation.suspect_id,
                "currentStatementIndex": interrogation.current_statement_index,
                "pressedStatements": list(interrogation.pressed_statements),
                "presentedEvidence": [[i, c] for i, c in interrogation.presented_evidence.items()],
            }
            if interrogation
            else None
        ),
        "accusation": (
            state.accusation.model_dump(mode="json", by_alias=True) if state.accusation else None
        ),
        "result": state.result.model_dump(mode="json", by_alias=True) if state.result else None,
        "mistakeCount": state.mistake_count,
        "maxMistakes": state.max_mistakes,
        "searchTokens": state.search_tokens,
        "seed": seed,
    }


def deserialize_game(data: dict[str, Any], with_testimonies: bool = True) -> LoadedGame:
    """Rebuild a game from the save layout.

    Raises ``KeyError``/``ValidationError`` on malformed input; callers that
    must not fail use ``SaveStore.load``.
    """
    case = Case.model_validate(data["generatedCase"])
    pk = data["playerKnowledge"]
    knowledge = PlayerKnowledge(
        discovered_clues=tuple(ClueId(c) for c in pk["discoveredClues"]),
        examined_locations=tuple(LocationId(loc) for loc in pk["examinedLocations"]),
        interrogated_suspects=tuple(SuspectId(s) for s in pk["interrogatedSuspects"]),
        revealed_contradictions=tuple(StatementId(s) for s in pk["revealedContradictions"]),
        notes={SuspectId(k): v for k, v in pk["notes"]},
    )

    raw_interrogation = data.get("interrogation")
    interrogation = None
    if raw_interrogation:
        interrogation = InterrogationState(
            suspect_id=raw_interrogation["suspectId"],
            current_statement_index=raw_interrogation["currentStatementIndex"],
            pressed_statements=tuple(raw_interrogation["pressedStatements"]),
            presented_evidence={int(i): c for i, c in raw_interrogation["presentedEvidence"]},
        )

    raw_accusation = data.get("accusation")
    raw_result = data.get("result")
    search_tokens = data.get("searchTokens")

    state = GameState(
        phase=GamePhase(data["phase"]),
        case=case,
        player_knowledge=knowledge,
        current_location=data.get("currentLocation"),
        interrogation=interrogation,
        accusation=Accusation.model_validate(raw_accusation) if raw_accusation else None,
        result=GameResult.model_validate(raw_result) if raw_result else None,
        mistake_count=data["mistakeCount"],
        max_mistakes=data["maxMistakes"],
        search_tokens=DEFAULT_SEARCH_TOKENS if search_tokens is None else search_tokens,
        testimonies=derive_testimonies(case) if with_testimonies else {},
    )
    return LoadedGame(state=state, seed=data["seed"])


class SaveStore:
    """One save slot backed by a JSON file."""

    def __init__(self, path: Path | str = DEFAULT_SAVE_PATH):
        self.path = Path(path).expanduser()

    def save(self, state: GameState, seed: str) -> bool:
        payload = json.dumps(serialize_game(state, seed), ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to save game to %s: %s", self.path, e)
            return False
        logger.debug("Saved game for seed %r to %s", seed, self.path)
        return True

    def load(self) -> LoadedGame | None:
        data = self._read()
        if data is None:
            return None
        try:
            return deserialize_game(data)
        except _LOAD_ERRORS as e:
            logger.warning("Failed to load game from %s: %s", self.path, e)
            return None

    def clear(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clear save %s: %s", self.path, e)
            return False
        return True

    def has_saved_game(self) -> bool:
        try:
            return self.path.is_file()
        except OSError:
            return False

    def get_saved_seed(self) -> str | None:
        data = self._read()
        if data is None:
            return None
        seed = data.get("seed")
        return seed if isinstance(seed, str) else None

    def _read(self) -> dict[str, Any] | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to read save %s: %s", self.path, e)
            return None
        except UnicodeDecodeError as e:
            logger.warning("Corrupt save %s: %s", self.path, e)
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt save %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Corrupt save %s: expected an object", self.path)
            return None
        return data


def autosave_listener(
    store: SaveStore,
    seed: str,
    on_save: Callable[[GameState], None] | None = None,
) -> Callable[[GameState], None]:
    """Store listener that saves after every action until the game is resolved.

    ``on_save`` is called with each state that was actually written.
    """

    def _listener(state: GameState) -> None:
        if state.phase == GamePhase.RESOLUTION:
            return
        if store.save(state, seed) and on_save is not None:
            on_save(state)

    return _listener
