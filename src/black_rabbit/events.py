"""NDJSON game event emitter for machine-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TextIO


def _iso_now() -> str:
    """Return current UTC time in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class GameEventEmitter:
    """Emits NDJSON game events to a stream (default: stdout).

    When ``enabled=False``, all emit methods are no-ops.
    """

    enabled: bool = False
    _stream: TextIO = field(default_factory=lambda: sys.stdout)

    def _emit(self, event: str, **data: Any) -> None:
        if not self.enabled:
            return
        payload = {"event": event, "timestamp": _iso_now(), **data}
        self._stream.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self._stream.flush()

    # -- Case lifecycle -------------------------------------------------------

    def case_generated(self, seed: str, suspects: int, clues: int, difficulty: str) -> None:
        self._emit(
            "case_generated", seed=seed, suspects=suspects, clues=clues, difficulty=difficulty
        )

    def phase_changed(self, previous: str, phase: str) -> None:
        self._emit("phase_changed", previous=previous, phase=phase)

    # -- Investigation --------------------------------------------------------

    def clue_found(self, clue_id: str, name: str, location: str) -> None:
        self._emit("clue_found", clue_id=clue_id, name=name, location=location)

    def contradiction(self, suspect_id: str, statement_id: str, clue_id: str) -> None:
        self._emit(
            "contradiction", suspect_id=suspect_id, statement_id=statement_id, clue_id=clue_id
        )

    # -- Panel puzzle ---------------------------------------------------------

    def puzzle_match(self, score: int, gained: int, combo: int) -> None:
        self._emit("puzzle_match", score=score, gained=gained, combo=combo)

    def puzzle_complete(self, score: int, target: int, won: bool, tokens: int) -> None:
        self._emit("puzzle_complete", score=score, target=target, won=won, tokens=tokens)

    # -- Persistence ----------------------------------------------------------

    def game_saved(self, seed: str, path: str, phase: str) -> None:
        self._emit("game_saved", seed=seed, path=path, phase=phase)

    # -- Errors ---------------------------------------------------------------

    def error(self, message: str, command: str | None = None) -> None:
        data: dict[str, Any] = {"message": message}
        if command is not None:
            data["command"] = command
        self._emit("error", **data)
