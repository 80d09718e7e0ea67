"""Settings: environment variables (optionally from .env) plus CLI overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .game.panel_puzzle import DEFAULT_TARGET_SCORE, DEFAULT_TIME_LIMIT
from .game.persistence import DEFAULT_SAVE_PATH
from .generation.case_generator import Difficulty
from .generation.suspects import MIN_SUSPECTS

DEFAULT_SUSPECT_COUNT = 6
DEFAULT_DIFFICULTY = Difficulty.MEDIUM


@dataclass
class Config:
    suspect_count: int = DEFAULT_SUSPECT_COUNT
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    save_path: Path = DEFAULT_SAVE_PATH
    puzzle_target_score: int = DEFAULT_TARGET_SCORE
    puzzle_time_limit: int = DEFAULT_TIME_LIMIT

    @classmethod
    def load(
        cls,
        suspects_override: int | None = None,
        difficulty_override: str | None = None,
        save_path_override: str | None = None,
        target_override: int | None = None,
        time_override: int | None = None,
    ) -> Config:
        """Overrides win over environment variables, which win over defaults."""
        try:
            load_dotenv()
        except UnicodeDecodeError:
            # A .env saved as UTF-16 is skipped; real env vars still apply
            pass

        suspect_count = (
            suspects_override
            if suspects_override is not None
            else _env_int("BLACK_RABBIT_SUSPECTS", DEFAULT_SUSPECT_COUNT)
        )
        if suspect_count < MIN_SUSPECTS:
            raise ConfigError(f"At least {MIN_SUSPECTS} suspects are required, got {suspect_count}")

        raw_difficulty = difficulty_override or os.getenv(
            "BLACK_RABBIT_DIFFICULTY", DEFAULT_DIFFICULTY.value
        )
        try:
            difficulty = Difficulty(raw_difficulty.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in Difficulty)
            raise ConfigError(
                f"Unknown difficulty {raw_difficulty!r} (expected one of: {choices})"
            ) from None

        raw_path = save_path_override or os.getenv("BLACK_RABBIT_SAVE_PATH", "")
        save_path = Path(raw_path).expanduser() if raw_path else DEFAULT_SAVE_PATH

        target = (
            target_override
            if target_override is not None
            else _env_int("BLACK_RABBIT_PUZZLE_TARGET", DEFAULT_TARGET_SCORE)
        )
        time_limit = (
            time_override
            if time_override is not None
            else _env_int("BLACK_RABBIT_PUZZLE_TIME", DEFAULT_TIME_LIMIT)
        )
        if target <= 0 or time_limit <= 0:
            raise ConfigError("Puzzle target score and time limit must be positive")

        return cls(
            suspect_count=suspect_count,
            difficulty=difficulty,
            save_path=save_path,
            puzzle_target_score=target,
            puzzle_time_limit=time_limit,
        )


class ConfigError(Exception):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
