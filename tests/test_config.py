"""Tests for Config loading and precedence."""

from __future__ import annotations

from functools import partial
from pathlib import Path

import pytest
from dotenv import load_dotenv

from black_rabbit.config import (
    DEFAULT_DIFFICULTY,
    DEFAULT_SUSPECT_COUNT,
    Config,
    ConfigError,
)
from black_rabbit.game.panel_puzzle import DEFAULT_TARGET_SCORE, DEFAULT_TIME_LIMIT
from black_rabbit.game.persistence import DEFAULT_SAVE_PATH
from black_rabbit.generation.case_generator import Difficulty

ENV_VARS = (
    "BLACK_RABBIT_SUSPECTS",
    "BLACK_RABBIT_DIFFICULTY",
    "BLACK_RABBIT_SAVE_PATH",
    "BLACK_RABBIT_PUZZLE_TARGET",
    "BLACK_RABBIT_PUZZLE_TIME",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


# ---------- defaults ----------


def test_defaults():
    config = Config.load()
    assert config.suspect_count == DEFAULT_SUSPECT_COUNT == 6
    assert config.difficulty == DEFAULT_DIFFICULTY == Difficulty.MEDIUM
    assert config.save_path == DEFAULT_SAVE_PATH
    assert config.puzzle_target_score == DEFAULT_TARGET_SCORE
    assert config.puzzle_time_limit == DEFAULT_TIME_LIMIT


def test_blank_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("BLACK_RABBIT_SUSPECTS", "  ")
    monkeypatch.setenv("BLACK_RABBIT_SAVE_PATH", "")
    config = Config.load()
    assert config.suspect_count == DEFAULT_SUSPECT_COUNT
    assert config.save_path == DEFAULT_SAVE_PATH


# ---------- environment ----------


def test_load_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("BLACK_RABBIT_SUSPECTS", "8")
    monkeypatch.setenv("BLACK_RABBIT_DIFFICULTY", "Hard")
    monkeypatch.setenv("BLACK_RABBIT_SAVE_PATH", str(tmp_path / "save.json"))
    monkeypatch.setenv("BLACK_RABBIT_PUZZLE_TARGET", "500")
    monkeypatch.setenv("BLACK_RABBIT_PUZZLE_TIME", "90")
    config = Config.load()
    assert config.suspect_count == 8
    assert config.difficulty == Difficulty.HARD
    assert config.save_path == tmp_path / "save.json"
    assert config.puzzle_target_score == 500
    assert config.puzzle_time_limit == 90


def test_save_path_expands_user(monkeypatch):
    monkeypatch.setenv("BLACK_RABBIT_SAVE_PATH", "~/saves/game.json")
    config = Config.load()
    assert config.save_path == Path("~/saves/game.json").expanduser()


def test_load_from_dotenv_file(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("BLACK_RABBIT_DIFFICULTY=easy\n", encoding="utf-8")
    # Registered so the value dotenv writes is removed again at teardown
    monkeypatch.setenv("BLACK_RABBIT_DIFFICULTY", "")
    monkeypatch.delenv("BLACK_RABBIT_DIFFICULTY")
    monkeypatch.setattr("black_rabbit.config.load_dotenv", partial(load_dotenv, env_file))
    assert Config.load().difficulty == Difficulty.EASY


def test_unreadable_dotenv_is_ignored(monkeypatch):
    def broken():
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    monkeypatch.setattr("black_rabbit.config.load_dotenv", broken)
    assert Config.load().suspect_count == DEFAULT_SUSPECT_COUNT


# ---------- overrides ----------


def test_overrides_take_precedence(monkeypatch, tmp_path):
    monkeypatch.setenv("BLACK_RABBIT_SUSPECTS", "8")
    monkeypatch.setenv("BLACK_RABBIT_DIFFICULTY", "hard")
    monkeypatch.setenv("BLACK_RABBIT_PUZZLE_TARGET", "500")
    monkeypatch.setenv("BLACK_RABBIT_PUZZLE_TIME", "90")
    config = Config.load(
        suspects_override=4,
        difficulty_override="easy",
        save_path_override=str(tmp_path / "other.json"),
        target_override=100,
        time_override=30,
    )
    assert config.suspect_count == 4
    assert config.difficulty == Difficulty.EASY
    assert config.save_path == tmp_path / "other.json"
    assert config.puzzle_target_score == 100
    assert config.puzzle_time_limit == 30


def test_override_bypasses_bad_env(monkeypatch):
    monkeypatch.setenv("BLACK_RABBIT_SUSPECTS", "lots")
    assert Config.load(suspects_override=5).suspect_count == 5


# ---------- errors ----------


@pytest.mark.parametrize("count", [0, 2])
def test_too_few_suspects(count):
    with pytest.raises(ConfigError, match="At least 3 suspects"):
        Config.load(suspects_override=count)


def test_minimum_suspects_allowed():
    assert Config.load(suspects_override=3).suspect_count == 3


def test_unknown_difficulty():
    with pytest.raises(ConfigError, match="Unknown difficulty 'brutal'"):
        Config.load(difficulty_override="brutal")


@pytest.mark.parametrize(
    "name", ["BLACK_RABBIT_SUSPECTS", "BLACK_RABBIT_PUZZLE_TARGET", "BLACK_RABBIT_PUZZLE_TIME"]
)
def test_non_integer_env(monkeypatch, name):
    monkeypatch.setenv(name, "six")
    with pytest.raises(ConfigError, match=f"{name} must be an integer"):
        Config.load()


@pytest.mark.parametrize("kwargs", [{"target_override": 0}, {"time_override": -5}])
def test_non_positive_puzzle_settings(kwargs):
    with pytest.raises(ConfigError, match="must be positive"):
        Config.load(**kwargs)
