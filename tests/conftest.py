"""Shared test fixtures."""

from __future__ import annotations

import pytest

from black_rabbit.domain.case import Case
from black_rabbit.game.state import GameState, create_initial_game_state
from black_rabbit.generation.case_generator import generate_case

REDUCER_SEED = "test-reducer-seed"


@pytest.fixture
def case() -> Case:
    return generate_case(REDUCER_SEED)


@pytest.fixture
def game_state(case: Case) -> GameState:
    return create_initial_game_state(case)
