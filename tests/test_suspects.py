"""Tests for suspect generation and victim/killer assignment."""

from __future__ import annotations

import pytest

from black_rabbit.data.names import FIRST_NAMES, LAST_NAMES, OCCUPATIONS
from black_rabbit.generation.random import create_random
from black_rabbit.generation.suspects import (
    SuspectCountError,
    assign_victim_and_killer,
    generate_suspects,
)


def test_generates_requested_count():
    suspects = generate_suspects(6, create_random("cast"))
    assert len(suspects) == 6
    assert [s.id for s in suspects] == [f"suspect-{i}" for i in range(6)]


def test_suspects_use_pool_values():
    titles = {o.title for o in OCCUPATIONS}
    for s in generate_suspects(8, create_random("pools")):
        assert s.first_name in FIRST_NAMES
        assert s.last_name in LAST_NAMES
        assert s.occupation in titles
        assert 25 <= s.age <= 70
        assert not s.is_victim and not s.is_killer


def test_generation_is_deterministic():
    a = generate_suspects(6, create_random("same"))
    b = generate_suspects(6, create_random("same"))
    assert a == b


def test_large_cast_wraps_pools():
    """More suspects than first names reuse names round-robin."""
    suspects = generate_suspects(len(FIRST_NAMES) + 2, create_random("crowd"))
    assert suspects[0].first_name == suspects[len(FIRST_NAMES)].first_name


def test_full_name():
    suspect = generate_suspects(1, create_random("one"))[0]
    assert suspect.full_name == f"{suspect.first_name} {suspect.last_name}"


class TestAssignVictimAndKiller:
    def test_distinct_roles(self):
        for i in range(30):
            random = create_random(f"roles-{i}")
            split = assign_victim_and_killer(generate_suspects(4, random), random)
            assert split.victim.id != split.killer.id
            assert split.victim.is_victim and not split.victim.is_killer
            assert split.killer.is_killer and not split.killer.is_victim

    def test_others_are_the_rest(self):
        random = create_random("rest")
        suspects = generate_suspects(6, random)
        split = assign_victim_and_killer(suspects, random)
        assert len(split.others) == 4
        ids = {s.id for s in split.others} | {split.victim.id, split.killer.id}
        assert ids == {s.id for s in suspects}
        assert not any(s.is_victim or s.is_killer for s in split.others)

    def test_minimum_cast(self):
        random = create_random("three")
        split = assign_victim_and_killer(generate_suspects(3, random), random)
        assert len(split.others) == 1

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_suspects_raise(self, count):
        random = create_random("tiny")
        with pytest.raises(SuspectCountError):
            assign_victim_and_killer(generate_suspects(count, random), random)

    def test_error_is_value_error(self):
        assert issubclass(SuspectCountError, ValueError)
