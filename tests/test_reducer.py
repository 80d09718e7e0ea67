"""Tests for the game reducer, including full play-through scenarios."""

from __future__ import annotations

import pytest

from black_rabbit.domain.case import get_clues_at_location
from black_rabbit.domain.types import ClueId, GamePhase, LocationId, MotiveType, SuspectId
from black_rabbit.game.reducer import (
    AddNote,
    AddSearchTokens,
    CancelAccusation,
    ConfirmAccusation,
    DiscoverClue,
    EndInterrogation,
    ExamineLocation,
    GameActions,
    NextStatement,
    PresentEvidence,
    PressStatement,
    PreviousStatement,
    SearchLocation,
    SetAccusation,
    SpendSearchToken,
    StartAccusation,
    StartGame,
    StartInterrogation,
    game_reducer,
)
from black_rabbit.game.state import (
    DEFAULT_MAX_MISTAKES,
    DEFAULT_SEARCH_TOKENS,
    Accusation,
    can_make_accusation,
    create_initial_game_state,
    current_statement,
    get_discovered_clues,
    has_discovered_clue,
    is_game_over,
)


def _run(state, *actions):
    for action in actions:
        state = game_reducer(state, action)
    return state


def _living(case):
    return next(s.id for s in case.suspects if not s.is_victim and not s.is_killer)


# ---------- initial state ----------


class TestInitialState:
    def test_defaults(self, case, game_state):
        assert game_state.phase == GamePhase.INTRO
        assert game_state.current_location == case.crime_scene
        assert game_state.mistake_count == 0
        assert game_state.max_mistakes == DEFAULT_MAX_MISTAKES
        assert game_state.search_tokens == DEFAULT_SEARCH_TOKENS
        assert game_state.interrogation is None
        assert get_discovered_clues(game_state) == []

    def test_testimonies_derived(self, case, game_state):
        assert case.killer in game_state.testimonies
        assert case.victim not in game_state.testimonies

    def test_explicit_testimonies(self, case):
        state = create_initial_game_state(case, testimonies={})
        assert state.testimonies == {}


# ---------- investigation ----------


class TestInvestigation:
    def test_start_game(self, game_state):
        assert game_reducer(game_state, StartGame()).phase == GamePhase.INVESTIGATION

    def test_examine_location(self, case, game_state):
        target = case.locations[-1].id
        state = _run(game_state, ExamineLocation(target), ExamineLocation(target))
        assert state.current_location == target
        assert state.player_knowledge.examined_locations == (target,)

    def test_discover_clue_is_idempotent(self, case, game_state):
        clue_id = case.clues[0].id
        state = _run(game_state, DiscoverClue(clue_id), DiscoverClue(clue_id))
        assert get_discovered_clues(state) == [clue_id]
        assert has_discovered_clue(state, clue_id)

    def test_does_not_mutate_input(self, case, game_state):
        game_reducer(game_state, DiscoverClue(case.clues[0].id))
        assert game_state.player_knowledge.discovered_clues == ()

    def test_can_make_accusation_after_three_clues(self, case, game_state):
        state = _run(game_state, *(DiscoverClue(c.id) for c in case.clues[:2]))
        assert not can_make_accusation(state)
        state = game_reducer(state, DiscoverClue(case.clues[2].id))
        assert can_make_accusation(state)

    def test_add_note_overwrites(self, case, game_state):
        suspect = case.killer
        state = _run(game_state, AddNote(suspect, "nervous"), AddNote(suspect, "lying"))
        assert state.player_knowledge.notes == {suspect: "lying"}


class TestSearch:
    def test_search_spends_token_and_finds_clue(self, case, game_state):
        here = get_clues_at_location(case, case.crime_scene)
        assert here, "the crime scene always holds the weapon evidence"
        state = game_reducer(game_state, SearchLocation())
        assert state.search_tokens == DEFAULT_SEARCH_TOKENS - 1
        assert get_discovered_clues(state) == [here[0].id]

    def test_search_without_tokens_is_noop(self, game_state):
        state = game_state.model_copy(update={"search_tokens": 0})
        assert game_reducer(state, SearchLocation()) == state

    def test_search_with_nothing_left_is_noop(self, case, game_state):
        found = [DiscoverClue(c.id) for c in get_clues_at_location(case, case.crime_scene)]
        state = _run(game_state, *found)
        assert game_reducer(state, SearchLocation()).search_tokens == DEFAULT_SEARCH_TOKENS

    def test_search_nowhere_is_noop(self, game_state):
        state = game_state.model_copy(update={"current_location": None})
        assert game_reducer(state, SearchLocation()) == state

    def test_token_bookkeeping(self, game_state):
        state = _run(game_state, AddSearchTokens(2), SpendSearchToken())
        assert state.search_tokens == DEFAULT_SEARCH_TOKENS + 1
        empty = game_state.model_copy(update={"search_tokens": 0})
        assert game_reducer(empty, SpendSearchToken()).search_tokens == 0


# ---------- interrogation ----------


class TestInterrogation:
    def test_start_and_end(self, case, game_state):
        suspect = _living(case)
        state = game_reducer(game_state, StartInterrogation(suspect))
        assert state.interrogation.suspect_id == suspect
        assert state.interrogation.current_statement_index == 0
        assert suspect in state.player_knowledge.interrogated_suspects
        state = game_reducer(state, EndInterrogation())
        assert state.interrogation is None
        assert suspect in state.player_knowledge.interrogated_suspects

    def test_next_statement_clamps(self, case, game_state):
        """Stepping past the last statement stays on it."""
        suspect = _living(case)
        last = len(game_state.testimonies[suspect].statements) - 1
        state = _run(
            game_state,
            StartGame(),
            StartInterrogation(suspect),
            NextStatement(),
            NextStatement(),
            NextStatement(),
        )
        assert state.interrogation.current_statement_index == min(3, last)
        state = _run(state, *(NextStatement() for _ in range(5)))
        assert state.interrogation.current_statement_index == last

    def test_previous_statement_clamps_at_zero(self, case, game_state):
        state = _run(game_state, StartInterrogation(case.killer), PreviousStatement())
        assert state.interrogation.current_statement_index == 0

    def test_statement_navigation_without_interrogation(self, game_state):
        for action in (NextStatement(), PreviousStatement(), PressStatement()):
            assert game_reducer(game_state, action) == game_state

    def test_unknown_suspect_testimony_stays_at_zero(self, game_state):
        state = _run(game_state, StartInterrogation(SuspectId("ghost")), NextStatement())
        assert state.interrogation.current_statement_index == 0
        assert current_statement(state) is None

    def test_press_statement_records_index(self, case, game_state):
        state = _run(
            game_state,
            StartInterrogation(case.killer),
            NextStatement(),
            PressStatement(),
            PressStatement(),
        )
        assert state.interrogation.pressed_statements == (1,)

    def test_current_statement(self, case, game_state):
        state = _run(game_state, StartInterrogation(case.killer), NextStatement())
        assert current_statement(state) == game_state.testimonies[case.killer].statements[1]


class TestPresentEvidence:
    def _at_alibi(self, case, game_state):
        state = _run(game_state, StartGame(), StartInterrogation(case.killer))
        return state, current_statement(state)

    def test_correct_evidence_reveals_contradiction(self, case, game_state):
        state, statement = self._at_alibi(case, game_state)
        clue_id = statement.contradicted_by[0]
        after = game_reducer(state, PresentEvidence(clue_id, statement))
        assert statement.id in after.player_knowledge.revealed_contradictions
        assert after.mistake_count == state.mistake_count
        assert after.interrogation.presented_evidence == {0: clue_id}

    def test_wrong_evidence_counts_mistake_only(self, case, game_state):
        state, statement = self._at_alibi(case, game_state)
        wrong = next(c.id for c in case.clues if c.id not in statement.contradicted_by)
        after = game_reducer(state, PresentEvidence(wrong, statement))
        assert after.mistake_count == state.mistake_count + 1
        assert after.model_copy(update={"mistake_count": state.mistake_count}) == state

    def test_presenting_without_interrogation_is_noop(self, case, game_state):
        statement = game_state.testimonies[case.killer].statements[0]
        assert game_reducer(game_state, PresentEvidence(ClueId("clue-0"), statement)) == game_state


# ---------- accusation ----------


class TestAccusation:
    def _accuse(self, state, accused: SuspectId):
        return _run(
            state,
            StartAccusation(),
            SetAccusation(Accusation(accused_id=accused, motive=MotiveType.GREED)),
            ConfirmAccusation(),
        )

    def test_correct_accusation_wins(self, case, game_state):
        state = self._accuse(game_state, case.killer)
        assert state.phase == GamePhase.RESOLUTION
        assert is_game_over(state)
        assert state.result.won
        assert state.result.correct_killer == case.killer
        assert state.result.player_accused == case.killer

    @pytest.mark.parametrize("pick", ["innocent", "victim"])
    def test_wrong_accusation_loses(self, case, game_state, pick):
        accused = _living(case) if pick == "innocent" else case.victim
        state = self._accuse(game_state, accused)
        assert not state.result.won
        assert state.result.player_accused == accused
        assert state.result.correct_killer == case.killer

    def test_result_counts(self, case, game_state):
        state = _run(game_state, DiscoverClue(case.clues[0].id), DiscoverClue(case.clues[1].id))
        state = self._accuse(state, case.killer)
        assert state.result.clues_found == 2
        assert state.result.total_clues == len(case.clues)
        assert state.result.contradictions_found == 0
        assert state.result.total_contradictions >= 3

    def test_confirm_with_explicit_testimonies(self, case, game_state):
        state = _run(
            game_state,
            SetAccusation(Accusation(accused_id=case.killer, motive=case.motive)),
            ConfirmAccusation(testimonies={}),
        )
        assert state.result.total_contradictions == 0

    def test_confirm_without_accusation_is_noop(self, game_state):
        state = game_reducer(game_state, StartAccusation())
        assert game_reducer(state, ConfirmAccusation()) == state

    def test_cancel_returns_to_investigation(self, case, game_state):
        state = _run(
            game_state,
            StartAccusation(),
            SetAccusation(Accusation(accused_id=case.killer, motive=case.motive)),
            CancelAccusation(),
        )
        assert state.phase == GamePhase.INVESTIGATION
        assert state.accusation is None


def test_unknown_action_returns_state(game_state):
    assert game_reducer(game_state, object()) is game_state  # type: ignore[arg-type]


def test_action_shorthands(case):
    assert GameActions.examine_location(LocationId("location-0")) == ExamineLocation(
        LocationId("location-0")
    )
    assert GameActions.start_game() == StartGame()
