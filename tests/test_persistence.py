"""Tests for save/load of games."""

from __future__ import annotations

import json

from black_rabbit.domain.types import GamePhase, MotiveType
from black_rabbit.game.persistence import (
    SaveStore,
    autosave_listener,
    deserialize_game,
    serialize_game,
)
from black_rabbit.game.reducer import (
    AddNote,
    ConfirmAccusation,
    DiscoverClue,
    ExamineLocation,
    NextStatement,
    PresentEvidence,
    PressStatement,
    SetAccusation,
    StartAccusation,
    StartGame,
    StartInterrogation,
    game_reducer,
)
from black_rabbit.game.state import DEFAULT_SEARCH_TOKENS, Accusation, current_statement
from black_rabbit.game.store import create_store


def _played(case, game_state):
    state = game_state
    for action in (
        StartGame(),
        ExamineLocation(case.locations[1].id),
        DiscoverClue(case.clues[0].id),
        DiscoverClue(case.clues[1].id),
        AddNote(case.killer, "Shifty"),
        StartInterrogation(case.killer),
        NextStatement(),
        PressStatement(),
    ):
        state = game_reducer(state, action)
    statement = current_statement(state)
    if statement.contradicted_by:
        state = game_reducer(state, PresentEvidence(statement.contradicted_by[0], statement))
    return state


# ---------- serialize / deserialize ----------


class TestSerialization:
    def test_layout_uses_wire_names(self, case, game_state):
        data = serialize_game(_played(case, game_state), case.seed)
        assert data["seed"] == case.seed
        assert data["phase"] == "investigation"
        assert data["generatedCase"]["crimeScene"] == case.crime_scene
        assert "from" in data["generatedCase"]["relationships"][0]
        assert data["playerKnowledge"]["notes"] == [[case.killer, "Shifty"]]
        assert data["interrogation"]["pressedStatements"] == [1]
        assert data["searchTokens"] == DEFAULT_SEARCH_TOKENS
        json.dumps(data)

    def test_roundtrip_restores_progress(self, case, game_state):
        state = _played(case, game_state)
        loaded = deserialize_game(json.loads(json.dumps(serialize_game(state, case.seed))))
        assert loaded.seed == case.seed
        restored = loaded.state
        assert restored.case == case
        assert restored.phase == state.phase
        assert restored.player_knowledge == state.player_knowledge
        assert restored.interrogation == state.interrogation
        assert restored.current_location == state.current_location
        assert restored.mistake_count == state.mistake_count
        assert restored.testimonies == state.testimonies

    def test_roundtrip_accusation_and_result(self, case, game_state):
        state = game_state
        for action in (
            StartAccusation(),
            SetAccusation(
                Accusation(
                    accused_id=case.killer,
                    motive=MotiveType.GREED,
                    supporting_evidence=(case.clues[0].id,),
                )
            ),
            ConfirmAccusation(),
        ):
            state = game_reducer(state, action)
        restored = deserialize_game(serialize_game(state, case.seed)).state
        assert restored.accusation == state.accusation
        assert restored.result == state.result
        assert restored.phase == GamePhase.RESOLUTION

    def test_missing_search_tokens_defaults(self, case, game_state):
        data = serialize_game(game_state, case.seed)
        del data["searchTokens"]
        assert deserialize_game(data).state.search_tokens == DEFAULT_SEARCH_TOKENS

    def test_without_testimonies(self, case, game_state):
        data = serialize_game(game_state, case.seed)
        assert deserialize_game(data, with_testimonies=False).state.testimonies == {}


# ---------- SaveStore ----------


class TestSaveStore:
    def test_save_and_load(self, tmp_path, case, game_state):
        store = SaveStore(tmp_path / "nested" / "save.json")
        assert store.save(_played(case, game_state), case.seed)
        assert store.has_saved_game()
        loaded = store.load()
        assert loaded is not None
        assert loaded.seed == case.seed
        assert loaded.state.phase == GamePhase.INVESTIGATION

    def test_get_saved_seed(self, tmp_path, case, game_state):
        store = SaveStore(tmp_path / "save.json")
        assert store.get_saved_seed() is None
        store.save(game_state, "my-seed")
        assert store.get_saved_seed() == "my-seed"

    def test_load_missing_returns_none(self, tmp_path):
        store = SaveStore(tmp_path / "absent.json")
        assert store.load() is None
        assert not store.has_saved_game()

    def test_corrupt_file_returns_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text("{not json", encoding="utf-8")
        store = SaveStore(path)
        assert store.load() is None
        assert store.get_saved_seed() is None

    def test_undecodable_file_returns_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_bytes(b'{"seed": "\xff\xfe broken"}')
        store = SaveStore(path)
        assert store.load() is None
        assert store.get_saved_seed() is None

    def test_wrong_shape_returns_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text(json.dumps({"seed": "x", "phase": "intro"}), encoding="utf-8")
        assert SaveStore(path).load() is None
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert SaveStore(path).load() is None

    def test_clear(self, tmp_path, game_state):
        store = SaveStore(tmp_path / "save.json")
        store.save(game_state, "seed")
        assert store.clear()
        assert not store.has_saved_game()
        assert store.clear()

    def test_save_failure_returns_false(self, tmp_path, game_state):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = SaveStore(blocker / "save.json")
        assert store.save(game_state, "seed") is False


# ---------- autosave ----------


def test_autosave_listener_saves_until_resolution(tmp_path, case, game_state):
    saves = SaveStore(tmp_path / "save.json")
    store = create_store(game_state)
    store.subscribe(autosave_listener(saves, case.seed))

    store.dispatch(StartGame())
    assert saves.load().state.phase == GamePhase.INVESTIGATION

    store.dispatch(StartAccusation())
    store.dispatch(SetAccusation(Accusation(accused_id=case.killer, motive=case.motive)))
    store.dispatch(ConfirmAccusation())
    assert store.get_state().phase == GamePhase.RESOLUTION
    assert saves.load().state.phase == GamePhase.ACCUSATION


def test_autosave_reports_only_written_states(tmp_path, case, game_state):
    written = []
    saves = SaveStore(tmp_path / "save.json")
    store = create_store(game_state)
    store.subscribe(autosave_listener(saves, case.seed, on_save=written.append))
    store.dispatch(StartGame())
    store.dispatch(StartAccusation())
    store.dispatch(SetAccusation(Accusation(accused_id=case.killer, motive=case.motive)))
    store.dispatch(ConfirmAccusation())
    assert [s.phase for s in written] == [
        GamePhase.INVESTIGATION,
        GamePhase.ACCUSATION,
        GamePhase.ACCUSATION,
    ]


def test_autosave_failure_reports_nothing(tmp_path, case, game_state):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    written = []
    store = create_store(game_state)
    store.subscribe(
        autosave_listener(SaveStore(blocker / "save.json"), case.seed, on_save=written.append)
    )
    store.dispatch(StartGame())
    assert written == []
