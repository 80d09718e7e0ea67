"""Tests for the observable game store."""

from __future__ import annotations

from black_rabbit.domain.types import GamePhase
from black_rabbit.game.reducer import DiscoverClue, StartGame
from black_rabbit.game.store import Store, create_store


def test_get_state_returns_initial(game_state):
    store = create_store(game_state)
    assert isinstance(store, Store)
    assert store.get_state() is game_state


def test_dispatch_applies_reducer(game_state):
    store = create_store(game_state)
    new_state = store.dispatch(StartGame())
    assert new_state.phase == GamePhase.INVESTIGATION
    assert store.get_state() is new_state


def test_listeners_receive_new_state(case, game_state):
    store = create_store(game_state)
    seen = []
    store.subscribe(seen.append)
    store.dispatch(StartGame())
    store.dispatch(DiscoverClue(case.clues[0].id))
    assert [s.phase for s in seen] == [GamePhase.INVESTIGATION, GamePhase.INVESTIGATION]
    assert seen[-1] is store.get_state()


def test_unsubscribe(game_state):
    store = create_store(game_state)
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.dispatch(StartGame())
    unsubscribe()
    unsubscribe()
    store.dispatch(StartGame())
    assert len(seen) == 1


def test_listener_may_unsubscribe_itself(game_state):
    store = create_store(game_state)
    calls = []

    def once(state):
        calls.append(state)
        unsubscribe()

    unsubscribe = store.subscribe(once)
    store.dispatch(StartGame())
    store.dispatch(StartGame())
    assert len(calls) == 1
