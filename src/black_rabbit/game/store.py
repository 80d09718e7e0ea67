"""Minimal observable store around ``game_reducer``."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .reducer import GameAction, game_reducer
from .state import GameState

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class Store:
    """Holds the current state; listeners run after every dispatch."""

    def __init__(self, initial_state: GameState):
        self._state = initial_state
        self._listeners: list[Listener] = []

    def get_state(self) -> GameState:
        return self._state

    def dispatch(self, action: GameAction) -> GameState:
        self._state = game_reducer(self._state, action)
        logger.debug("Dispatched %s -> phase=%s", type(action).__name__, self._state.phase.value)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def create_store(initial_state: GameState) -> Store:
    return Store(initial_state)
