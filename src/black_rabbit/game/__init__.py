"""Game loop: testimony, reducer, store, persistence and the panel puzzle."""

from .persistence import LoadedGame, SaveStore
from .reducer import GameActions, game_reducer
from .state import GameState, create_initial_game_state
from .store import Store, create_store

__all__ = [
    "GameActions",
    "GameState",
    "LoadedGame",
    "SaveStore",
    "Store",
    "create_initial_game_state",
    "create_store",
    "game_reducer",
]
