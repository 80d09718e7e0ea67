"""Pure reducer over player actions.

Actions form a closed union of frozen dataclasses. ``game_reducer`` maps
``(state, action)`` to a new state and never mutates its input; unknown or
out-of-context actions return the state unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

from ..domain.types import ClueId, GamePhase, LocationId, SuspectId
from .state import (
    Accusation,
    GameResult,
    GameState,
    InterrogationState,
    PlayerKnowledge,
    undiscovered_clues_here,
)
from .statements import Statement, Testimony, check_contradiction, count_contradictions


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class ExamineLocation:
    location_id: LocationId


@dataclass(frozen=True)
class DiscoverClue:
    clue_id: ClueId


@dataclass(frozen=True)
class SearchLocation:
    """Spend a search token on the first undiscovered clue at the current location."""


@dataclass(frozen=True)
class StartInterrogation:
    suspect_id: SuspectId


@dataclass(frozen=True)
class EndInterrogation:
    pass


@dataclass(frozen=True)
class NextStatement:
    pass


@dataclass(frozen=True)
class PreviousStatement:
    pass


@dataclass(frozen=True)
class PressStatement:
    pass


@dataclass(frozen=True)
class PresentEvidence:
    clue_id: ClueId
    statement: Statement


@dataclass(frozen=True)
class AddNote:
    suspect_id: SuspectId
    note: str


@dataclass(frozen=True)
class StartAccusation:
    pass


@dataclass(frozen=True)
class SetAccusation:
    accusation: Accusation


@dataclass(frozen=True)
class ConfirmAccusation:
    testimonies: Mapping[SuspectId, Testimony] | None = None


@dataclass(frozen=True)
class CancelAccusation:
    pass


@dataclass(frozen=True)
class AddSearchTokens:
    amount: int


@dataclass(frozen=True)
class SpendSearchToken:
    pass


GameAction = Union[
    StartGame,
    ExamineLocation,
    DiscoverClue,
    SearchLocation,
    StartInterrogation,
    EndInterrogation,
    NextStatement,
    PreviousStatement,
    PressStatement,
    PresentEvidence,
    AddNote,
    StartAccusation,
    SetAccusation,
    ConfirmAccusation,
    CancelAccusation,
    AddSearchTokens,
    SpendSearchToken,
]


def _added(items: tuple, item) -> tuple:
    return items if item in items else (*items, item)


def _knowledge(state: GameState, **update) -> PlayerKnowledge:
    return state.player_knowledge.model_copy(update=update)


def _interrogation(state: GameState, **update) -> InterrogationState:
    return state.interrogation.model_copy(update=update)  # type: ignore[union-attr]


def _discover(state: GameState, clue_id: ClueId) -> GameState:
    knowledge = state.player_knowledge
    return state.model_copy(
        update={
            "player_knowledge": _knowledge(
                state, discovered_clues=_added(knowledge.discovered_clues, clue_id)
            )
        }
    )


def game_reducer(state: GameState, action: GameAction) -> GameState:
    knowledge = state.player_knowledge

    match action:
        case StartGame():
            return state.model_copy(update={"phase": GamePhase.INVESTIGATION})

        case ExamineLocation(location_id=location_id):
            return state.model_copy(
                update={
                    "current_location": location_id,
                    "player_knowledge": _knowledge(
                        state,
                        examined_locations=_added(knowledge.examined_locations, location_id),
                    ),
                }
            )

        case DiscoverClue(clue_id=clue_id):
            return _discover(state, clue_id)

        case SearchLocation():
            remaining = undiscovered_clues_here(state)
            if state.search_tokens <= 0 or not remaining:
                return state
            searched = state.model_copy(update={"search_tokens": state.search_tokens - 1})
            return _discover(searched, remaining[0].id)

        case StartInterrogation(suspect_id=suspect_id):
            return state.model_copy(
                update={
                    "interrogation": InterrogationState(suspect_id=suspect_id),
                    "player_knowledge": _knowledge(
                        state,
                        interrogated_suspects=_added(
                            knowledge.interrogated_suspects, suspect_id
                        ),
                    ),
                }
            )

        case EndInterrogation():
            return state.model_copy(update={"interrogation": None})

        case NextStatement():
            if state.interrogation is None:
                return state
            testimony = state.testimonies.get(state.interrogation.suspect_id)
            last_index = len(testimony.statements) - 1 if testimony else 0
            index = min(state.interrogation.current_statement_index + 1, max(last_index, 0))
            return state.model_copy(
                update={"interrogation": _interrogation(state, current_statement_index=index)}
            )

        case PreviousStatement():
            if state.interrogation is None:
                return state
            index = max(0, state.interrogation.current_statement_index - 1)
            return state.model_copy(
                update={"interrogation": _interrogation(state, current_statement_index=index)}
            )

        case PressStatement():
            if state.interrogation is None:
                return state
            pressed = _added(
                state.interrogation.pressed_statements,
                state.interrogation.current_statement_index,
            )
            return state.model_copy(
                update={"interrogation": _interrogation(state, pressed_statements=pressed)}
            )

        case PresentEvidence(clue_id=clue_id, statement=statement):
            if state.interrogation is None:
                return state
            if not check_contradiction(statement, clue_id):
                return state.model_copy(update={"mistake_count": state.mistake_count + 1})
            presented = {
                **state.interrogation.presented_evidence,
                state.interrogation.current_statement_index: clue_id,
            }
            return state.model_copy(
                update={
                    "interrogation": _interrogation(state, presented_evidence=presented),
                    "player_knowledge": _knowledge(
                        state,
                        revealed_contradictions=_added(
                            knowledge.revealed_contradictions, statement.id
                        ),
                    ),
                }
            )

        case AddNote(suspect_id=suspect_id, note=note):
            return state.model_copy(
                update={
                    "player_knowledge": _knowledge(
                        state, notes={**knowledge.notes, suspect_id: note}
                    )
                }
            )

        case StartAccusation():
            return state.model_copy(update={"phase": GamePhase.ACCUSATION})

        case SetAccusation(accusation=accusation):
            return state.model_copy(update={"accusation": accusation})

        case ConfirmAccusation(testimonies=testimonies):
            if state.accusation is None:
                return state
            correct_killer = state.case.killer
            accused = state.accusation.accused_id
            result = GameResult(
                won=accused == correct_killer,
                correct_killer=correct_killer,
                player_accused=accused,
                clues_found=len(knowledge.discovered_clues),
                total_clues=len(state.case.clues),
                contradictions_found=len(knowledge.revealed_contradictions),
                total_contradictions=count_contradictions(
                    testimonies if testimonies is not None else state.testimonies
                ),
            )
            return state.model_copy(update={"phase": GamePhase.RESOLUTION, "result": result})

        case CancelAccusation():
            return state.model_copy(
                update={"phase": GamePhase.INVESTIGATION, "accusation": None}
            )

        case AddSearchTokens(amount=amount):
            return state.model_copy(update={"search_tokens": state.search_tokens + amount})

        case SpendSearchToken():
            return state.model_copy(update={"search_tokens": max(0, state.search_tokens - 1)})

        case _:
            return state


class GameActions:
    """Shorthand constructors, e.g. ``GameActions.present_evidence(clue, stmt)``."""

    start_game = StartGame
    examine_location = ExamineLocation
    discover_clue = DiscoverClue
    search_location = SearchLocation
    start_interrogation = StartInterrogation
    end_interrogation = EndInterrogation
    next_statement = NextStatement
    previous_statement = PreviousStatement
    press_statement = PressStatement
    present_evidence = PresentEvidence
    add_note = AddNote
    start_accusation = StartAccusation
    set_accusation = SetAccusation
    confirm_accusation = ConfirmAccusation
    cancel_accusation = CancelAccusation
    add_search_tokens = AddSearchTokens
    spend_search_token = SpendSearchToken
