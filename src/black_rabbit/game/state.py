"""Game state for the investigation and interrogation loop."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..domain.case import Case, get_clues_at_location
from ..domain.models import Clue
from ..domain.types import ClueId, GamePhase, LocationId, MotiveType, StatementId, SuspectId
from ..generation.random import create_random
from .statements import Statement, Testimony, generate_testimonies

DEFAULT_MAX_MISTAKES = 5
DEFAULT_SEARCH_TOKENS = 3
MIN_CLUES_FOR_ACCUSATION = 3


class PlayerKnowledge(BaseModel):
    """What the player has found so far.

    The id tuples behave as insertion-ordered sets; the reducer never adds
    an id twice.
    """

    discovered_clues: tuple[ClueId, ...] = Field((), alias="discoveredClues")
    examined_locations: tuple[LocationId, ...] = Field((), alias="examinedLocations")
    interrogated_suspects: tuple[SuspectId, ...] = Field((), alias="interrogatedSuspects")
    revealed_contradictions: tuple[StatementId, ...] = Field((), alias="revealedContradictions")
    notes: dict[SuspectId, str] = Field(default_factory=dict)

    model_config = {"populate_by_name": True, "frozen": True}


class InterrogationState(BaseModel):
    suspect_id: SuspectId = Field(alias="suspectId")
    current_statement_index: int = Field(0, alias="currentStatementIndex")
    pressed_statements: tuple[int, ...] = Field((), alias="pressedStatements")
    presented_evidence: dict[int, ClueId] = Field(
        default_factory=dict,
        alias="presentedEvidence",
        description="Statement index -> clue that exposed it",
    )

    model_config = {"populate_by_name": True, "frozen": True}


class Accusation(BaseModel):
    accused_id: SuspectId = Field(alias="accusedId")
    motive: MotiveType
    supporting_evidence: tuple[ClueId, ...] = Field((), alias="supportingEvidence")

    model_config = {"populate_by_name": True, "frozen": True}


class GameResult(BaseModel):
    won: bool
    correct_killer: SuspectId = Field(alias="correctKiller")
    player_accused: SuspectId = Field(alias="playerAccused")
    clues_found: int = Field(alias="cluesFound")
    total_clues: int = Field(alias="totalClues")
    contradictions_found: int = Field(alias="contradictionsFound")
    total_contradictions: int = Field(alias="totalContradictions")

    model_config = {"populate_by_name": True, "frozen": True}


class GameState(BaseModel):
    phase: GamePhase = GamePhase.INTRO
    case: Case = Field(alias="generatedCase")
    player_knowledge: PlayerKnowledge = Field(
        default_factory=PlayerKnowledge, alias="playerKnowledge"
    )
    current_location: LocationId | None = Field(None, alias="currentLocation")
    interrogation: InterrogationState | None = None
    accusation: Accusation | None = None
    result: GameResult | None = None
    mistake_count: int = Field(0, alias="mistakeCount", description="Wrong evidence presented")
    max_mistakes: int = Field(DEFAULT_MAX_MISTAKES, alias="maxMistakes")
    search_tokens: int = Field(
        DEFAULT_SEARCH_TOKENS, alias="searchTokens", description="Spent on location searches"
    )
    # Derived from the case seed; never persisted.
    testimonies: dict[SuspectId, Testimony] = Field(default_factory=dict, exclude=True)

    model_config = {"populate_by_name": True, "frozen": True}


def derive_testimonies(case: Case) -> dict[SuspectId, Testimony]:
    """Testimony generated from a fresh stream seeded with the case seed."""
    return generate_testimonies(case, create_random(case.seed))


def create_initial_game_state(
    case: Case, testimonies: dict[SuspectId, Testimony] | None = None
) -> GameState:
    """New game: intro phase, standing at the crime scene."""
    return GameState(
        phase=GamePhase.INTRO,
        case=case,
        current_location=case.crime_scene,
        testimonies=testimonies if testimonies is not None else derive_testimonies(case),
    )


def has_discovered_clue(state: GameState, clue_id: ClueId) -> bool:
    return clue_id in state.player_knowledge.discovered_clues


def get_discovered_clues(state: GameState) -> list[ClueId]:
    return list(state.player_knowledge.discovered_clues)


def can_make_accusation(state: GameState) -> bool:
    return len(state.player_knowledge.discovered_clues) >= MIN_CLUES_FOR_ACCUSATION


def is_game_over(state: GameState) -> bool:
    return state.phase == GamePhase.RESOLUTION


def undiscovered_clues_here(state: GameState) -> list[Clue]:
    """Clues at the current location the player has not found yet."""
    if state.current_location is None:
        return []
    return [
        clue
        for clue in get_clues_at_location(state.case, state.current_location)
        if not has_discovered_clue(state, clue.id)
    ]


def current_testimony(state: GameState) -> Testimony | None:
    if state.interrogation is None:
        return None
    return state.testimonies.get(state.interrogation.suspect_id)


def current_statement(state: GameState) -> Statement | None:
    """Statement under the interrogation cursor, if any."""
    testimony = current_testimony(state)
    if testimony is None or not testimony.statements:
        return None
    index = state.interrogation.current_statement_index  # type: ignore[union-attr]
    if 0 <= index < len(testimony.statements):
        return testimony.statements[index]
    return None
