"""The Case aggregate and read-only queries over it."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .models import Alibi, Clue, Location, Relationship, Suspect
from .types import LocationId, MotiveType, SuspectId, TimeSlot, WeaponType


class Case(BaseModel):
    """A complete, generated murder case. Never mutated after generation."""

    seed: str
    suspects: tuple[Suspect, ...]
    relationships: tuple[Relationship, ...]
    locations: tuple[Location, ...]
    clues: tuple[Clue, ...]
    alibis: tuple[Alibi, ...]
    victim: SuspectId
    killer: SuspectId
    motive: MotiveType
    weapon: WeaponType
    crime_scene: LocationId = Field(alias="crimeScene")
    time_of_death: TimeSlot = Field(alias="timeOfDeath")

    model_config = {"populate_by_name": True, "frozen": True}


def get_suspect(case: Case, suspect_id: SuspectId) -> Suspect | None:
    return next((s for s in case.suspects if s.id == suspect_id), None)


def get_killer(case: Case) -> Suspect | None:
    return get_suspect(case, case.killer)


def get_victim(case: Case) -> Suspect | None:
    return get_suspect(case, case.victim)


def get_living_suspects(case: Case) -> tuple[Suspect, ...]:
    """Every suspect except the victim, in case order."""
    return tuple(s for s in case.suspects if not s.is_victim)


def get_clues_pointing_to(case: Case, suspect_id: SuspectId) -> tuple[Clue, ...]:
    return tuple(c for c in case.clues if c.points_to == suspect_id)


def is_case_solvable(case: Case) -> bool:
    """At least one genuine (non red herring) clue must implicate the killer."""
    return any(
        not clue.is_red_herring for clue in get_clues_pointing_to(case, case.killer)
    )


def get_alibi_for_suspect(case: Case, suspect_id: SuspectId) -> Alibi | None:
    return next((a for a in case.alibis if a.suspect_id == suspect_id), None)


def get_relationships_for_suspect(
    case: Case, suspect_id: SuspectId
) -> tuple[Relationship, ...]:
    return tuple(r for r in case.relationships if r.involves(suspect_id))


def get_location_by_id(case: Case, location_id: LocationId) -> Location | None:
    return next((loc for loc in case.locations if loc.id == location_id), None)


def get_clues_at_location(case: Case, location_id: LocationId) -> tuple[Clue, ...]:
    """Clues discoverable at ``location_id``, in case order."""
    return tuple(c for c in case.clues if c.found_at == location_id)
