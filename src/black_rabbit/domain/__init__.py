"""Domain model: identifiers, enums and immutable case entities."""

from .case import Case
from .models import Alibi, Clue, Location, Relationship, Suspect
from .types import (
    ClueId,
    ClueSignificance,
    ClueType,
    ConnectionType,
    GamePhase,
    LocationId,
    MotiveType,
    PersonalityTraits,
    RelationshipType,
    StatementId,
    SuspectId,
    TimeSlot,
    WeaponType,
    create_time_slot,
)

__all__ = [
    "Alibi",
    "Case",
    "Clue",
    "ClueId",
    "ClueSignificance",
    "ClueType",
    "ConnectionType",
    "GamePhase",
    "Location",
    "LocationId",
    "MotiveType",
    "PersonalityTraits",
    "Relationship",
    "RelationshipType",
    "StatementId",
    "Suspect",
    "SuspectId",
    "TimeSlot",
    "WeaponType",
    "create_time_slot",
]
