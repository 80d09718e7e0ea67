"""Immutable domain entities of a case.

Every model is frozen; "updating" one means ``model_copy(update=...)``.
Field aliases follow the camelCase names used in saved games so that a
``model_dump(by_alias=True)`` can be written straight to disk.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .types import (
    ClueId,
    ClueSignificance,
    ClueType,
    LocationId,
    PersonalityTraits,
    RelationshipType,
    SuspectId,
    TimeSlot,
)

SENTIMENT_MIN = -10
SENTIMENT_MAX = 10


class Suspect(BaseModel):
    id: SuspectId
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    occupation: str
    age: int
    description: str
    personality: PersonalityTraits
    is_victim: bool = Field(False, alias="isVictim")
    is_killer: bool = Field(False, alias="isKiller")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Location(BaseModel):
    id: LocationId
    name: str
    description: str
    is_public: bool = Field(True, alias="isPublic")
    is_crime_scene: bool = Field(False, alias="isCrimeScene")

    model_config = {"populate_by_name": True, "frozen": True}


class Relationship(BaseModel):
    """Directed edge ``from_ -> to``; opposite edges are kept as separate edges."""

    from_: SuspectId = Field(alias="from")
    to: SuspectId
    type: RelationshipType
    sentiment: int = Field(description="-10 (hatred) to +10 (devoted)")
    is_public_knowledge: bool = Field(True, alias="isPublicKnowledge")
    secret_reason: str | None = Field(None, alias="secretReason")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("sentiment")
    @classmethod
    def _clamp_sentiment(cls, value: int) -> int:
        return max(SENTIMENT_MIN, min(SENTIMENT_MAX, value))

    def involves(self, suspect_id: SuspectId) -> bool:
        return self.from_ == suspect_id or self.to == suspect_id

    def connects(self, a: SuspectId, b: SuspectId) -> bool:
        """True if this edge joins ``a`` and ``b`` in either direction."""
        return (self.from_ == a and self.to == b) or (self.from_ == b and self.to == a)


class Alibi(BaseModel):
    suspect_id: SuspectId = Field(alias="suspectId")
    time_slot: TimeSlot = Field(alias="timeSlot")
    location: LocationId
    description: str
    witnesses: tuple[SuspectId, ...] = ()
    is_verifiable: bool = Field(True, alias="isVerifiable")
    is_false: bool = Field(False, alias="isFalse")

    model_config = {"populate_by_name": True, "frozen": True}


class Clue(BaseModel):
    id: ClueId
    type: ClueType
    name: str
    description: str
    found_at: LocationId = Field(alias="foundAt")
    points_to: SuspectId | None = Field(None, alias="pointsTo")
    is_red_herring: bool = Field(False, alias="isRedHerring")
    refuted_by: ClueId | None = Field(
        None, alias="refutedBy", description="For red herrings: the clue proving it false"
    )
    significance: ClueSignificance = ClueSignificance.NORMAL

    model_config = {"populate_by_name": True, "frozen": True}


# -- Predicates ---------------------------------------------------------------

_RELATIONSHIP_DESCRIPTIONS: dict[RelationshipType, str] = {
    RelationshipType.SPOUSE: "married to",
    RelationshipType.EX_SPOUSE: "formerly married to",
    RelationshipType.LOVER: "romantically involved with",
    RelationshipType.EX_LOVER: "formerly involved with",
    RelationshipType.SIBLING: "sibling of",
    RelationshipType.PARENT: "parent of",
    RelationshipType.CHILD: "child of",
    RelationshipType.FRIEND: "friend of",
    RelationshipType.RIVAL: "rival of",
    RelationshipType.ENEMY: "enemy of",
    RelationshipType.BUSINESS_PARTNER: "business partner of",
    RelationshipType.EMPLOYEE: "employed by",
    RelationshipType.EMPLOYER: "employer of",
    RelationshipType.ACQUAINTANCE: "acquaintance of",
}


def is_hostile(relationship: Relationship) -> bool:
    return relationship.sentiment < 0


def is_positive(relationship: Relationship) -> bool:
    return relationship.sentiment > 0


def is_secret_relationship(relationship: Relationship) -> bool:
    return not relationship.is_public_knowledge


def relationship_description(relationship: Relationship) -> str:
    """Phrase such as ``"married to"`` for use in prose."""
    return _RELATIONSHIP_DESCRIPTIONS[relationship.type]


def has_witnesses(alibi: Alibi) -> bool:
    return len(alibi.witnesses) > 0


def can_be_verified(alibi: Alibi) -> bool:
    return alibi.is_verifiable and not alibi.is_false


def is_physical_evidence(clue: Clue) -> bool:
    return clue.type == ClueType.PHYSICAL


def is_testimony(clue: Clue) -> bool:
    return clue.type == ClueType.TESTIMONIAL


def points_to_suspect(clue: Clue, suspect_id: SuspectId) -> bool:
    return clue.points_to == suspect_id


def is_private_location(location: Location) -> bool:
    return not location.is_public
