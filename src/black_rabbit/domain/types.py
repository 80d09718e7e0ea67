"""Identifier types, enums and small value types shared by the domain."""

from __future__ import annotations

from enum import Enum
from typing import NewType

from pydantic import BaseModel, Field

SuspectId = NewType("SuspectId", str)
ClueId = NewType("ClueId", str)
LocationId = NewType("LocationId", str)
StatementId = NewType("StatementId", str)


class RelationshipType(str, Enum):
    SPOUSE = "spouse"
    EX_SPOUSE = "ex_spouse"
    LOVER = "lover"
    EX_LOVER = "ex_lover"
    SIBLING = "sibling"
    PARENT = "parent"
    CHILD = "child"
    FRIEND = "friend"
    RIVAL = "rival"
    ENEMY = "enemy"
    BUSINESS_PARTNER = "business_partner"
    EMPLOYEE = "employee"
    EMPLOYER = "employer"
    ACQUAINTANCE = "acquaintance"


class MotiveType(str, Enum):
    JEALOUSY = "jealousy"
    GREED = "greed"
    REVENGE = "revenge"
    FEAR = "fear"
    HATRED = "hatred"
    PROTECTION = "protection"  # protecting someone else, or a secret
    AMBITION = "ambition"


class ClueType(str, Enum):
    PHYSICAL = "physical"
    TESTIMONIAL = "testimonial"
    DOCUMENTARY = "documentary"
    BEHAVIORAL = "behavioral"
    FORENSIC = "forensic"


class WeaponType(str, Enum):
    POISON = "poison"
    KNIFE = "knife"
    BLUNT = "blunt"
    FIREARM = "firearm"
    STRANGULATION = "strangulation"
    PUSHED = "pushed"


class ClueSignificance(str, Enum):
    MINOR = "minor"
    NORMAL = "normal"
    CRITICAL = "critical"


class GamePhase(str, Enum):
    INTRO = "intro"
    INVESTIGATION = "investigation"
    ACCUSATION = "accusation"
    RESOLUTION = "resolution"


class ConnectionType(str, Enum):
    """Edge colours a player can draw on the case board."""

    SUSPICION = "suspicion"
    ALIBI = "alibi"
    QUESTION = "question"
    CONFIRMED = "confirmed"


class TimeSlot(BaseModel):
    hour: int = Field(ge=0, le=23)
    label: str

    model_config = {"frozen": True}


def create_time_slot(hour: int) -> TimeSlot:
    """Build a slot labelled on a 12-hour clock, e.g. ``21 -> "9:00 PM"``."""
    if hour > 12:
        display_hour = hour - 12
    elif hour == 0:
        display_hour = 12
    else:
        display_hour = hour
    period = "PM" if hour >= 12 else "AM"
    return TimeSlot(hour=hour, label=f"{display_hour}:00 {period}")


class PersonalityTraits(BaseModel):
    """Four independent scalars in ``[0, 1]``; descriptive only."""

    honesty: float = Field(ge=0.0, le=1.0, description="How forthcoming under questioning")
    composure: float = Field(ge=0.0, le=1.0, description="How well emotions are hidden")
    aggression: float = Field(ge=0.0, le=1.0, description="How hostile when pressed")
    observance: float = Field(ge=0.0, le=1.0, description="Quality of memories and alibis")

    model_config = {"frozen": True}
