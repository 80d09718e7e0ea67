"""Interrogation testimony derived from a finished case.

Each living suspect gets up to four statements, always in this order:
alibi, relationship to the victim, observation, self. Only the killer lies
about the alibi, observations and self; anyone hiding a secret relationship
with the victim lies about that too. A lie lists the clues that contradict
it, which is what makes it objectionable during play.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from pydantic import BaseModel, Field

from ..domain.case import Case, get_killer, get_location_by_id, get_suspect, get_victim
from ..domain.models import Alibi, Relationship, Suspect, relationship_description
from ..domain.types import ClueId, ClueSignificance, ClueType, StatementId, SuspectId
from ..generation.random import RandomSource

HOSTILE_SENTIMENT = -3


class StatementTopic(str, Enum):
    ALIBI = "alibi"
    VICTIM = "victim"
    RELATIONSHIPS = "relationships"
    OBSERVATIONS = "observations"
    SELF = "self"


class Statement(BaseModel):
    id: StatementId
    suspect_id: SuspectId = Field(alias="suspectId")
    text: str
    topic: StatementTopic
    is_lie: bool = Field(alias="isLie")
    contradicted_by: tuple[ClueId, ...] = Field((), alias="contradictedBy")
    press_response: str = Field(alias="pressResponse")
    truth_reveal: str | None = Field(None, alias="truthReveal")

    model_config = {"populate_by_name": True, "frozen": True}


class Testimony(BaseModel):
    suspect_id: SuspectId = Field(alias="suspectId")
    statements: tuple[Statement, ...]

    model_config = {"populate_by_name": True, "frozen": True}


_KILLER_OBSERVATIONS: tuple[tuple[str, str], ...] = (
    (
        "I didn't see anything unusual that evening. Everything seemed perfectly normal.",
        "I was... preoccupied. I wasn't paying attention to others.",
    ),
    (
        "I kept to myself most of the evening. I'm afraid I can't help you.",
        "I don't make it a habit to spy on others. I minded my own business.",
    ),
    (
        "The evening was unremarkable until we heard the scream. I was as shocked as everyone.",
        "What more do you want me to say? I didn't see who did it.",
    ),
    (
        "I was distracted all evening. Personal matters, you understand. I noticed nothing.",
        "My thoughts were elsewhere. The evening is a blur, honestly.",
    ),
    (
        "Everyone seemed normal to me. I had no reason to suspect anything was wrong.",
        "In hindsight, perhaps I should have paid more attention. But I didn't.",
    ),
)


def generate_testimonies(case: Case, random: RandomSource) -> dict[SuspectId, Testimony]:
    """Testimony for every living suspect, keyed by suspect id, in case order.

    Pass a fresh stream seeded with ``case.seed`` to get the same wording
    every time the case is loaded.
    """
    victim = get_victim(case)
    if victim is None:
        raise ValueError(f"Case {case.seed!r} has no victim")

    testimonies: dict[SuspectId, Testimony] = {}
    for suspect in case.suspects:
        if suspect.is_victim:
            continue
        alibi = next((a for a in case.alibis if a.suspect_id == suspect.id), None)
        relationships = [r for r in case.relationships if r.involves(suspect.id)]
        testimonies[suspect.id] = Testimony(
            suspect_id=suspect.id,
            statements=tuple(
                _suspect_statements(suspect, victim, alibi, relationships, case, random)
            ),
        )
    return testimonies


def _suspect_statements(
    suspect: Suspect,
    victim: Suspect,
    alibi: Alibi | None,
    relationships: list[Relationship],
    case: Case,
    random: RandomSource,
) -> list[Statement]:
    statements: list[Statement] = []

    def next_id() -> StatementId:
        return StatementId(f"{suspect.id}-stmt-{len(statements)}")

    if alibi is not None:
        statements.append(_alibi_statement(next_id(), suspect, alibi, case))

    victim_relationship = next((r for r in relationships if r.involves(victim.id)), None)
    if victim_relationship is not None:
        statements.append(
            _relationship_statement(next_id(), suspect, victim, victim_relationship, case)
        )

    statements.append(_observation_statement(next_id(), suspect, case, random))
    statements.append(_self_statement(next_id(), suspect, victim, case, random))
    return statements


def _alibi_statement(
    statement_id: StatementId, suspect: Suspect, alibi: Alibi, case: Case
) -> Statement:
    location = get_location_by_id(case, alibi.location)
    room = location.name if location else "somewhere"

    if alibi.is_false:
        contradicting = tuple(
            c.id
            for c in case.clues
            if c.points_to == suspect.id
            and not c.is_red_herring
            and c.type in (ClueType.TESTIMONIAL, ClueType.PHYSICAL)
        )
        return Statement(
            id=statement_id,
            suspect_id=suspect.id,
            text=f"I was in the {room} the entire evening. I never left.",
            topic=StatementTopic.ALIBI,
            is_lie=True,
            contradicted_by=contradicting,
            press_response=(
                "I'm quite certain. I was... resting. Alone, yes, but I was definitely there."
            ),
            truth_reveal=(
                f"...Fine. I wasn't in the {room} the whole time. "
                "But that doesn't mean I did anything wrong!"
            ),
        )

    witness_names = [
        witness.first_name
        for witness in (get_suspect(case, w) for w in alibi.witnesses)
        if witness is not None
    ]
    witnesses = " and ".join(witness_names)
    if witnesses:
        text = f"I was in the {room} during that time. {witnesses} can confirm this."
        press = f"Ask {witnesses} if you don't believe me. They'll tell you I was there."
    else:
        text = f"I was in the {room} during that time. I was alone, but I assure you I was there."
        press = "I know I can't prove it, but I swear I was there. I had no reason to leave."
    return Statement(
        id=statement_id,
        suspect_id=suspect.id,
        text=text,
        topic=StatementTopic.ALIBI,
        is_lie=False,
        press_response=press,
    )


def _relationship_statement(
    statement_id: StatementId,
    suspect: Suspect,
    victim: Suspect,
    relationship: Relationship,
    case: Case,
) -> Statement:
    v = victim.first_name

    if not relationship.is_public_knowledge:
        revealing = tuple(
            c.id
            for c in case.clues
            if c.type == ClueType.DOCUMENTARY and "relationship" in c.description.lower()
        )
        return Statement(
            id=statement_id,
            suspect_id=suspect.id,
            text=f"{v}? We were merely acquaintances. Nothing more.",
            topic=StatementTopic.RELATIONSHIPS,
            is_lie=True,
            contradicted_by=revealing,
            press_response="I don't know what you're implying. We barely knew each other.",
            truth_reveal=f"...Alright. {v} and I were... closer than I let on. But that's private!",
        )

    if relationship.sentiment < HOSTILE_SENTIMENT:
        return Statement(
            id=statement_id,
            suspect_id=suspect.id,
            text=f"{v} and I... didn't always see eye to eye. But I didn't kill them!",
            topic=StatementTopic.RELATIONSHIPS,
            is_lie=False,
            press_response=(
                f"Yes, we had our disagreements. {v} could be difficult. But murder? Never."
            ),
        )

    return Statement(
        id=statement_id,
        suspect_id=suspect.id,
        text=f"I was {relationship_description(relationship)} {v}. We got along well enough.",
        topic=StatementTopic.RELATIONSHIPS,
        is_lie=False,
        press_response="There's not much more to say. We had a normal relationship.",
    )


def _observation_statement(
    statement_id: StatementId, suspect: Suspect, case: Case, random: RandomSource
) -> Statement:
    if suspect.is_killer:
        scene = get_location_by_id(case, case.crime_scene)
        text, press = random.pick(_KILLER_OBSERVATIONS)
        return Statement(
            id=statement_id,
            suspect_id=suspect.id,
            text=text,
            topic=StatementTopic.OBSERVATIONS,
            is_lie=True,
            contradicted_by=tuple(
                c.id
                for c in case.clues
                if c.type == ClueType.TESTIMONIAL and c.points_to == suspect.id
            ),
            press_response=press,
            truth_reveal=(
                "Stop pressuring me! I... I may have been near the "
                f"{scene.name if scene else 'scene'}. But I didn't do anything!"
            ),
        )

    killer = get_killer(case)
    killer_name = killer.full_name if killer else "someone"
    observations = (
        "I thought I heard raised voices at one point, but I couldn't make out the words.",
        f"I noticed {killer_name} seemed distracted that evening.",
        "The atmosphere felt tense, but I attributed it to the usual family drama.",
        "I saw someone moving through the hallway, but it was too dark to tell who.",
    )
    return Statement(
        id=statement_id,
        suspect_id=suspect.id,
        text=random.pick(observations),
        topic=StatementTopic.OBSERVATIONS,
        is_lie=False,
        press_response="That's all I know. I wish I had paid more attention.",
    )


def _self_statement(
    statement_id: StatementId,
    suspect: Suspect,
    victim: Suspect,
    case: Case,
    random: RandomSource,
) -> Statement:
    v = victim.first_name

    if suspect.is_killer:
        denials = (
            (
                f"I had no reason to want {v} dead. None at all.",
                "Why would I? I had nothing to gain from this tragedy.",
            ),
            (
                f"{v} and I had our differences, but nothing worth killing over.",
                "You're looking for a motive that simply isn't there.",
            ),
            (
                f"I stood to lose more than anyone with {v} gone.",
                "Ask anyone. I had every reason to want them alive.",
            ),
        )
        text, press = random.pick(denials)
        return Statement(
            id=statement_id,
            suspect_id=suspect.id,
            text=text,
            topic=StatementTopic.SELF,
            is_lie=True,
            contradicted_by=tuple(
                c.id
                for c in case.clues
                if c.type == ClueType.DOCUMENTARY
                and c.points_to == suspect.id
                and c.significance == ClueSignificance.CRITICAL
            ),
            press_response=press,
            truth_reveal=(
                "...You found out about that? Fine. Yes, I had... reasons. "
                "But that doesn't prove I killed anyone!"
            ),
        )

    defenses = (
        "I know how this looks, but I'm innocent. Please believe me.",
        f"I may not have liked {v}, but I'm not a murderer.",
        "You're wasting time suspecting me. The real killer is still out there.",
        "I have nothing to hide. Ask me anything.",
    )
    return Statement(
        id=statement_id,
        suspect_id=suspect.id,
        text=random.pick(defenses),
        topic=StatementTopic.SELF,
        is_lie=False,
        press_response=(
            "I understand you have to investigate everyone. I just hope you find the truth."
        ),
    )


def check_contradiction(statement: Statement, clue_id: ClueId) -> bool:
    """True if presenting ``clue_id`` exposes ``statement`` as a lie."""
    return clue_id in statement.contradicted_by


def is_contradictable(statement: Statement) -> bool:
    return statement.is_lie and len(statement.contradicted_by) > 0


def get_contradictable_statements(testimony: Testimony) -> list[Statement]:
    return [s for s in testimony.statements if is_contradictable(s)]


def count_contradictions(testimonies: Mapping[SuspectId, Testimony] | Iterable[Testimony]) -> int:
    """Number of statements across all testimony that evidence can contradict."""
    values = testimonies.values() if isinstance(testimonies, Mapping) else testimonies
    return sum(len(get_contradictable_statements(t)) for t in values)
