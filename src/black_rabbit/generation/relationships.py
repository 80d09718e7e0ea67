"""Relationship graph between the suspects of a case.

The graph is built in four passes, each drawing from the shared stream in a
fixed order:

1. one killer -> victim edge whose type fits the motive,
2. two or three hostile red-herring edges from bystanders to the victim,
3. filler edges until everybody has ``min_connections_per_person`` edges,
4. one or two secret edges between pairs that were not yet related.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..domain.models import Relationship, Suspect
from ..domain.types import MotiveType, RelationshipType, SuspectId
from .random import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONNECTIONS = 2

# Relationship kinds that can plausibly carry a motive for murder.
MOTIVE_RELATIONSHIPS: tuple[RelationshipType, ...] = (
    RelationshipType.SPOUSE,
    RelationshipType.EX_SPOUSE,
    RelationshipType.LOVER,
    RelationshipType.EX_LOVER,
    RelationshipType.SIBLING,
    RelationshipType.BUSINESS_PARTNER,
    RelationshipType.RIVAL,
    RelationshipType.ENEMY,
)

ALL_RELATIONSHIPS: tuple[RelationshipType, ...] = tuple(RelationshipType)

SECRET_RELATIONSHIPS: tuple[RelationshipType, ...] = (
    RelationshipType.LOVER,
    RelationshipType.EX_LOVER,
    RelationshipType.BUSINESS_PARTNER,
)

MOTIVE_TO_RELATIONSHIPS: dict[MotiveType, tuple[RelationshipType, ...]] = {
    MotiveType.JEALOUSY: (
        RelationshipType.SPOUSE,
        RelationshipType.LOVER,
        RelationshipType.EX_LOVER,
        RelationshipType.SIBLING,
    ),
    MotiveType.GREED: (
        RelationshipType.SIBLING,
        RelationshipType.CHILD,
        RelationshipType.SPOUSE,
        RelationshipType.BUSINESS_PARTNER,
    ),
    MotiveType.REVENGE: (
        RelationshipType.ENEMY,
        RelationshipType.EX_SPOUSE,
        RelationshipType.EX_LOVER,
        RelationshipType.RIVAL,
    ),
    MotiveType.FEAR: (
        RelationshipType.EMPLOYEE,
        RelationshipType.BUSINESS_PARTNER,
        RelationshipType.ACQUAINTANCE,
    ),
    MotiveType.HATRED: (
        RelationshipType.ENEMY,
        RelationshipType.RIVAL,
        RelationshipType.SIBLING,
    ),
    MotiveType.PROTECTION: (
        RelationshipType.PARENT,
        RelationshipType.SPOUSE,
        RelationshipType.FRIEND,
    ),
    MotiveType.AMBITION: (
        RelationshipType.EMPLOYEE,
        RelationshipType.BUSINESS_PARTNER,
        RelationshipType.RIVAL,
    ),
}

_SECRET_REASONS: dict[RelationshipType, tuple[str, ...]] = {
    RelationshipType.LOVER: (
        "An affair hidden from their spouses",
        "A secret romance that would scandalize society",
        "A forbidden relationship kept from the family",
    ),
    RelationshipType.EX_LOVER: (
        "A past affair no one knows about",
        "A relationship that ended badly and was covered up",
    ),
    RelationshipType.BUSINESS_PARTNER: (
        "A secret business deal gone wrong",
        "An undisclosed financial arrangement",
        "A hidden investment that failed",
    ),
}
_DEFAULT_SECRET_REASONS = ("A secret connection hidden from others",)

_MOTIVE_DESCRIPTIONS: dict[MotiveType, str] = {
    MotiveType.JEALOUSY: "consumed by jealousy",
    MotiveType.GREED: "driven by greed",
    MotiveType.REVENGE: "seeking revenge",
    MotiveType.FEAR: "acting out of fear",
    MotiveType.HATRED: "filled with hatred",
    MotiveType.PROTECTION: "protecting someone or something",
    MotiveType.AMBITION: "ruthlessly ambitious",
}


def generate_relationship_graph(
    victim: Suspect,
    killer: Suspect,
    others: Sequence[Suspect],
    motive: MotiveType,
    random: RandomSource,
    min_connections_per_person: int = DEFAULT_MIN_CONNECTIONS,
) -> list[Relationship]:
    """Build the directed relationship multigraph for one case."""
    relationships: list[Relationship] = []
    all_suspects = [victim, killer, *others]

    # 1. The motive-bearing edge.
    relationships.append(
        Relationship(
            from_=killer.id,
            to=victim.id,
            type=relationship_for_motive(motive, random),
            sentiment=random.random_int(-10, -6),
            is_public_knowledge=random.random() > 0.4,
        )
    )

    # 2. Red herrings pointing at the victim.
    red_herring_count = random.random_int(2, min(3, len(others)))
    shuffled_others = random.shuffle(others)
    for suspect in shuffled_others[: min(red_herring_count, len(shuffled_others))]:
        rel_type = random.pick(MOTIVE_RELATIONSHIPS)
        sentiment = random.random_int(-8, -3)
        relationships.append(
            Relationship(
                from_=suspect.id,
                to=victim.id,
                type=rel_type,
                sentiment=sentiment,
                is_public_knowledge=random.random() > 0.3,
            )
        )

    # 3. Connectivity.
    connection_count: dict[SuspectId, int] = {s.id: 0 for s in all_suspects}
    for rel in relationships:
        connection_count[rel.from_] = connection_count.get(rel.from_, 0) + 1
        connection_count[rel.to] = connection_count.get(rel.to, 0) + 1

    for suspect in all_suspects:
        current = connection_count.get(suspect.id, 0)
        if current >= min_connections_per_person:
            continue
        needed = min_connections_per_person - current

        candidates = [
            s
            for s in all_suspects
            if s.id != suspect.id and not _has_edge(relationships, suspect.id, s.id)
        ]
        shuffled_candidates = random.shuffle(candidates)

        for other in shuffled_candidates[: min(needed, len(shuffled_candidates))]:
            rel_type = random.pick(ALL_RELATIONSHIPS)
            sentiment = random.random_int(-5, 8)
            relationships.append(
                Relationship(
                    from_=suspect.id,
                    to=other.id,
                    type=rel_type,
                    sentiment=sentiment,
                    is_public_knowledge=random.random() > 0.2,
                )
            )
            connection_count[suspect.id] = connection_count.get(suspect.id, 0) + 1
            connection_count[other.id] = connection_count.get(other.id, 0) + 1

    # 4. Secrets.
    secret_count = random.random_int(1, 2)
    for _ in range(secret_count):
        person1, person2 = random.shuffle(all_suspects)[:2]
        if _has_edge(relationships, person1.id, person2.id):
            logger.debug(
                "Skipping secret edge %s <-> %s: already related", person1.id, person2.id
            )
            continue
        rel_type = random.pick(SECRET_RELATIONSHIPS)
        sentiment = random.random_int(-3, 7)
        relationships.append(
            Relationship(
                from_=person1.id,
                to=person2.id,
                type=rel_type,
                sentiment=sentiment,
                is_public_knowledge=False,
                secret_reason=_secret_reason(rel_type, random),
            )
        )

    return relationships


def _has_edge(relationships: Sequence[Relationship], a: SuspectId, b: SuspectId) -> bool:
    return any(rel.connects(a, b) for rel in relationships)


def relationship_for_motive(motive: MotiveType, random: RandomSource) -> RelationshipType:
    """Pick a relationship kind that could carry ``motive``."""
    return random.pick(MOTIVE_TO_RELATIONSHIPS[motive])


def _secret_reason(rel_type: RelationshipType, random: RandomSource) -> str:
    return random.pick(_SECRET_REASONS.get(rel_type, _DEFAULT_SECRET_REASONS))


def motive_description(motive: MotiveType) -> str:
    return _MOTIVE_DESCRIPTIONS[motive]
