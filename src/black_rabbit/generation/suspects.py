"""Suspect generation and victim/killer assignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..data.names import DESCRIPTIONS, FIRST_NAMES, LAST_NAMES, OCCUPATIONS
from ..domain.models import Suspect
from ..domain.types import PersonalityTraits, SuspectId
from .random import RandomSource

logger = logging.getLogger(__name__)

MIN_SUSPECTS = 3


class SuspectCountError(ValueError):
    """Raised when a cast is too small to hold a victim, a killer and a bystander."""


@dataclass(frozen=True)
class VictimKillerSplit:
    victim: Suspect
    killer: Suspect
    others: tuple[Suspect, ...]


def generate_suspects(count: int, random: RandomSource) -> list[Suspect]:
    """Draw ``count`` suspects from the shuffled name pools.

    Pools are assigned round-robin, so large casts repeat occupations and
    descriptions. A repeated full name is noted in ``used_names`` under an
    alternate surname, but the suspect keeps the colliding name.
    """
    used_names: set[str] = set()
    suspects: list[Suspect] = []

    first_names = random.shuffle(FIRST_NAMES)
    last_names = random.shuffle(LAST_NAMES)
    occupations = random.shuffle(OCCUPATIONS)
    descriptions = random.shuffle(DESCRIPTIONS)

    for i in range(count):
        first_name = first_names[i % len(first_names)]
        last_name = last_names[i % len(last_names)]
        full_name = f"{first_name} {last_name}"

        if full_name in used_names:
            alt_last_name = last_names[(i + 1) % len(last_names)]
            used_names.add(f"{first_name} {alt_last_name}")
            logger.debug("Duplicate suspect name %s at index %d", full_name, i)
        else:
            used_names.add(full_name)

        occupation = occupations[i % len(occupations)]
        description = descriptions[i % len(descriptions)]
        personality = _generate_personality(random)
        age = random.random_int(25, 70)

        suspects.append(
            Suspect(
                id=SuspectId(f"suspect-{i}"),
                first_name=first_name,
                last_name=last_name,
                occupation=occupation.title,
                age=age,
                description=f"{description} {occupation.description}",
                personality=personality,
            )
        )

    return suspects


def _generate_personality(random: RandomSource) -> PersonalityTraits:
    return PersonalityTraits(
        honesty=random.random(),
        composure=random.random(),
        aggression=random.random(),
        observance=random.random(),
    )


def assign_victim_and_killer(
    suspects: list[Suspect], random: RandomSource
) -> VictimKillerSplit:
    """Pick two distinct suspects as victim and killer.

    The remaining suspects are shuffled so that their order says nothing
    about who was chosen.
    """
    if len(suspects) < MIN_SUSPECTS:
        raise SuspectCountError(
            f"Need at least {MIN_SUSPECTS} suspects to assign victim and killer, "
            f"got {len(suspects)}"
        )

    last = len(suspects) - 1
    victim_index = random.random_int(0, last)
    killer_index = random.random_int(0, last)
    while killer_index == victim_index:
        killer_index = random.random_int(0, last)

    victim = suspects[victim_index].model_copy(update={"is_victim": True})
    killer = suspects[killer_index].model_copy(update={"is_killer": True})
    others = [
        s for i, s in enumerate(suspects) if i not in (victim_index, killer_index)
    ]

    return VictimKillerSplit(
        victim=victim,
        killer=killer,
        others=tuple(random.shuffle(others)),
    )
