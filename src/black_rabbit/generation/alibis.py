"""Alibi generation for every living suspect.

Innocent suspects get a truthful, verifiable alibi in a public room. The
killer's alibi is always false and unverifiable, built with one of four
strategies so the lie does not always look the same.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..domain.models import Alibi, Location, Suspect
from ..domain.types import SuspectId, TimeSlot
from .random import RandomSource

logger = logging.getLogger(__name__)

WEAK_ALIBI_CHANCE = 0.2

ACTIVITIES: tuple[str, ...] = (
    "was having a conversation",
    "was reading by the fire",
    "was playing cards",
    "was admiring the paintings",
    "was engaged in discussion",
    "was enjoying a drink",
    "was waiting for dinner",
)


class KillerAlibiStrategy(str, Enum):
    NO_WITNESSES = "no_witnesses"
    UNRELIABLE_WITNESS = "unreliable_witness"
    PARTIAL_ALIBI = "partial_alibi"
    CONFLICTING_TIMES = "conflicting_times"


def generate_alibis(
    killer: Suspect,
    victim: Suspect,
    others: Sequence[Suspect],
    locations: Sequence[Location],
    time_of_death: TimeSlot,
    random: RandomSource,
) -> list[Alibi]:
    """One alibi per living suspect, returned in shuffled order."""
    alibis: list[Alibi] = []
    public_locations = [loc for loc in locations if loc.is_public]
    private_locations = [loc for loc in locations if not loc.is_public]
    all_suspects = [killer, *others]
    # Every case has public rooms in practice; fall back rather than fail.
    innocent_rooms = public_locations or list(locations)

    strategy = random.pick(tuple(KillerAlibiStrategy))
    logger.debug("Killer alibi strategy: %s", strategy.value)

    for innocent in others:
        location = random.pick(innocent_rooms)
        witnesses = _select_witnesses(innocent.id, all_suspects, random)

        if random.random() < WEAK_ALIBI_CHANCE:
            witnesses = witnesses[:1]
            description = _weak_alibi_description(innocent, location, witnesses, random)
        else:
            description = _alibi_description(innocent, location, witnesses, random)

        alibis.append(
            Alibi(
                suspect_id=innocent.id,
                time_slot=time_of_death,
                location=location.id,
                description=description,
                witnesses=tuple(w.id for w in witnesses),
                is_verifiable=True,
                is_false=False,
            )
        )

    alibis.append(
        _killer_alibi(
            killer, others, public_locations, private_locations, time_of_death, strategy, random
        )
    )

    return random.shuffle(alibis)


def _killer_alibi(
    killer: Suspect,
    others: Sequence[Suspect],
    public_locations: list[Location],
    private_locations: list[Location],
    time_of_death: TimeSlot,
    strategy: KillerAlibiStrategy,
    random: RandomSource,
) -> Alibi:
    witnesses: list[SuspectId] = []

    if strategy is KillerAlibiStrategy.UNRELIABLE_WITNESS:
        location = random.pick(public_locations or private_locations)
        fake_witness = random.pick(others)
        description = _unreliable_witness_description(killer, location, fake_witness, random)
        witnesses = [fake_witness.id]
    elif strategy is KillerAlibiStrategy.PARTIAL_ALIBI:
        location = random.pick(public_locations or private_locations)
        seen_by = _select_witnesses(killer.id, [killer, *others], random)
        description = _partial_alibi_description(killer, location, seen_by, random)
        witnesses = [w.id for w in seen_by]
    elif strategy is KillerAlibiStrategy.CONFLICTING_TIMES:
        location = random.pick(private_locations or public_locations)
        description = _conflicting_times_description(killer, location, random)
    else:
        location = random.pick(private_locations or public_locations)
        description = _false_alibi_description(killer, location, random)

    return Alibi(
        suspect_id=killer.id,
        time_slot=time_of_death,
        location=location.id,
        description=description,
        witnesses=tuple(witnesses),
        is_verifiable=False,
        is_false=True,
    )


def _select_witnesses(
    exclude_id: SuspectId, all_suspects: Sequence[Suspect], random: RandomSource
) -> list[Suspect]:
    """One or two living suspects other than ``exclude_id``."""
    candidates = [s for s in all_suspects if s.id != exclude_id and not s.is_victim]
    count = random.random_int(1, min(2, len(candidates)))
    return random.shuffle(candidates)[:count]


# -- Descriptions -------------------------------------------------------------


def _alibi_description(
    suspect: Suspect, location: Location, witnesses: Sequence[Suspect], random: RandomSource
) -> str:
    activity = random.pick(ACTIVITIES)
    if not witnesses:
        return f"{suspect.first_name} claims to have been in the {location.name}, {activity}."
    names = " and ".join(w.first_name for w in witnesses)
    return f"{suspect.first_name} was in the {location.name}, {activity}. {names} can confirm this."


def _weak_alibi_description(
    suspect: Suspect, location: Location, witnesses: Sequence[Suspect], random: RandomSource
) -> str:
    name = suspect.first_name
    room = location.name
    witness = witnesses[0].first_name if witnesses else None
    return random.pick(
        (
            f"{name} was seen briefly in the {room}, though the exact time is unclear.",
            f"{name} claims to have been in the {room}. "
            f"{witness or 'Someone'} thinks they may have seen them there.",
            f"{name} says they were in the {room}, reading. "
            f"{witness or 'A witness'} recalls seeing them, but can't be certain of the time.",
            f"{name} was in the {room} for part of the evening, according to "
            f"{witness or 'a witness'}, who was somewhat distracted.",
        )
    )


def _false_alibi_description(killer: Suspect, location: Location, random: RandomSource) -> str:
    name = killer.first_name
    room = location.name
    where = "their room" if room == "Guest Bedroom" else f"the {room}"
    return random.pick(
        (
            f"{name} claims to have been alone in {where}, resting.",
            f"{name} says they were in the {room}, but no one can confirm this.",
            f"{name} insists they were freshening up in their quarters.",
            f"{name} claims to have stepped outside for some air.",
            f"{name} says they were in the {room} making a private telephone call.",
        )
    )


def _unreliable_witness_description(
    killer: Suspect, location: Location, witness: Suspect, random: RandomSource
) -> str:
    name = killer.first_name
    room = location.name
    w = witness.first_name
    return random.pick(
        (
            f"{name} claims {w} saw them in the {room}. "
            f"However, {w} had been drinking heavily that evening.",
            f"{name} says they were with {w} in the {room}, "
            f"but {w}'s memory of the evening is hazy.",
            f"{name} insists {w} can vouch for them, "
            f"though {w} seems oddly reluctant to confirm the details.",
            f"{name} claims {w} saw them in the {room}. "
            f"{w} agrees, but their account has some inconsistencies.",
        )
    )


def _partial_alibi_description(
    killer: Suspect, location: Location, witnesses: Sequence[Suspect], random: RandomSource
) -> str:
    name = killer.first_name
    room = location.name
    w = witnesses[0].first_name if witnesses else "Others"
    return random.pick(
        (
            f"{name} was seen in the {room} earlier in the evening by {w}, "
            "but stepped out for a while around the time of the murder.",
            f"{w} saw {name} in the {room} before dinner, but not during the critical hour.",
            f"{name} arrived at the {room} late, claiming to have been delayed. "
            f"{w} can only confirm their presence after the fact.",
            f"{name} was in the {room} with {w}, "
            "but excused themselves for about twenty minutes during the evening.",
        )
    )


def _conflicting_times_description(
    killer: Suspect, location: Location, random: RandomSource
) -> str:
    name = killer.first_name
    room = location.name
    return random.pick(
        (
            f"{name} claims to have been in the {room} from 8 until 10, "
            "but the grandfather clock there stopped at 9:15.",
            f"{name} says they were in the {room} all evening, "
            "but a servant recalls seeing the room empty around 9 o'clock.",
            f"{name} insists they never left the {room}, "
            "yet their shoes show traces of garden mud.",
            f"{name} claims they were reading in the {room}, "
            "but the book they mention wasn't published until next year.",
            f"{name} says they heard the clock strike nine from the {room}, "
            "but that clock has been broken for weeks.",
        )
    )
