"""Clue generation.

A case always gets the same skeleton: weapon evidence, a motive document,
an eyewitness placing the killer near the scene, a note on the killer's
behaviour and the forensic time of death. Innocents each get a clue that
clears them, some of them also get a refutable red herring, and a secret
relationship (if any) leaves a trail of letters. The list is shuffled so
discovery order says nothing about importance.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..domain.models import Clue, Location, Relationship, Suspect
from ..domain.types import ClueId, ClueSignificance, ClueType, MotiveType, WeaponType
from .random import RandomSource, create_random

logger = logging.getLogger(__name__)

# Skeleton clues that implicate the killer without being red herrings.
SKELETON_KILLER_CLUES = 4
CORROBORATION_SUFFIX = "-corroborate"


@dataclass(frozen=True)
class ClueGeneratorConfig:
    min_clues_pointing_to_killer: int = 3
    red_herring_count: int = 2


WEAPON_EVIDENCE_NAMES: dict[WeaponType, tuple[str, ...]] = {
    WeaponType.POISON: ("Poison Vial", "Empty Medicine Bottle", "Suspicious Powder"),
    WeaponType.KNIFE: ("Bloodied Blade", "Letter Opener", "Kitchen Knife"),
    WeaponType.BLUNT: ("Dented Candlestick", "Bronze Statue", "Heavy Paperweight"),
    WeaponType.FIREARM: ("Discharged Revolver", "Spent Shell Casing", "Gun Oil Residue"),
    WeaponType.STRANGULATION: ("Torn Silk Scarf", "Rope Fibers", "Ligature Marks"),
    WeaponType.PUSHED: ("Broken Railing", "Torn Fabric on Balcony", "Scuff Marks"),
}

MOTIVE_DOCUMENT_NAMES: dict[MotiveType, tuple[str, ...]] = {
    MotiveType.JEALOUSY: ("Love Letters", "Torn Photograph", "Private Diary"),
    MotiveType.GREED: ("Modified Will", "Insurance Policy", "Financial Records"),
    MotiveType.REVENGE: ("Threatening Letter", "Legal Documents", "Old Newspaper Clipping"),
    MotiveType.FEAR: ("Blackmail Note", "Incriminating Photographs", "Sealed Envelope"),
    MotiveType.HATRED: ("Bitter Correspondence", "Defaced Portrait", "Burned Letters"),
    MotiveType.PROTECTION: ("Secret Documents", "Hidden Evidence", "Coded Messages"),
    MotiveType.AMBITION: ("Business Contract", "Promotion Letter", "Partnership Agreement"),
}

RED_HERRING_NAMES: tuple[str, ...] = (
    "Suspicious Object",
    "Misplaced Item",
    "Circumstantial Evidence",
    "Misleading Clue",
    "Planted Evidence",
)

TIME_OF_DEATH_TEXT = "The victim died between 9:00 PM and 10:00 PM based on body temperature."


class _ClueIds:
    def __init__(self) -> None:
        self._next = 0

    def __call__(self) -> ClueId:
        clue_id = ClueId(f"clue-{self._next}")
        self._next += 1
        return clue_id


def generate_clues(
    killer: Suspect,
    victim: Suspect,
    others: Sequence[Suspect],
    motive: MotiveType,
    weapon: WeaponType,
    crime_scene: Location,
    all_locations: Sequence[Location],
    relationships: Sequence[Relationship],
    random: RandomSource,
    config: ClueGeneratorConfig | None = None,
) -> list[Clue]:
    """Emit the full, shuffled clue set for one case."""
    config = config or ClueGeneratorConfig()
    next_id = _ClueIds()
    clues: list[Clue] = []
    k = killer.first_name

    # Weapon evidence at the scene.
    name = random.pick(WEAPON_EVIDENCE_NAMES[weapon])
    description = _weapon_evidence_description(weapon, killer, random)
    clues.append(
        Clue(
            id=next_id(),
            type=ClueType.PHYSICAL,
            name=name,
            description=description,
            found_at=crime_scene.id,
            points_to=killer.id,
            significance=ClueSignificance.CRITICAL,
        )
    )

    # Motive document.
    name = random.pick(MOTIVE_DOCUMENT_NAMES[motive])
    description = _motive_document_description(motive, victim, killer, random)
    clues.append(
        Clue(
            id=next_id(),
            type=ClueType.DOCUMENTARY,
            name=name,
            description=description,
            found_at=random.pick(all_locations).id,
            points_to=killer.id,
            significance=ClueSignificance.CRITICAL,
        )
    )

    # Opportunity.
    clues.append(
        Clue(
            id=next_id(),
            type=ClueType.TESTIMONIAL,
            name="Witness Account",
            description=(
                f"Someone saw {k} near the {crime_scene.name} around the time of the murder."
            ),
            found_at=crime_scene.id,
            points_to=killer.id,
        )
    )

    clues.append(
        Clue(
            id=next_id(),
            type=ClueType.BEHAVIORAL,
            name="Suspicious Behavior",
            description=f"{k} was seen acting nervously after the body was discovered.",
            found_at=random.pick(all_locations).id,
            points_to=killer.id,
        )
    )

    clues.append(
        Clue(
            id=next_id(),
            type=ClueType.FORENSIC,
            name="Time of Death",
            description=TIME_OF_DEATH_TEXT,
            found_at=crime_scene.id,
            significance=ClueSignificance.CRITICAL,
        )
    )

    # Exonerating testimony for each innocent.
    for innocent in others:
        seen_in = random.pick(all_locations).name
        clues.append(
            Clue(
                id=next_id(),
                type=ClueType.TESTIMONIAL,
                name=f"{innocent.first_name}'s Alibi",
                description=(
                    f"Multiple witnesses confirm {innocent.first_name} was in the "
                    f"{seen_in} during the time of the murder."
                ),
                found_at=random.pick(all_locations).id,
                points_to=innocent.id,
            )
        )

    # Red herrings, each refuted by the target's alibi clue.
    shuffled_innocents = random.shuffle(others)
    for target in shuffled_innocents[: min(config.red_herring_count, len(shuffled_innocents))]:
        alibi_clue = next(
            (c for c in clues if c.points_to == target.id and c.type == ClueType.TESTIMONIAL),
            None,
        )
        clues.append(
            Clue(
                id=next_id(),
                type=ClueType.PHYSICAL,
                name=random.pick(RED_HERRING_NAMES),
                description=(
                    f"Evidence that initially seems to implicate {target.first_name}, "
                    "but doesn't hold up to scrutiny."
                ),
                found_at=crime_scene.id,
                points_to=target.id,
                is_red_herring=True,
                refuted_by=alibi_clue.id if alibi_clue else None,
                significance=ClueSignificance.MINOR,
            )
        )

    # Letters betraying the first secret relationship.
    secret = next((r for r in relationships if not r.is_public_knowledge), None)
    if secret is not None:
        private_locations = [loc for loc in all_locations if not loc.is_public]
        hidden_at = random.pick(private_locations or all_locations)
        clues.append(
            Clue(
                id=next_id(),
                type=ClueType.DOCUMENTARY,
                name="Hidden Correspondence",
                description=f"Letters revealing a secret {secret.type.value} relationship.",
                found_at=hidden_at.id,
            )
        )

    shuffled = random.shuffle(clues)

    # Corroborating clues draw from their own stream so the shared one keeps
    # the same sequence at every difficulty.
    extra = config.min_clues_pointing_to_killer - SKELETON_KILLER_CLUES
    if extra > 0:
        corroborate = create_random(f"{random.get_seed()}{CORROBORATION_SUFFIX}")
        for clue in _corroborating_clues(
            extra, killer, victim, crime_scene, all_locations, corroborate, next_id
        ):
            shuffled.insert(corroborate.random_int(0, len(shuffled)), clue)

    logger.debug(
        "Generated %d clues (%d red herrings)",
        len(shuffled),
        sum(c.is_red_herring for c in shuffled),
    )
    return shuffled


def _corroborating_clues(
    count: int,
    killer: Suspect,
    victim: Suspect,
    crime_scene: Location,
    all_locations: Sequence[Location],
    random: RandomSource,
    next_id: _ClueIds,
) -> list[Clue]:
    """Additional genuine clues against the killer, for easier cases."""
    k, v, scene = killer.first_name, victim.first_name, crime_scene.name
    bank = (
        (
            ClueType.PHYSICAL,
            "Muddy Footprints",
            f"Footprints leading away from the {scene} match a pair of shoes belonging to {k}.",
        ),
        (
            ClueType.TESTIMONIAL,
            "Overheard Argument",
            f"A maid overheard {k} quarrelling bitterly with {v} earlier that evening.",
        ),
        (
            ClueType.BEHAVIORAL,
            "Burned Papers",
            f"{k} was seen feeding papers into the fireplace shortly after the murder.",
        ),
        (
            ClueType.DOCUMENTARY,
            "Appointment Card",
            f"A card in {k}'s handwriting arranging to meet {v} in the {scene} at nine.",
        ),
    )
    chosen = random.shuffle(bank)[: min(count, len(bank))]
    return [
        Clue(
            id=next_id(),
            type=clue_type,
            name=name,
            description=description,
            found_at=random.pick(all_locations).id,
            points_to=killer.id,
        )
        for clue_type, name, description in chosen
    ]


def _weapon_evidence_description(
    weapon: WeaponType, killer: Suspect, random: RandomSource
) -> str:
    descriptions: dict[WeaponType, tuple[str, ...]] = {
        WeaponType.POISON: (
            "An empty vial with traces of arsenic. The label has been torn off, "
            f"but the style matches bottles in {killer.first_name}'s possession.",
            "A small glass container that once held a deadly substance. "
            "Fingerprint analysis might prove useful.",
        ),
        WeaponType.KNIFE: (
            "A blade stained with the victim's blood. The handle bears an unusual marking.",
            "A sharp implement found near the body. "
            "It appears to have been wiped clean, but traces remain.",
        ),
        WeaponType.BLUNT: (
            "A heavy object bearing blood and hair. It was clearly used with considerable force.",
            "The murder weapon, carelessly discarded. "
            "Forensic examination may reveal the killer's identity.",
        ),
        WeaponType.FIREARM: (
            "A revolver with one bullet missing from the chamber. Recently fired.",
            "Shell casings found at the scene. The gun itself may still be in the house.",
        ),
        WeaponType.STRANGULATION: (
            "Fabric fibers found under the victim's fingernails, torn during the struggle.",
            "A distinctive pattern of bruising on the victim's neck "
            "suggests a specific type of ligature.",
        ),
        WeaponType.PUSHED: (
            "The railing shows signs of a struggle. Someone was pushed with great force.",
            "Fabric caught on a nail near the balcony edge. "
            "The victim grabbed at something, or someone.",
        ),
    }
    return random.pick(descriptions[weapon])


def _motive_document_description(
    motive: MotiveType, victim: Suspect, killer: Suspect, random: RandomSource
) -> str:
    k, v = killer.first_name, victim.first_name
    descriptions: dict[MotiveType, tuple[str, ...]] = {
        MotiveType.JEALOUSY: (
            f"Documents revealing {k}'s jealousy over {v}'s romantic entanglements.",
            f"Evidence of a love triangle that drove {k} to desperate measures.",
        ),
        MotiveType.GREED: (
            f"Papers showing {k} stood to inherit a fortune upon {v}'s death.",
            f"Financial documents revealing {k} was about to be cut out of the will.",
        ),
        MotiveType.REVENGE: (
            f"Letters documenting a past wrong that {k} could never forgive.",
            "Evidence of an old betrayal that festered into murderous rage.",
        ),
        MotiveType.FEAR: (
            f"{v} had discovered something about {k} that could destroy them.",
            f"Blackmail materials showing {k} was being threatened with exposure.",
        ),
        MotiveType.HATRED: (
            f"A long history of animosity between {k} and the victim, documented in bitter letters.",
            "Evidence of a deep-seated hatred that finally boiled over.",
        ),
        MotiveType.PROTECTION: (
            f"Documents showing {k} killed to protect someone else, or a terrible secret.",
            f"{v} was about to expose something that would harm someone {k} loves.",
        ),
        MotiveType.AMBITION: (
            f"{v} was standing in the way of {k}'s advancement.",
            f"Business documents showing {k} would gain power or position from the death.",
        ),
    }
    return random.pick(descriptions[motive])
