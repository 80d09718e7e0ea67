"""Case orchestrator: runs every generator over one shared random stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..data.locations import MANOR_LOCATIONS
from ..domain.case import Case, is_case_solvable
from ..domain.models import Location
from ..domain.types import LocationId, MotiveType, TimeSlot, WeaponType, create_time_slot
from .alibis import generate_alibis
from .clues import ClueGeneratorConfig, generate_clues
from .random import RandomSource, create_random
from .relationships import generate_relationship_graph
from .suspects import assign_victim_and_killer, generate_suspects

logger = logging.getLogger(__name__)

MAX_GENERATION_RETRIES = 10
RETRY_SUFFIX = "-retry"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultySettings:
    min_clues_pointing_to_killer: int
    red_herring_count: int


DIFFICULTY_SETTINGS: dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(min_clues_pointing_to_killer=5, red_herring_count=1),
    Difficulty.MEDIUM: DifficultySettings(min_clues_pointing_to_killer=4, red_herring_count=2),
    Difficulty.HARD: DifficultySettings(min_clues_pointing_to_killer=3, red_herring_count=3),
}


@dataclass(frozen=True)
class CaseGeneratorConfig:
    suspect_count: int = 6
    difficulty: Difficulty = field(default=Difficulty.MEDIUM)


class CaseGenerationError(RuntimeError):
    """No solvable case was produced within ``MAX_GENERATION_RETRIES`` retries."""


def generate_case(seed: str, config: CaseGeneratorConfig | None = None) -> Case:
    """Generate the case for ``seed``.

    An unsolvable result is regenerated from ``seed + "-retry"`` (then
    ``seed + "-retry-retry"`` and so on), at most ``MAX_GENERATION_RETRIES``
    times.
    """
    config = config or CaseGeneratorConfig()
    current_seed = seed
    for attempt in range(MAX_GENERATION_RETRIES + 1):
        case = _generate_once(current_seed, config)
        if is_case_solvable(case):
            logger.debug(
                "Case %r: victim=%s killer=%s motive=%s weapon=%s",
                case.seed,
                case.victim,
                case.killer,
                case.motive.value,
                case.weapon.value,
            )
            return case
        logger.warning(
            "Case for seed %r is not solvable (attempt %d), regenerating", current_seed, attempt + 1
        )
        current_seed = f"{current_seed}{RETRY_SUFFIX}"
    raise CaseGenerationError(
        f"No solvable case for seed {seed!r} after {MAX_GENERATION_RETRIES} retries"
    )


def _generate_once(seed: str, config: CaseGeneratorConfig) -> Case:
    random = create_random(seed)
    settings = DIFFICULTY_SETTINGS[Difficulty(config.difficulty)]

    locations = _generate_locations(random)
    suspects = generate_suspects(config.suspect_count, random)
    split = assign_victim_and_killer(suspects, random)
    motive = random.pick(tuple(MotiveType))
    weapon = random.pick(tuple(WeaponType))
    crime_scene = _select_crime_scene(locations, random)
    locations = [crime_scene if loc.id == crime_scene.id else loc for loc in locations]
    time_of_death = _select_time_of_death(random)

    relationships = generate_relationship_graph(
        split.victim, split.killer, split.others, motive, random
    )
    clues = generate_clues(
        split.killer,
        split.victim,
        split.others,
        motive,
        weapon,
        crime_scene,
        locations,
        relationships,
        random,
        ClueGeneratorConfig(
            min_clues_pointing_to_killer=settings.min_clues_pointing_to_killer,
            red_herring_count=settings.red_herring_count,
        ),
    )
    alibis = generate_alibis(
        split.killer, split.victim, split.others, locations, time_of_death, random
    )

    return Case(
        seed=seed,
        suspects=(split.victim, split.killer, *split.others),
        relationships=tuple(relationships),
        locations=tuple(locations),
        clues=tuple(clues),
        alibis=tuple(alibis),
        victim=split.victim.id,
        killer=split.killer.id,
        motive=motive,
        weapon=weapon,
        crime_scene=crime_scene.id,
        time_of_death=time_of_death,
    )


def _generate_locations(random: RandomSource) -> list[Location]:
    """Six to eight manor rooms; none is the crime scene yet."""
    shuffled = random.shuffle(MANOR_LOCATIONS)
    count = random.random_int(6, 8)
    return [
        Location(
            id=LocationId(f"location-{index}"),
            name=template.name,
            description=template.description,
            is_public=template.is_public,
            is_crime_scene=False,
        )
        for index, template in enumerate(shuffled[:count])
    ]


def _select_crime_scene(locations: list[Location], random: RandomSource) -> Location:
    private_locations = [loc for loc in locations if not loc.is_public]
    scene = random.pick(private_locations or locations)
    return scene.model_copy(update={"is_crime_scene": True})


def _select_time_of_death(random: RandomSource) -> TimeSlot:
    # Between 8 PM and 11 PM.
    return create_time_slot(random.random_int(20, 23))
