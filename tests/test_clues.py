"""Tests for clue generation."""

from __future__ import annotations

from collections import Counter

from black_rabbit.domain.models import Location, Relationship
from black_rabbit.domain.types import (
    ClueSignificance,
    ClueType,
    LocationId,
    MotiveType,
    RelationshipType,
    WeaponType,
)
from black_rabbit.generation.clues import (
    TIME_OF_DEATH_TEXT,
    WEAPON_EVIDENCE_NAMES,
    ClueGeneratorConfig,
    generate_clues,
)
from black_rabbit.generation.random import create_random
from black_rabbit.generation.suspects import assign_victim_and_killer, generate_suspects

ROOMS = [
    Location(id=LocationId("location-0"), name="Study", description="", is_public=False,
             is_crime_scene=True),
    Location(id=LocationId("location-1"), name="Library", description="", is_public=True),
    Location(id=LocationId("location-2"), name="Ballroom", description="", is_public=True),
    Location(id=LocationId("location-3"), name="Wine Cellar", description="", is_public=False),
]


def _clues(seed: str, config: ClueGeneratorConfig | None = None, secret: bool = False):
    random = create_random(seed)
    split = assign_victim_and_killer(generate_suspects(6, random), random)
    relationships = [
        Relationship(
            from_=split.killer.id,
            to=split.victim.id,
            type=RelationshipType.BUSINESS_PARTNER,
            sentiment=-8,
        )
    ]
    if secret:
        relationships.append(
            Relationship(
                from_=split.others[0].id,
                to=split.victim.id,
                type=RelationshipType.LOVER,
                sentiment=5,
                is_public_knowledge=False,
            )
        )
    clues = generate_clues(
        split.killer,
        split.victim,
        split.others,
        MotiveType.GREED,
        WeaponType.KNIFE,
        ROOMS[0],
        ROOMS,
        relationships,
        random,
        config,
    )
    return split, clues


def test_ids_unique_and_sequential():
    _, clues = _clues("ids")
    ids = sorted(int(c.id.split("-")[1]) for c in clues)
    assert ids == list(range(len(clues)))


def test_skeleton_clues_present():
    split, clues = _clues("skeleton")
    by_name = {c.name: c for c in clues}
    assert "Witness Account" in by_name
    assert "Suspicious Behavior" in by_name
    weapon = next(c for c in clues if c.name in WEAPON_EVIDENCE_NAMES[WeaponType.KNIFE])
    assert weapon.points_to == split.killer.id
    assert weapon.significance == ClueSignificance.CRITICAL
    assert weapon.found_at == "location-0"
    forensic = by_name["Time of Death"]
    assert forensic.type == ClueType.FORENSIC
    assert forensic.points_to is None
    assert forensic.description == TIME_OF_DEATH_TEXT


def test_every_innocent_has_alibi_clue():
    split, clues = _clues("alibis")
    for innocent in split.others:
        assert any(
            c.points_to == innocent.id and c.type == ClueType.TESTIMONIAL and not c.is_red_herring
            for c in clues
        )


def test_red_herrings_refuted_by_alibi_clue():
    split, clues = _clues("herrings", ClueGeneratorConfig(red_herring_count=3))
    herrings = [c for c in clues if c.is_red_herring]
    assert len(herrings) == 3
    ids = {c.id: c for c in clues}
    for herring in herrings:
        assert herring.points_to != split.killer.id
        refuter = ids[herring.refuted_by]
        assert refuter.points_to == herring.points_to
        assert refuter.type == ClueType.TESTIMONIAL


def test_red_herring_count_capped_by_innocents():
    _, clues = _clues("cap", ClueGeneratorConfig(red_herring_count=10))
    assert sum(c.is_red_herring for c in clues) == 4


def test_secret_relationship_leaves_letters():
    _, clues = _clues("letters", secret=True)
    letters = [c for c in clues if c.name == "Hidden Correspondence"]
    assert len(letters) == 1
    assert letters[0].type == ClueType.DOCUMENTARY
    assert "lover" in letters[0].description
    assert letters[0].found_at in {"location-0", "location-3"}


def test_no_secret_no_letters():
    _, clues = _clues("no-letters")
    assert not any(c.name == "Hidden Correspondence" for c in clues)


def test_killer_clue_count_follows_config():
    for wanted, expected in ((3, 4), (4, 4), (5, 5), (6, 6)):
        split, clues = _clues(
            "corroborate", ClueGeneratorConfig(min_clues_pointing_to_killer=wanted)
        )
        genuine = [c for c in clues if c.points_to == split.killer.id and not c.is_red_herring]
        assert len(genuine) == expected


def test_clue_types_cover_skeleton():
    _, clues = _clues("types")
    counts = Counter(c.type for c in clues)
    assert counts[ClueType.FORENSIC] == 1
    assert counts[ClueType.DOCUMENTARY] >= 1
    assert counts[ClueType.BEHAVIORAL] >= 1


def test_deterministic():
    assert _clues("same")[1] == _clues("same")[1]


def test_corroboration_leaves_shared_stream_untouched():
    _, plain = _clues("stream", ClueGeneratorConfig(min_clues_pointing_to_killer=3))
    _, boosted = _clues("stream", ClueGeneratorConfig(min_clues_pointing_to_killer=6))
    plain_ids = {c.id for c in plain}
    assert [c for c in boosted if c.id in plain_ids] == plain
    assert len(boosted) == len(plain) + 2
