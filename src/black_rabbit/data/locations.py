"""Rooms of the manor that a case can take place in."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LocationTemplate:
    name: str
    description: str
    is_public: bool


MANOR_LOCATIONS: tuple[LocationTemplate, ...] = (
    # Private rooms
    LocationTemplate(
        "Study",
        "A wood-paneled room lined with leather-bound books. The smell of tobacco lingers in the air.",
        False,
    ),
    LocationTemplate(
        "Master Bedroom",
        "An opulent bedroom with a four-poster bed and heavy curtains.",
        False,
    ),
    LocationTemplate(
        "Guest Bedroom",
        "A comfortable but less ornate sleeping quarters for visitors.",
        False,
    ),
    LocationTemplate(
        "Kitchen",
        "A large kitchen with copper pots hanging from the ceiling and the scent of herbs.",
        False,
    ),
    LocationTemplate(
        "Wine Cellar",
        "A cool underground room with racks of vintage bottles and cobwebs in the corners.",
        False,
    ),
    LocationTemplate(
        "Servant's Quarters",
        "Simple rooms behind the kitchen where the staff resides.",
        False,
    ),
    LocationTemplate(
        "Attic",
        "A dusty space beneath the rafters, filled with forgotten trunks and memories.",
        False,
    ),
    # Public rooms
    LocationTemplate(
        "Parlor",
        "An elegant sitting room with velvet furniture and a crackling fireplace.",
        True,
    ),
    LocationTemplate(
        "Dining Room",
        "A grand dining room with a long mahogany table set with fine china.",
        True,
    ),
    LocationTemplate(
        "Library",
        "Floor-to-ceiling bookshelves surround comfortable reading chairs. A ladder slides along the shelves.",
        True,
    ),
    LocationTemplate(
        "Conservatory",
        "A glass-walled room filled with exotic plants and humid air. Moonlight streams through the panes.",
        True,
    ),
    LocationTemplate(
        "Billiard Room",
        "A masculine retreat with a green-felted table and trophy heads on the walls.",
        True,
    ),
    LocationTemplate(
        "Garden",
        "A manicured garden with hedges, fountains, and hidden alcoves. Rose bushes line the paths.",
        True,
    ),
    LocationTemplate(
        "Foyer",
        "The grand entrance hall with a sweeping staircase and crystal chandelier.",
        True,
    ),
    LocationTemplate(
        "Music Room",
        "A room dominated by a grand piano and walls hung with portraits of composers.",
        True,
    ),
    LocationTemplate(
        "Drawing Room",
        "A formal reception room with silk wallpaper and delicate porcelain figurines.",
        True,
    ),
    LocationTemplate(
        "Ballroom",
        "A vast room with polished floors and mirrors that multiply the candlelight.",
        True,
    ),
    LocationTemplate(
        "Veranda",
        "A covered porch overlooking the grounds. Wicker chairs face the gardens.",
        True,
    ),
    LocationTemplate(
        "Trophy Room",
        "Mounted heads and hunting memorabilia cover every surface. A rifle case stands in the corner.",
        True,
    ),
)
