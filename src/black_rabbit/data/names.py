"""Name, occupation and description pools for generated suspects.

Pool order is significant: generators shuffle these with the case stream,
so reordering an entry changes every case produced from a given seed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Occupation:
    title: str
    description: str


FIRST_NAMES: tuple[str, ...] = (
    # Female
    "Eleanor", "Margaret", "Victoria", "Elizabeth", "Catherine",
    "Vivian", "Evelyn", "Beatrice", "Charlotte", "Penelope",
    "Constance", "Harriet", "Agnes", "Dorothy", "Mildred",
    "Irene", "Lillian", "Florence", "Josephine", "Rosalind",
    "Agatha", "Cordelia", "Gwendolyn", "Millicent", "Prudence",
    "Adelaide", "Clementine", "Ophelia", "Tabitha", "Winifred",
    # Male
    "Richard", "William", "Edward", "Charles", "Henry",
    "James", "Thomas", "Arthur", "Frederick", "George",
    "Sebastian", "Oliver", "Theodore", "Reginald", "Archibald",
    "Edmund", "Nathaniel", "Humphrey", "Percival", "Bartholomew",
    "Alistair", "Benedict", "Cornelius", "Desmond", "Montgomery",
    "Rupert", "Sylvester", "Vincent", "Wallace", "Xavier",
)

LAST_NAMES: tuple[str, ...] = (
    "Ashworth", "Blackwood", "Hartley", "Pemberton", "Whitmore",
    "Ravencroft", "Thornwood", "Sterling", "Fairfax", "Cavendish",
    "Montague", "Sinclair", "Worthington", "Kensington", "Beaumont",
    "Crawford", "Harrington", "Lancaster", "Fitzgerald", "Stirling",
    "Wellington", "Carmichael", "Prescott", "Vandermeer", "Ashford",
    "Davenport", "Everhart", "Foxworth", "Grenville", "Hawthorne",
    "Kingsley", "Langley", "Merriweather", "Norwood", "Osgood",
    "Pembroke", "Rutherford", "Seymour", "Trevelyan", "Underwood",
    "Vance", "Wentworth", "Yarborough", "Aldridge", "Bainbridge",
    "Chadwick", "Drummond", "Eastwood", "Farnsworth", "Grimsby",
)

OCCUPATIONS: tuple[Occupation, ...] = (
    # Wealthy elite
    Occupation("Industrialist", "A wealthy factory owner with vast holdings."),
    Occupation("Socialite", "A prominent figure in high society."),
    Occupation("Heiress", "A wealthy young woman expecting an inheritance."),
    Occupation("Banker", "A financier who controls the family fortune."),
    Occupation("Shipping Magnate", "Controls trade routes and harbors."),
    Occupation("Oil Baron", "Made a fortune in petroleum."),
    # Professionals
    Occupation("Lawyer", "A shrewd legal mind who knows everyone's secrets."),
    Occupation("Doctor", "A respected physician with a calm demeanor."),
    Occupation("Professor", "An academic with an encyclopedic mind."),
    Occupation("Architect", "Designs the grand estates of the wealthy."),
    Occupation("Surgeon", "Steady hands and nerves of steel."),
    Occupation("Barrister", "Argues cases before the highest courts."),
    # Creatives
    Occupation("Artist", "A temperamental creative with expensive tastes."),
    Occupation("Actress", "A stage performer with a flair for drama."),
    Occupation("Author", "A celebrated novelist known for dark themes."),
    Occupation("Composer", "Creates symphonies that move audiences to tears."),
    Occupation("Photographer", "Captures images that reveal hidden truths."),
    # Military and government
    Occupation("Colonel", "A retired military officer with rigid principles."),
    Occupation("Politician", "An ambitious public figure with many enemies."),
    Occupation("Diplomat", "A master of negotiation and intrigue."),
    Occupation("Admiral", "Commanded fleets and sailors across the seas."),
    Occupation("Judge", "Dispenses justice from the bench."),
    # Staff with access to the house
    Occupation("Butler", "A servant who sees and hears everything."),
    Occupation("Journalist", "A reporter always digging for stories."),
    Occupation("Private Secretary", "Manages affairs and keeps secrets."),
    Occupation("Governess", "Raised the children of the wealthy."),
    Occupation("Estate Manager", "Oversees the grounds and staff."),
    # Other
    Occupation("Widow", "Recently bereaved, with a complicated past."),
    Occupation("Businessman", "A self-made entrepreneur with ruthless methods."),
    Occupation("Antiquarian", "Deals in rare books and artifacts."),
    Occupation("Explorer", "Has traveled to the far corners of the earth."),
    Occupation("Spiritualist", "Claims to commune with the dead."),
)

DESCRIPTIONS: tuple[str, ...] = (
    # Suspicious
    "A stern figure with penetrating eyes that miss nothing.",
    "Charming on the surface, but calculating beneath.",
    "Nervous and fidgety, clearly hiding something.",
    "Watchful and silent, observing from the shadows.",
    "Speaks in riddles and never gives a straight answer.",
    "Always seems to know more than they let on.",
    "Has a habit of appearing in unexpected places.",
    # Dignified
    "Quiet and reserved, with an air of hidden knowledge.",
    "Imperious and cold, accustomed to getting their way.",
    "Elegant and composed, never a hair out of place.",
    "Meticulous and precise, obsessed with details.",
    "Carries themselves with military bearing.",
    "Speaks softly but commands attention.",
    # Emotional
    "Warm and friendly, perhaps too eager to please.",
    "Theatrical and dramatic, always the center of attention.",
    "Quick to anger, with a volatile temper.",
    "Melancholic and brooding, lost in memories.",
    "Laughs too loudly and drinks too much.",
    # Eccentric
    "Disheveled and distracted, lost in thought.",
    "Brash and outspoken, with no filter on their opinions.",
    "Mutters to themselves when they think no one is listening.",
    "Collects strange objects and speaks of stranger things.",
    "Dresses decades out of fashion and cares not at all.",
    # Physical tells
    "Has a noticeable limp from an old injury.",
    "Constantly wringing their hands when speaking.",
    "Never makes eye contact for more than a moment.",
    "Chain-smokes and taps ashes nervously.",
    "Wears dark glasses even indoors.",
)
