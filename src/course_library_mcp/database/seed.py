"""
Sample data for the Course Library MCP Server.

A fixed catalogue of pirate-themed authors and their courses, so sorting,
filtering and paging have something predictable to work on, plus optional
Faker-generated authors for larger data sets.
"""

import logging
import random
from datetime import date

from faker import Faker
from sqlalchemy.orm import Session

from .schema import Author, Course

logger = logging.getLogger(__name__)

MAIN_CATEGORIES = ["Ships", "Rum", "Singing", "Maps", "Cannons", "Navigation"]

# (first name, last name, date of birth, main category, [(title, description)])
CATALOGUE: list[tuple[str, str, date, str, list[tuple[str, str]]]] = [
    (
        "Berry",
        "Griffin Beak Eldritch",
        date(1650, 7, 23),
        "Ships",
        [
            (
                "Commandeering a Ship Without Getting Caught",
                "Commandeering a ship in rough waters isn't easy. Commandeering it "
                "without getting caught is even harder. In this course you'll learn how.",
            ),
            (
                "Overthrowing Mutiny",
                "In this course, the author provides tips to avoid, or, if needed, "
                "overthrow pirate mutiny.",
            ),
        ],
    ),
    (
        "Nancy",
        "Swashbuckler Rye",
        date(1668, 5, 21),
        "Rum",
        [
            (
                "Avoiding Brawls While Drinking as Much Rum as You Desire",
                "Every good pirate loves rum, but it also has a tendency to get you "
                "into trouble. In this course you'll learn how to avoid that.",
            ),
        ],
    ),
    (
        "Eli",
        "Ivory Bones Sweet",
        date(1701, 12, 16),
        "Singing",
        [
            (
                "Singalong Pirate Hits",
                "In this course you'll learn how to sing all-time favourite pirate songs "
                "without sounding like you actually know the words or how to hold a note.",
            ),
        ],
    ),
    ("Arnold", "The Unseen Stafford", date(1702, 3, 6), "Singing", []),
    ("Seabury", "Toxic Reyson", date(1690, 11, 23), "Maps", []),
    ("Rutherford", "Fearless Cloven", date(1723, 4, 5), "General debauchery", []),
    ("Atherton", "Crow Ridley", date(1721, 10, 11), "Rum", []),
]


def build_catalogue() -> list[Author]:
    """Authors (with courses) of the fixed catalogue."""
    authors = []
    for first_name, last_name, date_of_birth, main_category, courses in CATALOGUE:
        author = Author(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            main_category=main_category,
        )
        author.courses = [
            Course(title=title, description=description) for title, description in courses
        ]
        authors.append(author)
    return authors


def generate_authors(num_authors: int, seed: int = 42) -> list[Author]:
    """
    Generate authors with Faker, each with zero to three courses.

    Output is reproducible for a given seed.
    """
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)

    authors = []
    for _ in range(num_authors):
        date_of_birth = fake.date_of_birth(minimum_age=20, maximum_age=90)

        # 20% chance of being deceased
        date_of_death = None
        if rng.random() < 0.2:
            date_of_death = fake.date_between(start_date=date_of_birth, end_date="today")

        author = Author(
            first_name=fake.first_name()[:50],
            last_name=fake.last_name()[:50],
            date_of_birth=date_of_birth,
            date_of_death=date_of_death,
            main_category=rng.choice(MAIN_CATEGORIES),
        )
        author.courses = [
            Course(
                title=fake.sentence(nb_words=5).rstrip(".")[:100],
                description=fake.paragraph(nb_sentences=3)[:1500],
            )
            for _ in range(rng.randint(0, 3))
        ]
        authors.append(author)

    return authors


def seed_database(session: Session, extra_authors: int = 0) -> int:
    """
    Add the catalogue (and optionally generated authors) to the database.

    Returns:
        Number of authors added
    """
    authors = build_catalogue() + generate_authors(extra_authors)
    session.add_all(authors)
    session.flush()
    logger.info(
        "Seeded %d author(s) with %d course(s)",
        len(authors),
        sum(len(author.courses) for author in authors),
    )
    return len(authors)
