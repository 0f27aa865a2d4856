"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Set test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh in-memory database session for each test."""
    from sqlalchemy.pool import StaticPool
    from sqlmodel import Session, SQLModel, create_engine

    import pet_wiki.db.models  # noqa: F401  (registers tables)

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session
        session.rollback()

    engine.dispose()


@pytest.fixture(scope="function")
def repository(db_session):
    """Create a repository with test database session."""
    from pet_wiki.db.repo import Repository
    return Repository(db_session)


@pytest.fixture
def make_breed():
    """Factory for BreedRecord instances with sequential ids."""
    from pet_wiki.db.models import BreedRecord

    counter = {"next_id": 1}

    def _make(name, **fields):
        fields.setdefault("id", counter["next_id"])
        counter["next_id"] = fields["id"] + 1
        fields.setdefault("species", "dogs")
        return BreedRecord(name=name, **fields)

    return _make


@pytest.fixture
def sample_breeds(make_breed):
    """A small dog listing, sorted by name like the data source delivers it."""
    return [
        make_breed(
            "Beagle",
            size="Mittel",
            care_level="Niedrig",
            temperament=["Freundlich", "Verspielt", "Aktiv"],
        ),
        make_breed(
            "Border Collie",
            size="Mittel",
            care_level="Hoch",
            temperament=["Intelligent", "Aktiv", "Lernwillig"],
        ),
        make_breed(
            "Deutscher Schäferhund",
            breed="Schäferhund",
            size="Groß",
            care_level="Mittel",
            temperament=["Intelligent", "Loyal", "Beschützend"],
        ),
        make_breed(
            "Dogge",
            size="Sehr groß",
            care_level="Mittel",
            temperament=["Ruhig", "Freundlich"],
        ),
        make_breed(
            "Mops",
            size="Klein",
            care_level="Niedrig",
            properties=["calm", "apartment_suitable"],
        ),
        make_breed("Xoloitzcuintle"),
    ]


@pytest.fixture
def pets_data():
    """Minimal petsData.json content."""
    return {
        "categories": [
            {
                "id": "dogs",
                "name": "Hunde",
                "speciesCount": 2,
                "image": "images/categories/dogs.jpg",
                "description": "Treue Begleiter",
            },
            {
                "id": "cats",
                "name": "Katzen",
                "speciesCount": 1,
                "image": "/images/categories/cats.jpg",
                "description": "Samtpfoten",
            },
        ],
        "species": {
            "dogs": {
                "subcategories": {
                    "herding": {
                        "name": "Hütehunde",
                        "species": [
                            {
                                "name": "Deutscher Schäferhund",
                                "description": "  Vielseitiger   Arbeitshund.\n\n\n\nAuch als Hütehund.  ",
                                "origin": "Deutschland",
                                "size": "Groß",
                                "careLevel": "Mittel",
                                "lifeExpectancy": "9-13 Jahre",
                                "image": "images/dogs/schaeferhund.jpg",
                                "gallery": ["images/dogs/s1.jpg", "https://cdn.example.com/s2.jpg"],
                                "temperament": ["Intelligent", "Loyal"],
                                "details": {"summary": "Ein treuer Begleiter.", "health": "   "},
                                "ratings": {"energielevel": 4},
                            },
                            {
                                "name": "Border Collie",
                                "description": "Hochintelligenter Hütehund.",
                                "size": "Mittel",
                                "careLevel": "Hoch",
                                "temperament": ["Intelligent", "Aktiv"],
                            },
                        ],
                    },
                    "broken": {"species": [{"name": "Ghost Dog"}]},
                }
            },
            "cats": {
                "subcategories": {
                    "longhair": {
                        "name": "Langhaar",
                        "species": [
                            {
                                "name": "Maine Coon",
                                "description": "Sanfter Riese.",
                                "size": "Groß",
                            }
                        ],
                    }
                }
            },
        },
    }


@pytest.fixture
def blog_data():
    """Minimal blogData.json content."""
    return [
        {
            "title": "Die richtige Ernährung für Welpen",
            "category": "Ernährung",
            "content": "Welpen brauchen eine ausgewogene Ernährung.",
            "excerpt": "Was Welpen fressen sollten",
            "author": {"name": "Anna"},
            "readingTime": 5,
            "cardImage": "images/blog/welpen.jpg",
            "heroImage": "/images/blog/welpen-hero.jpg",
            "date": "2024-03-01",
        },
        {
            "title": "Katzen richtig beschäftigen",
            "category": "Verhalten",
            "content": "Spielzeit ist wichtig für Katzen.",
            "excerpt": "Ideen\tfür  drinnen ",
            "date": "2024-04-15T08:30:00Z",
        },
    ]
