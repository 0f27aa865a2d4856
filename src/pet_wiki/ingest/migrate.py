"""Import categories, breed profiles and blog posts from JSON exports."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pet_wiki.db.repo import Repository
from pet_wiki.ingest.models import (
    VALID_SPECIES,
    BlogPostData,
    CategoryData,
    PetData,
    PetDetailsData,
)
from pet_wiki.utils.logging import get_logger
from pet_wiki.utils.text import clean_text, slugify

logger = get_logger(__name__)


@dataclass
class MigrationStats:
    """Row counts after an import run."""

    categories: int = 0
    pets: int = 0
    blog_posts: int = 0
    pets_by_species: Dict[str, int] = field(default_factory=dict)
    skipped_subcategories: List[str] = field(default_factory=list)


def _load_json(path: Path) -> Any:
    logger.debug(f"Reading import file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _parse_date(value: str) -> datetime:
    """Parse an ISO date or datetime; values without an offset are UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _section(details: Optional[PetDetailsData], name: str) -> Optional[str]:
    if details is None:
        return None
    return clean_text(getattr(details, name)) or None


class DataMigrator:
    """Load the site's JSON exports into the database."""

    def __init__(self, repository: Repository):
        self.repo = repository

    def migrate(self, pets_file: Path, blog_file: Path) -> MigrationStats:
        """
        Import categories, all known species and blog posts.

        Existing pets and posts (matched by slug) are left untouched;
        categories are overwritten.

        Args:
            pets_file: Path to ``petsData.json``
            blog_file: Path to ``blogData.json``

        Returns:
            MigrationStats with the resulting table counts
        """
        logger.info("Starting data migration from JSON...")
        stats = MigrationStats()

        try:
            pets_data = _load_json(Path(pets_file))
            blog_data = _load_json(Path(blog_file))

            self.import_categories(pets_data.get("categories", []))

            species_data = pets_data.get("species", {})
            for species in VALID_SPECIES:
                subcategories = (species_data.get(species) or {}).get("subcategories")
                if subcategories:
                    logger.info(f"Importing {species}...")
                    stats.skipped_subcategories.extend(
                        self.import_species(subcategories, species)
                    )

            self.import_blog_posts(blog_data)
        except (OSError, ValueError) as e:
            logger.error(f"Migration failed: {e}")
            raise

        stats.categories = self.repo.count_categories()
        stats.pets = self.repo.count_pets()
        stats.blog_posts = self.repo.count_blog_posts()
        stats.pets_by_species = {
            species: self.repo.count_pets(species) for species in VALID_SPECIES
        }

        logger.info(
            f"Migration finished: {stats.categories} categories, "
            f"{stats.pets} pets, {stats.blog_posts} blog posts"
        )
        return stats

    def import_categories(self, categories: List[Dict[str, Any]]) -> int:
        for raw in categories:
            category = CategoryData(**raw)
            self.repo.upsert_category(
                category_id=category.id,
                name=category.name,
                species_count=category.species_count,
                image=category.image,
                description=category.description,
            )
        return len(categories)

    def import_species(self, subcategories: Dict[str, Any], species: str) -> List[str]:
        """
        Import every pet of a species' subcategories.

        Returns:
            Keys of subcategories skipped for lacking a name
        """
        skipped = []
        for key, subcategory in subcategories.items():
            if not isinstance(subcategory, dict) or not isinstance(subcategory.get("name"), str):
                logger.warning(f"Skipping subcategory {key}: no 'name' property")
                skipped.append(key)
                continue

            logger.debug(f"Processing {species} subcategory: {subcategory['name']}")
            for raw in subcategory.get("species", []):
                pet = PetData(**raw)
                details = pet.details
                self.repo.create_pet_if_missing(
                    slugify(pet.name),
                    name=pet.name,
                    breed=pet.name,
                    species=species,
                    subcategory=subcategory["name"],
                    description=clean_text(pet.description),
                    origin=pet.origin,
                    size=pet.size,
                    weight=pet.weight,
                    life_expectancy=pet.life_expectancy,
                    care_level=pet.care_level,
                    primary_image=pet.image,
                    gallery=pet.gallery,
                    temperament=pet.temperament,
                    properties=pet.properties,
                    ratings=pet.ratings,
                    summary=_section(details, "summary"),
                    character=_section(details, "character"),
                    health=_section(details, "health"),
                    grooming=_section(details, "grooming"),
                    activity=_section(details, "activity"),
                    suitability=_section(details, "suitability"),
                )
        return skipped

    def import_blog_posts(self, posts: List[Dict[str, Any]]) -> int:
        for raw in posts:
            post = BlogPostData(**raw)
            self.repo.create_blog_post_if_missing(
                slugify(post.title),
                title=post.title,
                category=post.category,
                content=post.content,
                excerpt=clean_text(post.excerpt),
                author=post.author,
                reading_time=post.reading_time,
                card_image=post.card_image,
                hero_image=post.hero_image,
                published_at=_parse_date(post.date),
            )
        return len(posts)
