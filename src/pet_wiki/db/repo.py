"""Repository for database operations."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlmodel import Session, select

from pet_wiki.db.models import (
    BlogPost,
    BlogSearchResult,
    BreedRecord,
    Category,
    Pet,
    utc_now,
)
from pet_wiki.utils.logging import get_logger

logger = get_logger(__name__)


class Repository:
    """Repository for all database operations."""

    def __init__(self, session: Session):
        self.session = session

    # ========================================================================
    # Category operations
    # ========================================================================

    def upsert_category(
        self,
        category_id: str,
        name: str,
        species_count: int = 0,
        image: Optional[str] = None,
        description: str = "",
    ) -> Category:
        """Create a category or overwrite an existing one's fields."""
        category = self.session.get(Category, category_id)
        if category is None:
            category = Category(id=category_id, name=name)
            logger.info(f"Created category: {category_id}")

        category.name = name
        category.species_count = species_count
        category.image = image
        category.description = description or ""
        self.session.add(category)
        self.session.flush()
        return category

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        return self.session.get(Category, category_id)

    def list_categories(self) -> List[Category]:
        """Get all categories ordered by name."""
        statement = select(Category).order_by(Category.name)
        return list(self.session.exec(statement).all())

    def count_categories(self) -> int:
        return self.session.exec(select(func.count()).select_from(Category)).one()

    # ========================================================================
    # Pet operations
    # ========================================================================

    def create_pet_if_missing(self, slug: str, **fields: Any) -> Pet:
        """
        Create a pet unless one with the same slug exists.

        Existing rows are returned untouched so repeated imports do not
        overwrite edited profiles.
        """
        existing = self.get_pet_by_slug(slug)
        if existing is not None:
            logger.debug(f"Pet already present, skipping: {slug}")
            return existing

        pet = Pet(slug=slug, **fields)
        self.session.add(pet)
        self.session.flush()
        logger.debug(f"Created pet: {pet.id} ({pet.name}, {pet.species})")
        return pet

    def get_pet(self, pet_id: int) -> Optional[Pet]:
        """Get pet by ID."""
        return self.session.get(Pet, pet_id)

    def get_pet_by_slug(self, slug: str, species: Optional[str] = None) -> Optional[Pet]:
        """Get pet by slug, optionally scoped to a species."""
        statement = select(Pet).where(Pet.slug == slug)
        if species:
            statement = statement.where(Pet.species == species)
        return self.session.exec(statement).first()

    def get_pets_by_species(self, species: str) -> List[Pet]:
        """Get all pets of a species ordered by name."""
        statement = select(Pet).where(Pet.species == species).order_by(Pet.name)
        return list(self.session.exec(statement).all())

    def get_pets_with_images(self) -> List[Pet]:
        # JSON columns store None as JSON null, so check in Python
        pets = self.session.exec(select(Pet).order_by(Pet.id)).all()
        return [pet for pet in pets if pet.primary_image or pet.gallery]

    def get_breed_records(self, species: str) -> List[BreedRecord]:
        """Get the full candidate collection for a species listing."""
        records = [pet.to_breed_record() for pet in self.get_pets_by_species(species)]
        logger.debug(f"Loaded {len(records)} breed records for {species}")
        return records

    def get_related_pets(self, pet: Pet, limit: int = 4) -> List[Pet]:
        """Get other pets of the same species."""
        statement = (
            select(Pet)
            .where(Pet.species == pet.species)
            .where(Pet.id != pet.id)
            .order_by(Pet.name)
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def count_pets(self, species: Optional[str] = None) -> int:
        statement = select(func.count()).select_from(Pet)
        if species:
            statement = statement.where(Pet.species == species)
        return self.session.exec(statement).one()

    # ========================================================================
    # Blog operations
    # ========================================================================

    def create_blog_post_if_missing(self, slug: str, **fields: Any) -> BlogPost:
        """Create a blog post unless one with the same slug exists."""
        existing = self.get_blog_post_by_slug(slug)
        if existing is not None:
            logger.debug(f"Blog post already present, skipping: {slug}")
            return existing

        post = BlogPost(slug=slug, **fields)
        self.session.add(post)
        self.session.flush()
        logger.debug(f"Created blog post: {post.id} ({post.title})")
        return post

    def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        statement = select(BlogPost).where(BlogPost.slug == slug)
        return self.session.exec(statement).first()

    def list_blog_posts(self) -> List[BlogPost]:
        statement = select(BlogPost).order_by(BlogPost.published_at.desc())
        return list(self.session.exec(statement).all())

    def search_blog_posts(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 6,
        now: Optional[datetime] = None,
    ) -> BlogSearchResult:
        """
        Get one page of published blog posts, newest first.

        Args:
            category: Only posts in this category
            search: Case-insensitive match against title, excerpt or content
            page: 1-based page number
            limit: Posts per page
            now: Reference time for "published" (defaults to the current UTC time)

        Returns:
            BlogSearchResult with the page and the total match count
        """
        now = now or utc_now()
        page = max(page, 1)

        conditions = [BlogPost.published_at <= now]
        if category:
            conditions.append(BlogPost.category == category)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(BlogPost.title).like(pattern),
                    func.lower(BlogPost.excerpt).like(pattern),
                    func.lower(BlogPost.content).like(pattern),
                )
            )

        statement = (
            select(BlogPost)
            .where(*conditions)
            .order_by(BlogPost.published_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        posts = list(self.session.exec(statement).all())

        total = self.session.exec(
            select(func.count()).select_from(BlogPost).where(*conditions)
        ).one()

        return BlogSearchResult(posts=posts, total=total, page=page, limit=limit)

    def get_recent_posts(self, limit: int = 3, now: Optional[datetime] = None) -> List[BlogPost]:
        """Get the newest published posts."""
        now = now or utc_now()
        statement = (
            select(BlogPost)
            .where(BlogPost.published_at <= now)
            .order_by(BlogPost.published_at.desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def get_related_posts(self, post: BlogPost, limit: int = 3) -> List[BlogPost]:
        """Get the newest other posts in the same category."""
        statement = (
            select(BlogPost)
            .where(BlogPost.category == post.category)
            .where(BlogPost.slug != post.slug)
            .order_by(BlogPost.published_at.desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def get_blog_category_stats(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """Count published posts per category, largest category first."""
        now = now or utc_now()
        counted = func.count(BlogPost.id)
        statement = (
            select(BlogPost.category, counted)
            .where(BlogPost.published_at <= now)
            .group_by(BlogPost.category)
            .order_by(counted.desc(), BlogPost.category)
        )
        return {category: count for category, count in self.session.exec(statement).all()}

    def count_blog_posts(self) -> int:
        return self.session.exec(select(func.count()).select_from(BlogPost)).one()
