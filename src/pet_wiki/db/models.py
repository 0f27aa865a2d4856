"""SQLModel database models for Pet Wiki."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy.types import DateTime, TypeDecorator
from sqlmodel import Column, Field, JSON, SQLModel


# ============================================================================
# Pydantic Models (for data transfer and validation)
# ============================================================================


class BreedRecord(BaseModel):
    """Read-only view of a breed profile as consumed by the listing filters."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = PydanticField(min_length=1)
    slug: str = ""
    breed: Optional[str] = None
    species: str = ""
    description: str = ""
    primary_image: Optional[str] = PydanticField(default=None, alias="primaryImage")
    size: Optional[str] = None
    care_level: Optional[str] = PydanticField(default=None, alias="careLevel")
    temperament: Optional[List[str]] = None
    properties: Optional[List[str]] = None
    ratings: Optional[Dict[str, Any]] = None
    origin: Optional[str] = None
    life_expectancy: Optional[str] = PydanticField(default=None, alias="lifeExpectancy")
    weight: Optional[str] = None

    @property
    def url_path(self) -> str:
        """Site path of the breed's profile page."""
        return f"/{self.species}/{self.slug}"


@dataclass
class BlogSearchResult:
    """One page of blog posts plus pagination info."""

    posts: List["BlogPost"] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 6

    @property
    def has_more(self) -> bool:
        return self.total > (self.page - 1) * self.limit + self.limit


# ============================================================================
# SQLModel Database Models
# ============================================================================


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timestamp column that always hands out timezone-aware UTC values.

    Naive values are taken to be UTC already. SQLite keeps no offset, so
    rows read back are tagged with UTC again.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Category(SQLModel, table=True):
    """Species category (dogs, cats, ...)."""

    __tablename__ = "categories"
    __table_args__ = {"extend_existing": True}

    id: str = Field(primary_key=True)
    name: str
    species_count: int = 0
    image: Optional[str] = None
    description: str = ""


class Pet(SQLModel, table=True):
    """Breed profile."""

    __tablename__ = "pets"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str = Field(index=True, unique=True)
    breed: Optional[str] = None
    species: str = Field(index=True)
    subcategory: Optional[str] = None
    description: str = ""
    origin: Optional[str] = None
    size: Optional[str] = None
    weight: Optional[str] = None
    life_expectancy: Optional[str] = None
    care_level: Optional[str] = None
    primary_image: Optional[str] = None
    gallery: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    temperament: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    properties: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    ratings: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Profile text sections
    summary: Optional[str] = None
    character: Optional[str] = None
    health: Optional[str] = None
    grooming: Optional[str] = None
    activity: Optional[str] = None
    suitability: Optional[str] = None

    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime(), nullable=False)
    )

    def to_breed_record(self) -> BreedRecord:
        """Convert to the read-only BreedRecord used by the listing filters."""
        return BreedRecord(
            id=self.id,
            name=self.name,
            slug=self.slug,
            breed=self.breed,
            species=self.species,
            description=self.description,
            primary_image=self.primary_image,
            size=self.size,
            care_level=self.care_level,
            temperament=list(self.temperament) if self.temperament else None,
            properties=list(self.properties) if self.properties else None,
            ratings=self.ratings,
            origin=self.origin,
            life_expectancy=self.life_expectancy,
            weight=self.weight,
        )


class BlogPost(SQLModel, table=True):
    """Blog article."""

    __tablename__ = "blog_posts"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    slug: str = Field(index=True, unique=True)
    category: str = Field(index=True)
    content: str = ""
    excerpt: str = ""
    author: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    reading_time: Optional[int] = None
    card_image: Optional[str] = None
    hero_image: Optional[str] = None
    published_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime(), index=True, nullable=False)
    )

