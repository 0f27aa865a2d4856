"""Data models for the JSON import."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Species with a listing page
VALID_SPECIES: List[str] = ["dogs", "cats", "birds", "fish", "rodents", "reptiles"]

SPECIES_CONFIG: Dict[str, Dict[str, str]] = {
    "dogs": {
        "name": "Hunde",
        "emoji": "🐕",
        "description": "Treue Begleiter für jede Lebenssituation",
    },
    "cats": {
        "name": "Katzen",
        "emoji": "🐱",
        "description": "Elegante und unabhängige Samtpfoten",
    },
    "birds": {
        "name": "Vögel",
        "emoji": "🦅",
        "description": "Farbenfrohe und intelligente Gefährten",
    },
    "fish": {
        "name": "Fische",
        "emoji": "🐠",
        "description": "Friedliche Unterwasserwelt für Zuhause",
    },
    "rodents": {
        "name": "Kleintiere",
        "emoji": "🐹",
        "description": "Kleine Freunde mit großer Persönlichkeit",
    },
    "reptiles": {
        "name": "Reptilien",
        "emoji": "🦎",
        "description": "Faszinierende exotische Begleiter",
    },
}


class CategoryData(BaseModel):
    """Category entry in ``petsData.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    species_count: int = Field(default=0, alias="speciesCount")
    image: Optional[str] = None
    description: str = ""


class PetDetailsData(BaseModel):
    """Long-form profile sections of a pet entry."""

    model_config = ConfigDict(extra="ignore")

    summary: Optional[str] = None
    character: Optional[str] = None
    health: Optional[str] = None
    grooming: Optional[str] = None
    activity: Optional[str] = None
    suitability: Optional[str] = None


class PetData(BaseModel):
    """Breed entry inside a species subcategory."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    description: str = ""
    origin: Optional[str] = None
    size: Optional[str] = None
    weight: Optional[str] = None
    life_expectancy: Optional[str] = Field(default=None, alias="lifeExpectancy")
    care_level: Optional[str] = Field(default=None, alias="careLevel")
    image: Optional[str] = None
    gallery: Optional[List[str]] = None
    temperament: Optional[List[str]] = None
    properties: Optional[List[str]] = None
    details: Optional[PetDetailsData] = None
    ratings: Optional[Dict[str, Any]] = None


class BlogPostData(BaseModel):
    """Entry in ``blogData.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    category: str
    content: str = ""
    excerpt: str = ""
    author: Optional[Dict[str, Any]] = None
    reading_time: Optional[int] = Field(default=None, alias="readingTime")
    card_image: Optional[str] = Field(default=None, alias="cardImage")
    hero_image: Optional[str] = Field(default=None, alias="heroImage")
    date: str
