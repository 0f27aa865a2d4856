"""Advanced property catalog and temperament-to-property mapping."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Literal, Optional, Set

from pydantic import BaseModel, Field

from pet_wiki.db.models import BreedRecord
from pet_wiki.utils.logging import get_logger

logger = get_logger(__name__)

PropertyCategory = Literal["temperament", "care", "physical", "social"]

PROPERTY_CATEGORIES: List[str] = ["temperament", "care", "physical", "social"]


class PropertyDefinition(BaseModel):
    """Definition of a selectable breed property."""

    model_config = {"validate_assignment": True}

    id: str
    name: str
    description: str
    icon: str
    category: PropertyCategory
    # Selection strength shown in the advanced filter, not used for ranking
    value: int = Field(default=0, ge=0, le=5)


class PropertyCatalog:
    """Catalog of advanced filter properties."""

    def __init__(self, properties: List[PropertyDefinition]):
        self.properties = {p.id: p for p in properties}

    @classmethod
    def load_from_file(cls, path: Optional[Path] = None) -> "PropertyCatalog":
        """Load property catalog from JSON file."""
        if path is None:
            path = Path(__file__).parent / "property_catalog.json"

        logger.debug(f"Loading property catalog from: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        properties = [PropertyDefinition(**p) for p in data["properties"]]
        logger.info(f"Loaded {len(properties)} properties from catalog")
        return cls(properties)

    def get_property(self, property_id: str) -> Optional[PropertyDefinition]:
        """Get a property by ID."""
        return self.properties.get(property_id)

    def get_all_properties(self) -> List[PropertyDefinition]:
        """Get all properties in catalog order."""
        return list(self.properties.values())

    def get_properties_by_category(self, category: str) -> List[PropertyDefinition]:
        """Get properties belonging to one category."""
        return [p for p in self.properties.values() if p.category == category]

    def get_property_ids(self) -> List[str]:
        return list(self.properties.keys())


class PropertyMapper:
    """Translate free-text temperament labels into canonical property ids."""

    def __init__(self, mappings: Dict[str, List[str]]):
        self.mappings = {label: list(ids) for label, ids in mappings.items()}

    @classmethod
    def load_from_file(cls, path: Optional[Path] = None) -> "PropertyMapper":
        """Load the temperament table from JSON file."""
        if path is None:
            path = Path(__file__).parent / "temperament_map.json"

        logger.debug(f"Loading temperament map from: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        logger.info(f"Loaded temperament map with {len(data['mappings'])} labels")
        return cls(data["mappings"])

    def map_temperament(self, temperament: Optional[Iterable[str]]) -> Set[str]:
        """
        Map temperament labels to property ids.

        Unknown labels contribute nothing; ``None`` or an empty sequence
        yields an empty set.

        Args:
            temperament: Ordered temperament labels of a breed

        Returns:
            Set of canonical property ids
        """
        if not temperament:
            return set()

        properties: Set[str] = set()
        for label in temperament:
            if not isinstance(label, str):
                continue
            properties.update(self.mappings.get(label, ()))
        return properties

    def effective_properties(self, breed: BreedRecord) -> Set[str]:
        """
        Get a breed's effective property set.

        Explicit properties win when non-empty, otherwise the temperament
        labels are mapped. The record itself is never modified.
        """
        if breed.properties:
            return set(breed.properties)
        return self.map_temperament(breed.temperament)

    def get_labels(self) -> List[str]:
        """Get all temperament labels known to the table."""
        return list(self.mappings.keys())


@lru_cache()
def get_property_catalog() -> PropertyCatalog:
    """Get cached property catalog instance."""
    return PropertyCatalog.load_from_file()


@lru_cache()
def get_property_mapper() -> PropertyMapper:
    """Get cached property mapper instance."""
    return PropertyMapper.load_from_file()


def map_temperament_to_properties(temperament: Optional[Iterable[str]]) -> Set[str]:
    """
    Convenience function to map temperament labels with the default table.

    Args:
        temperament: Temperament labels, may be None

    Returns:
        Set of canonical property ids
    """
    return get_property_mapper().map_temperament(temperament)
