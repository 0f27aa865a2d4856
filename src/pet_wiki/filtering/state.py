"""Filter state stores for a breed listing view.

Each listing view owns one ``FilterStore`` and one ``PropertySelectionStore``.
Both are plain in-memory containers; nothing here performs I/O.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from pet_wiki.filtering.properties import (
    PropertyCatalog,
    PropertyDefinition,
    get_property_catalog,
)
from pet_wiki.utils.logging import get_logger

logger = get_logger(__name__)

FACET_FIELDS = ("size", "care_level", "temperament")

# Sidebar sort choices: option value -> label
SORT_OPTIONS: Dict[str, str] = {
    "name-asc": "Name A-Z",
    "name-desc": "Name Z-A",
    "size-asc": "Klein → Groß",
    "size-desc": "Groß → Klein",
    "care-asc": "Pflegeleicht",
    "care-desc": "Anspruchsvoll",
    "properties-desc": "Beste Matches",
}

FACET_LABELS: Dict[str, str] = {
    "size": "Größe",
    "care_level": "Pflege",
    "temperament": "Charakter",
}


class FilterState(BaseModel):
    """Active search, facet selection and sort configuration."""

    model_config = {"populate_by_name": True}

    search: str = ""
    size: List[str] = Field(default_factory=list)
    care_level: List[str] = Field(default_factory=list, alias="careLevel")
    temperament: List[str] = Field(default_factory=list)
    properties: List[str] = Field(default_factory=list)
    # Open strings: unknown values are kept and mean "no reordering"
    sort_by: str = Field(default="name", alias="sortBy")
    sort_order: str = Field(default="asc", alias="sortOrder")


def _resolve_field(key: str) -> str:
    """Map a field name or its camelCase alias to the model field name."""
    if key in FilterState.model_fields:
        return key
    for name, info in FilterState.model_fields.items():
        if info.alias == key:
            return name
    raise KeyError(f"Unknown filter field: {key}")


def parse_sort_option(option: str) -> Tuple[str, str]:
    """
    Split a combined sort option like ``"size-desc"``.

    A missing direction defaults to ``"asc"``.
    """
    sort_by, _, sort_order = option.partition("-")
    return sort_by, sort_order or "asc"


class FilterStore:
    """Single source of truth for the listing's filter configuration."""

    def __init__(self):
        self._filters = FilterState()
        self._filtered_count = 0

    @property
    def filters(self) -> FilterState:
        return self._filters

    def update_filter(self, key: str, value: Any) -> None:
        """
        Replace the value of exactly one filter field.

        Values are not checked against the field's domain; an unknown
        ``sort_by`` simply leaves the listing order unchanged.

        Args:
            key: Field name (``care_level``) or alias (``careLevel``)
            value: New value for that field

        Raises:
            KeyError: If ``key`` names no filter field
        """
        field_name = _resolve_field(key)
        if isinstance(value, (set, frozenset, tuple)):
            value = list(value)
        self._filters = self._filters.model_copy(update={field_name: value})
        logger.debug(f"Filter updated: {field_name}={value!r}")

    def toggle_facet_value(self, key: str, value: str) -> None:
        """Add a facet value if absent, remove it if present."""
        field_name = _resolve_field(key)
        current: List[str] = getattr(self._filters, field_name)
        if value in current:
            updated = [v for v in current if v != value]
        else:
            updated = [*current, value]
        self.update_filter(field_name, updated)

    def set_sort(self, option: str) -> None:
        """Apply a combined sort option such as ``"name-desc"``."""
        sort_by, sort_order = parse_sort_option(option)
        self.update_filter("sort_by", sort_by)
        self.update_filter("sort_order", sort_order)

    def reset_filters(self) -> None:
        """Restore defaults. The advanced property selection is not touched."""
        self._filters = FilterState()
        logger.debug("Filters reset")

    @property
    def filtered_count(self) -> int:
        return self._filtered_count

    def set_filtered_count(self, count: int) -> None:
        self._filtered_count = count

    def active_filter_count(self) -> int:
        """Number of selected facet values across size, care level and temperament."""
        return sum(len(getattr(self._filters, name)) for name in FACET_FIELDS)

    def has_active_search(self) -> bool:
        return len(self._filters.search) > 0

    def facet_button_text(self, key: str) -> str:
        """Label for a facet dropdown: its name, the single choice, or a count."""
        field_name = _resolve_field(key)
        selected: List[str] = getattr(self._filters, field_name)
        if not selected:
            return FACET_LABELS.get(field_name, field_name)
        if len(selected) == 1:
            return selected[0]
        return f"{len(selected)} ausgewählt"


class PropertySelectionStore:
    """Advanced property selection for one listing view."""

    def __init__(self, catalog: Optional[PropertyCatalog] = None):
        catalog = catalog or get_property_catalog()
        # Private copies: selection strength is per-view state
        self._properties: List[PropertyDefinition] = [
            p.model_copy() for p in catalog.get_all_properties()
        ]
        self._selected: List[str] = []

    @property
    def properties(self) -> List[PropertyDefinition]:
        return list(self._properties)

    @property
    def selected_properties(self) -> List[str]:
        return list(self._selected)

    def toggle_property(self, property_id: str) -> None:
        """Select a property, or deselect it if already selected."""
        if property_id in self._selected:
            self._selected = [p for p in self._selected if p != property_id]
        else:
            self._selected = [*self._selected, property_id]
        logger.debug(f"Selected properties: {self._selected}")

    def reset_properties(self) -> None:
        self._selected = []

    def get_property(self, property_id: str) -> Optional[PropertyDefinition]:
        for prop in self._properties:
            if prop.id == property_id:
                return prop
        return None

    def get_properties_by_category(self, category: str) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.category == category]

    def selected_in_category(self, category: str) -> List[str]:
        """Selected property ids that belong to one category."""
        in_category = {p.id for p in self.get_properties_by_category(category)}
        return [p for p in self._selected if p in in_category]

    def set_property_value(self, property_id: str, value: int) -> None:
        """
        Set a property's 0-5 selection strength.

        Raises:
            KeyError: If the property is not in the catalog
            pydantic.ValidationError: If ``value`` is outside 0-5
        """
        prop = self.get_property(property_id)
        if prop is None:
            raise KeyError(f"Unknown property: {property_id}")
        prop.value = value

    def get_average_rating(self, category: Optional[str] = None) -> float:
        """Mean selection strength, optionally within one category."""
        relevant = self.get_properties_by_category(category) if category else self._properties
        if not relevant:
            return 0.0
        return sum(p.value for p in relevant) / len(relevant)
