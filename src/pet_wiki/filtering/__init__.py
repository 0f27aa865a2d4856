"""Breed listing filters: state stores, property mapping and the filter engine."""

from pet_wiki.filtering.engine import (
    FilterEngine,
    FilterResult,
    available_options,
    collection_stats,
    recompute,
)
from pet_wiki.filtering.properties import (
    PropertyCatalog,
    PropertyDefinition,
    PropertyMapper,
    get_property_catalog,
    get_property_mapper,
    map_temperament_to_properties,
)
from pet_wiki.filtering.state import (
    SORT_OPTIONS,
    FilterState,
    FilterStore,
    PropertySelectionStore,
    parse_sort_option,
)

__all__ = [
    "FilterEngine",
    "FilterResult",
    "available_options",
    "collection_stats",
    "recompute",
    "PropertyCatalog",
    "PropertyDefinition",
    "PropertyMapper",
    "get_property_catalog",
    "get_property_mapper",
    "map_temperament_to_properties",
    "SORT_OPTIONS",
    "FilterState",
    "FilterStore",
    "PropertySelectionStore",
    "parse_sort_option",
]
