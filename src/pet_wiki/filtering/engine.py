"""Filter, sort and match engine for breed listings."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from pet_wiki.db.models import BreedRecord
from pet_wiki.filtering.properties import PropertyMapper, get_property_mapper
from pet_wiki.filtering.state import FilterState, FilterStore, PropertySelectionStore
from pet_wiki.utils.logging import get_logger
from pet_wiki.utils.text import collation_key

logger = get_logger(__name__)

# Unlisted labels rank 0
SIZE_RANKS: Dict[str, int] = {
    "Klein": 1,
    "Mittel": 2,
    "Groß": 3,
    "Sehr groß": 4,
}

CARE_RANKS: Dict[str, int] = {
    "Niedrig": 1,
    "Mittel": 2,
    "Hoch": 3,
    "Anspruchsvoll": 4,
}


@dataclass
class FilterResult:
    """Ordered visible breeds plus per-breed property matches."""

    breeds: List[BreedRecord] = field(default_factory=list)
    # breed id -> selected property ids the breed satisfies
    diagnostics: Dict[int, List[str]] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.breeds)

    def matched_properties(self, breed: BreedRecord) -> List[str]:
        return self.diagnostics.get(breed.id, [])


def _contains(text: Optional[str], needle: str) -> bool:
    return bool(text) and needle in text.lower()


def matches_search(breed: BreedRecord, search: str) -> bool:
    """Case-insensitive substring match on name, breed or any temperament label."""
    needle = search.lower()
    if _contains(breed.name, needle) or _contains(breed.breed, needle):
        return True
    return any(_contains(label, needle) for label in breed.temperament or ())


def matches_breed(
    breed: BreedRecord,
    filters: FilterState,
    selected_properties: Sequence[str],
    mapper: PropertyMapper,
) -> bool:
    """
    Decide whether a breed stays in the listing.

    Facets only reject breeds that carry the facet's data: a breed without a
    size passes any size selection, and likewise for care level and
    temperament. The advanced property selection has no such pass, so a
    breed without effective properties is dropped once anything is selected.
    """
    if filters.search and filters.search.strip():
        if not matches_search(breed, filters.search):
            return False

    if filters.size and breed.size:
        if breed.size not in filters.size:
            return False

    if filters.care_level and breed.care_level:
        if breed.care_level not in filters.care_level:
            return False

    if filters.temperament and breed.temperament:
        if not any(label in breed.temperament for label in filters.temperament):
            return False

    if selected_properties:
        effective = mapper.effective_properties(breed)
        if not any(prop in effective for prop in selected_properties):
            return False

    return True


def match_diagnostics(
    breed: BreedRecord,
    selected_properties: Sequence[str],
    mapper: PropertyMapper,
) -> List[str]:
    """Selected property ids the breed satisfies, in selection order."""
    if not selected_properties:
        return []
    effective = mapper.effective_properties(breed)
    return [prop for prop in selected_properties if prop in effective]


def sort_breeds(
    breeds: Iterable[BreedRecord],
    filters: FilterState,
    selected_properties: Sequence[str],
    mapper: PropertyMapper,
) -> List[BreedRecord]:
    """
    Stable sort by the configured key.

    ``sort_order == "desc"`` reverses the comparison while keeping ties in
    input order. An unknown ``sort_by`` returns the input order.
    """
    breeds = list(breeds)
    descending = filters.sort_order == "desc"

    if filters.sort_by == "name":
        key = lambda b: collation_key(b.name)
    elif filters.sort_by == "size":
        key = lambda b: SIZE_RANKS.get(b.size or "", 0)
    elif filters.sort_by == "care":
        key = lambda b: CARE_RANKS.get(b.care_level or "", 0)
    elif filters.sort_by == "properties":
        # More matches first in ascending order
        key = lambda b: -len(match_diagnostics(b, selected_properties, mapper))
    else:
        return breeds

    # reverse=True keeps equal elements in their original order
    return sorted(breeds, key=key, reverse=descending)


def recompute(
    collection: Sequence[BreedRecord],
    filter_state: FilterState,
    property_selection: Optional[Sequence[str]] = None,
    mapper: Optional[PropertyMapper] = None,
) -> FilterResult:
    """
    Compute the visible breeds for a listing.

    Pure function of its inputs: the same collection, filters and selection
    always give the same ordering and diagnostics.

    Args:
        collection: Full candidate breeds for one species
        filter_state: Current search, facets and sort
        property_selection: Selected advanced property ids; falls back to
            ``filter_state.properties`` when omitted
        mapper: Temperament mapper (uses default if None)

    Returns:
        FilterResult with ordered breeds and per-breed matches
    """
    mapper = mapper or get_property_mapper()
    if property_selection is None:
        property_selection = filter_state.properties
    selected = list(property_selection)

    logger.debug(f"Starting with {len(collection)} breeds")
    retained = [b for b in collection if matches_breed(b, filter_state, selected, mapper)]
    logger.debug(f"After filtering: {len(retained)} breeds")

    ordered = sort_breeds(retained, filter_state, selected, mapper)
    diagnostics = {b.id: match_diagnostics(b, selected, mapper) for b in ordered}

    return FilterResult(breeds=ordered, diagnostics=diagnostics)


class FilterEngine:
    """Recompute a listing from its stores and publish the result count."""

    def __init__(
        self,
        filter_store: FilterStore,
        property_store: Optional[PropertySelectionStore] = None,
        mapper: Optional[PropertyMapper] = None,
    ):
        self.filter_store = filter_store
        self.property_store = property_store
        self.mapper = mapper or get_property_mapper()

    def refresh(self, collection: Sequence[BreedRecord]) -> FilterResult:
        """Run the engine on the current state and write back the count."""
        selection = (
            self.property_store.selected_properties if self.property_store is not None else None
        )
        result = recompute(collection, self.filter_store.filters, selection, self.mapper)
        self.filter_store.set_filtered_count(result.count)
        return result


def available_options(collection: Iterable[BreedRecord]) -> Dict[str, List[str]]:
    """Distinct facet values present in a collection, sorted."""
    breeds = list(collection)
    return {
        "size": sorted({b.size for b in breeds if b.size}),
        "care_level": sorted({b.care_level for b in breeds if b.care_level}),
        "temperament": sorted(
            {label for b in breeds for label in b.temperament or () if isinstance(label, str)}
        ),
    }


def collection_stats(collection: Iterable[BreedRecord]) -> Dict[str, int]:
    """Counts shown above a listing: breeds, sizes, care levels, origins."""
    breeds = list(collection)
    return {
        "breeds": len(breeds),
        "sizes": len({b.size for b in breeds if b.size}),
        "care_levels": len({b.care_level for b in breeds if b.care_level}),
        "origins": len({b.origin for b in breeds if b.origin}),
    }
