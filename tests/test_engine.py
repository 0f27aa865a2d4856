"""Tests for the breed listing filter engine."""

from pet_wiki.filtering.engine import (
    CARE_RANKS,
    SIZE_RANKS,
    FilterEngine,
    available_options,
    collection_stats,
    match_diagnostics,
    recompute,
)
from pet_wiki.filtering.properties import get_property_mapper
from pet_wiki.filtering.state import FilterState, FilterStore, PropertySelectionStore


def names(result):
    return [b.name for b in result.breeds]


class TestFilterPass:
    """Tests for search and facet filtering."""

    def test_no_filters_passes_everything(self, sample_breeds):
        """Default state keeps every breed in input order."""
        result = recompute(sample_breeds, FilterState(), [])
        assert names(result) == [b.name for b in sample_breeds]

    def test_empty_collection(self):
        result = recompute([], FilterState(size=["Klein"]), ["calm"])
        assert result.breeds == []
        assert result.diagnostics == {}
        assert result.count == 0

    def test_search_name_case_insensitive(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(search="MOPS"), [])
        assert names(result) == ["Mops"]

    def test_search_breed_label(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(search="schäfer"), [])
        assert names(result) == ["Deutscher Schäferhund"]

    def test_search_temperament(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(search="lernwill"), [])
        assert names(result) == ["Border Collie"]

    def test_search_whitespace_only_is_no_constraint(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(search="   "), [])
        assert result.count == len(sample_breeds)

    def test_size_filter(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(size=["Klein", "Groß"]), [])
        # Xoloitzcuintle has no size and passes
        assert names(result) == ["Deutscher Schäferhund", "Mops", "Xoloitzcuintle"]

    def test_missing_size_passes_any_selection(self, make_breed):
        breed = make_breed("Labrador", size=None)
        for selection in (["Klein"], ["Groß", "Sehr groß"], ["Unbekannt"]):
            result = recompute([breed], FilterState(size=selection), [])
            assert names(result) == ["Labrador"]

    def test_care_level_filter(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(care_level=["Niedrig"]), [])
        assert names(result) == ["Beagle", "Mops", "Xoloitzcuintle"]

    def test_temperament_any_semantics(self, make_breed):
        """One shared label is enough."""
        breed = make_breed("Akita", temperament=["Intelligent", "Loyal"])
        result = recompute([breed], FilterState(temperament=["Loyal", "Playful"]), [])
        assert names(result) == ["Akita"]

    def test_temperament_rejects_without_overlap(self, make_breed):
        breed = make_breed("Akita", temperament=["Intelligent", "Loyal"])
        result = recompute([breed], FilterState(temperament=["Ruhig"]), [])
        assert result.breeds == []

    def test_temperament_missing_passes(self, make_breed):
        breeds = [make_breed("Akita", temperament=None), make_breed("Basenji", temperament=[])]
        result = recompute(breeds, FilterState(temperament=["Ruhig"]), [])
        assert names(result) == ["Akita", "Basenji"]

    def test_properties_require_intersection(self, sample_breeds):
        """No vacuous pass for advanced properties."""
        result = recompute(sample_breeds, FilterState(), ["calm"])
        assert names(result) == ["Dogge", "Mops"]

    def test_properties_or_semantics(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(), ["protective", "playful"])
        assert names(result) == ["Beagle", "Deutscher Schäferhund"]

    def test_property_selection_falls_back_to_state(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(properties=["calm"]))
        assert names(result) == ["Dogge", "Mops"]

    def test_combined_filters(self, sample_breeds):
        filters = FilterState(size=["Mittel"], care_level=["Hoch"], search="collie")
        assert names(recompute(sample_breeds, filters, ["training_easy"])) == ["Border Collie"]

    def test_end_to_end_scenario(self, make_breed):
        """Size filter with a null-size breed, sorted by name."""
        breeds = [
            make_breed("Mops", size="Klein"),
            make_breed("Dobermann", size="Groß"),
            make_breed("Labrador", size=None),
        ]
        filters = FilterState(size=["Klein"], sort_by="name", sort_order="asc")
        assert names(recompute(breeds, filters, [])) == ["Labrador", "Mops"]


class TestSortPass:
    """Tests for ordering."""

    def test_name_desc(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(sort_order="desc"), [])
        assert names(result) == [b.name for b in reversed(sample_breeds)]

    def test_name_locale_aware(self, make_breed):
        """Accents and case do not push names to the end."""
        breeds = [
            make_breed("Zwergspitz"),
            make_breed("Ägyptische Mau"),
            make_breed("afghane"),
            make_breed("Beagle"),
        ]
        result = recompute(breeds, FilterState(sort_by="name"), [])
        assert names(result) == ["afghane", "Ägyptische Mau", "Beagle", "Zwergspitz"]

    def test_size_ranks(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(sort_by="size"), [])
        # Unranked (no size) first, then Klein, Mittel x2 (input order), Groß, Sehr groß
        assert names(result) == [
            "Xoloitzcuintle", "Mops", "Beagle", "Border Collie", "Deutscher Schäferhund", "Dogge",
        ]

    def test_size_desc_keeps_ties_stable(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(sort_by="size", sort_order="desc"), [])
        assert names(result) == [
            "Dogge", "Deutscher Schäferhund", "Beagle", "Border Collie", "Mops", "Xoloitzcuintle",
        ]

    def test_size_stable_for_equal_sizes(self, make_breed):
        breeds = [make_breed("Zeta", size="Mittel"), make_breed("Alpha", size="Mittel")]
        result = recompute(breeds, FilterState(sort_by="size"), [])
        assert names(result) == ["Zeta", "Alpha"]

    def test_unmapped_size_ranks_zero(self, make_breed):
        breeds = [make_breed("A", size="Klein"), make_breed("B", size="Riesig")]
        result = recompute(breeds, FilterState(sort_by="size"), [])
        assert names(result) == ["B", "A"]

    def test_care_ranks(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(sort_by="care"), [])
        assert names(result) == [
            "Xoloitzcuintle", "Beagle", "Mops", "Deutscher Schäferhund", "Dogge", "Border Collie",
        ]

    def test_rank_tables(self):
        assert SIZE_RANKS == {"Klein": 1, "Mittel": 2, "Groß": 3, "Sehr groß": 4}
        assert CARE_RANKS == {"Niedrig": 1, "Mittel": 2, "Hoch": 3, "Anspruchsvoll": 4}

    def test_properties_sort_most_matches_first(self, make_breed):
        breeds = [
            make_breed("One", properties=["calm"]),
            make_breed("Two", properties=["calm", "loyal"]),
            make_breed("OtherOne", properties=["loyal"]),
        ]
        result = recompute(breeds, FilterState(sort_by="properties"), ["calm", "loyal"])
        assert names(result) == ["Two", "One", "OtherOne"]

    def test_properties_sort_desc_reverses(self, make_breed):
        breeds = [
            make_breed("One", properties=["calm"]),
            make_breed("Two", properties=["calm", "loyal"]),
            make_breed("OtherOne", properties=["loyal"]),
        ]
        filters = FilterState(sort_by="properties", sort_order="desc")
        result = recompute(breeds, filters, ["calm", "loyal"])
        assert names(result) == ["One", "OtherOne", "Two"]

    def test_unknown_sort_keeps_order(self, sample_breeds):
        for sort_by in ("rating", "origin", ""):
            for sort_order in ("asc", "desc"):
                filters = FilterState(sort_by=sort_by, sort_order=sort_order)
                assert names(recompute(sample_breeds, filters, [])) == [
                    b.name for b in sample_breeds
                ]


class TestDiagnostics:
    """Tests for per-breed match diagnostics."""

    def test_diagnostics_in_selection_order(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(), ["loyal", "intelligent", "calm"])
        shepherd = next(b for b in result.breeds if b.name == "Deutscher Schäferhund")
        assert result.matched_properties(shepherd) == ["loyal", "intelligent"]

    def test_diagnostics_empty_without_selection(self, sample_breeds):
        result = recompute(sample_breeds, FilterState(), [])
        assert all(matches == [] for matches in result.diagnostics.values())
        assert set(result.diagnostics) == {b.id for b in sample_breeds}

    def test_match_diagnostics_helper(self, make_breed):
        breed = make_breed("Mops", properties=["calm"])
        assert match_diagnostics(breed, ["loyal", "calm"], get_property_mapper()) == ["calm"]

    def test_deterministic(self, sample_breeds):
        """Same inputs, same output."""
        filters = FilterState(sort_by="properties", size=["Mittel", "Groß"])
        selection = ["intelligent", "exercise_needs"]
        first = recompute(sample_breeds, filters, selection)
        second = recompute(sample_breeds, filters, selection)
        assert names(first) == names(second)
        assert first.diagnostics == second.diagnostics

    def test_input_not_modified(self, sample_breeds):
        snapshot = [b.model_dump() for b in sample_breeds]
        recompute(sample_breeds, FilterState(sort_by="name", sort_order="desc"), ["calm"])
        assert [b.model_dump() for b in sample_breeds] == snapshot


class TestFilterEngine:
    """Tests for the store-driven engine wrapper."""

    def test_refresh_writes_count(self, sample_breeds):
        filter_store = FilterStore()
        property_store = PropertySelectionStore()
        engine = FilterEngine(filter_store, property_store)

        filter_store.update_filter("size", ["Mittel"])
        result = engine.refresh(sample_breeds)
        assert filter_store.filtered_count == result.count == 3

        property_store.toggle_property("training_easy")
        result = engine.refresh(sample_breeds)
        assert names(result) == ["Border Collie"]
        assert filter_store.filtered_count == 1

    def test_refresh_after_reset(self, sample_breeds):
        filter_store = FilterStore()
        engine = FilterEngine(filter_store, PropertySelectionStore())
        filter_store.update_filter("search", "Husky")
        assert engine.refresh(sample_breeds).count == 0
        filter_store.reset_filters()
        assert engine.refresh(sample_breeds).count == len(sample_breeds)


class TestListingHelpers:
    """Tests for facet options and listing statistics."""

    def test_available_options(self, sample_breeds):
        options = available_options(sample_breeds)
        assert options["size"] == ["Groß", "Klein", "Mittel", "Sehr groß"]
        assert options["care_level"] == ["Hoch", "Mittel", "Niedrig"]
        assert "Intelligent" in options["temperament"]
        assert len(options["temperament"]) == len(set(options["temperament"]))

    def test_collection_stats(self, make_breed):
        breeds = [
            make_breed("A", size="Klein", origin="Deutschland"),
            make_breed("B", size="Klein", care_level="Hoch", origin="China"),
            make_breed("C"),
        ]
        assert collection_stats(breeds) == {
            "breeds": 3, "sizes": 1, "care_levels": 1, "origins": 2,
        }
