"""Tests for the forward (prefix) search index."""

import pytest

from plant_catalog.catalog import PlantCatalog
from plant_catalog.core.dataset.light_record import parse_light_record
from plant_catalog.core.search.index import SearchIndex, searchable_text, tokenize


@pytest.mark.parametrize("query", [None, "", "   ", "\t\n"])
def test_empty_query_means_no_text_filter(catalog: PlantCatalog, query: str | None) -> None:
    assert catalog.index.search(query) is None


@pytest.mark.parametrize("query", ["&", "--", " ? "])
def test_punctuation_only_query_matches_nothing(catalog: PlantCatalog, query: str) -> None:
    assert catalog.index.search(query) == frozenset()


def test_query_without_matches_returns_empty_set(catalog: PlantCatalog) -> None:
    result = catalog.index.search("zzzyx")
    assert result is not None
    assert result == frozenset()


def test_prefix_matches_longer_token(catalog: PlantCatalog) -> None:
    assert catalog.index.search("rhod") == {"rhododendron-catawbiense"}


def test_search_is_case_insensitive(catalog: PlantCatalog) -> None:
    assert catalog.index.search("BEACH") == {"rosa-rugosa"}


def test_every_prefix_of_every_blob_token_matches(catalog: PlantCatalog) -> None:
    for key in catalog.records:
        blob = catalog.index.blob(key)
        assert blob is not None
        for token in tokenize(blob):
            for end in range(1, len(token) + 1):
                hits = catalog.index.search(token[:end])
                assert hits is not None and key in hits, (key, token[:end])


def test_multi_word_query_requires_every_token(catalog: PlantCatalog) -> None:
    assert catalog.index.search("red map") == {"acer-rubrum"}
    assert catalog.index.search("red beach") == frozenset()


def test_query_is_not_phrase_exact(catalog: PlantCatalog) -> None:
    assert catalog.index.search("rose beach") == {"rosa-rugosa"}


def test_tags_and_cultivars_are_searchable(catalog: PlantCatalog) -> None:
    assert catalog.index.search("fall") == {"acer-rubrum"}
    assert catalog.index.search("october glory") == {"acer-rubrum"}


def test_problems_and_soil_are_searchable(catalog: PlantCatalog) -> None:
    assert catalog.index.search("slug") == {"hosta-plantaginea"}
    assert catalog.index.search("loam") == {"rhododendron-catawbiense"}


def test_facet_only_fields_are_not_searchable(catalog: PlantCatalog) -> None:
    assert catalog.index.search("herbaceous") == frozenset()


def test_key_is_searchable() -> None:
    records = {"ilex-opaca": parse_light_record("ilex-opaca", {})}
    index = SearchIndex.build(records)
    assert index.search("opa") == {"ilex-opaca"}


def test_searchable_text_skips_absent_fields() -> None:
    record = parse_light_record("x", {"f": "Xylo", "c": ["One", "Two"], "p": ["Rust"]})
    assert searchable_text(record) == "x Xylo One Two Rust"
