"""Tests for catalog queries and query-driven deletion."""

from __future__ import annotations

import pytest

from caryatid.core.query import (
    box_references,
    delete,
    delete_references,
    query_catalog,
    query_providers,
    query_versions,
)
from caryatid.errors import InvalidQueryError, MalformedVersionError
from caryatid.models.catalog import BoxReference, Catalog, CatalogQueryParams

STRONG = "StrongSapling"
FEEBLE = "FeebleFungus"


def _versions(catalog: Catalog) -> list[str]:
    return [v.version for v in catalog.versions]


def _pairs(catalog: Catalog) -> list[tuple[str, list[str]]]:
    return [(v.version, [p.name for p in v.providers]) for v in catalog.versions]


# ---------------------------------------------------------------------------
# Version queries
# ---------------------------------------------------------------------------


class TestQueryVersions:
    @pytest.mark.parametrize(
        "query, expected",
        [
            (">2", ["2.11.1"]),
            ("<=0.3.5", ["0.3.5", "0.3.4", "0.3.5-BETA"]),
            ("0.3.5", ["0.3.5", "0.3.5-BETA"]),
            ("=0.3.5", ["0.3.5"]),
            ("=0.3.6", []),
            ("<0.3.5", ["0.3.4"]),
            (">=1.2.4", ["1.4.5", "1.2.4", "2.11.1"]),
            ("=0.3.5-BETA", ["0.3.5-BETA"]),
        ],
    )
    def test_qualifiers(self, reference_catalog, query, expected):
        assert _versions(query_versions(reference_catalog, query)) == expected

    def test_empty_query_returns_everything(self, reference_catalog):
        result = query_versions(reference_catalog, "")
        assert result == reference_catalog
        assert result is not reference_catalog

    def test_keeps_name_and_description(self, reference_catalog):
        result = query_versions(reference_catalog, ">2")
        assert result.name == reference_catalog.name
        assert result.description == reference_catalog.description

    def test_input_is_not_modified(self, reference_catalog):
        before = reference_catalog.model_copy(deep=True)
        query_versions(reference_catalog, "=1.0.0")
        assert reference_catalog == before

    def test_malformed_query(self, reference_catalog):
        with pytest.raises(MalformedVersionError):
            query_versions(reference_catalog, ">=one")

    def test_malformed_stored_version(self, make_catalog):
        catalog = make_catalog(("1.0.0", [STRONG]), ("banana", [STRONG]))
        with pytest.raises(MalformedVersionError):
            query_versions(catalog, ">0")


# ---------------------------------------------------------------------------
# Provider queries
# ---------------------------------------------------------------------------


class TestQueryProviders:
    def test_anchored_pattern(self, reference_catalog):
        result = query_providers(reference_catalog, "^Strong")
        assert all(p.name == STRONG for v in result.versions for p in v.providers)
        assert _versions(result) == [
            "0.3.5", "0.3.5-BETA", "1.0.0", "1.4.5", "1.2.3", "1.2.4",
        ]

    def test_unanchored_search(self, reference_catalog):
        result = query_providers(reference_catalog, "Fung")
        assert _versions(result) == ["0.3.4", "0.3.5-BETA", "1.0.1", "1.2.3", "2.11.1"]

    def test_empty_pattern_matches_everything(self, reference_catalog):
        assert query_providers(reference_catalog, "") == reference_catalog

    def test_no_match_drops_every_version(self, reference_catalog):
        assert query_providers(reference_catalog, "^vmware").versions == []

    def test_invalid_regex(self, reference_catalog):
        with pytest.raises(InvalidQueryError):
            query_providers(reference_catalog, "([")


class TestQueryCatalog:
    def test_versions_then_providers(self, reference_catalog):
        params = CatalogQueryParams(version="<=1", provider="Feeb")
        assert _pairs(query_catalog(reference_catalog, params)) == [
            ("0.3.4", [FEEBLE]),
            ("0.3.5-BETA", [FEEBLE]),
        ]

    def test_empty_params_match_everything(self, reference_catalog):
        assert query_catalog(reference_catalog, CatalogQueryParams()) == reference_catalog


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


class TestDelete:
    def test_box_references(self, make_catalog):
        catalog = make_catalog(("1.0.0", [STRONG, FEEBLE]), ("2.0.0", [FEEBLE]))
        refs = box_references(catalog)
        assert refs == [
            BoxReference(version="1.0.0", provider_name=STRONG),
            BoxReference(version="1.0.0", provider_name=FEEBLE),
            BoxReference(version="2.0.0", provider_name=FEEBLE),
        ]
        assert all(ref.uri == "http://example.com/this/is/my/box" for ref in refs)

    def test_delete_by_version_and_provider(self, reference_catalog):
        params = CatalogQueryParams(version="<=1", provider="Feeb")
        assert _pairs(delete(reference_catalog, params)) == [
            ("0.3.5", [STRONG]),
            ("0.3.5-BETA", [STRONG]),
            ("1.0.0", [STRONG]),
            ("1.0.1", [FEEBLE]),
            ("1.4.5", [STRONG]),
            ("1.2.3", [STRONG, FEEBLE]),
            ("1.2.4", [STRONG]),
            ("2.11.1", [FEEBLE]),
        ]

    def test_delete_with_empty_params_removes_everything(self, reference_catalog):
        result = delete(reference_catalog, CatalogQueryParams())
        assert result.versions == []
        assert result.name == reference_catalog.name

    def test_deleted_boxes_no_longer_match(self, reference_catalog):
        params = CatalogQueryParams(version="0.3.5")
        remaining = delete(reference_catalog, params)
        assert query_catalog(remaining, params).versions == []

    def test_delete_references_ignores_unknown(self, reference_catalog):
        refs = [BoxReference(version="9.9.9", provider_name=STRONG)]
        assert delete_references(reference_catalog, refs) == reference_catalog

    def test_input_is_not_modified(self, reference_catalog):
        before = reference_catalog.model_copy(deep=True)
        delete(reference_catalog, CatalogQueryParams(provider="Strong"))
        assert reference_catalog == before
