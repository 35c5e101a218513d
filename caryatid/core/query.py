"""Catalog queries and query-driven deletion.

All functions are pure: they return new catalogs and never modify their
input. Deletion is defined in terms of querying (find the matching
references, then subtract them), so a delete always removes exactly what
the same query would show.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from caryatid.core.versioning import ComparableVersion, parse_query_qualifier
from caryatid.errors import InvalidQueryError
from caryatid.models.catalog import (
    BoxReference,
    Catalog,
    CatalogQueryParams,
    Version,
)

logger = logging.getLogger(__name__)


def _with_versions(catalog: Catalog, versions: list[Version]) -> Catalog:
    return Catalog(
        name=catalog.name,
        description=catalog.description,
        versions=versions,
    )


def query_versions(catalog: Catalog, version_query: str) -> Catalog:
    """Keep the versions matching a query like ``<=1.2.3``.

    An empty query keeps every version. Source order is preserved.
    """
    if not version_query:
        return catalog.model_copy(deep=True)

    query_version, accepted = parse_query_qualifier(version_query)
    matched = [
        entry.model_copy(deep=True)
        for entry in catalog.versions
        if ComparableVersion.parse(entry.version).compare(query_version) in accepted
    ]
    logger.debug(
        "Version query %r matched %d of %d versions",
        version_query, len(matched), len(catalog.versions),
    )
    return _with_versions(catalog, matched)


def query_providers(catalog: Catalog, provider_query: str) -> Catalog:
    """Keep the providers whose name matches a regex (unanchored search).

    An empty pattern matches every provider. Versions left without
    providers are dropped.
    """
    if not provider_query:
        return catalog.model_copy(deep=True)

    try:
        pattern = re.compile(provider_query)
    except re.error as exc:
        raise InvalidQueryError(
            f"Invalid provider query {provider_query!r}: {exc}"
        ) from exc

    versions: list[Version] = []
    for entry in catalog.versions:
        providers = [p for p in entry.providers if pattern.search(p.name)]
        if providers:
            versions.append(Version(version=entry.version, providers=providers))
    return _with_versions(catalog, versions)


def query_catalog(catalog: Catalog, params: CatalogQueryParams) -> Catalog:
    """Filter by version first, then by provider within the surviving versions."""
    return query_providers(query_versions(catalog, params.version), params.provider)


def box_references(catalog: Catalog) -> list[BoxReference]:
    """List a reference for every provider of every version."""
    return [
        BoxReference(version=entry.version, provider_name=provider.name, uri=provider.url)
        for entry in catalog.versions
        for provider in entry.providers
    ]


def delete_references(catalog: Catalog, refs: Iterable[BoxReference]) -> Catalog:
    """Return the catalog without the referenced providers.

    Versions left without providers are dropped.
    """
    doomed = {ref.key for ref in refs}
    versions: list[Version] = []
    for entry in catalog.versions:
        providers = [
            p for p in entry.providers if (entry.version, p.name) not in doomed
        ]
        if providers:
            versions.append(Version(version=entry.version, providers=providers))
    return _with_versions(catalog, versions)


def delete(catalog: Catalog, params: CatalogQueryParams) -> Catalog:
    """Return the catalog without everything ``query_catalog`` would match."""
    refs = box_references(query_catalog(catalog, params))
    return delete_references(catalog, refs)
