"""Caryatid data models: all Pydantic v2."""

from caryatid.models.catalog import (
    BoxArtifact,
    BoxReference,
    Catalog,
    CatalogQueryParams,
    Provider,
    Version,
)

__all__ = [
    "BoxArtifact",
    "BoxReference",
    "Catalog",
    "CatalogQueryParams",
    "Provider",
    "Version",
]
