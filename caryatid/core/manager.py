"""BackendManager: read, change and write a catalog through a backend.

Every operation is a sequential read-modify-write. Nothing guards against
two writers changing the same catalog at once: both read the old catalog and
the second write silently replaces the first.

Ordering:

* ``add_box`` persists the catalog *before* copying the box file, so a failed
  copy leaves the catalog pointing at a box that does not exist yet.
* ``delete_box`` persists the catalog *before* deleting box files, so a
  failed delete leaves an orphaned box file that the catalog no longer
  mentions.
"""

from __future__ import annotations

import logging

from caryatid.backends import (
    Backend,
    BindableBackend,
    box_uri_from_catalog_uri,
    new_backend_from_uri,
)
from caryatid.core.query import box_references, delete_references, query_catalog
from caryatid.core.versioning import ComparableVersion
from caryatid.errors import CatalogCorruptError
from caryatid.models.catalog import (
    BoxArtifact,
    BoxReference,
    Catalog,
    CatalogQueryParams,
)

logger = logging.getLogger(__name__)


class BackendManager:
    """Manages one Vagrant catalog through a storage backend.

    Parameters
    ----------
    catalog_uri:
        URI of the catalog JSON, e.g. ``file:///srv/vagrant/testbox.json``
        or ``s3://bucket/vagrant/testbox.json``.
    backend:
        The backend to use. Resolved from the URI scheme when omitted.
    """

    def __init__(self, catalog_uri: str, backend: Backend | None = None) -> None:
        self.catalog_uri = catalog_uri
        if backend is None:
            backend = new_backend_from_uri(catalog_uri)
        self.backend: Backend = backend
        if isinstance(self.backend, BindableBackend):
            self.backend.bind(self)

    def get_catalog(self) -> Catalog:
        """Fetch and decode the catalog; raises ``CatalogCorruptError`` on bad bytes."""
        data = self.backend.get_catalog_bytes()
        try:
            return Catalog.from_json_bytes(data)
        except CatalogCorruptError:
            logger.error("Could not decode catalog at %s", self.catalog_uri)
            raise

    def save_catalog(self, catalog: Catalog) -> None:
        self.backend.set_catalog_bytes(catalog.to_json_bytes())

    def add_box(
        self,
        local_path: str,
        name: str,
        description: str,
        version: str,
        provider: str,
        checksum_type: str,
        checksum: str,
    ) -> None:
        """Record a box in the catalog, then copy the box file next to it."""
        # Fail before touching storage.
        ComparableVersion.parse(version)

        catalog = self.get_catalog()
        artifact_uri = box_uri_from_catalog_uri(self.catalog_uri, name, version, provider)
        catalog.add_box(
            name, description, version, provider, checksum_type, checksum, artifact_uri
        )
        self.save_catalog(catalog)
        try:
            self.backend.copy_box_file(local_path, name, version, provider)
        except Exception:
            logger.error(
                "Catalog %s now references %s, but copying the box file failed",
                self.catalog_uri, artifact_uri,
            )
            raise
        logger.info("Added %s/%s v%s to %s", name, provider, version, self.catalog_uri)

    def add_artifact(self, artifact: BoxArtifact) -> None:
        """``add_box`` for a ``BoxArtifact`` descriptor."""
        self.add_box(
            artifact.path,
            artifact.name,
            artifact.description,
            artifact.version,
            artifact.provider,
            artifact.checksum_type,
            artifact.checksum,
        )

    def query_box(self, params: CatalogQueryParams) -> Catalog:
        """Return the part of the stored catalog matching ``params``."""
        return query_catalog(self.get_catalog(), params)

    def delete_box(self, params: CatalogQueryParams) -> list[BoxReference]:
        """Remove every box matching ``params`` from the catalog and storage.

        Returns the references that were removed.
        """
        catalog = self.get_catalog()
        refs = box_references(query_catalog(catalog, params))
        self.save_catalog(delete_references(catalog, refs))

        for ref in refs:
            try:
                self.backend.delete_file(ref.uri)
            except Exception:
                logger.error(
                    "Removed %s/%s from catalog %s but could not delete %s",
                    ref.version, ref.provider_name, self.catalog_uri, ref.uri,
                )
                raise
        logger.info("Deleted %d box(es) from %s", len(refs), self.catalog_uri)
        return refs
