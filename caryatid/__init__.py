"""Caryatid: manage Vagrant box catalogs on dumb storage.

A catalog is a single JSON file listing every version and provider of a
box; the box files live next to it. Storage is pluggable by URI scheme:

  - ``file://``: a local or mounted filesystem
  - ``s3://``: an S3 (or S3-compatible) bucket

Neither target needs any server-side logic.
"""

__version__ = "0.3.0"
__description__ = "Manage Vagrant box catalogs on dumb storage"

from caryatid.core.manager import BackendManager
from caryatid.models.catalog import BoxArtifact, Catalog, CatalogQueryParams

__all__ = [
    "BackendManager",
    "BoxArtifact",
    "Catalog",
    "CatalogQueryParams",
    "__version__",
]
