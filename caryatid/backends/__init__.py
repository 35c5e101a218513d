"""Backend protocol and registry for catalog storage.

A backend stores two things on a "dumb" target with no server-side logic:
the catalog's JSON bytes and the box files next to it. Every backend
implements the ``Backend`` protocol below; adding a new storage technology
never touches the catalog model or the query engine.

Backends are selected by the scheme of the catalog URI:

* ``file``: ``LocalFileBackend``
* ``s3``: ``S3Backend``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from caryatid.backends._uri import (
    box_uri_from_catalog_uri,
    catalog_root_uri,
    ensure_scheme,
    uri_scheme,
)
from caryatid.backends.local_file import LocalFileBackend
from caryatid.backends.s3 import S3Backend
from caryatid.errors import UnknownBackendError

if TYPE_CHECKING:
    from caryatid.core.manager import BackendManager

logger = logging.getLogger(__name__)


@runtime_checkable
class Backend(Protocol):
    """Protocol that every catalog storage backend must implement."""

    @property
    def scheme(self) -> str:
        """The URI scheme this backend owns, e.g. ``"file"`` or ``"s3"``."""
        ...

    def get_catalog_bytes(self) -> bytes:
        """Return the stored catalog, or ``b"{}"`` if none exists yet."""
        ...

    def set_catalog_bytes(self, data: bytes) -> None:
        """Store the catalog, creating any parent structure it needs."""
        ...

    def copy_box_file(
        self, local_path: str, box_name: str, box_version: str, box_provider: str
    ) -> None:
        """Copy a local box file to its canonical location next to the catalog.

        The location is the one ``box_uri_from_catalog_uri`` derives, which
        is also the URL recorded in the catalog.
        """
        ...

    def delete_file(self, uri: str) -> None:
        """Delete one stored box file.

        Raises ``SchemeMismatchError`` if ``uri`` does not use ``scheme``.
        """
        ...


@runtime_checkable
class BindableBackend(Protocol):
    """Backends that derive their own paths from the manager's catalog URI."""

    def bind(self, manager: BackendManager) -> None:
        """Keep a reference to ``manager``; called once by the manager."""
        ...


_BACKENDS: dict[str, type] = {
    LocalFileBackend.SCHEME: LocalFileBackend,
    S3Backend.SCHEME: S3Backend,
}


def new_backend(scheme: str) -> Backend:
    """Create an unbound backend for a URI scheme."""
    try:
        backend_cls = _BACKENDS[scheme]
    except KeyError:
        raise UnknownBackendError(f"No known backend with name {scheme!r}") from None
    return backend_cls()


def new_backend_from_uri(uri: str) -> Backend:
    """Create an unbound backend for the scheme of ``uri``."""
    backend = new_backend(uri_scheme(uri))
    logger.debug("Selected %s for %s", type(backend).__name__, uri)
    return backend


__all__ = [
    "Backend",
    "BindableBackend",
    "LocalFileBackend",
    "S3Backend",
    "box_uri_from_catalog_uri",
    "catalog_root_uri",
    "ensure_scheme",
    "new_backend",
    "new_backend_from_uri",
]
