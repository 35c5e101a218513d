"""Local filesystem backend.

Layout for a catalog at ``file:///srv/vagrant/testbox.json``::

    /srv/vagrant/testbox.json
    /srv/vagrant/testbox/testbox_<version>_<provider>.box

Files and directories are created with default modes, so the process umask
decides their permissions.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from caryatid.backends._uri import box_uri_from_catalog_uri, ensure_scheme
from caryatid.errors import BackendConfigurationError, InvalidUriError

if TYPE_CHECKING:
    from caryatid.core.manager import BackendManager

logger = logging.getLogger(__name__)

# URI paths for Windows drives look like "/C:/whatever" or "/C:\whatever".
_WINDOWS_DRIVE_PATH = re.compile(r"^/[a-zA-Z]:")


def local_path_from_uri(uri: str) -> Path:
    """Convert a ``file://`` URI to a local path.

    On Windows, ``file:///C:/path`` parses to ``/C:/path``; the leading
    slash in front of the drive letter is dropped.
    """
    path = unquote(urlsplit(uri).path)
    if not path:
        raise InvalidUriError(f"No valid path information was provided in the URI {uri!r}")
    if _WINDOWS_DRIVE_PATH.match(path):
        path = path[1:]
    return Path(path)


class LocalFileBackend:
    """Stores the catalog and box files on a local (or mounted) filesystem.

    Parameters
    ----------
    catalog_uri:
        Optional ``file://`` catalog URI. Usually left out and supplied by
        ``BackendManager`` through ``bind``.
    """

    SCHEME = "file"

    def __init__(self, catalog_uri: str | None = None) -> None:
        self.manager: BackendManager | None = None
        self._catalog_uri: str | None = None
        self._catalog_path: Path | None = None
        if catalog_uri is not None:
            self._set_catalog_uri(catalog_uri)

    def _set_catalog_uri(self, catalog_uri: str) -> None:
        ensure_scheme(self.SCHEME, catalog_uri)
        self._catalog_uri = catalog_uri
        self._catalog_path = local_path_from_uri(catalog_uri)

    def bind(self, manager: BackendManager) -> None:
        self.manager = manager
        self._set_catalog_uri(manager.catalog_uri)

    @property
    def scheme(self) -> str:
        return self.SCHEME

    @property
    def catalog_uri(self) -> str:
        if self._catalog_uri is None:
            raise BackendConfigurationError(
                "LocalFileBackend has no catalog URI; bind it to a manager first"
            )
        return self._catalog_uri

    @property
    def catalog_path(self) -> Path:
        if self._catalog_path is None:
            raise BackendConfigurationError(
                "LocalFileBackend has no catalog URI; bind it to a manager first"
            )
        return self._catalog_path

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def get_catalog_bytes(self) -> bytes:
        try:
            return self.catalog_path.read_bytes()
        except FileNotFoundError:
            logger.info("No file at %s; starting with empty catalog", self.catalog_path)
            return b"{}"

    def set_catalog_bytes(self, data: bytes) -> None:
        self.catalog_path.parent.mkdir(parents=True, exist_ok=True)
        self.catalog_path.write_bytes(data)
        logger.info("Catalog at %s updated", self.catalog_path)

    # ------------------------------------------------------------------
    # Box files
    # ------------------------------------------------------------------

    def copy_box_file(
        self, local_path: str, box_name: str, box_version: str, box_provider: str
    ) -> None:
        box_uri = box_uri_from_catalog_uri(
            self.catalog_uri, box_name, box_version, box_provider
        )
        destination = local_path_from_uri(box_uri)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local_path, destination)
        logger.info("Copied box file from %s to %s", local_path, destination)

    def delete_file(self, uri: str) -> None:
        ensure_scheme(self.SCHEME, uri)
        path = local_path_from_uri(uri)
        path.unlink()
        logger.info("Deleted box file %s", path)
