"""Error kinds raised by caryatid.

Every failure aborts the current operation and is returned to the caller.
Transport errors from a backend (``OSError``, ``botocore`` ``ClientError``)
are not wrapped; they propagate unchanged and are never retried here.
"""

from __future__ import annotations


class CaryatidError(RuntimeError):
    """Base class for all caryatid errors."""


class MalformedVersionError(CaryatidError):
    """Raised when a version string (or version query) cannot be parsed."""


class NameMismatchError(CaryatidError):
    """Raised when an artifact's name disagrees with the catalog's name."""


class SchemeMismatchError(CaryatidError):
    """Raised when a URI's scheme does not belong to the backend handling it."""


class UnknownBackendError(CaryatidError):
    """Raised when no backend is registered for a URI scheme."""


class InvalidUriError(CaryatidError):
    """Raised when a URI has no usable location information."""


class InvalidQueryError(CaryatidError):
    """Raised when a provider query is not a valid regular expression."""


class BackendConfigurationError(CaryatidError):
    """Raised when the storage target itself is misconfigured (e.g. no bucket)."""


class BoxFileError(CaryatidError):
    """Raised when a local file is not a usable Vagrant box."""


class CatalogCorruptError(CaryatidError):
    """Raised when persisted catalog bytes cannot be decoded.

    The offending bytes are kept on ``data`` for diagnosis.
    """

    def __init__(self, message: str, data: bytes) -> None:
        super().__init__(f"{message}\ncatalog bytes:\n{data!r}")
        self.data = data
