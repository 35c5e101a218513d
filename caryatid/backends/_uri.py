"""URI helpers shared by every backend."""

from __future__ import annotations

from urllib.parse import quote, urlsplit

from caryatid.errors import SchemeMismatchError


def uri_scheme(uri: str) -> str:
    return urlsplit(uri).scheme


def ensure_scheme(expected: str, uri: str) -> None:
    """Raise ``SchemeMismatchError`` unless ``uri`` uses the ``expected`` scheme."""
    actual = uri_scheme(uri)
    if actual != expected:
        raise SchemeMismatchError(
            f"Expected scheme {expected!r} but was given a URI with scheme {actual!r}: {uri}"
        )


def catalog_root_uri(catalog_uri: str) -> str:
    """Strip the final path segment (``<name>.json``) from a catalog URI."""
    root, _, _ = catalog_uri.rpartition("/")
    return root


def box_uri_from_catalog_uri(
    catalog_uri: str, box_name: str, box_version: str, box_provider: str
) -> str:
    """Canonical box URI for a catalog at ``<catalogdir>/<name>.json``.

    Layout: ``<catalogdir>/<name>/<name>_<version>_<provider>.box``

    For ``file://`` catalogs each segment is percent-encoded, so a ``#`` or
    ``?`` in a provider name stays part of the path. S3 keys are used as is.
    """
    segments = [box_name, f"{box_name}_{box_version}_{box_provider}.box"]
    if uri_scheme(catalog_uri) == "file":
        segments = [quote(segment, safe="") for segment in segments]
    box_path = "/".join(segments)
    root = catalog_root_uri(catalog_uri)
    return f"{root}/{box_path}" if root else box_path
