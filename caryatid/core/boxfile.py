"""Inspect Vagrant .box files.

A box is a tar archive (usually gzip-compressed) with a ``metadata.json``
naming its provider, e.g. ``{"provider": "virtualbox"}``.
"""

from __future__ import annotations

import hashlib
import io
import json
import logging
import tarfile
from pathlib import Path

from caryatid.errors import BoxFileError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def sha1sum(path: Path | str) -> str:
    """Return the SHA-1 hex digest of a file, read in chunks."""
    digest = hashlib.sha1()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def determine_provider(path: Path | str) -> str:
    """Read the provider name from a box's ``metadata.json``."""
    raw: bytes | None = None
    try:
        # "r:*" handles both plain and gzip-compressed tarballs.
        with tarfile.open(path, "r:*") as archive:
            for member in archive:
                if member.isfile() and member.name.lower().lstrip("./") == "metadata.json":
                    handle = archive.extractfile(member)
                    raw = handle.read() if handle is not None else None
                    break
        if raw is None:
            raise BoxFileError(f"Could not find metadata.json file in {path}")
        metadata = json.loads(raw)
    except (tarfile.TarError, ValueError) as exc:
        raise BoxFileError(f"Could not read box metadata from {path}: {exc}") from exc

    provider = metadata.get("provider") if isinstance(metadata, dict) else None
    if not provider:
        raise BoxFileError(f"metadata.json in {path} does not name a provider")
    return provider


def derive_artifact_info(path: Path | str) -> tuple[str, str, str]:
    """Return ``(checksum_type, checksum, provider)`` for a box file."""
    if not str(path).endswith(".box"):
        raise BoxFileError(
            f"Input artifact {str(path)!r} doesn't have a '.box' file extension, "
            "and is therefore not a valid Vagrant box"
        )
    checksum = sha1sum(path)
    logger.debug("SHA1 for %s is %s", path, checksum)
    provider = determine_provider(path)
    logger.debug("Provider for %s is %s", path, provider)
    return "sha1", checksum, provider


def create_test_box_file(path: Path | str, provider: str, compress: bool = True) -> Path:
    """Write a minimal box containing only ``metadata.json``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    contents = json.dumps({"provider": provider}).encode("utf-8")
    info = tarfile.TarInfo(name="metadata.json")
    info.size = len(contents)
    info.mode = 0o644
    with tarfile.open(path, "w:gz" if compress else "w") as archive:
        archive.addfile(info, io.BytesIO(contents))
    logger.debug("Created test box for provider %s at %s", provider, path)
    return path
