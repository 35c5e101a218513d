"""Shared test fixtures for Caryatid."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from caryatid.core.boxfile import create_test_box_file
from caryatid.models.catalog import Catalog, Provider, Version

STRONG = "StrongSapling"
FEEBLE = "FeebleFungus"
BOX_URI = "http://example.com/this/is/my/box"


class InMemoryBackend:
    """Backend keeping the catalog in memory and recording file operations."""

    def __init__(self, data: bytes = b"") -> None:
        self.data = data
        self.copied: list[tuple[str, str, str, str]] = []
        self.deleted: list[str] = []
        self.calls: list[str] = []

    @property
    def scheme(self) -> str:
        return "mem"

    def get_catalog_bytes(self) -> bytes:
        self.calls.append("get")
        return self.data or b"{}"

    def set_catalog_bytes(self, data: bytes) -> None:
        self.calls.append("set")
        self.data = data

    def copy_box_file(
        self, local_path: str, box_name: str, box_version: str, box_provider: str
    ) -> None:
        self.calls.append("copy")
        self.copied.append((local_path, box_name, box_version, box_provider))

    def delete_file(self, uri: str) -> None:
        self.calls.append("delete")
        self.deleted.append(uri)


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """Provide an empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def make_provider() -> Callable[..., Provider]:
    """Factory fixture: build a Provider with the shared test URL and checksum."""

    def _factory(name: str, url: str = BOX_URI) -> Provider:
        return Provider(name=name, url=url, checksum_type="CRC32", checksum="0xB00B1E5")

    return _factory


@pytest.fixture
def make_catalog(make_provider: Callable[..., Provider]) -> Callable[..., Catalog]:
    """Factory fixture: build a catalog from ``(version, [provider names])`` pairs."""

    def _factory(*entries: tuple[str, list[str]]) -> Catalog:
        return Catalog(
            name="vagrant_catalog_test_box",
            description="Vagrant Catalog Test Box is a test box",
            versions=[
                Version(version=version, providers=[make_provider(p) for p in providers])
                for version, providers in entries
            ],
        )

    return _factory


@pytest.fixture
def reference_catalog(make_catalog: Callable[..., Catalog]) -> Catalog:
    """A catalog in deliberately unsorted order, including a prerelease."""
    return make_catalog(
        ("0.3.5", [STRONG]),
        ("0.3.4", [FEEBLE]),
        ("0.3.5-BETA", [STRONG, FEEBLE]),
        ("1.0.0", [STRONG]),
        ("1.0.1", [FEEBLE]),
        ("1.4.5", [STRONG]),
        ("1.2.3", [STRONG, FEEBLE]),
        ("1.2.4", [STRONG]),
        ("2.11.1", [FEEBLE]),
    )


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Provide a directory that does not exist yet, to hold a catalog."""
    return tmp_path / "catalog" / "root"


@pytest.fixture
def catalog_uri(catalog_dir: Path) -> str:
    """A ``file://`` URI for a not-yet-existing catalog named ``testbox``."""
    return (catalog_dir / "testbox.json").as_uri()


@pytest.fixture
def box_file(tmp_path: Path) -> Path:
    """A gzip-compressed test box for the ``virtualbox`` provider."""
    return create_test_box_file(tmp_path / "input" / "testbox.box", "virtualbox")
