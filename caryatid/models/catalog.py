"""Vagrant catalog models.

A catalog is a JSON document describing every version of one box, and for
each version the providers (hypervisors) it was built for::

    {
      "name": "testbox",
      "description": "a box for testing",
      "versions": [
        {
          "version": "1.0.0",
          "providers": [
            {
              "name": "virtualbox",
              "url": "file:///srv/vagrant/testbox/testbox_1.0.0_virtualbox.box",
              "checksum_type": "sha1",
              "checksum": "d3597dccfdc6953d0a6eff4a9e1903f44f72ab94"
            }
          ]
        }
      ]
    }

Catalogs are transient: decoded from the stored bytes on every read, changed
in memory, and written back whole.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from caryatid.errors import CatalogCorruptError, NameMismatchError

logger = logging.getLogger(__name__)


class Provider(BaseModel):
    """One build of a box for one provider. Replaced whole, never edited."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str = ""
    checksum_type: str = ""
    checksum: str = ""


class Version(BaseModel):
    """A version entry; ``version`` is the literal text, e.g. ``1.0.0-BETA``."""

    version: str = ""
    providers: list[Provider] = Field(default_factory=list)

    @field_validator("providers", mode="before")
    @classmethod
    def _null_providers(cls, value: object) -> object:
        # Some catalog writers store an empty list as null.
        return [] if value is None else value


class Catalog(BaseModel):
    """The full record of a box family: name, description, versions."""

    name: str = ""
    description: str = ""
    versions: list[Version] = Field(default_factory=list)

    @field_validator("versions", mode="before")
    @classmethod
    def _null_versions(cls, value: object) -> object:
        return [] if value is None else value

    @classmethod
    def from_json_bytes(cls, data: bytes) -> Catalog:
        """Decode stored catalog bytes; ``b"{}"`` is an empty catalog."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise CatalogCorruptError(f"Could not decode catalog: {exc}", data) from exc

    def to_json_bytes(self) -> bytes:
        """Encode with declared field order and two-space indentation."""
        return self.model_dump_json(indent=2).encode("utf-8")

    def add_box(
        self,
        name: str,
        description: str,
        version: str,
        provider: str,
        checksum_type: str,
        checksum: str,
        artifact_uri: str,
    ) -> None:
        """Record a box in the catalog, in place.

        The catalog name, once set, must match ``name``. The description is
        always overwritten, so a reworded description never fails a build.
        Versions and providers are matched by exact string; an existing
        provider entry is replaced, so adding the same box twice is a no-op.
        """
        if not self.name:
            self.name = name
        elif self.name != name:
            raise NameMismatchError(
                f"Catalog name {self.name!r} does not match artifact name {name!r}"
            )

        self.description = description

        new_provider = Provider(
            name=provider,
            url=artifact_uri,
            checksum_type=checksum_type,
            checksum=checksum,
        )

        for entry in self.versions:
            if entry.version != version:
                continue
            for idx, existing in enumerate(entry.providers):
                if existing.name == provider:
                    entry.providers[idx] = new_provider
                    logger.debug("Replaced provider %s for version %s", provider, version)
                    return
            entry.providers.append(new_provider)
            logger.debug("Added provider %s to version %s", provider, version)
            return

        self.versions.append(Version(version=version, providers=[new_provider]))
        logger.debug("Added version %s with provider %s", version, provider)


class CatalogQueryParams(BaseModel):
    """A version query (e.g. ``>=1.2``) and a provider regex (e.g. ``^virtualbox``)."""

    model_config = ConfigDict(frozen=True)

    version: str = ""
    provider: str = ""


class BoxReference(BaseModel):
    """Identifies one provider within one version.

    Two references are equal when version and provider name match; ``uri``
    is carried along for deleting the box file but is not part of identity.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    provider_name: str
    uri: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.version, self.provider_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoxReference):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class BoxArtifact(BaseModel):
    """A box file about to be published to a catalog.

    ``path`` is where the box is *now* on the local disk, not where it will
    be stored.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    description: str
    version: str
    provider: str
    catalog_root_uri: str
    checksum_type: str
    checksum: str

    @property
    def artifact_id(self) -> str:
        return f"{self.name}/{self.provider}/{self.version}"

    @property
    def parent_uri(self) -> str:
        return f"{self.catalog_root_uri}/{self.name}"

    @property
    def uri(self) -> str:
        """Canonical location of the box file next to its catalog."""
        return f"{self.parent_uri}/{self.name}_{self.version}_{self.provider}.box"

    def __str__(self) -> str:
        return (
            f"{self.name}/{self.provider} v{self.version} "
            f"{self.checksum_type}:{self.checksum} ({self.description})"
        )
