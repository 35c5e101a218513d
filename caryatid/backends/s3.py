"""Amazon S3 backend (also works with S3-compatible stores such as MinIO).

Layout for a catalog at ``s3://bucket/vagrant/testbox.json``::

    s3://bucket/vagrant/testbox.json
    s3://bucket/vagrant/testbox/testbox_<version>_<provider>.box

Credentials come from the standard AWS chain; ``CaryatidConfig`` can pick a
profile, region and endpoint URL.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel, ConfigDict

from caryatid.backends._uri import box_uri_from_catalog_uri, ensure_scheme
from caryatid.config import CaryatidConfig, config as default_config
from caryatid.errors import BackendConfigurationError, InvalidUriError

if TYPE_CHECKING:
    from caryatid.core.manager import BackendManager

logger = logging.getLogger(__name__)

_S3_URI = re.compile(r"^s3://([a-zA-Z0-9\-_.]+)/(.*)$")


class S3Location(BaseModel):
    """A bucket and an object key within it."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    resource: str

    @classmethod
    def from_uri(cls, uri: str) -> S3Location:
        match = _S3_URI.match(uri)
        if match is None:
            raise InvalidUriError(f"Invalid S3 URI {uri!r}")
        return cls(bucket=match.group(1), resource=match.group(2))

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.resource}"


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class S3Backend:
    """Stores the catalog and box files as objects in one S3 bucket.

    Parameters
    ----------
    client:
        A boto3 S3 client. Built lazily from ``settings`` when omitted.
    settings:
        Configuration for building the client and for the delete waiter.
        Defaults to the module-level ``caryatid.config.config``.
    """

    SCHEME = "s3"

    def __init__(
        self,
        client: Any | None = None,
        settings: CaryatidConfig | None = None,
    ) -> None:
        self.manager: BackendManager | None = None
        self._client = client
        self._settings = settings or default_config
        self._catalog_uri: str | None = None
        self._catalog_location: S3Location | None = None

    def bind(self, manager: BackendManager) -> None:
        ensure_scheme(self.SCHEME, manager.catalog_uri)
        self.manager = manager
        self._catalog_uri = manager.catalog_uri
        self._catalog_location = S3Location.from_uri(manager.catalog_uri)

    @property
    def scheme(self) -> str:
        return self.SCHEME

    @property
    def client(self) -> Any:
        if self._client is None:
            session = boto3.Session(
                profile_name=self._settings.aws_profile,
                region_name=self._settings.aws_region,
            )
            self._client = session.client(
                "s3", endpoint_url=self._settings.s3_endpoint_url
            )
        return self._client

    @property
    def catalog_location(self) -> S3Location:
        if self._catalog_location is None:
            raise BackendConfigurationError(
                "S3Backend has no catalog URI; bind it to a manager first"
            )
        return self._catalog_location

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def get_catalog_bytes(self) -> bytes:
        """Download the catalog.

        A missing key is the normal state before first use and yields an
        empty catalog. A missing bucket is a configuration error.
        """
        location = self.catalog_location
        try:
            response = self.client.get_object(Bucket=location.bucket, Key=location.resource)
        except ClientError as exc:
            code = _error_code(exc)
            if code == "NoSuchKey":
                logger.info("No object at %s; starting with empty catalog", location.uri)
                return b"{}"
            if code == "NoSuchBucket":
                raise BackendConfigurationError(
                    f"Bucket {location.bucket!r} does not exist"
                ) from exc
            raise
        return response["Body"].read()

    def set_catalog_bytes(self, data: bytes) -> None:
        location = self.catalog_location
        self.client.put_object(
            Bucket=location.bucket,
            Key=location.resource,
            Body=data,
            ContentType="application/json",
        )
        logger.info("Catalog at %s updated", location.uri)

    # ------------------------------------------------------------------
    # Box files
    # ------------------------------------------------------------------

    def box_location(self, box_name: str, box_version: str, box_provider: str) -> S3Location:
        """Where a box lives: the catalog key's directory plus ``<name>/<name>_<version>_<provider>.box``."""
        return S3Location.from_uri(
            box_uri_from_catalog_uri(
                self.catalog_location.uri, box_name, box_version, box_provider
            )
        )

    def copy_box_file(
        self, local_path: str, box_name: str, box_version: str, box_provider: str
    ) -> None:
        location = self.box_location(box_name, box_version, box_provider)
        self.client.upload_file(local_path, location.bucket, location.resource)
        logger.info("Uploaded box file from %s to %s", local_path, location.uri)

    def delete_file(self, uri: str) -> None:
        """Delete an object and block until S3 reports it gone."""
        ensure_scheme(self.SCHEME, uri)
        location = S3Location.from_uri(uri)
        self.client.delete_object(Bucket=location.bucket, Key=location.resource)
        waiter = self.client.get_waiter("object_not_exists")
        waiter.wait(
            Bucket=location.bucket,
            Key=location.resource,
            WaiterConfig={
                "Delay": self._settings.s3_delete_wait_delay,
                "MaxAttempts": self._settings.s3_delete_wait_max_attempts,
            },
        )
        logger.info("Deleted box file %s", location.uri)
