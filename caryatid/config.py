"""Runtime configuration: env-driven via pydantic-settings.

Reads from a .env file and CARYATID_* environment variables. Backend
credentials are never configured here; S3 uses the standard AWS credential
chain (optionally narrowed to a named profile).
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CaryatidConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CARYATID_LOG_LEVEL=DEBUG
        export CARYATID_AWS_PROFILE=vagrant-publisher
        export CARYATID_S3_ENDPOINT_URL=http://localhost:9000

    Or via .env file::

        CARYATID_AWS_REGION=us-west-2
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CARYATID_",
        env_file_encoding="utf-8",
    )

    log_level: str = "WARNING"

    # S3 backend
    aws_profile: str | None = None
    aws_region: str | None = None
    s3_endpoint_url: str | None = None   # S3-compatible stores (MinIO etc.)
    s3_delete_wait_delay: int = 5        # seconds between existence polls
    s3_delete_wait_max_attempts: int = 20


# Module-level singleton, import as `from caryatid.config import config`
config = CaryatidConfig()
