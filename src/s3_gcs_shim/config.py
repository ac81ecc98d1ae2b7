"""Configuration management."""

import logging
from functools import cache
from typing import Literal

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from .consts import (
    DEFAULT_ENDPOINT_URL,
    DEFAULT_REGION,
    METADATA_TOKEN_URL,
    PACKAGE_NAME,
)


class Config(BaseSettings):
    """Shim configuration, read from S3GCS_* environment variables."""

    model_config = ConfigDict(
        env_prefix="S3GCS_", case_sensitive=False, extra="ignore"
    )
    project_id: str = Field(
        ...,
        min_length=1,
        description="GCS project id sent as the x-goog-project-id header",
    )
    endpoint_url: str = Field(
        default=DEFAULT_ENDPOINT_URL,
        pattern=r"^https?://\S+$",
        description="Base URL of the GCS XML API endpoint",
    )
    bucket: str | None = Field(
        default=None, description="Bucket used by the demo driver"
    )
    credential_source: Literal["google", "metadata", "static"] = Field(
        default="google",
        description="Where bearer tokens come from",
    )
    static_token: str | None = Field(
        default=None, description="Bearer token for the static credential source"
    )
    metadata_token_url: str = Field(
        default=METADATA_TOKEN_URL,
        description="GCE metadata server token endpoint",
    )
    signing_mode: Literal["bearer", "sigv4"] = Field(
        default="bearer",
        description="Request signing strategy",
    )
    hmac_access_key_id: str | None = Field(
        default=None, description="HMAC access key id for sigv4 signing"
    )
    hmac_secret: str | None = Field(
        default=None, description="HMAC secret for sigv4 signing"
    )
    region: str = Field(
        default=DEFAULT_REGION, description="Region used in sigv4 signatures"
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Logging level",
    )
    timeout_seconds: int = Field(
        default=30, gt=0, le=300, description="HTTP request timeout in seconds"
    )

    def __repr__(self) -> str:
        # keep secrets out of logs
        return (
            f"Config(project_id='{self.project_id}', "
            f"endpoint_url='{self.endpoint_url}', "
            f"signing_mode='{self.signing_mode}')"
        )


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return Config()


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure logging for the entire application"""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,  # Override any existing configuration
    )
    return logging.getLogger(PACKAGE_NAME)
