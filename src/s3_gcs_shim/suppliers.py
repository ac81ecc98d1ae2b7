"""Credential suppliers backed by Google identity services."""

import asyncio
import logging
from datetime import UTC, datetime, timedelta

import google.auth
import google.auth.exceptions
import google.auth.transport.requests
import httpx
from pydantic import ValidationError

from .config import Config
from .consts import CLOUD_PLATFORM_SCOPE, METADATA_FLAVOR_HEADER, USER_AGENT
from .exceptions import AuthError, ConfigError
from .models import Credential
from .protocols import CredentialSupplier

logger = logging.getLogger("s3-gcs-shim.suppliers")


class GoogleDefaultSupplier:
    """Supplier using Application Default Credentials.

    Resolves whatever identity the process runs as (service account key via
    GOOGLE_APPLICATION_CREDENTIALS, gcloud user credentials, workload
    identity, metadata server) and refreshes it for each fetch.
    """

    def __init__(self, scopes: list[str] | None = None):
        self.scopes = scopes or [CLOUD_PLATFORM_SCOPE]
        self._google_credentials = None

    async def fetch(self) -> Credential:
        """Fetch a fresh access token from Application Default Credentials.

        Raises:
            AuthError: If no default credentials exist or refresh fails.
        """
        logger.debug("Fetching token from application default credentials")
        try:
            return await asyncio.to_thread(self._fetch_blocking)
        except google.auth.exceptions.GoogleAuthError as e:
            raise AuthError(
                "Could not obtain a Google access token",
                errors=[str(e)],
                suggestions=[
                    "Run 'gcloud auth application-default login'",
                    "Or set GOOGLE_APPLICATION_CREDENTIALS to a service account key",
                ],
                context={"scopes": self.scopes},
            ) from e

    def _fetch_blocking(self) -> Credential:
        if self._google_credentials is None:
            self._google_credentials, _ = google.auth.default(scopes=self.scopes)

        self._google_credentials.refresh(google.auth.transport.requests.Request())

        token = self._google_credentials.token
        if not token:
            raise AuthError("Application default credentials returned an empty token")

        # google-auth reports expiry as naive UTC
        expiry = self._google_credentials.expiry
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)

        logger.info("Token fetched from application default credentials")
        return Credential(access_token=token, expiry=expiry)


class MetadataServerSupplier:
    """Supplier asking the GCE metadata server for the instance's token."""

    def __init__(
        self,
        token_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: int = 30,
    ):
        """Initialize MetadataServerSupplier.

        Args:
            token_url: Metadata server token endpoint.
            http_client: HTTP client for token requests only. Must not be the
                signing client. If None, a client is opened per fetch.
            timeout_seconds: Timeout for per-fetch clients.
        """
        self.token_url = token_url
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds

    async def fetch(self) -> Credential:
        """Fetch the instance service account token.

        Raises:
            AuthError: If the metadata server is unreachable or its answer
                is unusable.
        """
        logger.debug(f"Fetching token from {self.token_url}")
        headers = {METADATA_FLAVOR_HEADER: "Google"}

        try:
            if self.http_client is not None:
                response = await self.http_client.get(self.token_url, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout_seconds,
                    headers={"User-Agent": USER_AGENT},
                ) as client:
                    response = await client.get(self.token_url, headers=headers)
            response.raise_for_status()
            token_data = response.json()
            access_token = token_data["access_token"]

            expiry = None
            expires_in = token_data.get("expires_in")
            if expires_in is not None:
                expiry = datetime.now(UTC) + timedelta(seconds=int(expires_in))

            credential = Credential(access_token=access_token, expiry=expiry)
        except httpx.HTTPError as e:
            raise AuthError(
                "Metadata server token request failed",
                errors=[str(e)],
                suggestions=[
                    "Check that the process runs on GCE, GKE or Cloud Run",
                    "Use credential_source=google outside Google Cloud",
                ],
                context={"token_url": self.token_url},
            ) from e
        except (KeyError, TypeError) as e:
            raise AuthError(
                "Metadata server returned response without access_token",
                errors=[f"Missing required field: {e}"],
                context={"token_url": self.token_url},
            ) from e
        except ValidationError as e:
            raise AuthError(
                "Metadata server returned an unusable token",
                errors=[str(e)],
                context={"token_url": self.token_url},
            ) from e
        except ValueError as e:
            raise AuthError(
                "Metadata server returned an invalid token response",
                errors=[str(e)],
                context={"token_url": self.token_url},
            ) from e

        logger.info("Token fetched from metadata server")
        return credential


class StaticSupplier:
    """Supplier returning a fixed, never-expiring token."""

    def __init__(self, token: str):
        self._credential = Credential(access_token=token)

    async def fetch(self) -> Credential:
        return self._credential


def create_supplier(config: Config) -> CredentialSupplier:
    """Build the supplier selected by ``config.credential_source``.

    Raises:
        ConfigError: If the static source has no token.
    """
    if config.credential_source == "metadata":
        return MetadataServerSupplier(
            config.metadata_token_url, timeout_seconds=config.timeout_seconds
        )

    if config.credential_source == "static":
        if not config.static_token:
            raise ConfigError(
                "Static credential source requires a token",
                suggestions=["Set S3GCS_STATIC_TOKEN"],
                context={"credential_source": config.credential_source},
            )
        return StaticSupplier(config.static_token)

    return GoogleDefaultSupplier()
