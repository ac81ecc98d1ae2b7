"""Request signing strategies plugged into httpx as ``Auth`` flows.

The signer is the only step allowed to write the Authorization header.
``BearerSigner`` replaces S3 request signatures with a Google bearer token;
``SigV4Signer`` keeps the native S3 signature for HMAC interoperability keys.
"""

import logging
from collections.abc import AsyncGenerator, Generator

import httpx
from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from .config import Config
from .consts import PROJECT_ID_HEADER
from .exceptions import ConfigError
from .protocols import CredentialProvider

logger = logging.getLogger("s3-gcs-shim.signing")


class BearerSigner(httpx.Auth):
    """Sign requests with a bearer token and the GCS project header."""

    def __init__(self, provider: CredentialProvider, project_id: str):
        """Initialize BearerSigner.

        Args:
            provider: Source of live credentials.
            project_id: Value for the x-goog-project-id header.
        """
        self.provider = provider
        self.project_id = project_id

    def sync_auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("BearerSigner requires httpx.AsyncClient")

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        # AuthError propagates from here, before the transport sees the request
        credential = await self.provider.current()

        request.headers["Authorization"] = f"Bearer {credential.access_token}"
        request.headers[PROJECT_ID_HEADER] = self.project_id
        logger.debug(f"Signed {request.method} {request.url.path} with bearer token")

        yield request


class SigV4Signer(httpx.Auth):
    """Native S3 SigV4 signing using static HMAC keys."""

    requires_request_body = True

    def __init__(self, access_key_id: str, secret_access_key: str, region: str):
        self._credentials = Credentials(access_key_id, secret_access_key)
        self.region = region

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        headers = {
            name: value
            for name, value in request.headers.items()
            if name != "authorization"
        }
        aws_request = AWSRequest(
            method=request.method,
            url=str(request.url),
            headers=headers,
            data=request.content,
        )
        S3SigV4Auth(self._credentials, "s3", self.region).add_auth(aws_request)

        for name, value in aws_request.headers.items():
            request.headers[name] = value
        logger.debug(f"Signed {request.method} {request.url.path} with SigV4")

        yield request


def create_signer(config: Config, provider: CredentialProvider) -> httpx.Auth:
    """Build the signing strategy selected by ``config.signing_mode``.

    Raises:
        ConfigError: If sigv4 is selected without both HMAC keys.
    """
    if config.signing_mode == "sigv4":
        if not (config.hmac_access_key_id and config.hmac_secret):
            raise ConfigError(
                "SigV4 signing requires an HMAC key pair",
                suggestions=[
                    "Set S3GCS_HMAC_ACCESS_KEY_ID and S3GCS_HMAC_SECRET",
                    "Or use signing_mode=bearer",
                ],
                context={"signing_mode": config.signing_mode},
            )
        return SigV4Signer(config.hmac_access_key_id, config.hmac_secret, config.region)

    return BearerSigner(provider, config.project_id)
