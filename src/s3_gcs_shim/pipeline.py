"""Interceptor pipeline wiring for the signing client.

httpx runs a request through these steps, in order:

1. request build: Content-Length is computed from the body
2. ``auth`` flow: the signer, the only signing step
3. ``event_hooks["request"]``: x-amz-* to x-goog-* rewrite, last mutation
4. transport
5. ``event_hooks["response"]``: x-goog-* to x-amz-* rewrite
6. the response is handed to the caller
"""

import logging

import httpx

from .auth import CredentialCache
from .config import Config
from .consts import SOURCE_HEADER_PREFIX, TARGET_HEADER_PREFIX, USER_AGENT
from .headers import (
    find_prefixed,
    translate_request_headers,
    translate_response_headers,
)
from .protocols import CredentialProvider
from .signing import BearerSigner, create_signer
from .suppliers import create_supplier

logger = logging.getLogger("s3-gcs-shim.pipeline")


async def rewrite_request_headers(request: httpx.Request) -> None:
    """Request hook: move x-amz-* headers to x-goog-*."""
    renamed = find_prefixed(request.headers, SOURCE_HEADER_PREFIX)
    request.headers = translate_request_headers(request.headers)
    if renamed:
        logger.debug(
            f"{request.method} {request.url.path}: "
            f"renamed {len(renamed)} request headers"
        )


async def rewrite_response_headers(response: httpx.Response) -> None:
    """Response hook: move x-goog-* headers back to x-amz-*."""
    renamed = find_prefixed(response.headers, TARGET_HEADER_PREFIX)
    response.headers = translate_response_headers(response.headers)
    if renamed:
        logger.debug(
            f"{response.request.method} {response.request.url.path} "
            f"-> {response.status_code}: renamed {len(renamed)} response headers"
        )


def create_http_client(
    config: Config,
    provider: CredentialProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an httpx client that speaks S3 vocabulary to a GCS endpoint.

    Args:
        config: Shim configuration.
        provider: Credential provider for bearer signing. If None, a
            CredentialCache over the configured supplier is created.
        transport: Optional transport, mainly for tests.

    Returns:
        AsyncClient with the signer installed as its auth and, for bearer
        signing, the header rewrite hooks registered.

    Raises:
        ConfigError: If the signing or credential configuration is incomplete.
    """
    if config.signing_mode == "bearer" and provider is None:
        provider = CredentialCache(create_supplier(config))

    signer = create_signer(config, provider)

    event_hooks = {"request": [], "response": []}
    if isinstance(signer, BearerSigner):
        event_hooks["request"].append(rewrite_request_headers)
        event_hooks["response"].append(rewrite_response_headers)

    logger.info(
        f"HTTP client created for {config.endpoint_url} "
        f"with {type(signer).__name__}"
    )
    return httpx.AsyncClient(
        base_url=config.endpoint_url,
        auth=signer,
        event_hooks=event_hooks,
        headers={"User-Agent": USER_AGENT},
        timeout=config.timeout_seconds,
        transport=transport,
    )
