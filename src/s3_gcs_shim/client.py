"""S3-vocabulary storage client running over the translation pipeline."""

import logging
import xml.etree.ElementTree as ET
from urllib.parse import quote

import httpx

from .config import Config, get_config
from .consts import AMZ_META_PREFIX, SOURCE_HEADER_PREFIX
from .models import ObjectInfo
from .pipeline import create_http_client
from .protocols import CredentialProvider

logger = logging.getLogger("s3-gcs-shim.client")


class S3Client:
    """Object storage client using S3 request and header conventions.

    Responsibilities:
    - Build path-style S3 requests (x-amz-acl, x-amz-meta-*)
    - Read x-amz-* response headers back into ObjectInfo

    Signing and header translation belong to the HTTP client's pipeline;
    this class never sees x-goog-* names.
    """

    def __init__(
        self,
        config: Config | None = None,
        http_client: httpx.AsyncClient | None = None,
        provider: CredentialProvider | None = None,
    ):
        """Initialize S3Client.

        Args:
            config: Config instance. If None, uses get_config().
            http_client: Pipeline client. If None, creates one with
                create_http_client().
            provider: Credential provider passed to create_http_client().
                Only used when http_client is None.

        Raises:
            ValueError: If both http_client and provider are given.
        """
        if http_client is not None and provider is not None:
            raise ValueError(
                "provider is only used to build a client; "
                "pass it to create_http_client() instead"
            )
        self.config = config or get_config()
        self.http_client = http_client or create_http_client(self.config, provider)
        logger.info(f"S3 client created for {self.config.endpoint_url}")

    async def __aenter__(self) -> "S3Client":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def list_buckets(self) -> list[str]:
        """List bucket names of the configured project.

        Raises:
            AuthError: If no credential is available.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.TransportError: For network errors and timeouts.
        """
        logger.debug("GET /")
        response = await self.http_client.get("/")
        response.raise_for_status()
        names = _parse_bucket_names(response.content)
        logger.debug(f"Listed {len(names)} buckets")
        return names

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes | str,
        *,
        acl: str | None = None,
        metadata: dict[str, str] | None = None,
        content_type: str | None = None,
    ) -> ObjectInfo:
        """Upload an object.

        Args:
            bucket: Bucket name.
            key: Object key.
            body: Object content.
            acl: Canned ACL, sent as x-amz-acl.
            metadata: User metadata, sent as x-amz-meta-<name>.
            content_type: Content-Type of the object.

        Returns:
            ObjectInfo built from the response headers.
        """
        headers = {}
        if acl:
            headers[f"{SOURCE_HEADER_PREFIX}acl"] = acl
        for name, value in (metadata or {}).items():
            headers[f"{AMZ_META_PREFIX}{name}"] = str(value)
        if content_type:
            headers["Content-Type"] = content_type

        url = _object_path(bucket, key)
        logger.debug(f"PUT {url}")
        response = await self.http_client.put(url, content=body, headers=headers)
        response.raise_for_status()
        return _object_info(key, response)

    async def get_object(self, bucket: str, key: str) -> ObjectInfo:
        """Download an object with its headers and content."""
        url = _object_path(bucket, key)
        logger.debug(f"GET {url}")
        response = await self.http_client.get(url)
        response.raise_for_status()
        return _object_info(key, response, body=response.content)

    async def head_object(self, bucket: str, key: str) -> ObjectInfo:
        """Fetch object headers only."""
        url = _object_path(bucket, key)
        logger.debug(f"HEAD {url}")
        response = await self.http_client.head(url)
        response.raise_for_status()
        return _object_info(key, response)

    async def delete_object(self, bucket: str, key: str) -> None:
        url = _object_path(bucket, key)
        logger.debug(f"DELETE {url}")
        response = await self.http_client.delete(url)
        response.raise_for_status()


def _object_path(bucket: str, key: str) -> str:
    return f"/{quote(bucket, safe='')}/{quote(key, safe='/~')}"


def _object_info(
    key: str, response: httpx.Response, body: bytes | None = None
) -> ObjectInfo:
    amz_headers = {
        name: value
        for name, value in response.headers.items()
        if name.startswith(SOURCE_HEADER_PREFIX)
    }
    metadata = {
        name[len(AMZ_META_PREFIX) :]: value
        for name, value in amz_headers.items()
        if name.startswith(AMZ_META_PREFIX)
    }

    etag = response.headers.get("etag")
    content_length = response.headers.get("content-length")

    return ObjectInfo(
        key=key,
        etag=etag.strip('"') if etag else None,
        content_type=response.headers.get("content-type"),
        content_length=int(content_length) if content_length else None,
        metadata=metadata,
        amz_headers=amz_headers,
        body=body,
    )


def _parse_bucket_names(content: bytes) -> list[str]:
    """Extract bucket names from a ListAllMyBucketsResult document."""
    root = ET.fromstring(content)
    names = []
    for element in root.iter():
        if _local_name(element.tag) != "Bucket":
            continue
        for child in element:
            if _local_name(child.tag) == "Name" and child.text:
                names.append(child.text)
    return names


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
