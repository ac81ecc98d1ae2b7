"""Pytest configuration and shared fixtures"""

import os
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from s3_gcs_shim.auth import CredentialCache
from s3_gcs_shim.config import Config
from s3_gcs_shim.models import Credential
from s3_gcs_shim.pipeline import create_http_client

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


class RecordingBackend:
    """Fake storage backend recording every request that reaches the wire."""

    def __init__(self, status_code=200, headers=None, content=b"", responder=None):
        self.status_code = status_code
        self.headers = headers or []
        self.content = content
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(
            self.status_code, headers=self.headers, content=self.content
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def clean_env():
    """Fixture that temporarily clears S3GCS_* environment variables."""
    shim_vars = {
        key: value for key, value in os.environ.items() if key.startswith("S3GCS_")
    }

    for key in shim_vars:
        os.environ.pop(key, None)

    try:
        yield
    finally:
        for key, value in shim_vars.items():
            os.environ[key] = value


@pytest.fixture
def config(clean_env):
    """Config with a static token source"""
    return Config(
        project_id="test-project",
        bucket="test-bucket",
        credential_source="static",
        static_token="static-token",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_supplier():
    """Supplier returning a never-expiring tok1 credential"""
    supplier = Mock()
    supplier.fetch = AsyncMock(return_value=Credential(access_token="tok1"))
    return supplier


@pytest.fixture
def provider(mock_supplier):
    """CredentialCache over the mock supplier"""
    return CredentialCache(mock_supplier)


@pytest.fixture
def make_backend():
    """Factory for recording backends with canned responses"""
    return RecordingBackend


@pytest.fixture
def backend(make_backend):
    """Recording backend answering 200 with no headers"""
    return make_backend()


@pytest.fixture
def http_client(config, provider, backend):
    """Pipeline client wired to the recording backend"""
    return create_http_client(config, provider, transport=backend.transport)
