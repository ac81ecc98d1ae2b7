"""S3-to-GCS shim

Lets an S3-vocabulary HTTP client talk to the Google Cloud Storage XML API by
signing requests with a Google bearer token and translating x-amz-* headers
to x-goog-* on the way out, and back on the way in.
"""

from .auth import CredentialCache
from .client import S3Client
from .config import Config, get_config
from .consts import PACKAGE_VERSION
from .exceptions import AuthError, ConfigError, ShimError
from .headers import (
    INBOUND_RULE,
    OUTBOUND_RULE,
    NamespaceRule,
    translate_headers,
    translate_request_headers,
    translate_response_headers,
)
from .models import Credential, ObjectInfo, is_expired
from .pipeline import create_http_client
from .signing import BearerSigner, SigV4Signer, create_signer
from .suppliers import (
    GoogleDefaultSupplier,
    MetadataServerSupplier,
    StaticSupplier,
    create_supplier,
)

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "create_http_client",
    "create_signer",
    "create_supplier",
    "is_expired",
    "translate_headers",
    "translate_request_headers",
    "translate_response_headers",
    "Config",
    "Credential",
    "CredentialCache",
    "ObjectInfo",
    "S3Client",
    "NamespaceRule",
    "OUTBOUND_RULE",
    "INBOUND_RULE",
    "BearerSigner",
    "SigV4Signer",
    "GoogleDefaultSupplier",
    "MetadataServerSupplier",
    "StaticSupplier",
    "ShimError",
    "AuthError",
    "ConfigError",
]
