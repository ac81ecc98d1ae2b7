"""High-value constants for the S3-to-GCS shim."""

# Package metadata
PACKAGE_VERSION = "0.3.0"
PACKAGE_NAME = "s3-gcs-shim"
USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"

# External API contract consts
DEFAULT_ENDPOINT_URL = "https://storage.googleapis.com"
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
METADATA_TOKEN_URL = (
    "http://metadata.google.internal/computeMetadata/v1/"
    "instance/service-accounts/default/token"
)
METADATA_FLAVOR_HEADER = "Metadata-Flavor"

# Header vocabulary
SOURCE_HEADER_PREFIX = "x-amz-"
TARGET_HEADER_PREFIX = "x-goog-"
PROJECT_ID_HEADER = "x-goog-project-id"
AMZ_META_PREFIX = "x-amz-meta-"

# SigV4 needs a region even though GCS ignores it
DEFAULT_REGION = "us-east-1"
