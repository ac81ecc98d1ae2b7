"""Demo driver: list buckets, upload and download an object through the shim."""

import asyncio
import logging
import sys

import httpx
from pydantic import ValidationError

from .client import S3Client
from .config import Config, setup_logging
from .consts import PACKAGE_NAME
from .exceptions import AuthError, ConfigError

logger = logging.getLogger("s3-gcs-shim.main")

DEMO_KEY = "filename.txt"
DEMO_BODY = b"lorem ipsum"
DEMO_METADATA = {"key01": "foo", "key02": "bar"}


def load_config(argv: list[str] | None = None) -> Config:
    """Read Config from S3GCS_* environment variables and command line flags.

    Args:
        argv: Command line arguments. If None, uses sys.argv[1:].

    Raises:
        ConfigError: If required settings are missing or invalid.
    """
    try:
        config = Config(
            _cli_parse_args=sys.argv[1:] if argv is None else argv,
            _cli_prog_name=PACKAGE_NAME,
        )
    except ValidationError as e:
        raise ConfigError(
            "Invalid configuration",
            errors=[
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ],
            suggestions=[
                "Pass --project_id and --bucket, or set S3GCS_PROJECT_ID "
                "and S3GCS_BUCKET",
                f"Run '{PACKAGE_NAME} --help' for all options",
            ],
        ) from e

    if not config.bucket:
        raise ConfigError(
            "A bucket is required",
            suggestions=["Pass --bucket or set S3GCS_BUCKET"],
        )
    return config


async def run_demo(config: Config, client: S3Client | None = None) -> None:
    """List buckets, put DEMO_KEY with an ACL and metadata, then get it back."""
    async with (client or S3Client(config)) as s3:
        buckets = await s3.list_buckets()
        print(f"buckets: {buckets}")

        put_result = await s3.put_object(
            config.bucket,
            DEMO_KEY,
            DEMO_BODY,
            acl="private",
            metadata=DEMO_METADATA,
            content_type="text/plain",
        )
        print(f"put object: {put_result!r}")

        get_result = await s3.get_object(config.bucket, DEMO_KEY)
        print(f"get object: {get_result!r}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    setup_logging()

    try:
        config = load_config(argv)
    except ConfigError as e:
        logger.error(f"{e.message}: {'; '.join(e.errors)}")
        for suggestion in e.suggestions:
            logger.error(f"  - {suggestion}")
        return 1

    setup_logging(config.log_level)
    logger.debug(f"Starting demo with {config!r}")

    try:
        asyncio.run(run_demo(config))
    except ConfigError as e:
        logger.error(f"Configuration error: {e.message}")
        return 1
    except AuthError as e:
        logger.error(f"Credential problem: {e.message}")
        for error in e.errors:
            logger.error(f"  {error}")
        return 1
    except httpx.HTTPStatusError as e:
        logger.error(
            f"Storage backend returned {e.response.status_code} "
            f"for {e.request.method} {e.request.url}"
        )
        return 1
    except httpx.TransportError as e:
        logger.error(f"Transport failure: {e}")
        return 1

    logger.info("Demo completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
