"""Credential and object models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# CREDENTIALS
# =============================================================================


class Credential(BaseModel):
    """Bearer credential handed out by a supplier.

    Instances are never mutated; each refresh produces a new one.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1, description="Opaque bearer token")
    expiry: datetime | None = Field(
        None, description="Expiry instant; None means the token never expires"
    )

    def __repr__(self) -> str:
        return f"Credential(access_token='***', expiry={self.expiry!r})"

    __str__ = __repr__


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_expired(credential: Credential | None, now: datetime | None = None) -> bool:
    """Check whether a credential is unusable at ``now``.

    A missing credential is expired. A credential without expiry is always
    live. Otherwise it is live only while its expiry is strictly after
    ``now``, so ``expiry == now`` counts as expired.

    Args:
        credential: Credential to check, or None.
        now: Evaluation instant. Defaults to the current UTC time. Naive
            datetimes are taken as UTC.

    Returns:
        True if the credential must be refreshed before use.
    """
    if credential is None:
        return True

    if credential.expiry is None:
        return False

    now = _as_utc(now) if now is not None else datetime.now(UTC)
    return not _as_utc(credential.expiry) > now


# =============================================================================
# STORAGE RESPONSES
# =============================================================================


class ObjectInfo(BaseModel):
    """Object details as an S3 caller sees them."""

    key: str = Field(..., description="Object key")
    etag: str | None = Field(None, description="Entity tag, quotes stripped")
    content_type: str | None = Field(None, description="Content-Type header")
    content_length: int | None = Field(None, description="Content-Length header")
    metadata: dict[str, str] = Field(
        default_factory=dict, description="User metadata from x-amz-meta-* headers"
    )
    amz_headers: dict[str, str] = Field(
        default_factory=dict, description="All x-amz-* response headers"
    )
    body: bytes | None = Field(None, description="Object content, for GET")
