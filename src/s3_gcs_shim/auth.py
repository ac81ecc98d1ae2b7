"""Credential caching with lazy refresh."""

import asyncio
import logging
from datetime import datetime

from .exceptions import AuthError
from .models import Credential, is_expired
from .protocols import CredentialSupplier

logger = logging.getLogger("s3-gcs-shim.auth")


class CredentialCache:
    """Pull-based credential adapter.

    Responsibilities:
    - Hand out the cached credential while it is live
    - Fetch a new one from the supplier on first use or after expiry
    - Keep concurrent refreshes from fetching more than once

    There is no background timer; a refresh happens only on the signing path
    of a request that needs a credential.
    """

    def __init__(self, supplier: CredentialSupplier):
        """Initialize CredentialCache.

        Args:
            supplier: Source of fresh credentials.
        """
        self.supplier = supplier
        self._credential: Credential | None = None
        self._refresh_lock = asyncio.Lock()

    async def current(self, now: datetime | None = None) -> Credential:
        """Get a live credential, refreshing it if needed.

        Args:
            now: Evaluation instant, defaults to the current UTC time.

        Returns:
            The cached Credential, or a freshly fetched one.

        Raises:
            AuthError: If the supplier fails. The cache is left untouched.
        """
        credential = self._credential
        if not is_expired(credential, now):
            return credential

        async with self._refresh_lock:
            # another task may have refreshed while we waited
            credential = self._credential
            if not is_expired(credential, now):
                return credential

            logger.debug("Refreshing credential")
            credential = await self.supplier.fetch()
            if is_expired(credential, now):
                raise AuthError(
                    "Supplier returned an already expired credential",
                    context={"expiry": str(credential.expiry)},
                )
            self._credential = credential

        logger.info(f"Credential refreshed, expiry={credential.expiry}")
        return credential

    def invalidate(self) -> None:
        """Drop the cached credential so the next call refetches."""
        logger.debug("Credential invalidated")
        self._credential = None
