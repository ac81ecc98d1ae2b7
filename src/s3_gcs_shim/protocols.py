"""Protocol definitions for dependency injection and interface contracts."""

from typing import Protocol

from .models import Credential


class CredentialSupplier(Protocol):
    """Protocol for sources of fresh bearer credentials."""

    async def fetch(self) -> Credential:
        """Fetch a new credential from the identity service.

        Returns:
            Newly issued Credential.

        Raises:
            AuthError: If the identity service fails. Not retried.
        """
        ...


class CredentialProvider(Protocol):
    """Protocol for providers handing out a live credential."""

    async def current(self) -> Credential:
        """Get a credential that is live right now.

        Returns:
            Cached or freshly fetched Credential.

        Raises:
            AuthError: If no live credential can be produced.
        """
        ...
