"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from participa.domain.model.identity import Identity
from participa.domain.value import AccountId, AuthProvider


class IdentityRepository(ABC):
    """Repository for Identity entity.

    Manages the link between accounts and their external provider identities.
    Identities are insert-only.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        """Find an identity by provider and external ID.

        Args:
            provider: The identity provider
            external_id: The account's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        """Get all identities linked to an account.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def add(self, identity: Identity) -> Identity:
        """Insert a new identity.

        Args:
            identity: The identity to insert

        Returns:
            The inserted identity

        Raises:
            DuplicateKeyError: If (provider, external_id) is already linked, or the
                account already has an identity for this provider
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all identities."""
        pass
