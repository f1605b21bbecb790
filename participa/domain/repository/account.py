"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from participa.domain.model.account import Account
from participa.domain.value import AccountId, Username


class AccountRepository(ABC):
    """Repository for Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the persistence layer and enforce the
    username and email uniqueness constraints.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[Account]:
        """Find an account by its username.

        Args:
            username: The account's username

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by its normalized email.

        Args:
            email: Normalized email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account

        Raises:
            DuplicateKeyError: If the username or email belongs to another account
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all accounts."""
        pass
