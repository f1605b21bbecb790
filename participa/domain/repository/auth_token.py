"""Auth token repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from participa.domain.model.auth_token import AuthToken
from participa.domain.value import AccountId, TokenPurpose


class AuthTokenRepository(ABC):
    """Repository for one-time confirmation and password reset tokens."""

    @abstractmethod
    async def add(self, token: AuthToken) -> AuthToken:
        """Insert a new token.

        Args:
            token: The token to insert

        Returns:
            The inserted token
        """
        pass

    @abstractmethod
    async def find_by_hash(
        self, token_hash: str, purpose: TokenPurpose
    ) -> Optional[AuthToken]:
        """Find a token by its digest, regardless of whether it is still live.

        Args:
            token_hash: SHA-256 hex digest of the raw token
            purpose: Expected token purpose

        Returns:
            The token if found, None otherwise
        """
        pass

    @abstractmethod
    async def consume(
        self, token_hash: str, purpose: TokenPurpose, now: datetime
    ) -> Optional[AuthToken]:
        """Atomically mark a live, unexpired token as used.

        Exactly one of any number of concurrent calls for the same token
        succeeds.

        Args:
            token_hash: SHA-256 hex digest of the raw token
            purpose: Expected token purpose
            now: Consumption time

        Returns:
            The consumed token, or None if no live token matched
        """
        pass

    @abstractmethod
    async def supersede_live(
        self, account_id: AccountId, purpose: TokenPurpose, now: datetime
    ) -> int:
        """Mark every live token of ``purpose`` for the account as superseded.

        Args:
            account_id: Owning account
            purpose: Token purpose
            now: Supersession time

        Returns:
            Number of tokens superseded
        """
        pass
