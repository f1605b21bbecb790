"""Session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from participa.domain.model.session import Session
from participa.domain.value import AccountId, SessionId


class SessionRepository(ABC):
    """Repository for server-side session records."""

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by ID."""
        pass

    @abstractmethod
    async def find_active_by_account_id(
        self, account_id: AccountId, now: datetime
    ) -> Optional[Session]:
        """Find the account's session if it has not expired at ``now``."""
        pass

    @abstractmethod
    async def save(self, session: Session) -> Session:
        """Save a session (create or refresh)."""
        pass

    @abstractmethod
    async def delete(self, session_id: SessionId) -> bool:
        """Delete a session.

        Returns:
            True if a session was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_all_for_account(self, account_id: AccountId) -> int:
        """Delete every session of an account.

        Returns:
            Number of sessions deleted
        """
        pass
