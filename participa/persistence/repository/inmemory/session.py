"""In-memory session repository for testing."""

from datetime import datetime
from typing import Optional

from participa.domain.model.session import Session
from participa.domain.repository.session import SessionRepository
from participa.domain.value import AccountId, SessionId

from .store import InMemoryStore


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        return self.store.sessions.get(session_id)

    async def find_active_by_account_id(
        self, account_id: AccountId, now: datetime
    ) -> Optional[Session]:
        active = [
            session
            for session in self.store.sessions.values()
            if session.account_id == account_id and session.is_active(now)
        ]
        if not active:
            return None
        return max(active, key=lambda session: session.refreshed_at)

    async def save(self, session: Session) -> Session:
        self.store.sessions[session.id] = session
        return session

    async def delete(self, session_id: SessionId) -> bool:
        return self.store.sessions.pop(session_id, None) is not None

    async def delete_all_for_account(self, account_id: AccountId) -> int:
        doomed = [
            session_id
            for session_id, session in self.store.sessions.items()
            if session.account_id == account_id
        ]
        for session_id in doomed:
            del self.store.sessions[session_id]
        return len(doomed)
