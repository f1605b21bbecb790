"""Shared in-memory storage for the in-memory repositories."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from participa.domain.model import Account, AuthToken, Identity, Session
from participa.domain.repository import UnitOfWork
from participa.domain.value import AccountId, AuthTokenId, IdentityId, SessionId


class InMemoryStore:
    """Tables shared by all in-memory repositories of one container."""

    def __init__(self) -> None:
        self.accounts: dict[AccountId, Account] = {}
        self.identities: dict[IdentityId, Identity] = {}
        self.auth_tokens: dict[AuthTokenId, AuthToken] = {}
        self.sessions: dict[SessionId, Session] = {}

    def snapshot(self) -> tuple[dict, dict, dict, dict]:
        # Stored models are immutable, so shallow copies are enough
        return (
            dict(self.accounts),
            dict(self.identities),
            dict(self.auth_tokens),
            dict(self.sessions),
        )

    def restore(self, snapshot: tuple[dict, dict, dict, dict]) -> None:
        self.accounts, self.identities, self.auth_tokens, self.sessions = (
            dict(table) for table in snapshot
        )


class InMemoryUnitOfWork(UnitOfWork):
    """Atomic blocks over an InMemoryStore.

    Blocks are serialised with a lock; a block that raises restores the
    store to its state on entry. Nested blocks in the same task roll back
    only their own writes.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        task = asyncio.current_task()
        if self._owner is not None and self._owner is task:
            async with self._rollback_on_error():
                yield
            return

        async with self._lock:
            self._owner = task
            try:
                async with self._rollback_on_error():
                    yield
            finally:
                self._owner = None

    @asynccontextmanager
    async def _rollback_on_error(self) -> AsyncIterator[None]:
        snapshot = self.store.snapshot()
        try:
            yield
        except BaseException:
            self.store.restore(snapshot)
            raise
