"""In-memory auth token repository for testing."""

from datetime import datetime
from typing import Optional

from participa.domain.model.auth_token import AuthToken
from participa.domain.repository.auth_token import AuthTokenRepository
from participa.domain.value import AccountId, TokenPurpose

from .store import InMemoryStore


class InMemoryAuthTokenRepository(AuthTokenRepository):
    """In-memory implementation of AuthTokenRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def add(self, token: AuthToken) -> AuthToken:
        self.store.auth_tokens[token.id] = token
        return token

    async def find_by_hash(
        self, token_hash: str, purpose: TokenPurpose
    ) -> Optional[AuthToken]:
        for token in self.store.auth_tokens.values():
            if token.token_hash == token_hash and token.purpose == purpose:
                return token
        return None

    async def consume(
        self, token_hash: str, purpose: TokenPurpose, now: datetime
    ) -> Optional[AuthToken]:
        # No await between the check and the write, so this is atomic
        token = await self.find_by_hash(token_hash, purpose)
        if token is None or token.is_spent or token.is_expired(now):
            return None
        consumed = token.model_copy(update={"used_at": now})
        self.store.auth_tokens[token.id] = consumed
        return consumed

    async def supersede_live(
        self, account_id: AccountId, purpose: TokenPurpose, now: datetime
    ) -> int:
        superseded = 0
        for token in list(self.store.auth_tokens.values()):
            if (
                token.account_id == account_id
                and token.purpose == purpose
                and not token.is_spent
            ):
                self.store.auth_tokens[token.id] = token.model_copy(
                    update={"superseded_at": now}
                )
                superseded += 1
        return superseded
