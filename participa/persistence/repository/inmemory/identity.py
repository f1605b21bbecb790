"""In-memory identity repository for testing."""

from typing import Optional

from participa.domain.error import DuplicateKeyError
from participa.domain.model.identity import Identity
from participa.domain.repository.identity import IdentityRepository
from participa.domain.value import AccountId, AuthProvider

from .store import InMemoryStore


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        for identity in self.store.identities.values():
            if identity.provider == provider and identity.external_id == external_id:
                return identity
        return None

    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        identities = [
            identity
            for identity in self.store.identities.values()
            if identity.account_id == account_id
        ]
        return sorted(identities, key=lambda identity: identity.created_at)

    async def add(self, identity: Identity) -> Identity:
        for other in self.store.identities.values():
            if (
                other.provider == identity.provider
                and other.external_id == identity.external_id
            ):
                raise DuplicateKeyError("identity")
            if other.account_id == identity.account_id and other.provider == identity.provider:
                raise DuplicateKeyError("account_provider")
        self.store.identities[identity.id] = identity
        return identity

    async def count(self) -> int:
        return len(self.store.identities)
