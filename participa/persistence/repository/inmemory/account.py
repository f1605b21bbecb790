"""In-memory account repository for testing."""

from typing import Optional

from participa.domain.error import DuplicateKeyError
from participa.domain.model.account import Account
from participa.domain.repository.account import AccountRepository
from participa.domain.value import AccountId, Username

from .store import InMemoryStore


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        return self.store.accounts.get(account_id)

    async def find_by_username(self, username: Username) -> Optional[Account]:
        for account in self.store.accounts.values():
            if account.username == username:
                return account
        return None

    async def find_by_email(self, email: str) -> Optional[Account]:
        for account in self.store.accounts.values():
            if account.email == email:
                return account
        return None

    async def save(self, account: Account) -> Account:
        """Save or update an account, enforcing username/email uniqueness."""
        for other in self.store.accounts.values():
            if other.id == account.id:
                continue
            if other.username == account.username:
                raise DuplicateKeyError("username")
            if other.email == account.email:
                raise DuplicateKeyError("email")
        self.store.accounts[account.id] = account
        return account

    async def count(self) -> int:
        return len(self.store.accounts)
