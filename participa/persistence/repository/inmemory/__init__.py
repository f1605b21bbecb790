"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .auth_token import InMemoryAuthTokenRepository
from .identity import InMemoryIdentityRepository
from .session import InMemorySessionRepository
from .store import InMemoryStore, InMemoryUnitOfWork

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryAuthTokenRepository",
    "InMemoryIdentityRepository",
    "InMemorySessionRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
]
