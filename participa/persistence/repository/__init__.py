"""PostgreSQL repository implementations."""

from participa.persistence.repository.account import PostgresAccountRepository
from participa.persistence.repository.auth_token import PostgresAuthTokenRepository
from participa.persistence.repository.identity import PostgresIdentityRepository
from participa.persistence.repository.session import PostgresSessionRepository
from participa.persistence.repository.unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresAccountRepository",
    "PostgresAuthTokenRepository",
    "PostgresIdentityRepository",
    "PostgresSessionRepository",
    "PostgresUnitOfWork",
]
