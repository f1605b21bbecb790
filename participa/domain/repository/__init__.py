"""Repository interfaces for the domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from participa.domain.repository.account import AccountRepository
from participa.domain.repository.auth_token import AuthTokenRepository
from participa.domain.repository.identity import IdentityRepository
from participa.domain.repository.session import SessionRepository
from participa.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "AuthTokenRepository",
    "IdentityRepository",
    "SessionRepository",
    "UnitOfWork",
]
