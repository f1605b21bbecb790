"""Domain model entities."""

from participa.domain.model.account import Account
from participa.domain.model.auth_token import AuthToken
from participa.domain.model.identity import Identity
from participa.domain.model.session import Session

__all__ = [
    "Account",
    "AuthToken",
    "Identity",
    "Session",
]
