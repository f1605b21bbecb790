"""Domain value objects."""

from participa.domain.value.identifiers import (
    AccountId,
    AuthTokenId,
    IdentityId,
    SessionId,
)
from participa.domain.value.types import (
    AccountField,
    AuthProvider,
    Availability,
    LinkOutcome,
    ProfileClaims,
    SignupEvent,
    SignupState,
    TokenPurpose,
    Username,
    is_well_formed_email,
    normalize_email,
)

__all__ = [
    # Identifiers
    "AccountId",
    "AuthTokenId",
    "IdentityId",
    "SessionId",
    # Types
    "AccountField",
    "AuthProvider",
    "Availability",
    "LinkOutcome",
    "ProfileClaims",
    "SignupEvent",
    "SignupState",
    "TokenPurpose",
    "Username",
    # Helpers
    "is_well_formed_email",
    "normalize_email",
]
