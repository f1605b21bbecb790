"""Identity entity.

Links one external provider account to exactly one internal account.
"""

from datetime import datetime

from pydantic import Field

from participa.domain.model.common import DomainModel, utc_now
from participa.domain.value import AccountId, AuthProvider, IdentityId


class Identity(DomainModel):
    """External authentication identity linked to an account.

    Business rules:
    - (provider, external_id) is globally unique
    - An account owns at most one identity per provider
    - Identities are never updated once created
    """

    id: IdentityId
    account_id: AccountId
    provider: AuthProvider
    external_id: str  # Permanent, provider-scoped opaque ID
    created_at: datetime = Field(default_factory=utc_now)
