"""One-time emailed token entity.

Used both for email confirmation and password reset. Only the SHA-256
digest of the raw token is stored.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from participa.domain.model.common import DomainModel, utc_now
from participa.domain.value import AccountId, AuthTokenId, TokenPurpose


class AuthToken(DomainModel):
    """Single-use, expiring token bound to one account.

    A token is live until it is used, superseded by a newer token of the
    same purpose, or expires.
    """

    id: AuthTokenId
    account_id: AccountId
    purpose: TokenPurpose
    token_hash: str
    expires_at: datetime
    used_at: Optional[datetime] = None
    superseded_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_spent(self) -> bool:
        """Whether the token was used or superseded."""
        return self.used_at is not None or self.superseded_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Whether the token is past its expiry at ``now``."""
        return now >= self.expires_at
