"""Authenticated session entity."""

from datetime import datetime

from pydantic import Field

from participa.domain.model.common import DomainModel, utc_now
from participa.domain.value import AccountId, SessionId


class Session(DomainModel):
    """Server-side record of an authenticated session.

    At most one active session exists per account; re-establishing a
    session refreshes this record instead of creating another.
    """

    id: SessionId
    account_id: AccountId
    created_at: datetime = Field(default_factory=utc_now)
    refreshed_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        """Whether the session is still valid at ``now``."""
        return now < self.expires_at
