"""Account aggregate root.

One canonical account per person, whether they registered with a password
or arrived through a third-party identity provider.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from participa.domain.model.common import DomainModel, utc_now
from participa.domain.value import AccountId, SignupState, Username


class Account(DomainModel):
    """Account aggregate root - provider-agnostic.

    ``username`` and ``email`` are globally unique. ``email`` is always stored
    normalized. Provider-only accounts have no ``password_hash``.
    """

    id: AccountId
    username: Username
    email: str
    email_confirmed: bool = False
    confirmed_at: Optional[datetime] = None
    password_hash: Optional[str] = None
    signup_state: SignupState = SignupState.AWAITING_CONFIRMATION
    terms_accepted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def has_password(self) -> bool:
        """Whether the account can sign in with a password."""
        return self.password_hash is not None

    @property
    def is_signup_complete(self) -> bool:
        """Whether the signup completion flow has finished."""
        return self.signup_state == SignupState.COMPLETE
