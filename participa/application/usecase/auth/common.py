"""Response models shared by the authentication use cases."""

from datetime import datetime

from pydantic import BaseModel

from participa.domain.model.account import Account
from participa.domain.service import is_placeholder_email
from participa.domain.value import SignupState


class AccountInfo(BaseModel):
    """Public view of an account.

    Placeholder emails are never exposed; ``email`` is None instead.
    """

    account_id: str
    username: str
    email: str | None
    email_confirmed: bool
    signup_state: SignupState
    has_password: bool
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountInfo":
        return cls(
            account_id=str(account.id),
            username=account.username.root,
            email=None if is_placeholder_email(account.email) else account.email,
            email_confirmed=account.email_confirmed,
            signup_state=account.signup_state,
            has_password=account.has_password,
            created_at=account.created_at,
        )
