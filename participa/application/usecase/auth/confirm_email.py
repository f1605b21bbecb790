"""Confirm email use case."""

import logfire
from pydantic import BaseModel

from participa.domain.service import ConfirmationGate, SessionService

from .common import AccountInfo

CONFIRMED_MESSAGE = "Your email address has been successfully confirmed."


class ConfirmEmailRequest(BaseModel):
    """Confirm email request."""

    confirmation_token: str


class ConfirmEmailResponse(BaseModel):
    """Confirmed account, signed in when its signup is complete."""

    account: AccountInfo
    session_token: str | None = None
    message: str = CONFIRMED_MESSAGE


class ConfirmEmailUseCase:
    """Use case for redeeming an emailed confirmation link."""

    def __init__(
        self, confirmation_gate: ConfirmationGate, session_service: SessionService
    ) -> None:
        """Initialize confirm email use case.

        Args:
            confirmation_gate: Email confirmation gate
            session_service: Establishes the session after confirmation
        """
        self.confirmation_gate = confirmation_gate
        self.session_service = session_service

    async def execute(self, request: ConfirmEmailRequest) -> ConfirmEmailResponse:
        """Confirm the email behind the token and sign the account in.

        Raises:
            InvalidTokenError: Unknown, spent or superseded token
            ExpiredTokenError: Token past its expiry
        """
        account = await self.confirmation_gate.confirm(request.confirmation_token)

        session_token = None
        if account.is_signup_complete:
            issued = await self.session_service.establish(account)
            session_token = issued.token
        else:
            logfire.info(
                "Email confirmed before signup completion",
                account_id=str(account.id),
                signup_state=account.signup_state.value,
            )

        return ConfirmEmailResponse(
            account=AccountInfo.from_account(account), session_token=session_token
        )
