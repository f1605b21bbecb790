"""Request password reset use case."""

import logfire
from pydantic import BaseModel

from participa.domain.repository import AccountRepository
from participa.domain.service import Mailer, TokenService, is_placeholder_email
from participa.domain.value import TokenPurpose, normalize_email
from participa.util.logging import redact_email

RESET_REQUESTED_MESSAGE = (
    "If your email address exists in our database, you will receive a password "
    "recovery link at your email address in a few minutes."
)


class RequestPasswordResetRequest(BaseModel):
    """Request password reset request."""

    email: str


class RequestPasswordResetResponse(BaseModel):
    """Identical for known and unknown emails."""

    message: str = RESET_REQUESTED_MESSAGE


class RequestPasswordResetUseCase:
    """Use case for mailing a password reset link."""

    def __init__(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        mailer: Mailer,
    ) -> None:
        """Initialize request password reset use case.

        Args:
            account_repository: Account repository
            token_service: One-time token service
            mailer: Outbound mailer
        """
        self.account_repository = account_repository
        self.token_service = token_service
        self.mailer = mailer

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> RequestPasswordResetResponse:
        """Issue and mail a reset token if the email belongs to an account.

        Never reveals whether the email is registered.
        """
        email = normalize_email(request.email)
        with logfire.span("request_password_reset", email=redact_email(email)):
            account = None
            if email and not is_placeholder_email(email):
                account = await self.account_repository.find_by_email(email)

            if account is None:
                logfire.info("Password reset for unknown email", email=redact_email(email))
                return RequestPasswordResetResponse()

            token = await self.token_service.issue(account.id, TokenPurpose.PASSWORD_RESET)
            await self.mailer.send_reset_password_instructions(account, token)
            return RequestPasswordResetResponse()
