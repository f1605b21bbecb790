"""Reset password use case."""

import logfire
from pydantic import BaseModel

from participa.domain.error import InvalidTokenError, ValidationError
from participa.domain.model.common import utc_now
from participa.domain.repository import AccountRepository, UnitOfWork
from participa.domain.service import PasswordService, SessionService, TokenService
from participa.domain.value import TokenPurpose

PASSWORD_CHANGED_MESSAGE = "Your password has been changed successfully."


class ResetPasswordRequest(BaseModel):
    """Reset password form."""

    reset_password_token: str
    password: str | None = None
    password_confirmation: str | None = None


class ResetPasswordResponse(BaseModel):
    """Reset password response."""

    message: str = PASSWORD_CHANGED_MESSAGE
    sessions_destroyed: int


class ResetPasswordUseCase:
    """Use case for setting a new password from an emailed reset link."""

    def __init__(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        password_service: PasswordService,
        session_service: SessionService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize reset password use case.

        Args:
            account_repository: Account repository
            token_service: One-time token service
            password_service: Password policy and hashing
            session_service: Destroys the account's sessions
            unit_of_work: Atomic write boundary
        """
        self.account_repository = account_repository
        self.token_service = token_service
        self.password_service = password_service
        self.session_service = session_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: ResetPasswordRequest) -> ResetPasswordResponse:
        """Change the password and sign the account out everywhere.

        The token is only spent when the new password is acceptable.

        Raises:
            ValidationError: Password too short or confirmation mismatch
            InvalidTokenError: Unknown, spent or superseded token
            ExpiredTokenError: Token past its expiry
        """
        errors = self.password_service.policy_errors(
            request.password, request.password_confirmation
        )
        if errors:
            raise ValidationError(errors)

        with logfire.span("reset_password"):
            async with self.unit_of_work.atomic():
                token = await self.token_service.consume(
                    request.reset_password_token, TokenPurpose.PASSWORD_RESET
                )
                account = await self.account_repository.find_by_id(token.account_id)
                if account is None:
                    raise InvalidTokenError()

                await self.account_repository.save(
                    account.model_copy(
                        update={
                            "password_hash": self.password_service.hash(
                                request.password or ""
                            ),
                            "updated_at": utc_now(),
                        }
                    )
                )
                destroyed = await self.session_service.destroy_all(account.id)

            logfire.info(
                "Password reset",
                account_id=str(account.id),
                sessions_destroyed=destroyed,
            )
            return ResetPasswordResponse(sessions_destroyed=destroyed)
