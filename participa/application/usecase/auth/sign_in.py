"""Password sign-in use case."""

import logfire
from pydantic import BaseModel

from participa.domain.error import InvalidCredentialsError
from participa.domain.repository import AccountRepository
from participa.domain.service import PasswordService, SessionService
from participa.domain.value import normalize_email
from participa.util.logging import redact_email

from .common import AccountInfo


class SignInRequest(BaseModel):
    """Email and password sign-in."""

    email: str
    password: str


class SignInResponse(BaseModel):
    """Signed-in account and its session credential."""

    account: AccountInfo
    session_token: str


class SignInUseCase:
    """Use case for signing in with email and password."""

    def __init__(
        self,
        account_repository: AccountRepository,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> None:
        """Initialize sign-in use case.

        Args:
            account_repository: Account repository
            password_service: Password verification
            session_service: Establishes the session
        """
        self.account_repository = account_repository
        self.password_service = password_service
        self.session_service = session_service

    async def execute(self, request: SignInRequest) -> SignInResponse:
        """Check credentials and establish a session.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            UnconfirmedAccountError: Credentials valid but email unconfirmed
            IncompleteSignupError: Credentials valid but signup not finished
        """
        email = normalize_email(request.email)
        with logfire.span("sign_in", email=redact_email(email)):
            account = await self.account_repository.find_by_email(email)
            if account is None or not self.password_service.verify(
                request.password, account.password_hash
            ):
                logfire.info("Sign in rejected", email=redact_email(email))
                raise InvalidCredentialsError()

            issued = await self.session_service.establish(account)
            return SignInResponse(
                account=AccountInfo.from_account(account), session_token=issued.token
            )
