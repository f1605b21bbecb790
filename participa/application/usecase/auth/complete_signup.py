"""Complete signup use case."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from participa.config import AuthSettings
from participa.domain.error import NotFoundError
from participa.domain.service import SessionService, SignupCompletionService
from participa.domain.value import AccountId, SignupState
from participa.util.jwt import JWTError, verify_signup_ticket

from .common import AccountInfo

TAKEN_MESSAGE = "has already been taken"


class SignupStatus(str, Enum):
    """Where the pending account stands after a submission."""

    COLLISION_RESOLUTION_REQUIRED = "collision_resolution_required"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMPLETE = "complete"


class CompleteSignupRequest(BaseModel):
    """Signup completion form for a pending provider account."""

    account_id: str
    signup_ticket: str | None  # Issued by the provider callback
    username: str | None = None
    email: str | None = None
    resolve_collision: bool = False  # Only valid while resolving a collision


class CompleteSignupResponse(BaseModel):
    """Completion outcome."""

    status: SignupStatus
    account: AccountInfo
    # Field -> message for values owned by another account
    errors: dict[str, str] = {}
    session_token: str | None = None


class CompleteSignupUseCase:
    """Use case for the finish-signup and collision-resolution forms."""

    def __init__(
        self,
        signup_service: SignupCompletionService,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize complete signup use case.

        Args:
            signup_service: Signup completion state machine
            session_service: Establishes the session once signup completes
            auth_settings: Authentication settings (signup ticket verification)
        """
        self.signup_service = signup_service
        self.session_service = session_service
        self.auth_settings = auth_settings

    async def execute(self, request: CompleteSignupRequest) -> CompleteSignupResponse:
        """Execute a completion submission.

        Raises:
            NotFoundError: Unknown account, or a missing/foreign signup ticket
            InvalidSignupTransition: Account not awaiting this submission
            ValidationError: Unusable username or email
        """
        account_id = self._authorized_account_id(request)

        submission = await self.signup_service.submit(
            account_id,
            username=request.username,
            email=request.email,
            require_collision_state=request.resolve_collision,
        )
        account = submission.account

        if submission.collided:
            return CompleteSignupResponse(
                status=SignupStatus.COLLISION_RESOLUTION_REQUIRED,
                account=AccountInfo.from_account(account),
                errors={field: TAKEN_MESSAGE for field in submission.collisions},
            )

        if submission.state == SignupState.COMPLETE:
            issued = await self.session_service.establish(account)
            return CompleteSignupResponse(
                status=SignupStatus.COMPLETE,
                account=AccountInfo.from_account(account),
                session_token=issued.token,
            )

        return CompleteSignupResponse(
            status=SignupStatus.AWAITING_CONFIRMATION,
            account=AccountInfo.from_account(account),
        )

    def _authorized_account_id(self, request: CompleteSignupRequest) -> AccountId:
        try:
            account_id = AccountId(UUID(request.account_id))
        except ValueError:
            raise NotFoundError("Account", request.account_id)

        if not request.signup_ticket:
            raise NotFoundError("Account", request.account_id)
        try:
            ticket = verify_signup_ticket(request.signup_ticket, self.auth_settings)
        except JWTError as e:
            logfire.warn("Signup ticket rejected", error=str(e))
            raise NotFoundError("Account", request.account_id)
        if ticket.account_id != str(account_id):
            logfire.warn(
                "Signup ticket for another account", account_id=request.account_id
            )
            raise NotFoundError("Account", request.account_id)
        return account_id
