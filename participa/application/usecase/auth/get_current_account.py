"""Get current account use case."""

from datetime import datetime

from pydantic import BaseModel

from participa.domain.repository import IdentityRepository
from participa.domain.service import SessionService
from participa.domain.value import AuthProvider

from .common import AccountInfo


class GetCurrentAccountRequest(BaseModel):
    """Get current account request."""

    token: str | None = None  # Session JWT from cookie, if any


class IdentityInfo(BaseModel):
    """Linked provider identity."""

    provider: AuthProvider
    created_at: datetime


class GetCurrentAccountResponse(BaseModel):
    """Authentication status with the account when signed in."""

    authenticated: bool
    account: AccountInfo | None = None
    identities: list[IdentityInfo] = []


class GetCurrentAccountUseCase:
    """Use case for getting the currently signed-in account."""

    def __init__(
        self,
        session_service: SessionService,
        identity_repository: IdentityRepository,
    ) -> None:
        """Initialize get current account use case.

        Args:
            session_service: Resolves session tokens
            identity_repository: Identity repository
        """
        self.session_service = session_service
        self.identity_repository = identity_repository

    async def execute(
        self, request: GetCurrentAccountRequest
    ) -> GetCurrentAccountResponse:
        """Resolve the session token to an account.

        Missing, invalid, expired or destroyed sessions are reported as
        ``authenticated=False`` rather than raised.
        """
        account = await self.session_service.authenticate(request.token)
        if account is None:
            return GetCurrentAccountResponse(authenticated=False)

        identities = await self.identity_repository.find_all_by_account_id(account.id)
        return GetCurrentAccountResponse(
            authenticated=True,
            account=AccountInfo.from_account(account),
            identities=[
                IdentityInfo(provider=identity.provider, created_at=identity.created_at)
                for identity in identities
            ],
        )
