"""Provider callback use case."""

import logfire
from pydantic import BaseModel

from participa.config import AuthSettings
from participa.domain.model.signup import can_submit
from participa.domain.service import (
    AuthService,
    ConfirmationGate,
    IdentityLinkService,
    SessionService,
)
from participa.domain.value import AuthProvider, LinkOutcome
from participa.util.jwt import create_signup_ticket

from .common import AccountInfo


class ProviderCallbackRequest(BaseModel):
    """OAuth callback parameters.

    These parameters come from the identity provider in the callback URL.
    """

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter for session verification


class ProviderCallbackResponse(BaseModel):
    """Result of a provider login.

    Exactly one of the following holds:
    - ``session_token`` is set: the account is signed in
    - ``needs_completion``: the browser must finish signup, authorized by
      ``signup_ticket``
    - ``awaiting_confirmation``: the account must confirm its email first
    """

    outcome: LinkOutcome
    account: AccountInfo
    session_token: str | None = None
    needs_completion: bool = False
    signup_ticket: str | None = None
    awaiting_confirmation: bool = False


class ProviderCallbackUseCase:
    """Use case for signing in or signing up through an identity provider."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        confirmation_gate: ConfirmationGate,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize provider callback use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            identity_link_service: Matches provider identities to accounts
            confirmation_gate: Email confirmation state
            session_service: Establishes sessions
            auth_settings: Authentication settings (signup ticket signing)
        """
        self.auth_service = auth_service
        self.identity_link_service = identity_link_service
        self.confirmation_gate = confirmation_gate
        self.session_service = session_service
        self.auth_settings = auth_settings

    async def execute(self, request: ProviderCallbackRequest) -> ProviderCallbackResponse:
        """Execute provider login.

        Steps:
        1. Complete OAuth with the provider and read its profile claims
        2. Link the claims to an account (existing or newly provisioned)
        3. Establish a session if the account is complete and confirmed,
           otherwise route it to signup completion or email confirmation

        Raises:
            InvalidProviderResponse: If the provider returned unusable claims
            ProviderError: If the OAuth exchange fails
            ValueError: If the provider is not supported
        """
        claims = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )

        with logfire.span("provider_callback", provider=request.provider.value):
            result = await self.identity_link_service.resolve(claims)
            account = result.account

            if can_submit(account.signup_state):
                logfire.info(
                    "Provider login needs signup completion",
                    account_id=str(account.id),
                    outcome=result.outcome.value,
                )
                return ProviderCallbackResponse(
                    outcome=result.outcome,
                    account=AccountInfo.from_account(account),
                    needs_completion=True,
                    signup_ticket=create_signup_ticket(
                        str(account.id), self.auth_settings
                    ),
                )

            if not (
                account.is_signup_complete and self.confirmation_gate.is_confirmed(account)
            ):
                logfire.info(
                    "Provider login awaiting email confirmation",
                    account_id=str(account.id),
                )
                return ProviderCallbackResponse(
                    outcome=result.outcome,
                    account=AccountInfo.from_account(account),
                    awaiting_confirmation=True,
                )

            issued = await self.session_service.establish(account)
            return ProviderCallbackResponse(
                outcome=result.outcome,
                account=AccountInfo.from_account(account),
                session_token=issued.token,
            )
