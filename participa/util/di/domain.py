"""Domain layer DI providers."""

from dishka import Scope, provide

from participa.config import AuthSettings
from participa.domain.repository import (
    AccountRepository,
    AuthTokenRepository,
    IdentityRepository,
    SessionRepository,
    UnitOfWork,
)
from participa.domain.service import (
    AuthService,
    CollisionResolver,
    ConfirmationGate,
    IdentityLinkService,
    Mailer,
    OAuthClient,
    PasswordHasher,
    PasswordService,
    SessionService,
    SignupCompletionService,
    TokenService,
)
from participa.domain.value import AuthProvider
from participa.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_collision_resolver(
        self, account_repository: AccountRepository
    ) -> CollisionResolver:
        """Provide username/email availability service."""
        return CollisionResolver(account_repository=account_repository)

    @provide
    def get_token_service(
        self, auth_token_repository: AuthTokenRepository, auth_settings: AuthSettings
    ) -> TokenService:
        """Provide one-time token service."""
        return TokenService(
            auth_token_repository=auth_token_repository, auth_settings=auth_settings
        )

    @provide
    def get_password_service(
        self, password_hasher: PasswordHasher, auth_settings: AuthSettings
    ) -> PasswordService:
        """Provide password policy service."""
        return PasswordService(
            password_hasher=password_hasher, auth_settings=auth_settings
        )

    @provide
    def get_confirmation_gate(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        mailer: Mailer,
        unit_of_work: UnitOfWork,
    ) -> ConfirmationGate:
        """Provide email confirmation gate."""
        return ConfirmationGate(
            account_repository=account_repository,
            token_service=token_service,
            mailer=mailer,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_session_service(
        self,
        account_repository: AccountRepository,
        session_repository: SessionRepository,
        confirmation_gate: ConfirmationGate,
        auth_settings: AuthSettings,
    ) -> SessionService:
        """Provide session service."""
        return SessionService(
            account_repository=account_repository,
            session_repository=session_repository,
            confirmation_gate=confirmation_gate,
            auth_settings=auth_settings,
        )

    @provide
    def get_identity_link_service(
        self,
        account_repository: AccountRepository,
        identity_repository: IdentityRepository,
        collision_resolver: CollisionResolver,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
        auth_settings: AuthSettings,
    ) -> IdentityLinkService:
        """Provide identity linking service."""
        return IdentityLinkService(
            account_repository=account_repository,
            identity_repository=identity_repository,
            collision_resolver=collision_resolver,
            confirmation_gate=confirmation_gate,
            unit_of_work=unit_of_work,
            auth_settings=auth_settings,
        )

    @provide
    def get_signup_completion_service(
        self,
        account_repository: AccountRepository,
        collision_resolver: CollisionResolver,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
    ) -> SignupCompletionService:
        """Provide signup completion state machine."""
        return SignupCompletionService(
            account_repository=account_repository,
            collision_resolver=collision_resolver,
            confirmation_gate=confirmation_gate,
            unit_of_work=unit_of_work,
        )
