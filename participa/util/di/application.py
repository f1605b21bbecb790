"""Application layer DI providers."""

from dishka import Scope, provide

from participa.application.usecase.auth import (
    CompleteSignupUseCase,
    ConfirmEmailUseCase,
    GetCurrentAccountUseCase,
    InitiateLoginUseCase,
    ProviderCallbackUseCase,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    ResendConfirmationUseCase,
    ResetPasswordUseCase,
    SignInUseCase,
    SignOutUseCase,
)
from participa.config import AuthSettings
from participa.domain.repository import (
    AccountRepository,
    IdentityRepository,
    UnitOfWork,
)
from participa.domain.service import (
    AuthService,
    CaptchaVerifier,
    CollisionResolver,
    ConfirmationGate,
    IdentityLinkService,
    Mailer,
    PasswordService,
    SessionService,
    SignupCompletionService,
    TokenService,
)
from participa.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Signup use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        account_repository: AccountRepository,
        collision_resolver: CollisionResolver,
        password_service: PasswordService,
        captcha_verifier: CaptchaVerifier,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            account_repository=account_repository,
            collision_resolver=collision_resolver,
            password_service=password_service,
            captcha_verifier=captcha_verifier,
            confirmation_gate=confirmation_gate,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_initiate_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateLoginUseCase:
        """Provide initiate login use case."""
        return InitiateLoginUseCase(auth_service=auth_service)

    @provide(scope=Scope.REQUEST)
    def get_provider_callback_use_case(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        confirmation_gate: ConfirmationGate,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> ProviderCallbackUseCase:
        """Provide provider callback use case."""
        return ProviderCallbackUseCase(
            auth_service=auth_service,
            identity_link_service=identity_link_service,
            confirmation_gate=confirmation_gate,
            session_service=session_service,
            auth_settings=auth_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_complete_signup_use_case(
        self,
        signup_service: SignupCompletionService,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> CompleteSignupUseCase:
        """Provide complete signup use case."""
        return CompleteSignupUseCase(
            signup_service=signup_service,
            session_service=session_service,
            auth_settings=auth_settings,
        )

    # Confirmation use cases
    @provide(scope=Scope.REQUEST)
    def get_confirm_email_use_case(
        self, confirmation_gate: ConfirmationGate, session_service: SessionService
    ) -> ConfirmEmailUseCase:
        """Provide confirm email use case."""
        return ConfirmEmailUseCase(
            confirmation_gate=confirmation_gate, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_confirmation_use_case(
        self, confirmation_gate: ConfirmationGate
    ) -> ResendConfirmationUseCase:
        """Provide resend confirmation use case."""
        return ResendConfirmationUseCase(confirmation_gate=confirmation_gate)

    # Password use cases
    @provide(scope=Scope.REQUEST)
    def get_request_password_reset_use_case(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        mailer: Mailer,
    ) -> RequestPasswordResetUseCase:
        """Provide request password reset use case."""
        return RequestPasswordResetUseCase(
            account_repository=account_repository,
            token_service=token_service,
            mailer=mailer,
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_use_case(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        password_service: PasswordService,
        session_service: SessionService,
        unit_of_work: UnitOfWork,
    ) -> ResetPasswordUseCase:
        """Provide reset password use case."""
        return ResetPasswordUseCase(
            account_repository=account_repository,
            token_service=token_service,
            password_service=password_service,
            session_service=session_service,
            unit_of_work=unit_of_work,
        )

    # Session use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self,
        account_repository: AccountRepository,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> SignInUseCase:
        """Provide sign in use case."""
        return SignInUseCase(
            account_repository=account_repository,
            password_service=password_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_out_use_case(self, session_service: SessionService) -> SignOutUseCase:
        """Provide sign out use case."""
        return SignOutUseCase(session_service=session_service)

    @provide(scope=Scope.REQUEST)
    def get_current_account_use_case(
        self,
        session_service: SessionService,
        identity_repository: IdentityRepository,
    ) -> GetCurrentAccountUseCase:
        """Provide get current account use case."""
        return GetCurrentAccountUseCase(
            session_service=session_service,
            identity_repository=identity_repository,
        )
