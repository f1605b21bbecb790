"""Unit tests for the password reset use cases."""

import pytest

from participa.adapter.twitter import TwitterOAuthClient
from participa.application.usecase.auth import (
    ProviderCallbackUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    SignInUseCase,
)
from participa.application.usecase.auth.provider_callback import (
    ProviderCallbackRequest,
)
from participa.application.usecase.auth.request_password_reset import (
    RESET_REQUESTED_MESSAGE,
    RequestPasswordResetRequest,
)
from participa.application.usecase.auth.reset_password import ResetPasswordRequest
from participa.application.usecase.auth.sign_in import SignInRequest
from participa.domain.error import (
    IncompleteSignupError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
)
from participa.domain.repository import AccountRepository
from participa.domain.service import Mailer, PasswordHasher, SessionService
from participa.domain.value import AuthProvider, SignupState
from tests.factories import make_account, twitter_claims
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed_account(unit_env):
    hasher = await unit_env.get(PasswordHasher)
    account_repo = await unit_env.get(AccountRepository)
    return await account_repo.save(
        make_account(password_hash=hasher.hash("old password"))
    )


async def _reset_token(unit_env) -> str:
    request_reset = await unit_env.get(RequestPasswordResetUseCase)
    await request_reset.execute(RequestPasswordResetRequest(email="manuela@madrid.es"))
    mailer = await unit_env.get(Mailer)
    return mailer.last_to("manuela@madrid.es").token


class TestRequestPasswordResetUseCase:
    """Tests for RequestPasswordResetUseCase."""

    @pytest.mark.asyncio
    async def test_known_email_receives_link(self, unit_env):
        await _seed_account(unit_env)
        use_case = await unit_env.get(RequestPasswordResetUseCase)
        mailer = await unit_env.get(Mailer)

        response = await use_case.execute(
            RequestPasswordResetRequest(email="MANUELA@madrid.es")
        )

        assert response.message == RESET_REQUESTED_MESSAGE
        mail = mailer.last_to("manuela@madrid.es")
        assert "reset_password_token=" in mail.link

    @pytest.mark.asyncio
    async def test_unknown_email_is_indistinguishable(self, unit_env):
        use_case = await unit_env.get(RequestPasswordResetUseCase)
        mailer = await unit_env.get(Mailer)

        response = await use_case.execute(
            RequestPasswordResetRequest(email="nobody@madrid.es")
        )

        assert response.message == RESET_REQUESTED_MESSAGE
        assert mailer.deliveries == []


class TestResetPasswordUseCase:
    """Tests for ResetPasswordUseCase."""

    @pytest.mark.asyncio
    async def test_reset_changes_password_and_destroys_sessions(self, unit_env):
        account = await _seed_account(unit_env)
        sessions = await unit_env.get(SessionService)
        issued = await sessions.establish(account)
        token = await _reset_token(unit_env)
        use_case = await unit_env.get(ResetPasswordUseCase)
        sign_in = await unit_env.get(SignInUseCase)

        response = await use_case.execute(
            ResetPasswordRequest(
                reset_password_token=token,
                password="new password",
                password_confirmation="new password",
            )
        )

        assert response.sessions_destroyed == 1
        assert await sessions.authenticate(issued.token) is None
        with pytest.raises(InvalidCredentialsError):
            await sign_in.execute(
                SignInRequest(email="manuela@madrid.es", password="old password")
            )
        signed_in = await sign_in.execute(
            SignInRequest(email="manuela@madrid.es", password="new password")
        )
        assert signed_in.account.account_id == str(account.id)

    @pytest.mark.asyncio
    async def test_rejected_password_keeps_token_usable(self, unit_env):
        await _seed_account(unit_env)
        token = await _reset_token(unit_env)
        use_case = await unit_env.get(ResetPasswordUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                ResetPasswordRequest(
                    reset_password_token=token,
                    password="new password",
                    password_confirmation="typo password",
                )
            )
        assert "password_confirmation" in exc_info.value.errors

        response = await use_case.execute(
            ResetPasswordRequest(
                reset_password_token=token,
                password="new password",
                password_confirmation="new password",
            )
        )
        assert response.sessions_destroyed == 0

    @pytest.mark.asyncio
    async def test_token_cannot_be_reused(self, unit_env):
        await _seed_account(unit_env)
        token = await _reset_token(unit_env)
        use_case = await unit_env.get(ResetPasswordUseCase)
        request = ResetPasswordRequest(
            reset_password_token=token,
            password="new password",
            password_confirmation="new password",
        )
        await use_case.execute(request)

        with pytest.raises(InvalidTokenError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_reset_does_not_skip_unfinished_signup(self, unit_env):
        # Verified provider email, but the username is taken by someone else
        account_repo = await unit_env.get(AccountRepository)
        await account_repo.save(make_account(email="other@madrid.es"))
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims(
            email="manuela@barcelona.es", verified_email=True
        )
        callback = await unit_env.get(ProviderCallbackUseCase)
        pending = await callback.execute(
            ProviderCallbackRequest(
                provider=AuthProvider.TWITTER, code="oauth_code_123", state="state_123"
            )
        )
        assert pending.account.signup_state == SignupState.AWAITING_INPUT

        request_reset = await unit_env.get(RequestPasswordResetUseCase)
        await request_reset.execute(
            RequestPasswordResetRequest(email="manuela@barcelona.es")
        )
        mailer = await unit_env.get(Mailer)
        reset = await unit_env.get(ResetPasswordUseCase)
        await reset.execute(
            ResetPasswordRequest(
                reset_password_token=mailer.last_to("manuela@barcelona.es").token,
                password="new password",
                password_confirmation="new password",
            )
        )
        sign_in = await unit_env.get(SignInUseCase)

        with pytest.raises(IncompleteSignupError):
            await sign_in.execute(
                SignInRequest(email="manuela@barcelona.es", password="new password")
            )
