"""Unit tests for ConfirmEmailUseCase and ResendConfirmationUseCase."""

import pytest

from participa.application.usecase.auth import (
    ConfirmEmailUseCase,
    RegisterUseCase,
    ResendConfirmationUseCase,
)
from participa.application.usecase.auth.confirm_email import ConfirmEmailRequest
from participa.application.usecase.auth.register import RegisterRequest
from participa.application.usecase.auth.resend_confirmation import (
    RESEND_MESSAGE,
    ResendConfirmationRequest,
)
from participa.domain.error import InvalidTokenError
from participa.domain.service import Mailer, SessionService
from participa.domain.value import SignupState
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _register(unit_env, email: str = "manuela@madrid.es") -> str:
    """Register with a password and return the mailed confirmation token."""
    register = await unit_env.get(RegisterUseCase)
    await register.execute(
        RegisterRequest(
            username="manuela",
            email=email,
            password="correct horse",
            password_confirmation="correct horse",
            captcha_response="captcha-ok",
            terms_accepted=True,
        )
    )
    mailer = await unit_env.get(Mailer)
    return mailer.last_to(email).token


class TestConfirmEmailUseCase:
    """Tests for ConfirmEmailUseCase."""

    @pytest.mark.asyncio
    async def test_confirmation_completes_signup_and_signs_in(self, unit_env):
        token = await _register(unit_env)
        use_case = await unit_env.get(ConfirmEmailUseCase)
        sessions = await unit_env.get(SessionService)

        response = await use_case.execute(ConfirmEmailRequest(confirmation_token=token))

        assert response.account.email_confirmed is True
        assert response.account.signup_state == SignupState.COMPLETE
        account = await sessions.authenticate(response.session_token)
        assert account.email == "manuela@madrid.es"

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, unit_env):
        token = await _register(unit_env)
        use_case = await unit_env.get(ConfirmEmailUseCase)
        await use_case.execute(ConfirmEmailRequest(confirmation_token=token))

        with pytest.raises(InvalidTokenError):
            await use_case.execute(ConfirmEmailRequest(confirmation_token=token))

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(ConfirmEmailUseCase)

        with pytest.raises(InvalidTokenError):
            await use_case.execute(ConfirmEmailRequest(confirmation_token="bogus"))


class TestResendConfirmationUseCase:
    """Tests for ResendConfirmationUseCase."""

    @pytest.mark.asyncio
    async def test_resend_supersedes_previous_link(self, unit_env):
        first = await _register(unit_env)
        resend = await unit_env.get(ResendConfirmationUseCase)
        confirm = await unit_env.get(ConfirmEmailUseCase)
        mailer = await unit_env.get(Mailer)

        response = await resend.execute(
            ResendConfirmationRequest(email="manuela@madrid.es")
        )
        second = mailer.last_to("manuela@madrid.es").token

        assert response.message == RESEND_MESSAGE
        assert second != first
        with pytest.raises(InvalidTokenError):
            await confirm.execute(ConfirmEmailRequest(confirmation_token=first))
        confirmed = await confirm.execute(
            ConfirmEmailRequest(confirmation_token=second)
        )
        assert confirmed.account.email_confirmed is True

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self, unit_env):
        resend = await unit_env.get(ResendConfirmationUseCase)
        mailer = await unit_env.get(Mailer)

        response = await resend.execute(
            ResendConfirmationRequest(email="nobody@madrid.es")
        )

        assert response.message == RESEND_MESSAGE
        assert mailer.deliveries == []
