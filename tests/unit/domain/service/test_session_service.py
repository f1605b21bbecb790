"""Unit tests for SessionService."""

import pytest

from participa.config import AuthSettings
from participa.domain.error import IncompleteSignupError, UnconfirmedAccountError
from participa.domain.repository import AccountRepository, SessionRepository
from participa.domain.service import SessionService
from participa.domain.value import SignupState
from participa.util.jwt import verify_token
from tests.factories import make_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestEstablish:
    """Tests for SessionService.establish()."""

    @pytest.mark.asyncio
    async def test_establish_issues_token_for_session(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)
        settings = await unit_env.get(AuthSettings)

        issued = await sessions.establish(account)

        payload = verify_token(issued.token, settings)
        assert payload.session_id == str(issued.session.id)
        assert payload.account_id == str(account.id)
        assert payload.username == "manuela"
        assert issued.refreshed is False

    @pytest.mark.asyncio
    async def test_establish_twice_refreshes_one_session(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)

        first = await sessions.establish(account)
        second = await sessions.establish(account)

        assert second.refreshed is True
        assert second.session.id == first.session.id
        assert second.session.expires_at >= first.session.expires_at

    @pytest.mark.asyncio
    async def test_unconfirmed_account_gets_no_session(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(
            make_account(
                email_confirmed=False, signup_state=SignupState.AWAITING_CONFIRMATION
            )
        )
        sessions = await unit_env.get(SessionService)
        session_repo = await unit_env.get(SessionRepository)

        with pytest.raises(UnconfirmedAccountError):
            await sessions.establish(account)

        assert session_repo.store.sessions == {}

    @pytest.mark.asyncio
    async def test_unfinished_signup_gets_no_session(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(
            make_account(signup_state=SignupState.AWAITING_INPUT)
        )
        sessions = await unit_env.get(SessionService)
        session_repo = await unit_env.get(SessionRepository)

        with pytest.raises(IncompleteSignupError) as exc_info:
            await sessions.establish(account)

        assert exc_info.value.signup_state == "awaiting_input"
        assert session_repo.store.sessions == {}


class TestAuthenticateAndSignOut:
    """Tests for SessionService.authenticate() and sign_out()."""

    @pytest.mark.asyncio
    async def test_authenticate_resolves_account(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)
        issued = await sessions.establish(account)

        assert await sessions.authenticate(issued.token) == account

    @pytest.mark.asyncio
    async def test_authenticate_rejects_garbage(self, unit_env):
        sessions = await unit_env.get(SessionService)

        assert await sessions.authenticate("not-a-jwt") is None
        assert await sessions.authenticate(None) is None

    @pytest.mark.asyncio
    async def test_sign_out_destroys_session(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)
        issued = await sessions.establish(account)

        result = await sessions.sign_out(issued.token)

        assert result.already_signed_out is False
        assert await sessions.authenticate(issued.token) is None

    @pytest.mark.asyncio
    async def test_sign_out_is_idempotent(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)
        issued = await sessions.establish(account)
        await sessions.sign_out(issued.token)

        again = await sessions.sign_out(issued.token)
        without_token = await sessions.sign_out(None)

        assert again.already_signed_out is True
        assert without_token.already_signed_out is True

    @pytest.mark.asyncio
    async def test_destroy_all(self, unit_env):
        account = await (await unit_env.get(AccountRepository)).save(make_account())
        sessions = await unit_env.get(SessionService)
        issued = await sessions.establish(account)

        destroyed = await sessions.destroy_all(account.id)

        assert destroyed == 1
        assert await sessions.authenticate(issued.token) is None
