"""Unit tests for ConfirmationGate and TokenService."""

import asyncio
from datetime import timedelta

import pytest

from participa.domain.error import (
    ExpiredTokenError,
    InvalidTokenError,
    UnconfirmedAccountError,
)
from participa.domain.repository import AccountRepository, AuthTokenRepository
from participa.domain.service import ConfirmationGate, Mailer, TokenService, hash_token
from participa.domain.value import SignupState, TokenPurpose
from tests.factories import make_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _unconfirmed(env):
    account_repo = await env.get(AccountRepository)
    return await account_repo.save(
        make_account(
            email_confirmed=False, signup_state=SignupState.AWAITING_CONFIRMATION
        )
    )


class TestTokenService:
    """Tests for TokenService."""

    @pytest.mark.asyncio
    async def test_only_digest_is_stored(self, unit_env):
        account = await _unconfirmed(unit_env)
        tokens = await unit_env.get(TokenService)
        repo = await unit_env.get(AuthTokenRepository)

        raw = await tokens.issue(account.id, TokenPurpose.CONFIRMATION)

        stored = await repo.find_by_hash(hash_token(raw), TokenPurpose.CONFIRMATION)
        assert stored is not None
        assert stored.token_hash != raw

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, unit_env):
        account = await _unconfirmed(unit_env)
        tokens = await unit_env.get(TokenService)
        raw = await tokens.issue(account.id, TokenPurpose.CONFIRMATION)

        consumed = await tokens.consume(raw, TokenPurpose.CONFIRMATION)

        assert consumed.account_id == account.id
        with pytest.raises(InvalidTokenError):
            await tokens.consume(raw, TokenPurpose.CONFIRMATION)

    @pytest.mark.asyncio
    async def test_reissue_supersedes_previous_token(self, unit_env):
        account = await _unconfirmed(unit_env)
        tokens = await unit_env.get(TokenService)
        first = await tokens.issue(account.id, TokenPurpose.CONFIRMATION)
        second = await tokens.issue(account.id, TokenPurpose.CONFIRMATION)

        assert first != second
        with pytest.raises(InvalidTokenError):
            await tokens.consume(first, TokenPurpose.CONFIRMATION)
        await tokens.consume(second, TokenPurpose.CONFIRMATION)

    @pytest.mark.asyncio
    async def test_purposes_do_not_mix(self, unit_env):
        account = await _unconfirmed(unit_env)
        tokens = await unit_env.get(TokenService)
        raw = await tokens.issue(account.id, TokenPurpose.PASSWORD_RESET)

        with pytest.raises(InvalidTokenError):
            await tokens.consume(raw, TokenPurpose.CONFIRMATION)

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        account = await _unconfirmed(unit_env)
        tokens = await unit_env.get(TokenService)
        repo = await unit_env.get(AuthTokenRepository)
        raw = await tokens.issue(account.id, TokenPurpose.CONFIRMATION)

        # Age the stored token past its expiry
        stored = await repo.find_by_hash(hash_token(raw), TokenPurpose.CONFIRMATION)
        repo.store.auth_tokens[stored.id] = stored.model_copy(
            update={"expires_at": stored.created_at - timedelta(seconds=1)}
        )

        with pytest.raises(ExpiredTokenError):
            await tokens.consume(raw, TokenPurpose.CONFIRMATION)


class TestConfirmationGate:
    """Tests for ConfirmationGate."""

    @pytest.mark.asyncio
    async def test_confirm_marks_email_and_completes_signup(self, unit_env):
        account = await _unconfirmed(unit_env)
        gate = await unit_env.get(ConfirmationGate)
        raw = await gate.issue(account)

        confirmed = await gate.confirm(raw)

        assert confirmed.id == account.id
        assert confirmed.email_confirmed is True
        assert confirmed.confirmed_at is not None
        assert confirmed.signup_state == SignupState.COMPLETE
        assert gate.is_confirmed(confirmed)

    @pytest.mark.asyncio
    async def test_concurrent_confirmations_succeed_once(self, unit_env):
        account = await _unconfirmed(unit_env)
        gate = await unit_env.get(ConfirmationGate)
        raw = await gate.issue(account)

        results = await asyncio.gather(
            *(gate.confirm(raw) for _ in range(4)), return_exceptions=True
        )

        confirmed = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InvalidTokenError)]
        assert len(confirmed) == 1
        assert confirmed[0].signup_state == SignupState.COMPLETE
        assert len(rejected) == 3

    @pytest.mark.asyncio
    async def test_issue_mails_the_link(self, unit_env):
        account = await _unconfirmed(unit_env)
        gate = await unit_env.get(ConfirmationGate)
        mailer = await unit_env.get(Mailer)

        raw = await gate.issue(account)

        mail = mailer.last_to(account.email)
        assert mail.token == raw
        assert f"confirmation_token={raw}" in mail.link

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        gate = await unit_env.get(ConfirmationGate)

        with pytest.raises(InvalidTokenError):
            await gate.confirm("not-a-real-token")

    @pytest.mark.asyncio
    async def test_require_confirmed_rejects_unconfirmed(self, unit_env):
        account = await _unconfirmed(unit_env)
        gate = await unit_env.get(ConfirmationGate)

        with pytest.raises(UnconfirmedAccountError):
            gate.require_confirmed(account)

    @pytest.mark.asyncio
    async def test_resend_for_unknown_email_is_silent(self, unit_env):
        gate = await unit_env.get(ConfirmationGate)
        mailer = await unit_env.get(Mailer)

        await gate.resend("nobody@madrid.es")

        assert mailer.deliveries == []

    @pytest.mark.asyncio
    async def test_resend_replaces_the_token(self, unit_env):
        account = await _unconfirmed(unit_env)
        gate = await unit_env.get(ConfirmationGate)
        mailer = await unit_env.get(Mailer)
        first = await gate.issue(account)

        await gate.resend(account.email)

        second = mailer.last_to(account.email).token
        assert second != first
        with pytest.raises(InvalidTokenError):
            await gate.confirm(first)
        assert (await gate.confirm(second)).email_confirmed
