"""Unit tests for ProviderCallbackUseCase."""

import pytest

from participa.adapter.twitter import TwitterOAuthClient
from participa.application.usecase.auth import ProviderCallbackUseCase
from participa.application.usecase.auth.provider_callback import (
    ProviderCallbackRequest,
)
from participa.config import AuthSettings
from participa.domain.error import InvalidProviderResponse
from participa.domain.repository import AccountRepository, IdentityRepository
from participa.domain.service import SessionService
from participa.domain.value import AuthProvider, LinkOutcome, SignupState
from participa.util.jwt import verify_signup_ticket
from tests.factories import make_account, make_identity, twitter_claims
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

CALLBACK = ProviderCallbackRequest(
    provider=AuthProvider.TWITTER, code="oauth_code_123", state="state_123"
)


class TestProviderCallbackUseCase:
    """Tests for ProviderCallbackUseCase."""

    @pytest.mark.asyncio
    async def test_verified_email_signs_in_immediately(self, unit_env):
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims(email="manuela@madrid.es", verified_email=True)
        use_case = await unit_env.get(ProviderCallbackUseCase)
        sessions = await unit_env.get(SessionService)

        response = await use_case.execute(CALLBACK)

        assert response.outcome == LinkOutcome.CREATED_COMPLETE
        assert response.session_token is not None
        assert response.needs_completion is False
        account = await sessions.authenticate(response.session_token)
        assert account.username.root == "manuela"

    @pytest.mark.asyncio
    async def test_missing_email_needs_completion(self, unit_env):
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims(email=None)
        use_case = await unit_env.get(ProviderCallbackUseCase)
        settings = await unit_env.get(AuthSettings)

        response = await use_case.execute(CALLBACK)

        assert response.outcome == LinkOutcome.CREATED_NEEDS_COMPLETION
        assert response.needs_completion is True
        assert response.session_token is None
        assert response.account.email is None  # placeholder is never exposed
        ticket = verify_signup_ticket(response.signup_ticket, settings)
        assert ticket.account_id == response.account.account_id

    @pytest.mark.asyncio
    async def test_unverified_email_awaits_confirmation(self, unit_env):
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims(email="manuela@madrid.es", verified_email=False)
        use_case = await unit_env.get(ProviderCallbackUseCase)

        response = await use_case.execute(CALLBACK)

        assert response.awaiting_confirmation is True
        assert response.session_token is None
        assert response.account.signup_state == SignupState.AWAITING_CONFIRMATION

    @pytest.mark.asyncio
    async def test_linked_identity_reuses_account(self, unit_env):
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(IdentityRepository)
        account = await account_repo.save(make_account())
        await identity_repo.add(make_identity(account))
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims()
        use_case = await unit_env.get(ProviderCallbackUseCase)

        response = await use_case.execute(CALLBACK)

        assert response.outcome == LinkOutcome.LINKED
        assert response.account.account_id == str(account.id)
        assert response.session_token is not None
        assert await account_repo.count() == 1
        assert await identity_repo.count() == 1

    @pytest.mark.asyncio
    async def test_linked_but_unfinished_account_resumes_completion(self, unit_env):
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims()
        use_case = await unit_env.get(ProviderCallbackUseCase)

        first = await use_case.execute(CALLBACK)
        second = await use_case.execute(CALLBACK)

        assert second.outcome == LinkOutcome.LINKED
        assert second.needs_completion is True
        assert second.account.account_id == first.account.account_id

    @pytest.mark.asyncio
    async def test_claims_without_external_id(self, unit_env):
        client = await unit_env.get(TwitterOAuthClient)
        client.claims = twitter_claims(external_id=None)
        use_case = await unit_env.get(ProviderCallbackUseCase)

        with pytest.raises(InvalidProviderResponse):
            await use_case.execute(CALLBACK)

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, unit_env):
        use_case = await unit_env.get(ProviderCallbackUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(
                ProviderCallbackRequest(
                    provider=AuthProvider.FACEBOOK, code="c", state="s"
                )
            )
