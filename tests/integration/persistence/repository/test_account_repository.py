"""Integration tests for the PostgreSQL account and identity repositories.

These tests verify uniqueness constraints surface as domain errors and
that a failed atomic block leaves the request transaction usable.
"""

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.error import DuplicateKeyError
from participa.domain.repository import (
    AccountRepository,
    IdentityRepository,
    UnitOfWork,
)
from participa.domain.value import AuthProvider, Username
from tests.factories import make_account, make_identity
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE sessions, auth_tokens, identities, accounts CASCADE")
    )
    await session.commit()
    yield


class TestAccountRepositoryIntegration:
    """Integration tests for PostgresAccountRepository."""

    @pytest.mark.asyncio
    async def test_round_trip(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        account = make_account()

        await account_repo.save(account)

        by_username = await account_repo.find_by_username(Username("manuela"))
        by_email = await account_repo.find_by_email("manuela@madrid.es")
        assert by_username.id == account.id
        assert by_email.id == account.id
        assert by_email.signup_state == account.signup_state
        assert by_email.email_confirmed is True

    @pytest.mark.asyncio
    async def test_duplicate_email_inside_atomic_block(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        uow = await integration_env.get(UnitOfWork)
        await account_repo.save(make_account())

        with pytest.raises(DuplicateKeyError) as exc_info:
            async with uow.atomic():
                await account_repo.save(make_account(username="otra"))

        assert exc_info.value.field == "email"
        # The request transaction survives the failed savepoint
        assert await account_repo.count() == 1

    @pytest.mark.asyncio
    async def test_duplicate_username_inside_atomic_block(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        uow = await integration_env.get(UnitOfWork)
        await account_repo.save(make_account())

        with pytest.raises(DuplicateKeyError) as exc_info:
            async with uow.atomic():
                await account_repo.save(make_account(email="otra@madrid.es"))

        assert exc_info.value.field == "username"


class TestIdentityRepositoryIntegration:
    """Integration tests for PostgresIdentityRepository."""

    @pytest.mark.asyncio
    async def test_identity_is_unique_per_provider(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        identity_repo = await integration_env.get(IdentityRepository)
        uow = await integration_env.get(UnitOfWork)
        first = await account_repo.save(make_account())
        second = await account_repo.save(
            make_account(username="otra", email="otra@madrid.es")
        )
        await identity_repo.add(make_identity(first))

        with pytest.raises(DuplicateKeyError) as exc_info:
            async with uow.atomic():
                await identity_repo.add(make_identity(second))

        assert exc_info.value.field == "identity"
        found = await identity_repo.find_by_provider(AuthProvider.TWITTER, "12345")
        assert found.account_id == first.id
