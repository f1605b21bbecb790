"""Unit tests for CollisionResolver."""

import pytest

from participa.domain.service import CollisionResolver
from participa.domain.value import AccountField, Availability
from participa.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryStore,
)
from tests.factories import make_account


@pytest.fixture
def account_repo() -> InMemoryAccountRepository:
    return InMemoryAccountRepository(InMemoryStore())


class TestCheckAvailability:
    """Tests for CollisionResolver.check_availability()."""

    @pytest.mark.asyncio
    async def test_free_username_is_available(self, account_repo):
        resolver = CollisionResolver(account_repo)

        result = await resolver.check_availability(AccountField.USERNAME, "manuela")

        assert result == Availability.AVAILABLE

    @pytest.mark.asyncio
    async def test_username_owned_by_other_is_taken(self, account_repo):
        await account_repo.save(make_account(username="manuela"))
        resolver = CollisionResolver(account_repo)

        result = await resolver.check_availability(AccountField.USERNAME, "manuela")

        assert result == Availability.TAKEN_BY_OTHER

    @pytest.mark.asyncio
    async def test_value_owned_by_excluded_account_is_available(self, account_repo):
        """An account never collides with itself."""
        owner = await account_repo.save(make_account(email="manuela@madrid.es"))
        resolver = CollisionResolver(account_repo)

        result = await resolver.check_availability(
            AccountField.EMAIL, "manuela@madrid.es", excluding_account_id=owner.id
        )

        assert result == Availability.AVAILABLE

    @pytest.mark.asyncio
    async def test_email_check_is_case_insensitive(self, account_repo):
        await account_repo.save(make_account(email="manuela@madrid.es"))
        resolver = CollisionResolver(account_repo)

        assert not await resolver.is_available(AccountField.EMAIL, " Manuela@Madrid.ES ")


class TestUniqueUsername:
    """Tests for CollisionResolver.unique_username()."""

    @pytest.mark.asyncio
    async def test_free_base_is_returned_unchanged(self, account_repo):
        resolver = CollisionResolver(account_repo)

        username = await resolver.unique_username("manuela")

        assert username.root == "manuela"

    @pytest.mark.asyncio
    async def test_taken_base_gets_numeric_suffix(self, account_repo):
        await account_repo.save(make_account(username="manuela", email="a@madrid.es"))
        await account_repo.save(make_account(username="manuela-2", email="b@madrid.es"))
        resolver = CollisionResolver(account_repo)

        username = await resolver.unique_username("manuela")

        assert username.root == "manuela-3"

    @pytest.mark.asyncio
    async def test_empty_base_falls_back(self, account_repo):
        resolver = CollisionResolver(account_repo)

        username = await resolver.unique_username("")

        assert username.root == "user"

    @pytest.mark.asyncio
    async def test_suffix_respects_max_length(self, account_repo):
        base = "a" * 60
        await account_repo.save(make_account(username=base))
        resolver = CollisionResolver(account_repo)

        username = await resolver.unique_username(base)

        assert len(username.root) <= 60
        assert username.root.endswith("-2")
