"""Unit tests for the in-memory unit of work."""

import pytest

from participa.domain.error import DuplicateKeyError
from participa.domain.repository import AccountRepository, UnitOfWork
from tests.factories import make_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInMemoryUnitOfWork:
    """Tests for InMemoryUnitOfWork atomic blocks."""

    @pytest.mark.asyncio
    async def test_failed_block_rolls_back(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        account_repo = await unit_env.get(AccountRepository)

        with pytest.raises(RuntimeError):
            async with uow.atomic():
                await account_repo.save(make_account())
                raise RuntimeError("boom")

        assert await account_repo.count() == 0

    @pytest.mark.asyncio
    async def test_committed_block_keeps_writes(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        account_repo = await unit_env.get(AccountRepository)

        async with uow.atomic():
            await account_repo.save(make_account())

        assert await account_repo.count() == 1

    @pytest.mark.asyncio
    async def test_nested_block_rolls_back_only_its_writes(self, unit_env):
        uow = await unit_env.get(UnitOfWork)
        account_repo = await unit_env.get(AccountRepository)

        async with uow.atomic():
            await account_repo.save(make_account())
            with pytest.raises(DuplicateKeyError):
                async with uow.atomic():
                    await account_repo.save(
                        make_account(username="otra", email="otra@madrid.es")
                    )
                    # Same email as the first account
                    await account_repo.save(make_account(username="tercera"))

        assert await account_repo.count() == 1
        assert await account_repo.find_by_email("otra@madrid.es") is None
