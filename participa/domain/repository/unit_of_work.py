"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one all-or-nothing block.

    Usage:
        async with unit_of_work.atomic():
            await account_repository.save(account)
            await identity_repository.add(identity)

    If the block raises, every write made inside it is rolled back and the
    exception propagates.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block."""
        pass
