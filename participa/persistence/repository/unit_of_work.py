"""PostgreSQL unit of work backed by savepoints."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Runs a block inside a SAVEPOINT of the request transaction.

    A failing block (e.g. a unique violation) rolls back to the savepoint
    and leaves the request transaction usable for follow-up reads.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
