"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.model import Account
from participa.domain.repository import AccountRepository
from participa.domain.value import AccountId, Username
from participa.persistence.integrity import duplicate_key_error
from participa.persistence.mappers import account_to_dict, row_to_account
from participa.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_username(self, username: Username) -> Optional[Account]:
        """Find an account by its username."""
        stmt = select(accounts_table).where(accounts_table.c.username == username.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by its (normalized) email."""
        stmt = select(accounts_table).where(accounts_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: Account to save

        Returns:
            Saved account

        Raises:
            DuplicateKeyError: If the username or email belongs to another account
        """
        existing = await self.find_by_id(account.id)

        account_dict = account_to_dict(account)

        if existing:
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
            )
        else:
            stmt = accounts_table.insert().values(**account_dict)

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            duplicate = duplicate_key_error(e)
            if duplicate is None:
                raise
            raise duplicate from e
        return account

    async def count(self) -> int:
        """Count all accounts."""
        result = await self.session.execute(
            select(func.count()).select_from(accounts_table)
        )
        return result.scalar_one()
