"""Identity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.model.identity import Identity
from participa.domain.repository.identity import IdentityRepository
from participa.domain.value import AccountId, AuthProvider
from participa.persistence.integrity import duplicate_key_error
from participa.persistence.mappers import identity_to_dict, row_to_identity
from participa.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        """Get identity by provider and external ID.

        Args:
            provider: Identity provider
            external_id: Provider-scoped external ID

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(
            identities_table.c.provider == provider.value,
            identities_table.c.external_id == external_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity(dict(row))

    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        """Find all identities linked to an account, oldest first."""
        stmt = (
            select(identities_table)
            .where(identities_table.c.account_id == account_id)
            .order_by(identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_identity(dict(row)) for row in rows]

    async def add(self, identity: Identity) -> Identity:
        """Insert a new identity.

        Raises:
            DuplicateKeyError: If the (provider, external_id) pair is linked
                already, or the account already has an identity for the provider
        """
        stmt = identities_table.insert().values(**identity_to_dict(identity))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            duplicate = duplicate_key_error(e)
            if duplicate is None:
                raise
            raise duplicate from e
        return identity

    async def count(self) -> int:
        """Count all identities."""
        result = await self.session.execute(
            select(func.count()).select_from(identities_table)
        )
        return result.scalar_one()
