"""PostgreSQL implementation of AuthToken repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.model.auth_token import AuthToken
from participa.domain.repository import AuthTokenRepository
from participa.domain.value import AccountId, TokenPurpose
from participa.persistence.mappers import auth_token_to_dict, row_to_auth_token
from participa.persistence.tables import auth_tokens_table


class PostgresAuthTokenRepository(AuthTokenRepository):
    """PostgreSQL implementation of AuthTokenRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, token: AuthToken) -> AuthToken:
        """Insert a new token."""
        stmt = auth_tokens_table.insert().values(**auth_token_to_dict(token))
        await self.session.execute(stmt)
        await self.session.flush()
        return token

    async def find_by_hash(
        self, token_hash: str, purpose: TokenPurpose
    ) -> Optional[AuthToken]:
        """Find a token by digest, whatever its state."""
        stmt = select(auth_tokens_table).where(
            auth_tokens_table.c.token_hash == token_hash,
            auth_tokens_table.c.purpose == purpose.value,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_auth_token(dict(row)) if row else None

    async def consume(
        self, token_hash: str, purpose: TokenPurpose, now: datetime
    ) -> Optional[AuthToken]:
        """Mark a live token used in a single conditional update.

        Concurrent callers race on the row lock; only the first sees the
        row still unused and gets it back.
        """
        stmt = (
            auth_tokens_table.update()
            .where(
                auth_tokens_table.c.token_hash == token_hash,
                auth_tokens_table.c.purpose == purpose.value,
                auth_tokens_table.c.used_at.is_(None),
                auth_tokens_table.c.superseded_at.is_(None),
                auth_tokens_table.c.expires_at > now,
            )
            .values(used_at=now)
            .returning(auth_tokens_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_auth_token(dict(row)) if row else None

    async def supersede_live(
        self, account_id: AccountId, purpose: TokenPurpose, now: datetime
    ) -> int:
        """Supersede every unused token of ``purpose`` for the account."""
        stmt = (
            auth_tokens_table.update()
            .where(
                auth_tokens_table.c.account_id == account_id,
                auth_tokens_table.c.purpose == purpose.value,
                auth_tokens_table.c.used_at.is_(None),
                auth_tokens_table.c.superseded_at.is_(None),
            )
            .values(superseded_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
