"""PostgreSQL implementation of Session repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from participa.domain.model.session import Session
from participa.domain.repository import SessionRepository
from participa.domain.value import AccountId, SessionId
from participa.persistence.mappers import row_to_session, session_to_dict
from participa.persistence.tables import sessions_table


class PostgresSessionRepository(SessionRepository):
    """PostgreSQL implementation of SessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        stmt = select(sessions_table).where(sessions_table.c.id == session_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_session(dict(row)) if row else None

    async def find_active_by_account_id(
        self, account_id: AccountId, now: datetime
    ) -> Optional[Session]:
        stmt = (
            select(sessions_table)
            .where(
                sessions_table.c.account_id == account_id,
                sessions_table.c.expires_at > now,
            )
            .order_by(sessions_table.c.refreshed_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_session(dict(row)) if row else None

    async def save(self, session: Session) -> Session:
        existing = await self.find_by_id(session.id)

        session_dict = session_to_dict(session)

        if existing:
            stmt = (
                sessions_table.update()
                .where(sessions_table.c.id == session.id)
                .values(**session_dict)
            )
        else:
            stmt = sessions_table.insert().values(**session_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return session

    async def delete(self, session_id: SessionId) -> bool:
        stmt = sessions_table.delete().where(sessions_table.c.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all_for_account(self, account_id: AccountId) -> int:
        stmt = sessions_table.delete().where(sessions_table.c.account_id == account_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
