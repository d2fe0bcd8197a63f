from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session, User


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID, for_update: bool = False) -> Optional[Session]:
        """Get session by ID; for_update locks the row until commit"""
        stmt = select(Session).where(Session.id == session_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_active_by_tenant_id(self, tenant_id: UUID) -> List[Session]:
        """Get all non-revoked sessions of the tenant's users"""
        stmt = (
            select(Session)
            .join(User, User.id == Session.user_id)
            .where(User.tenant_id == tenant_id, Session.revoked == False)  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_expired_impersonating(self, now: datetime) -> List[Session]:
        """Get expired or revoked sessions that still carry impersonation state"""
        stmt = select(Session).where(
            Session.impersonation.is_not(None),
            or_(Session.revoked == True, Session.expires_at <= now),  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return [s for s in result.all() if s.impersonation]

    async def get_impersonating_tenant(self, tenant_id: UUID) -> List[Session]:
        """Get live sessions whose impersonation targets the tenant"""
        stmt = select(Session).where(
            Session.impersonation.is_not(None),
            Session.revoked == False,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return [
            s
            for s in result.all()
            if s.impersonation
            and s.impersonation.get("impersonated_tenant_id") == str(tenant_id)
        ]
