import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import and_, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_tenant_paginated(
        self, tenant_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a tenant with cursor-based pagination.

        Cursor format: base64 of "<created_at ISO>|<id>" of the last event
        returned. Events sharing a timestamp are ordered by id.
        """
        stmt = select(AuditEvent).where(AuditEvent.tenant_id == tenant_id)

        if cursor:
            try:
                cursor_str = base64.b64decode(cursor).decode("utf-8")
                timestamp_str, _, last_id_str = cursor_str.partition("|")
                cursor_timestamp = datetime.fromisoformat(timestamp_str)
                if last_id_str:
                    last_id = UUID(last_id_str)
                    stmt = stmt.where(
                        or_(
                            AuditEvent.created_at < cursor_timestamp,
                            and_(
                                AuditEvent.created_at == cursor_timestamp,
                                AuditEvent.id < last_id,
                            ),
                        )
                    )
                else:
                    stmt = stmt.where(AuditEvent.created_at < cursor_timestamp)
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            last = events[-1]
            cursor_str = f"{last.created_at.isoformat()}|{last.id}"
            next_cursor = base64.b64encode(cursor_str.encode("utf-8")).decode("utf-8")

        return events, next_cursor
