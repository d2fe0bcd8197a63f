"""
Get Audit Events Use Case

Retrieves the audit trail of the effective tenant with pagination.
"""

from typing import Any, Dict, Optional

from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.libs.result import Error, Result, Return


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Caller must be a tenant admin, or a super user (who reaches a tenant
      by impersonating it)
    - Results are tenant-scoped (only events for the effective tenant)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes event_type, message, actor_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard):
        self.uow = uow
        self.guard = guard

    async def execute(
        self,
        context: RequestContext,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            context: Request context of the caller
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        tenant_id = self.guard.require_tenant_context(context)

        if not (context.is_real_super_user or context.acting_user_role == UserRole.admin):
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "You do not have permission to view audit events",
                )
            )

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_by_tenant_paginated(
                tenant_id, limit=limit, cursor=cursor
            )

            emails: Dict[Any, Optional[str]] = {}
            events_list = []
            for event in events:
                actor_email = None
                if event.actor_user_id:
                    if event.actor_user_id not in emails:
                        actor = await self.uow.users.get_by_id(event.actor_user_id)
                        emails[event.actor_user_id] = actor.email if actor else None
                    actor_email = emails[event.actor_user_id]

                events_list.append(
                    {
                        "event_type": event.event_type,
                        "message": event.message,
                        "actor_user_id": str(event.actor_user_id) if event.actor_user_id else None,
                        "actor_email": actor_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
