"""
Use Case: Suspend Tenant

Suspends a tenant, revokes every session of its users and ends every
super-user impersonation of it.
"""

import logging
from datetime import datetime, UTC
from typing import Optional
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.enums import TenantStatus
from src.domain.impersonation import (
    ExitImpersonation,
    ImpersonatingState,
    dump_state,
    load_state,
    transition,
)
from src.libs.result import Error, Result, Return
from .dtos import SuspendTenantResponse

logger = logging.getLogger(__name__)


class SuspendTenantUseCase:
    """
    Suspend a tenant.

    Business Logic:
    1. Validate tenant exists
    2. Update tenant status to suspended
    3. Revoke all active sessions for users in this tenant
    4. Clear the impersonation state of super-user sessions inside the tenant
    5. Commit, then write a tenant_suspended audit event and one
       impersonation_expired event per ended impersonation
    6. Return number of sessions revoked

    Idempotent: Suspending already-suspended tenant succeeds but revokes 0 sessions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_user_id: Optional[UUID] = None
    ) -> Result[SuspendTenantResponse]:
        """
        Execute suspend tenant use case.

        Args:
            tenant_id: UUID of tenant to suspend
            actor_user_id: Super user performing the action

        Returns:
            Result[SuspendTenantResponse] with status and sessions_revoked count
        """
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(
                    Error("TENANT_NOT_FOUND", "Tenant not found")
                )

            tenant.status = TenantStatus.suspended
            await self.uow.tenants.update(tenant)

            now = datetime.utcnow()
            sessions = await self.uow.sessions.get_active_by_tenant_id(tenant_id)
            sessions_revoked = 0
            for session in sessions:
                if not session.revoked:
                    session.revoked = True
                    session.revoked_at = now
                    await self.uow.sessions.update(session)
                    sessions_revoked += 1

            ended_at = now.replace(tzinfo=UTC)
            ended = []
            for session in await self.uow.sessions.get_impersonating_tenant(tenant_id):
                state = load_state(session.impersonation)
                if not isinstance(state, ImpersonatingState):
                    continue
                session.impersonation = dump_state(
                    transition(state, ExitImpersonation(at=ended_at))
                )
                await self.uow.sessions.update(session)
                ended.append((session.id, state))

            await self.uow.commit()

            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant_id,
                event_type="tenant_suspended",
                message=f"Tenant suspended, {sessions_revoked} sessions revoked",
                actor_user_id=actor_user_id,
                metadata={
                    "sessions_revoked": sessions_revoked,
                    "impersonations_ended": len(ended),
                    "suspended_at": now.isoformat(),
                },
            )

            for session_id, state in ended:
                duration = state.duration_seconds(ended_at)
                logger.info(
                    f"Impersonation by {state.original_super_user_email} in session "
                    f"{session_id} ended by tenant suspension after {duration}s"
                )
                await record_tenant_audit_event(
                    self.uow,
                    tenant_id=tenant_id,
                    event_type="impersonation_expired",
                    message=(
                        f"Impersonation by {state.original_super_user_email} ended "
                        f"by tenant suspension after {duration} seconds"
                    ),
                    actor_user_id=UUID(state.original_super_user_id),
                    metadata={
                        "session_id": str(session_id),
                        "reason": "tenant_suspended",
                        "impersonated_user_id": state.impersonated_user_id,
                        "impersonated_tenant_id": state.impersonated_tenant_id,
                        "started_at": state.started_at.isoformat(),
                        "ended_at": ended_at.isoformat(),
                        "duration_seconds": duration,
                    },
                )

            return Return.ok(
                SuspendTenantResponse(
                    status="suspended",
                    sessions_revoked=sessions_revoked,
                    impersonations_ended=len(ended),
                )
            )
