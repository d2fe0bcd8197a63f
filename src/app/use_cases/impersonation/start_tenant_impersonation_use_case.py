"""
Start Tenant Impersonation Use Case

A super user enters the context of a tenant while keeping their own identity.
"""

import logging
from datetime import datetime, UTC
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.request_context import RequestContext
from src.domain.impersonation import IllegalTransition, StartImpersonation
from src.libs.result import Error, Result, Return
from .base import SESSION_INVALID, SUPER_USER_REQUIRED, ImpersonationUseCase
from .dtos import ImpersonationStatusResponse

logger = logging.getLogger(__name__)


class StartTenantImpersonationUseCase(ImpersonationUseCase):
    """
    Business Rules:
    - Real actor must be a super user
    - Tenant must exist (404) and be active (400)
    - All preconditions pass before the session is touched
    - Only one impersonation per session; exit before starting another
    - Writes one impersonation_started audit event in the target tenant
    """

    async def execute(
        self, context: RequestContext, tenant_id: UUID
    ) -> Result[ImpersonationStatusResponse]:
        if not context.is_real_super_user:
            return Return.err(SUPER_USER_REQUIRED)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if not tenant.is_operational:
                return Return.err(
                    Error("TENANT_NOT_ACTIVE", f"Tenant is {tenant.status.value}")
                )

            session = await self._load_session(context)
            if session is None:
                return Return.err(SESSION_INVALID)

            try:
                state = await self._apply(
                    session,
                    StartImpersonation(
                        original_super_user_id=str(context.real_user_id),
                        original_super_user_email=context.real_user_email,
                        impersonated_tenant_id=str(tenant.id),
                        impersonated_tenant_name=tenant.name,
                        at=datetime.now(UTC),
                    ),
                )
            except IllegalTransition as exc:
                return Return.err(Error(exc.code, exc.message))

            logger.info(
                f"Super user {context.real_user_email} started impersonating tenant "
                f"{tenant.name} ({tenant.id})"
            )

            response = ImpersonationStatusResponse.from_state(state)
            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant_id,
                event_type="impersonation_started",
                message=f"Super user {context.real_user_email} started impersonating tenant",
                actor_user_id=context.real_user_id,
                metadata={
                    "super_user_email": context.real_user_email,
                    "tenant_name": response.impersonated_tenant_name,
                    "started_at": response.started_at,
                },
            )

            return Return.ok(response)
