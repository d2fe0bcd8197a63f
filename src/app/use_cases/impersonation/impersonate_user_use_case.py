"""
Impersonate User Use Case

A super user acts as a specific tenant user. The user's tenant becomes the
effective tenant and the user's role decides access.
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


class ImpersonateUserUseCase(ImpersonationUseCase):
    """
    Business Rules:
    - Real actor must be a super user
    - Target user must exist (404), belong to a tenant and not be a super user (400)
    - Target tenant must exist (404) and be active (400)
    - Target user must be active (400)
    - All preconditions pass before the session is touched
    - Writes one impersonation_started audit event in the target tenant
    """

    async def execute(
        self, context: RequestContext, user_id: UUID
    ) -> Result[ImpersonationStatusResponse]:
        if not context.is_real_super_user:
            return Return.err(SUPER_USER_REQUIRED)

        async with self.uow:
            target = await self.uow.users.get_by_id(user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if target.is_super_user:
                return Return.err(
                    Error("CANNOT_IMPERSONATE_SUPER_USER", "Cannot impersonate a super user")
                )

            if target.tenant_id is None:
                return Return.err(
                    Error("USER_NOT_IN_TENANT", "User does not belong to a tenant")
                )

            tenant = await self.uow.tenants.get_by_id(target.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if not tenant.is_operational:
                return Return.err(
                    Error("TENANT_NOT_ACTIVE", f"Tenant is {tenant.status.value}")
                )

            if not target.is_active:
                return Return.err(Error("USER_INACTIVE", "User is not active"))

            session = await self._load_session(context)
            if session is None:
                return Return.err(SESSION_INVALID)

            try:
                state = await self._apply(
                    session,
                    StartImpersonation(
                        original_super_user_id=str(context.real_user_id),
                        original_super_user_email=context.real_user_email,
                        impersonated_user_id=str(target.id),
                        impersonated_user_email=target.email,
                        impersonated_user_role=target.role.value,
                        impersonated_tenant_id=str(tenant.id),
                        impersonated_tenant_name=tenant.name,
                        at=datetime.now(UTC),
                    ),
                )
            except IllegalTransition as exc:
                return Return.err(Error(exc.code, exc.message))

            logger.info(
                f"Super user {context.real_user_email} started impersonating user "
                f"{state.impersonated_user_email} in tenant {tenant.id}"
            )

            response = ImpersonationStatusResponse.from_state(state)
            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant.id,
                event_type="impersonation_started",
                message=(
                    f"Super user {context.real_user_email} started impersonating "
                    f"{response.impersonated_user_email}"
                ),
                actor_user_id=context.real_user_id,
                metadata={
                    "super_user_email": context.real_user_email,
                    "impersonated_user_id": response.impersonated_user_id,
                    "impersonated_user_email": response.impersonated_user_email,
                    "impersonated_user_role": response.impersonated_user_role,
                    "tenant_name": response.impersonated_tenant_name,
                    "started_at": response.started_at,
                },
            )

            return Return.ok(response)
