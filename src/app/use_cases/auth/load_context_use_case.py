"""
Load Context Use Case

Resolves the request context (real user, acting user, effective tenant)
from the session referenced by the access token.
"""

import logging
from datetime import datetime
from uuid import UUID

from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.impersonation import ImpersonatingState, load_state
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LoadContextUseCase:
    """
    Use case for loading the identity of an authenticated request.

    Business Rules:
    - Session must exist, belong to the token's user, not be revoked or expired
    - User must exist and be active
    - Effective tenant is the impersonated tenant while impersonating,
      else the user's own tenant
    - Acting user is the impersonated user for user impersonation,
      else the authenticated user
    - Tenant users of a suspended or deleted tenant are rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, session_id: UUID) -> Result[RequestContext]:
        """
        Execute load context use case.

        Args:
            user_id: User UUID from JWT
            session_id: Session UUID from JWT

        Returns:
            Result with RequestContext, or Error
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None or session.user_id != user_id:
                return Return.err(Error("SESSION_INVALID", "Session not found"))

            if session.revoked:
                return Return.err(Error("SESSION_REVOKED", "Session has been revoked"))

            if not session.is_valid(datetime.utcnow()):
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None or not user.is_active:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            state = load_state(session.impersonation)

            if isinstance(state, ImpersonatingState):
                tenant_id = UUID(state.impersonated_tenant_id)
                acting_user_id = user.id
                acting_role = user.role

                if state.is_user_impersonation:
                    target = await self.uow.users.get_by_id(UUID(state.impersonated_user_id))
                    if target is not None and target.is_active:
                        acting_user_id = target.id
                        acting_role = target.role
                    else:
                        # Target went away mid-impersonation; keep the super
                        # user's identity so the session can still exit
                        logger.warning(
                            f"Impersonated user {state.impersonated_user_id} is no longer "
                            f"available in session {session.id}"
                        )
            else:
                tenant_id = user.tenant_id
                acting_user_id = user.id
                acting_role = user.role

                if tenant_id is not None:
                    tenant = await self.uow.tenants.get_by_id(tenant_id)
                    if tenant is None or not tenant.is_operational:
                        return Return.err(
                            Error("TENANT_SUSPENDED", "Tenant is not active")
                        )

            return Return.ok(
                RequestContext(
                    session_id=session.id,
                    real_user_id=user.id,
                    real_user_email=user.email,
                    real_user_role=user.role,
                    acting_user_id=acting_user_id,
                    acting_user_role=acting_role,
                    tenant_id=tenant_id,
                    impersonation=state,
                )
            )
