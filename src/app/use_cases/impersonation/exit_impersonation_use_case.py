"""
Exit Impersonation Use Case

Ends the session's impersonation and records how long it lasted.
"""

import logging
from datetime import datetime, UTC
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.impersonation import (
    ExitImpersonation,
    IdleState,
    IllegalTransition,
    load_state,
)
from src.libs.result import Error, Result, Return
from .base import SESSION_INVALID, SUPER_USER_REQUIRED, ImpersonationUseCase
from .dtos import ExitImpersonationResponse

logger = logging.getLogger(__name__)


class ExitImpersonationUseCase(ImpersonationUseCase):
    """
    Business Rules:
    - Real actor must be a super user
    - Clears every impersonation field; the session write is committed
      before the result is returned
    - Strict (exit): exiting while idle is rejected with NOT_IMPERSONATING
    - Idempotent (stop): exiting while idle succeeds and writes nothing
    - Writes one audit event carrying duration_seconds
      (impersonation_exited, or impersonation_stopped when idempotent)
    """

    def __init__(self, uow: UnitOfWork, idempotent: bool = False):
        super().__init__(uow)
        self.idempotent = idempotent

    @property
    def event_type(self) -> str:
        return "impersonation_stopped" if self.idempotent else "impersonation_exited"

    async def execute(self, context: RequestContext) -> Result[ExitImpersonationResponse]:
        if not context.is_real_super_user:
            return Return.err(SUPER_USER_REQUIRED)

        async with self.uow:
            session = await self._load_session(context)
            if session is None:
                return Return.err(SESSION_INVALID)

            previous = load_state(session.impersonation)
            if isinstance(previous, IdleState) and self.idempotent:
                return Return.ok(ExitImpersonationResponse())

            now = datetime.now(UTC)
            try:
                await self._apply(session, ExitImpersonation(at=now))
            except IllegalTransition as exc:
                return Return.err(Error(exc.code, exc.message))

            duration = previous.duration_seconds(now)
            target = previous.impersonated_user_email or previous.impersonated_tenant_name
            logger.info(
                f"Super user {context.real_user_email} stopped impersonating {target} "
                f"after {duration}s"
            )

            await record_tenant_audit_event(
                self.uow,
                tenant_id=UUID(previous.impersonated_tenant_id),
                event_type=self.event_type,
                message=(
                    f"Super user {context.real_user_email} stopped impersonating "
                    f"{target} after {duration} seconds"
                ),
                actor_user_id=context.real_user_id,
                metadata={
                    "super_user_email": context.real_user_email,
                    "impersonated_user_id": previous.impersonated_user_id,
                    "impersonated_tenant_id": previous.impersonated_tenant_id,
                    "started_at": previous.started_at.isoformat(),
                    "ended_at": now.isoformat(),
                    "duration_seconds": duration,
                },
            )

            return Return.ok(ExitImpersonationResponse(duration_seconds=duration))
