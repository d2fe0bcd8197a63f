"""
Sweep Expired Impersonations Use Case

Closes the audit gap left by impersonations that ended with their session
(expiry, revocation or logout) instead of an explicit exit.
"""

import logging
from datetime import datetime, UTC
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.domain.impersonation import ImpersonatingState, load_state
from src.libs.result import Result, Return
from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class SweepExpiredImpersonationsUseCase:
    """
    Business Rules:
    - Targets sessions that are expired or revoked and still hold
      impersonating state
    - Each one gets exactly one impersonation_expired audit event and its
      state cleared, so a second sweep finds nothing
    - Duration runs until the session's end (revocation or expiry)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SweepResponse]:
        now = datetime.utcnow()

        async with self.uow:
            sessions = await self.uow.sessions.get_expired_impersonating(now)

            expired = []
            for session in sessions:
                state = load_state(session.impersonation)
                session.impersonation = None
                await self.uow.sessions.update(session)
                if not isinstance(state, ImpersonatingState):
                    continue
                ended_at = session.revoked_at or min(session.expires_at, now)
                expired.append((session.id, state, ended_at.replace(tzinfo=UTC)))

            await self.uow.commit()

            for session_id, state, ended_at in expired:
                duration = state.duration_seconds(ended_at)
                logger.info(
                    f"Impersonation by {state.original_super_user_email} in session "
                    f"{session_id} expired after {duration}s"
                )
                await record_tenant_audit_event(
                    self.uow,
                    tenant_id=UUID(state.impersonated_tenant_id),
                    event_type="impersonation_expired",
                    message=(
                        f"Impersonation by {state.original_super_user_email} ended with "
                        f"its session after {duration} seconds"
                    ),
                    actor_user_id=UUID(state.original_super_user_id),
                    metadata={
                        "session_id": str(session_id),
                        "impersonated_user_id": state.impersonated_user_id,
                        "impersonated_tenant_id": state.impersonated_tenant_id,
                        "started_at": state.started_at.isoformat(),
                        "ended_at": ended_at.isoformat(),
                        "duration_seconds": duration,
                    },
                )

            return Return.ok(SweepResponse(sessions_swept=len(expired)))
