"""
Logout Use Case

Revokes the current session.
"""

from datetime import datetime
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Business Rules:
    - Idempotent: logging out of a revoked session succeeds
    - An active impersonation ends with the session; its state is left on the
      row for the expiry sweep to audit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[LogoutResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if not session.revoked:
                session.revoked = True
                session.revoked_at = datetime.utcnow()
                await self.uow.sessions.update(session)
                await self.uow.commit()

            return Return.ok(LogoutResponse(status="logged_out"))
