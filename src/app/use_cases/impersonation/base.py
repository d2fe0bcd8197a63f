"""
Session access shared by the impersonation use cases.
"""

from typing import Optional, Union

from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session
from src.domain.impersonation import (
    IdleState,
    ImpersonatingState,
    ImpersonationEvent,
    load_state,
    dump_state,
    transition,
)
from src.libs.result import Error


SUPER_USER_REQUIRED = Error("SUPER_USER_REQUIRED", "Super user access required")
SESSION_INVALID = Error("SESSION_INVALID", "Session not found")


class ImpersonationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _load_session(
        self, context: RequestContext, lock: bool = True
    ) -> Optional[Session]:
        # Row lock serializes concurrent transitions on one session
        session = await self.uow.sessions.get_by_id(context.session_id, for_update=lock)
        if session is None or session.user_id != context.real_user_id:
            return None
        return session

    async def _apply(
        self, session: Session, event: ImpersonationEvent
    ) -> Union[IdleState, ImpersonatingState]:
        """Run one transition and persist it. Raises IllegalTransition."""
        new_state = transition(load_state(session.impersonation), event)
        session.impersonation = dump_state(new_state)
        await self.uow.sessions.update(session)
        await self.uow.commit()
        return new_state
