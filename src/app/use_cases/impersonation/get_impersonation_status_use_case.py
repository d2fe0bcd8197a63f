"""
Get Impersonation Status Use Case
"""

from src.app.services.request_context import RequestContext
from src.domain.impersonation import load_state
from src.libs.result import Result, Return
from .base import SESSION_INVALID, SUPER_USER_REQUIRED, ImpersonationUseCase
from .dtos import ImpersonationStatusResponse


class GetImpersonationStatusUseCase(ImpersonationUseCase):
    """Reports the state stored on the session row and nothing else."""

    async def execute(self, context: RequestContext) -> Result[ImpersonationStatusResponse]:
        if not context.is_real_super_user:
            return Return.err(SUPER_USER_REQUIRED)

        async with self.uow:
            session = await self._load_session(context, lock=False)
            if session is None:
                return Return.err(SESSION_INVALID)

            return Return.ok(
                ImpersonationStatusResponse.from_state(load_state(session.impersonation))
            )
