"""
List Access Use Case
"""

from uuid import UUID

from src.app.services.request_context import RequestContext
from src.libs.result import Result, Return
from .base import AccessGrantUseCase
from .dtos import GrantListResponse


class ListAccessUseCase(AccessGrantUseCase):
    """
    Lists the explicit grants on a task or project.

    Business Rules:
    - Caller must be able to view the resource
    """

    async def execute(self, context: RequestContext, resource_id: UUID) -> Result[GrantListResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            _, error = await self._authorize(context, tenant_id, resource_id, manage=False)
            if error:
                return Return.err(error)

            grants = await self.grants.get_by_resource(tenant_id, resource_id)
            responses = []
            for grant in grants:
                user = await self.uow.users.get_by_id(grant.user_id)
                responses.append(self._to_response(grant, user))

            return Return.ok(GrantListResponse(grants=responses))
