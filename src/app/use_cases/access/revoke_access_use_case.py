"""
Revoke Access Use Case
"""

from uuid import UUID

from src.app.services.request_context import RequestContext
from src.libs.result import Error, Result, Return
from .base import AccessGrantUseCase


class RevokeAccessUseCase(AccessGrantUseCase):
    """
    Business Rules:
    - Caller must be able to manage access of the resource
    - The grant row is deleted; a missing grant is not found
    - Writes one access_revoked audit event
    """

    async def execute(self, context: RequestContext, resource_id: UUID, user_id: UUID) -> Result[None]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            _, error = await self._authorize(context, tenant_id, resource_id, manage=True)
            if error:
                return Return.err(error)

            grant = await self.grants.get_by_resource_and_user(tenant_id, resource_id, user_id)
            if grant is None:
                return Return.err(Error("GRANT_NOT_FOUND", "Access grant not found"))

            self.guard.assert_tenant_ownership(
                grant.tenant_id, tenant_id, self.table_name, grant.id
            )

            previous_role = grant.role.value
            await self.grants.delete(grant)
            await self.uow.commit()

            await self._audit(
                context,
                tenant_id,
                "access_revoked",
                f"Revoked {previous_role} access on {self.resource_type.value} "
                f"{resource_id} from user {user_id}",
                {
                    "resource_id": str(resource_id),
                    "user_id": str(user_id),
                    "previous_role": previous_role,
                },
            )

            return Return.ok(None)
