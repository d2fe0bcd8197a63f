"""
Change Access Role Use Case
"""

from uuid import UUID

from src.app.services.request_context import RequestContext
from src.domain.entities import AccessRole
from src.libs.result import Error, Result, Return
from .base import AccessGrantUseCase
from .dtos import GrantResponse


class ChangeAccessRoleUseCase(AccessGrantUseCase):
    """
    Business Rules:
    - Caller must be able to manage access of the resource
    - The new role replaces the old one; grants never accumulate roles
    - Missing grant is not found
    - Writes one access_role_changed audit event
    """

    async def execute(
        self, context: RequestContext, resource_id: UUID, user_id: UUID, role: AccessRole
    ) -> Result[GrantResponse]:
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
            grant.role = AccessRole(role)
            grant = await self.grants.update(grant)
            await self.uow.commit()

            user = await self.uow.users.get_by_id(user_id)
            response = self._to_response(grant, user)

            await self._audit(
                context,
                tenant_id,
                "access_role_changed",
                f"Changed access role on {self.resource_type.value} {resource_id} for "
                f"user {user_id} from {previous_role} to {response.role}",
                {
                    "resource_id": str(resource_id),
                    "user_id": str(user_id),
                    "previous_role": previous_role,
                    "role": response.role,
                },
            )

            return Return.ok(response)
