"""
Grant Access Use Case

Invites a user of the same tenant onto a task or project.
"""

from uuid import UUID

from src.app.repositories.access_grant_repository import DuplicateGrantError
from src.app.services.request_context import RequestContext
from src.domain.entities import AccessRole
from src.libs.result import Error, Result, Return
from .base import AccessGrantUseCase
from .dtos import GrantResponse


class GrantAccessUseCase(AccessGrantUseCase):
    """
    Business Rules:
    - Caller must be able to manage access of the resource
    - Invited user must belong to the resource's tenant (cross-tenant invite
      is a validation error)
    - At most one grant per (resource, user); a second invite is a conflict,
      including one that loses an insert race
    - Writes one access_granted audit event
    """

    async def execute(
        self,
        context: RequestContext,
        resource_id: UUID,
        user_id: UUID,
        role: AccessRole = AccessRole.editor,
    ) -> Result[GrantResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            resource, error = await self._authorize(context, tenant_id, resource_id, manage=True)
            if error:
                return Return.err(error)

            invitee = await self.uow.users.get_by_id(user_id)
            if invitee is None or invitee.tenant_id != resource.tenant_id:
                return Return.err(
                    Error("USER_NOT_IN_TENANT", "User does not belong to this tenant")
                )

            existing = await self.grants.get_by_resource_and_user(tenant_id, resource_id, user_id)
            if existing is not None:
                return Return.err(
                    Error("GRANT_ALREADY_EXISTS", "User already has access")
                )

            grant = self.grants.build(
                tenant_id=resource.tenant_id,
                resource_id=resource_id,
                user_id=user_id,
                role=AccessRole(role),
                invited_by_user_id=context.acting_user_id,
            )
            self.guard.assert_tenant_scoped_write(
                {"tenant_id": grant.tenant_id}, tenant_id, self.table_name
            )

            try:
                grant = await self.grants.create(grant)
            except DuplicateGrantError:
                await self.uow.rollback()
                return Return.err(
                    Error("GRANT_ALREADY_EXISTS", "User already has access")
                )
            await self.uow.commit()

            response = self._to_response(grant, invitee)

            await self._audit(
                context,
                tenant_id,
                "access_granted",
                f"Granted {response.role} access on {self.resource_type.value} "
                f"{resource_id} to {invitee.email}",
                {
                    "resource_id": str(resource_id),
                    "user_id": str(user_id),
                    "role": response.role,
                },
            )

            return Return.ok(response)
