"""
Get Project Use Case
"""

from uuid import UUID

from src.app.services.access_control import AccessControlResolver
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.libs.result import Error, Result, Return
from .dtos import ProjectResponse


class GetProjectUseCase:
    """
    Business Rules:
    - A project of another tenant is a cross-tenant violation (raised by the guard)
    - A private project requires view access
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, features: PrivacyFeatures):
        self.uow = uow
        self.guard = guard
        self.features = features

    async def execute(self, context: RequestContext, project_id: UUID) -> Result[ProjectResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None:
                return Return.err(Error("PROJECT_NOT_FOUND", "Project not found"))

            self.guard.assert_tenant_scoped_read(
                project.tenant_id, tenant_id, "project", project_id
            )

            resolver = AccessControlResolver(self.uow, self.features)
            if not await resolver.can_view_project(tenant_id, project_id, context.acting_user_id):
                return Return.err(Error("ACCESS_DENIED", "Access denied"))

            return Return.ok(ProjectResponse.from_entity(project))
