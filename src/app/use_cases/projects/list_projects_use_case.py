"""
List Projects Use Case
"""

from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures, PrivateVisibilityFilter
from src.libs.result import Result, Return
from .dtos import ProjectListResponse, ProjectResponse


class ListProjectsUseCase:
    """
    Lists the tenant's projects, dropping private ones the acting user
    cannot see.
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, features: PrivacyFeatures):
        self.uow = uow
        self.guard = guard
        self.features = features

    async def execute(self, context: RequestContext) -> Result[ProjectListResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            projects = await self.uow.projects.get_by_tenant_id(tenant_id)
            visible = await PrivateVisibilityFilter(self.uow, self.features).visible_projects(
                context.acting_user_id, tenant_id, projects
            )
            return Return.ok(
                ProjectListResponse(
                    projects=[ProjectResponse.from_entity(p) for p in visible]
                )
            )
