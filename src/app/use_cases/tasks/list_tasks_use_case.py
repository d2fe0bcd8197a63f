"""
List Tasks Use Case
"""

from typing import Optional
from uuid import UUID

from src.app.services.access_control import AccessControlResolver
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures, PrivateVisibilityFilter
from src.libs.result import Error, Result, Return
from .dtos import TaskListResponse, TaskResponse


class ListTasksUseCase:
    """
    Lists the tenant's tasks, optionally of a single project, dropping
    private ones the acting user cannot see.

    Business Rules:
    - With a project_id the project must be in the effective tenant and
      visible to the caller
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, features: PrivacyFeatures):
        self.uow = uow
        self.guard = guard
        self.features = features

    async def execute(
        self, context: RequestContext, project_id: Optional[UUID] = None
    ) -> Result[TaskListResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            if project_id is not None:
                project = await self.uow.projects.get_by_id(project_id)
                if project is None:
                    return Return.err(Error("PROJECT_NOT_FOUND", "Project not found"))

                self.guard.assert_tenant_scoped_read(
                    project.tenant_id, tenant_id, "project", project_id
                )

                resolver = AccessControlResolver(self.uow, self.features)
                if not await resolver.can_view_project(
                    tenant_id, project_id, context.acting_user_id
                ):
                    return Return.err(Error("ACCESS_DENIED", "Access denied"))

            tasks = await self.uow.tasks.get_by_tenant_id(tenant_id, project_id=project_id)
            visible = await PrivateVisibilityFilter(self.uow, self.features).visible_tasks(
                context.acting_user_id, tenant_id, tasks
            )
            return Return.ok(
                TaskListResponse(tasks=[TaskResponse.from_entity(t) for t in visible])
            )
