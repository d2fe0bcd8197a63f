"""
Create Task Use Case

Creates a task inside a project of the caller's effective tenant.
"""

from uuid import UUID

from src.app.services.access_control import AccessControlResolver
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.domain.entities import Task, Visibility
from src.libs.result import Error, Result, Return
from .dtos import TaskResponse


class CreateTaskUseCase:
    """
    Business Rules:
    - The project must exist in the effective tenant and be visible to the caller
    - The task inherits the project's tenant_id
    - The creator owns the task (created_by)
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, features: PrivacyFeatures):
        self.uow = uow
        self.guard = guard
        self.features = features

    async def execute(
        self,
        context: RequestContext,
        project_id: UUID,
        title: str,
        visibility: Visibility = Visibility.workspace,
    ) -> Result[TaskResponse]:
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

            payload = {
                "tenant_id": project.tenant_id,
                "project_id": project_id,
                "title": title,
                "visibility": visibility,
                "created_by": context.acting_user_id,
            }
            self.guard.assert_tenant_scoped_write(payload, tenant_id, "tasks")

            task = await self.uow.tasks.create(Task(**payload))
            await self.uow.commit()

            return Return.ok(TaskResponse.from_entity(task))
