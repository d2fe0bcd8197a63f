"""
Get Task Use Case
"""

from uuid import UUID

from src.app.services.access_control import AccessControlResolver
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.libs.result import Error, Result, Return
from .dtos import TaskResponse


class GetTaskUseCase:
    """
    Business Rules:
    - A task of another tenant is a cross-tenant violation (raised by the guard)
    - A private task requires view access
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, features: PrivacyFeatures):
        self.uow = uow
        self.guard = guard
        self.features = features

    async def execute(self, context: RequestContext, task_id: UUID) -> Result[TaskResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            task = await self.uow.tasks.get_by_id(task_id)
            if task is None:
                return Return.err(Error("TASK_NOT_FOUND", "Task not found"))

            self.guard.assert_tenant_scoped_read(task.tenant_id, tenant_id, "task", task_id)

            resolver = AccessControlResolver(self.uow, self.features)
            if not await resolver.can_view_task(tenant_id, task_id, context.acting_user_id):
                return Return.err(Error("ACCESS_DENIED", "Access denied"))

            return Return.ok(TaskResponse.from_entity(task))
