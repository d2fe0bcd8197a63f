"""
Access Control Resolver

Answers "can user X view / manage access of resource Y" for tasks and
projects by combining ownership, explicit grants and tenant-wide admin roles.

Resources that do not exist or belong to another tenant are never
viewable or manageable.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures, is_tenant_admin
from src.domain.entities import AccessRole, Project, ResourceType, Task, Visibility


class AccessControlResolver:
    """Must be called inside an active UnitOfWork."""

    def __init__(self, uow: UnitOfWork, features: PrivacyFeatures = PrivacyFeatures()):
        self.uow = uow
        self.features = features

    async def _task_in_tenant(self, tenant_id: UUID, task_id: UUID) -> Optional[Task]:
        task = await self.uow.tasks.get_by_id(task_id)
        if task is None or task.tenant_id != tenant_id:
            return None
        return task

    async def _project_in_tenant(self, tenant_id: UUID, project_id: UUID) -> Optional[Project]:
        project = await self.uow.projects.get_by_id(project_id)
        if project is None or project.tenant_id != tenant_id:
            return None
        return project

    async def can_view_task(self, tenant_id: UUID, task_id: UUID, user_id: UUID) -> bool:
        task = await self._task_in_tenant(tenant_id, task_id)
        if task is None:
            return False
        if not self.features.private_tasks or task.visibility != Visibility.private:
            return True
        if task.created_by == user_id:
            return True
        if await self.uow.task_access.get_by_resource_and_user(tenant_id, task_id, user_id):
            return True
        # A project grant exposes the project's private tasks
        if task.project_id and await self.uow.project_access.get_by_resource_and_user(
            tenant_id, task.project_id, user_id
        ):
            return True
        return await is_tenant_admin(self.uow, user_id, tenant_id)

    async def can_view_project(self, tenant_id: UUID, project_id: UUID, user_id: UUID) -> bool:
        project = await self._project_in_tenant(tenant_id, project_id)
        if project is None:
            return False
        if not self.features.private_projects or project.visibility != Visibility.private:
            return True
        if project.created_by == user_id:
            return True
        if await self.uow.project_access.get_by_resource_and_user(tenant_id, project_id, user_id):
            return True
        return await is_tenant_admin(self.uow, user_id, tenant_id)

    async def can_manage_task_access(self, tenant_id: UUID, task_id: UUID, user_id: UUID) -> bool:
        task = await self._task_in_tenant(tenant_id, task_id)
        if task is None:
            return False
        if task.created_by == user_id:
            return True
        grant = await self.uow.task_access.get_by_resource_and_user(tenant_id, task_id, user_id)
        if grant is not None and grant.role == AccessRole.admin:
            return True
        return await is_tenant_admin(self.uow, user_id, tenant_id)

    async def can_manage_project_access(
        self, tenant_id: UUID, project_id: UUID, user_id: UUID
    ) -> bool:
        project = await self._project_in_tenant(tenant_id, project_id)
        if project is None:
            return False
        if project.created_by == user_id:
            return True
        grant = await self.uow.project_access.get_by_resource_and_user(
            tenant_id, project_id, user_id
        )
        if grant is not None and grant.role == AccessRole.admin:
            return True
        return await is_tenant_admin(self.uow, user_id, tenant_id)

    async def can_view(
        self, resource_type: ResourceType, tenant_id: UUID, resource_id: UUID, user_id: UUID
    ) -> bool:
        if resource_type == ResourceType.task:
            return await self.can_view_task(tenant_id, resource_id, user_id)
        return await self.can_view_project(tenant_id, resource_id, user_id)

    async def can_manage_access(
        self, resource_type: ResourceType, tenant_id: UUID, resource_id: UUID, user_id: UUID
    ) -> bool:
        if resource_type == ResourceType.task:
            return await self.can_manage_task_access(tenant_id, resource_id, user_id)
        return await self.can_manage_project_access(tenant_id, resource_id, user_id)
