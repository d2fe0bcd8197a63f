"""
Private Visibility Filter

Computes the private projects/tasks a user may see, so list endpoints can
drop the rest without re-running per-item access checks. This is the single
visibility choke point for bulk endpoints: a row is returned when it is not
private or its id is in the accessible set.
"""

from dataclasses import dataclass
from typing import Iterable, List, Set, TypeVar
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Visibility

R = TypeVar("R")


@dataclass(frozen=True)
class PrivacyFeatures:
    private_tasks: bool = True
    private_projects: bool = True

    @classmethod
    def from_config(cls, config) -> "PrivacyFeatures":
        return cls(
            private_tasks=bool(config.ENABLE_PRIVATE_TASKS),
            private_projects=bool(config.ENABLE_PRIVATE_PROJECTS),
        )


async def is_tenant_admin(uow: UnitOfWork, user_id: UUID, tenant_id: UUID) -> bool:
    """Active tenant admin of tenant_id, or an active super user"""
    user = await uow.users.get_by_id(user_id)
    return user is not None and user.is_active and user.is_tenant_admin_of(tenant_id)


def is_visible(resource, accessible_private_ids: Set[UUID]) -> bool:
    return resource.visibility != Visibility.private or resource.id in accessible_private_ids


def filter_visible(resources: Iterable[R], accessible_private_ids: Set[UUID]) -> List[R]:
    return [r for r in resources if is_visible(r, accessible_private_ids)]


class PrivateVisibilityFilter:
    """Must be called inside an active UnitOfWork."""

    def __init__(self, uow: UnitOfWork, features: PrivacyFeatures = PrivacyFeatures()):
        self.uow = uow
        self.features = features

    async def get_accessible_private_project_ids(self, user_id: UUID, tenant_id: UUID) -> Set[UUID]:
        """Ownership + explicit grants; tenant admins see every private project."""
        if not self.features.private_projects:
            return set()

        if await is_tenant_admin(self.uow, user_id, tenant_id):
            return set(await self.uow.projects.get_private_ids_by_tenant(tenant_id))

        created = await self.uow.projects.get_private_ids_created_by(tenant_id, user_id)
        granted = await self.uow.project_access.get_resource_ids_by_user(tenant_id, user_id)
        return set(created) | set(granted)

    async def get_accessible_private_task_ids(self, user_id: UUID, tenant_id: UUID) -> Set[UUID]:
        """
        Ownership + explicit task grants + private tasks of granted projects;
        tenant admins see every private task.
        """
        if not self.features.private_tasks:
            return set()

        if await is_tenant_admin(self.uow, user_id, tenant_id):
            return set(await self.uow.tasks.get_private_ids_by_tenant(tenant_id))

        created = await self.uow.tasks.get_private_ids_created_by(tenant_id, user_id)
        granted = await self.uow.task_access.get_resource_ids_by_user(tenant_id, user_id)
        granted_projects = await self.uow.project_access.get_resource_ids_by_user(
            tenant_id, user_id
        )
        via_projects = await self.uow.tasks.get_private_ids_in_projects(
            tenant_id, granted_projects
        )
        return set(created) | set(granted) | set(via_projects)

    async def visible_projects(self, user_id: UUID, tenant_id: UUID, projects: List[R]) -> List[R]:
        if not self.features.private_projects:
            return list(projects)
        accessible = await self.get_accessible_private_project_ids(user_id, tenant_id)
        return filter_visible(projects, accessible)

    async def visible_tasks(self, user_id: UUID, tenant_id: UUID, tasks: List[R]) -> List[R]:
        if not self.features.private_tasks:
            return list(tasks)
        accessible = await self.get_accessible_private_task_ids(user_id, tenant_id)
        return filter_visible(tasks, accessible)
