from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Task


class ITaskRepository(ABC):
    """Task repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Get task by ID, regardless of tenant"""
        pass

    @abstractmethod
    async def get_by_tenant_id(
        self, tenant_id: UUID, project_id: Optional[UUID] = None
    ) -> List[Task]:
        """Get tasks of a tenant, optionally restricted to one project"""
        pass

    @abstractmethod
    async def get_private_ids_by_tenant(self, tenant_id: UUID) -> List[UUID]:
        """IDs of every private task in a tenant"""
        pass

    @abstractmethod
    async def get_private_ids_created_by(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        """IDs of private tasks created by a user"""
        pass

    @abstractmethod
    async def get_private_ids_in_projects(
        self, tenant_id: UUID, project_ids: List[UUID]
    ) -> List[UUID]:
        """IDs of private tasks belonging to any of the given projects"""
        pass

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Create a new task"""
        pass
