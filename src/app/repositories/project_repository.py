from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Project


class IProjectRepository(ABC):
    """Project repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, project_id: UUID) -> Optional[Project]:
        """Get project by ID, regardless of tenant"""
        pass

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: UUID) -> List[Project]:
        """Get all projects of a tenant"""
        pass

    @abstractmethod
    async def get_private_ids_by_tenant(self, tenant_id: UUID) -> List[UUID]:
        """IDs of every private project in a tenant"""
        pass

    @abstractmethod
    async def get_private_ids_created_by(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        """IDs of private projects created by a user"""
        pass

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """Create a new project"""
        pass
