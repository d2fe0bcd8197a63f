from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import Workspace


class IWorkspaceRepository(ABC):
    """Workspace repository interface - application layer"""

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: UUID) -> List[Workspace]:
        """Get all workspaces of a tenant, primary ones first"""
        pass

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        pass
