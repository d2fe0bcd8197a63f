from abc import ABC, abstractmethod
from typing import List, Optional, Union
from uuid import UUID

from src.domain.entities import ProjectAccess, TaskAccess

AccessGrant = Union[TaskAccess, ProjectAccess]


class DuplicateGrantError(Exception):
    """Raised when the (resource, user) uniqueness constraint rejects an insert"""


class IAccessGrantRepository(ABC):
    """
    Access grant repository interface - application layer

    One implementation per resource table (task_access, project_access).
    """

    @abstractmethod
    def build(
        self,
        tenant_id: UUID,
        resource_id: UUID,
        user_id: UUID,
        role: str,
        invited_by_user_id: Optional[UUID],
    ) -> AccessGrant:
        """Build an unsaved grant row for this table"""
        pass

    @abstractmethod
    async def get_by_resource_and_user(
        self, tenant_id: UUID, resource_id: UUID, user_id: UUID
    ) -> Optional[AccessGrant]:
        """Get the grant of a user on a resource"""
        pass

    @abstractmethod
    async def get_by_resource(self, tenant_id: UUID, resource_id: UUID) -> List[AccessGrant]:
        """Get all grants on a resource"""
        pass

    @abstractmethod
    async def get_resource_ids_by_user(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        """IDs of every resource the user holds a grant on"""
        pass

    @abstractmethod
    async def create(self, grant: AccessGrant) -> AccessGrant:
        """Create a grant. Raises DuplicateGrantError on a uniqueness conflict"""
        pass

    @abstractmethod
    async def update(self, grant: AccessGrant) -> AccessGrant:
        """Update existing grant"""
        pass

    @abstractmethod
    async def delete(self, grant: AccessGrant) -> None:
        """Delete a grant"""
        pass
