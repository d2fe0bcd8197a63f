from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID, for_update: bool = False) -> Optional[Session]:
        """Get session by ID; for_update locks the row until commit"""
        pass

    @abstractmethod
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def get_active_by_tenant_id(self, tenant_id: UUID) -> List[Session]:
        """Get all non-revoked sessions of the tenant's users"""
        pass

    @abstractmethod
    async def get_impersonating_tenant(self, tenant_id: UUID) -> List[Session]:
        """Get live sessions whose impersonation targets the tenant"""
        pass

    @abstractmethod
    async def get_expired_impersonating(self, now: datetime) -> List[Session]:
        """Get expired or revoked sessions that still carry impersonation state"""
        pass
