"""
Workspace Resolution Cache

Non-authoritative tenant -> primary workspace lookup. Used to default the
workspace of new projects; never consulted for visibility decisions.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class IWorkspaceCache(ABC):
    """Cache interface - swap for a distributed backend when scaling out"""

    @abstractmethod
    def get(self, tenant_id: UUID) -> Optional[UUID]:
        """Cached workspace id, or None when absent or expired"""
        pass

    @abstractmethod
    def set(self, tenant_id: UUID, workspace_id: UUID) -> None:
        pass

    @abstractmethod
    def invalidate(self, tenant_id: Optional[UUID] = None) -> None:
        """Drop one tenant's entry, or every entry when tenant_id is None"""
        pass


class WorkspaceResolver:
    """
    Resolves a tenant's primary workspace through the cache.

    Must be called inside an active UnitOfWork.
    """

    def __init__(self, uow: UnitOfWork, cache: IWorkspaceCache):
        self.uow = uow
        self.cache = cache

    async def resolve_primary_workspace_id(self, tenant_id: UUID) -> Optional[UUID]:
        cached = self.cache.get(tenant_id)
        if cached is not None:
            return cached

        workspaces = await self.uow.workspaces.get_by_tenant_id(tenant_id)
        if not workspaces:
            logger.warning(f"Tenant {tenant_id} has no workspace")
            return None

        primaries = [w for w in workspaces if w.is_primary]
        if len(primaries) > 1:
            logger.warning(
                f"Tenant {tenant_id} has {len(primaries)} primary workspaces, using the oldest"
            )
        chosen = primaries[0] if primaries else workspaces[0]

        self.cache.set(tenant_id, chosen.id)
        return chosen.id
