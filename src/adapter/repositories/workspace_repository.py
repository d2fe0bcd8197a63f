from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.workspace_repository import IWorkspaceRepository
from src.domain.entities import Workspace


class WorkspaceRepository(IWorkspaceRepository):
    """Workspace repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant_id(self, tenant_id: UUID) -> List[Workspace]:
        """Get all workspaces of a tenant, primary ones first, then oldest first"""
        stmt = (
            select(Workspace)
            .where(Workspace.tenant_id == tenant_id)
            .order_by(Workspace.is_primary.desc(), Workspace.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace
