from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.project_repository import IProjectRepository
from src.domain.entities import Project, Visibility


class ProjectRepository(IProjectRepository):
    """Project repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, project_id: UUID) -> Optional[Project]:
        """Get project by ID, regardless of tenant"""
        stmt = select(Project).where(Project.id == project_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_id(self, tenant_id: UUID) -> List[Project]:
        """Get all projects of a tenant, oldest first"""
        stmt = (
            select(Project)
            .where(Project.tenant_id == tenant_id)
            .order_by(Project.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_private_ids_by_tenant(self, tenant_id: UUID) -> List[UUID]:
        stmt = select(Project.id).where(
            Project.tenant_id == tenant_id, Project.visibility == Visibility.private
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_private_ids_created_by(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        stmt = select(Project.id).where(
            Project.tenant_id == tenant_id,
            Project.visibility == Visibility.private,
            Project.created_by == user_id,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, project: Project) -> Project:
        """Create a new project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project
