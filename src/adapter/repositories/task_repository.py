from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.task_repository import ITaskRepository
from src.domain.entities import Task, Visibility


class TaskRepository(ITaskRepository):
    """Task repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Get task by ID, regardless of tenant"""
        stmt = select(Task).where(Task.id == task_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_id(
        self, tenant_id: UUID, project_id: Optional[UUID] = None
    ) -> List[Task]:
        """Get tasks of a tenant, optionally restricted to one project"""
        stmt = select(Task).where(Task.tenant_id == tenant_id)
        if project_id is not None:
            stmt = stmt.where(Task.project_id == project_id)
        stmt = stmt.order_by(Task.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_private_ids_by_tenant(self, tenant_id: UUID) -> List[UUID]:
        stmt = select(Task.id).where(
            Task.tenant_id == tenant_id, Task.visibility == Visibility.private
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_private_ids_created_by(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        stmt = select(Task.id).where(
            Task.tenant_id == tenant_id,
            Task.visibility == Visibility.private,
            Task.created_by == user_id,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_private_ids_in_projects(
        self, tenant_id: UUID, project_ids: List[UUID]
    ) -> List[UUID]:
        if not project_ids:
            return []
        stmt = select(Task.id).where(
            Task.tenant_id == tenant_id,
            Task.visibility == Visibility.private,
            Task.project_id.in_(project_ids),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, task: Task) -> Task:
        """Create a new task"""
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task
