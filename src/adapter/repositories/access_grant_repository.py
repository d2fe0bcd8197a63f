import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.access_grant_repository import (
    AccessGrant,
    DuplicateGrantError,
    IAccessGrantRepository,
)
from src.domain.entities import AccessRole, ProjectAccess, TaskAccess

logger = logging.getLogger(__name__)


class _AccessGrantRepository(IAccessGrantRepository):
    """Shared SQLModel implementation; subclasses bind the table and its resource column"""

    model = None
    resource_field: str = ""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def _resource_column(self):
        return getattr(self.model, self.resource_field)

    def build(
        self,
        tenant_id: UUID,
        resource_id: UUID,
        user_id: UUID,
        role: str,
        invited_by_user_id: Optional[UUID],
    ) -> AccessGrant:
        return self.model(
            tenant_id=tenant_id,
            user_id=user_id,
            role=AccessRole(role),
            invited_by_user_id=invited_by_user_id,
            **{self.resource_field: resource_id},
        )

    async def get_by_resource_and_user(
        self, tenant_id: UUID, resource_id: UUID, user_id: UUID
    ) -> Optional[AccessGrant]:
        stmt = select(self.model).where(
            self.model.tenant_id == tenant_id,
            self._resource_column == resource_id,
            self.model.user_id == user_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_resource(self, tenant_id: UUID, resource_id: UUID) -> List[AccessGrant]:
        stmt = (
            select(self.model)
            .where(self.model.tenant_id == tenant_id, self._resource_column == resource_id)
            .order_by(self.model.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_resource_ids_by_user(self, tenant_id: UUID, user_id: UUID) -> List[UUID]:
        stmt = select(self._resource_column).where(
            self.model.tenant_id == tenant_id, self.model.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, grant: AccessGrant) -> AccessGrant:
        """Insert; the unique (resource, user) index closes the check-then-insert race"""
        self.session.add(grant)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.warning(
                f"Duplicate grant rejected by database on {self.model.__tablename__}: {exc.orig}"
            )
            raise DuplicateGrantError(str(exc.orig)) from exc
        await self.session.refresh(grant)
        return grant

    async def update(self, grant: AccessGrant) -> AccessGrant:
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def delete(self, grant: AccessGrant) -> None:
        await self.session.delete(grant)
        await self.session.flush()


class TaskAccessRepository(_AccessGrantRepository):
    """task_access repository implementation using SQLModel"""

    model = TaskAccess
    resource_field = "task_id"


class ProjectAccessRepository(_AccessGrantRepository):
    """project_access repository implementation using SQLModel"""

    model = ProjectAccess
    resource_field = "project_id"
