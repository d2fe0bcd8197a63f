from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_grant_repository import (
    ProjectAccessRepository,
    TaskAccessRepository,
)
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.project_repository import ProjectRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.task_repository import TaskRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.workspace_repository import WorkspaceRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.workspaces = WorkspaceRepository(self.session)
        self.users = UserRepository(self.session)
        self.projects = ProjectRepository(self.session)
        self.tasks = TaskRepository(self.session)
        self.task_access = TaskAccessRepository(self.session)
        self.project_access = ProjectAccessRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
