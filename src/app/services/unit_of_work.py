from abc import ABC, abstractmethod

from src.app.repositories.access_grant_repository import IAccessGrantRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.project_repository import IProjectRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.task_repository import ITaskRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.workspace_repository import IWorkspaceRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    workspaces: IWorkspaceRepository
    users: IUserRepository
    projects: IProjectRepository
    tasks: ITaskRepository
    task_access: IAccessGrantRepository
    project_access: IAccessGrantRepository
    sessions: ISessionRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
