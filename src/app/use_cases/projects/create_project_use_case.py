"""
Create Project Use Case

Creates a project in the caller's effective tenant.
"""

from typing import Optional
from uuid import UUID

from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workspace_cache import IWorkspaceCache, WorkspaceResolver
from src.domain.entities import Project, Visibility
from src.libs.result import Error, Result, Return
from .dtos import ProjectResponse


class CreateProjectUseCase:
    """
    Business Rules:
    - tenant_id always comes from the request context
    - workspace_id defaults to the tenant's primary workspace
    - An explicit workspace_id must belong to the same tenant
    - The creator owns the project (created_by)
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard, workspace_cache: IWorkspaceCache):
        self.uow = uow
        self.guard = guard
        self.workspace_cache = workspace_cache

    async def execute(
        self,
        context: RequestContext,
        name: str,
        visibility: Visibility = Visibility.workspace,
        workspace_id: Optional[UUID] = None,
    ) -> Result[ProjectResponse]:
        tenant_id = self.guard.require_tenant_context(context)

        async with self.uow:
            if workspace_id is None:
                resolver = WorkspaceResolver(self.uow, self.workspace_cache)
                workspace_id = await resolver.resolve_primary_workspace_id(tenant_id)
                if workspace_id is None:
                    return Return.err(
                        Error("WORKSPACE_NOT_FOUND", "Tenant has no workspace")
                    )
            else:
                workspaces = await self.uow.workspaces.get_by_tenant_id(tenant_id)
                if workspace_id not in {w.id for w in workspaces}:
                    return Return.err(
                        Error("WORKSPACE_NOT_FOUND", "Workspace not found")
                    )

            payload = {
                "tenant_id": tenant_id,
                "workspace_id": workspace_id,
                "name": name,
                "visibility": visibility,
                "created_by": context.acting_user_id,
            }
            self.guard.assert_tenant_id_on_insert(payload, "projects")

            project = await self.uow.projects.create(Project(**payload))
            await self.uow.commit()

            return Return.ok(ProjectResponse.from_entity(project))
