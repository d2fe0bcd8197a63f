"""
Use Case: Provision Tenant

Creates a tenant together with its primary workspace.
"""

from typing import Optional
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant, Workspace
from src.libs.result import Result, Return
from .dtos import ProvisionTenantResponse


class ProvisionTenantUseCase:
    """
    Business Logic:
    1. Create the tenant (status=active)
    2. Create its primary workspace, tenant_id checked by the guard
    3. Commit, then write a tenant_provisioned audit event
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard):
        self.uow = uow
        self.guard = guard

    async def execute(
        self, name: str, actor_user_id: Optional[UUID] = None
    ) -> Result[ProvisionTenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.create(Tenant(name=name))

            workspace_payload = {
                "tenant_id": tenant.id,
                "name": name,
                "is_primary": True,
            }
            self.guard.assert_tenant_id_on_insert(workspace_payload, "workspaces")
            workspace = await self.uow.workspaces.create(Workspace(**workspace_payload))

            await self.uow.commit()

            response = ProvisionTenantResponse(
                tenant_id=str(tenant.id),
                name=tenant.name,
                status=tenant.status.value,
                primary_workspace_id=str(workspace.id),
            )

            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant.id,
                event_type="tenant_provisioned",
                message=f"Tenant {name} provisioned",
                actor_user_id=actor_user_id,
                metadata={"primary_workspace_id": response.primary_workspace_id},
            )

            return Return.ok(response)
