"""
Use Case: Restore Tenant

Restores a suspended tenant. Users can log in again.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.enums import TenantStatus
from src.libs.result import Error, Result, Return
from .dtos import RestoreTenantResponse


class RestoreTenantUseCase:
    """
    Restore a suspended tenant.

    Business Logic:
    1. Validate tenant exists and is not deleted
    2. Update tenant status to active
    3. Commit, then write a tenant_restored audit event

    Idempotent: Restoring already-active tenant succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_user_id: Optional[UUID] = None
    ) -> Result[RestoreTenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(
                    Error("TENANT_NOT_FOUND", "Tenant not found")
                )

            if tenant.status == TenantStatus.deleted:
                return Return.err(
                    Error("TENANT_DELETED", "Deleted tenants cannot be restored")
                )

            tenant.status = TenantStatus.active
            await self.uow.tenants.update(tenant)
            await self.uow.commit()

            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant_id,
                event_type="tenant_restored",
                message="Tenant restored",
                actor_user_id=actor_user_id,
                metadata={"restored_at": datetime.utcnow().isoformat()},
            )

            return Return.ok(RestoreTenantResponse(status="active"))
