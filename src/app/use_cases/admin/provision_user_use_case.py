"""
Use Case: Provision User

Creates a user inside a given tenant on behalf of a super user.
"""

import bcrypt
from typing import Any, Mapping, Optional
from uuid import UUID

from src.app.services.audit import record_tenant_audit_event
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from src.libs.result import Error, Result, Return
from .dtos import ProvisionUserResponse


class ProvisionUserUseCase:
    """
    Provision a tenant user.

    Business Logic:
    1. The write payload must target the tenant in the path; a payload
       naming another tenant is a cross-tenant write (raised by the guard)
    2. Tenant must exist and be active
    3. Role must be a tenant role (super users are not provisioned here)
    4. Email must be unique
    5. Commit, then write a user_provisioned audit event
    """

    def __init__(self, uow: UnitOfWork, guard: TenancyGuard):
        self.uow = uow
        self.guard = guard

    async def execute(
        self,
        tenant_id: UUID,
        payload: Mapping[str, Any],
        actor_user_id: Optional[UUID] = None,
    ) -> Result[ProvisionUserResponse]:
        """
        Args:
            tenant_id: Tenant from the request path
            payload: email, name, password, role and optionally tenant_id
            actor_user_id: Super user performing the action
        """
        write_payload = {**payload, "tenant_id": payload.get("tenant_id") or tenant_id}
        self.guard.assert_tenant_scoped_write(write_payload, tenant_id, "users")

        role = UserRole(payload.get("role") or UserRole.employee)
        if role == UserRole.super_user:
            return Return.err(
                Error("INVALID_ROLE", "Super users cannot be provisioned into a tenant")
            )

        email = payload["email"].lower()

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if not tenant.is_operational:
                return Return.err(
                    Error("TENANT_NOT_ACTIVE", f"Tenant is {tenant.status.value}")
                )

            if await self.uow.users.get_by_email(email) is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            password_hash = bcrypt.hashpw(
                payload["password"].encode(), bcrypt.gensalt(12)
            ).decode()

            user = await self.uow.users.create(
                User(
                    tenant_id=tenant_id,
                    email=email,
                    name=payload.get("name"),
                    password_hash=password_hash,
                    role=role,
                )
            )
            await self.uow.commit()

            response = ProvisionUserResponse(
                user_id=str(user.id),
                tenant_id=str(tenant_id),
                email=user.email,
                name=user.name,
                role=user.role.value,
            )

            await record_tenant_audit_event(
                self.uow,
                tenant_id=tenant_id,
                event_type="user_provisioned",
                message=f"User {email} provisioned as {role.value}",
                actor_user_id=actor_user_id,
                metadata={"user_id": response.user_id, "email": email, "role": role.value},
            )

            return Return.ok(response)
