"""
Super-admin API Routes

Tenant and user provisioning. Authentication is a super user's session;
the real actor must be a super user even while impersonating.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    ProvisionTenantResponse,
    ProvisionTenantUseCase,
    ProvisionUserResponse,
    ProvisionUserUseCase,
    RestoreTenantResponse,
    RestoreTenantUseCase,
    SuspendTenantResponse,
    SuspendTenantUseCase,
)
from src.depends import get_tenancy_guard, get_unit_of_work, require_super_user
from src.domain.entities import UserRole

router = APIRouter(prefix="/super", tags=["Super Admin"])


class ProvisionTenantRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ProvisionUserRequest(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.employee
    # Accepted so a mismatch can be rejected as a cross-tenant write
    tenant_id: Optional[UUID] = None


@router.post(
    "/tenants", status_code=status.HTTP_201_CREATED, response_model=ProvisionTenantResponse
)
async def provision_tenant(
    request: ProvisionTenantRequest,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
):
    """Create a tenant with its primary workspace."""
    result = await ProvisionTenantUseCase(uow, guard).execute(
        request.name, actor_user_id=context.real_user_id
    )
    if result.is_err():
        raise ServerError(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/users",
    status_code=status.HTTP_201_CREATED,
    response_model=ProvisionUserResponse,
)
async def provision_user(
    tenant_id: UUID,
    request: ProvisionUserRequest,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
):
    """
    Provision a user into a tenant

    Raises:
        - 400 Bad Request: Tenant not active, or super_user role requested
        - 403 Forbidden: Body tenant_id differs from the path tenant
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS
    """
    use_case = ProvisionUserUseCase(uow, guard)
    result = await use_case.execute(
        tenant_id,
        request.model_dump(exclude_none=True),
        actor_user_id=context.real_user_id,
    )

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("TENANT_NOT_ACTIVE", "INVALID_ROLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=SuspendTenantResponse,
)
async def suspend_tenant(
    tenant_id: UUID,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Revokes all active sessions of the tenant's users and ends every
    super-user impersonation of the tenant.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await SuspendTenantUseCase(uow).execute(tenant_id, context.real_user_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/restore",
    status_code=status.HTTP_200_OK,
    response_model=RestoreTenantResponse,
)
async def restore_tenant(
    tenant_id: UUID,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Tenant

    Raises:
        - 400 Bad Request: TENANT_DELETED
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await RestoreTenantUseCase(uow).execute(tenant_id, context.real_user_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "TENANT_DELETED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
