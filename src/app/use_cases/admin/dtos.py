"""
Super-admin Use Case DTOs
"""

from typing import Optional
from pydantic import BaseModel


class ProvisionTenantResponse(BaseModel):
    tenant_id: str
    name: str
    status: str
    primary_workspace_id: str


class ProvisionUserResponse(BaseModel):
    user_id: str
    tenant_id: str
    email: str
    name: Optional[str]
    role: str


class SuspendTenantResponse(BaseModel):
    """Response DTO for SuspendTenantUseCase"""

    status: str
    sessions_revoked: int
    impersonations_ended: int = 0


class RestoreTenantResponse(BaseModel):
    """Response DTO for RestoreTenantUseCase"""

    status: str
