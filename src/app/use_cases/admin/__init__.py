"""Super-admin use cases: tenant and user provisioning, suspension."""

from .dtos import (
    ProvisionTenantResponse,
    ProvisionUserResponse,
    RestoreTenantResponse,
    SuspendTenantResponse,
)
from .provision_tenant_use_case import ProvisionTenantUseCase
from .provision_user_use_case import ProvisionUserUseCase
from .restore_tenant_use_case import RestoreTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase

__all__ = [
    "ProvisionTenantUseCase",
    "ProvisionTenantResponse",
    "ProvisionUserUseCase",
    "ProvisionUserResponse",
    "SuspendTenantUseCase",
    "SuspendTenantResponse",
    "RestoreTenantUseCase",
    "RestoreTenantResponse",
]
