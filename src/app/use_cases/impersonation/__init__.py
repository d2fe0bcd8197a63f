"""
Impersonation Use Cases

Every state change goes through src.domain.impersonation.transition.
"""

from .dtos import ExitImpersonationResponse, ImpersonationStatusResponse, SweepResponse
from .exit_impersonation_use_case import ExitImpersonationUseCase
from .get_impersonation_status_use_case import GetImpersonationStatusUseCase
from .impersonate_user_use_case import ImpersonateUserUseCase
from .start_tenant_impersonation_use_case import StartTenantImpersonationUseCase
from .sweep_expired_impersonations_use_case import SweepExpiredImpersonationsUseCase

__all__ = [
    "ExitImpersonationResponse",
    "ImpersonationStatusResponse",
    "SweepResponse",
    "ExitImpersonationUseCase",
    "GetImpersonationStatusUseCase",
    "ImpersonateUserUseCase",
    "StartTenantImpersonationUseCase",
    "SweepExpiredImpersonationsUseCase",
]
