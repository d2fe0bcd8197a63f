"""
Impersonation Use Case DTOs
"""

from typing import Optional, Union
from pydantic import BaseModel

from src.domain.impersonation import IdleState, ImpersonatingState


class ImpersonationStatusResponse(BaseModel):
    """Impersonation state of the caller's session, exactly as stored"""

    is_impersonating: bool
    original_super_user_id: Optional[str] = None
    original_super_user_email: Optional[str] = None
    impersonated_user_id: Optional[str] = None
    impersonated_user_email: Optional[str] = None
    impersonated_user_role: Optional[str] = None
    impersonated_tenant_id: Optional[str] = None
    impersonated_tenant_name: Optional[str] = None
    started_at: Optional[str] = None

    @classmethod
    def from_state(cls, state: Union[IdleState, ImpersonatingState]) -> "ImpersonationStatusResponse":
        if isinstance(state, IdleState):
            return cls(is_impersonating=False)
        fields = state.model_dump(mode="json", exclude={"state"})
        return cls(is_impersonating=True, **fields)


class ExitImpersonationResponse(BaseModel):
    is_impersonating: bool = False
    duration_seconds: Optional[int] = None


class SweepResponse(BaseModel):
    sessions_swept: int
