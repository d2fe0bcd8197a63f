from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.app.services.request_context import RequestContext
from src.depends import get_request_context

router = APIRouter(tags=["User"])


class IdentityResponse(BaseModel):
    id: str
    role: str


class MeResponse(BaseModel):
    """GET /me response payload"""

    user: IdentityResponse
    real_user: IdentityResponse
    tenant_id: Optional[str]
    is_impersonating: bool


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(context: RequestContext = Depends(get_request_context)):
    """
    Current Identity

    `user` is the acting identity (the impersonated user while impersonating
    one), `real_user` the authenticated account, `tenant_id` the effective
    tenant.

    Raises:
        - 401 Unauthorized: Invalid token, revoked or expired session
        - 403 Forbidden: User disabled or tenant not active
    """
    return MeResponse(
        user=IdentityResponse(
            id=str(context.acting_user_id), role=context.acting_user_role.value
        ),
        real_user=IdentityResponse(
            id=str(context.real_user_id), role=context.real_user_role.value
        ),
        tenant_id=str(context.tenant_id) if context.tenant_id else None,
        is_impersonating=context.is_impersonating,
    )
