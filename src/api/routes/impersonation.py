"""
Impersonation API Routes

Super users act inside a tenant (or as a tenant user) for support work.
Every route requires the real, authenticated actor to be a super user.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.impersonation import (
    ExitImpersonationResponse,
    ExitImpersonationUseCase,
    GetImpersonationStatusUseCase,
    ImpersonateUserUseCase,
    ImpersonationStatusResponse,
    StartTenantImpersonationUseCase,
    SweepExpiredImpersonationsUseCase,
    SweepResponse,
)
from src.depends import get_unit_of_work, require_super_user
from src.libs.result import Error

router = APIRouter(tags=["Impersonation"])

ERROR_STATUS = {
    "SUPER_USER_REQUIRED": status.HTTP_403_FORBIDDEN,
    "SESSION_INVALID": status.HTTP_401_UNAUTHORIZED,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TENANT_NOT_ACTIVE": status.HTTP_400_BAD_REQUEST,
    "USER_INACTIVE": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_IN_TENANT": status.HTTP_400_BAD_REQUEST,
    "CANNOT_IMPERSONATE_SUPER_USER": status.HTTP_400_BAD_REQUEST,
    "NOT_IMPERSONATING": status.HTTP_400_BAD_REQUEST,
    "ALREADY_IMPERSONATING": status.HTTP_409_CONFLICT,
}


def _raise_for_error(error: Error):
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    raise ServerError(error)


class StartImpersonationRequest(BaseModel):
    tenant_id: UUID


@router.post("/impersonate/start", response_model=ImpersonationStatusResponse)
async def start_impersonation(
    request: StartImpersonationRequest,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Start Tenant Impersonation

    Raises:
        - 400 Bad Request: Tenant suspended or deleted
        - 403 Forbidden: Not a super user
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: Already impersonating
    """
    result = await StartTenantImpersonationUseCase(uow).execute(context, request.tenant_id)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post("/users/{user_id}/impersonate-login", response_model=ImpersonationStatusResponse)
async def impersonate_user(
    user_id: UUID,
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Impersonate a Tenant User

    Raises:
        - 400 Bad Request: Tenant not active, user inactive, user is a super user
        - 403 Forbidden: Not a super user
        - 404 Not Found: USER_NOT_FOUND, TENANT_NOT_FOUND
        - 409 Conflict: Already impersonating
    """
    result = await ImpersonateUserUseCase(uow).execute(context, user_id)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post("/impersonation/exit", response_model=ExitImpersonationResponse)
async def exit_impersonation(
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Exit Impersonation

    The cleared session is committed before this returns.

    Raises:
        - 400 Bad Request: NOT_IMPERSONATING
    """
    result = await ExitImpersonationUseCase(uow).execute(context)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post("/impersonate/stop", response_model=ExitImpersonationResponse)
async def stop_impersonation(
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Stop Impersonation. Succeeds when nothing is being impersonated."""
    result = await ExitImpersonationUseCase(uow, idempotent=True).execute(context)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.get(
    "/impersonation/status",
    status_code=status.HTTP_200_OK,
    response_model=ImpersonationStatusResponse,
)
async def impersonation_status(
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Impersonation state exactly as stored on the session."""
    result = await GetImpersonationStatusUseCase(uow).execute(context)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post("/super/impersonation/sweep", response_model=SweepResponse)
async def sweep_expired_impersonations(
    context: RequestContext = Depends(require_super_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Audit and clear impersonations that ended with their session."""
    result = await SweepExpiredImpersonationsUseCase(uow).execute()
    if result.is_err():
        _raise_for_error(result.error)
    return result.value
