"""
Access Grant API Routes

Explicit grants on tasks and projects. Both resource types share the same
use cases and the same status codes:

    200 list / role change, 201 grant, 204 revoke,
    400 invitee outside the tenant, 403 no permission or cross-tenant,
    404 resource or grant missing, 409 duplicate grant
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.app.use_cases.access import (
    ChangeAccessRoleUseCase,
    GrantAccessUseCase,
    GrantListResponse,
    GrantResponse,
    ListAccessUseCase,
    RevokeAccessUseCase,
)
from src.depends import (
    get_privacy_features,
    get_request_context,
    get_tenancy_guard,
    get_unit_of_work,
    reject_client_tenant_id,
)
from src.domain.entities import AccessRole, ResourceType
from src.libs.result import Error

router = APIRouter(tags=["Access"], dependencies=[Depends(reject_client_tenant_id)])

ERROR_STATUS = {
    "TASK_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PROJECT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "GRANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACCESS_DENIED": status.HTTP_403_FORBIDDEN,
    "USER_NOT_IN_TENANT": status.HTTP_400_BAD_REQUEST,
    "GRANT_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
}


def _raise_for_error(error: Error):
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    raise ServerError(error)


class GrantAccessRequest(BaseModel):
    user_id: UUID = Field(..., description="User to invite; must belong to the same tenant")
    role: AccessRole = AccessRole.editor


class ChangeRoleRequest(BaseModel):
    role: AccessRole


# Tasks


@router.get("/tasks/{task_id}/access", response_model=GrantListResponse)
async def list_task_access(
    task_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await ListAccessUseCase(uow, guard, ResourceType.task, features).execute(
        context, task_id
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post(
    "/tasks/{task_id}/access",
    status_code=status.HTTP_201_CREATED,
    response_model=GrantResponse,
)
async def grant_task_access(
    task_id: UUID,
    request: GrantAccessRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """
    Invite a user onto a task.

    Requires: task creator, admin grant on the task, or tenant admin
    """
    result = await GrantAccessUseCase(uow, guard, ResourceType.task, features).execute(
        context, task_id, request.user_id, request.role
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.patch("/tasks/{task_id}/access/{user_id}", response_model=GrantResponse)
async def change_task_access_role(
    task_id: UUID,
    user_id: UUID,
    request: ChangeRoleRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await ChangeAccessRoleUseCase(uow, guard, ResourceType.task, features).execute(
        context, task_id, user_id, request.role
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.delete("/tasks/{task_id}/access/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_task_access(
    task_id: UUID,
    user_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await RevokeAccessUseCase(uow, guard, ResourceType.task, features).execute(
        context, task_id, user_id
    )
    if result.is_err():
        _raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Projects


@router.get("/projects/{project_id}/access", response_model=GrantListResponse)
async def list_project_access(
    project_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await ListAccessUseCase(uow, guard, ResourceType.project, features).execute(
        context, project_id
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post(
    "/projects/{project_id}/access",
    status_code=status.HTTP_201_CREATED,
    response_model=GrantResponse,
)
async def grant_project_access(
    project_id: UUID,
    request: GrantAccessRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """
    Invite a user onto a project. The grant also exposes the project's
    private tasks.

    Requires: project creator, admin grant on the project, or tenant admin
    """
    result = await GrantAccessUseCase(uow, guard, ResourceType.project, features).execute(
        context, project_id, request.user_id, request.role
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.patch("/projects/{project_id}/access/{user_id}", response_model=GrantResponse)
async def change_project_access_role(
    project_id: UUID,
    user_id: UUID,
    request: ChangeRoleRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await ChangeAccessRoleUseCase(
        uow, guard, ResourceType.project, features
    ).execute(context, project_id, user_id, request.role)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.delete(
    "/projects/{project_id}/access/{user_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def revoke_project_access(
    project_id: UUID,
    user_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    result = await RevokeAccessUseCase(uow, guard, ResourceType.project, features).execute(
        context, project_id, user_id
    )
    if result.is_err():
        _raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
