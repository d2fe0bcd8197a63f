"""
Project API Routes

Tenant-scoped project endpoints. The tenant always comes from the session;
tenant ids in the body or query are rejected.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.app.services.workspace_cache import IWorkspaceCache
from src.app.use_cases.projects import (
    CreateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    ProjectListResponse,
    ProjectResponse,
)
from src.app.use_cases.tasks import (
    CreateTaskUseCase,
    ListTasksUseCase,
    TaskListResponse,
    TaskResponse,
)
from src.depends import (
    get_privacy_features,
    get_request_context,
    get_tenancy_guard,
    get_unit_of_work,
    get_workspace_cache,
    reject_client_tenant_id,
)
from src.domain.entities import Visibility
from src.libs.result import Error

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    dependencies=[Depends(reject_client_tenant_id)],
)


def _raise_for_error(error: Error):
    if error.code in ("PROJECT_NOT_FOUND", "WORKSPACE_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "ACCESS_DENIED":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


class CreateProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    visibility: Visibility = Visibility.workspace
    workspace_id: Optional[UUID] = Field(
        None, description="Defaults to the tenant's primary workspace"
    )


class CreateTaskRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    visibility: Visibility = Visibility.workspace


@router.get("", status_code=status.HTTP_200_OK, response_model=ProjectListResponse)
async def list_projects(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """Projects of the effective tenant; private projects only when visible to the caller."""
    result = await ListProjectsUseCase(uow, guard, features).execute(context)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    workspace_cache: IWorkspaceCache = Depends(get_workspace_cache),
):
    """
    Create Project

    Raises:
        - 400 Bad Request: tenant_id supplied by the client (strict/test)
        - 401 Unauthorized: No tenant context
        - 404 Not Found: Workspace not found in the tenant
    """
    use_case = CreateProjectUseCase(uow, guard, workspace_cache)
    result = await use_case.execute(
        context,
        name=request.name,
        visibility=request.visibility,
        workspace_id=request.workspace_id,
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.get("/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """
    Get Project

    Raises:
        - 403 Forbidden: Project of another tenant, or private and not visible
        - 404 Not Found: PROJECT_NOT_FOUND
    """
    result = await GetProjectUseCase(uow, guard, features).execute(context, project_id)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.get(
    "/{project_id}/tasks", status_code=status.HTTP_200_OK, response_model=TaskListResponse
)
async def list_project_tasks(
    project_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """Tasks of one project, private tasks filtered per caller."""
    result = await ListTasksUseCase(uow, guard, features).execute(context, project_id=project_id)
    if result.is_err():
        _raise_for_error(result.error)
    return result.value


@router.post(
    "/{project_id}/tasks", status_code=status.HTTP_201_CREATED, response_model=TaskResponse
)
async def create_project_task(
    project_id: UUID,
    request: CreateTaskRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """
    Create Task in Project

    Raises:
        - 403 Forbidden: Project of another tenant, or private and not visible
        - 404 Not Found: PROJECT_NOT_FOUND
    """
    use_case = CreateTaskUseCase(uow, guard, features)
    result = await use_case.execute(
        context, project_id=project_id, title=request.title, visibility=request.visibility
    )
    if result.is_err():
        _raise_for_error(result.error)
    return result.value
