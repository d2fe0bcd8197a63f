"""
Task API Routes

Tenant-wide task listing and task detail. Private tasks are filtered by
the caller's grants; task creation lives under /projects/{project_id}/tasks.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.app.use_cases.tasks import GetTaskUseCase, ListTasksUseCase, TaskListResponse, TaskResponse
from src.depends import (
    get_privacy_features,
    get_request_context,
    get_tenancy_guard,
    get_unit_of_work,
    reject_client_tenant_id,
)

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    dependencies=[Depends(reject_client_tenant_id)],
)


@router.get("", status_code=status.HTTP_200_OK, response_model=TaskListResponse)
async def list_tasks(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """Tasks of the effective tenant; private tasks only when visible to the caller."""
    result = await ListTasksUseCase(uow, guard, features).execute(context)
    if result.is_err():
        raise ServerError(result.error)
    return result.value


@router.get("/{task_id}", status_code=status.HTTP_200_OK, response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    guard: TenancyGuard = Depends(get_tenancy_guard),
    features: PrivacyFeatures = Depends(get_privacy_features),
):
    """
    Get Task

    Raises:
        - 403 Forbidden: Task of another tenant, or private and not visible
        - 404 Not Found: TASK_NOT_FOUND
    """
    result = await GetTaskUseCase(uow, guard, features).execute(context, task_id)

    if result.is_err():
        error = result.error
        if error.code == "TASK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
