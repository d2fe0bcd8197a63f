"""
Unit tests for project and task use cases.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.adapter.services.workspace_cache import InMemoryWorkspaceCache
from src.app.services.tenancy_guard import CrossTenantViolation
from src.app.services.visibility import PrivacyFeatures
from src.app.use_cases.projects import CreateProjectUseCase, GetProjectUseCase, ListProjectsUseCase
from src.app.use_cases.tasks import CreateTaskUseCase, GetTaskUseCase, ListTasksUseCase
from src.domain.entities import Project, Task, User, UserRole, Visibility, Workspace


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def features():
    return PrivacyFeatures()


@pytest.fixture
def employee(mock_uow, tenant_id):
    user = User(tenant_id=tenant_id, email="e@acme.com", role=UserRole.employee)
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    mock_uow.task_access.get_by_resource_and_user = AsyncMock(return_value=None)
    mock_uow.project_access.get_by_resource_and_user = AsyncMock(return_value=None)
    return user


@pytest.mark.asyncio
async def test_create_project_defaults_to_primary_workspace(
    mock_uow, guard, make_context, tenant_id
):
    # Arrange
    primary = Workspace(tenant_id=tenant_id, name="Main", is_primary=True)
    mock_uow.workspaces.get_by_tenant_id = AsyncMock(return_value=[primary])
    mock_uow.projects.create = AsyncMock(side_effect=lambda p: p)
    cache = InMemoryWorkspaceCache()
    context = make_context(tenant_id=tenant_id)

    # Act
    result = await CreateProjectUseCase(mock_uow, guard, cache).execute(context, "Apollo")

    # Assert
    assert result.is_ok()
    assert result.value.workspace_id == str(primary.id)
    assert result.value.tenant_id == str(tenant_id)
    assert result.value.created_by == str(context.acting_user_id)
    assert cache.get(tenant_id) == primary.id


@pytest.mark.asyncio
async def test_create_project_rejects_foreign_workspace(mock_uow, guard, make_context, tenant_id):
    mock_uow.workspaces.get_by_tenant_id = AsyncMock(
        return_value=[Workspace(tenant_id=tenant_id, name="Main", is_primary=True)]
    )
    mock_uow.projects.create = AsyncMock()

    result = await CreateProjectUseCase(mock_uow, guard, InMemoryWorkspaceCache()).execute(
        make_context(tenant_id=tenant_id), "Apollo", workspace_id=uuid4()
    )

    assert result.error.code == "WORKSPACE_NOT_FOUND"
    mock_uow.projects.create.assert_not_called()


@pytest.mark.asyncio
async def test_list_projects_hides_private_project_of_others(
    mock_uow, guard, make_context, tenant_id, features, employee
):
    public = Project(tenant_id=tenant_id, name="Public")
    secret = Project(tenant_id=tenant_id, name="Secret", visibility=Visibility.private, created_by=uuid4())
    mock_uow.projects.get_by_tenant_id = AsyncMock(return_value=[public, secret])
    mock_uow.projects.get_private_ids_created_by = AsyncMock(return_value=[])
    mock_uow.project_access.get_resource_ids_by_user = AsyncMock(return_value=[])

    result = await ListProjectsUseCase(mock_uow, guard, features).execute(
        make_context(tenant_id=tenant_id, user_id=employee.id)
    )

    assert [p.name for p in result.value.projects] == ["Public"]


@pytest.mark.asyncio
async def test_get_private_project_denied(mock_uow, guard, make_context, tenant_id, features, employee):
    secret = Project(tenant_id=tenant_id, name="Secret", visibility=Visibility.private, created_by=uuid4())
    mock_uow.projects.get_by_id = AsyncMock(return_value=secret)

    result = await GetProjectUseCase(mock_uow, guard, features).execute(
        make_context(tenant_id=tenant_id, user_id=employee.id), secret.id
    )

    assert result.error.code == "ACCESS_DENIED"


@pytest.mark.asyncio
async def test_get_project_of_other_tenant_raises(mock_uow, guard, make_context, features):
    project = Project(tenant_id=uuid4(), name="Theirs")
    mock_uow.projects.get_by_id = AsyncMock(return_value=project)

    with pytest.raises(CrossTenantViolation):
        await GetProjectUseCase(mock_uow, guard, features).execute(
            make_context(tenant_id=uuid4()), project.id
        )


@pytest.mark.asyncio
async def test_create_task_inherits_project_tenant(
    mock_uow, guard, make_context, tenant_id, features, employee
):
    project = Project(tenant_id=tenant_id, name="Apollo")
    mock_uow.projects.get_by_id = AsyncMock(return_value=project)
    mock_uow.tasks.create = AsyncMock(side_effect=lambda t: t)

    result = await CreateTaskUseCase(mock_uow, guard, features).execute(
        make_context(tenant_id=tenant_id, user_id=employee.id), project.id, "Write docs",
        Visibility.private,
    )

    assert result.is_ok()
    assert result.value.tenant_id == str(tenant_id)
    assert result.value.project_id == str(project.id)
    assert result.value.visibility == "private"


@pytest.mark.asyncio
async def test_create_task_in_missing_project(mock_uow, guard, make_context, tenant_id, features):
    mock_uow.projects.get_by_id = AsyncMock(return_value=None)

    result = await CreateTaskUseCase(mock_uow, guard, features).execute(
        make_context(tenant_id=tenant_id), uuid4(), "Write docs"
    )

    assert result.error.code == "PROJECT_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_task_across_tenants_raises(mock_uow, guard, make_context, features):
    task = Task(tenant_id=uuid4(), title="Theirs")
    mock_uow.tasks.get_by_id = AsyncMock(return_value=task)

    with pytest.raises(CrossTenantViolation):
        await GetTaskUseCase(mock_uow, guard, features).execute(
            make_context(tenant_id=uuid4()), task.id
        )


@pytest.mark.asyncio
async def test_get_missing_task(mock_uow, guard, make_context, features):
    mock_uow.tasks.get_by_id = AsyncMock(return_value=None)

    result = await GetTaskUseCase(mock_uow, guard, features).execute(
        make_context(tenant_id=uuid4()), uuid4()
    )

    assert result.error.code == "TASK_NOT_FOUND"


@pytest.mark.asyncio
async def test_list_tasks_with_flags_off_shows_private_tasks(
    mock_uow, guard, make_context, tenant_id, employee
):
    hidden = Task(tenant_id=tenant_id, title="Hidden", visibility=Visibility.private, created_by=uuid4())
    mock_uow.tasks.get_by_tenant_id = AsyncMock(return_value=[hidden])

    result = await ListTasksUseCase(
        mock_uow, guard, PrivacyFeatures(private_tasks=False, private_projects=False)
    ).execute(make_context(tenant_id=tenant_id, user_id=employee.id))

    assert [t.title for t in result.value.tasks] == ["Hidden"]
    mock_uow.tasks.get_by_tenant_id.assert_called_once_with(tenant_id, project_id=None)
