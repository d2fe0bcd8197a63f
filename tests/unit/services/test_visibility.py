"""
Unit tests for the private visibility filter.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.services.visibility import (
    PrivacyFeatures,
    PrivateVisibilityFilter,
    filter_visible,
    is_visible,
)
from src.domain.entities import Project, Task, User, UserRole, Visibility


@pytest.fixture
def tenant_id():
    return uuid4()


def _user(mock_uow, tenant_id, role=UserRole.employee):
    user = User(tenant_id=tenant_id, email=f"{role.value}@acme.com", role=role)
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    return user


def test_is_visible_uses_visibility_tag_and_accessible_set():
    public = Task(title="a", visibility=Visibility.workspace)
    private = Task(title="b", visibility=Visibility.private)
    granted = Task(title="c", visibility=Visibility.private)

    assert is_visible(public, set())
    assert not is_visible(private, set())
    assert filter_visible([public, private, granted], {granted.id}) == [public, granted]


@pytest.mark.asyncio
async def test_accessible_private_tasks_union_of_created_granted_and_project_grants(
    mock_uow, tenant_id
):
    # Arrange
    user = _user(mock_uow, tenant_id)
    created, granted, via_project = uuid4(), uuid4(), uuid4()
    granted_project = uuid4()
    mock_uow.tasks.get_private_ids_created_by = AsyncMock(return_value=[created])
    mock_uow.task_access.get_resource_ids_by_user = AsyncMock(return_value=[granted])
    mock_uow.project_access.get_resource_ids_by_user = AsyncMock(return_value=[granted_project])
    mock_uow.tasks.get_private_ids_in_projects = AsyncMock(return_value=[via_project])

    # Act
    ids = await PrivateVisibilityFilter(mock_uow).get_accessible_private_task_ids(
        user.id, tenant_id
    )

    # Assert
    assert ids == {created, granted, via_project}
    mock_uow.tasks.get_private_ids_in_projects.assert_called_once_with(
        tenant_id, [granted_project]
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.admin, UserRole.super_user])
async def test_admin_override_returns_every_private_id(mock_uow, tenant_id, role):
    user = _user(mock_uow, tenant_id if role == UserRole.admin else None, role)
    all_private = [uuid4(), uuid4()]
    mock_uow.projects.get_private_ids_by_tenant = AsyncMock(return_value=all_private)
    mock_uow.projects.get_private_ids_created_by = AsyncMock()

    ids = await PrivateVisibilityFilter(mock_uow).get_accessible_private_project_ids(
        user.id, tenant_id
    )

    assert ids == set(all_private)
    mock_uow.projects.get_private_ids_created_by.assert_not_called()


@pytest.mark.asyncio
async def test_accessible_private_projects_for_employee(mock_uow, tenant_id):
    user = _user(mock_uow, tenant_id)
    mine, shared = uuid4(), uuid4()
    mock_uow.projects.get_private_ids_created_by = AsyncMock(return_value=[mine])
    mock_uow.project_access.get_resource_ids_by_user = AsyncMock(return_value=[shared])

    ids = await PrivateVisibilityFilter(mock_uow).get_accessible_private_project_ids(
        user.id, tenant_id
    )

    assert ids == {mine, shared}


@pytest.mark.asyncio
async def test_disabled_feature_returns_empty_set_and_skips_filtering(mock_uow, tenant_id):
    mock_uow.users.get_by_id = AsyncMock()
    features = PrivacyFeatures(private_tasks=False, private_projects=False)
    visibility = PrivateVisibilityFilter(mock_uow, features)
    private_task = Task(tenant_id=tenant_id, title="t", visibility=Visibility.private)
    private_project = Project(tenant_id=tenant_id, name="p", visibility=Visibility.private)

    assert await visibility.get_accessible_private_task_ids(uuid4(), tenant_id) == set()
    assert await visibility.get_accessible_private_project_ids(uuid4(), tenant_id) == set()
    assert await visibility.visible_tasks(uuid4(), tenant_id, [private_task]) == [private_task]
    assert await visibility.visible_projects(uuid4(), tenant_id, [private_project]) == [
        private_project
    ]
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_visible_tasks_drops_inaccessible_private_task(mock_uow, tenant_id):
    """A private task owned by someone else, with no grants, is filtered out."""
    viewer = _user(mock_uow, tenant_id)
    public = Task(tenant_id=tenant_id, title="public")
    hidden = Task(tenant_id=tenant_id, title="hidden", visibility=Visibility.private)
    mock_uow.tasks.get_private_ids_created_by = AsyncMock(return_value=[])
    mock_uow.task_access.get_resource_ids_by_user = AsyncMock(return_value=[])
    mock_uow.project_access.get_resource_ids_by_user = AsyncMock(return_value=[])
    mock_uow.tasks.get_private_ids_in_projects = AsyncMock(return_value=[])

    visible = await PrivateVisibilityFilter(mock_uow).visible_tasks(
        viewer.id, tenant_id, [public, hidden]
    )

    assert visible == [public]
