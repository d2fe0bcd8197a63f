"""
Unit tests for the access control resolver.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.services.access_control import AccessControlResolver
from src.app.services.visibility import PrivacyFeatures
from src.domain.entities import (
    AccessRole,
    Project,
    ProjectAccess,
    ResourceType,
    Task,
    TaskAccess,
    User,
    UserRole,
    Visibility,
)


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def owner_id():
    return uuid4()


@pytest.fixture
def private_task(tenant_id, owner_id):
    return Task(
        tenant_id=tenant_id,
        project_id=uuid4(),
        title="Payroll review",
        visibility=Visibility.private,
        created_by=owner_id,
    )


def _setup(mock_uow, task=None, project=None, task_grant=None, project_grant=None, user=None):
    mock_uow.tasks.get_by_id = AsyncMock(return_value=task)
    mock_uow.projects.get_by_id = AsyncMock(return_value=project)
    mock_uow.task_access.get_by_resource_and_user = AsyncMock(return_value=task_grant)
    mock_uow.project_access.get_by_resource_and_user = AsyncMock(return_value=project_grant)
    mock_uow.users.get_by_id = AsyncMock(return_value=user)


@pytest.mark.asyncio
async def test_workspace_task_is_visible_to_anyone_in_tenant(mock_uow, tenant_id):
    task = Task(tenant_id=tenant_id, title="Public", visibility=Visibility.workspace)
    _setup(mock_uow, task=task)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_task(tenant_id, task.id, uuid4())


@pytest.mark.asyncio
async def test_missing_or_foreign_task_is_never_visible(mock_uow, tenant_id):
    _setup(mock_uow, task=None)
    resolver = AccessControlResolver(mock_uow)
    assert not await resolver.can_view_task(tenant_id, uuid4(), uuid4())

    foreign = Task(tenant_id=uuid4(), title="Elsewhere", visibility=Visibility.workspace)
    _setup(mock_uow, task=foreign)
    assert not await resolver.can_view_task(tenant_id, foreign.id, uuid4())


@pytest.mark.asyncio
async def test_private_task_visible_to_creator(mock_uow, tenant_id, owner_id, private_task):
    _setup(mock_uow, task=private_task)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_task(tenant_id, private_task.id, owner_id)


@pytest.mark.asyncio
async def test_private_task_hidden_from_plain_employee(mock_uow, tenant_id, private_task):
    employee = User(tenant_id=tenant_id, email="e@acme.com", role=UserRole.employee)
    _setup(mock_uow, task=private_task, user=employee)

    resolver = AccessControlResolver(mock_uow)

    assert not await resolver.can_view_task(tenant_id, private_task.id, employee.id)


@pytest.mark.asyncio
async def test_private_task_visible_with_any_grant(mock_uow, tenant_id, private_task):
    user_id = uuid4()
    grant = TaskAccess(
        tenant_id=tenant_id, task_id=private_task.id, user_id=user_id, role=AccessRole.viewer
    )
    _setup(mock_uow, task=private_task, task_grant=grant)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_task(tenant_id, private_task.id, user_id)


@pytest.mark.asyncio
async def test_private_task_visible_through_project_grant(mock_uow, tenant_id, private_task):
    user_id = uuid4()
    grant = ProjectAccess(
        tenant_id=tenant_id, project_id=private_task.project_id, user_id=user_id
    )
    _setup(mock_uow, task=private_task, project_grant=grant)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_task(tenant_id, private_task.id, user_id)
    mock_uow.project_access.get_by_resource_and_user.assert_called_once_with(
        tenant_id, private_task.project_id, user_id
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.admin, UserRole.super_user])
async def test_private_task_visible_to_tenant_admin_and_super_user(
    mock_uow, tenant_id, private_task, role
):
    user = User(
        tenant_id=tenant_id if role == UserRole.admin else None, email="a@x.com", role=role
    )
    _setup(mock_uow, task=private_task, user=user)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_task(tenant_id, private_task.id, user.id)


@pytest.mark.asyncio
async def test_admin_of_another_tenant_gets_no_override(mock_uow, tenant_id, private_task):
    admin = User(tenant_id=uuid4(), email="a@other.com", role=UserRole.admin)
    _setup(mock_uow, task=private_task, user=admin)

    resolver = AccessControlResolver(mock_uow)

    assert not await resolver.can_view_task(tenant_id, private_task.id, admin.id)


@pytest.mark.asyncio
async def test_private_tasks_feature_disabled_makes_everything_visible(
    mock_uow, tenant_id, private_task
):
    _setup(mock_uow, task=private_task)

    resolver = AccessControlResolver(mock_uow, PrivacyFeatures(private_tasks=False))

    assert await resolver.can_view_task(tenant_id, private_task.id, uuid4())


@pytest.mark.asyncio
async def test_private_project_visibility(mock_uow, tenant_id, owner_id):
    project = Project(
        tenant_id=tenant_id, name="Secret", visibility=Visibility.private, created_by=owner_id
    )
    stranger = User(tenant_id=tenant_id, email="s@acme.com", role=UserRole.client)
    _setup(mock_uow, project=project, user=stranger)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_view_project(tenant_id, project.id, owner_id)
    assert not await resolver.can_view_project(tenant_id, project.id, stranger.id)
    assert await resolver.can_view(ResourceType.project, tenant_id, project.id, owner_id)


@pytest.mark.asyncio
async def test_manage_requires_creator_admin_grant_or_tenant_admin(
    mock_uow, tenant_id, owner_id, private_task
):
    editor_id = uuid4()
    editor_grant = TaskAccess(
        tenant_id=tenant_id, task_id=private_task.id, user_id=editor_id, role=AccessRole.editor
    )
    employee = User(id=editor_id, tenant_id=tenant_id, email="e@acme.com")
    _setup(mock_uow, task=private_task, task_grant=editor_grant, user=employee)
    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_manage_task_access(tenant_id, private_task.id, owner_id)
    assert not await resolver.can_manage_task_access(tenant_id, private_task.id, editor_id)

    editor_grant.role = AccessRole.admin
    assert await resolver.can_manage_access(
        ResourceType.task, tenant_id, private_task.id, editor_id
    )


@pytest.mark.asyncio
async def test_manage_project_access_tenant_admin(mock_uow, tenant_id):
    project = Project(tenant_id=tenant_id, name="P", created_by=uuid4())
    admin = User(tenant_id=tenant_id, email="admin@acme.com", role=UserRole.admin)
    _setup(mock_uow, project=project, user=admin)

    resolver = AccessControlResolver(mock_uow)

    assert await resolver.can_manage_project_access(tenant_id, project.id, admin.id)


@pytest.mark.asyncio
async def test_inactive_admin_gets_no_override(mock_uow, tenant_id, private_task):
    admin = User(tenant_id=tenant_id, email="a@acme.com", role=UserRole.admin, is_active=False)
    _setup(mock_uow, task=private_task, user=admin)

    resolver = AccessControlResolver(mock_uow)

    assert not await resolver.can_view_task(tenant_id, private_task.id, admin.id)
