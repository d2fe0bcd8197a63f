from unittest.mock import AsyncMock
from uuid import uuid4

import bcrypt
import pytest

from src.api.utils.jwt import verify_jwt
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.entities import Tenant, TenantStatus, User, UserRole

PASSWORD = "SecurePass123!"


@pytest.fixture
def password_hash():
    return bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


@pytest.fixture
def login_uow(mock_uow):
    mock_uow.users.get_by_email = AsyncMock()
    mock_uow.users.update = AsyncMock()
    mock_uow.tenants.get_by_id = AsyncMock()
    mock_uow.sessions.create = AsyncMock(side_effect=lambda s: s)
    return mock_uow


@pytest.mark.asyncio
async def test_successful_login(login_uow, password_hash):
    """Login opens a session and the token references it"""
    # Arrange
    tenant = Tenant(name="Acme Corp")
    user = User(
        tenant_id=tenant.id,
        email="user@acme.com",
        name="User",
        password_hash=password_hash,
        role=UserRole.admin,
    )
    login_uow.users.get_by_email.return_value = user
    login_uow.tenants.get_by_id.return_value = tenant

    # Act
    result = await LoginUseCase(login_uow).execute("User@Acme.com", PASSWORD)

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.token_type == "bearer"
    assert response.user.email == "user@acme.com"
    assert response.user.role == "admin"
    assert response.user.tenant_id == str(tenant.id)

    login_uow.users.get_by_email.assert_called_once_with("user@acme.com")
    session = login_uow.sessions.create.call_args[0][0]
    assert session.user_id == user.id
    assert response.session_id == str(session.id)

    payload = verify_jwt(response.access_token)
    assert payload["user_id"] == str(user.id)
    assert payload["session_id"] == str(session.id)

    assert user.last_login_at is not None
    login_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_super_user_login_skips_tenant_check(login_uow, password_hash):
    user = User(email="root@platform.io", password_hash=password_hash, role=UserRole.super_user)
    login_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(login_uow).execute("root@platform.io", PASSWORD)

    assert result.is_ok()
    assert result.value.user.tenant_id is None
    login_uow.tenants.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_login_unknown_email(login_uow):
    login_uow.users.get_by_email.return_value = None

    result = await LoginUseCase(login_uow).execute("ghost@acme.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    login_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_login_wrong_password(login_uow, password_hash):
    login_uow.users.get_by_email.return_value = User(
        tenant_id=uuid4(), email="user@acme.com", password_hash=password_hash
    )

    result = await LoginUseCase(login_uow).execute("user@acme.com", "WrongPassword!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_disabled_user(login_uow, password_hash):
    login_uow.users.get_by_email.return_value = User(
        tenant_id=uuid4(), email="user@acme.com", password_hash=password_hash, is_active=False
    )

    result = await LoginUseCase(login_uow).execute("user@acme.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "USER_DISABLED"


@pytest.mark.asyncio
async def test_login_suspended_tenant(login_uow, password_hash):
    tenant = Tenant(name="Acme Corp", status=TenantStatus.suspended)
    login_uow.users.get_by_email.return_value = User(
        tenant_id=tenant.id, email="user@acme.com", password_hash=password_hash
    )
    login_uow.tenants.get_by_id.return_value = tenant

    result = await LoginUseCase(login_uow).execute("user@acme.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "TENANT_SUSPENDED"
    login_uow.sessions.create.assert_not_called()
