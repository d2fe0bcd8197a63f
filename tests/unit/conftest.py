import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import EnforcementMode, GuardMode, TenancyGuard
from src.domain.entities import UserRole
from src.domain.impersonation import IdleState


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    return uow


@pytest.fixture
def guard():
    """Guard as configured for test execution: violations raise."""
    return TenancyGuard(mode=GuardMode.warn, enforcement=EnforcementMode.off, environment="test")


@pytest.fixture
def make_context():
    def _make(
        tenant_id=None,
        user_id=None,
        role=UserRole.employee,
        real_user_id=None,
        real_role=None,
        impersonation=None,
        email="user@example.com",
    ):
        user_id = user_id or uuid4()
        return RequestContext(
            session_id=uuid4(),
            real_user_id=real_user_id or user_id,
            real_user_email=email,
            real_user_role=real_role or role,
            acting_user_id=user_id,
            acting_user_role=role,
            tenant_id=tenant_id,
            impersonation=impersonation or IdleState(),
        )

    return _make
