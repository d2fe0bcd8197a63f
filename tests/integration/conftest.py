import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.workspace_cache import InMemoryWorkspaceCache
from src.api.app import create_app
from src.app.services.tenancy_guard import EnforcementMode, GuardMode, TenancyGuard
from src.app.services.visibility import PrivacyFeatures
from src.depends import (
    get_privacy_features,
    get_tenancy_guard,
    get_unit_of_work,
    get_workspace_cache,
)
from src.domain.entities import (
    Project,
    Task,
    Tenant,
    TenantStatus,
    User,
    UserRole,
    Visibility,
    Workspace,
)
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def guard():
    """Test-environment guard; tests may switch it to strict enforcement."""
    return TenancyGuard(mode=GuardMode.warn, enforcement=EnforcementMode.off, environment="test")


@pytest.fixture
def privacy():
    """Mutable holder so a test can turn the privacy flags off."""
    return {"features": PrivacyFeatures()}


@pytest_asyncio.fixture
async def app(db_session, guard, privacy):
    app = create_app(ApplicationConfig)
    workspace_cache = InMemoryWorkspaceCache()

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_tenancy_guard] = lambda: guard
    app.dependency_overrides[get_privacy_features] = lambda: privacy["features"]
    app.dependency_overrides[get_workspace_cache] = lambda: workspace_cache
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seed(db_session, test_data):
    """
    Load tenants, users, projects and tasks from test_data.json.

    Returns plain ids (as strings) keyed by fixture key; ORM rows are
    expired by the rollback at the end of every request.
    """
    password_hash = bcrypt.hashpw(
        test_data.get("password").encode(), bcrypt.gensalt(4)
    ).decode()

    ids = {"tenants": {}, "workspaces": {}, "users": {}, "projects": {}, "tasks": {}}
    rows = []

    tenants = {}
    workspaces = {}
    for item in test_data.get_copy("tenants"):
        tenant = Tenant(name=item["name"], status=TenantStatus(item["status"]))
        workspace = Workspace(tenant_id=tenant.id, name=item["name"], is_primary=True)
        tenants[item["key"]] = tenant
        workspaces[item["key"]] = workspace
        ids["tenants"][item["key"]] = str(tenant.id)
        ids["workspaces"][item["key"]] = str(workspace.id)
        rows.extend([tenant, workspace])

    users = {}
    for item in test_data.get_copy("users"):
        user = User(
            tenant_id=tenants[item["tenant"]].id if item["tenant"] else None,
            email=item["email"],
            name=item["name"],
            password_hash=password_hash,
            role=UserRole(item["role"]),
            is_active=item.get("is_active", True),
        )
        users[item["key"]] = user
        ids["users"][item["key"]] = {"id": str(user.id), "email": user.email}
        rows.append(user)

    projects = {}
    for item in test_data.get_copy("projects"):
        project = Project(
            tenant_id=tenants[item["tenant"]].id,
            workspace_id=workspaces[item["tenant"]].id,
            name=item["name"],
            visibility=Visibility(item["visibility"]),
            created_by=users[item["owner"]].id,
        )
        projects[item["key"]] = project
        ids["projects"][item["key"]] = str(project.id)
        rows.append(project)

    for item in test_data.get_copy("tasks"):
        project = projects[item["project"]]
        task = Task(
            tenant_id=project.tenant_id,
            project_id=project.id,
            title=item["title"],
            visibility=Visibility(item["visibility"]),
            created_by=users[item["owner"]].id,
        )
        ids["tasks"][item["key"]] = str(task.id)
        rows.append(task)

    # Parents first so foreign keys resolve on backends that enforce them
    for row in rows:
        db_session.add(row)
        await db_session.flush()
    await db_session.commit()

    return ids


@pytest_asyncio.fixture
async def login(client, seed, test_data):
    """Log a seeded user in; returns the Authorization headers."""

    async def _login(key: str) -> dict:
        response = await client.post(
            "/auth/login",
            json={"email": seed["users"][key]["email"], "password": test_data.get("password")},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
