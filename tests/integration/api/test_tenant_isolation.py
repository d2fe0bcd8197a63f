"""
Tenant isolation through the HTTP surface: cross-tenant reads, client
supplied tenant ids and tenant stamping of new rows.
"""

import pytest
from httpx import AsyncClient

from src.app.services.tenancy_guard import EnforcementMode


@pytest.mark.asyncio
async def test_cross_tenant_task_read_is_blocked(client: AsyncClient, seed, login):
    """User of Acme reads a Globex task: 403 and no task data"""
    headers = await login("bob")

    response = await client.get(f"/tasks/{seed['tasks']['roadmap']}", headers=headers)

    assert response.status_code == 403
    data = response.json()
    assert data["error"]["code"] == "CROSS_TENANT_ACCESS_DENIED"
    assert "title" not in data


@pytest.mark.asyncio
async def test_cross_tenant_project_read_is_blocked(client: AsyncClient, seed, login):
    headers = await login("bob")

    response = await client.get(f"/projects/{seed['projects']['zeus']}", headers=headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_cross_tenant_task_creation_is_blocked(client: AsyncClient, seed, login):
    headers = await login("gina")

    response = await client.post(
        f"/projects/{seed['projects']['apollo']}/tasks",
        headers=headers,
        json={"title": "Sneaky"},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_task_list_is_tenant_scoped(client: AsyncClient, seed, login):
    headers = await login("gina")

    response = await client.get("/tasks", headers=headers)

    assert response.status_code == 200
    assert [t["id"] for t in response.json()["tasks"]] == [seed["tasks"]["roadmap"]]


@pytest.mark.asyncio
async def test_client_tenant_id_in_body_rejected(client: AsyncClient, seed, login, test_data):
    headers = await login("bob")
    body = test_data.get_copy("project_request")
    body["tenant_id"] = seed["tenants"]["globex"]

    response = await client.post("/projects", headers=headers, json=body)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CLIENT_TENANT_ID_REJECTED"


@pytest.mark.asyncio
async def test_client_tenant_id_in_query_rejected(client: AsyncClient, seed, login):
    headers = await login("bob")

    response = await client.get(
        "/tasks", headers=headers, params={"tenantId": seed["tenants"]["globex"]}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_client_tenant_id_ignored_in_production_warn_mode(
    client: AsyncClient, seed, login, test_data, guard, caplog
):
    """Outside tests and strict enforcement the field is logged and ignored"""
    guard.environment = "production"
    headers = await login("bob")
    body = test_data.get_copy("project_request")
    body["tenant_id"] = seed["tenants"]["globex"]

    response = await client.post("/projects", headers=headers, json=body)

    assert response.status_code == 201
    assert response.json()["tenant_id"] == seed["tenants"]["acme"]
    assert "Client-supplied tenant_id" in caplog.text


@pytest.mark.asyncio
async def test_client_tenant_id_flagged_in_header_under_soft_enforcement(
    client: AsyncClient, seed, login, test_data, guard
):
    guard.environment = "production"
    guard.enforcement = EnforcementMode.soft
    headers = await login("bob")
    body = test_data.get_copy("project_request")
    body["tenant_id"] = seed["tenants"]["globex"]

    response = await client.post("/projects", headers=headers, json=body)

    assert response.status_code == 201
    assert response.json()["tenant_id"] == seed["tenants"]["acme"]
    assert response.headers["X-Tenancy-Warn"] == "Client-supplied tenant_id in body ignored"

    response = await client.get("/projects", headers=headers)
    assert "X-Tenancy-Warn" not in response.headers


@pytest.mark.asyncio
async def test_client_tenant_id_rejected_in_production_strict_mode(
    client: AsyncClient, seed, login, test_data, guard
):
    guard.environment = "production"
    guard.enforcement = EnforcementMode.strict
    headers = await login("bob")
    body = test_data.get_copy("project_request")
    body["tenantId"] = seed["tenants"]["acme"]

    response = await client.post("/projects", headers=headers, json=body)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_new_rows_carry_the_session_tenant(client: AsyncClient, seed, login, test_data):
    headers = await login("bob")

    response = await client.post(
        "/projects", headers=headers, json=test_data.get_copy("project_request")
    )
    assert response.status_code == 201
    project = response.json()
    assert project["tenant_id"] == seed["tenants"]["acme"]
    assert project["workspace_id"] == seed["workspaces"]["acme"]
    assert project["created_by"] == seed["users"]["bob"]["id"]

    response = await client.post(
        f"/projects/{project['id']}/tasks", headers=headers, json={"title": "Kickoff"}
    )
    assert response.status_code == 201
    assert response.json()["tenant_id"] == seed["tenants"]["acme"]


@pytest.mark.asyncio
async def test_project_in_foreign_workspace_rejected(client: AsyncClient, seed, login):
    headers = await login("bob")

    response = await client.post(
        "/projects",
        headers=headers,
        json={"name": "Misplaced", "workspace_id": seed["workspaces"]["globex"]},
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "WORKSPACE_NOT_FOUND"


@pytest.mark.asyncio
async def test_super_user_needs_tenant_context(client: AsyncClient, seed, login):
    headers = await login("root")

    response = await client.get("/tasks", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TENANT_CONTEXT_MISSING"
