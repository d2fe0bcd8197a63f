"""
Super user impersonation over HTTP.
"""

from datetime import datetime, timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient

from src.domain.entities import Session


async def _audit_events(client, login, event_type):
    response = await client.get("/audit/events", headers=await login("alice"))
    assert response.status_code == 200
    return [e for e in response.json()["events"] if e["event_type"] == event_type]


@pytest.mark.asyncio
async def test_impersonate_user_then_exit(client: AsyncClient, seed, login):
    """Super user impersonates User C in an active tenant

    Then the session reports C's identity and role
    And exit returns the session to idle
    And an impersonation_exited audit event records the duration
    """
    root = await login("root")
    carol = seed["users"]["carol"]

    response = await client.post(f"/users/{carol['id']}/impersonate-login", headers=root)
    assert response.status_code == 200
    status = response.json()
    assert status["is_impersonating"] is True
    assert status["impersonated_user_id"] == carol["id"]
    assert status["impersonated_user_role"] == "employee"
    assert status["impersonated_tenant_id"] == seed["tenants"]["acme"]
    assert status["original_super_user_id"] == seed["users"]["root"]["id"]

    me = (await client.get("/me", headers=root)).json()
    assert me["is_impersonating"] is True
    assert me["user"] == {"id": carol["id"], "role": "employee"}
    assert me["real_user"]["id"] == seed["users"]["root"]["id"]
    assert me["tenant_id"] == seed["tenants"]["acme"]

    status = (await client.get("/impersonation/status", headers=root)).json()
    assert status["is_impersonating"] is True
    assert status["impersonated_user_email"] == "carol@acme.com"

    response = await client.post("/impersonation/exit", headers=root)
    assert response.status_code == 200
    assert response.json()["is_impersonating"] is False
    duration = response.json()["duration_seconds"]
    assert isinstance(duration, int)

    status = (await client.get("/impersonation/status", headers=root)).json()
    assert status["is_impersonating"] is False
    assert status["impersonated_user_id"] is None
    assert (await client.get("/me", headers=root)).json()["tenant_id"] is None

    [started] = await _audit_events(client, login, "impersonation_started")
    assert started["actor_user_id"] == seed["users"]["root"]["id"]
    assert started["actor_email"] == "root@platform.io"
    [exited] = await _audit_events(client, login, "impersonation_exited")
    assert exited["metadata"]["duration_seconds"] == duration


@pytest.mark.asyncio
async def test_impersonated_user_permissions_apply(client: AsyncClient, seed, login):
    """While impersonating Erin, Erin's private-visibility rules apply"""
    root = await login("root")
    await client.post(f"/users/{seed['users']['erin']['id']}/impersonate-login", headers=root)

    response = await client.get(f"/tasks/{seed['tasks']['secret']}", headers=root)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_tenant_impersonation(client: AsyncClient, seed, login):
    root = await login("root")

    response = await client.post(
        "/impersonate/start", headers=root, json={"tenant_id": seed["tenants"]["acme"]}
    )
    assert response.status_code == 200
    assert response.json()["impersonated_user_id"] is None
    assert response.json()["impersonated_tenant_name"] == "Acme Corp"

    me = (await client.get("/me", headers=root)).json()
    assert me["tenant_id"] == seed["tenants"]["acme"]
    assert me["user"]["id"] == seed["users"]["root"]["id"]

    # Super users see private data of the tenant they are in
    titles = {t["title"] for t in (await client.get("/tasks", headers=root)).json()["tasks"]}
    assert "Acquisition memo" in titles

    # Still isolated from other tenants
    response = await client.get(f"/tasks/{seed['tasks']['roadmap']}", headers=root)
    assert response.status_code == 403

    response = await client.post(
        "/impersonate/start", headers=root, json={"tenant_id": seed["tenants"]["globex"]}
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_IMPERSONATING"

    response = await client.post("/impersonate/stop", headers=root)
    assert response.status_code == 200
    assert response.json()["is_impersonating"] is False
    assert len(await _audit_events(client, login, "impersonation_stopped")) == 1


@pytest.mark.asyncio
async def test_exit_while_idle(client: AsyncClient, seed, login):
    root = await login("root")

    response = await client.post("/impersonation/exit", headers=root)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NOT_IMPERSONATING"

    response = await client.post("/impersonate/stop", headers=root)
    assert response.status_code == 200
    assert response.json() == {"is_impersonating": False, "duration_seconds": None}


@pytest.mark.asyncio
async def test_impersonation_requires_super_user(client: AsyncClient, seed, login):
    alice = await login("alice")

    response = await client.post(
        "/impersonate/start", headers=alice, json={"tenant_id": seed["tenants"]["acme"]}
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SUPER_USER_REQUIRED"

    response = await client.get("/impersonation/status", headers=alice)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_impersonate_start_preconditions(client: AsyncClient, seed, login):
    root = await login("root")

    response = await client.post(
        "/impersonate/start", headers=root, json={"tenant_id": seed["tenants"]["initech"]}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TENANT_NOT_ACTIVE"

    response = await client.post(
        "/impersonate/start",
        headers=root,
        json={"tenant_id": "00000000-0000-0000-0000-000000000000"},
    )
    assert response.status_code == 404

    status = (await client.get("/impersonation/status", headers=root)).json()
    assert status["is_impersonating"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "key, status_code, code",
    [
        ("frank", 400, "USER_INACTIVE"),
        ("ivan", 400, "TENANT_NOT_ACTIVE"),
        ("root", 400, "CANNOT_IMPERSONATE_SUPER_USER"),
    ],
)
async def test_impersonate_user_preconditions(
    client: AsyncClient, seed, login, key, status_code, code
):
    root = await login("root")

    response = await client.post(f"/users/{seed['users'][key]['id']}/impersonate-login", headers=root)

    assert response.status_code == status_code
    assert response.json()["error"]["code"] == code


@pytest.mark.asyncio
async def test_impersonate_unknown_user(client: AsyncClient, seed, login):
    response = await client.post(
        "/users/00000000-0000-0000-0000-000000000000/impersonate-login",
        headers=await login("root"),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_sweep_audits_impersonation_that_outlived_its_session(
    client: AsyncClient, seed, db_session, login, test_data
):
    """An impersonation ending by session expiry is audited once by the sweep"""
    response = await client.post("/auth/login", json={
        "email": "root@platform.io",
        "password": test_data.get("password"),
    })
    expiring = {"Authorization": f"Bearer {response.json()['access_token']}"}
    session_id = UUID(response.json()["session_id"])

    response = await client.post(
        "/impersonate/start", headers=expiring, json={"tenant_id": seed["tenants"]["acme"]}
    )
    assert response.status_code == 200

    session = await db_session.get(Session, session_id)
    session.expires_at = datetime.utcnow() - timedelta(seconds=1)
    db_session.add(session)
    await db_session.commit()

    assert (await client.get("/me", headers=expiring)).status_code == 401

    root = await login("root")
    response = await client.post("/super/impersonation/sweep", headers=root)
    assert response.status_code == 200
    assert response.json()["sessions_swept"] == 1

    response = await client.post("/super/impersonation/sweep", headers=root)
    assert response.json()["sessions_swept"] == 0

    [expired] = await _audit_events(client, login, "impersonation_expired")
    assert expired["actor_user_id"] == seed["users"]["root"]["id"]
    assert expired["metadata"]["session_id"] == str(session_id)
    assert expired["metadata"]["duration_seconds"] >= 0
