from spherical.rbac import Role

from .conftest import API


async def test_health_is_public(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_missing_token(client):
    resp = await client.get(f"{API}/users/")
    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "error": "Authentication required",
        "code": 401,
    }


async def test_malformed_header(client):
    resp = await client.get(f"{API}/users/", headers={"Authorization": "Token abc"})
    assert resp.status_code == 401
    assert "Bearer" in resp.json()["error"]


async def test_invalid_token(client):
    resp = await client.get(f"{API}/users/", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid token"


async def test_cashier_cannot_list_users(client, auth_headers):
    resp = await client.get(f"{API}/users/", headers=auth_headers(Role.CASHIER))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Insufficient permissions"


async def test_unknown_role_claim_is_denied(client, auth_headers):
    resp = await client.get(f"{API}/sales/", headers=auth_headers("JANITOR"))
    assert resp.status_code == 403


async def test_my_access(client, auth_headers):
    resp = await client.get(f"{API}/access/me", headers=auth_headers(Role.CASHIER))
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["role"] == "CASHIER"
    assert "PROCESS_SALES" in data["permissions"]
    assert "MANAGE_USERS" not in data["permissions"]
    assert data["can_access_admin"] is True
    assert data["pages"]["/admin/sales"] is True
    assert data["pages"]["/admin/users"] is False


async def test_matrix_is_managing_director_only(client, auth_headers):
    resp = await client.get(f"{API}/access/matrix", headers=auth_headers(Role.ADMIN))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Access denied. Required role: MANAGING_DIRECTOR"

    resp = await client.get(
        f"{API}/access/matrix", headers=auth_headers(Role.MANAGING_DIRECTOR)
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["VIEW_USERS"] == ["ADMIN", "MANAGING_DIRECTOR"]


async def test_page_check(client, auth_headers):
    resp = await client.get(
        f"{API}/access/check",
        params={"path": "/admin/staff-management"},
        headers=auth_headers(Role.ADMIN),
    )
    assert resp.json()["data"] == {"path": "/admin/staff-management", "allowed": False}


async def test_custom_policy_is_honoured(settings, db, auth_headers):
    from httpx import ASGITransport, AsyncClient

    from spherical.app import create_app
    from spherical.config import get_database
    from spherical.rbac import AccessPolicy, DEFAULT_PERMISSIONS

    table = {p.value: [r.value for r in roles] for p, roles in DEFAULT_PERMISSIONS.items()}
    table["VIEW_USERS"] = ["CASHIER"]
    app = create_app(settings=settings, access_policy=AccessPolicy.from_mapping(table))
    app.dependency_overrides[get_database] = lambda: db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.get(f"{API}/users/", headers=auth_headers(Role.CASHIER))
        assert resp.status_code == 200
        resp = await c.get(f"{API}/users/", headers=auth_headers(Role.ADMIN))
        assert resp.status_code == 403


async def test_cashier_cannot_read_reports(client, auth_headers):
    resp = await client.get(
        f"{API}/reports/sales-summary", headers=auth_headers(Role.CASHIER)
    )
    assert resp.status_code == 403


async def test_expired_token(client, settings):
    from datetime import timedelta

    from spherical.auth.helpers import create_access_token

    token = create_access_token(
        {"sub": "000000000000000000000001", "role": "ADMIN"},
        settings,
        expires_delta=timedelta(minutes=-5),
    )
    resp = await client.get(f"{API}/users/", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Token has expired"
