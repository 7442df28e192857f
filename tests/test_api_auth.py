from jose import jwt

from spherical.rbac import Role

from .conftest import API

SIGNUP = {
    "name": "Jane",
    "email": "Jane@Example.com",
    "password": "longenough",
    "confirm_password": "longenough",
    "accept_terms": True,
}


async def test_register_then_login(client, settings):
    resp = await client.post(f"{API}/auth/register", json=SIGNUP)
    assert resp.status_code == 201
    user = resp.json()["data"]
    assert user["email"] == "jane@example.com"
    assert user["role"] == "REPORT_VIEWER"
    assert "password" not in user

    resp = await client.post(
        f"{API}/auth/login", json={"email": "jane@example.com", "password": "longenough"}
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    claims = jwt.decode(data["access_token"], settings.secret_key, algorithms=[settings.algorithm])
    assert claims["role"] == "REPORT_VIEWER"
    assert "VIEW_REPORTS" in claims["permissions"]
    assert data["user"]["last_login"]


async def test_register_rejects_invalid_form(client):
    resp = await client.post(
        f"{API}/auth/register",
        json={**SIGNUP, "confirm_password": "other-one", "accept_terms": False},
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Please fix the form errors before submitting"
    assert body["data"]["errors"] == {
        "confirm_password": "Passwords do not match",
        "accept_terms": "Terms acceptance is required",
    }


async def test_register_duplicate_email(client, insert_user):
    await insert_user("jane@example.com")
    resp = await client.post(f"{API}/auth/register", json=SIGNUP)
    assert resp.status_code == 409


async def test_login_unknown_email(client):
    resp = await client.post(
        f"{API}/auth/login", json={"email": "ghost@example.com", "password": "whatever"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "No user found with this email"


async def test_login_wrong_password(client, insert_user):
    await insert_user("amy@example.com", role=Role.CASHIER)
    resp = await client.post(
        f"{API}/auth/login", json={"email": "amy@example.com", "password": "nope"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid password"


async def test_login_deactivated_account(client, insert_user):
    await insert_user("old@example.com", is_active=False)
    resp = await client.post(
        f"{API}/auth/login", json={"email": "old@example.com", "password": "secret123"}
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == "This account has been deactivated"


async def test_register_rejects_non_string_password(client, db):
    resp = await client.post(
        f"{API}/auth/register", json={**SIGNUP, "password": 12345678}
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "Request validation failed"
    assert await db["users"].count_documents({}) == 0
