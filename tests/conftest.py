from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from spherical.app import create_app
from spherical.auth.helpers import create_access_token, hash_password
from spherical.config import Settings, get_database
from spherical.rbac import Role

API = "/api/v1"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        secret_key="test-secret",
        catalog_cache_warm=False,
    )


@pytest.fixture
def db():
    return AsyncMongoMockClient()["spherical_test"]


@pytest.fixture
def app(settings, db):
    application = create_app(settings=settings)
    application.dependency_overrides[get_database] = lambda: db
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings):
    """Build an Authorization header for a role, without touching the database."""

    def make(role, sub="000000000000000000000001", email="staff@example.com"):
        value = role.value if isinstance(role, Role) else role
        token = create_access_token(
            {"sub": sub, "email": email, "name": "Staff", "role": value}, settings
        )
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture
def insert_user(db):
    async def insert(email, role=Role.REPORT_VIEWER, password="secret123", is_active=True):
        now = datetime.now(timezone.utc)
        doc = {
            "name": email.split("@")[0],
            "email": email,
            "password": hash_password(password),
            "role": role.value,
            "is_active": is_active,
            "is_deleted": False,
            "created_at": now,
            "updated_at": now,
        }
        result = await db["users"].insert_one(doc)
        return str(result.inserted_id)

    return insert
