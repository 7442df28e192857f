import pytest

from spherical.rbac import (
    AUTH_CONFIGS,
    DEFAULT_PERMISSIONS,
    AccessPolicy,
    Permission,
    Role,
    resolve_permission,
)


@pytest.fixture
def policy():
    return AccessPolicy.default()


def test_cashier_cannot_manage_users(policy):
    assert policy.has_permission(Role.CASHIER, Permission.MANAGE_USERS) is False
    assert policy.has_permission(Role.ADMIN, Permission.MANAGE_USERS) is True


def test_role_claim_is_case_insensitive(policy):
    assert policy.has_permission("managing_director", "manage_users")


@pytest.mark.parametrize("role", [None, "", "JANITOR", 42])
def test_unknown_role_is_denied(policy, role):
    assert policy.has_permission(role, Permission.VIEW_DASHBOARD) is False
    assert policy.permissions_for(role) == []


def test_unknown_permission_is_denied(policy):
    assert policy.has_permission(Role.MANAGING_DIRECTOR, "LAUNCH_ROCKETS") is False


def test_has_required_role():
    assert AccessPolicy.has_required_role("ADMIN", [Role.ADMIN, Role.CASHIER])
    assert not AccessPolicy.has_required_role("CASHIER", ["ADMIN"])
    assert not AccessPolicy.has_required_role("ADMIN", [])


def test_check_permissions_needs_all(policy):
    perms = [Permission.VIEW_SALES, Permission.PROCESS_SALES]
    assert policy.check_permissions(Role.CASHIER, perms)
    assert not policy.check_permissions(Role.REPORT_VIEWER, perms)


def test_authorize_with_route_configs(policy):
    assert policy.authorize(Role.ADMIN, AUTH_CONFIGS["ADMIN_ONLY"])
    assert not policy.authorize(Role.CASHIER, AUTH_CONFIGS["ADMIN_ONLY"])
    assert policy.authorize(Role.CASHIER, AUTH_CONFIGS["SALES_PROCESSING"])
    assert policy.authorize(Role.REPORT_VIEWER, AUTH_CONFIGS["AUTHENTICATED"])
    assert not policy.authorize("NOBODY", AUTH_CONFIGS["AUTHENTICATED"])


def test_permissions_for_report_viewer(policy):
    assert policy.permissions_for(Role.REPORT_VIEWER) == [
        "VIEW_DASHBOARD",
        "VIEW_REPORTS",
        "VIEW_SALES",
    ]


def test_from_mapping_builds_custom_table():
    policy = AccessPolicy.from_mapping({"VIEW_REPORTS": ["CASHIER"]})
    assert policy.has_permission("CASHIER", "VIEW_REPORTS")
    assert not policy.has_permission("MANAGING_DIRECTOR", "VIEW_REPORTS")
    assert policy.allowed_roles("VIEW_USERS") == frozenset()


def test_from_mapping_rejects_unknown_names():
    with pytest.raises(ValueError):
        AccessPolicy.from_mapping({"VIEW_REPORTS": ["JANITOR"]})
    with pytest.raises(ValueError):
        AccessPolicy.from_mapping({"FLY": ["ADMIN"]})


def test_as_matrix_lists_every_permission(policy):
    matrix = policy.as_matrix()
    assert set(matrix) == {p.value for p in Permission}
    assert matrix["MANAGE_USERS"] == ["ADMIN", "MANAGING_DIRECTOR"]


class TestPageAccess:
    def test_public_pages_always_open(self, policy):
        assert policy.can_access_page(None, "/products")

    def test_admin_needs_a_known_role(self, policy):
        assert not policy.can_access_page(None, "/admin")
        assert policy.can_access_page("CASHIER", "/admin")

    def test_restricted_sections(self, policy):
        assert policy.can_access_page("MANAGING_DIRECTOR", "/admin/staff-management")
        assert not policy.can_access_page("ADMIN", "/admin/staff-management")
        assert policy.can_access_page("CASHIER", "/admin/sales/new")
        assert not policy.can_access_page("CASHIER", "/admin/inventory")

    def test_page_access_map(self, policy):
        pages = policy.page_access_map("REPORT_VIEWER")
        assert pages["/admin/reports"] is True
        assert pages["/admin/users"] is False


class TestResolvePermission:
    @pytest.mark.parametrize(
        "path,method,expected",
        [
            ("/api/v1/users", "GET", Permission.VIEW_USERS),
            ("/api/v1/users/abc", "DELETE", Permission.MANAGE_USERS),
            ("/api/v1/products/abc", "PUT", Permission.EDIT_PRODUCTS),
            ("/api/v1/products", "POST", Permission.MANAGE_PRODUCTS),
            ("/api/v1/sales", "POST", Permission.PROCESS_SALES),
            ("/api/v1/reports/dashboard", "GET", Permission.VIEW_DASHBOARD),
            ("/api/v1/reports/sales-summary", "GET", Permission.VIEW_REPORTS),
            ("/api/v1/content/carousel", "GET", Permission.MANAGE_CONTENT),
            ("/api/v1/categories", "GET", Permission.VIEW_PRODUCTS),
            ("/api/v1/categories/abc", "DELETE", Permission.MANAGE_PRODUCTS),
        ],
    )
    def test_known_modules(self, path, method, expected):
        assert resolve_permission(path, method) is expected

    @pytest.mark.parametrize(
        "path,method",
        [
            ("/api/v1/public/products", "GET"),
            ("/api/v1/access/me", "GET"),
            ("/api/v2/users", "GET"),
            ("/health", "GET"),
            ("/api/v1/users", "OPTIONS"),
        ],
    )
    def test_unmapped_requests(self, path, method):
        assert resolve_permission(path, method) is None


def test_policy_from_json_file(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(
        '{"permissions": {"VIEW_USERS": ["CASHIER"]},'
        ' "pages": {"/admin/secret": ["MANAGING_DIRECTOR"]}}'
    )
    policy = AccessPolicy.from_json_file(path)
    assert policy.has_permission("CASHIER", "VIEW_USERS")
    assert not policy.can_access_page("ADMIN", "/admin/secret/area")
    assert policy.can_access_page("ADMIN", "/admin/users")


@pytest.mark.parametrize("permission", list(Permission))
@pytest.mark.parametrize("role", list(Role))
def test_default_table_membership(policy, role, permission):
    expected = role in DEFAULT_PERMISSIONS.get(permission, frozenset())
    assert policy.has_permission(role, permission) is expected
    assert policy.has_permission(role.value, permission.value) is expected
