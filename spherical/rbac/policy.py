"""
AccessPolicy — the role → permission table as an explicit object.

Built once by the application factory and handed to whatever needs it
(middleware, decorators, services). Lookups are pure and fail closed:
an unknown role or permission is never granted anything.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .roles import (
    ADMIN_PAGE_PREFIX,
    DEFAULT_PERMISSIONS,
    PAGE_RESTRICTIONS,
    Permission,
    Role,
)


@dataclass(frozen=True)
class RouteAuth:
    """Requirements of a route: any of `required_roles`, all of `required_permissions`."""

    required_roles: tuple[Role, ...] = ()
    required_permissions: tuple[Permission, ...] = ()


AUTH_CONFIGS: dict[str, RouteAuth] = {
    "ADMIN_ONLY": RouteAuth(required_roles=(Role.ADMIN, Role.MANAGING_DIRECTOR)),
    "MANAGER_PLUS": RouteAuth(
        required_roles=(Role.MANAGING_DIRECTOR, Role.ADMIN, Role.INVENTORY_MANAGER)
    ),
    "AUTHENTICATED": RouteAuth(required_roles=tuple(Role)),
    "USER_MANAGEMENT": RouteAuth(required_permissions=(Permission.MANAGE_USERS,)),
    "INVENTORY_MANAGEMENT": RouteAuth(
        required_permissions=(Permission.MANAGE_INVENTORY,)
    ),
    "SALES_PROCESSING": RouteAuth(required_permissions=(Permission.PROCESS_SALES,)),
    "REPORTS_ACCESS": RouteAuth(required_permissions=(Permission.VIEW_REPORTS,)),
}


@dataclass(frozen=True)
class AccessPolicy:
    table: Mapping[Permission, frozenset[Role]]
    page_restrictions: Mapping[str, frozenset[Role]] = field(
        default_factory=lambda: MappingProxyType(dict(PAGE_RESTRICTIONS))
    )

    @classmethod
    def default(cls) -> "AccessPolicy":
        return cls(table=MappingProxyType(dict(DEFAULT_PERMISSIONS)))

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Iterable[str]],
        page_restrictions: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> "AccessPolicy":
        """
        Build a policy from plain strings, e.g. loaded from JSON:

            {"MANAGE_USERS": ["MANAGING_DIRECTOR", "ADMIN"], ...}

        Unknown permission or role names raise ValueError.
        """
        table = {
            Permission(name): frozenset(Role(r) for r in roles)
            for name, roles in mapping.items()
        }
        pages = dict(PAGE_RESTRICTIONS)
        if page_restrictions is not None:
            pages = {
                prefix: frozenset(Role(r) for r in roles)
                for prefix, roles in page_restrictions.items()
            }
        return cls(table=MappingProxyType(table), page_restrictions=MappingProxyType(pages))

    @classmethod
    def from_json_file(cls, path) -> "AccessPolicy":
        """Load `{"permissions": {...}, "pages": {...}}`; `pages` is optional."""
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        return cls.from_mapping(data["permissions"], data.get("pages"))

    # ── Membership checks ────────────────────────────────────────

    def has_permission(self, role, permission) -> bool:
        """True iff `role` is in the configured role set of `permission`."""
        parsed_role = Role.parse(role)
        parsed_perm = Permission.parse(permission)
        if parsed_role is None or parsed_perm is None:
            return False
        return parsed_role in self.table.get(parsed_perm, frozenset())

    @staticmethod
    def has_required_role(role, required_roles: Iterable) -> bool:
        """Membership test against an ad hoc role list."""
        parsed = Role.parse(role)
        if parsed is None:
            return False
        return any(Role.parse(r) is parsed for r in required_roles)

    def check_permissions(self, role, permissions: Iterable) -> bool:
        """True when the role holds every listed permission."""
        return all(self.has_permission(role, p) for p in permissions)

    def authorize(self, role, route_auth: RouteAuth) -> bool:
        if route_auth.required_roles and not self.has_required_role(
            role, route_auth.required_roles
        ):
            return False
        return self.check_permissions(role, route_auth.required_permissions)

    # ── Introspection ────────────────────────────────────────────

    def allowed_roles(self, permission) -> frozenset[Role]:
        parsed = Permission.parse(permission)
        if parsed is None:
            return frozenset()
        return self.table.get(parsed, frozenset())

    def permissions_for(self, role) -> list[str]:
        parsed = Role.parse(role)
        if parsed is None:
            return []
        return sorted(p.value for p, roles in self.table.items() if parsed in roles)

    def as_matrix(self) -> dict[str, list[str]]:
        return {
            p.value: sorted(r.value for r in roles) for p, roles in self.table.items()
        }

    # ── Admin page gates ─────────────────────────────────────────

    @staticmethod
    def can_access_admin(role) -> bool:
        return Role.parse(role) is not None

    def can_access_page(self, role, path: str) -> bool:
        """
        Gate for back-office pages. Paths outside /admin are always
        allowed; /admin needs a known role; restricted sections need
        one of their listed roles.
        """
        if not path.startswith(ADMIN_PAGE_PREFIX):
            return True
        if not self.can_access_admin(role):
            return False
        for prefix in sorted(self.page_restrictions, key=len, reverse=True):
            if path.startswith(prefix):
                return self.has_required_role(role, self.page_restrictions[prefix])
        return True

    def page_access_map(self, role) -> dict[str, bool]:
        return {
            prefix: self.has_required_role(role, roles)
            for prefix, roles in sorted(self.page_restrictions.items())
        }
