"""
Role and permission definitions.

Role values are the strings carried in the token's `role` claim.
Each permission owns the set of roles allowed to exercise it:

    Permission.MANAGE_USERS  →  {MANAGING_DIRECTOR, ADMIN}
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    MANAGING_DIRECTOR = "MANAGING_DIRECTOR"
    ADMIN = "ADMIN"
    INVENTORY_MANAGER = "INVENTORY_MANAGER"
    CASHIER = "CASHIER"
    REPORT_VIEWER = "REPORT_VIEWER"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the Role for a claim value, or None when it is unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class Permission(str, Enum):
    VIEW_DASHBOARD = "VIEW_DASHBOARD"
    VIEW_INVENTORY = "VIEW_INVENTORY"
    MANAGE_INVENTORY = "MANAGE_INVENTORY"
    VIEW_PRODUCTS = "VIEW_PRODUCTS"
    MANAGE_PRODUCTS = "MANAGE_PRODUCTS"
    EDIT_PRODUCTS = "EDIT_PRODUCTS"
    VIEW_SALES = "VIEW_SALES"
    PROCESS_SALES = "PROCESS_SALES"
    VIEW_REPORTS = "VIEW_REPORTS"
    VIEW_USERS = "VIEW_USERS"
    MANAGE_USERS = "MANAGE_USERS"
    MANAGE_CONTENT = "MANAGE_CONTENT"
    VIEW_ENQUIRIES = "VIEW_ENQUIRIES"

    @classmethod
    def parse(cls, value) -> Optional["Permission"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


_MD = Role.MANAGING_DIRECTOR
_ADMIN = Role.ADMIN
_INV = Role.INVENTORY_MANAGER
_CASHIER = Role.CASHIER
_VIEWER = Role.REPORT_VIEWER

DEFAULT_PERMISSIONS: dict[Permission, frozenset[Role]] = {
    # Dashboard
    Permission.VIEW_DASHBOARD: frozenset({_MD, _ADMIN, _INV, _CASHIER, _VIEWER}),
    # Inventory
    Permission.VIEW_INVENTORY: frozenset({_MD, _ADMIN, _INV, _CASHIER}),
    Permission.MANAGE_INVENTORY: frozenset({_MD, _ADMIN, _INV}),
    # Products
    Permission.VIEW_PRODUCTS: frozenset({_MD, _ADMIN, _INV}),
    Permission.MANAGE_PRODUCTS: frozenset({_MD, _ADMIN, _INV}),
    Permission.EDIT_PRODUCTS: frozenset({_MD, _ADMIN, _INV}),
    # Sales
    Permission.VIEW_SALES: frozenset({_MD, _ADMIN, _CASHIER, _VIEWER}),
    Permission.PROCESS_SALES: frozenset({_MD, _ADMIN, _CASHIER}),
    # Reports
    Permission.VIEW_REPORTS: frozenset({_MD, _ADMIN, _VIEWER}),
    # Users
    Permission.VIEW_USERS: frozenset({_MD, _ADMIN}),
    Permission.MANAGE_USERS: frozenset({_MD, _ADMIN}),
    # Website content + enquiry inbox
    Permission.MANAGE_CONTENT: frozenset({_MD, _ADMIN}),
    Permission.VIEW_ENQUIRIES: frozenset({_MD, _ADMIN}),
}

# ── Admin page gates (longest prefix first) ─────────────────────
ADMIN_PAGE_PREFIX = "/admin"

PAGE_RESTRICTIONS: dict[str, frozenset[Role]] = {
    "/admin/staff-management": frozenset({_MD}),
    "/admin/settings": frozenset({_MD}),
    "/admin/inventory": frozenset({_MD, _ADMIN, _INV}),
    "/admin/products": frozenset({_MD, _ADMIN, _INV}),
    "/admin/reports": frozenset({_MD, _ADMIN, _VIEWER}),
    "/admin/users": frozenset({_MD, _ADMIN}),
    "/admin/sales": frozenset({_MD, _ADMIN, _CASHIER}),
}
