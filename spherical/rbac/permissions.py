"""
Permission resolution for API requests.

Maps `/api/{version}/{module}/...` + HTTP method onto the Permission the
caller must hold. Routes outside the table resolve to None and are left
to their handlers.
"""

from typing import Optional

from .roles import Permission

READ_METHODS = {"GET", "HEAD"}

# module → (read permission, create/delete permission, update permission)
MODULE_PERMISSIONS: dict[str, tuple[Permission, Permission, Permission]] = {
    "users": (Permission.VIEW_USERS, Permission.MANAGE_USERS, Permission.MANAGE_USERS),
    "products": (
        Permission.VIEW_PRODUCTS,
        Permission.MANAGE_PRODUCTS,
        Permission.EDIT_PRODUCTS,
    ),
    "categories": (
        Permission.VIEW_PRODUCTS,
        Permission.MANAGE_PRODUCTS,
        Permission.EDIT_PRODUCTS,
    ),
    "inventory": (
        Permission.VIEW_INVENTORY,
        Permission.MANAGE_INVENTORY,
        Permission.MANAGE_INVENTORY,
    ),
    "sales": (Permission.VIEW_SALES, Permission.PROCESS_SALES, Permission.PROCESS_SALES),
    "reports": (Permission.VIEW_REPORTS, Permission.VIEW_REPORTS, Permission.VIEW_REPORTS),
    "content": (
        Permission.MANAGE_CONTENT,
        Permission.MANAGE_CONTENT,
        Permission.MANAGE_CONTENT,
    ),
    "enquiries": (
        Permission.VIEW_ENQUIRIES,
        Permission.VIEW_ENQUIRIES,
        Permission.VIEW_ENQUIRIES,
    ),
}

# (module, first sub-path) overrides for reads
READ_OVERRIDES: dict[tuple[str, str], Permission] = {
    ("reports", "dashboard"): Permission.VIEW_DASHBOARD,
}

UPDATE_METHODS = {"PUT", "PATCH"}
WRITE_METHODS = {"POST", "DELETE"}


def resolve_permission(path: str, method: str, api_version: str = "v1") -> Optional[Permission]:
    """
    Derive the required permission from a request path and method.

        resolve_permission("/api/v1/users/abc", "DELETE")  →  MANAGE_USERS
        resolve_permission("/api/v1/public/products", "GET")  →  None
    """
    parts = path.strip("/").split("/")
    if len(parts) < 3 or parts[0] != "api" or parts[1] != api_version:
        return None

    perms = MODULE_PERMISSIONS.get(parts[2])
    if perms is None:
        return None

    read, write, update = perms
    method = method.upper()
    if method in READ_METHODS:
        if len(parts) > 3 and (parts[2], parts[3]) in READ_OVERRIDES:
            return READ_OVERRIDES[(parts[2], parts[3])]
        return read
    if method in UPDATE_METHODS:
        return update
    if method in WRITE_METHODS:
        return write
    return None
