from .roles import Role, Permission, DEFAULT_PERMISSIONS, PAGE_RESTRICTIONS
from .policy import AccessPolicy, RouteAuth, AUTH_CONFIGS
from .permissions import resolve_permission
from .decorators import require_permission, require_roles

__all__ = [
    "Role",
    "Permission",
    "DEFAULT_PERMISSIONS",
    "PAGE_RESTRICTIONS",
    "AccessPolicy",
    "RouteAuth",
    "AUTH_CONFIGS",
    "resolve_permission",
    "require_permission",
    "require_roles",
]
