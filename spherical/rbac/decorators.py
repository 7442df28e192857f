"""
Declarative access decorators for route handlers.

Usage:
    @router.get("/")
    @require_permission(Permission.VIEW_USERS)
    async def list_users(request: Request):
        ...

The role comes from request.state (set by AuthPermissionMiddleware) and
the policy from request.app.state.
"""

from functools import wraps

from fastapi import HTTPException, status
from starlette.requests import Request

from .roles import Permission, Role


def _find_request(args, kwargs) -> Request:
    request: Request | None = kwargs.get("request")
    if request is None:
        for arg in args:
            if isinstance(arg, Request):
                request = arg
                break

    if request is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Request object not found in handler",
        )
    return request


def require_permission(*permissions: Permission):
    """
    Decorator that checks the current user's role holds every listed
    permission. Must be applied AFTER the route decorator.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            role = getattr(request.state, "user_role", None)
            policy = request.app.state.access_policy

            if not policy.check_permissions(role, permissions):
                needed = ", ".join(p.value for p in permissions)
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission denied. Requires: {needed}",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_roles(*roles: Role):
    """Decorator for role-gated routes (any one of `roles`)."""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            role = getattr(request.state, "user_role", None)
            policy = request.app.state.access_policy

            if not policy.has_required_role(role, roles):
                needed = " or ".join(r.value for r in roles)
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Access denied. Required role: {needed}",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
