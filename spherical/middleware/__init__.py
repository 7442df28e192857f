"""
Authentication + permission middleware.

Runs on every request outside the public prefixes:
  1. Decode the Bearer JWT → role
  2. Set request.state.user, user_role, user_permissions
  3. Check the permission the route's module requires
"""

from fastapi import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from spherical.auth.helpers import decode_access_token
from spherical.rbac import resolve_permission
from spherical.utils import Logger, error_response

logger = Logger("access")

DOC_ROUTES = ("/health", "/openapi.json", "/api/docs", "/redoc")


def public_prefixes(api_version: str) -> tuple[str, ...]:
    return DOC_ROUTES + (
        f"/api/{api_version}/auth",
        f"/api/{api_version}/public",
    )


class AuthPermissionMiddleware(BaseHTTPMiddleware):
    """Single middleware that handles JWT verification + permission checks."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        settings = request.app.state.settings
        policy = request.app.state.access_policy
        path = request.url.path

        # ── Skip public routes ───────────────────────────────────
        if path.startswith(public_prefixes(settings.api_version)):
            return await call_next(request)

        # ── Extract & decode JWT ─────────────────────────────────
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return error_response("Authentication required", 401)

        if not auth_header.startswith("Bearer "):
            return error_response(
                "Invalid token format. Expected 'Bearer <token>'", 401
            )

        token = auth_header.split(" ", 1)[1].strip()

        try:
            payload = decode_access_token(token, settings)
        except HTTPException as e:
            return error_response(e.detail, e.status_code, headers=e.headers)

        # ── Populate request.state ───────────────────────────────
        role = payload.get("role")
        request.state.user = payload
        request.state.user_role = role
        request.state.user_permissions = policy.permissions_for(role)

        # ── Permission check ─────────────────────────────────────
        required = resolve_permission(path, request.method, settings.api_version)
        if required is not None and not policy.has_permission(role, required):
            logger.warning(
                f"Denied {request.method} {path} for role {role!r}, needs {required.value}"
            )
            return error_response("Insufficient permissions", 403)

        return await call_next(request)
