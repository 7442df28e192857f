"""
Access introspection for the back-office UI.

Endpoints:
    GET  /me               Caller's role, permissions and admin page map
    GET  /matrix           Full permission → roles table (managing director)
    GET  /check?path=      Whether the caller may open an admin page
"""

from fastapi import APIRouter, Depends, Request, Query

from spherical.config import get_access_policy
from spherical.rbac import AccessPolicy, Role, require_roles
from spherical.utils import success_response

access_router = APIRouter()


@access_router.get("/me")
async def my_access(
    request: Request,
    policy: AccessPolicy = Depends(get_access_policy),
):
    role = request.state.user_role
    return success_response(
        data={
            "user_id": request.state.user.get("sub"),
            "role": role,
            "permissions": request.state.user_permissions,
            "can_access_admin": policy.can_access_admin(role),
            "pages": policy.page_access_map(role),
        }
    )


@access_router.get("/matrix")
@require_roles(Role.MANAGING_DIRECTOR)
async def permission_matrix(
    request: Request,
    policy: AccessPolicy = Depends(get_access_policy),
):
    return success_response(data=policy.as_matrix())


@access_router.get("/check")
async def check_page(
    request: Request,
    path: str = Query(..., min_length=1),
    policy: AccessPolicy = Depends(get_access_policy),
):
    role = request.state.user_role
    return success_response(
        data={"path": path, "allowed": policy.can_access_page(role, path)}
    )
