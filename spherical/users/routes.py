from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from spherical.config import get_database
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import CreateUserRequest, UpdateUserRequest
from .service import UserService

users_router = APIRouter()


@users_router.post("/")
@require_permission(Permission.MANAGE_USERS)
async def create_user(
    request: Request,
    body: CreateUserRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db)
    user = await svc.create_user(
        data=body.model_dump(mode="json"),
        created_by=request.state.user.get("sub"),
    )
    return success_response(data=user, message="User created", code=201)


@users_router.get("/")
@require_permission(Permission.VIEW_USERS)
async def list_users(
    request: Request,
    q: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db)
    users, total = await svc.list_users(query=q, role=role, limit=limit, offset=offset)
    return success_response(
        data={"users": users, "total": total, "limit": limit, "offset": offset}
    )


@users_router.get("/{user_id}")
@require_permission(Permission.VIEW_USERS)
async def get_user(
    request: Request,
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    user = await UserService(db).get_user(user_id)
    return success_response(data=user)


@users_router.put("/{user_id}")
@require_permission(Permission.MANAGE_USERS)
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db)
    user = await svc.update_user(user_id, body.model_dump(mode="json", exclude_unset=True))
    return success_response(data=user, message="User updated")


@users_router.patch("/{user_id}/toggle-active")
@require_permission(Permission.MANAGE_USERS)
async def toggle_user_active(
    request: Request,
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    user = await UserService(db).toggle_active(user_id)
    state = "activated" if user.get("is_active") else "deactivated"
    return success_response(data=user, message=f"User {state}")


@users_router.delete("/{user_id}")
@require_permission(Permission.MANAGE_USERS)
async def delete_user(
    request: Request,
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    result = await UserService(db).delete_user(user_id)
    return success_response(data=result, message="User deleted")
