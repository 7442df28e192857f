"""
Category routes, mounted at /api/{v}/categories.

    GET    /                  All categories by name        (VIEW_PRODUCTS)
    POST   /                  Create                        (MANAGE_PRODUCTS)
    GET    /{category_id}     One category with products    (VIEW_PRODUCTS)
    PUT    /{category_id}     Rename / describe             (EDIT_PRODUCTS)
    DELETE /{category_id}     Delete an unused category     (MANAGE_PRODUCTS)
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_channel, get_database
from spherical.events import EventChannel
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import CreateCategoryRequest, UpdateCategoryRequest
from .service import CategoryService

categories_router = APIRouter()


@categories_router.get("/")
@require_permission(Permission.VIEW_PRODUCTS)
async def list_categories(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    categories = await CategoryService(db).list_categories()
    return success_response(data={"categories": categories, "total": len(categories)})


@categories_router.post("/")
@require_permission(Permission.MANAGE_PRODUCTS)
async def create_category(
    request: Request,
    body: CreateCategoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    category = await CategoryService(db).create_category(body.model_dump())
    return success_response(data=category, message="Category created", code=201)


@categories_router.get("/{category_id}")
@require_permission(Permission.VIEW_PRODUCTS)
async def get_category(
    request: Request,
    category_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    category = await CategoryService(db).get_category(category_id)
    return success_response(data=category)


@categories_router.put("/{category_id}")
@require_permission(Permission.EDIT_PRODUCTS)
async def update_category(
    request: Request,
    category_id: str,
    body: UpdateCategoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    channel: EventChannel = Depends(get_channel),
):
    category = await CategoryService(db, channel).update_category(
        category_id, body.model_dump(exclude_unset=True)
    )
    return success_response(data=category, message="Category updated")


@categories_router.delete("/{category_id}")
@require_permission(Permission.MANAGE_PRODUCTS)
async def delete_category(
    request: Request,
    category_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    result = await CategoryService(db).delete_category(category_id)
    return success_response(data=result, message="Category deleted")
