"""
Content routes.

Admin (MANAGE_CONTENT), mounted at /api/{v}/content:
    GET/POST        /{kind}
    PUT/DELETE      /{kind}/{id}
    PUT             /carousel/reorder

Public, mounted at /api/{v}/public:
    GET  /carousel?page=          active slides
    GET  /page-sections?page=&section=
    GET  /training-programs
    GET  /featured-products?page=home
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import (
    CarouselItemRequest,
    CarouselItemUpdate,
    FeaturedProductRequest,
    FeaturedProductUpdate,
    PageSectionRequest,
    PageSectionUpdate,
    ReorderRequest,
    TrainingProgramRequest,
    TrainingProgramUpdate,
)
from .service import ContentService

content_router = APIRouter()
public_content_router = APIRouter()


# Fixed path first so it is not captured by /{kind}/{item_id}
@content_router.put("/carousel/reorder")
@require_permission(Permission.MANAGE_CONTENT)
async def reorder_carousel(
    request: Request,
    body: ReorderRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await ContentService(db, "carousel").reorder(body.ids)
    return success_response(data=items, message="Carousel reordered")


def _register(kind: str, create_model, update_model) -> None:
    """Admin CRUD endpoints for one content kind."""

    @content_router.get(f"/{kind}", name=f"list_{kind}")
    @require_permission(Permission.MANAGE_CONTENT)
    async def list_items(
        request: Request,
        page: Optional[str] = Query(None),
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        items = await ContentService(db, kind).list_items(page=page)
        return success_response(data=items)

    @content_router.post(f"/{kind}", name=f"create_{kind}")
    @require_permission(Permission.MANAGE_CONTENT)
    async def create_item(
        request: Request,
        body: create_model,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        svc = ContentService(db, kind)
        item = await svc.create(body.model_dump(mode="json"))
        return success_response(data=item, message=f"{svc.label} created", code=201)

    @content_router.put(f"/{kind}/{{item_id}}", name=f"update_{kind}")
    @require_permission(Permission.MANAGE_CONTENT)
    async def update_item(
        request: Request,
        item_id: str,
        body: update_model,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        svc = ContentService(db, kind)
        item = await svc.update(item_id, body.model_dump(mode="json", exclude_unset=True))
        return success_response(data=item, message=f"{svc.label} updated")

    @content_router.delete(f"/{kind}/{{item_id}}", name=f"delete_{kind}")
    @require_permission(Permission.MANAGE_CONTENT)
    async def delete_item(
        request: Request,
        item_id: str,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        result = await ContentService(db, kind).delete(item_id)
        return success_response(data=result)


_register("carousel", CarouselItemRequest, CarouselItemUpdate)
_register("page-sections", PageSectionRequest, PageSectionUpdate)
_register("training-programs", TrainingProgramRequest, TrainingProgramUpdate)
_register("featured-products", FeaturedProductRequest, FeaturedProductUpdate)


# ── Public reads ─────────────────────────────────────────────────


@public_content_router.get("/carousel")
async def public_carousel(
    page: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await ContentService(db, "carousel").list_items(page=page, active_only=True)
    slides = [
        {
            "_id": item["_id"],
            "title": item.get("title"),
            "caption": item.get("caption"),
            "src": item.get("media_url") or "",
            "alt": item.get("alt") or item.get("title"),
            "type": item.get("type", "image"),
            "order": item.get("order", 0),
            "page": item.get("page"),
        }
        for item in items
    ]
    return success_response(data=slides)


@public_content_router.get("/page-sections")
async def public_page_sections(
    page: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await ContentService(db, "page-sections").list_items(
        page=page, section=section, active_only=True
    )
    return success_response(data=items)


@public_content_router.get("/training-programs")
async def public_training_programs(
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await ContentService(db, "training-programs").list_items(active_only=True)
    return success_response(data=items)


@public_content_router.get("/featured-products")
async def public_featured_products(
    page: str = Query("home"),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await ContentService(db, "featured-products").list_items(page=page, active_only=True)
    return success_response(data=items)
