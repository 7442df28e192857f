from fastapi import APIRouter, Depends, HTTPException, Request, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from spherical.catalog import CatalogCache, public_view
from spherical.config import get_catalog_cache, get_channel, get_database
from spherical.events import EventChannel
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import CreateProductRequest, UpdateProductRequest
from .service import ProductService

products_router = APIRouter()
public_products_router = APIRouter()


@products_router.post("/")
@require_permission(Permission.MANAGE_PRODUCTS)
async def create_product(
    request: Request,
    body: CreateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    channel: EventChannel = Depends(get_channel),
):
    svc = ProductService(db, channel)
    product = await svc.create_product(
        data=body.model_dump(), created_by=request.state.user.get("sub")
    )
    return success_response(data=product, message="Product created", code=201)


@products_router.get("/")
@require_permission(Permission.VIEW_PRODUCTS)
async def list_products(
    request: Request,
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    in_stock: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    products, total = await svc.list_products(
        query=q, category=category, in_stock=in_stock, limit=limit, offset=offset
    )
    return success_response(
        data={"products": products, "total": total, "limit": limit, "offset": offset}
    )


@products_router.get("/{product_id}")
@require_permission(Permission.VIEW_PRODUCTS)
async def get_product(
    request: Request,
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await ProductService(db).get_product(product_id)
    return success_response(data=product)


@products_router.put("/{product_id}")
@require_permission(Permission.EDIT_PRODUCTS)
async def update_product(
    request: Request,
    product_id: str,
    body: UpdateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    channel: EventChannel = Depends(get_channel),
):
    svc = ProductService(db, channel)
    product = await svc.update_product(product_id, body.model_dump(exclude_unset=True))
    return success_response(data=product, message="Product updated")


@products_router.delete("/{product_id}")
@require_permission(Permission.MANAGE_PRODUCTS)
async def delete_product(
    request: Request,
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
    channel: EventChannel = Depends(get_channel),
):
    result = await ProductService(db, channel).delete_product(product_id)
    return success_response(data=result, message="Product deleted")


# ── Public catalog (served from the cache) ───────────────────────


@public_products_router.get("/products")
async def public_products(
    category: Optional[str] = Query(None),
    in_stock: Optional[bool] = Query(None),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    products = [
        public_view(p) for p in cache.list_products(category=category, in_stock=in_stock)
    ]
    return success_response(data={"products": products, "total": len(products)})


@public_products_router.get("/products/{product_id}")
async def public_product(
    product_id: str,
    cache: CatalogCache = Depends(get_catalog_cache),
):
    product = cache.get(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return success_response(data=public_view(product))
