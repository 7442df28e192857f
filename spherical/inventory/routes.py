from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import UpdateInventoryRequest, UpsertInventoryRequest
from .service import InventoryService

inventory_router = APIRouter()


@inventory_router.get("/")
@require_permission(Permission.VIEW_INVENTORY)
async def list_inventory(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await InventoryService(db).list_items()
    return success_response(data={"items": items, "total": len(items)})


@inventory_router.get("/low-stock")
@require_permission(Permission.VIEW_INVENTORY)
async def low_stock(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items = await InventoryService(db).low_stock()
    return success_response(data={"items": items, "total": len(items)})


@inventory_router.post("/")
@require_permission(Permission.MANAGE_INVENTORY)
async def upsert_inventory(
    request: Request,
    body: UpsertInventoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    item, created = await InventoryService(db).upsert_item(body.model_dump())
    if created:
        return success_response(data=item, message="Inventory item created", code=201)
    return success_response(data=item, message="Inventory item updated")


@inventory_router.put("/{item_id}")
@require_permission(Permission.MANAGE_INVENTORY)
async def update_inventory(
    request: Request,
    item_id: str,
    body: UpdateInventoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    item = await InventoryService(db).update_item(item_id, body.model_dump(exclude_unset=True))
    return success_response(data=item, message="Inventory item updated")
