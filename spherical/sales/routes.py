from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import CreateSaleRequest
from .service import SalesService

sales_router = APIRouter()


@sales_router.post("/")
@require_permission(Permission.PROCESS_SALES)
async def create_sale(
    request: Request,
    body: CreateSaleRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    sale = await SalesService(db).create_sale(body.model_dump(mode="json"), request.state.user)
    return success_response(data=sale, message="Sale recorded", code=201)


@sales_router.get("/")
@require_permission(Permission.VIEW_SALES)
async def list_sales(
    request: Request,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    sales, total = await SalesService(db).list_sales(limit=limit, offset=offset)
    return success_response(
        data={"sales": sales, "total": total, "limit": limit, "offset": offset}
    )


@sales_router.get("/by-date")
@require_permission(Permission.VIEW_SALES)
async def sales_by_date(
    request: Request,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    sales = await SalesService(db).sales_by_date(start_date, end_date)
    return success_response(data={"sales": sales, "total": len(sales)})
